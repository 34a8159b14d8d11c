# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from fwbench.timing.load_generator import (
    LoadGenerator,
    LoadRunResult,
    LoadRunStats,
    LoadWindow,
)

__all__ = ["LoadGenerator", "LoadRunResult", "LoadRunStats", "LoadWindow"]
