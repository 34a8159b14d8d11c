# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from fwbench.targets.process_manager import ProcessHandle, TargetProcessManager

__all__ = ["ProcessHandle", "TargetProcessManager"]
