# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from fwbench.common.mixins.fwbench_logger_mixin import FwbenchLoggerMixin

__all__ = ["FwbenchLoggerMixin"]
