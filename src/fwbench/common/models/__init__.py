# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from fwbench.common.models.base_models import FrozenFwbenchModel, FwbenchBaseModel
from fwbench.common.models.metrics_models import (
    LatencyRecord,
    MemorySnapshot,
    PerformanceMetrics,
)

__all__ = [
    "FrozenFwbenchModel",
    "FwbenchBaseModel",
    "LatencyRecord",
    "MemorySnapshot",
    "PerformanceMetrics",
]
