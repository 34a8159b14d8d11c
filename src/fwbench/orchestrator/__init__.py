# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from fwbench.orchestrator.models import TargetLifecycle, TargetRunResult
from fwbench.orchestrator.orchestrator import BenchmarkOrchestrator, run_benchmark
from fwbench.orchestrator.retry_policy import (
    ExponentialBackoffRetryPolicy,
    LinearBackoffRetryPolicy,
    RetryPolicy,
    create_retry_policy,
)
from fwbench.orchestrator.validity import ValidityGate

__all__ = [
    "BenchmarkOrchestrator",
    "ExponentialBackoffRetryPolicy",
    "LinearBackoffRetryPolicy",
    "RetryPolicy",
    "TargetLifecycle",
    "TargetRunResult",
    "ValidityGate",
    "create_retry_policy",
    "run_benchmark",
]
