# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from fwbench.common.config import OrchestratorConfig
from fwbench.common.exceptions import ValidityGateError
from fwbench.common.models import PerformanceMetrics


class ValidityGate:
    """Rejects runs whose numbers are too thin or too noisy to compare."""

    def __init__(self, min_successful_requests: int, max_error_rate_percent: float) -> None:
        self.min_successful_requests = min_successful_requests
        self.max_error_rate_percent = max_error_rate_percent

    @classmethod
    def from_config(cls, config: OrchestratorConfig) -> "ValidityGate":
        return cls(config.min_successful_requests, config.max_error_rate_percent)

    def check(self, metrics: PerformanceMetrics) -> None:
        """Raise ValidityGateError if the run should not be reported."""
        if metrics.total_successful_requests < self.min_successful_requests:
            raise ValidityGateError(
                metrics.target_name,
                f"only {metrics.total_successful_requests} successful requests, "
                f"at least {self.min_successful_requests} required",
            )
        if metrics.error_rate_percent > self.max_error_rate_percent:
            raise ValidityGateError(
                metrics.target_name,
                f"error rate {metrics.error_rate_percent:.2f}% exceeds "
                f"{self.max_error_rate_percent:.2f}%",
            )
