# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Configuration shared by all report exporters."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from fwbench.common.models import PerformanceMetrics
from fwbench.orchestrator.models import TargetRunResult


@dataclass(slots=True)
class ExporterConfig:
    """Inputs for report exporters.

    Attributes:
        results: Metrics of successful targets, in test order
        target_results: Outcome of every configured target, including failures
        output_dir: Directory where report files are written
        test_duration_seconds: Configured length of each load window
        manual_start: Whether targets were started outside the harness
        run_timestamp: When the run finished
    """

    results: list[PerformanceMetrics]
    output_dir: Path
    test_duration_seconds: float
    manual_start: bool = False
    target_results: list[TargetRunResult] = field(default_factory=list)
    run_timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def failed_targets(self) -> list[TargetRunResult]:
        return [r for r in self.target_results if not r.success]
