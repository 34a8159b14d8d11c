# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from datetime import datetime, timezone

import pytest

from fwbench.common.enums import TargetState
from fwbench.common.models import MemorySnapshot
from fwbench.exporters import ExporterConfig
from fwbench.orchestrator import TargetRunResult

RUN_TIMESTAMP = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_results(metrics_factory):
    """Fast but slow to start, balanced, and strictly worse than fast."""
    return [
        metrics_factory(
            "fast",
            display_label="Fast",
            requests_per_second=50_000.0,
            average_latency_ms=2.0,
            p50_latency_ms=2.0,
            cold_start_time_ms=900.0,
            memory_snapshot=MemorySnapshot(rss_mb=80.0, vms_mb=900.0, num_processes=2),
        ),
        metrics_factory(
            "lean",
            display_label="Lean",
            requests_per_second=30_000.0,
            average_latency_ms=1.5,
            p50_latency_ms=1.5,
            cold_start_time_ms=50.0,
        ),
        metrics_factory(
            "slow",
            display_label="Slow",
            requests_per_second=10_000.0,
            average_latency_ms=8.0,
            p50_latency_ms=8.0,
            cold_start_time_ms=300.0,
        ),
    ]


@pytest.fixture
def failed_result():
    return TargetRunResult(
        target_name="broken",
        display_label="Broken",
        success=False,
        attempts=2,
        final_state=TargetState.FAILED,
        state_history=[TargetState.PENDING, TargetState.STARTING, TargetState.FAILED],
        error="broken: no successful health check on http://127.0.0.1:3009 within 20.0s.",
    )


@pytest.fixture
def exporter_config(tmp_path, sample_results, failed_result):
    successes = [
        TargetRunResult(
            target_name=m.target_name,
            display_label=m.display_label,
            success=True,
            attempts=1,
            final_state=TargetState.DONE,
            metrics=m,
        )
        for m in sample_results
    ]
    return ExporterConfig(
        results=sample_results,
        target_results=[*successes, failed_result],
        output_dir=tmp_path / "reports",
        test_duration_seconds=10,
        run_timestamp=RUN_TIMESTAMP,
    )


@pytest.fixture
def empty_exporter_config(tmp_path, failed_result):
    return ExporterConfig(
        results=[],
        target_results=[failed_result],
        output_dir=tmp_path / "reports",
        test_duration_seconds=10,
        run_timestamp=RUN_TIMESTAMP,
    )


@pytest.fixture
def stalled_exporter_config(exporter_config):
    """exporter_config with the load generator stalling during the "slow" run."""
    slow = exporter_config.results[2]
    exporter_config.results[2] = slow.model_copy(
        update={"client_loop_stalls": 4, "client_loop_max_stall_ms": 37.5}
    )
    return exporter_config
