# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""End-to-end runs against the stub target launched as a real subprocess."""

import asyncio
import sys
from pathlib import Path

import orjson
import pytest

import fwbench
from fwbench.cli_runner import run_benchmark_matrix
from fwbench.common.config import (
    BenchmarkConfig,
    LoadGeneratorConfig,
    OrchestratorConfig,
    OutputConfig,
    TargetConfig,
)
from fwbench.common.enums import TargetState
from fwbench.orchestrator import BenchmarkOrchestrator
from fwbench.targets import TargetProcessManager
from fwbench.timing import LoadGenerator

# The stub subprocess must import fwbench even when it is not installed.
SRC_DIR = str(Path(fwbench.__file__).resolve().parents[1])

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(sys.platform == "win32", reason="process groups are POSIX only"),
]


def stub_target(name: str, port: int) -> TargetConfig:
    return TargetConfig(
        name=name,
        display_label=f"Stub {name}",
        launch_command=[sys.executable, "-m", "fwbench.stub_server", "--log-level", "WARNING"],
        port=port,
        env={"PYTHONPATH": SRC_DIR},
    )


def stub_config(targets, tmp_path, **orchestrator_overrides) -> BenchmarkConfig:
    orchestrator = {
        "cooldown_seconds": 0.2,
        "post_start_settle_seconds": 0.1,
        "readiness_timeout_seconds": 15,
        "retry_base_delay_ms": 100,
        **orchestrator_overrides,
    }
    return BenchmarkConfig(
        targets=targets,
        loadgen=LoadGeneratorConfig(benchmark_duration=2, concurrency=5, batch_size=10, random_seed=1),
        orchestrator=OrchestratorConfig(**orchestrator),
        output=OutputConfig(output_dir=tmp_path / "results", print_console_report=False),
    )


@pytest.mark.usefixtures("fast_process_env")
class TestStubTargetBenchmark:
    @pytest.mark.asyncio
    async def test_full_lifecycle(self, tmp_path, free_port):
        config = stub_config([stub_target("solo", free_port)], tmp_path)

        [result] = await BenchmarkOrchestrator(config).execute()

        assert result.success, result.error
        assert result.final_state == TargetState.DONE
        m = result.metrics
        assert m.total_successful_requests > 50
        assert m.error_rate_percent == 0.0
        assert m.cold_start_time_ms > 0
        assert m.min_latency_ms <= m.p50_latency_ms <= m.p95_latency_ms <= m.p99_latency_ms
        assert m.actual_test_duration_ms >= 2000
        assert m.memory_snapshot is not None

    @pytest.mark.asyncio
    async def test_port_is_released_after_a_run(self, tmp_path, free_port):
        config = stub_config([stub_target("again", free_port)], tmp_path)

        first = await BenchmarkOrchestrator(config).execute()
        second = await BenchmarkOrchestrator(config).execute()

        assert first[0].success, first[0].error
        assert second[0].success, second[0].error
        assert second[0].attempts == 1

    @pytest.mark.asyncio
    async def test_target_killed_mid_test_does_not_hang(self, tmp_path, free_port):
        manager = TargetProcessManager()
        target = stub_target("victim", free_port)
        config = stub_config([target], tmp_path)
        handle = await manager.start(target)
        try:
            ready = await manager.wait_until_ready(
                handle, free_port, config.resolved_health_endpoint, timeout_ms=15_000
            )
            assert ready

            generator = LoadGenerator(config.loadgen, config.endpoints)
            run_task = asyncio.create_task(generator.run(free_port, "victim"))
            await asyncio.sleep(0.5)
            handle.process.kill()

            result = await asyncio.wait_for(run_task, timeout=20)
        finally:
            await manager.stop(handle)

        assert result.error_requests > 0
        assert result.actual_duration_ms < 20_000

    def test_reports_written_end_to_end(self, tmp_path, free_port):
        config = stub_config([stub_target("solo", free_port)], tmp_path)

        assert run_benchmark_matrix(config) == 0

        out = tmp_path / "results"
        summary = orjson.loads((out / "batch-test-summary.json").read_bytes())
        assert summary["test_info"]["successful_targets"] == 1
        assert summary["rankings"]["by_rps"][0]["target"] == "solo"
        assert (out / "solo-detailed-results.json").exists()
        assert (out / "batch-test-summary.csv").exists()
        assert "Stub solo" in (out / "comparison-report.md").read_text(encoding="utf-8")
