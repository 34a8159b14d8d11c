# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Sequential benchmark of every configured target."""

import asyncio
import logging
from collections.abc import Callable, Iterable

from fwbench.clients import RequestDriver, RequestDriverProtocol
from fwbench.common.config import (
    BenchmarkConfig,
    LoadGeneratorConfig,
    OrchestratorConfig,
    TargetConfig,
)
from fwbench.common.constants import MILLIS_PER_SECOND
from fwbench.common.enums import TargetState
from fwbench.common.exceptions import (
    LaunchError,
    ReadinessTimeoutError,
    TargetTestError,
)
from fwbench.common.models import PerformanceMetrics
from fwbench.metrics import summarize
from fwbench.orchestrator.models import TargetLifecycle, TargetRunResult
from fwbench.orchestrator.retry_policy import create_retry_policy
from fwbench.orchestrator.validity import ValidityGate
from fwbench.targets import ProcessHandle, TargetProcessManager
from fwbench.timing import LoadGenerator

logger = logging.getLogger(__name__)

__all__ = [
    "BenchmarkOrchestrator",
    "run_benchmark",
]


class BenchmarkOrchestrator:
    """Tests targets one at a time: launch, wait for readiness, warm up, load, tear down.

    A failing target is retried according to the retry policy and then dropped.
    No target failure aborts the run.
    """

    def __init__(
        self,
        config: BenchmarkConfig,
        process_manager: TargetProcessManager | None = None,
        load_generator_factory: Callable[[TargetConfig], LoadGenerator] | None = None,
        probe_driver_factory: Callable[[TargetConfig], RequestDriverProtocol] | None = None,
    ) -> None:
        """Initialize BenchmarkOrchestrator.

        Args:
            config: Targets, endpoints and all run settings
            process_manager: Owner of target processes
            load_generator_factory: Builds the load generator for a target
            probe_driver_factory: Builds the driver used for warmup requests
        """
        self.config = config
        self.process_manager = process_manager or TargetProcessManager()
        self._load_generator_factory = load_generator_factory or (
            lambda target: LoadGenerator(config.loadgen, config.endpoints, host=target.host)
        )
        self._probe_driver_factory = probe_driver_factory or (
            lambda target: RequestDriver.for_latency_probe(
                config.loadgen.request_timeout, host=target.host
            )
        )
        self.retry_policy = create_retry_policy(config.orchestrator)
        self.validity_gate = ValidityGate.from_config(config.orchestrator)

    @property
    def manual_start(self) -> bool:
        return self.config.orchestrator.manual_start

    async def execute(self) -> list[TargetRunResult]:
        """Test every target in order.

        Returns:
            One TargetRunResult per configured target, in the same order
        """
        targets = self.config.targets
        total = len(targets)
        mode = "manual start" if self.manual_start else "automatic start"
        logger.info(
            f"Benchmarking {total} target(s) in {mode} mode, "
            f"{self.config.loadgen.benchmark_duration}s per target"
        )

        results: list[TargetRunResult] = []
        for index, target in enumerate(targets):
            logger.info(f"[{index + 1}/{total}] Testing {target.label}...")
            result = await self._run_target(target)
            results.append(result)

            if result.success:
                m = result.metrics
                logger.info(
                    f"[{index + 1}/{total}] {target.label} completed: "
                    f"{m.requests_per_second:,.2f} req/s, avg {m.average_latency_ms:.2f}ms, "
                    f"p95 {m.p95_latency_ms:.2f}ms"
                )
            elif result.skipped:
                logger.warning(f"[{index + 1}/{total}] {target.label} skipped: {result.error}")
            else:
                logger.error(f"[{index + 1}/{total}] {target.label} failed: {result.error}")

            # Cooldown only if another target follows and this one actually ran.
            cooldown = self.config.orchestrator.cooldown_seconds
            if (
                index < total - 1
                and not self.manual_start
                and not result.skipped
                and cooldown > 0
            ):
                await self._pause(cooldown, "cooldown before the next target")

        successful = sum(1 for r in results if r.success)
        logger.info(f"All targets complete: {successful}/{total} successful")
        return results

    async def run(self) -> list[PerformanceMetrics]:
        """Test every target and return the metrics of those that succeeded, in order."""
        return [r.metrics for r in await self.execute() if r.success]

    async def _run_target(self, target: TargetConfig) -> TargetRunResult:
        lifecycle = TargetLifecycle(target.name)

        if not self.manual_start and not target.is_available():
            lifecycle.fail()
            return TargetRunResult(
                target_name=target.name,
                display_label=target.label,
                success=False,
                final_state=lifecycle.state,
                state_history=list(lifecycle.history),
                error=f"working directory '{target.working_directory}' not found",
                skipped=True,
            )

        policy = self.retry_policy
        last_error: str | None = None
        for attempt in range(1, policy.max_attempts + 1):
            logger.info(f"{target.label}: attempt {attempt}/{policy.max_attempts}")
            try:
                metrics = await self._attempt(target, lifecycle)
            except TargetTestError as e:
                last_error = str(e)
                logger.error(f"Attempt {attempt}/{policy.max_attempts} failed: {e}")
                lifecycle.fail()
            except Exception as e:
                last_error = f"{target.name}: unexpected {type(e).__name__}: {e}"
                logger.exception(
                    f"Attempt {attempt}/{policy.max_attempts} for {target.label} "
                    f"raised an unexpected error"
                )
                lifecycle.fail()
            else:
                return TargetRunResult(
                    target_name=target.name,
                    display_label=target.label,
                    success=True,
                    attempts=attempt,
                    final_state=lifecycle.state,
                    state_history=list(lifecycle.history),
                    metrics=metrics,
                )

            if policy.should_retry(attempt):
                delay_ms = policy.get_delay_ms(attempt)
                await self._pause(
                    delay_ms / MILLIS_PER_SECOND, f"backoff before retrying {target.label}"
                )

        logger.error(
            f"{target.label}: all {policy.max_attempts} attempt(s) failed, "
            f"last error: {last_error}"
        )
        return TargetRunResult(
            target_name=target.name,
            display_label=target.label,
            success=False,
            attempts=policy.max_attempts,
            final_state=lifecycle.state,
            state_history=list(lifecycle.history),
            error=last_error,
        )

    async def _attempt(
        self, target: TargetConfig, lifecycle: TargetLifecycle
    ) -> PerformanceMetrics:
        orch = self.config.orchestrator
        lifecycle.transition(TargetState.STARTING)
        handle: ProcessHandle | None = None
        try:
            if self.manual_start:
                cold_start_ms = 0.0
                await self._wait_until_ready(target, None, orch.manual_readiness_timeout_seconds)
            else:
                handle = await self.process_manager.start(target)
                await self._wait_until_ready(target, handle, orch.readiness_timeout_seconds)
                cold_start_ms = handle.cold_start_ms or 0.0
                logger.info(f"{target.label} ready, cold start {cold_start_ms:.2f}ms")
            lifecycle.transition(TargetState.READY)

            if orch.post_start_settle_seconds > 0:
                await self._pause(orch.post_start_settle_seconds, f"letting {target.label} settle")
            await self._warmup(target)

            lifecycle.transition(TargetState.TESTING)
            run = await self._load_generator_factory(target).run(target.port, target.name)
            memory = (
                self.process_manager.memory_snapshot(handle) if handle is not None else None
            )

            metrics = summarize(
                run.latencies_ms,
                run.total_requests,
                run.error_requests,
                cold_start_ms,
                run.actual_duration_ms,
                target_name=target.name,
                display_label=target.label,
                memory_snapshot=memory,
                client_loop_stalls=run.client_loop_stalls,
                client_loop_max_stall_ms=run.client_loop_max_stall_ms,
            )
            self.validity_gate.check(metrics)
            lifecycle.transition(TargetState.DONE)
            return metrics
        finally:
            if handle is not None:
                await self.process_manager.stop(handle)

    async def _wait_until_ready(
        self, target: TargetConfig, handle: ProcessHandle | None, timeout_seconds: float
    ) -> None:
        ready = await self.process_manager.wait_until_ready(
            handle,
            target.port,
            self.config.resolved_health_endpoint,
            timeout_seconds * MILLIS_PER_SECOND,
            host=target.host,
        )
        if ready:
            return
        if handle is not None and handle.has_exited:
            raise LaunchError(
                target.name,
                f"process exited with code {handle.returncode} before becoming ready",
            )
        hint = "Is it running?" if handle is None else "Check the target's output above."
        raise ReadinessTimeoutError(
            target.name,
            f"no successful health check on {target.base_url} within {timeout_seconds}s. {hint}",
        )

    async def _warmup(self, target: TargetConfig) -> None:
        count = self.config.loadgen.warmup_request_count
        if count == 0:
            return
        endpoints = self.config.endpoints
        driver = self._probe_driver_factory(target)
        await driver.open()
        try:
            records = await asyncio.gather(
                *(
                    driver.send_request(endpoints[i % len(endpoints)], target.port)
                    for i in range(count)
                )
            )
        finally:
            await driver.close()

        failed = sum(1 for r in records if not r.success)
        if failed:
            logger.warning(
                f"{target.label}: {failed}/{count} warmup requests failed, continuing"
            )
        else:
            logger.info(f"{target.label}: warmup complete ({count} requests)")

    async def _pause(self, seconds: float, reason: str) -> None:
        logger.info(f"Waiting {seconds:g}s: {reason}")
        await asyncio.sleep(seconds)


def run_benchmark(
    targets: Iterable[TargetConfig],
    test_duration_seconds: float,
    manual_start: bool,
    config: BenchmarkConfig | None = None,
) -> list[PerformanceMetrics]:
    """Blocking entry point: benchmark the targets and return successful metrics in order.

    Endpoints, reporting and all other settings come from config (defaults if None).
    """
    base = config or BenchmarkConfig()
    run_config = BenchmarkConfig(
        targets=list(targets),
        endpoints=base.endpoints,
        health_endpoint=base.health_endpoint,
        loadgen=LoadGeneratorConfig.model_validate(
            {**base.loadgen.model_dump(), "benchmark_duration": test_duration_seconds}
        ),
        orchestrator=OrchestratorConfig.model_validate(
            {**base.orchestrator.model_dump(), "manual_start": manual_start}
        ),
        output=base.output,
    )
    return asyncio.run(BenchmarkOrchestrator(run_config).run())
