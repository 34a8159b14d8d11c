# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Fixed-duration concurrent request flood against one target.

Each worker dispatches requests to randomly chosen endpoints, letting up to
batch_size of them run concurrently before awaiting the batch as a whole. The
run accumulator is only touched between awaits, so the single event loop
serializes every update and no locking is needed.
"""

import asyncio
import random
import time
from collections import Counter
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from fwbench.clients import RequestDriver, RequestDriverProtocol
from fwbench.common.config import LoadGeneratorConfig, TestEndpoint
from fwbench.common.constants import LOOPBACK_HOST, MILLIS_PER_SECOND
from fwbench.common.event_loop_monitor import EventLoopMonitor
from fwbench.common.exceptions import InsufficientSamplesError
from fwbench.common.mixins import FwbenchLoggerMixin
from fwbench.common.models import LatencyRecord


@dataclass(frozen=True)
class LoadWindow:
    """The timed window, captured once and shared by all workers."""

    start: float
    duration: float

    @property
    def end(self) -> float:
        return self.start + self.duration

    def is_open(self, now: float) -> bool:
        return now < self.end

    def progress(self, now: float) -> float:
        """Fraction of the window elapsed, clamped to [0, 1]."""
        if self.duration <= 0:
            return 1.0
        return min(max((now - self.start) / self.duration, 0.0), 1.0)


@dataclass
class LoadRunStats:
    """Running totals for one load run. Only successful latencies are kept."""

    total_requests: int = 0
    success_requests: int = 0
    error_requests: int = 0
    latencies_ms: list[float] = field(default_factory=list)
    error_counts: Counter = field(default_factory=Counter)

    def record(self, record: LatencyRecord) -> None:
        self.total_requests += 1
        if record.success:
            self.success_requests += 1
            self.latencies_ms.append(record.latency_ms)
        else:
            self.error_requests += 1
            self.error_counts[record.error or "unknown"] += 1

    def record_failure(self, reason: str, count: int = 1) -> None:
        """Count requests whose outcome was lost to an exception as errors."""
        self.total_requests += count
        self.error_requests += count
        self.error_counts[reason] += count


@dataclass(frozen=True)
class LoadRunResult:
    latencies_ms: list[float]
    total_requests: int
    success_requests: int
    error_requests: int
    actual_duration_ms: float
    error_counts: dict[str, int] = field(default_factory=dict)
    client_loop_stalls: int = 0
    client_loop_max_stall_ms: float = 0.0

    @property
    def error_rate_percent(self) -> float:
        if self.total_requests == 0:
            return 0.0
        return self.error_requests / self.total_requests * 100


class LoadGenerator(FwbenchLoggerMixin):
    """Runs `concurrency` workers against one port for the configured duration."""

    def __init__(
        self,
        config: LoadGeneratorConfig,
        endpoints: Sequence[TestEndpoint],
        driver_factory: Callable[[], RequestDriverProtocol] | None = None,
        host: str = LOOPBACK_HOST,
    ) -> None:
        super().__init__()
        if not endpoints:
            raise ValueError("LoadGenerator needs at least one endpoint")
        self.config = config
        self.endpoints = list(endpoints)
        self._driver_factory = driver_factory or (
            lambda: RequestDriver.for_load(config.request_timeout, host=host)
        )

    async def run(self, port: int, target_name: str) -> LoadRunResult:
        """Flood the target for the configured duration.

        Raises:
            InsufficientSamplesError: If no request succeeded.
        """
        cfg = self.config
        seed = cfg.random_seed if cfg.random_seed is not None else random.randrange(2**32)
        self.info(
            f"Load test on {target_name} (port {port}): {cfg.benchmark_duration}s, "
            f"concurrency {cfg.concurrency}, batch size {cfg.batch_size}"
        )
        self.debug(f"Endpoint selection seed for {target_name}: {seed}")

        stats = LoadRunStats()
        monitor = EventLoopMonitor(owner=f"load generator ({target_name})")
        driver = self._driver_factory()
        await driver.open()
        try:
            monitor.start()
            window = LoadWindow(start=time.perf_counter(), duration=cfg.benchmark_duration)
            workers = [
                asyncio.create_task(
                    self._worker(driver, port, window, stats, random.Random(seed + worker_id))
                )
                for worker_id in range(cfg.concurrency)
            ]
            outcomes = await asyncio.gather(*workers, return_exceptions=True)
            actual_duration_ms = (time.perf_counter() - window.start) * MILLIS_PER_SECOND
        finally:
            monitor.stop()
            await driver.close()

        for worker_id, outcome in enumerate(outcomes):
            if isinstance(outcome, BaseException):
                self.warning(f"Worker {worker_id} for {target_name} failed: {outcome!r}")

        self.info(
            f"{target_name}: {stats.total_requests} requests "
            f"(success: {stats.success_requests}, errors: {stats.error_requests}) "
            f"in {actual_duration_ms / MILLIS_PER_SECOND:.2f}s"
        )
        if stats.error_counts:
            breakdown = ", ".join(f"{k}={v}" for k, v in stats.error_counts.most_common())
            self.info(f"{target_name} error breakdown: {breakdown}")

        if stats.success_requests == 0:
            raise InsufficientSamplesError(
                target_name,
                f"no successful requests out of {stats.total_requests} issued",
            )

        return LoadRunResult(
            latencies_ms=stats.latencies_ms,
            total_requests=stats.total_requests,
            success_requests=stats.success_requests,
            error_requests=stats.error_requests,
            actual_duration_ms=actual_duration_ms,
            error_counts=dict(stats.error_counts),
            client_loop_stalls=monitor.blocked_intervals,
            client_loop_max_stall_ms=monitor.max_overhead_ms,
        )

    async def _worker(
        self,
        driver: RequestDriverProtocol,
        port: int,
        window: LoadWindow,
        stats: LoadRunStats,
        rng: random.Random,
    ) -> None:
        batch: list[asyncio.Task] = []
        try:
            while window.is_open(time.perf_counter()):
                endpoint = rng.choice(self.endpoints)
                batch.append(asyncio.create_task(driver.send_request(endpoint, port)))

                if len(batch) >= self.config.batch_size:
                    await self._collect(batch, stats)
                    batch = []

                delay_ms = self.config.throttle_delay_ms(
                    window.progress(time.perf_counter())
                )
                if delay_ms > 0:
                    await asyncio.sleep(delay_ms / MILLIS_PER_SECOND)

            if batch:
                await self._collect(batch, stats)
        except asyncio.CancelledError:
            for task in batch:
                task.cancel()
            raise

    @staticmethod
    async def _collect(batch: list[asyncio.Task], stats: LoadRunStats) -> None:
        outcomes = await asyncio.gather(*batch, return_exceptions=True)
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                stats.record_failure(type(outcome).__name__)
            else:
                stats.record(outcome)
