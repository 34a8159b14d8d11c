# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Detects when the load generator's own event loop falls behind.

A blocked client loop inflates every latency it measures, so a benchmark that
saturates the client rather than the target needs to be visible in the log
and in the reports. blocked_intervals and max_overhead_ms are carried into
the target's PerformanceMetrics.

Configurable via Environment.LOADGEN:
- FWBENCH_LOADGEN_EVENT_LOOP_HEALTH_ENABLED (default: True)
- FWBENCH_LOADGEN_EVENT_LOOP_HEALTH_INTERVAL in seconds (default: 0.25)
- FWBENCH_LOADGEN_EVENT_LOOP_HEALTH_WARN_THRESHOLD_MS (default: 10)
"""

import asyncio
import time

from fwbench.common.constants import (
    MILLIS_PER_SECOND,
    NANOS_PER_MILLIS,
    NANOS_PER_SECOND,
)
from fwbench.common.environment import Environment
from fwbench.common.mixins import FwbenchLoggerMixin


class EventLoopMonitor(FwbenchLoggerMixin):
    """Background task that sleeps a known interval and measures the overshoot."""

    def __init__(self, owner: str) -> None:
        super().__init__()
        self._owner = owner
        self._task: asyncio.Task | None = None
        self._stop_requested = False
        self.blocked_intervals = 0
        self.max_overhead_ms = 0.0

    def start(self) -> None:
        self._stop_requested = False
        if self._task is None:
            self._task = asyncio.create_task(self._monitor_event_loop())

    def stop(self) -> None:
        if self._stop_requested:
            return
        self._stop_requested = True
        if self._task is not None:
            self._task.cancel()
        self._task = None

    async def _monitor_event_loop(self) -> None:
        if not Environment.LOADGEN.EVENT_LOOP_HEALTH_ENABLED:
            return

        interval_sec = Environment.LOADGEN.EVENT_LOOP_HEALTH_INTERVAL
        threshold_ns = (
            Environment.LOADGEN.EVENT_LOOP_HEALTH_WARN_THRESHOLD_MS * NANOS_PER_MILLIS
        )
        expected_ns = round(interval_sec * NANOS_PER_SECOND)

        while not self._stop_requested:
            start_perf_ns = time.perf_counter_ns()
            await asyncio.sleep(interval_sec)
            elapsed_ns = time.perf_counter_ns() - start_perf_ns
            delta_ns = elapsed_ns - expected_ns
            if self.is_debug_enabled:
                self.debug(
                    f"Event loop check: expected {interval_sec * MILLIS_PER_SECOND:.1f}ms, "
                    f"actual {elapsed_ns / NANOS_PER_MILLIS:.2f}ms"
                )
            if delta_ns > threshold_ns:
                overhead_ms = delta_ns / NANOS_PER_MILLIS
                self.blocked_intervals += 1
                self.max_overhead_ms = max(self.max_overhead_ms, overhead_ms)
                self.warning(
                    f"Event loop for {self._owner} is falling behind by {overhead_ms:,.2f}ms. "
                    "Latencies measured in this window are inflated by the client."
                )
