# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Reduction of raw latency samples into a PerformanceMetrics summary."""

import math
from collections.abc import Sequence

from fwbench.common.constants import MILLIS_PER_SECOND
from fwbench.common.exceptions import InsufficientSamplesError
from fwbench.common.models import MemorySnapshot, PerformanceMetrics


def percentile(sorted_values: Sequence[float], fraction: float) -> float:
    """Nearest-rank percentile: ``sorted_values[floor(len * fraction)]``.

    The index is clamped to the last element, so fraction=1.0 returns the max.

    Raises:
        ValueError: If the sequence is empty or fraction is outside [0, 1].
    """
    if not sorted_values:
        raise ValueError("Cannot take a percentile of an empty sequence")
    if not 0.0 <= fraction <= 1.0:
        raise ValueError(f"Percentile fraction must be within [0, 1], got {fraction}")
    index = min(math.floor(len(sorted_values) * fraction), len(sorted_values) - 1)
    return sorted_values[index]


def summarize(
    latencies_ms: Sequence[float],
    total_requests: int,
    error_requests: int,
    cold_start_ms: float,
    actual_duration_ms: float,
    *,
    target_name: str,
    display_label: str | None = None,
    memory_snapshot: MemorySnapshot | None = None,
    client_loop_stalls: int = 0,
    client_loop_max_stall_ms: float = 0.0,
) -> PerformanceMetrics:
    """Build the summary for one target run.

    Args:
        latencies_ms: Latencies of successful requests only, in any order.
        total_requests: Every request issued in the window, successful or not.
        error_requests: Requests that failed or got a non-2xx response.
        cold_start_ms: Launch to first successful health check. 0 in manual mode.
        actual_duration_ms: Measured length of the window including the drain.
        client_loop_stalls: Event loop monitor intervals that overshot the threshold.

    Raises:
        InsufficientSamplesError: If there is not a single successful latency.
    """
    if not latencies_ms:
        raise InsufficientSamplesError(
            target_name,
            f"no successful requests out of {total_requests} issued",
        )

    ordered = sorted(latencies_ms)
    successful = len(ordered)
    lo, hi = ordered[0], ordered[-1]
    # fsum keeps the mean inside [min, max] for long runs of near-equal floats.
    avg = min(max(math.fsum(ordered) / successful, lo), hi)

    total = max(total_requests, successful + error_requests)
    duration_ms = max(actual_duration_ms, 0.0)
    rps = successful / (duration_ms / MILLIS_PER_SECOND) if duration_ms > 0 else 0.0
    error_rate = error_requests / total * 100 if total > 0 else 0.0

    return PerformanceMetrics(
        target_name=target_name,
        display_label=display_label or target_name,
        cold_start_time_ms=max(cold_start_ms, 0.0),
        total_successful_requests=successful,
        total_requests=total,
        error_requests=error_requests,
        requests_per_second=rps,
        average_latency_ms=avg,
        min_latency_ms=lo,
        max_latency_ms=hi,
        p50_latency_ms=percentile(ordered, 0.50),
        p95_latency_ms=percentile(ordered, 0.95),
        p99_latency_ms=percentile(ordered, 0.99),
        actual_test_duration_ms=duration_ms,
        error_rate_percent=min(error_rate, 100.0),
        memory_snapshot=memory_snapshot,
        client_loop_stalls=client_loop_stalls,
        client_loop_max_stall_ms=client_loop_max_stall_ms,
    )
