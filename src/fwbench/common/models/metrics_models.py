# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Per-request samples and per-target summary statistics."""

from dataclasses import dataclass

from pydantic import Field, model_validator

from fwbench.common.models.base_models import FrozenFwbenchModel

# Float sums over many samples can land a hair outside [min, max].
_ORDERING_TOLERANCE = 1e-6


@dataclass(frozen=True, slots=True)
class LatencyRecord:
    """Outcome of one HTTP request.

    Attributes:
        latency_ms: Wall-clock time from dispatch to body drained, or to the error.
        success: Whether the status code was acceptable for the request mode.
        status_code: HTTP status, or None if no response was received.
        error: Short error name for failed requests (e.g. "TimeoutError", "HTTP 503").
    """

    latency_ms: float
    success: bool
    status_code: int | None = None
    error: str | None = None


class MemorySnapshot(FrozenFwbenchModel):
    """Memory held by a target's process tree at the end of its test window."""

    rss_mb: float = Field(ge=0, description="Resident set size in MiB.")
    vms_mb: float = Field(ge=0, description="Virtual memory size in MiB.")
    num_processes: int = Field(ge=1, description="Processes in the tree.")


class PerformanceMetrics(FrozenFwbenchModel):
    """Summary of one successful target run."""

    target_name: str
    display_label: str
    cold_start_time_ms: float = Field(ge=0)
    total_successful_requests: int = Field(ge=0)
    total_requests: int = Field(ge=0)
    error_requests: int = Field(ge=0)
    requests_per_second: float = Field(ge=0)
    average_latency_ms: float = Field(ge=0)
    min_latency_ms: float = Field(ge=0)
    max_latency_ms: float = Field(ge=0)
    p50_latency_ms: float = Field(ge=0)
    p95_latency_ms: float = Field(ge=0)
    p99_latency_ms: float = Field(ge=0)
    actual_test_duration_ms: float = Field(ge=0)
    error_rate_percent: float = Field(ge=0, le=100)
    memory_snapshot: MemorySnapshot | None = None
    client_loop_stalls: int = Field(
        default=0,
        ge=0,
        description="Intervals in which the load generator's own event loop fell behind.",
    )
    client_loop_max_stall_ms: float = Field(
        default=0.0, ge=0, description="Worst event loop overshoot seen during the window."
    )

    @model_validator(mode="after")
    def validate_ordering(self) -> "PerformanceMetrics":
        tol = _ORDERING_TOLERANCE
        if not (
            self.min_latency_ms - tol
            <= self.average_latency_ms
            <= self.max_latency_ms + tol
        ):
            raise ValueError(
                f"Latency summary for '{self.target_name}' is inconsistent: "
                f"min={self.min_latency_ms}, avg={self.average_latency_ms}, "
                f"max={self.max_latency_ms}. Expected min <= avg <= max."
            )
        if not (
            self.p50_latency_ms - tol
            <= self.p95_latency_ms
            <= self.p99_latency_ms + tol
            and self.p99_latency_ms <= self.max_latency_ms + tol
        ):
            raise ValueError(
                f"Percentiles for '{self.target_name}' are out of order: "
                f"p50={self.p50_latency_ms}, p95={self.p95_latency_ms}, "
                f"p99={self.p99_latency_ms}, max={self.max_latency_ms}."
            )
        if self.total_successful_requests + self.error_requests > self.total_requests:
            raise ValueError(
                f"Request counts for '{self.target_name}' do not add up: "
                f"{self.total_successful_requests} successful + {self.error_requests} "
                f"errors > {self.total_requests} total."
            )
        return self
