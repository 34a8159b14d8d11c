# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Shared fixtures for fwbench tests."""

import socket

import pytest

from fwbench.common.config import TestEndpoint
from fwbench.common.enums import HttpMethod
from fwbench.common.environment import Environment
from fwbench.common.models import PerformanceMetrics


def make_metrics(target_name: str = "alpha", **overrides) -> PerformanceMetrics:
    """Build a consistent PerformanceMetrics, overriding any field."""
    values = {
        "target_name": target_name,
        "display_label": target_name.title(),
        "cold_start_time_ms": 120.0,
        "total_successful_requests": 990,
        "total_requests": 1000,
        "error_requests": 10,
        "requests_per_second": 99.0,
        "average_latency_ms": 5.0,
        "min_latency_ms": 1.0,
        "max_latency_ms": 20.0,
        "p50_latency_ms": 4.0,
        "p95_latency_ms": 10.0,
        "p99_latency_ms": 15.0,
        "actual_test_duration_ms": 10_000.0,
        "error_rate_percent": 1.0,
    }
    values.update(overrides)
    return PerformanceMetrics(**values)


def unused_port() -> int:
    """A loopback port nothing is listening on at the time of the call."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture
def json_endpoint() -> TestEndpoint:
    return TestEndpoint(path="/techempower/json", description="JSON")


@pytest.fixture
def post_endpoint() -> TestEndpoint:
    return TestEndpoint(
        path="/schema/validate",
        http_method=HttpMethod.POST,
        request_body={
            "user": {"name": "Test User", "age": 25, "active": True},
            "metadata": {"version": "1.0.0"},
        },
        description="Schema validation",
    )


@pytest.fixture
def fast_process_env(monkeypatch) -> None:
    """Short poll interval and grace period so process tests finish quickly."""
    monkeypatch.setattr(Environment.PROCESS, "READINESS_POLL_INTERVAL", 0.05)
    monkeypatch.setattr(Environment.PROCESS, "STOP_GRACE_PERIOD", 2.0)


@pytest.fixture
def no_event_loop_monitor(monkeypatch) -> None:
    monkeypatch.setattr(Environment.LOADGEN, "EVENT_LOOP_HEALTH_ENABLED", False)


@pytest.fixture
def metrics_factory():
    """Factory for consistent PerformanceMetrics. See make_metrics."""
    return make_metrics


@pytest.fixture
def free_port() -> int:
    return unused_port()
