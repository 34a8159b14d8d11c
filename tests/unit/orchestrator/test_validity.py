# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import pytest

from fwbench.common.config import OrchestratorConfig
from fwbench.common.exceptions import ValidityGateError
from fwbench.orchestrator.validity import ValidityGate


class TestValidityGate:
    def test_defaults(self):
        gate = ValidityGate.from_config(OrchestratorConfig())
        assert gate.min_successful_requests == 10
        assert gate.max_error_rate_percent == 50.0

    def test_accepts_healthy_run(self, metrics_factory):
        ValidityGate(10, 50.0).check(metrics_factory())

    def test_too_few_successes(self, metrics_factory):
        metrics = metrics_factory(total_successful_requests=9, total_requests=9, error_requests=0)
        with pytest.raises(ValidityGateError, match="alpha: only 9 successful requests"):
            ValidityGate(10, 50.0).check(metrics)

    def test_exactly_the_minimum_passes(self, metrics_factory):
        metrics = metrics_factory(total_successful_requests=10, total_requests=10, error_requests=0)
        ValidityGate(10, 50.0).check(metrics)

    def test_error_rate_too_high(self, metrics_factory):
        metrics = metrics_factory(
            total_successful_requests=40, total_requests=100, error_requests=60,
            error_rate_percent=60.0,
        )
        with pytest.raises(ValidityGateError, match="error rate 60.00% exceeds 50.00%"):
            ValidityGate(10, 50.0).check(metrics)

    def test_error_rate_at_threshold_passes(self, metrics_factory):
        metrics = metrics_factory(
            total_successful_requests=50, total_requests=100, error_requests=50,
            error_rate_percent=50.0,
        )
        ValidityGate(10, 50.0).check(metrics)
