# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import pytest

from fwbench.common.config import OrchestratorConfig
from fwbench.orchestrator.retry_policy import (
    ExponentialBackoffRetryPolicy,
    LinearBackoffRetryPolicy,
    create_retry_policy,
)


class TestLinearBackoffRetryPolicy:
    @pytest.mark.parametrize("attempt,expected", [(1, 2000.0), (2, 4000.0), (3, 6000.0)])
    def test_delay_grows_linearly(self, attempt, expected):
        assert LinearBackoffRetryPolicy(3, 2000.0).get_delay_ms(attempt) == expected

    def test_max_attempts_include_the_first(self):
        policy = LinearBackoffRetryPolicy(2, 2000.0)
        assert policy.should_retry(1)
        assert not policy.should_retry(2)

    def test_single_attempt_never_retries(self):
        assert not LinearBackoffRetryPolicy(1, 2000.0).should_retry(1)

    @pytest.mark.parametrize("max_attempts,base", [(0, 2000.0), (2, -1.0)])
    def test_invalid_arguments(self, max_attempts, base):
        with pytest.raises(ValueError, match="Invalid"):
            LinearBackoffRetryPolicy(max_attempts, base)


class TestExponentialBackoffRetryPolicy:
    def test_doubles_until_capped(self):
        policy = ExponentialBackoffRetryPolicy(6, 1000.0, 5000.0)
        assert [policy.get_delay_ms(a) for a in range(1, 6)] == [
            1000.0, 2000.0, 4000.0, 5000.0, 5000.0,
        ]

    def test_cap_below_base_rejected(self):
        with pytest.raises(ValueError, match="lower than the base delay"):
            ExponentialBackoffRetryPolicy(3, 2000.0, 1000.0)


class TestCreateRetryPolicy:
    def test_default_is_linear(self):
        policy = create_retry_policy(OrchestratorConfig())
        assert isinstance(policy, LinearBackoffRetryPolicy)
        assert policy.max_attempts == 2
        assert policy.get_delay_ms(1) == 2000.0

    def test_exponential(self):
        policy = create_retry_policy(
            OrchestratorConfig(retry_backoff="exponential", max_retries=4, retry_max_delay_ms=3000)
        )
        assert isinstance(policy, ExponentialBackoffRetryPolicy)
        assert policy.get_delay_ms(3) == 3000.0
