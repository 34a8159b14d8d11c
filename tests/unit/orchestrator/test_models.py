# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import pytest

from fwbench.common.enums import TargetState
from fwbench.orchestrator.models import TargetLifecycle, TargetRunResult


class TestTargetLifecycle:
    def test_happy_path(self):
        lifecycle = TargetLifecycle("hono")
        for state in (TargetState.STARTING, TargetState.READY, TargetState.TESTING, TargetState.DONE):
            lifecycle.transition(state)
        assert lifecycle.state == TargetState.DONE
        assert lifecycle.history == [
            TargetState.PENDING,
            TargetState.STARTING,
            TargetState.READY,
            TargetState.TESTING,
            TargetState.DONE,
        ]

    def test_retry_after_failure(self):
        lifecycle = TargetLifecycle("hono")
        lifecycle.transition(TargetState.STARTING)
        lifecycle.fail()
        lifecycle.transition(TargetState.STARTING)
        assert lifecycle.history[-3:] == [
            TargetState.STARTING, TargetState.FAILED, TargetState.STARTING,
        ]

    def test_fail_is_idempotent(self):
        lifecycle = TargetLifecycle("hono")
        lifecycle.fail()
        lifecycle.fail()
        assert lifecycle.history == [TargetState.PENDING, TargetState.FAILED]

    @pytest.mark.parametrize(
        "path",
        [
            [TargetState.READY],
            [TargetState.STARTING, TargetState.TESTING],
            [TargetState.STARTING, TargetState.READY, TargetState.DONE],
        ],
    )
    def test_skipping_states_is_rejected(self, path):
        lifecycle = TargetLifecycle("hono")
        with pytest.raises(ValueError, match="Invalid state transition for 'hono'"):
            for state in path:
                lifecycle.transition(state)

    def test_done_is_terminal_except_for_teardown_failure(self):
        lifecycle = TargetLifecycle("hono")
        for state in (TargetState.STARTING, TargetState.READY, TargetState.TESTING, TargetState.DONE):
            lifecycle.transition(state)
        with pytest.raises(ValueError):
            lifecycle.transition(TargetState.STARTING)
        lifecycle.fail()
        assert lifecycle.state == TargetState.FAILED


class TestTargetRunResult:
    def test_serializes_states_as_strings(self, metrics_factory):
        result = TargetRunResult(
            target_name="alpha",
            display_label="Alpha",
            success=True,
            attempts=1,
            final_state=TargetState.DONE,
            state_history=[TargetState.PENDING, TargetState.DONE],
            metrics=metrics_factory(),
        )
        dumped = result.model_dump(mode="json")
        assert dumped["final_state"] == "done"
        assert dumped["metrics"]["target_name"] == "alpha"
