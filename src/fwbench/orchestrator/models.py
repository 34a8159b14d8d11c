# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Data models for per-target orchestration."""

import logging

from pydantic import BaseModel, Field

from fwbench.common.enums import TargetState
from fwbench.common.models import PerformanceMetrics

logger = logging.getLogger(__name__)

_ALLOWED_TRANSITIONS: dict[TargetState, frozenset[TargetState]] = {
    TargetState.PENDING: frozenset({TargetState.STARTING, TargetState.FAILED}),
    TargetState.STARTING: frozenset({TargetState.READY, TargetState.FAILED}),
    TargetState.READY: frozenset({TargetState.TESTING, TargetState.FAILED}),
    TargetState.TESTING: frozenset({TargetState.DONE, TargetState.FAILED}),
    # Teardown can still fail after the metrics were accepted.
    TargetState.DONE: frozenset({TargetState.FAILED}),
    # A failed attempt may be retried from scratch.
    TargetState.FAILED: frozenset({TargetState.STARTING}),
}


class TargetLifecycle:
    """Tracks one target's state and the path it took through the lifecycle."""

    def __init__(self, target_name: str) -> None:
        self.target_name = target_name
        self.state = TargetState.PENDING
        self.history: list[TargetState] = [TargetState.PENDING]

    def transition(self, new_state: TargetState) -> None:
        """Move to new_state.

        Raises:
            ValueError: If the transition is not allowed from the current state.
        """
        if new_state not in _ALLOWED_TRANSITIONS[self.state]:
            raise ValueError(
                f"Invalid state transition for '{self.target_name}': "
                f"{self.state} -> {new_state}. "
                f"Allowed from {self.state}: "
                f"{', '.join(sorted(str(s) for s in _ALLOWED_TRANSITIONS[self.state])) or 'none'}"
            )
        logger.debug(f"{self.target_name}: {self.state} -> {new_state}")
        self.state = new_state
        self.history.append(new_state)

    def fail(self) -> None:
        """Mark the current attempt failed, unless it already is."""
        if self.state != TargetState.FAILED:
            self.transition(TargetState.FAILED)


class TargetRunResult(BaseModel):
    """Outcome of testing one target, successful or not.

    Attributes:
        target_name: Identifier of the target
        display_label: Name shown in reports
        success: Whether an attempt produced accepted metrics
        attempts: Number of attempts made (0 if the target was skipped)
        final_state: State the target ended in
        state_history: Every state the target passed through, in order
        metrics: Summary of the successful attempt
        error: Message of the last failure
        skipped: True when the target was not available on this machine
    """

    target_name: str
    display_label: str
    success: bool
    attempts: int = 0
    final_state: TargetState = TargetState.PENDING
    state_history: list[TargetState] = Field(default_factory=list)
    metrics: PerformanceMetrics | None = None
    error: str | None = None
    skipped: bool = False
