# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Exception hierarchy for fwbench.

Per-request network failures are never raised; they are recorded as failed
LatencyRecords. Everything below describes failures of a whole target attempt
or of the harness configuration.
"""


class FwbenchError(Exception):
    """Base class for all fwbench errors."""


class ConfigurationError(FwbenchError):
    """The benchmark configuration is invalid or cannot be loaded."""


class TargetTestError(FwbenchError):
    """A single target attempt failed. The orchestrator may retry it."""

    def __init__(self, target_name: str, message: str) -> None:
        super().__init__(f"{target_name}: {message}")
        self.target_name = target_name


class LaunchError(TargetTestError):
    """The target process could not be spawned."""


class ReadinessTimeoutError(TargetTestError):
    """The target process started but never answered a health check in time."""


class InsufficientSamplesError(TargetTestError):
    """The load generator did not record a single successful request."""


class ValidityGateError(TargetTestError):
    """The test completed but its results are too unreliable to report."""
