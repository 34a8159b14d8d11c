# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Delay between failed attempts of the same target."""

from abc import ABC, abstractmethod

from fwbench.common.config import OrchestratorConfig
from fwbench.common.enums import RetryBackoff

__all__ = [
    "ExponentialBackoffRetryPolicy",
    "LinearBackoffRetryPolicy",
    "RetryPolicy",
    "create_retry_policy",
]


class RetryPolicy(ABC):
    """Decides how many attempts a target gets and how long to wait between them."""

    def __init__(self, max_attempts: int, base_delay_ms: float) -> None:
        if max_attempts < 1:
            raise ValueError(
                f"Invalid max_attempts: {max_attempts}. "
                "At least one attempt is required. Use 1 to disable retries."
            )
        if base_delay_ms < 0:
            raise ValueError(
                f"Invalid base delay: {base_delay_ms}ms. "
                "Delay must be non-negative. Use 0 to retry immediately."
            )
        self.max_attempts = max_attempts
        self.base_delay_ms = base_delay_ms

    def should_retry(self, attempt: int) -> bool:
        """Whether another attempt follows the given 1-based attempt."""
        return attempt < self.max_attempts

    @abstractmethod
    def get_delay_ms(self, attempt: int) -> float:
        """Delay after the given 1-based failed attempt."""


class LinearBackoffRetryPolicy(RetryPolicy):
    """attempt * base_delay: 2s, 4s, 6s, ... with the default base."""

    def get_delay_ms(self, attempt: int) -> float:
        return attempt * self.base_delay_ms


class ExponentialBackoffRetryPolicy(RetryPolicy):
    """base_delay * 2^(attempt-1), capped at max_delay_ms."""

    def __init__(
        self, max_attempts: int, base_delay_ms: float, max_delay_ms: float
    ) -> None:
        super().__init__(max_attempts, base_delay_ms)
        if max_delay_ms < base_delay_ms:
            raise ValueError(
                f"Invalid max delay: {max_delay_ms}ms is lower than the base delay "
                f"{base_delay_ms}ms. Raise retry_max_delay_ms or lower retry_base_delay_ms."
            )
        self.max_delay_ms = max_delay_ms

    def get_delay_ms(self, attempt: int) -> float:
        return min(self.base_delay_ms * 2 ** (attempt - 1), self.max_delay_ms)


def create_retry_policy(config: OrchestratorConfig) -> RetryPolicy:
    if config.retry_backoff == RetryBackoff.EXPONENTIAL:
        return ExponentialBackoffRetryPolicy(
            config.max_retries, config.retry_base_delay_ms, config.retry_max_delay_ms
        )
    return LinearBackoffRetryPolicy(config.max_retries, config.retry_base_delay_ms)
