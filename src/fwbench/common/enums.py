# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from enum import Enum


class CaseInsensitiveStrEnum(str, Enum):
    """String enum whose members can be looked up regardless of case."""

    def __str__(self) -> str:
        return self.value

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.lower():
                    return member
        return None


class HttpMethod(CaseInsensitiveStrEnum):
    GET = "GET"
    POST = "POST"


class RequestMode(CaseInsensitiveStrEnum):
    """Connection and acceptance policy used by a RequestDriver."""

    HEALTH_CHECK = "health_check"
    """Connection close, short timeout, any status below 500 counts as alive."""

    LATENCY_PROBE = "latency_probe"
    """Connection close, strict 2xx. Used for single-request measurements and warmup."""

    LOAD = "load"
    """Pooled keep-alive connections, strict 2xx. Used by the load generator."""


class TargetState(CaseInsensitiveStrEnum):
    """Lifecycle state of one target within an orchestration run."""

    PENDING = "pending"
    STARTING = "starting"
    READY = "ready"
    TESTING = "testing"
    DONE = "done"
    FAILED = "failed"


class RetryBackoff(CaseInsensitiveStrEnum):
    LINEAR = "linear"
    EXPONENTIAL = "exponential"
