# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from fwbench.common.config import TestEndpoint
    from fwbench.common.models import LatencyRecord


@runtime_checkable
class RequestDriverProtocol(Protocol):
    """Anything that can time one HTTP request against a target port."""

    async def open(self) -> None: ...

    async def close(self) -> None: ...

    async def send_request(self, endpoint: TestEndpoint, port: int) -> LatencyRecord: ...
