# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Timed single HTTP requests over aiohttp.

A driver runs in one of three RequestModes. Health checks and latency probes
close the connection after every request so each one pays for a fresh TCP
handshake, which is what readiness and warmup should observe. Load drivers keep
a pooled keep-alive session open for the whole test window.
"""

import asyncio
import time

import aiohttp

from fwbench.common.config import TestEndpoint
from fwbench.common.constants import (
    HEALTH_CHECK_STATUS_RANGE,
    LOAD_STATUS_RANGE,
    LOOPBACK_HOST,
    MILLIS_PER_SECOND,
)
from fwbench.common.enums import RequestMode
from fwbench.common.environment import Environment
from fwbench.common.mixins import FwbenchLoggerMixin
from fwbench.common.models import LatencyRecord

_JSON_HEADERS = {"Content-Type": "application/json"}


class RequestDriver(FwbenchLoggerMixin):
    """Sends one request at a time and reports how long it took.

    Network failures never raise; they come back as a LatencyRecord with
    success=False and the elapsed time up to the failure.
    """

    def __init__(
        self,
        mode: RequestMode,
        timeout: float,
        host: str = LOOPBACK_HOST,
    ) -> None:
        super().__init__()
        if timeout <= 0:
            raise ValueError(f"Request timeout must be positive, got {timeout}")
        self.mode = mode
        self.timeout = timeout
        self.host = host
        self._session: aiohttp.ClientSession | None = None

    @classmethod
    def for_health_check(
        cls, host: str = LOOPBACK_HOST, timeout: float | None = None
    ) -> "RequestDriver":
        return cls(
            RequestMode.HEALTH_CHECK,
            timeout or Environment.HTTP.HEALTH_CHECK_TIMEOUT,
            host=host,
        )

    @classmethod
    def for_latency_probe(
        cls, timeout: float, host: str = LOOPBACK_HOST
    ) -> "RequestDriver":
        return cls(RequestMode.LATENCY_PROBE, timeout, host=host)

    @classmethod
    def for_load(cls, timeout: float, host: str = LOOPBACK_HOST) -> "RequestDriver":
        return cls(RequestMode.LOAD, timeout, host=host)

    @property
    def is_open(self) -> bool:
        return self._session is not None and not self._session.closed

    @property
    def accepted_status_range(self) -> tuple[int, int]:
        if self.mode == RequestMode.HEALTH_CHECK:
            return HEALTH_CHECK_STATUS_RANGE
        return LOAD_STATUS_RANGE

    def _create_session(self) -> aiohttp.ClientSession:
        connector = aiohttp.TCPConnector(
            limit=0,
            force_close=self.mode != RequestMode.LOAD,
        )
        return aiohttp.ClientSession(
            connector=connector,
            timeout=aiohttp.ClientTimeout(total=self.timeout),
        )

    async def open(self) -> None:
        if not self.is_open:
            self._session = self._create_session()

    async def close(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "RequestDriver":
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def send_request(self, endpoint: TestEndpoint, port: int) -> LatencyRecord:
        """Issue one request and time it from dispatch until the body is drained.

        Raises:
            RuntimeError: If a load driver is used before open(). Probe drivers
                fall back to a one-shot session.
        """
        if self.is_open:
            return await self._timed_request(self._session, endpoint, port)

        if self.mode == RequestMode.LOAD:
            raise RuntimeError(
                "Load RequestDriver used before open(). "
                "Use 'async with driver:' or call 'await driver.open()' first."
            )
        async with self._create_session() as session:
            return await self._timed_request(session, endpoint, port)

    async def _timed_request(
        self, session: aiohttp.ClientSession, endpoint: TestEndpoint, port: int
    ) -> LatencyRecord:
        url = f"http://{self.host}:{port}{endpoint.path}"
        body = endpoint.serialize_body()
        headers = _JSON_HEADERS if body is not None else None
        low, high = self.accepted_status_range

        start = time.perf_counter()
        try:
            async with session.request(
                str(endpoint.http_method), url, data=body, headers=headers
            ) as response:
                await response.read()
                status = response.status
        except (asyncio.TimeoutError, aiohttp.ClientError, OSError) as e:
            elapsed_ms = (time.perf_counter() - start) * MILLIS_PER_SECOND
            if self.is_debug_enabled:
                self.debug(
                    f"{endpoint.http_method} {url} failed after {elapsed_ms:.2f}ms: {e!r}"
                )
            return LatencyRecord(
                latency_ms=elapsed_ms, success=False, error=type(e).__name__
            )
        elapsed_ms = (time.perf_counter() - start) * MILLIS_PER_SECOND

        success = low <= status < high
        return LatencyRecord(
            latency_ms=elapsed_ms,
            success=success,
            status_code=status,
            error=None if success else f"HTTP {status}",
        )
