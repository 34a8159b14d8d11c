# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Minimal keep-alive HTTP/1.1 server implementing the default benchmark routes.

Useful as a smoke-test target and as a baseline next to real frameworks:

    python -m fwbench.stub_server --port 3000
    fwbench serve-stub --port 3000

Routes:
    GET  /techempower/json          {"message": "Hello, World!"}
    GET  /techempower/plaintext     Hello, World!
    GET  /techempower/db?queries=N  N simulated rows (1..500), a single object for N=1
    POST /schema/validate           echoes the body as validatedBody, 400 on invalid input
    GET  /health                    ok
"""

from __future__ import annotations

import asyncio
import random
import sys
from asyncio import StreamReader, StreamWriter
from datetime import datetime, timezone
from urllib.parse import parse_qs, urlsplit

import orjson

from fwbench.common.constants import LOOPBACK_HOST
from fwbench.common.mixins import FwbenchLoggerMixin

_MAX_DB_QUERIES = 500
_MAX_BODY_BYTES = 1024 * 1024


def _make_response(
    status_code: int,
    status_text: str,
    body: bytes | None = None,
    content_type: bytes = b"text/plain",
    keep_alive: bool = True,
) -> bytes:
    """Build an HTTP response as bytes."""
    body = status_text.encode() if body is None else body
    connection = b"keep-alive" if keep_alive else b"close"
    return (
        b"HTTP/1.1 %d %s\r\n"
        b"Content-Type: %s\r\n"
        b"Content-Length: %d\r\n"
        b"Connection: %s\r\n"
        b"\r\n" % (status_code, status_text.encode(), content_type, len(body), connection)
    ) + body


def _json_response(status_code: int, status_text: str, payload, keep_alive: bool) -> bytes:
    return _make_response(
        status_code,
        status_text,
        orjson.dumps(payload),
        content_type=b"application/json",
        keep_alive=keep_alive,
    )


# Pre-computed responses keyed by keep-alive (avoid formatting on every request)
_RESP_JSON = {
    ka: _json_response(200, "OK", {"message": "Hello, World!"}, ka) for ka in (True, False)
}
_RESP_PLAINTEXT = {
    ka: _make_response(200, "OK", b"Hello, World!", keep_alive=ka) for ka in (True, False)
}
_RESP_HEALTH = {ka: _make_response(200, "OK", b"ok", keep_alive=ka) for ka in (True, False)}
_RESP_NOT_FOUND = {ka: _make_response(404, "Not Found", keep_alive=ka) for ka in (True, False)}
_RESP_METHOD_NOT_ALLOWED = {
    ka: _make_response(405, "Method Not Allowed", keep_alive=ka) for ka in (True, False)
}
_RESP_BAD_REQUEST = _make_response(400, "Bad Request", keep_alive=False)

_GET_ROUTES = {"/techempower/json", "/techempower/plaintext", "/techempower/db", "/health"}
_POST_ROUTES = {"/schema/validate"}


def simulate_db_rows(queries: str | None) -> dict | list[dict]:
    """Random rows in the TechEmpower database-test shape."""
    try:
        count = int(queries) if queries else 1
    except ValueError:
        count = 1
    count = min(max(count, 1), _MAX_DB_QUERIES)
    rows = [{"id": i + 1, "randomNumber": random.randint(1, 10_000)} for i in range(count)]
    return rows[0] if count == 1 else rows


def validate_schema_payload(payload) -> str | None:
    """Return a description of what is wrong with the payload, or None if it is valid."""
    if not isinstance(payload, dict):
        return "body must be a JSON object"
    user = payload.get("user")
    if not isinstance(user, dict):
        return "user must be an object"
    name = user.get("name")
    if not isinstance(name, str) or not 2 <= len(name) <= 50:
        return "user.name must be a string of 2 to 50 characters"
    age = user.get("age")
    if isinstance(age, bool) or not isinstance(age, (int, float)) or not 0 <= age <= 120:
        return "user.age must be a number between 0 and 120"
    if not isinstance(user.get("active"), bool):
        return "user.active must be a boolean"
    if not isinstance(payload.get("metadata"), dict):
        return "metadata must be an object"
    return None


class StubTargetServer(FwbenchLoggerMixin):
    """asyncio HTTP server answering the default benchmark routes."""

    def __init__(self, host: str = LOOPBACK_HOST, port: int = 3000, **kwargs) -> None:
        super().__init__(**kwargs)
        self.host = host
        self.port = port
        self._server: asyncio.Server | None = None

    @property
    def bound_port(self) -> int:
        """Actual listening port, useful when started with port=0."""
        if self._server is None or not self._server.sockets:
            raise RuntimeError("StubTargetServer is not running")
        return self._server.sockets[0].getsockname()[1]

    async def start(self) -> None:
        if self._server is not None:
            return
        self._server = await asyncio.start_server(
            self._handle_connection, host=self.host, port=self.port
        )
        self.info(f"Stub target listening on {self.host}:{self.bound_port}")

    async def stop(self) -> None:
        if self._server is None:
            return
        server = self._server
        self._server = None
        server.close()
        await server.wait_closed()
        self.debug("Stub target stopped")

    async def serve_forever(self) -> None:
        await self.start()
        await self._server.serve_forever()

    async def _handle_connection(self, reader: StreamReader, writer: StreamWriter) -> None:
        try:
            while True:
                request_line = await reader.readline()
                if not request_line:
                    return

                # Example: "GET /techempower/json HTTP/1.1\r\n"
                parts = request_line.split()
                if len(parts) != 3:
                    writer.write(_RESP_BAD_REQUEST)
                    await writer.drain()
                    return
                method, target, version = parts

                headers: dict[bytes, bytes] = {}
                while True:
                    line = await reader.readline()
                    if line in (b"\r\n", b"\n", b""):
                        break
                    name, _, value = line.partition(b":")
                    headers[name.strip().lower()] = value.strip()

                try:
                    length = int(headers.get(b"content-length", b"0"))
                except ValueError:
                    length = -1
                if not 0 <= length <= _MAX_BODY_BYTES:
                    writer.write(_RESP_BAD_REQUEST)
                    await writer.drain()
                    return
                body = await reader.readexactly(length) if length else b""

                keep_alive = (
                    version == b"HTTP/1.1"
                    and headers.get(b"connection", b"").lower() != b"close"
                )
                writer.write(self._route(method, target.decode("latin-1"), body, keep_alive))
                await writer.drain()
                if not keep_alive:
                    return
        except (asyncio.IncompleteReadError, ConnectionError):
            pass
        except Exception as e:
            self.error(f"Stub target error: {e!r}")
        finally:
            writer.close()
            try:
                await writer.wait_closed()
            except ConnectionError:
                pass

    def _route(self, method: bytes, target: str, body: bytes, keep_alive: bool) -> bytes:
        url = urlsplit(target)
        path = url.path

        if path in _POST_ROUTES:
            if method != b"POST":
                return _RESP_METHOD_NOT_ALLOWED[keep_alive]
            return self._schema_validate(body, keep_alive)

        if path not in _GET_ROUTES:
            return _RESP_NOT_FOUND[keep_alive]
        if method != b"GET":
            return _RESP_METHOD_NOT_ALLOWED[keep_alive]

        if path == "/techempower/json":
            return _RESP_JSON[keep_alive]
        if path == "/techempower/plaintext":
            return _RESP_PLAINTEXT[keep_alive]
        if path == "/health":
            return _RESP_HEALTH[keep_alive]
        queries = parse_qs(url.query).get("queries", [None])[0]
        return _json_response(200, "OK", simulate_db_rows(queries), keep_alive)

    def _schema_validate(self, body: bytes, keep_alive: bool) -> bytes:
        try:
            payload = orjson.loads(body)
        except orjson.JSONDecodeError:
            return _json_response(
                400, "Bad Request", {"success": False, "error": "invalid JSON"}, keep_alive
            )
        problem = validate_schema_payload(payload)
        if problem is not None:
            return _json_response(
                400, "Bad Request", {"success": False, "error": problem}, keep_alive
            )
        return _json_response(
            200,
            "OK",
            {
                "success": True,
                "validatedBody": payload,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
            keep_alive,
        )


if __name__ == "__main__":
    from fwbench.cli import app

    app(["serve-stub", *sys.argv[1:]])
