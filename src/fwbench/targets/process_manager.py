# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Launching, health-checking and tearing down target server processes.

Targets are started in their own session so that stop() can signal the whole
process group. `bun run` and `go run` both fork the real server as a child and
signalling only the direct child would leave it bound to the port.
"""

import asyncio
import os
import re
import signal
import time
from collections import deque
from dataclasses import dataclass, field

import psutil

from fwbench.clients import RequestDriver
from fwbench.common.config import TargetConfig, TestEndpoint
from fwbench.common.constants import BYTES_PER_MIB, LOOPBACK_HOST, MILLIS_PER_SECOND
from fwbench.common.environment import Environment
from fwbench.common.exceptions import LaunchError
from fwbench.common.mixins import FwbenchLoggerMixin
from fwbench.common.models import MemorySnapshot

# How long to let the output readers reach EOF after the process exits.
_DRAIN_TIMEOUT = 1.0
_READ_CHUNK_BYTES = 65536


@dataclass
class ProcessHandle:
    """A launched target process and what has been observed about it."""

    target: TargetConfig
    process: asyncio.subprocess.Process
    launched_at: float
    ready_at: float | None = None
    output_tail: deque[str] = field(
        default_factory=lambda: deque(maxlen=Environment.PROCESS.OUTPUT_TAIL_LINES)
    )
    drain_tasks: list[asyncio.Task] = field(default_factory=list)
    stopped: bool = False

    @property
    def pid(self) -> int:
        return self.process.pid

    @property
    def returncode(self) -> int | None:
        return self.process.returncode

    @property
    def has_exited(self) -> bool:
        return self.process.returncode is not None

    @property
    def cold_start_ms(self) -> float | None:
        """Launch issuance to first successful health check, once known."""
        if self.ready_at is None:
            return None
        return (self.ready_at - self.launched_at) * MILLIS_PER_SECOND

    def mark_ready(self) -> None:
        if self.ready_at is None:
            self.ready_at = time.perf_counter()

    def recent_output(self, lines: int = 20) -> str:
        return "\n".join(list(self.output_tail)[-lines:])


class TargetProcessManager(FwbenchLoggerMixin):
    """Owns the OS processes of targets under test."""

    async def start(self, target: TargetConfig) -> ProcessHandle:
        """Spawn the target's launch command with PORT set in its environment.

        Raises:
            LaunchError: If the target has no launch command or the process
                cannot be created.
        """
        if target.launch_command is None:
            raise LaunchError(
                target.name,
                "no launch_command configured. Start it yourself and use manual start mode.",
            )

        env = {**os.environ, **target.env, "PORT": str(target.port)}
        cwd = target.working_directory
        self.info(
            f"Starting {target.label}: {' '.join(target.launch_command)} "
            f"(cwd={cwd or os.getcwd()}, port={target.port})"
        )

        launched_at = time.perf_counter()
        try:
            process = await asyncio.create_subprocess_exec(
                *target.launch_command,
                cwd=cwd,
                env=env,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
                start_new_session=True,
            )
        except (OSError, ValueError) as e:
            raise LaunchError(target.name, f"failed to spawn process: {e}") from e

        handle = ProcessHandle(target=target, process=process, launched_at=launched_at)
        if process.stdout is not None:
            handle.drain_tasks.append(
                asyncio.create_task(self._drain_output(handle, process.stdout))
            )
        self.debug(f"{target.label} started with pid {process.pid}")
        return handle

    async def _drain_output(
        self, handle: ProcessHandle, stream: asyncio.StreamReader
    ) -> None:
        """Read the pipe in chunks until EOF, whatever the line lengths.

        A line longer than OUTPUT_LINE_MAX_BYTES is cut and the rest of it
        discarded up to the next newline.
        """
        max_line = Environment.PROCESS.OUTPUT_LINE_MAX_BYTES
        pending = b""
        skipping = False
        while True:
            chunk = await stream.read(_READ_CHUNK_BYTES)
            if not chunk:
                if pending:
                    self._record_output(handle, pending, max_line)
                return

            *lines, pending = (pending + chunk).split(b"\n")
            for line in lines:
                if skipping:
                    skipping = False
                    continue
                self._record_output(handle, line, max_line)

            if skipping:
                pending = b""
            elif len(pending) > max_line:
                self._record_output(handle, pending, max_line)
                skipping = True
                pending = b""

    def _record_output(self, handle: ProcessHandle, line: bytes, max_line: int) -> None:
        text = line[:max_line].decode(errors="replace").rstrip()
        if len(line) > max_line:
            text += " [truncated]"
        handle.output_tail.append(text)
        if self.is_debug_enabled:
            self.debug(f"[{handle.target.name}] {text}")

    async def wait_until_ready(
        self,
        handle: ProcessHandle | None,
        port: int,
        endpoint: TestEndpoint,
        timeout_ms: float,
        host: str = LOOPBACK_HOST,
    ) -> bool:
        """Poll the endpoint until it answers with a status below 500.

        Returns False on timeout, or as soon as the launched process exits.
        Pass handle=None to poll a target the harness did not start.
        """
        poll_interval = Environment.PROCESS.READINESS_POLL_INTERVAL
        deadline = time.perf_counter() + timeout_ms / MILLIS_PER_SECOND
        attempts = 0

        async with RequestDriver.for_health_check(host=host) as driver:
            while True:
                if handle is not None and handle.has_exited:
                    self.warning(
                        f"{handle.target.label} exited with code {handle.returncode} "
                        f"before becoming ready. Last output:\n{handle.recent_output()}"
                    )
                    return False

                attempts += 1
                record = await driver.send_request(endpoint, port)
                if record.success:
                    if handle is not None:
                        handle.mark_ready()
                    self.debug(
                        f"{host}:{port} ready after {attempts} health check(s) "
                        f"(status {record.status_code})"
                    )
                    return True

                remaining = deadline - time.perf_counter()
                if remaining <= 0:
                    self.warning(
                        f"{host}:{port}{endpoint.path} not ready after {timeout_ms:,.0f}ms "
                        f"({attempts} attempts, last error: {record.error})"
                    )
                    return False
                await asyncio.sleep(min(poll_interval, remaining))

    async def stop(self, handle: ProcessHandle) -> None:
        """Terminate the process group, escalating to SIGKILL after the grace period.

        Safe to call more than once. A call cancelled before the process was
        reaped leaves the handle stoppable again.
        """
        if handle.stopped:
            return

        process = handle.process
        if process.returncode is None:
            self.info(f"Stopping {handle.target.label} (pid {process.pid})")
            self._signal_group(process.pid, signal.SIGTERM)
            try:
                await asyncio.wait_for(
                    process.wait(), timeout=Environment.PROCESS.STOP_GRACE_PERIOD
                )
            except asyncio.TimeoutError:
                self.warning(
                    f"{handle.target.label} ignored SIGTERM for "
                    f"{Environment.PROCESS.STOP_GRACE_PERIOD}s, sending SIGKILL"
                )
                self._signal_group(process.pid, signal.SIGKILL)
                await process.wait()
        else:
            # The leader may be gone while forked children still hold the port.
            self._signal_group(process.pid, signal.SIGKILL)
        handle.stopped = True

        if handle.drain_tasks:
            _, pending = await asyncio.wait(handle.drain_tasks, timeout=_DRAIN_TIMEOUT)
            for task in pending:
                task.cancel()
            handle.drain_tasks.clear()

        self.debug(f"{handle.target.label} stopped with code {process.returncode}")

        if handle.target.stray_process_pattern:
            self.reap_strays(handle.target.stray_process_pattern)

    def _signal_group(self, pid: int, sig: signal.Signals) -> None:
        try:
            os.killpg(pid, sig)
        except ProcessLookupError:
            pass
        except PermissionError as e:
            self.warning(f"Cannot send {sig.name} to process group {pid}: {e}")

    def reap_strays(self, pattern: str) -> int:
        """Kill leftover processes whose command line matches the pattern.

        Returns the number of processes killed.
        """
        regex = re.compile(pattern)
        own_pid = os.getpid()
        killed = 0
        for proc in psutil.process_iter(["pid", "cmdline"]):
            if proc.info["pid"] == own_pid:
                continue
            cmdline = " ".join(proc.info["cmdline"] or [])
            if not cmdline or not regex.search(cmdline):
                continue
            try:
                proc.kill()
            except (psutil.NoSuchProcess, psutil.AccessDenied) as e:
                self.debug(f"Could not kill stray process {proc.info['pid']}: {e}")
                continue
            killed += 1
            self.info(f"Killed stray process {proc.info['pid']}: {cmdline}")
        return killed

    def memory_snapshot(self, handle: ProcessHandle) -> MemorySnapshot | None:
        """Resident and virtual memory of the process and all its descendants."""
        try:
            root = psutil.Process(handle.pid)
            procs = [root, *root.children(recursive=True)]
        except (psutil.NoSuchProcess, psutil.AccessDenied) as e:
            self.debug(f"Memory snapshot unavailable for {handle.target.label}: {e}")
            return None

        rss = vms = 0
        counted = 0
        for proc in procs:
            try:
                info = proc.memory_info()
            except (psutil.NoSuchProcess, psutil.AccessDenied):
                continue
            rss += info.rss
            vms += info.vms
            counted += 1

        if counted == 0:
            return None
        return MemorySnapshot(
            rss_mb=rss / BYTES_PER_MIB,
            vms_mb=vms / BYTES_PER_MIB,
            num_processes=counted,
        )
