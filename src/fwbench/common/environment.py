# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Runtime tunables read from FWBENCH_* environment variables.

These are knobs that rarely change between runs and are not worth a CLI flag.
Everything a user normally adjusts lives in BenchmarkConfig instead.

Examples:
    FWBENCH_HTTP_HEALTH_CHECK_TIMEOUT=2.0
    FWBENCH_PROCESS_STOP_GRACE_PERIOD=5.0
    FWBENCH_LOADGEN_EVENT_LOOP_HEALTH_ENABLED=false
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class _HTTPSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FWBENCH_HTTP_")

    HEALTH_CHECK_TIMEOUT: float = Field(
        default=2.0,
        gt=0,
        description="Per-request timeout in seconds for readiness health checks.",
    )


class _ProcessSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FWBENCH_PROCESS_")

    READINESS_POLL_INTERVAL: float = Field(
        default=0.1,
        gt=0,
        description="Seconds between readiness health checks.",
    )
    STOP_GRACE_PERIOD: float = Field(
        default=5.0,
        ge=0,
        description="Seconds to wait after SIGTERM before escalating to SIGKILL.",
    )
    OUTPUT_TAIL_LINES: int = Field(
        default=200,
        ge=1,
        description="Number of trailing stdout/stderr lines kept per target process.",
    )
    OUTPUT_LINE_MAX_BYTES: int = Field(
        default=4096,
        ge=64,
        description="Longer target output lines are truncated to this many bytes in the tail.",
    )


class _LoadGenSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FWBENCH_LOADGEN_")

    EVENT_LOOP_HEALTH_ENABLED: bool = Field(
        default=True,
        description="Warn when the load generator's own event loop is blocked.",
    )
    EVENT_LOOP_HEALTH_INTERVAL: float = Field(
        default=0.25,
        gt=0,
        description="Sleep interval in seconds used to probe event loop latency.",
    )
    EVENT_LOOP_HEALTH_WARN_THRESHOLD_MS: float = Field(
        default=10.0,
        gt=0,
        description="Event loop overhead in milliseconds that triggers a warning.",
    )


class _Environment(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FWBENCH_")

    HTTP: _HTTPSettings = Field(default_factory=_HTTPSettings)
    PROCESS: _ProcessSettings = Field(default_factory=_ProcessSettings)
    LOADGEN: _LoadGenSettings = Field(default_factory=_LoadGenSettings)


Environment = _Environment()
