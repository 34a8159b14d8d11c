# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from typing import Annotated

from pydantic import Field

from fwbench.common.config.base_config import BaseConfig
from fwbench.common.config.config_defaults import OrchestratorDefaults
from fwbench.common.enums import RetryBackoff


class OrchestratorConfig(BaseConfig):
    """Settings for sequencing targets: retries, readiness, cooldown and validity gates."""

    max_retries: Annotated[
        int,
        Field(ge=1, description="Maximum attempts per target, including the first one."),
    ] = OrchestratorDefaults.MAX_RETRIES

    retry_backoff: Annotated[
        RetryBackoff,
        Field(description="Growth of the delay between attempts."),
    ] = OrchestratorDefaults.RETRY_BACKOFF

    retry_base_delay_ms: Annotated[
        float,
        Field(ge=0, description="Delay after the first failed attempt."),
    ] = OrchestratorDefaults.RETRY_BASE_DELAY_MS

    retry_max_delay_ms: Annotated[
        float,
        Field(ge=0, description="Upper bound on the exponential backoff delay."),
    ] = OrchestratorDefaults.RETRY_MAX_DELAY_MS

    cooldown_seconds: Annotated[
        float,
        Field(ge=0, description="Pause between targets in automatic mode."),
    ] = OrchestratorDefaults.COOLDOWN_SECONDS

    manual_start: Annotated[
        bool,
        Field(
            description="Targets are already running. The harness neither starts nor "
            "stops them and reports a cold start of 0."
        ),
    ] = OrchestratorDefaults.MANUAL_START

    readiness_timeout_seconds: Annotated[
        float,
        Field(gt=0, description="How long to poll a launched target before giving up."),
    ] = OrchestratorDefaults.READINESS_TIMEOUT_SECONDS

    manual_readiness_timeout_seconds: Annotated[
        float,
        Field(gt=0, description="How long to poll an externally started target."),
    ] = OrchestratorDefaults.MANUAL_READINESS_TIMEOUT_SECONDS

    post_start_settle_seconds: Annotated[
        float,
        Field(ge=0, description="Pause after readiness before warmup begins."),
    ] = OrchestratorDefaults.POST_START_SETTLE_SECONDS

    min_successful_requests: Annotated[
        int,
        Field(ge=1, description="Runs with fewer successful requests are rejected."),
    ] = OrchestratorDefaults.MIN_SUCCESSFUL_REQUESTS

    max_error_rate_percent: Annotated[
        float,
        Field(ge=0, le=100, description="Runs with a higher error rate are rejected."),
    ] = OrchestratorDefaults.MAX_ERROR_RATE_PERCENT
