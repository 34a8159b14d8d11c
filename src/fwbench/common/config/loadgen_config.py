# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from typing import Annotated

from pydantic import Field, model_validator

from fwbench.common.config.base_config import BaseConfig
from fwbench.common.config.config_defaults import (
    LoadGeneratorDefaults,
    RequestDefaults,
)


class LoadGeneratorConfig(BaseConfig):
    """Settings for the timed request flood run against each target."""

    benchmark_duration: Annotated[
        float,
        Field(
            gt=0,
            description="Length of the timed window in seconds. Workers stop issuing new "
            "batches once it ends; requests already in flight are still counted.",
        ),
    ] = LoadGeneratorDefaults.BENCHMARK_DURATION

    concurrency: Annotated[
        int,
        Field(ge=1, description="Number of concurrent workers."),
    ] = LoadGeneratorDefaults.CONCURRENCY

    batch_size: Annotated[
        int,
        Field(
            ge=1,
            description="Requests each worker dispatches before awaiting them together. "
            "Bounds the number of in-flight requests to concurrency * batch_size.",
        ),
    ] = LoadGeneratorDefaults.BATCH_SIZE

    request_timeout: Annotated[
        float,
        Field(gt=0, description="Per-request timeout in seconds."),
    ] = RequestDefaults.REQUEST_TIMEOUT

    warmup_request_count: Annotated[
        int,
        Field(
            ge=0,
            description="Untimed requests sent before the window opens. Failures are logged only.",
        ),
    ] = LoadGeneratorDefaults.WARMUP_REQUEST_COUNT

    random_seed: Annotated[
        int | None,
        Field(description="Seed for endpoint selection. None picks a fresh seed per run."),
    ] = LoadGeneratorDefaults.RANDOM_SEED

    throttle_enabled: Annotated[
        bool,
        Field(description="Slow dispatch down as the window nears its end."),
    ] = LoadGeneratorDefaults.THROTTLE_ENABLED

    throttle_mid_progress: Annotated[
        float,
        Field(gt=0, lt=1, description="Window fraction after which the mid delay applies."),
    ] = LoadGeneratorDefaults.THROTTLE_MID_PROGRESS

    throttle_mid_delay_ms: Annotated[
        float,
        Field(ge=0, description="Pause between dispatches past the mid threshold."),
    ] = LoadGeneratorDefaults.THROTTLE_MID_DELAY_MS

    throttle_late_progress: Annotated[
        float,
        Field(gt=0, lt=1, description="Window fraction after which the late delay applies."),
    ] = LoadGeneratorDefaults.THROTTLE_LATE_PROGRESS

    throttle_late_delay_ms: Annotated[
        float,
        Field(ge=0, description="Pause between dispatches past the late threshold."),
    ] = LoadGeneratorDefaults.THROTTLE_LATE_DELAY_MS

    @model_validator(mode="after")
    def validate_throttle_thresholds(self) -> "LoadGeneratorConfig":
        if self.throttle_mid_progress >= self.throttle_late_progress:
            raise ValueError(
                f"throttle_mid_progress ({self.throttle_mid_progress}) must be lower than "
                f"throttle_late_progress ({self.throttle_late_progress}). "
                "Example: mid=0.5, late=0.8"
            )
        return self

    def throttle_delay_ms(self, progress: float) -> float:
        """Pause before the next dispatch at the given fraction of the window."""
        if not self.throttle_enabled:
            return 0.0
        if progress > self.throttle_late_progress:
            return self.throttle_late_delay_ms
        if progress > self.throttle_mid_progress:
            return self.throttle_mid_delay_ms
        return 0.0
