# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from dataclasses import dataclass
from pathlib import Path

from fwbench.common.enums import RetryBackoff


@dataclass(frozen=True)
class RequestDefaults:
    REQUEST_TIMEOUT = 5.0


@dataclass(frozen=True)
class LoadGeneratorDefaults:
    BENCHMARK_DURATION = 10.0
    CONCURRENCY = 20
    BATCH_SIZE = 50
    WARMUP_REQUEST_COUNT = 10
    RANDOM_SEED = None
    THROTTLE_ENABLED = True
    THROTTLE_MID_PROGRESS = 0.5
    THROTTLE_MID_DELAY_MS = 1.0
    THROTTLE_LATE_PROGRESS = 0.8
    THROTTLE_LATE_DELAY_MS = 2.0


@dataclass(frozen=True)
class OrchestratorDefaults:
    MAX_RETRIES = 2
    RETRY_BACKOFF = RetryBackoff.LINEAR
    RETRY_BASE_DELAY_MS = 2000.0
    RETRY_MAX_DELAY_MS = 30_000.0
    COOLDOWN_SECONDS = 5.0
    MANUAL_START = False
    READINESS_TIMEOUT_SECONDS = 20.0
    MANUAL_READINESS_TIMEOUT_SECONDS = 5.0
    POST_START_SETTLE_SECONDS = 2.0
    MIN_SUCCESSFUL_REQUESTS = 10
    MAX_ERROR_RATE_PERCENT = 50.0


@dataclass(frozen=True)
class OutputDefaults:
    OUTPUT_DIR = Path("test-results/batch-test")
    SAVE_SUMMARY_JSON = True
    SAVE_DETAILED_JSON = True
    SAVE_MARKDOWN_REPORT = True
    SAVE_CSV = True
    PRINT_CONSOLE_REPORT = True
