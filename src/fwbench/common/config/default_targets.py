# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Built-in benchmark matrix: the framework implementations and shared routes."""

from datetime import datetime, timezone
from pathlib import Path

from fwbench.common.config.target_config import TargetConfig, TestEndpoint
from fwbench.common.enums import HttpMethod

FRAMEWORKS_DIR = Path("frameworks")


def _bun_target(name: str, display_label: str, port: int) -> TargetConfig:
    return TargetConfig(
        name=name,
        display_label=display_label,
        launch_command=["bun", "run", "src/index.ts"],
        working_directory=FRAMEWORKS_DIR / name,
        port=port,
        stray_process_pattern=r"bun.*src/index\.ts",
    )


DEFAULT_TARGETS: tuple[TargetConfig, ...] = (
    _bun_target("elysia", "Elysia", 3000),
    _bun_target("hono", "Hono", 3001),
    _bun_target("express", "Express", 3002),
    _bun_target("koa", "Koa", 3003),
    _bun_target("vafast", "Vafast", 3004),
    _bun_target("vafast-mini", "Vafast-Mini", 3005),
    TargetConfig(
        name="gin",
        display_label="Gin",
        launch_command=["go", "run", "main.go"],
        working_directory=FRAMEWORKS_DIR / "gin",
        port=3006,
        stray_process_pattern=r"go-build.*/exe/main",
    ),
)


def schema_validation_payload() -> dict:
    """Nested user document posted to /schema/validate."""
    return {
        "user": {
            "name": "Test User",
            "phone": "13800138000",
            "age": 25,
            "active": True,
            "tags": ["test", "user"],
            "preferences": {"theme": "light", "language": "zh-CN"},
        },
        "metadata": {
            "version": "1.0.0",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    }


def default_endpoints() -> tuple[TestEndpoint, ...]:
    return (
        TestEndpoint(path="/techempower/json", description="JSON serialization"),
        TestEndpoint(path="/techempower/plaintext", description="Plaintext response"),
        TestEndpoint(path="/techempower/db?queries=1", description="Simulated database query"),
        TestEndpoint(
            path="/schema/validate",
            http_method=HttpMethod.POST,
            request_body=schema_validation_payload(),
            description="Schema validation",
        ),
    )
