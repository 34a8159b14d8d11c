# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import re
from pathlib import Path
from typing import Annotated, Any

import orjson
from pydantic import ConfigDict, Field, field_validator, model_validator

from fwbench.common.config.base_config import BaseConfig
from fwbench.common.constants import LOOPBACK_HOST
from fwbench.common.enums import HttpMethod


class TestEndpoint(BaseConfig):
    """One HTTP route exercised against every target."""

    # Not a pytest test class despite the name.
    __test__ = False

    model_config = ConfigDict(extra="forbid", frozen=True)

    path: Annotated[
        str,
        Field(description="Request path including any query string, e.g. /techempower/db?queries=1."),
    ]
    http_method: Annotated[
        HttpMethod,
        Field(description="HTTP method used for the request."),
    ] = HttpMethod.GET
    request_body: Annotated[
        dict[str, Any] | list[Any] | None,
        Field(description="JSON payload sent with POST requests."),
    ] = None
    description: Annotated[
        str,
        Field(description="Human-readable description shown in reports."),
    ] = ""

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError(
                f"Endpoint path '{v}' must start with '/'. "
                f"Example: /techempower/json"
            )
        return v

    @model_validator(mode="after")
    def validate_body_for_method(self) -> "TestEndpoint":
        if self.http_method == HttpMethod.POST and self.request_body is None:
            raise ValueError(
                f"POST endpoint '{self.path}' requires a request_body. "
                "Provide the JSON payload the target should validate."
            )
        return self

    def serialize_body(self) -> bytes | None:
        """Encode the request body. A fresh buffer is produced on every call."""
        if self.request_body is None:
            return None
        return orjson.dumps(self.request_body)


class TargetConfig(BaseConfig):
    """A web framework implementation under test."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: Annotated[
        str,
        Field(min_length=1, description="Unique identifier, used in file names."),
    ]
    display_label: Annotated[
        str | None,
        Field(description="Name shown in reports. Defaults to the name."),
    ] = None
    launch_command: Annotated[
        list[str] | None,
        Field(
            description="Executable and arguments. None when the target is started "
            "outside the harness."
        ),
    ] = None
    working_directory: Annotated[
        Path | None,
        Field(description="Directory the launch command runs from."),
    ] = None
    port: Annotated[
        int,
        Field(ge=1, le=65535, description="TCP port the target listens on."),
    ]
    host: Annotated[
        str,
        Field(description="Loopback address the target listens on."),
    ] = LOOPBACK_HOST
    env: Annotated[
        dict[str, str],
        Field(
            default_factory=dict,
            description="Extra environment variables for the launched process. "
            "PORT is always set to the configured port.",
        ),
    ]
    stray_process_pattern: Annotated[
        str | None,
        Field(
            description="Regular expression searched in process command lines. After the "
            "target is stopped, any leftover process matching it is killed."
        ),
    ] = None

    @field_validator("launch_command")
    @classmethod
    def validate_launch_command(cls, v: list[str] | None) -> list[str] | None:
        if v is not None and (not v or not v[0]):
            raise ValueError(
                "launch_command must name an executable, e.g. ['bun', 'run', 'src/index.ts']. "
                "Use None for targets started outside the harness."
            )
        return v

    @field_validator("stray_process_pattern")
    @classmethod
    def validate_stray_process_pattern(cls, v: str | None) -> str | None:
        if v is not None:
            try:
                re.compile(v)
            except re.error as err:
                raise ValueError(
                    f"Invalid stray_process_pattern '{v}': {err}. "
                    r"Example: bun.*src/index\.ts"
                ) from err
        return v

    @property
    def label(self) -> str:
        return self.display_label or self.name

    @property
    def is_externally_managed(self) -> bool:
        return self.launch_command is None

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    def is_available(self) -> bool:
        """Whether the target's sources are present on this machine."""
        return self.working_directory is None or self.working_directory.is_dir()
