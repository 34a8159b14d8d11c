# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from collections import Counter
from collections.abc import Iterable
from pathlib import Path
from typing import Annotated

import orjson
from pydantic import Field, ValidationError, model_validator

from fwbench.common.config.base_config import BaseConfig
from fwbench.common.config.default_targets import DEFAULT_TARGETS, default_endpoints
from fwbench.common.config.loadgen_config import LoadGeneratorConfig
from fwbench.common.config.orchestrator_config import OrchestratorConfig
from fwbench.common.config.output_config import OutputConfig
from fwbench.common.config.target_config import TargetConfig, TestEndpoint
from fwbench.common.enums import HttpMethod
from fwbench.common.exceptions import ConfigurationError


class BenchmarkConfig(BaseConfig):
    """Everything one orchestration run needs."""

    targets: Annotated[
        list[TargetConfig],
        Field(
            default_factory=lambda: list(DEFAULT_TARGETS),
            min_length=1,
            description="Targets, tested in order.",
        ),
    ]

    endpoints: Annotated[
        list[TestEndpoint],
        Field(
            default_factory=lambda: list(default_endpoints()),
            min_length=1,
            description="Routes exercised against every target.",
        ),
    ]

    health_endpoint: Annotated[
        TestEndpoint | None,
        Field(description="Route polled for readiness. Defaults to the first endpoint."),
    ] = None

    loadgen: LoadGeneratorConfig = Field(default_factory=LoadGeneratorConfig)
    orchestrator: OrchestratorConfig = Field(default_factory=OrchestratorConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @model_validator(mode="after")
    def validate_targets_and_endpoints(self) -> "BenchmarkConfig":
        duplicate_names = [
            name for name, n in Counter(t.name for t in self.targets).items() if n > 1
        ]
        if duplicate_names:
            raise ValueError(
                f"Target names must be unique, found duplicates: {', '.join(duplicate_names)}"
            )

        duplicate_ports = [
            str(port) for port, n in Counter(t.port for t in self.targets).items() if n > 1
        ]
        if duplicate_ports:
            raise ValueError(
                f"Target ports must be unique within one run, found duplicates: "
                f"{', '.join(duplicate_ports)}"
            )

        health = self.resolved_health_endpoint
        if health.http_method != HttpMethod.GET:
            raise ValueError(
                f"Health endpoint '{health.path}' must use GET, got {health.http_method}. "
                "Set health_endpoint explicitly or put a GET endpoint first."
            )
        return self

    @property
    def resolved_health_endpoint(self) -> TestEndpoint:
        return self.health_endpoint or self.endpoints[0]

    def select_targets(self, names: Iterable[str]) -> "BenchmarkConfig":
        """Return a copy restricted to the named targets, keeping configured order."""
        wanted = list(names)
        if not wanted:
            return self
        known = {t.name for t in self.targets}
        unknown = [name for name in wanted if name not in known]
        if unknown:
            raise ConfigurationError(
                f"Unknown target(s): {', '.join(unknown)}. "
                f"Available: {', '.join(t.name for t in self.targets)}"
            )
        selected = [t for t in self.targets if t.name in wanted]
        return self.model_copy(update={"targets": selected})

    @classmethod
    def from_file(cls, path: Path) -> "BenchmarkConfig":
        """Load a config from JSON. Keys absent from the file keep their defaults."""
        try:
            data = orjson.loads(path.read_bytes())
        except OSError as e:
            raise ConfigurationError(f"Cannot read config file '{path}': {e}") from e
        except orjson.JSONDecodeError as e:
            raise ConfigurationError(f"Config file '{path}' is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config file '{path}' must contain a JSON object, got {type(data).__name__}"
            )

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid config file '{path}':\n{e}") from e
