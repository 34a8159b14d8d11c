# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from fwbench.common.config.base_config import BaseConfig
from fwbench.common.config.benchmark_config import BenchmarkConfig
from fwbench.common.config.config_defaults import (
    LoadGeneratorDefaults,
    OrchestratorDefaults,
    OutputDefaults,
    RequestDefaults,
)
from fwbench.common.config.default_targets import (
    DEFAULT_TARGETS,
    default_endpoints,
    schema_validation_payload,
)
from fwbench.common.config.loadgen_config import LoadGeneratorConfig
from fwbench.common.config.orchestrator_config import OrchestratorConfig
from fwbench.common.config.output_config import OutputConfig
from fwbench.common.config.target_config import TargetConfig, TestEndpoint

__all__ = [
    "BaseConfig",
    "BenchmarkConfig",
    "DEFAULT_TARGETS",
    "LoadGeneratorConfig",
    "LoadGeneratorDefaults",
    "OrchestratorConfig",
    "OrchestratorDefaults",
    "OutputConfig",
    "OutputDefaults",
    "RequestDefaults",
    "TargetConfig",
    "TestEndpoint",
    "default_endpoints",
    "schema_validation_payload",
]
