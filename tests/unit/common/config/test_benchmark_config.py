# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for BenchmarkConfig validation and loading."""

import orjson
import pytest
from pydantic import ValidationError

from fwbench.common.config import (
    BenchmarkConfig,
    LoadGeneratorConfig,
    OrchestratorConfig,
    TargetConfig,
    TestEndpoint,
)
from fwbench.common.enums import HttpMethod, RetryBackoff
from fwbench.common.exceptions import ConfigurationError


def _targets(*pairs: tuple[str, int]) -> list[TargetConfig]:
    return [TargetConfig(name=name, port=port) for name, port in pairs]


class TestBenchmarkConfigValidation:
    def test_defaults(self):
        config = BenchmarkConfig()
        assert len(config.targets) == 7
        assert config.loadgen.concurrency == 20
        assert config.loadgen.batch_size == 50
        assert config.orchestrator.max_retries == 2
        assert config.orchestrator.retry_backoff == RetryBackoff.LINEAR
        assert config.orchestrator.cooldown_seconds == 5.0
        assert config.resolved_health_endpoint.path == "/techempower/json"

    def test_duplicate_ports_rejected(self):
        with pytest.raises(ValidationError, match="ports must be unique.*3000"):
            BenchmarkConfig(targets=_targets(("a", 3000), ("b", 3000)))

    def test_duplicate_names_rejected(self):
        with pytest.raises(ValidationError, match="names must be unique.*a"):
            BenchmarkConfig(targets=_targets(("a", 3000), ("a", 3001)))

    def test_empty_targets_rejected(self):
        with pytest.raises(ValidationError):
            BenchmarkConfig(targets=[])

    def test_health_endpoint_must_be_get(self, post_endpoint):
        with pytest.raises(ValidationError, match="must use GET"):
            BenchmarkConfig(endpoints=[post_endpoint])

    def test_explicit_health_endpoint(self, post_endpoint):
        health = TestEndpoint(path="/health")
        config = BenchmarkConfig(endpoints=[post_endpoint], health_endpoint=health)
        assert config.resolved_health_endpoint is health


class TestSelectTargets:
    def test_keeps_configured_order(self):
        config = BenchmarkConfig(targets=_targets(("a", 1), ("b", 2), ("c", 3)))
        selected = config.select_targets(["c", "a"])
        assert [t.name for t in selected.targets] == ["a", "c"]

    def test_unknown_target(self):
        config = BenchmarkConfig(targets=_targets(("a", 1)))
        with pytest.raises(ConfigurationError, match="Unknown target.*zzz.*Available: a"):
            config.select_targets(["zzz"])

    def test_empty_selection_returns_all(self):
        config = BenchmarkConfig(targets=_targets(("a", 1), ("b", 2)))
        assert config.select_targets([]) is config


class TestFromFile:
    def test_loads_partial_file(self, tmp_path):
        path = tmp_path / "bench.json"
        path.write_bytes(
            orjson.dumps(
                {
                    "targets": [
                        {"name": "stub", "port": 4000, "launch_command": ["python", "-m", "x"]}
                    ],
                    "loadgen": {"benchmark_duration": 2, "concurrency": 5},
                }
            )
        )
        config = BenchmarkConfig.from_file(path)
        assert config.targets[0].name == "stub"
        assert config.loadgen.concurrency == 5
        assert config.loadgen.batch_size == 50
        assert config.endpoints[0].path == "/techempower/json"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Cannot read config file"):
            BenchmarkConfig.from_file(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(ConfigurationError, match="not valid JSON"):
            BenchmarkConfig.from_file(path)

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[]")
        with pytest.raises(ConfigurationError, match="must contain a JSON object"):
            BenchmarkConfig.from_file(path)

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "typo.json"
        path.write_bytes(orjson.dumps({"loadgen": {"concurency": 5}}))
        with pytest.raises(ConfigurationError, match="Invalid config file"):
            BenchmarkConfig.from_file(path)


class TestLoadGeneratorConfig:
    def test_throttle_thresholds_must_increase(self):
        with pytest.raises(ValidationError, match="must be lower than"):
            LoadGeneratorConfig(throttle_mid_progress=0.8, throttle_late_progress=0.5)

    @pytest.mark.parametrize(
        "progress,expected",
        [(0.0, 0.0), (0.5, 0.0), (0.51, 1.0), (0.8, 1.0), (0.81, 2.0), (1.0, 2.0)],
    )
    def test_throttle_delay(self, progress, expected):
        assert LoadGeneratorConfig().throttle_delay_ms(progress) == expected

    def test_throttle_disabled(self):
        assert LoadGeneratorConfig(throttle_enabled=False).throttle_delay_ms(0.99) == 0.0

    @pytest.mark.parametrize(
        "field,value",
        [("concurrency", 0), ("batch_size", 0), ("benchmark_duration", 0), ("request_timeout", -1)],
    )
    def test_bounds(self, field, value):
        with pytest.raises(ValidationError):
            LoadGeneratorConfig(**{field: value})


class TestOrchestratorConfig:
    def test_backoff_accepts_any_case(self):
        assert OrchestratorConfig(retry_backoff="EXPONENTIAL").retry_backoff == RetryBackoff.EXPONENTIAL

    def test_error_rate_bounds(self):
        with pytest.raises(ValidationError):
            OrchestratorConfig(max_error_rate_percent=101)

    def test_at_least_one_attempt(self):
        with pytest.raises(ValidationError):
            OrchestratorConfig(max_retries=0)


def test_http_method_enum_str():
    assert str(HttpMethod.POST) == "POST"
