# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import orjson

from fwbench.common.models import PerformanceMetrics
from fwbench.exporters.base_exporter import BaseExporter
from fwbench.exporters.exporter_config import ExporterConfig
from fwbench.exporters.formatting import format_rps, format_time


class DetailedJsonExporter(BaseExporter):
    """Writes <target>-detailed-results.json for a single target."""

    def __init__(self, config: ExporterConfig, metrics: PerformanceMetrics, **kwargs) -> None:
        super().__init__(config, **kwargs)
        self._metrics = metrics

    @classmethod
    def for_each_result(cls, config: ExporterConfig) -> list["DetailedJsonExporter"]:
        return [cls(config, m) for m in config.results]

    def get_file_name(self) -> str:
        return f"{self._metrics.target_name}-detailed-results.json"

    def _generate_content(self) -> str:
        m = self._metrics
        duration = self._config.test_duration_seconds
        output = {
            "target": m.target_name,
            "display_label": m.display_label,
            "timestamp": self._config.run_timestamp.isoformat(),
            "test_duration_seconds": duration,
            "highlights": {
                "cold_start": format_time(m.cold_start_time_ms),
                "requests_per_second": f"{format_rps(m.requests_per_second)} rps",
                "average_latency": format_time(m.average_latency_ms),
                "total_requests": f"{m.total_requests} req / {duration:g}s",
            },
            "metrics": m.model_dump(mode="json"),
        }
        return orjson.dumps(output, option=orjson.OPT_INDENT_2).decode("utf-8")
