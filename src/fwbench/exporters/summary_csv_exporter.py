# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""CSV summary of a full benchmark run."""

import csv
import io

from fwbench.exporters.base_exporter import BaseExporter

_METRIC_COLUMNS = (
    "cold_start_time_ms",
    "total_requests",
    "total_successful_requests",
    "error_requests",
    "requests_per_second",
    "average_latency_ms",
    "min_latency_ms",
    "max_latency_ms",
    "p50_latency_ms",
    "p95_latency_ms",
    "p99_latency_ms",
    "actual_test_duration_ms",
    "error_rate_percent",
    "client_loop_stalls",
    "client_loop_max_stall_ms",
)


class SummaryCsvExporter(BaseExporter):
    """Exports one row per successful target, then a section listing failures.

    Format:
    1. Metrics table (one row per target, metrics as columns)
    2. Blank line, then the failed targets section
    """

    def get_file_name(self) -> str:
        return "batch-test-summary.csv"

    def _generate_content(self) -> str:
        buf = io.StringIO()
        writer = csv.writer(buf)

        writer.writerow(["target", "display_label", *_METRIC_COLUMNS, "rss_mb"])
        for m in self._results:
            row = [m.target_name, m.display_label]
            row.extend(self._format_number(getattr(m, column)) for column in _METRIC_COLUMNS)
            row.append(
                self._format_number(m.memory_snapshot.rss_mb if m.memory_snapshot else None)
            )
            writer.writerow(row)

        writer.writerow([])
        writer.writerow(["Failed Targets"])
        failed = self._config.failed_targets
        if failed:
            writer.writerow(["target", "attempts", "skipped", "error"])
            for r in failed:
                writer.writerow([r.target_name, r.attempts, r.skipped, r.error or ""])
        else:
            writer.writerow(["None"])

        return buf.getvalue()

    def _format_number(self, value, decimals: int = 2) -> str:
        if value is None:
            return ""
        if isinstance(value, float):
            return f"{value:.{decimals}f}"
        return str(value)
