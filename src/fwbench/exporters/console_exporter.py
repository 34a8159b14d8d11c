# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.panel import Panel
from rich.table import Table

from fwbench.common.mixins import FwbenchLoggerMixin
from fwbench.exporters.exporter_config import ExporterConfig
from fwbench.exporters.formatting import format_memory, format_rps, format_time, medal
from fwbench.exporters.ranking import OptimizationDirection, rank_results, rankings_for

if TYPE_CHECKING:
    from rich.console import Console
    from fwbench.common.models import PerformanceMetrics


class ConsoleExporter(FwbenchLoggerMixin):
    """Prints per-target result tables and a comparison of all targets."""

    def __init__(self, exporter_config: ExporterConfig, **kwargs) -> None:
        super().__init__(**kwargs)
        self.exporter_config = exporter_config

    async def export(self, console: Console) -> None:
        results = self.exporter_config.results
        if not results:
            console.print(Panel("No target produced a result.", style="red"))
            self._print_failures(console)
            return

        for metrics in results:
            console.print(self._target_table(metrics))
        console.print(self._comparison_table(results))
        for key, objective in rankings_for(self.exporter_config.manual_start).items():
            console.print(self._ranking_table(results, key, objective))
        self._print_failures(console)

    def _target_table(self, m: PerformanceMetrics) -> Table:
        table = Table(title=f"{m.display_label} results", show_header=False)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="green", justify="right")
        table.add_row("Cold start", format_time(m.cold_start_time_ms))
        table.add_row("Requests per second", format_rps(m.requests_per_second))
        table.add_row(
            "Requests",
            f"{m.total_requests:,} ({m.total_successful_requests:,} ok, {m.error_requests:,} errors)",
        )
        table.add_row("Average latency", format_time(m.average_latency_ms))
        table.add_row(
            "Min / max latency",
            f"{format_time(m.min_latency_ms)} / {format_time(m.max_latency_ms)}",
        )
        percentiles = (m.p50_latency_ms, m.p95_latency_ms, m.p99_latency_ms)
        table.add_row("P50 / P95 / P99", " / ".join(format_time(v) for v in percentiles))
        table.add_row("Error rate", f"{m.error_rate_percent:.2f}%")
        if m.memory_snapshot is not None:
            table.add_row("Memory (RSS)", format_memory(m.memory_snapshot.rss_mb))
        if m.client_loop_stalls:
            table.add_row(
                "[yellow]Client loop stalls[/yellow]",
                f"[yellow]{m.client_loop_stalls} (worst {format_time(m.client_loop_max_stall_ms)})[/yellow]",
            )
        return table

    def _comparison_table(self, results: list[PerformanceMetrics]) -> Table:
        table = Table(title="Framework comparison")
        table.add_column("Target", style="cyan")
        for column in ("Cold start", "RPS", "Avg", "P95", "P99", "Errors"):
            table.add_column(column, justify="right")
        for m in results:
            table.add_row(
                m.display_label,
                format_time(m.cold_start_time_ms),
                format_rps(m.requests_per_second),
                format_time(m.average_latency_ms),
                format_time(m.p95_latency_ms),
                format_time(m.p99_latency_ms),
                f"{m.error_rate_percent:.2f}%",
            )
        return table

    def _ranking_table(self, results, key, objective) -> Table:
        better = "higher" if objective.direction == OptimizationDirection.MAXIMIZE else "lower"
        table = Table(title=f"{objective.title} ranking ({better} is better)")
        table.add_column("Rank")
        table.add_column("Target", style="cyan")
        table.add_column(objective.title, justify="right")
        for i, m in enumerate(rank_results(results, objective)):
            value = objective.value_of(m)
            shown = format_rps(value) if key == "by_rps" else format_time(value)
            table.add_row(medal(i), m.display_label, shown)
        return table

    def _print_failures(self, console: Console) -> None:
        for r in self.exporter_config.failed_targets:
            status = "skipped" if r.skipped else f"failed after {r.attempts} attempt(s)"
            console.print(f"[red]{r.display_label} {status}:[/red] {r.error}")
