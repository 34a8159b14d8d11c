# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Markdown comparison report with ranking tables."""

from fwbench.exporters.base_exporter import BaseExporter
from fwbench.exporters.formatting import format_memory, medal
from fwbench.exporters.ranking import (
    OptimizationDirection,
    RankingObjective,
    identify_pareto_optimal,
    rank_results,
    rankings_for,
)


class ComparisonMarkdownExporter(BaseExporter):
    """Writes comparison-report.md: rankings, a detailed table and a short summary."""

    def get_file_name(self) -> str:
        return "comparison-report.md"

    def _generate_content(self) -> str:
        cfg = self._config
        lines = [
            "# Framework Performance Comparison",
            "",
            f"**Test time**: {cfg.run_timestamp.isoformat()}",
            f"**Test duration**: {cfg.test_duration_seconds:g} s per target",
            f"**Targets tested**: {len(self._results)}",
            f"**Start mode**: {'manual' if cfg.manual_start else 'automatic'}",
            "",
        ]

        if not self._results:
            lines.append("No target produced a result.")
            lines.extend(self._failures_section())
            return "\n".join(lines) + "\n"

        objectives = list(rankings_for(cfg.manual_start).values())
        for objective in objectives:
            lines.extend(self._ranking_section(objective))

        lines.extend(self._details_section())
        lines.extend(self._summary_section(objectives))
        lines.extend(self._failures_section())
        return "\n".join(lines) + "\n"

    def _ranking_section(self, objective: RankingObjective) -> list[str]:
        hint = (
            " (higher is better)"
            if objective.direction == OptimizationDirection.MAXIMIZE
            else " (lower is better)"
        )
        lines = [
            f"## {objective.title}{hint}",
            "",
            f"| Rank | Target | {objective.title} |",
            "|------|--------|------|",
        ]
        for i, m in enumerate(rank_results(self._results, objective)):
            value = f"{objective.value_of(m):.2f}"
            if objective.unit:
                value = f"{value} {objective.unit}"
            lines.append(f"| {medal(i)} | {m.display_label} | {value} |")
        lines.append("")
        return lines

    def _details_section(self) -> list[str]:
        lines = [
            "## Detailed Results",
            "",
            "| Target | Cold start | Requests | RPS | Avg latency | P50 | P95 | P99 | Error rate | Memory (RSS) |",
            "|--------|------------|----------|-----|-------------|-----|-----|-----|------------|--------------|",
        ]
        for m in self._results:
            rss = m.memory_snapshot.rss_mb if m.memory_snapshot else None
            lines.append(
                f"| {m.display_label} | {m.cold_start_time_ms:.2f}ms | {m.total_requests} "
                f"| {m.requests_per_second:.2f} | {m.average_latency_ms:.2f}ms "
                f"| {m.p50_latency_ms:.2f}ms | {m.p95_latency_ms:.2f}ms "
                f"| {m.p99_latency_ms:.2f}ms | {m.error_rate_percent:.2f}% "
                f"| {format_memory(rss)} |"
            )
        lines.append("")
        return lines

    def _summary_section(self, objectives: list[RankingObjective]) -> list[str]:
        lines = ["## Summary", ""]
        for objective in objectives:
            best = rank_results(self._results, objective)[0]
            adjective = "Highest" if objective.direction == OptimizationDirection.MAXIMIZE else "Lowest"
            value = f"{objective.value_of(best):.2f}"
            if objective.unit:
                value = f"{value} {objective.unit}"
            lines.append(
                f"- **{adjective} {objective.title.lower()}**: {value} ({best.display_label})"
            )
        labels = {m.target_name: m.display_label for m in self._results}
        pareto = ", ".join(labels[name] for name in identify_pareto_optimal(self._results))
        lines.append(f"- **Best RPS/latency trade-off**: {pareto}")
        for m in self._results:
            if m.client_loop_stalls:
                lines.append(
                    f"- **Client stalled during {m.display_label}**: event loop fell behind in "
                    f"{m.client_loop_stalls} interval(s), worst {m.client_loop_max_stall_ms:.2f}ms. "
                    "Its latencies include client overhead."
                )
        lines.append("")
        return lines

    def _failures_section(self) -> list[str]:
        failed = self._config.failed_targets
        if not failed:
            return []
        lines = ["## Failed Targets", ""]
        for r in failed:
            status = "skipped" if r.skipped else f"failed after {r.attempts} attempt(s)"
            lines.append(f"- **{r.display_label}**: {status}: {r.error}")
        lines.append("")
        return lines
