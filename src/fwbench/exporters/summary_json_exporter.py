# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""JSON summary of a full benchmark run."""

import orjson

from fwbench.exporters.base_exporter import BaseExporter
from fwbench.exporters.ranking import identify_pareto_optimal, rank_results, rankings_for


class SummaryJsonExporter(BaseExporter):
    """Exports every target's metrics, the rankings and the failures to JSON.

    Output structure:
    {
        "test_info": {...},
        "results": [...],
        "rankings": {"by_rps": [...], "by_latency": [...], "by_cold_start": [...]},
        "pareto_optimal": [...],
        "failed_targets": [...]
    }
    """

    def get_file_name(self) -> str:
        return "batch-test-summary.json"

    def _generate_content(self) -> str:
        cfg = self._config
        rankings = {}
        for key, objective in rankings_for(cfg.manual_start).items():
            rankings[key] = [
                {
                    "rank": i + 1,
                    "target": m.target_name,
                    "display_label": m.display_label,
                    objective.metric_key: objective.value_of(m),
                }
                for i, m in enumerate(rank_results(self._results, objective))
            ]

        output = {
            "test_info": {
                "timestamp": cfg.run_timestamp.isoformat(),
                "test_duration_seconds": cfg.test_duration_seconds,
                "total_targets": len(cfg.target_results) or len(self._results),
                "successful_targets": len(self._results),
                "output_directory": str(cfg.output_dir),
                "manual_start": cfg.manual_start,
            },
            "results": [m.model_dump(mode="json") for m in self._results],
            "rankings": rankings,
            "pareto_optimal": identify_pareto_optimal(self._results),
            "failed_targets": [
                {
                    "target": r.target_name,
                    "attempts": r.attempts,
                    "skipped": r.skipped,
                    "final_state": str(r.final_state),
                    "error": r.error,
                }
                for r in cfg.failed_targets
            ],
        }
        return orjson.dumps(output, option=orjson.OPT_INDENT_2).decode("utf-8")
