# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Report exporters for benchmark results."""

from fwbench.exporters.base_exporter import BaseExporter
from fwbench.exporters.comparison_markdown_exporter import ComparisonMarkdownExporter
from fwbench.exporters.console_exporter import ConsoleExporter
from fwbench.exporters.detailed_json_exporter import DetailedJsonExporter
from fwbench.exporters.exporter_config import ExporterConfig
from fwbench.exporters.ranking import (
    OptimizationDirection,
    RankingObjective,
    identify_pareto_optimal,
    rank_results,
)
from fwbench.exporters.summary_csv_exporter import SummaryCsvExporter
from fwbench.exporters.summary_json_exporter import SummaryJsonExporter

__all__ = [
    "BaseExporter",
    "ComparisonMarkdownExporter",
    "ConsoleExporter",
    "DetailedJsonExporter",
    "ExporterConfig",
    "OptimizationDirection",
    "RankingObjective",
    "SummaryCsvExporter",
    "SummaryJsonExporter",
    "identify_pareto_optimal",
    "rank_results",
]
