# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import asyncio
import logging
from pathlib import Path

from rich.console import Console

from fwbench.common.config import BenchmarkConfig
from fwbench.exporters import (
    ComparisonMarkdownExporter,
    ConsoleExporter,
    DetailedJsonExporter,
    ExporterConfig,
    SummaryCsvExporter,
    SummaryJsonExporter,
)
from fwbench.exporters.base_exporter import BaseExporter
from fwbench.orchestrator import BenchmarkOrchestrator, TargetRunResult

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_RESULTS = 1
EXIT_REPORT_FAILED = 3


def run_benchmark_matrix(config: BenchmarkConfig, console: Console | None = None) -> int:
    """Run every configured target, write the enabled reports and return an exit code.

    Returns:
        0 if at least one target produced results and every report was written,
        1 if no target produced results, 3 if a report could not be written
    """
    logger.info("=" * 80)
    logger.info("Starting framework benchmark")
    logger.info(f"  Targets: {', '.join(t.name for t in config.targets)}")
    logger.info(f"  Duration: {config.loadgen.benchmark_duration}s per target")
    logger.info(f"  Concurrency: {config.loadgen.concurrency}")
    logger.info(f"  Start mode: {'manual' if config.orchestrator.manual_start else 'automatic'}")
    logger.info("=" * 80)

    target_results, report_failures = asyncio.run(
        _run_and_export(config, console or Console())
    )

    successful = [r for r in target_results if r.success]
    failed = [r for r in target_results if not r.success]
    logger.info("=" * 80)
    logger.info(f"Benchmark complete: {len(successful)}/{len(target_results)} targets succeeded")
    if failed:
        logger.warning(f"Failed targets: {', '.join(r.target_name for r in failed)}")
    logger.info("=" * 80)

    if not successful:
        return EXIT_NO_RESULTS
    if report_failures:
        logger.error(f"{report_failures} report(s) could not be written")
        return EXIT_REPORT_FAILED
    return EXIT_OK


async def _run_and_export(
    config: BenchmarkConfig, console: Console
) -> tuple[list[TargetRunResult], int]:
    orchestrator = BenchmarkOrchestrator(config)
    target_results = await orchestrator.execute()

    exporter_config = ExporterConfig(
        results=[r.metrics for r in target_results if r.success],
        target_results=target_results,
        output_dir=config.output.output_dir,
        test_duration_seconds=config.loadgen.benchmark_duration,
        manual_start=config.orchestrator.manual_start,
    )

    if config.output.print_console_report:
        await ConsoleExporter(exporter_config).export(console)

    paths, report_failures = await _export_files(config, exporter_config)
    for path in paths:
        logger.info(f"Report written to: {path}")
    return target_results, report_failures


async def _export_files(
    config: BenchmarkConfig, exporter_config: ExporterConfig
) -> tuple[list[Path], int]:
    """Write every enabled report file.

    A report that fails with an OSError is logged and counted; the others are
    still written.
    """
    output = config.output
    exporters: list[BaseExporter] = []
    if output.save_summary_json:
        exporters.append(SummaryJsonExporter(exporter_config))
    if output.save_csv:
        exporters.append(SummaryCsvExporter(exporter_config))
    if output.save_markdown_report:
        exporters.append(ComparisonMarkdownExporter(exporter_config))
    if output.save_detailed_json:
        exporters.extend(DetailedJsonExporter.for_each_result(exporter_config))

    outcomes = await asyncio.gather(
        *(e.export() for e in exporters), return_exceptions=True
    )
    paths: list[Path] = []
    failures = 0
    for exporter, outcome in zip(exporters, outcomes, strict=True):
        if isinstance(outcome, OSError):
            failures += 1
            logger.error(f"Could not write {exporter.get_file_name()}: {outcome}")
        elif isinstance(outcome, BaseException):
            raise outcome
        else:
            paths.append(outcome)
    return paths, failures
