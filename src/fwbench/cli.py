# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Command line interface: ``fwbench run``, ``fwbench list-targets``, ``fwbench serve-stub``."""

import asyncio
import contextlib
import os
from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from fwbench import __version__
from fwbench.cli_utils import raise_startup_error_and_exit
from fwbench.common.config import (
    BenchmarkConfig,
    LoadGeneratorConfig,
    OrchestratorConfig,
    OutputConfig,
)
from fwbench.common.constants import LOOPBACK_HOST
from fwbench.common.exceptions import ConfigurationError
from fwbench.common.logging import setup_rich_logging

app = App(
    name="fwbench",
    help="Benchmark HTTP web framework implementations side by side.",
    version=__version__,
)


def _load_base_config(config_file: Path | None) -> BenchmarkConfig:
    if config_file is None:
        return BenchmarkConfig()
    return BenchmarkConfig.from_file(config_file)


def _with_overrides(model, overrides: dict):
    """Re-validate a config section with the non-None overrides applied."""
    updates = {k: v for k, v in overrides.items() if v is not None}
    if not updates:
        return model
    return type(model).model_validate({**model.model_dump(), **updates})


def build_run_config(
    targets: list[str] | None = None,
    *,
    config_file: Path | None = None,
    duration: float | None = None,
    concurrency: int | None = None,
    batch_size: int | None = None,
    warmup_requests: int | None = None,
    seed: int | None = None,
    manual_start: bool | None = None,
    max_retries: int | None = None,
    cooldown: float | None = None,
    output_dir: Path | None = None,
    no_reports: bool = False,
) -> BenchmarkConfig:
    """Merge the config file (or the built-in defaults) with command line overrides.

    Raises:
        ConfigurationError: If the file or the merged result is invalid.
    """
    base = _load_base_config(config_file)
    try:
        loadgen: LoadGeneratorConfig = _with_overrides(
            base.loadgen,
            {
                "benchmark_duration": duration,
                "concurrency": concurrency,
                "batch_size": batch_size,
                "warmup_request_count": warmup_requests,
                "random_seed": seed,
            },
        )
        orchestrator: OrchestratorConfig = _with_overrides(
            base.orchestrator,
            {
                "manual_start": manual_start,
                "max_retries": max_retries,
                "cooldown_seconds": cooldown,
            },
        )
        output_overrides = {"output_dir": output_dir}
        if no_reports:
            output_overrides.update(
                save_summary_json=False,
                save_detailed_json=False,
                save_markdown_report=False,
                save_csv=False,
            )
        output: OutputConfig = _with_overrides(base.output, output_overrides)
        config = BenchmarkConfig(
            targets=base.targets,
            endpoints=base.endpoints,
            health_endpoint=base.health_endpoint,
            loadgen=loadgen,
            orchestrator=orchestrator,
            output=output,
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid options:\n{e}") from e

    if targets:
        config = config.select_targets(targets)
    return config


@app.command(name="run")
def run(
    targets: list[str] | None = None,
    *,
    config_file: Annotated[Path | None, Parameter(name=["--config", "-c"])] = None,
    duration: Annotated[float | None, Parameter(name=["--duration", "-d"])] = None,
    concurrency: int | None = None,
    batch_size: int | None = None,
    warmup_requests: int | None = None,
    seed: int | None = None,
    manual_start: bool = False,
    max_retries: int | None = None,
    cooldown: float | None = None,
    output_dir: Annotated[Path | None, Parameter(name=["--output-dir", "-o"])] = None,
    no_reports: bool = False,
    log_level: str = "INFO",
    log_file: Path | None = None,
) -> None:
    """Benchmark the targets one after another and write comparison reports.

    Args:
        targets: Target names to test, in configured order. Defaults to all targets.
        config_file: JSON file with targets, endpoints and settings.
        duration: Seconds of load per target.
        concurrency: Number of concurrent workers.
        batch_size: Requests each worker awaits together.
        warmup_requests: Untimed requests sent before each load window.
        seed: Seed for endpoint selection, for reproducible request mixes.
        manual_start: Targets are already running; do not start or stop them.
        max_retries: Attempts per target, including the first.
        cooldown: Seconds to pause between targets.
        output_dir: Directory for report files.
        no_reports: Skip writing report files.
        log_level: DEBUG, INFO, WARNING or ERROR.
        log_file: Also write the log to this file.
    """
    from fwbench.cli_runner import run_benchmark_matrix

    try:
        setup_rich_logging(log_level, log_file)
    except ValueError as e:
        raise_startup_error_and_exit(str(e), title="Invalid Log Level")

    try:
        config = build_run_config(
            targets,
            config_file=config_file,
            duration=duration,
            concurrency=concurrency,
            batch_size=batch_size,
            warmup_requests=warmup_requests,
            seed=seed,
            manual_start=manual_start or None,
            max_retries=max_retries,
            cooldown=cooldown,
            output_dir=output_dir,
            no_reports=no_reports,
        )
    except ConfigurationError as e:
        raise_startup_error_and_exit(str(e))

    exit_code = run_benchmark_matrix(config)
    if exit_code != 0:
        raise SystemExit(exit_code)


@app.command(name="list-targets")
def list_targets(
    *,
    config_file: Annotated[Path | None, Parameter(name=["--config", "-c"])] = None,
) -> None:
    """Show the configured targets and whether they are available on this machine.

    Args:
        config_file: JSON file with targets, endpoints and settings.
    """
    try:
        config = _load_base_config(config_file)
    except ConfigurationError as e:
        raise_startup_error_and_exit(str(e))

    table = Table(title="Targets")
    for column in ("Name", "Label", "Port", "Command", "Directory", "Available"):
        table.add_column(column)
    for target in config.targets:
        command = " ".join(target.launch_command) if target.launch_command else "(external)"
        table.add_row(
            target.name,
            target.label,
            str(target.port),
            command,
            str(target.working_directory or "-"),
            "[green]yes[/green]" if target.is_available() else "[red]no[/red]",
        )
    Console().print(table)


@app.command(name="serve-stub")
def serve_stub(
    *,
    port: int | None = None,
    host: str = LOOPBACK_HOST,
    log_level: str = "INFO",
) -> None:
    """Run the built-in reference target until interrupted.

    Args:
        port: Port to listen on. Defaults to $PORT, then 3000.
        host: Address to bind.
        log_level: DEBUG, INFO, WARNING or ERROR.
    """
    from fwbench.stub_server import StubTargetServer

    try:
        setup_rich_logging(log_level)
    except ValueError as e:
        raise_startup_error_and_exit(str(e), title="Invalid Log Level")

    if port is None:
        try:
            port = int(os.environ.get("PORT", "3000"))
        except ValueError:
            raise_startup_error_and_exit(
                f"PORT environment variable must be an integer, got '{os.environ['PORT']}'"
            )

    server = StubTargetServer(host=host, port=port)
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(server.serve_forever())


if __name__ == "__main__":
    app()
