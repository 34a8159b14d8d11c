# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Third party loggers that are chatty at DEBUG and add nothing to a benchmark log.
_QUIET_LOGGERS = ("asyncio", "aiohttp.access", "aiohttp.client")


def setup_rich_logging(
    level: str | int = logging.INFO,
    log_file: Path | None = None,
    console: Console | None = None,
) -> None:
    """Route all log records to a rich console handler and an optional file.

    Replaces any handlers previously installed on the root logger, so calling
    it twice (for example once per CLI invocation in tests) does not duplicate
    output.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(
                f"Unknown log level '{level}'. Use one of DEBUG, INFO, WARNING, ERROR."
            )
        level = resolved

    handlers: list[logging.Handler] = [
        RichHandler(
            console=console or Console(stderr=True),
            rich_tracebacks=True,
            show_path=False,
            markup=False,
            log_time_format="[%X]",
        )
    ]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        handlers.append(file_handler)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
