# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from typing import NoReturn

from rich.console import Console
from rich.panel import Panel

CONFIG_ERROR_EXIT_CODE = 2


def raise_startup_error_and_exit(
    message: str,
    title: str = "Configuration Error",
    exit_code: int = CONFIG_ERROR_EXIT_CODE,
    console: Console | None = None,
) -> NoReturn:
    """Show a startup error in a red panel on stderr and exit."""
    console = console or Console(stderr=True)
    console.print(Panel(message, title=title, border_style="red", expand=False))
    raise SystemExit(exit_code)
