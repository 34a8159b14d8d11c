# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import io

import pytest
from rich.console import Console

from fwbench.exporters import ConsoleExporter


def capture_console() -> Console:
    return Console(file=io.StringIO(), width=160, color_system=None, force_terminal=False)


class TestConsoleExporter:
    @pytest.mark.asyncio
    async def test_prints_tables(self, exporter_config):
        console = capture_console()
        await ConsoleExporter(exporter_config).export(console)
        output = console.file.getvalue()

        assert "Fast results" in output
        assert "Framework comparison" in output
        assert output.count("🥇") == 3
        assert "50.00K" in output
        assert "Broken failed after 2 attempt(s)" in output

    @pytest.mark.asyncio
    async def test_manual_mode_skips_cold_start_ranking(self, exporter_config):
        exporter_config.manual_start = True
        console = capture_console()
        await ConsoleExporter(exporter_config).export(console)
        assert console.file.getvalue().count("🥇") == 2

    @pytest.mark.asyncio
    async def test_no_results(self, empty_exporter_config):
        console = capture_console()
        await ConsoleExporter(empty_exporter_config).export(console)
        output = console.file.getvalue()
        assert "No target produced a result." in output
        assert "Broken failed after 2 attempt(s)" in output

    @pytest.mark.asyncio
    async def test_client_loop_stalls_are_flagged(self, stalled_exporter_config):
        console = capture_console()
        await ConsoleExporter(stalled_exporter_config).export(console)
        output = console.file.getvalue()
        assert output.count("Client loop stalls") == 1
        assert "4 (worst 37.50ms)" in output
