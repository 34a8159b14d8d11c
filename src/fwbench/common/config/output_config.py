# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from pathlib import Path
from typing import Annotated

from pydantic import Field

from fwbench.common.config.base_config import BaseConfig
from fwbench.common.config.config_defaults import OutputDefaults


class OutputConfig(BaseConfig):
    """Where reports are written and which ones are produced."""

    output_dir: Annotated[
        Path,
        Field(description="Directory for report files. Created if missing."),
    ] = OutputDefaults.OUTPUT_DIR

    save_summary_json: Annotated[
        bool, Field(description="Write batch-test-summary.json.")
    ] = OutputDefaults.SAVE_SUMMARY_JSON

    save_detailed_json: Annotated[
        bool, Field(description="Write <target>-detailed-results.json per target.")
    ] = OutputDefaults.SAVE_DETAILED_JSON

    save_markdown_report: Annotated[
        bool, Field(description="Write comparison-report.md.")
    ] = OutputDefaults.SAVE_MARKDOWN_REPORT

    save_csv: Annotated[
        bool, Field(description="Write batch-test-summary.csv.")
    ] = OutputDefaults.SAVE_CSV

    print_console_report: Annotated[
        bool, Field(description="Print result tables to the terminal.")
    ] = OutputDefaults.PRINT_CONSOLE_REPORT
