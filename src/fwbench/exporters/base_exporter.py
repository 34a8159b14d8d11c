# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from abc import ABC, abstractmethod
from pathlib import Path

from fwbench.common.mixins import FwbenchLoggerMixin
from fwbench.exporters.exporter_config import ExporterConfig


class BaseExporter(FwbenchLoggerMixin, ABC):
    """Writes one report file into the configured output directory.

    Subclasses provide the file name and the content; export() handles the
    directory creation and the write.
    """

    def __init__(self, config: ExporterConfig, **kwargs) -> None:
        super().__init__(**kwargs)
        self._config = config
        self._results = config.results

    @abstractmethod
    def get_file_name(self) -> str:
        """Name of the file written inside output_dir."""

    @abstractmethod
    def _generate_content(self) -> str:
        """Full text content of the report."""

    async def export(self) -> Path:
        """Write the report and return its path."""
        output_dir = self._config.output_dir
        output_dir.mkdir(parents=True, exist_ok=True)
        path = output_dir / self.get_file_name()
        path.write_text(self._generate_content(), encoding="utf-8")
        self.info(f"Saved {path}")
        return path
