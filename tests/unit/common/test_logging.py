# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import io
import logging

import pytest
from rich.console import Console
from rich.logging import RichHandler

from fwbench.common.logging import setup_rich_logging
from fwbench.common.mixins import FwbenchLoggerMixin


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in saved_handlers:
        root.addHandler(handler)
    root.setLevel(saved_level)


class TestSetupRichLogging:
    def test_installs_rich_handler(self, restore_root_logger):
        setup_rich_logging("debug", console=Console(file=io.StringIO()))
        root = restore_root_logger
        assert root.level == logging.DEBUG
        assert [type(h) for h in root.handlers] == [RichHandler]

    def test_repeated_calls_do_not_duplicate_handlers(self, restore_root_logger):
        console = Console(file=io.StringIO())
        setup_rich_logging(logging.INFO, console=console)
        setup_rich_logging(logging.INFO, console=console)
        assert len(restore_root_logger.handlers) == 1

    def test_writes_log_file(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "logs" / "fwbench.log"
        setup_rich_logging("INFO", log_file=log_file, console=Console(file=io.StringIO()))
        logging.getLogger("fwbench.test").info("benchmark started")
        for handler in restore_root_logger.handlers:
            handler.flush()
        assert "benchmark started" in log_file.read_text()

    def test_quiets_third_party_loggers(self, restore_root_logger):
        setup_rich_logging("DEBUG", console=Console(file=io.StringIO()))
        assert logging.getLogger("aiohttp.client").level == logging.WARNING

    def test_unknown_level(self, restore_root_logger):
        with pytest.raises(ValueError, match="Unknown log level 'LOUD'"):
            setup_rich_logging("LOUD")


class TestLoggerMixin:
    class Component(FwbenchLoggerMixin):
        pass

    def test_logger_named_after_module(self):
        assert self.Component().logger.name == __name__

    def test_explicit_logger_name(self, caplog):
        component = self.Component(logger_name="fwbench.custom")
        with caplog.at_level(logging.DEBUG, logger="fwbench.custom"):
            component.debug("hello")
            assert component.is_debug_enabled
        assert caplog.records[0].name == "fwbench.custom"
        assert caplog.records[0].message == "hello"
