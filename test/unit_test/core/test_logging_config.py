"""Unit tests for the logging configuration module."""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from campaign_portal.core import logging_config
from campaign_portal.core.logging_config import (
    DETAILED_FORMAT,
    JSON_FORMAT,
    MODULE_LOG_LEVELS,
    SIMPLE_FORMAT,
    get_logger,
    setup_logging,
)


@pytest.fixture(autouse=True)
def _restore_root_handlers():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    @pytest.mark.parametrize(
        "log_level,expected_level",
        [("DEBUG", logging.DEBUG), ("warning", logging.WARNING), ("ERROR", logging.ERROR)],
    )
    def test_console_handler_level(self, log_level, expected_level):
        setup_logging(log_level=log_level, enable_file=False)
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert handlers[0].level == expected_level

    @pytest.mark.parametrize(
        "log_format,expected",
        [("simple", SIMPLE_FORMAT), ("detailed", DETAILED_FORMAT), ("json", JSON_FORMAT), ("unknown", DETAILED_FORMAT)],
    )
    def test_formats(self, log_format, expected):
        setup_logging(log_format=log_format, enable_file=False)
        assert logging.getLogger().handlers[0].formatter._fmt == expected

    def test_repeated_setup_does_not_duplicate_handlers(self):
        setup_logging(enable_file=False)
        setup_logging(enable_file=False)
        assert len(logging.getLogger().handlers) == 1

    def test_module_levels_applied(self):
        setup_logging(enable_file=False)
        for name, level in MODULE_LOG_LEVELS.items():
            assert logging.getLogger(name).level == logging.getLevelName(level)

    def test_file_logging(self, tmp_path: Path):
        with patch.object(logging_config, "LOG_FILE_DIR", str(tmp_path / "logs")):
            setup_logging(enable_file=True)
        handlers = logging.getLogger().handlers
        file_handlers = [h for h in handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1
        assert Path(file_handlers[0].baseFilename) == tmp_path / "logs" / "campaign_portal.log"
        for handler in file_handlers:
            handler.close()


def test_get_logger_returns_named_logger():
    logger = get_logger("campaign_portal.server.api.v1.news")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "campaign_portal.server.api.v1.news"
