"""Unit tests for logging setup."""

import io
import logging
import os
from unittest.mock import patch

import pytest

from loadcli.shared.logging import LoggingManager

LIBRARY_LOGGERS = ["httpx", "httpcore", "matplotlib", "loadcli.test.library"]


@pytest.fixture
def restore_logging():
    """Restore root handlers and logger levels touched by setup_logging."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    root_level = root_logger.level
    library_levels = {name: logging.getLogger(name).level for name in LIBRARY_LOGGERS}
    yield root_logger
    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            root_logger.removeHandler(handler)
    root_logger.setLevel(root_level)
    for name, level in library_levels.items():
        logging.getLogger(name).setLevel(level)


def installed_handlers(root_logger):
    return [handler for handler in root_logger.handlers if handler.get_name() == LoggingManager.HANDLER_NAME]


class TestLogging:
    """Test logging setup functions."""

    def test_setup_logging_default_level(self, restore_logging):
        """Test setup_logging with default INFO level."""
        level = LoggingManager.setup_logging(stream=io.StringIO())

        assert level == logging.INFO
        assert restore_logging.level == logging.INFO
        assert len(installed_handlers(restore_logging)) == 1

    def test_setup_logging_custom_level(self, restore_logging):
        """Test setup_logging with a lowercase DEBUG level."""
        level = LoggingManager.setup_logging("debug", stream=io.StringIO())

        assert level == logging.DEBUG
        assert restore_logging.level == logging.DEBUG

    def test_setup_logging_invalid_level(self, restore_logging):
        """Test an unknown level falls back to INFO and says so."""
        stream = io.StringIO()

        level = LoggingManager.setup_logging("LOUD", stream=stream)

        assert level == logging.INFO
        assert "Unknown log level 'LOUD', using INFO" in stream.getvalue()

    def test_setup_logging_formats_records(self, restore_logging):
        """Test records reach the stream with logger name and level."""
        stream = io.StringIO()
        LoggingManager.setup_logging("INFO", stream=stream)

        LoggingManager.get_logger("loadcli.benchmark.runner").info("Benchmark completed")

        line = stream.getvalue().strip()
        assert line.endswith("loadcli.benchmark.runner - INFO - Benchmark completed")

    def test_setup_logging_replaces_handler(self, restore_logging):
        """Test repeated setup keeps a single loadcli handler."""
        LoggingManager.setup_logging("INFO", stream=io.StringIO())
        LoggingManager.setup_logging("DEBUG", stream=io.StringIO())

        handlers = installed_handlers(restore_logging)
        assert len(handlers) == 1
        assert handlers[0].level == logging.DEBUG

    def test_setup_logging_quiets_libraries(self, restore_logging):
        """Test noisy libraries are raised to WARNING by default."""
        LoggingManager.setup_logging("DEBUG", stream=io.StringIO())

        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING
        assert logging.getLogger("matplotlib").level == logging.WARNING

    @patch.dict(os.environ, {"LOADCLI_LIBRARY_LOG_LEVELS": '{"httpx": "ERROR"}'})
    def test_library_levels_from_configuration(self, restore_logging):
        """Test library levels are read from the environment configuration."""
        LoggingManager.setup_logging("DEBUG", stream=io.StringIO())

        assert logging.getLogger("httpx").level == logging.ERROR

    def test_explicit_library_levels(self, restore_logging):
        """Test explicit library levels win, unknown names fall back to WARNING."""
        LoggingManager.setup_logging(
            "INFO",
            library_levels={"httpcore": "debug", "loadcli.test.library": "CHATTY"},
            stream=io.StringIO(),
        )

        assert logging.getLogger("httpcore").level == logging.DEBUG
        assert logging.getLogger("loadcli.test.library").level == logging.WARNING

    @pytest.mark.parametrize("name,expected", [
        ("DEBUG", logging.DEBUG),
        ("warning", logging.WARNING),
        ("CRITICAL", logging.CRITICAL),
        ("verbose", logging.INFO),
    ])
    def test_resolve_level(self, name, expected):
        """Test level names map to numeric levels with an INFO fallback."""
        assert LoggingManager.resolve_level(name) == expected

    def test_get_logger(self):
        """Test get_logger returns a named logger instance."""
        logger = LoggingManager.get_logger("test_module")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "test_module"
