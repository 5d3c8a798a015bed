import logging
import sys
from typing import Dict, Optional, TextIO

from loadcli.const import APP_NAME, DEFAULT_LOG_LEVEL, LOG_DATE_FORMAT, LOG_FORMAT
from .config import Config


class LoggingManager:
    """Manager for logging setup and logger retrieval."""

    HANDLER_NAME = APP_NAME

    @staticmethod
    def resolve_level(level: str, default: int = logging.INFO) -> int:
        """Map a level name to its numeric value, or default when the name is unknown."""
        numeric_level = logging.getLevelName(level.upper())
        return numeric_level if isinstance(numeric_level, int) else default

    @classmethod
    def setup_logging(
        cls,
        level: str = DEFAULT_LOG_LEVEL,
        library_levels: Optional[Dict[str, str]] = None,
        stream: Optional[TextIO] = None,
    ) -> int:
        """Setup logging for the command line tool.

        Records go to stderr so the report on stdout stays clean. Calling this
        again replaces the handler installed by the previous call.

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            library_levels: Levels for third-party loggers; read from Config when omitted
            stream: Stream for the handler, stderr by default

        Returns:
            The numeric level applied to the root logger
        """
        numeric_level = cls.resolve_level(level)

        formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

        console_handler = logging.StreamHandler(stream or sys.stderr)
        console_handler.set_name(cls.HANDLER_NAME)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(numeric_level)

        root_logger = logging.getLogger()
        for handler in root_logger.handlers[:]:
            if handler.get_name() == cls.HANDLER_NAME:
                root_logger.removeHandler(handler)
        root_logger.setLevel(numeric_level)
        root_logger.addHandler(console_handler)

        # Set levels for noisy libraries
        if library_levels is None:
            library_levels = Config().library_log_levels
        for logger_name, library_level in library_levels.items():
            logging.getLogger(logger_name).setLevel(cls.resolve_level(library_level, logging.WARNING))

        if not isinstance(logging.getLevelName(level.upper()), int):
            root_logger.warning(f"Unknown log level {level!r}, using {logging.getLevelName(numeric_level)}")
        return numeric_level

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Get a logger instance.

        Args:
            name: Logger name, typically __name__

        Returns:
            Configured logger instance
        """
        return logging.getLogger(name)
