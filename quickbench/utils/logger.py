"""Centralized logging for quickbench.

Logging must be configured before use. Library code (the harness) checks
``Logger.is_configured()`` first so it stays silent when embedded.

Usage:
    from quickbench.utils.logger import Logger

    # Configure once at startup
    Logger.configure(level="INFO", output="stderr")

    # Get a logger anywhere in the codebase
    log = Logger.get("harness.runner")
    log.info("Benchmarking group ListBuilding")

    # Or only log when someone asked for it
    Logger.debug_if_configured("harness.registry", "Loaded 3 groups")
"""

import logging
import sys
from enum import Enum
from typing import TextIO


class LogLevel(Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_logging_level(self) -> int:
        """Convert to Python logging level."""
        level: int = getattr(logging, self.value)
        return level


class LoggerNotConfiguredError(Exception):
    """Raised when trying to use Logger before calling Logger.configure()."""

    def __init__(self) -> None:
        super().__init__(
            "Logger not configured. Call Logger.configure() at application startup."
        )


class Logger:
    """Centralized logging for quickbench.

    Example:
        >>> Logger.configure(level="DEBUG", output="stderr")
        >>> log = Logger.get("harness.runner")
        >>> log.debug("Pass 1 of 3")
    """

    _configured: bool = False
    _root_name: str = "quickbench"

    @classmethod
    def configure(
        cls,
        level: str | LogLevel = "WARNING",
        output: str | TextIO | None = None,
        timestamps: bool = True,
    ) -> None:
        """Configure the logger. Must be called before any logging.

        Args:
            level: Log level name or a LogLevel value.
            output: None or "stderr" for sys.stderr (stdout carries results),
                or any file-like object.
            timestamps: Include timestamps in messages.
        """
        if isinstance(level, str):
            level = LogLevel(level.upper())

        if output is None or output == "stderr":
            stream: TextIO = sys.stderr
        elif hasattr(output, "write"):
            stream = output
        else:
            raise ValueError(f"Invalid output: {output!r}")

        logger = logging.getLogger(cls._root_name)
        logger.setLevel(level.to_logging_level())

        for existing_handler in logger.handlers[:]:
            logger.removeHandler(existing_handler)
            existing_handler.close()

        new_handler = logging.StreamHandler(stream)
        new_handler.setLevel(level.to_logging_level())

        fields = ["%(asctime)s"] if timestamps else []
        fields += ["%(levelname)s", "[%(name)s]", "%(message)s"]
        new_handler.setFormatter(logging.Formatter(" ".join(fields)))
        logger.addHandler(new_handler)
        logger.propagate = False

        cls._configured = True

    @classmethod
    def get(cls, name: str | None = None) -> logging.Logger:
        """Get a logger instance.

        Args:
            name: Logger name (appended to "quickbench."). If None, returns
                the root quickbench logger.

        Raises:
            LoggerNotConfiguredError: If configure() hasn't been called.
        """
        if not cls._configured:
            raise LoggerNotConfiguredError()

        if name:
            return logging.getLogger(f"{cls._root_name}.{name}")
        return logging.getLogger(cls._root_name)

    @classmethod
    def set_level(cls, level: str | LogLevel) -> None:
        """Change log level without reconfiguring.

        Raises:
            LoggerNotConfiguredError: If configure() hasn't been called.
        """
        if not cls._configured:
            raise LoggerNotConfiguredError()

        if isinstance(level, str):
            level = LogLevel(level.upper())

        logger = logging.getLogger(cls._root_name)
        logger.setLevel(level.to_logging_level())
        for handler in logger.handlers:
            handler.setLevel(level.to_logging_level())

    @classmethod
    def is_configured(cls) -> bool:
        """Check if logger has been configured."""
        return cls._configured

    # -------------------------------------------------------------------------
    # Optional logging for library code
    # -------------------------------------------------------------------------

    @classmethod
    def debug_if_configured(cls, name: str, message: str) -> None:
        """Log a debug message, or do nothing if logging is not set up."""
        if cls._configured:
            cls.get(name).debug(message)

    @classmethod
    def warning_if_configured(cls, name: str, message: str) -> None:
        """Log a warning, or do nothing if logging is not set up."""
        if cls._configured:
            cls.get(name).warning(message)
