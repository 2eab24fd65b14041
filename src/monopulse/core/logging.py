"""Structured logging for monopulse tapering.

Records carry an optional ``extra_data`` mapping so that tapering runs can be
written as JSON lines next to the human-readable console output.
"""

import json
import logging
import sys
import time
from pathlib import Path
from typing import Any

PACKAGE_LOGGER = "monopulse"


class JSONFormatter(logging.Formatter):
    """Format log records as JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON."""
        payload = {
            "timestamp": time.time(),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "extra_data"):
            payload.update(record.extra_data)

        return json.dumps(payload, default=str)


def setup_logging(log_path: Path | None = None, level: int = logging.INFO) -> logging.Logger:
    """Attach console (and optionally JSON lines) handlers to the package logger.

    Library code never calls this; applications embedding the tapering do.

    Args:
        log_path: Optional path for JSON lines log file
        level: Logging level

    Returns:
        The configured package logger
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    package_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        )
    )
    package_logger.addHandler(console_handler)

    if log_path:
        log_path = Path(log_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level)
        file_handler.setFormatter(JSONFormatter())
        package_logger.addHandler(file_handler)

    return package_logger


def get_logger(name: str) -> "StructuredLogger":
    """Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        StructuredLogger instance
    """
    return StructuredLogger(logging.getLogger(name))


class StructuredLogger:
    """Wrapper for adding structured data to log messages."""

    def __init__(self, logger: logging.Logger):
        """Initialize with a standard logger."""
        self.logger = logger

    def _log(self, level: int, msg: str, data: dict[str, Any] | None = None) -> None:
        """Log with structured data."""
        extra = {"extra_data": data} if data else {}
        self.logger.log(level, msg, extra=extra)

    def debug(self, msg: str, data: dict[str, Any] | None = None) -> None:
        """Debug level log."""
        self._log(logging.DEBUG, msg, data)

    def info(self, msg: str, data: dict[str, Any] | None = None) -> None:
        """Info level log."""
        self._log(logging.INFO, msg, data)

    def warning(self, msg: str, data: dict[str, Any] | None = None) -> None:
        """Warning level log."""
        self._log(logging.WARNING, msg, data)

    def error(self, msg: str, data: dict[str, Any] | None = None) -> None:
        """Error level log."""
        self._log(logging.ERROR, msg, data)


__all__ = [
    "PACKAGE_LOGGER",
    "setup_logging",
    "get_logger",
    "StructuredLogger",
]
