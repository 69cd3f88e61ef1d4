"""Structured logging configuration for the Intune tuning core.

Provides key=value formatted logs carrying tuning context (key, tonic
frequency, degree) when callers pass it through ``extra``.
"""

import logging
import sys
from typing import Any

from tuning.config import get_config

# Fields callers may attach through the ``extra`` parameter
CONTEXT_FIELDS = ("key", "tonic_hz", "degree", "ratio", "note", "latency_ms")


class StructuredFormatter(logging.Formatter):
    """Key=value log formatter with tuning context."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as key=value pairs.

        Args:
            record: Log record to format

        Returns:
            Formatted log string
        """
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        pairs = [f"{k}={v}" for k, v in log_data.items()]
        return " ".join(pairs)


def setup_logging() -> None:
    """Configure structured logging for the application.

    Sets up handlers, formatters, and log levels based on configuration.
    """
    config = get_config()

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, config.log_level))
    console_handler.setFormatter(StructuredFormatter(datefmt="%Y-%m-%dT%H:%M:%S"))
    root_logger.addHandler(console_handler)

    logging.getLogger("tuning").setLevel(getattr(logging, config.log_level))


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the given module name.

    Args:
        name: Module name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
