"""Logging helpers for SQLPrep.

Every logger handed out by :func:`get_logger` lives under the ``sqlprep``
namespace so applications can tune the whole library with a single
``logging.getLogger("sqlprep")`` call. :class:`StructuredFormatter` renders
records as JSON lines through the msgspec-backed encoder.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

from sqlprep._serialization import encode_json

if TYPE_CHECKING:
    from logging import LogRecord

__all__ = (
    "ROOT_LOGGER_NAME",
    "StructuredFormatter",
    "configure_logging",
    "get_logger",
    "log_with_context",
)

ROOT_LOGGER_NAME = "sqlprep"
_SIMPLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class StructuredFormatter(logging.Formatter):
    """Render log records as single-line JSON objects."""

    def format(self, record: LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        extra_fields = getattr(record, "extra_fields", None)
        if extra_fields:
            log_entry.update(extra_fields)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return encode_json(log_entry)


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger under the ``sqlprep`` namespace.

    Args:
        name: Logger name. If not provided, returns the root sqlprep logger.

    Returns:
        The logger instance.
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(
    level: str = "INFO",
    format_style: str = "structured",
    log_to_file: str | None = None,
    extra_handlers: list[logging.Handler] | None = None,
) -> logging.Logger:
    """Configure logging for the whole library.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        format_style: ``"structured"`` for JSON lines, ``"simple"`` for plain text.
        log_to_file: Optional file path; file output is always structured.
        extra_handlers: Additional handlers to attach.

    Returns:
        The configured root ``sqlprep`` logger.
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    formatter: logging.Formatter
    if format_style == "structured":
        formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(_SIMPLE_FORMAT)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_to_file:
        file_handler = logging.FileHandler(log_to_file)
        file_handler.setFormatter(StructuredFormatter())
        root_logger.addHandler(file_handler)

    if extra_handlers:
        for handler in extra_handlers:
            root_logger.addHandler(handler)

    root_logger.propagate = False
    root_logger.debug(
        "SQLPrep logging configured",
        extra={"extra_fields": {"level": level, "format_style": format_style, "handlers_count": len(root_logger.handlers)}},
    )
    return root_logger


def log_with_context(logger: logging.Logger, level: int, message: str, **extra_fields: Any) -> None:
    """Log a message with structured extra fields.

    The fields appear as top-level keys when the record is rendered by
    :class:`StructuredFormatter`.
    """
    if not logger.isEnabledFor(level):
        return
    logger.log(level, message, extra={"extra_fields": extra_fields})
