"""
Structured JSON logging utilities.

The storage layer logs and continues on every recoverable failure, so the
log stream is the only record of a failed write or a discarded corrupt blob.
These helpers keep those records machine-readable.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from .exceptions import FileStoreError

_STANDARD_ATTRS = {
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "stack_info", "exc_info", "exc_text", "thread", "threadName",
    "taskName", "message",
}
_ERROR_FIELDS = ("name", "path", "operation", "cause", "segment", "expected")


def storage_error_fields(error: BaseException | None) -> dict[str, Any]:
    """Flatten a FileStoreError into log fields.

    Returns ``error_type`` plus whichever of the known detail keys the error
    carries. Other exceptions give {}.
    """
    if not isinstance(error, FileStoreError):
        return {}
    fields: dict[str, Any] = {"error_type": type(error).__name__}
    for key in _ERROR_FIELDS:
        if key in error.details:
            fields[key] = error.details[key]
    return fields


class StructuredJsonFormatter(logging.Formatter):
    """
    JSON formatter emitting one object per line.

    Fields:
    - timestamp: ISO 8601 format in UTC
    - level: Log level (INFO, WARNING, ERROR, etc.)
    - logger: Logger name
    - message: Log message
    - error_type, operation, path, ...: from an attached FileStoreError
    - Additional context fields from the extra dict (blob, path, ...)
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_obj: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)
            log_obj.update(storage_error_fields(record.exc_info[1]))

        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS and not key.startswith("_"):
                try:
                    json.dumps(value)
                    log_obj[key] = value
                except (TypeError, ValueError):
                    log_obj[key] = str(value)

        return json.dumps(log_obj, default=str)


def configure_structured_logging(
    level: int = logging.INFO,
    logger_name: str | None = "refsync_storage",
    stream: Any = None,
) -> logging.Logger:
    """
    Configure structured JSON logging.

    Args:
        level: Logging level (default: INFO)
        logger_name: Logger to configure (default: the package logger;
            pass None for the root logger)
        stream: Output stream (default: stdout)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(logger_name)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(StructuredJsonFormatter())

    logger.addHandler(handler)
    logger.setLevel(level)

    return logger


def get_storage_logger(name: str) -> logging.Logger:
    """
    Get a logger for storage components with consistent naming.

    Args:
        name: Component name (e.g., 'file_store', 'state')

    Returns:
        Logger instance with name 'refsync_storage.{name}'
    """
    return logging.getLogger(f"refsync_storage.{name}")


class StorageLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that adds storage context to all log messages.

    Used to tag records with the blob name or path being handled.
    """

    def process(self, msg: str, kwargs: Any) -> tuple[str, Any]:
        """Add extra context to log record."""
        extra = dict(self.extra or {})
        extra.update(kwargs.get("extra", {}))
        kwargs["extra"] = extra
        return msg, kwargs
