"""Structured logging for hashcalc.

This module provides helper functions that record log entries with
structured context (operation name, duration, error code) attached as
record extras, and the logger setup used by the CLI.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

from hashcalc.shared.errors import ErrorContext, HashCalcError

ROOT_LOGGER_NAME = "hashcalc"


class StructuredFormatter(logging.Formatter):
    """Formatter that renders log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the record as JSON.

        Args:
            record: Log record

        Returns:
            JSON string for the record
        """
        log_entry = {
            "timestamp": datetime.fromtimestamp(
                record.created,
                tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in ("error_code", "context", "operation", "duration_ms", "result_info"):
            if hasattr(record, key):
                log_entry[key] = getattr(record, key)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def _create_rich_console() -> Console:
    """Create the stderr Rich console used by the log handler.

    Logs go to stderr so that digests printed on stdout stay pipeable.
    """
    custom_theme = Theme(
        {
            "logging.level.debug": "cyan",
            "logging.level.info": "green",
            "logging.level.warning": "yellow",
            "logging.level.error": "red bold",
            "logging.level.critical": "red bold reverse",
            "log.time": "dim cyan",
            "log.message": "white",
            "log.path": "dim blue",
        }
    )
    return Console(theme=custom_theme, stderr=True)


def setup_structured_logger(
    name: str = ROOT_LOGGER_NAME,
    level: str = "WARNING",
    log_file: str | None = None,
    *,
    use_rich_console: bool = True,
) -> logging.Logger:
    """Configure the application logger.

    Args:
        name: Logger name (default: "hashcalc")
        level: Log level name (default: "WARNING")
        log_file: Optional path of a JSON log file
        use_rich_console: Use Rich for console output instead of JSON lines

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers when the CLI is invoked repeatedly in-process
    if logger.handlers:
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

    log_level = getattr(logging, level.upper())
    logger.setLevel(log_level)

    if use_rich_console:
        handler: logging.Handler = RichHandler(
            console=_create_rich_console(),
            show_time=True,
            show_level=True,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
            tracebacks_show_locals=False,
            log_time_format="[%H:%M:%S]",
        )
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(StructuredFormatter())
    handler.setLevel(log_level)
    logger.addHandler(handler)

    # File output is always JSON
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(StructuredFormatter())
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger


def _context_to_dict(context: dict[str, Any] | ErrorContext | None) -> dict[str, Any]:
    if context is None:
        return {}
    if isinstance(context, ErrorContext):
        return context.safe_dict()
    return dict(context)


def log_operation_error(
    logger: logging.Logger,
    error: HashCalcError,
    operation: str | None = None,
    context: dict[str, Any] | ErrorContext | None = None,
    *,
    level: int = logging.ERROR,
) -> None:
    """Log a HashCalcError with its structured context.

    Args:
        logger: Logger instance
        error: The error to record
        operation: Operation name, defaults to the error context's operation
        context: Extra context merged over the error's own context
        level: Log level, per-file errors are usually logged at WARNING
    """
    context_dict: dict[str, Any] = error.context.safe_dict()
    context_dict.update(_context_to_dict(context))

    logger.log(
        level,
        error.message,
        extra={
            "error_code": error.code.value,
            "context": context_dict,
            "operation": operation or error.context.operation,
        },
        exc_info=error.original_error is not None and level >= logging.ERROR,
    )


def log_operation_success(
    logger: logging.Logger,
    operation: str,
    duration_ms: float,
    result_info: dict[str, Any] | None = None,
    context: dict[str, Any] | ErrorContext | None = None,
) -> None:
    """Log a successfully completed operation at DEBUG level.

    Args:
        logger: Logger instance
        operation: Operation name
        duration_ms: Duration in milliseconds
        result_info: Optional result summary
        context: Optional context information
    """
    logger.debug(
        "Operation '%s' completed successfully",
        operation,
        extra={
            "operation": operation,
            "duration_ms": duration_ms,
            "result_info": result_info or {},
            "context": _context_to_dict(context),
        },
    )


def log_operation_start(
    logger: logging.Logger,
    operation: str,
    context: dict[str, Any] | None = None,
) -> None:
    """Log the start of an operation at DEBUG level."""
    logger.debug(
        "Starting operation '%s'",
        operation,
        extra={
            "operation": operation,
            "context": context or {},
        },
    )
