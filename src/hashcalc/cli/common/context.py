"""
CLI Context Management Module

This module provides a centralized system for managing global CLI state
using Pydantic models and ContextVar. It ensures type safety and thread-safe
access to shared configuration across all Typer commands.

The context includes:
- verbose: Verbosity level (int, count-based)
- log_level: Logging level (enum-based, None means "from configuration")
- json_output: JSON output mode (bool)
- config_path: Optional TOML configuration file
"""

from __future__ import annotations

import contextvars
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class LogLevel(str, Enum):
    """Log level enumeration for type safety."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class CliContext(BaseModel):
    """
    CLI context model for managing global state.

    Attributes:
        verbose: Verbosity level (0 = normal, 1 = INFO, 2+ = DEBUG)
        log_level: Explicit logging level, overrides the configuration
        json_output: Whether to output in JSON format
        config_path: TOML configuration file given with --config
    """

    verbose: int = Field(
        default=0,
        ge=0,
        description="Verbosity level (0 = normal, 1+ = verbose)",
    )

    log_level: LogLevel | None = Field(
        default=None,
        description="Logging level",
    )

    json_output: bool = Field(
        default=False,
        description="Whether to output in JSON format",
    )

    config_path: Path | None = Field(
        default=None,
        description="TOML configuration file",
    )

    def is_verbose(self) -> bool:
        """Check if verbose mode is enabled."""
        return self.verbose > 0

    def get_effective_log_level(self, configured: str = LogLevel.WARNING.value) -> str:
        """
        Get the effective log level.

        ``-v`` raises the level to INFO and ``-vv`` to DEBUG; otherwise an
        explicit --log-level wins over the configured level.

        Args:
            configured: Level from the configuration file or environment

        Returns:
            str: Effective log level
        """
        if self.verbose >= 2:
            return LogLevel.DEBUG.value
        if self.verbose == 1:
            return LogLevel.INFO.value
        if self.log_level is not None:
            return self.log_level.value
        return configured

    def is_json_output_enabled(self) -> bool:
        """Check if JSON output is enabled."""
        return self.json_output


# Global context variable for thread-safe access
cli_context_var: contextvars.ContextVar[CliContext | None] = contextvars.ContextVar(
    "cli_context",
    default=None,
)


def get_cli_context() -> CliContext:
    """
    Get the current CLI context.

    Returns:
        CliContext: Current CLI context

    Raises:
        RuntimeError: If context has not been initialized
    """
    context = cli_context_var.get()
    if context is None:
        raise RuntimeError(
            "CLI context has not been initialized. "
            "Make sure to call the main callback before accessing context.",
        )
    return context


def set_cli_context(context: CliContext) -> None:
    """Set the current CLI context."""
    cli_context_var.set(context)


def clear_cli_context() -> None:
    """Clear the current CLI context."""
    cli_context_var.set(None)
