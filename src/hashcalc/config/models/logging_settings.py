"""Logging configuration model."""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field, field_validator


class LoggingSettings(BaseModel):
    """Logging configuration.

    This class manages logging behavior including level, optional
    file output and the console renderer.
    """

    level: str = Field(default="WARNING", description="Logging level")
    log_file: str | None = Field(default=None, description="Optional JSON log file path")
    rich_console: bool = Field(
        default=True,
        description="Render console logs with Rich instead of JSON lines",
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate that the level is a standard logging level name."""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            msg = f"Invalid logging level: {v}"
            raise ValueError(msg)
        return level


__all__ = ["LoggingSettings"]
