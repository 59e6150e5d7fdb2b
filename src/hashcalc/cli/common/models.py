"""Pydantic models for CLI argument validation."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class HashOptions(BaseModel):
    """Options of the ``hash`` command.

    ``None`` means "take the value from the configuration". The boolean
    switches are combined with the configuration: renaming happens when
    either asks for it, display only when both allow it.
    """

    path: Path = Field(default=Path("."), description="Directory to walk")
    file_pattern: str | None = Field(default=None, min_length=1)
    algorithm: str | None = None
    out_file: Path | None = None
    rename: bool = False
    display: bool = True
    workers: int | None = Field(default=None, ge=1)
    table: bool = False
    stats: bool = False
    json_output: bool = False
