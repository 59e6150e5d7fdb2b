"""Output configuration model.

Controls what happens with the results of a run: console display,
renaming files to their digest and writing a results file.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class OutputSettings(BaseModel):
    """Output configuration."""

    display: bool = Field(
        default=True,
        description="Print 'path: digest' lines when no output file is given",
    )
    rename: bool = Field(
        default=False,
        description="Rename each hashed file to <digest><extension>",
    )
    out_file: str | None = Field(
        default=None,
        description="Write 'path: digest' lines to this file",
    )


__all__ = ["OutputSettings"]
