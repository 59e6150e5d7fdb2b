"""Hashing configuration model."""

from __future__ import annotations

from pydantic import BaseModel, Field

from hashcalc.shared.constants import Hashing


class HashingSettings(BaseModel):
    """Configuration of the streaming hashers."""

    chunk_size: int = Field(
        default=Hashing.CHUNK_SIZE,
        ge=1,
        description="Number of bytes read per iteration",
    )
    pad_xxhash64: bool = Field(
        default=False,
        description="Zero-pad XXHASH64 digests to 16 hex digits",
    )


__all__ = ["HashingSettings"]
