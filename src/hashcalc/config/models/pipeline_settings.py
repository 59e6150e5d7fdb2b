"""Pipeline configuration model.

This module contains the configuration model for the hashing pipeline:
traversal pattern, algorithm, worker count and queue sizing.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from hashcalc.core.hashing import HashAlgorithm
from hashcalc.shared.constants import Hashing, Pipeline, ProcessingConfig
from hashcalc.shared.errors import UnsupportedAlgorithmError


class PipelineSettings(BaseModel):
    """Configuration for one pipeline run."""

    num_workers: int = Field(
        default_factory=lambda: ProcessingConfig.DEFAULT_WORKERS,
        ge=ProcessingConfig.MIN_WORKERS,
        description="Number of hash worker threads",
    )
    queue_size: int = Field(
        default=Pipeline.QUEUE_SIZE,
        ge=0,
        description="Capacity of the job and result queues (0 means unbounded)",
    )
    file_pattern: str = Field(
        default=Hashing.DEFAULT_FILE_PATTERN,
        min_length=1,
        description="Glob pattern matched against file names",
    )
    algorithm: str = Field(
        default=Hashing.DEFAULT_ALGORITHM,
        description="Hash algorithm identifier",
    )
    join_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Seconds to wait for the workers before cancelling the run",
    )

    @field_validator("algorithm")
    @classmethod
    def validate_algorithm(cls, v: str) -> str:
        """Normalize the algorithm identifier to its registry name."""
        try:
            return HashAlgorithm.parse(v).value
        except UnsupportedAlgorithmError as e:
            raise ValueError(e.message) from e


__all__ = ["PipelineSettings"]
