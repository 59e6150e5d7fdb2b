"""Result records exchanged between pipeline components and collaborators."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from hashcalc.shared.errors import HashCalcError


@dataclass(frozen=True)
class HashResult:
    """Outcome of hashing one file or walking one directory.

    Exactly one of ``digest`` and ``error`` is set.

    Attributes:
        path: Path of the file (or, for traversal errors, the directory).
        digest: Lowercase hex digest on success.
        error: Structured error on failure.
        size: Number of bytes hashed, 0 on failure.
        worker_id: Identifier of the worker (or "scanner") that produced it.
    """

    path: Path
    digest: str | None = None
    error: HashCalcError | None = None
    size: int = 0
    worker_id: str | None = None

    def __post_init__(self) -> None:
        if (self.digest is None) == (self.error is None):
            msg = "HashResult requires exactly one of digest or error"
            raise ValueError(msg)

    @property
    def ok(self) -> bool:
        """True if the file was hashed."""
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        data: dict[str, Any] = {"path": str(self.path)}
        if self.error is None:
            data["digest"] = self.digest
        else:
            data["error"] = self.error.to_dict()
        return data

    def describe_error(self) -> str:
        """One-line description of the failure, as shown to users."""
        if self.error is None:
            return ""
        return f"error processing file {self.path}: {self.error.message}"


@dataclass
class CollectedResults:
    """Aggregated output of one pipeline run.

    Attributes:
        digests: Successful results, path to digest.
        errors: Failed results in arrival order.
    """

    digests: dict[Path, str] = field(default_factory=dict)
    errors: list[HashResult] = field(default_factory=list)

    def add(self, result: HashResult) -> None:
        """Record one result."""
        if result.error is None:
            # digest is set whenever error is None
            self.digests[result.path] = result.digest  # type: ignore[assignment]
        else:
            self.errors.append(result)

    @property
    def result_count(self) -> int:
        """Total number of results recorded."""
        return len(self.digests) + len(self.errors)

    @property
    def has_failures(self) -> bool:
        """True if any result was a failure."""
        return bool(self.errors)
