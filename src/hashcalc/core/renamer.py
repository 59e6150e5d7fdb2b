"""Rename hashed files to their digest.

A file ``photo.JPG`` whose digest is ``abc123`` becomes ``abc123.JPG`` in
the same directory. Existing files are never overwritten.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from hashcalc.shared.errors import (
    AlreadyExistsError,
    ErrorCode,
    ErrorContext,
    RenameError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenameOutcome:
    """Result of renaming one file.

    Attributes:
        source: Original path.
        target: Digest-named path.
        renamed: False when the file already carried its digest name.
    """

    source: Path
    target: Path
    renamed: bool


def file_extension(name: str) -> str:
    """Return everything from the last dot of ``name``, or "" without one.

    Unlike ``Path.suffix``, dotfiles keep their name as extension
    (``.bashrc``) and a trailing dot is kept (``a.`` gives ``.``).
    """
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


def digest_target(path: Path, digest: str) -> Path:
    """Return the digest-named sibling of ``path``, keeping its extension."""
    return path.with_name(f"{digest}{file_extension(path.name)}")


def rename_to_digest(path: str | Path, digest: str) -> RenameOutcome:
    """Rename a file to ``<digest><extension>`` in its own directory.

    Args:
        path: File to rename.
        digest: Hex digest of the file.

    Returns:
        RenameOutcome describing what happened.

    Raises:
        AlreadyExistsError: If the target exists. The file is left untouched.
        RenameError: If the rename itself fails.
    """
    source = Path(path)
    target = digest_target(source, digest)
    context = ErrorContext(
        file_path=str(source),
        operation="rename_to_digest",
        additional_data={"target": str(target)},
    )

    if source.name == target.name:
        logger.debug("%s already carries its digest name", source)
        return RenameOutcome(source=source, target=target, renamed=False)

    if target.exists():
        raise AlreadyExistsError(
            ErrorCode.FILE_ALREADY_EXISTS,
            f"could not rename {source} to {target}: file already exists",
            context,
        )

    try:
        source.rename(target)
    except OSError as e:
        raise RenameError(
            ErrorCode.FILE_RENAME_ERROR,
            f"could not rename {source} to {target}: {e.strerror or e}",
            context,
            original_error=e,
        ) from e

    logger.debug("Renamed %s -> %s", source, target)
    return RenameOutcome(source=source, target=target, renamed=True)
