"""Results file writer."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from hashcalc.shared.errors import ErrorCode, ErrorContext, OutputWriteError

logger = logging.getLogger(__name__)


def format_result_line(path: str | Path, digest: str) -> str:
    """Render one result as ``path: digest``."""
    return f"{path}: {digest}"


def write_results_to_file(digests: Mapping[Path, str], out_file: str | Path) -> int:
    """Write ``path: digest`` lines, one per entry, sorted by path.

    Args:
        digests: Mapping of file path to hex digest.
        out_file: Destination file, created or truncated.

    Returns:
        Number of lines written.

    Raises:
        OutputWriteError: If the file cannot be written.
    """
    out_path = Path(out_file)
    lines = [format_result_line(path, digests[path]) for path in sorted(digests, key=str)]

    try:
        with open(out_path, "w", encoding="utf-8") as f:
            for line in lines:
                f.write(line + "\n")
    except OSError as e:
        raise OutputWriteError(
            ErrorCode.FILE_WRITE_ERROR,
            f"could not write results to {out_path}: {e.strerror or e}",
            ErrorContext(
                file_path=str(out_path),
                operation="write_results_to_file",
                additional_data={"entries": len(lines)},
            ),
            original_error=e,
        ) from e

    logger.info("Wrote %d results to %s", len(lines), out_path)
    return len(lines)
