"""Directory scanner for the hashing pipeline.

This module provides the DirectoryScanner class that acts as the producer
of the pipeline: it walks a directory tree, keeps the files whose name
matches a glob pattern and feeds their paths into the job queue.
Traversal errors are turned into error results on the result queue and
never stop the walk.
"""

from __future__ import annotations

import functools
import logging
import os
import re
import threading
from collections.abc import Generator
from pathlib import Path
from typing import Any

from hashcalc.core.pipeline.utils import BoundedQueue, ScanStatistics
from hashcalc.shared.constants import Hashing
from hashcalc.shared.errors import create_traversal_error
from hashcalc.shared.logging import log_operation_error
from hashcalc.shared.models import HashResult

logger = logging.getLogger(__name__)

SCANNER_ID = "scanner"


def _read_class_char(pattern: str, index: int) -> tuple[str, int] | None:
    """Read one character of a ``[...]`` class, honouring ``\\`` escapes.

    Returns the character and the index after it, or None when the class
    is malformed at this position.
    """
    if index >= len(pattern) or pattern[index] in "-]":
        return None
    if pattern[index] == "\\":
        index += 1
        if index >= len(pattern):
            return None
    return pattern[index], index + 1


def _translate_class(pattern: str, index: int) -> tuple[str, int] | None:
    """Translate the class starting after ``[`` into a regex fragment."""
    negated = index < len(pattern) and pattern[index] == "^"
    if negated:
        index += 1

    ranges: list[str] = []
    first = True
    while True:
        if not first and index < len(pattern) and pattern[index] == "]":
            index += 1
            break
        low = _read_class_char(pattern, index)
        if low is None:
            return None
        low_char, index = low
        high_char = low_char
        if index < len(pattern) and pattern[index] == "-":
            high = _read_class_char(pattern, index + 1)
            if high is None:
                return None
            high_char, index = high
        # A reversed range is valid but matches nothing
        if low_char <= high_char:
            ranges.append(f"{re.escape(low_char)}-{re.escape(high_char)}")
        first = False

    if negated:
        return f"[^/{''.join(ranges)}]", index
    if not ranges:
        return "(?!)", index
    return f"[{''.join(ranges)}]", index


@functools.lru_cache(maxsize=64)
def compile_pattern(pattern: str) -> re.Pattern[str] | None:
    """Compile a glob pattern into a regular expression for ``fullmatch``.

    Supported syntax: ``*`` (any run of characters), ``?`` (one
    character), ``[abc]``, ``[a-z]`` and ``[^a-z]`` classes, and ``\\``
    to escape the next character.

    Returns:
        The compiled expression, or None when the pattern is malformed
        (unclosed or empty class, dangling ``-`` in a class, trailing
        ``\\``).
    """
    parts: list[str] = []
    index = 0
    while index < len(pattern):
        char = pattern[index]
        index += 1
        if char == "*":
            parts.append("[^/]*")
        elif char == "?":
            parts.append("[^/]")
        elif char == "[":
            translated = _translate_class(pattern, index)
            if translated is None:
                return None
            fragment, index = translated
            parts.append(fragment)
        elif char == "\\":
            if index >= len(pattern):
                return None
            parts.append(re.escape(pattern[index]))
            index += 1
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts))


def matches_pattern(file_name: str, pattern: str) -> bool:
    """Check a file name against a glob pattern.

    Matching is case-sensitive and applies to the whole base name.
    A malformed pattern never matches.

    Args:
        file_name: Base name of the file.
        pattern: Glob pattern such as ``*.jpg``.

    Returns:
        True if the name matches.
    """
    compiled = compile_pattern(pattern)
    return compiled is not None and compiled.fullmatch(file_name) is not None


class DirectoryScanner(threading.Thread):
    """Directory scanner that acts as the producer in the pipeline.

    Args:
        root_path: Root directory path to walk.
        file_pattern: Glob pattern matched against file names.
        input_queue: BoundedQueue receiving the paths to hash (jobs).
        result_queue: BoundedQueue receiving traversal error results.
        stats: ScanStatistics instance for tracking scan metrics.
        cancel_event: Optional event; once set, no further jobs are emitted.
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        root_path: str | Path,
        file_pattern: str,
        input_queue: BoundedQueue,
        result_queue: BoundedQueue,
        stats: ScanStatistics,
        cancel_event: threading.Event | None = None,
    ) -> None:
        super().__init__(name="hashcalc-scanner", daemon=True)
        self.root_path = Path(root_path)
        self.file_pattern = file_pattern or Hashing.DEFAULT_FILE_PATTERN
        self.input_queue = input_queue
        self.result_queue = result_queue
        self.stats = stats
        self._stop_event = cancel_event if cancel_event is not None else threading.Event()

    def scan_files(self) -> Generator[Path, None, None]:
        """Lazily yield the files under the root whose name matches the pattern.

        Directories are never yielded. Entries that are not directories
        (regular files, broken symlinks, special files) are candidates.
        Traversal errors are reported through ``_on_walk_error``.

        Yields:
            Path of each matching file, rooted at ``root_path``.
        """
        for root, _dirs, files in os.walk(self.root_path, onerror=self._on_walk_error):
            self.stats.increment_directories_scanned()
            root_path = Path(root)

            for file_name in files:
                if self._stop_event.is_set():
                    return
                if matches_pattern(file_name, self.file_pattern):
                    yield root_path / file_name

    def _on_walk_error(self, error: OSError) -> None:
        """Convert an os.walk error into an error result and keep walking."""
        path = error.filename if error.filename is not None else self.root_path
        traversal_error = create_traversal_error(path, error)
        log_operation_error(logger, traversal_error, level=logging.WARNING)

        self.stats.increment_traversal_errors()
        self.result_queue.put(
            HashResult(path=Path(path), error=traversal_error, worker_id=SCANNER_ID),
        )

    def stop(self) -> None:
        """Signal the scanner to stop emitting jobs."""
        self._stop_event.set()

    def run(self) -> None:
        """Walk the tree and put every matching path into the job queue.

        Completion is observed by the orchestrator through ``join()``;
        it then closes the job queue by sending one sentinel per worker.
        """
        logger.debug(
            "Scanning %s for files matching %r",
            self.root_path,
            self.file_pattern,
        )
        if compile_pattern(self.file_pattern) is None:
            logger.warning("Malformed file pattern %r matches no files", self.file_pattern)

        for file_path in self.scan_files():
            if self._stop_event.is_set():
                break
            # Blocks while the job queue is full
            self.input_queue.put(file_path)
            self.stats.increment_files_matched()

        logger.debug(
            "Scanner finished: %d files queued, %d directories, %d errors",
            self.stats.files_matched,
            self.stats.directories_scanned,
            self.stats.traversal_errors,
        )

    def get_scan_summary(self) -> dict[str, Any]:
        """Get a summary of the scanning results."""
        return {
            "root_path": str(self.root_path),
            "file_pattern": self.file_pattern,
            "files_matched": self.stats.files_matched,
            "directories_scanned": self.stats.directories_scanned,
            "traversal_errors": self.stats.traversal_errors,
            "queue_size": self.input_queue.qsize(),
            "queue_maxsize": self.input_queue.maxsize,
        }
