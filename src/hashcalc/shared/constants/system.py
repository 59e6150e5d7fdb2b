"""System-level constants for the hashing pipeline."""

from __future__ import annotations

import os

# Base file size unit (1KB)
BASE_FILE_SIZE = 1024


class Pipeline:
    """Pipeline configuration constants."""

    QUEUE_SIZE = 100
    SENTINEL = object()  # Unique sentinel object


class Timeout:
    """Timeouts (seconds) used by the pipeline threads."""

    QUEUE_POLL = 0.5


class ProcessingConfig:
    """Worker pool defaults."""

    # One worker per logical CPU
    DEFAULT_WORKERS = os.cpu_count() or 1
    MIN_WORKERS = 1


class Hashing:
    """Hashing defaults."""

    DEFAULT_ALGORITHM = "MD5"
    DEFAULT_FILE_PATTERN = "*"
    CHUNK_SIZE = 64 * BASE_FILE_SIZE
    XXHASH64_HEX_WIDTH = 16


__all__ = ["BASE_FILE_SIZE", "Hashing", "Pipeline", "ProcessingConfig", "Timeout"]
