"""Statistics collectors for pipeline operations.

This module provides thread-safe counters for tracking metrics across
the pipeline components:
- ScanStatistics: Directory traversal metrics
- QueueStatistics: Inter-component queue metrics
- HashStatistics: File hashing metrics
"""

from __future__ import annotations

import threading


class ScanStatistics:
    """Statistics collector for directory traversal.

    The scanner is the only writer, but readers live in other threads.
    """

    def __init__(self) -> None:
        """Initialize the scan statistics with zero counters."""
        self._lock = threading.Lock()
        self._files_matched = 0
        self._directories_scanned = 0
        self._traversal_errors = 0

    def increment_files_matched(self) -> None:
        """Increment the matched files counter."""
        with self._lock:
            self._files_matched += 1

    def increment_directories_scanned(self) -> None:
        """Increment the directories scanned counter."""
        with self._lock:
            self._directories_scanned += 1

    def increment_traversal_errors(self) -> None:
        """Increment the traversal errors counter."""
        with self._lock:
            self._traversal_errors += 1

    @property
    def files_matched(self) -> int:
        """Get the number of files queued for hashing."""
        with self._lock:
            return self._files_matched

    @property
    def directories_scanned(self) -> int:
        """Get the number of directories walked."""
        with self._lock:
            return self._directories_scanned

    @property
    def traversal_errors(self) -> int:
        """Get the number of traversal errors reported."""
        with self._lock:
            return self._traversal_errors


class QueueStatistics:
    """Statistics collector for queue operations."""

    def __init__(self) -> None:
        """Initialize the queue statistics with zero counters."""
        self._lock = threading.Lock()
        self._items_put = 0
        self._items_got = 0
        self._max_size = 0

    def increment_items_put(self) -> None:
        """Increment the items put counter."""
        with self._lock:
            self._items_put += 1

    def increment_items_got(self) -> None:
        """Increment the items got counter."""
        with self._lock:
            self._items_got += 1

    def update_max_size(self, size: int) -> None:
        """Update the maximum size observed.

        Args:
            size: The current size of the queue.
        """
        with self._lock:
            self._max_size = max(size, self._max_size)

    @property
    def items_put(self) -> int:
        """Get the number of items put into the queue."""
        with self._lock:
            return self._items_put

    @property
    def items_got(self) -> int:
        """Get the number of items got from the queue."""
        with self._lock:
            return self._items_got

    @property
    def max_size(self) -> int:
        """Get the maximum size observed."""
        with self._lock:
            return self._max_size


class HashStatistics:
    """Statistics collector for the hash worker pool.

    Shared by all workers of a pool, hence the lock.
    """

    def __init__(self) -> None:
        """Initialize the hash statistics with zero counters."""
        self._lock = threading.Lock()
        self._items_processed = 0
        self._successes = 0
        self._failures = 0
        self._bytes_hashed = 0

    def record_success(self, size: int) -> None:
        """Record one hashed file of ``size`` bytes."""
        with self._lock:
            self._items_processed += 1
            self._successes += 1
            self._bytes_hashed += size

    def record_failure(self) -> None:
        """Record one file that could not be hashed."""
        with self._lock:
            self._items_processed += 1
            self._failures += 1

    @property
    def items_processed(self) -> int:
        """Get the number of jobs processed."""
        with self._lock:
            return self._items_processed

    @property
    def successes(self) -> int:
        """Get the number of files hashed."""
        with self._lock:
            return self._successes

    @property
    def failures(self) -> int:
        """Get the number of failed jobs."""
        with self._lock:
            return self._failures

    @property
    def bytes_hashed(self) -> int:
        """Get the total number of bytes hashed."""
        with self._lock:
            return self._bytes_hashed
