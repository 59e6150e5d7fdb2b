"""Bounded queue for pipeline backpressure control.

This module provides BoundedQueue, a thread-safe queue wrapper with size
limits. The job queue and the result queue of a run are both
BoundedQueue instances; they are the only mutable state shared between
the scanner, the hash workers and the collector.
"""

from __future__ import annotations

import queue
from typing import Any

from hashcalc.core.pipeline.utils.statistics import QueueStatistics


class BoundedQueue:
    """Thread-safe queue with size limits for backpressure control.

    Wraps ``queue.Queue``: ``put`` blocks while the queue is full, which
    throttles the producer to the speed of its consumers.

    Args:
        maxsize: Maximum number of items the queue can hold.
                0 means unlimited size.
        stats: Optional QueueStatistics updated on every put/get.
    """

    def __init__(self, maxsize: int = 0, stats: QueueStatistics | None = None) -> None:
        if maxsize < 0:
            msg = f"maxsize must be >= 0, got {maxsize}"
            raise ValueError(msg)
        self._queue: queue.Queue[Any] = queue.Queue(maxsize=maxsize)
        self._maxsize = maxsize
        self.stats = stats

    def put(
        self,
        item: Any,
        block: bool = True,
        timeout: float | None = None,
    ) -> None:
        """Put an item into the queue.

        Args:
            item: The item to put into the queue.
            block: If True, block until a slot is available.
            timeout: Maximum time to wait if blocking.

        Raises:
            queue.Full: If no slot became available.
        """
        self._queue.put(item, block=block, timeout=timeout)
        if self.stats is not None:
            self.stats.increment_items_put()
            self.stats.update_max_size(self._queue.qsize())

    def get(self, block: bool = True, timeout: float | None = None) -> Any:
        """Get an item from the queue.

        Args:
            block: If True, block until an item is available.
            timeout: Maximum time to wait if blocking.

        Returns:
            The item from the queue.

        Raises:
            queue.Empty: If no item became available.
        """
        item = self._queue.get(block=block, timeout=timeout)
        if self.stats is not None:
            self.stats.increment_items_got()
        return item

    def qsize(self) -> int:
        """Return the approximate size of the queue."""
        return self._queue.qsize()

    def empty(self) -> bool:
        """Return True if the queue is empty."""
        return self._queue.empty()

    def full(self) -> bool:
        """Return True if the queue is full."""
        return self._queue.full()

    @property
    def maxsize(self) -> int:
        """Get the maximum size of the queue."""
        return self._maxsize
