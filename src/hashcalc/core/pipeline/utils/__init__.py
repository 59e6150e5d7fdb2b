"""Pipeline utilities package.

This package provides core utilities for the hashing pipeline:
- BoundedQueue: Thread-safe queue with size limits for backpressure
- Statistics classes: For collecting pipeline metrics
"""

from __future__ import annotations

from hashcalc.core.pipeline.utils.bounded_queue import BoundedQueue
from hashcalc.core.pipeline.utils.statistics import (
    HashStatistics,
    QueueStatistics,
    ScanStatistics,
)

__all__ = [
    "BoundedQueue",
    "HashStatistics",
    "QueueStatistics",
    "ScanStatistics",
]
