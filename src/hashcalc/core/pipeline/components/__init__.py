"""Pipeline components package.

This package contains the core pipeline components:
- DirectoryScanner: Walks a directory tree and emits matching files
- HashWorkerPool: Hashes files with worker threads
- ResultCollector: Collects and aggregates hashing results
"""

from __future__ import annotations

from hashcalc.core.pipeline.components.collector import ResultCollector
from hashcalc.core.pipeline.components.scanner import DirectoryScanner, matches_pattern
from hashcalc.core.pipeline.components.workers import HashWorker, HashWorkerPool

__all__ = [
    "DirectoryScanner",
    "HashWorker",
    "HashWorkerPool",
    "ResultCollector",
    "matches_pattern",
]
