"""Concurrent hashing pipeline.

Producer/consumer pipeline made of a DirectoryScanner, a pool of
HashWorker threads and a ResultCollector, connected by two bounded
queues and shut down with sentinels.
"""

from __future__ import annotations

from hashcalc.core.pipeline.components import (
    DirectoryScanner,
    HashWorker,
    HashWorkerPool,
    ResultCollector,
)
from hashcalc.core.pipeline.domain import (
    PipelineFactory,
    PipelineHandle,
    PipelineState,
    format_statistics,
    run_pipeline,
)

__all__ = [
    "DirectoryScanner",
    "HashWorker",
    "HashWorkerPool",
    "PipelineFactory",
    "PipelineHandle",
    "PipelineState",
    "ResultCollector",
    "format_statistics",
    "run_pipeline",
]
