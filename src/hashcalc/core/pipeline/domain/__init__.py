"""Pipeline domain logic package.

This package contains domain-specific logic for the pipeline:
- lifecycle: Component lifecycle management functions
- orchestrator: Component factory, PipelineHandle and run_pipeline
- statistics: Statistics formatting and aggregation
"""

from __future__ import annotations

from hashcalc.core.pipeline.domain.lifecycle import (
    force_shutdown_if_needed,
    graceful_shutdown,
    signal_collector_shutdown,
    signal_worker_shutdown,
    start_pipeline_components,
    wait_for_collector_completion,
    wait_for_scanner_completion,
    wait_for_worker_completion,
)
from hashcalc.core.pipeline.domain.orchestrator import (
    PipelineComponents,
    PipelineFactory,
    PipelineHandle,
    PipelineState,
    run_pipeline,
)
from hashcalc.core.pipeline.domain.statistics import (
    PipelineStatistics,
    format_statistics,
)

__all__ = [
    "PipelineComponents",
    "PipelineFactory",
    "PipelineHandle",
    "PipelineState",
    "PipelineStatistics",
    "force_shutdown_if_needed",
    "format_statistics",
    "graceful_shutdown",
    "run_pipeline",
    "signal_collector_shutdown",
    "signal_worker_shutdown",
    "start_pipeline_components",
    "wait_for_collector_completion",
    "wait_for_scanner_completion",
    "wait_for_worker_completion",
]
