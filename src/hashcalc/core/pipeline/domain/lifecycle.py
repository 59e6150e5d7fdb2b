"""Pipeline component lifecycle management.

This module provides functions for managing the lifecycle of pipeline components:
- Starting components
- Waiting for completion
- Signaling shutdown with sentinels
- Graceful and forced shutdown procedures

The shutdown sequence is strictly ordered: the job queue is closed only
after the scanner finished, and the result queue only after every worker
returned. Closing the result queue earlier would drop in-flight results.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager

from hashcalc.core.pipeline.components import (
    DirectoryScanner,
    HashWorkerPool,
    ResultCollector,
)
from hashcalc.core.pipeline.utils import (
    BoundedQueue,
    HashStatistics,
    ScanStatistics,
)
from hashcalc.shared.constants import Pipeline
from hashcalc.shared.errors import (
    ErrorCode,
    ErrorContext,
    HashCalcError,
    InfrastructureError,
)
from hashcalc.shared.logging import log_operation_error, log_operation_success

logger = logging.getLogger(__name__)


@contextmanager
def _lifecycle_step(operation: str, code: ErrorCode, context: ErrorContext) -> Iterator[None]:
    """Log the outcome of a lifecycle step and wrap unexpected failures.

    Raises:
        InfrastructureError: If the step raised anything but a HashCalcError.
    """
    start_time = time.time()
    try:
        yield
    except HashCalcError:
        raise
    except Exception as e:
        infrastructure_error = InfrastructureError(
            code,
            f"{operation} failed: {e}",
            context,
            original_error=e,
        )
        log_operation_error(logger, infrastructure_error, operation=operation)
        raise infrastructure_error from e

    log_operation_success(
        logger=logger,
        operation=operation,
        duration_ms=(time.time() - start_time) * 1000,
        context=context,
    )


def start_pipeline_components(
    scanner: DirectoryScanner,
    worker_pool: HashWorkerPool,
    collector: ResultCollector | None,
    num_workers: int,
) -> None:
    """Start all pipeline components.

    Args:
        scanner: DirectoryScanner instance.
        worker_pool: HashWorkerPool instance.
        collector: ResultCollector instance, or None when the caller's
            thread drains the results itself.
        num_workers: Number of worker threads.

    Raises:
        InfrastructureError: If component startup fails.
    """
    context = ErrorContext(
        operation="start_pipeline_components",
        additional_data={"num_workers": num_workers},
    )

    with _lifecycle_step("start_pipeline_components", ErrorCode.PIPELINE_EXECUTION_ERROR, context):
        logger.debug("Starting scanner...")
        scanner.start()

        logger.debug("Starting worker pool with %s workers...", num_workers)
        worker_pool.start()

        if collector is not None:
            logger.debug("Starting result collector...")
            collector.start()


def wait_for_scanner_completion(
    scanner: DirectoryScanner,
    scan_stats: ScanStatistics,
) -> None:
    """Wait for the scanner to finish walking the tree.

    Args:
        scanner: DirectoryScanner instance.
        scan_stats: ScanStatistics instance.

    Raises:
        InfrastructureError: If joining the scanner fails.
    """
    context = ErrorContext(operation="wait_for_scanner_completion")

    with _lifecycle_step("wait_for_scanner_completion", ErrorCode.SCANNER_ERROR, context):
        scanner.join()
        logger.debug(
            "Scanner completed. Matched %s files, %s traversal errors.",
            scan_stats.files_matched,
            scan_stats.traversal_errors,
        )


def signal_worker_shutdown(
    job_queue: BoundedQueue,
    num_workers: int,
) -> None:
    """Close the job queue by sending one sentinel per worker.

    Puts block while the queue is full, so every queued job is still
    handed out before the sentinels.

    Args:
        job_queue: BoundedQueue for file paths.
        num_workers: Number of worker threads.

    Raises:
        InfrastructureError: If sentinel signaling fails.
    """
    context = ErrorContext(
        operation="signal_worker_shutdown",
        additional_data={"num_workers": num_workers},
    )

    with _lifecycle_step("signal_worker_shutdown", ErrorCode.QUEUE_OPERATION_ERROR, context):
        logger.debug("Sending %s sentinel values to hash workers...", num_workers)
        for _ in range(num_workers):
            job_queue.put(Pipeline.SENTINEL)


def wait_for_worker_completion(
    worker_pool: HashWorkerPool,
    hash_stats: HashStatistics,
    join_timeout: float | None = None,
    cancel_event: threading.Event | None = None,
) -> None:
    """Wait for every worker to consume its sentinel.

    When ``join_timeout`` elapses with workers still hashing, the run is
    cancelled: in-flight reads abort, the remaining jobs yield
    cancellation errors and the workers are joined again.

    Args:
        worker_pool: HashWorkerPool instance.
        hash_stats: HashStatistics instance.
        join_timeout: Optional number of seconds before the run is cancelled.
        cancel_event: Cancel event shared by the run.

    Raises:
        InfrastructureError: If joining the workers fails.
    """
    context = ErrorContext(
        operation="wait_for_worker_completion",
        additional_data={"join_timeout": join_timeout or 0.0},
    )

    with _lifecycle_step("wait_for_worker_completion", ErrorCode.WORKER_POOL_ERROR, context):
        worker_pool.join(timeout=join_timeout)

        if worker_pool.is_alive():
            logger.warning(
                "Workers still running after %ss, cancelling the run",
                join_timeout,
            )
            if cancel_event is not None:
                cancel_event.set()
            worker_pool.join()

        logger.debug(
            "Workers completed. Hashed %s files, %s failures.",
            hash_stats.successes,
            hash_stats.failures,
        )


def signal_collector_shutdown(result_queue: BoundedQueue) -> None:
    """Close the result queue by sending the sentinel.

    Args:
        result_queue: BoundedQueue for results.

    Raises:
        InfrastructureError: If sentinel signaling fails.
    """
    context = ErrorContext(operation="signal_collector_shutdown")

    with _lifecycle_step("signal_collector_shutdown", ErrorCode.QUEUE_OPERATION_ERROR, context):
        logger.debug("Sending sentinel to result collector...")
        result_queue.put(Pipeline.SENTINEL)


def wait_for_collector_completion(collector: ResultCollector) -> int:
    """Wait for the collector to drain the result queue.

    A failure of the collector's result callback is re-raised here.

    Args:
        collector: ResultCollector instance.

    Returns:
        Number of results collected.

    Raises:
        InfrastructureError: If joining the collector fails.
    """
    context = ErrorContext(operation="wait_for_collector_completion")

    with _lifecycle_step("wait_for_collector_completion", ErrorCode.COLLECTOR_ERROR, context):
        collector.join()
        if collector.error is not None:
            raise collector.error
        result_count = collector.get_result_count()
        logger.debug("Collector completed. Collected %s results.", result_count)

    return result_count


def graceful_shutdown(
    scanner: DirectoryScanner,
    worker_pool: HashWorkerPool,
    collector: ResultCollector,
) -> None:
    """Ask every component to stop after a failed run.

    Args:
        scanner: DirectoryScanner instance.
        worker_pool: HashWorkerPool instance.
        collector: ResultCollector instance.
    """
    logger.debug("Attempting graceful shutdown...")
    scanner.stop()
    worker_pool.stop()
    collector.stop()


def force_shutdown_if_needed(
    scanner: DirectoryScanner,
    worker_pool: HashWorkerPool,
    collector: ResultCollector,
) -> None:
    """Stop components that are still alive.

    Args:
        scanner: DirectoryScanner instance.
        worker_pool: HashWorkerPool instance.
        collector: ResultCollector instance.
    """
    if scanner.is_alive():
        logger.warning("Scanner still alive, forcing stop...")
        scanner.stop()

    if worker_pool.is_alive():
        logger.warning("Worker pool still alive, forcing stop...")
        worker_pool.stop()

    if collector.is_alive():
        logger.warning("Collector still alive, forcing stop...")
        collector.stop()
