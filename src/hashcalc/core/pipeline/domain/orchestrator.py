"""Pipeline orchestration and component factory.

This module provides the factory and the orchestration entry points:
- PipelineFactory: Creates and wires up all pipeline components
- PipelineHandle: One run of the pipeline, consumed with run() or stream()
- run_pipeline: Convenience function building a handle from settings
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from hashcalc.config import Settings, get_config
from hashcalc.core.hashing import HashAlgorithm, StreamHasher, get_hasher
from hashcalc.core.pipeline.components import (
    DirectoryScanner,
    HashWorkerPool,
    ResultCollector,
)
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
from hashcalc.core.pipeline.domain.statistics import PipelineStatistics
from hashcalc.core.pipeline.utils import (
    BoundedQueue,
    HashStatistics,
    QueueStatistics,
    ScanStatistics,
)
from hashcalc.shared.constants import Hashing, Pipeline
from hashcalc.shared.errors import (
    ErrorCode,
    ErrorContext,
    HashCalcError,
    InfrastructureError,
    PipelineStateError,
)
from hashcalc.shared.logging import log_operation_error, log_operation_success
from hashcalc.shared.models import CollectedResults, HashResult

logger = logging.getLogger(__name__)

ResultCallback = Callable[[HashResult], None]


class PipelineState(str, Enum):
    """Lifecycle states of a PipelineHandle."""

    IDLE = "idle"
    RUNNING = "running"
    DRAINING = "draining"
    CLOSED = "closed"


@dataclass
class PipelineComponents:
    """All objects taking part in one pipeline run."""

    scan_stats: ScanStatistics
    queue_stats: QueueStatistics
    hash_stats: HashStatistics
    job_queue: BoundedQueue
    result_queue: BoundedQueue
    cancel_event: threading.Event
    scanner: DirectoryScanner
    worker_pool: HashWorkerPool
    collector: ResultCollector


class PipelineFactory:
    """Factory for creating and wiring pipeline components."""

    @staticmethod
    def create_components(  # pylint: disable=too-many-arguments
        root_path: str | Path,
        file_pattern: str,
        hasher: StreamHasher,
        num_workers: int | None,
        max_queue_size: int,
    ) -> PipelineComponents:
        """Create and initialize all pipeline components.

        Args:
            root_path: Root directory to walk.
            file_pattern: Glob pattern matched against file names.
            hasher: StreamHasher shared by every worker.
            num_workers: Number of hash worker threads, None for the CPU count.
            max_queue_size: Capacity of the job and result queues.

        Returns:
            The wired, not yet started, components.

        Raises:
            ValueError: If ``num_workers`` is below 1 or the queue size
                is negative.
        """
        scan_stats = ScanStatistics()
        queue_stats = QueueStatistics()
        hash_stats = HashStatistics()
        cancel_event = threading.Event()

        job_queue = BoundedQueue(maxsize=max_queue_size, stats=queue_stats)
        result_queue = BoundedQueue(maxsize=max_queue_size)

        scanner = DirectoryScanner(
            root_path=root_path,
            file_pattern=file_pattern,
            input_queue=job_queue,
            result_queue=result_queue,
            stats=scan_stats,
            cancel_event=cancel_event,
        )
        worker_pool = HashWorkerPool(
            input_queue=job_queue,
            output_queue=result_queue,
            hasher=hasher,
            stats=hash_stats,
            num_workers=num_workers,
            cancel_event=cancel_event,
        )
        collector = ResultCollector(
            output_queue=result_queue,
            collector_id="main_collector",
        )

        return PipelineComponents(
            scan_stats=scan_stats,
            queue_stats=queue_stats,
            hash_stats=hash_stats,
            job_queue=job_queue,
            result_queue=result_queue,
            cancel_event=cancel_event,
            scanner=scanner,
            worker_pool=worker_pool,
            collector=collector,
        )


class PipelineHandle:
    """One run of the hashing pipeline.

    The hash algorithm is resolved and every component is built in the
    constructor, so an unsupported algorithm or an invalid worker count
    fails before any thread starts. A handle is single use: once ``run()``
    or ``stream()`` was called, calling either again raises
    PipelineStateError.

    Args:
        root_path: Root directory to walk.
        file_pattern: Glob pattern matched against file names.
        algorithm: Hash algorithm identifier (case-insensitive).
        num_workers: Number of hash worker threads, defaults to the CPU count.
        queue_size: Capacity of the job and result queues.
        chunk_size: Read size of the streaming hasher.
        pad_xxhash64: Zero-pad XXHASH64 digests to 16 hex digits.
        join_timeout: Seconds to wait for the workers before cancelling.

    Raises:
        UnsupportedAlgorithmError: If the algorithm is not registered.
        ValueError: If ``num_workers`` is below 1.
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        root_path: str | Path,
        file_pattern: str = Hashing.DEFAULT_FILE_PATTERN,
        algorithm: str | HashAlgorithm = Hashing.DEFAULT_ALGORITHM,
        num_workers: int | None = None,
        *,
        queue_size: int = Pipeline.QUEUE_SIZE,
        chunk_size: int = Hashing.CHUNK_SIZE,
        pad_xxhash64: bool = False,
        join_timeout: float | None = None,
    ) -> None:
        self.root_path = Path(root_path)
        self.file_pattern = file_pattern
        self.hasher = get_hasher(algorithm, chunk_size=chunk_size, pad_xxhash64=pad_xxhash64)
        self.join_timeout = join_timeout

        self.components = PipelineFactory.create_components(
            root_path=self.root_path,
            file_pattern=file_pattern,
            hasher=self.hasher,
            num_workers=num_workers,
            max_queue_size=queue_size,
        )
        self.num_workers = self.components.worker_pool.num_workers

        self._state = PipelineState.IDLE
        self._state_lock = threading.Lock()
        self._supervisor_error: Exception | None = None
        self._total_duration = 0.0

    @classmethod
    def from_settings(
        cls,
        root_path: str | Path,
        settings: Settings | None = None,
        **overrides: object,
    ) -> PipelineHandle:
        """Build a handle from Settings, with keyword overrides.

        Args:
            root_path: Root directory to walk.
            settings: Settings to read from, defaults to get_config().
            **overrides: Any constructor keyword, taking precedence over
                the settings (None values are ignored).
        """
        settings = settings or get_config()
        kwargs: dict[str, object] = {
            "file_pattern": settings.pipeline.file_pattern,
            "algorithm": settings.pipeline.algorithm,
            "num_workers": settings.pipeline.num_workers,
            "queue_size": settings.pipeline.queue_size,
            "chunk_size": settings.hashing.chunk_size,
            "pad_xxhash64": settings.hashing.pad_xxhash64,
            "join_timeout": settings.pipeline.join_timeout,
        }
        kwargs.update({key: value for key, value in overrides.items() if value is not None})
        return cls(root_path, **kwargs)  # type: ignore[arg-type]

    @property
    def state(self) -> PipelineState:
        """Current lifecycle state."""
        with self._state_lock:
            return self._state

    @property
    def results(self) -> CollectedResults:
        """Aggregated results of a finished run.

        Raises:
            PipelineStateError: If the result stream is not closed yet.
        """
        return self.components.collector.get_results()

    def statistics(self) -> PipelineStatistics:
        """Statistics of the run so far."""
        c = self.components
        return PipelineStatistics(
            scan_stats=c.scan_stats,
            queue_stats=c.queue_stats,
            hash_stats=c.hash_stats,
            total_duration=self._total_duration,
        )

    def cancel(self) -> None:
        """Cancel the run.

        The scanner stops emitting, in-flight reads abort and every job
        still queued yields an OperationCancelledError result.
        """
        logger.info("Cancelling pipeline for %s", self.root_path)
        self.components.cancel_event.set()

    def run(self, on_result: ResultCallback | None = None) -> CollectedResults:
        """Run the pipeline to completion.

        Args:
            on_result: Optional callback invoked with each result, in the
                collector thread, as results arrive.

        Returns:
            The aggregated results.

        Raises:
            PipelineStateError: If the handle was already used.
            InfrastructureError: If the pipeline machinery itself fails.
        """
        self._begin("run")
        c = self.components
        c.collector.on_result = on_result
        start_time = time.time()

        try:
            start_pipeline_components(c.scanner, c.worker_pool, c.collector, self.num_workers)
            self._shutdown_sequence()
            wait_for_collector_completion(c.collector)
        except Exception as e:  # noqa: BLE001
            self._handle_pipeline_error(e)
        finally:
            force_shutdown_if_needed(c.scanner, c.worker_pool, c.collector)
            self._set_state(PipelineState.CLOSED)

        self._finish(start_time)
        return c.collector.get_results()

    def stream(self) -> Iterator[HashResult]:
        """Run the pipeline and yield each result as it arrives.

        The caller's thread acts as the collector. Abandoning the iterator
        early cancels the run and drains the remaining results.

        Raises:
            PipelineStateError: If the handle was already used.
        """
        self._begin("stream")
        return self._stream_results()

    def _stream_results(self) -> Iterator[HashResult]:
        c = self.components
        start_time = time.time()

        try:
            start_pipeline_components(c.scanner, c.worker_pool, None, self.num_workers)
        except Exception as e:  # noqa: BLE001
            self._set_state(PipelineState.CLOSED)
            self._handle_pipeline_error(e)

        supervisor = threading.Thread(
            target=self._supervise,
            name="hashcalc-supervisor",
            daemon=True,
        )
        supervisor.start()

        exhausted = False
        try:
            yield from c.collector.drain()
            exhausted = True
        finally:
            if not exhausted:
                self.cancel()
                for _ in c.collector.drain():
                    pass
            supervisor.join()
            self._set_state(PipelineState.CLOSED)

        if self._supervisor_error is not None:
            self._handle_pipeline_error(self._supervisor_error)
        self._finish(start_time)

    def _supervise(self) -> None:
        """Run the shutdown sequence for stream(); always closes the result queue."""
        try:
            self._shutdown_sequence()
        except Exception as e:  # noqa: BLE001  # pylint: disable=broad-exception-caught
            self._supervisor_error = e
            self.components.scanner.stop()
            self.components.worker_pool.stop()
            self.components.result_queue.put(Pipeline.SENTINEL)

    def _shutdown_sequence(self) -> None:
        c = self.components
        wait_for_scanner_completion(c.scanner, c.scan_stats)
        signal_worker_shutdown(c.job_queue, self.num_workers)
        self._set_state(PipelineState.DRAINING)
        wait_for_worker_completion(
            c.worker_pool,
            c.hash_stats,
            join_timeout=self.join_timeout,
            cancel_event=c.cancel_event,
        )
        signal_collector_shutdown(c.result_queue)

    def _begin(self, operation: str) -> None:
        with self._state_lock:
            if self._state is not PipelineState.IDLE:
                raise PipelineStateError(
                    ErrorCode.PIPELINE_STATE_ERROR,
                    f"cannot {operation}: pipeline is {self._state.value}",
                    ErrorContext(
                        file_path=str(self.root_path),
                        operation=operation,
                        additional_data={"state": self._state.value},
                    ),
                )
            self._state = PipelineState.RUNNING

        logger.info(
            "Starting pipeline: root=%s, pattern=%s, algorithm=%s, workers=%s",
            self.root_path,
            self.file_pattern,
            self.hasher.name,
            self.num_workers,
        )

    def _set_state(self, state: PipelineState) -> None:
        with self._state_lock:
            self._state = state

    def _finish(self, start_time: float) -> None:
        self._total_duration = time.time() - start_time
        stats = self.statistics()
        logger.info(stats.format_report())
        log_operation_success(
            logger=logger,
            operation="run_pipeline",
            duration_ms=self._total_duration * 1000,
            result_info={
                "successes": self.components.hash_stats.successes,
                "failures": self.components.hash_stats.failures,
                "traversal_errors": self.components.scan_stats.traversal_errors,
            },
            context={"root_path": str(self.root_path), "algorithm": self.hasher.name},
        )

    def _handle_pipeline_error(self, e: Exception) -> None:
        """Stop every component and re-raise as a structured error."""
        c = self.components
        graceful_shutdown(c.scanner, c.worker_pool, c.collector)

        if isinstance(e, HashCalcError):
            raise e

        infrastructure_error = InfrastructureError(
            ErrorCode.PIPELINE_EXECUTION_ERROR,
            f"Pipeline execution failed: {e}",
            ErrorContext(
                file_path=str(self.root_path),
                operation="run_pipeline",
                additional_data={"num_workers": self.num_workers},
            ),
            original_error=e,
        )
        log_operation_error(logger, infrastructure_error)
        raise infrastructure_error from e


def run_pipeline(
    root_path: str | Path,
    settings: Settings | None = None,
    on_result: ResultCallback | None = None,
    **overrides: object,
) -> CollectedResults:
    """Run the complete hashing pipeline.

    This function orchestrates the entire pipeline:
    1. The scanner walks the tree and puts matching files in the job queue
    2. Hash workers consume jobs and put one result per job in the result queue
    3. The ResultCollector aggregates all results

    Args:
        root_path: Root directory to walk.
        settings: Settings to use, defaults to get_config().
        on_result: Optional per-result callback.
        **overrides: PipelineHandle keyword overrides such as
            ``algorithm`` or ``num_workers``.

    Returns:
        The aggregated results.
    """
    handle = PipelineHandle.from_settings(root_path, settings, **overrides)
    return handle.run(on_result=on_result)
