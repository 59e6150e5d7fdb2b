"""Hash worker and pool for the hashing pipeline.

This module provides the HashWorker class (a threading.Thread subclass)
and HashWorkerPool to consume file paths from the job queue, compute
their digests concurrently and put one HashResult per job into the
result queue.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from pathlib import Path
from typing import Any, BinaryIO

from hashcalc.core.hashing import StreamHasher
from hashcalc.core.pipeline.utils import BoundedQueue, HashStatistics
from hashcalc.shared.constants import Pipeline, ProcessingConfig, Timeout
from hashcalc.shared.errors import (
    ErrorCode,
    ErrorContext,
    HashCalcError,
    OperationCancelledError,
    ReadFailureError,
    create_open_failure_error,
)
from hashcalc.shared.logging import log_operation_error, log_operation_success
from hashcalc.shared.models import HashResult

logger = logging.getLogger(__name__)


def _create_cancelled_error(file_path: Path, worker_id: str) -> OperationCancelledError:
    return OperationCancelledError(
        ErrorCode.OPERATION_CANCELLED,
        "operation cancelled",
        ErrorContext(
            file_path=str(file_path),
            operation="hash_file",
            additional_data={"worker_id": worker_id},
        ),
    )


class _CancellableReader:
    """Binary stream wrapper that aborts reads once the run is cancelled."""

    def __init__(
        self,
        stream: BinaryIO,
        cancel_event: threading.Event,
        file_path: Path,
        worker_id: str,
    ) -> None:
        self._stream = stream
        self._cancel_event = cancel_event
        self._file_path = file_path
        self._worker_id = worker_id
        self.bytes_read = 0

    @property
    def name(self) -> Any:
        return self._stream.name

    def read(self, size: int = -1) -> bytes:
        if self._cancel_event.is_set():
            raise _create_cancelled_error(self._file_path, self._worker_id)
        data = self._stream.read(size)
        self.bytes_read += len(data)
        return data


class HashWorker(threading.Thread):
    """Worker thread that hashes files from the job queue.

    Every job taken from the queue yields exactly one HashResult, whether
    the file was hashed or not.

    Args:
        input_queue: BoundedQueue instance to get file paths from.
        output_queue: BoundedQueue instance to put results into.
        hasher: StreamHasher shared by all workers of the run.
        stats: HashStatistics instance for tracking hashing metrics.
        cancel_event: Event shared with the scanner; once set, jobs
            yield OperationCancelledError.
        worker_id: Optional identifier for this worker thread.
    """

    def __init__(  # pylint: disable=too-many-arguments,too-many-positional-arguments
        self,
        input_queue: BoundedQueue,
        output_queue: BoundedQueue,
        hasher: StreamHasher,
        stats: HashStatistics,
        cancel_event: threading.Event | None = None,
        worker_id: str | None = None,
    ) -> None:
        self.worker_id = worker_id or f"worker_{id(self)}"
        super().__init__(name=f"hashcalc-{self.worker_id}", daemon=True)
        self.input_queue = input_queue
        self.output_queue = output_queue
        self.hasher = hasher
        self.stats = stats
        self.cancel_event = cancel_event if cancel_event is not None else threading.Event()
        self._stop_event = threading.Event()

    def run(self) -> None:
        """Main worker loop: take jobs until the sentinel arrives."""
        while not self._stop_event.is_set():
            try:
                file_path = self.input_queue.get(timeout=Timeout.QUEUE_POLL)
            except queue.Empty:
                continue

            # Sentinel value (end of input)
            if file_path is Pipeline.SENTINEL:
                break

            result = self.hash_file(Path(file_path))
            self.output_queue.put(result)

        logger.debug("Worker %s finished", self.worker_id)

    def hash_file(self, file_path: Path) -> HashResult:
        """Open, hash and close one file.

        Args:
            file_path: Path of the file to hash.

        Returns:
            HashResult carrying either the digest or the error.
        """
        if self.cancel_event.is_set():
            return self._failure(file_path, _create_cancelled_error(file_path, self.worker_id))

        start_time = time.time()
        try:
            stream = open(file_path, "rb")  # noqa: SIM115
        except OSError as e:
            return self._failure(file_path, create_open_failure_error(file_path, e))

        with stream:
            reader = _CancellableReader(stream, self.cancel_event, file_path, self.worker_id)
            try:
                digest = self.hasher(reader)  # type: ignore[arg-type]
            except HashCalcError as e:
                return self._failure(file_path, e)
            # pylint: disable-next=broad-exception-caught
            except Exception as e:  # noqa: BLE001
                # Any failure still yields one result for the job
                error = ReadFailureError(
                    ErrorCode.HASH_COMPUTATION_FAILED,
                    f"hash computation failed: {e}",
                    ErrorContext(
                        file_path=str(file_path),
                        operation="hash_file",
                        additional_data={
                            "worker_id": self.worker_id,
                            "algorithm": self.hasher.name,
                            "error_type": type(e).__name__,
                        },
                    ),
                    original_error=e,
                )
                return self._failure(file_path, error)

        self.stats.record_success(reader.bytes_read)
        log_operation_success(
            logger,
            "hash_file",
            (time.time() - start_time) * 1000,
            {"file_path": str(file_path), "worker_id": self.worker_id, "size": reader.bytes_read},
        )
        return HashResult(
            path=file_path,
            digest=digest,
            size=reader.bytes_read,
            worker_id=self.worker_id,
        )

    def _failure(self, file_path: Path, error: HashCalcError) -> HashResult:
        self.stats.record_failure()
        log_operation_error(logger, error, level=logging.WARNING)
        return HashResult(path=file_path, error=error, worker_id=self.worker_id)

    def stop(self) -> None:
        """Signal the worker to stop without waiting for the sentinel."""
        self._stop_event.set()


class HashWorkerPool:
    """Pool of HashWorker threads sharing one job queue and one result queue.

    Args:
        input_queue: BoundedQueue instance to get file paths from.
        output_queue: BoundedQueue instance to put results into.
        hasher: StreamHasher used by every worker.
        stats: HashStatistics instance shared by all workers.
        num_workers: Number of worker threads, defaults to the CPU count.
        cancel_event: Optional cancel event shared with the scanner.

    Raises:
        ValueError: If ``num_workers`` is below 1.
    """

    def __init__(  # pylint: disable=too-many-arguments,too-many-positional-arguments
        self,
        input_queue: BoundedQueue,
        output_queue: BoundedQueue,
        hasher: StreamHasher,
        stats: HashStatistics,
        num_workers: int | None = None,
        cancel_event: threading.Event | None = None,
    ) -> None:
        if num_workers is None:
            num_workers = ProcessingConfig.DEFAULT_WORKERS
        if num_workers < ProcessingConfig.MIN_WORKERS:
            msg = f"num_workers must be >= {ProcessingConfig.MIN_WORKERS}, got {num_workers}"
            raise ValueError(msg)

        self.num_workers = num_workers
        self.input_queue = input_queue
        self.output_queue = output_queue
        self.hasher = hasher
        self.stats = stats
        self.cancel_event = cancel_event if cancel_event is not None else threading.Event()
        self.workers: list[HashWorker] = []
        self._started = False

    def start(self) -> None:
        """Start all worker threads."""
        if self._started:
            raise RuntimeError("Worker pool has already been started")

        for i in range(self.num_workers):
            worker = HashWorker(
                input_queue=self.input_queue,
                output_queue=self.output_queue,
                hasher=self.hasher,
                stats=self.stats,
                cancel_event=self.cancel_event,
                worker_id=f"worker_{i}",
            )
            self.workers.append(worker)
            worker.start()

        self._started = True

    def join(self, timeout: float | None = None) -> None:
        """Wait for all worker threads to complete.

        Args:
            timeout: Maximum time to wait for the whole pool. Each worker
                is joined with the time left until one shared deadline.
        """
        if not self._started:
            raise RuntimeError("Worker pool has not been started")

        if timeout is None:
            for worker in self.workers:
                worker.join()
            return

        deadline = time.monotonic() + timeout
        for worker in self.workers:
            worker.join(timeout=max(0.0, deadline - time.monotonic()))

    def stop(self) -> None:
        """Stop all worker threads without waiting for sentinels."""
        for worker in self.workers:
            worker.stop()

    def is_alive(self) -> bool:
        """Check if any worker threads are still alive."""
        return any(worker.is_alive() for worker in self.workers)

    def get_alive_worker_count(self) -> int:
        """Get the number of alive worker threads."""
        return sum(1 for worker in self.workers if worker.is_alive())

    def get_pool_status(self) -> dict[str, Any]:
        """Get status information about the worker pool.

        Returns:
            Dictionary containing pool status information.
        """
        return {
            "num_workers": self.num_workers,
            "started": self._started,
            "alive_workers": self.get_alive_worker_count(),
            "algorithm": self.hasher.name,
            "input_queue_size": self.input_queue.qsize(),
            "output_queue_size": self.output_queue.qsize(),
            "items_processed": self.stats.items_processed,
            "successes": self.stats.successes,
            "failures": self.stats.failures,
            "bytes_hashed": self.stats.bytes_hashed,
        }
