"""Result collector for the hashing pipeline.

This module provides the ResultCollector class that consumes results from
the result queue until the sentinel and aggregates them into a
CollectedResults (a path to digest mapping plus an ordered error list).
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable, Generator
from typing import Any

from hashcalc.core.pipeline.utils import BoundedQueue
from hashcalc.shared.constants import Pipeline, Timeout
from hashcalc.shared.errors import ErrorCode, ErrorContext, PipelineStateError
from hashcalc.shared.models import CollectedResults, HashResult

logger = logging.getLogger(__name__)

ResultCallback = Callable[[HashResult], None]


class ResultCollector(threading.Thread):
    """Collector that drains results from the result queue.

    It can run as its own thread (``start()``) or be driven from the
    caller's thread through ``drain()``. No ordering between results is
    assumed.

    Args:
        output_queue: BoundedQueue instance to get results from.
        on_result: Optional callback invoked for each result, in the
            thread that drains the queue.
        collector_id: Optional identifier for this collector.
    """

    def __init__(
        self,
        output_queue: BoundedQueue,
        on_result: ResultCallback | None = None,
        collector_id: str | None = None,
    ) -> None:
        super().__init__(name="hashcalc-collector", daemon=True)
        self.output_queue = output_queue
        self.on_result = on_result
        self.error: Exception | None = None
        self.collector_id = collector_id or f"collector_{id(self) & 0xFFFF}"
        self._stopped = threading.Event()
        self._finished = threading.Event()
        self._results = CollectedResults()
        self._lock = threading.Lock()

    def drain(self) -> Generator[HashResult, None, None]:
        """Yield each result as it arrives, until the sentinel.

        Every result is stored before it is yielded, so the aggregate is
        complete once the generator is exhausted.

        Yields:
            HashResult instances in arrival order.
        """
        while not self._stopped.is_set():
            try:
                item = self.output_queue.get(timeout=Timeout.QUEUE_POLL)
            except queue.Empty:
                continue

            if item is Pipeline.SENTINEL:
                self._finished.set()
                logger.debug(
                    "Collector %s received sentinel after %d results",
                    self.collector_id,
                    self.get_result_count(),
                )
                return

            if not isinstance(item, HashResult):
                logger.warning(
                    "Collector %s ignoring unexpected item of type %s",
                    self.collector_id,
                    type(item).__name__,
                )
                continue

            with self._lock:
                self._results.add(item)
            if self.on_result is not None:
                self.on_result(item)
            yield item

    def run(self) -> None:
        """Consume the result queue to completion.

        If ``on_result`` raises, the error is kept in ``self.error``, the
        callback is dropped and draining continues, so that the workers
        never block on a full result queue.
        """
        try:
            for _ in self.drain():
                pass
        except Exception as e:  # noqa: BLE001  # pylint: disable=broad-exception-caught
            logger.exception("Collector %s result callback failed", self.collector_id)
            self.error = e
            self.on_result = None
            for _ in self.drain():
                pass

    def get_results(self) -> CollectedResults:
        """Return the aggregated results.

        Raises:
            PipelineStateError: If the sentinel has not been received yet.
        """
        if not self._finished.is_set():
            raise PipelineStateError(
                ErrorCode.PIPELINE_STATE_ERROR,
                "results requested before the result stream was closed",
                ErrorContext(
                    operation="get_results",
                    additional_data={"collector_id": self.collector_id},
                ),
            )
        with self._lock:
            return self._results

    def get_result_count(self) -> int:
        """Get the number of results received so far."""
        with self._lock:
            return self._results.result_count

    def get_summary(self) -> dict[str, Any]:
        """Get a summary of the collected results."""
        with self._lock:
            return {
                "collector_id": self.collector_id,
                "finished": self._finished.is_set(),
                "successes": len(self._results.digests),
                "failures": len(self._results.errors),
            }

    def is_finished(self) -> bool:
        """True once the sentinel has been received."""
        return self._finished.is_set()

    def stop(self) -> None:
        """Signal the collector to stop draining."""
        self._stopped.set()

    def is_stopped(self) -> bool:
        """Check if the collector has been stopped."""
        return self._stopped.is_set()
