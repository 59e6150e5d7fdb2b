"""Pipeline statistics formatting and aggregation.

This module provides utilities for formatting and aggregating pipeline statistics:
- format_statistics(): Format statistics into human-readable report
- PipelineStatistics: Aggregate statistics into a dictionary for JSON output
"""

from __future__ import annotations

from typing import Any

from hashcalc.core.pipeline.utils import (
    HashStatistics,
    QueueStatistics,
    ScanStatistics,
)


def _rate(part: int, total: int) -> float:
    return (part / total * 100) if total > 0 else 0.0


def _throughput_mib(bytes_hashed: int, total_duration: float) -> float:
    if total_duration <= 0:
        return 0.0
    return bytes_hashed / (1024 * 1024) / total_duration


def format_statistics(
    scan_stats: ScanStatistics,
    queue_stats: QueueStatistics,
    hash_stats: HashStatistics,
    total_duration: float,
) -> str:
    """Format pipeline statistics into a human-readable report.

    Args:
        scan_stats: ScanStatistics instance with scanning metrics.
        queue_stats: QueueStatistics instance with job queue metrics.
        hash_stats: HashStatistics instance with worker metrics.
        total_duration: Total pipeline execution time in seconds.

    Returns:
        A formatted multi-line string containing all statistics.
    """
    total_processed = hash_stats.items_processed
    success_rate = _rate(hash_stats.successes, total_processed)
    failure_rate = _rate(hash_stats.failures, total_processed)
    throughput = _throughput_mib(hash_stats.bytes_hashed, total_duration)

    lines = [
        "",
        "=" * 60,
        "                    PIPELINE STATISTICS",
        "=" * 60,
        "",
        "Timing:",
        f"  - Total pipeline time:  {total_duration:.2f}s",
        "",
        "Scanner:",
        f"  - Files matched:        {scan_stats.files_matched:,}",
        f"  - Directories scanned:  {scan_stats.directories_scanned:,}",
        f"  - Traversal errors:     {scan_stats.traversal_errors:,}",
        "",
        "Job queue:",
        f"  - Items put:            {queue_stats.items_put:,}",
        f"  - Items got:            {queue_stats.items_got:,}",
        f"  - Peak size:            {queue_stats.max_size:,}",
        "",
        "Hashing:",
        f"  - Items processed:      {total_processed:,}",
        f"  - Successful:           {hash_stats.successes:,} ({success_rate:.2f}%)",
        f"  - Failed:               {hash_stats.failures:,} ({failure_rate:.2f}%)",
        f"  - Bytes hashed:         {hash_stats.bytes_hashed:,}",
        f"  - Throughput:           {throughput:.2f} MiB/s",
        "",
        "=" * 60,
        "",
    ]

    return "\n".join(lines)


class PipelineStatistics:
    """Aggregates pipeline statistics into a structured dictionary.

    Args:
        scan_stats: ScanStatistics instance with scanning metrics.
        queue_stats: QueueStatistics instance with job queue metrics.
        hash_stats: HashStatistics instance with worker metrics.
        total_duration: Total pipeline execution time in seconds.
    """

    def __init__(
        self,
        scan_stats: ScanStatistics,
        queue_stats: QueueStatistics,
        hash_stats: HashStatistics,
        total_duration: float,
    ) -> None:
        self.scan_stats = scan_stats
        self.queue_stats = queue_stats
        self.hash_stats = hash_stats
        self.total_duration = total_duration

    def to_dict(self) -> dict[str, Any]:
        """Export all statistics organized by category."""
        total_processed = self.hash_stats.items_processed
        return {
            "timing": {
                "total_duration": self.total_duration,
                "total_duration_formatted": f"{self.total_duration:.2f}s",
            },
            "scanner": {
                "files_matched": self.scan_stats.files_matched,
                "directories_scanned": self.scan_stats.directories_scanned,
                "traversal_errors": self.scan_stats.traversal_errors,
            },
            "queue": {
                "items_put": self.queue_stats.items_put,
                "items_got": self.queue_stats.items_got,
                "max_size": self.queue_stats.max_size,
            },
            "hashing": {
                "items_processed": total_processed,
                "successes": self.hash_stats.successes,
                "failures": self.hash_stats.failures,
                "success_rate": _rate(self.hash_stats.successes, total_processed),
                "failure_rate": _rate(self.hash_stats.failures, total_processed),
                "bytes_hashed": self.hash_stats.bytes_hashed,
                "throughput_mib_s": _throughput_mib(
                    self.hash_stats.bytes_hashed,
                    self.total_duration,
                ),
            },
        }

    def format_report(self) -> str:
        """Format statistics using the standard format_statistics function."""
        return format_statistics(
            scan_stats=self.scan_stats,
            queue_stats=self.queue_stats,
            hash_stats=self.hash_stats,
            total_duration=self.total_duration,
        )
