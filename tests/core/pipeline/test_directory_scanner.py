"""Tests for the DirectoryScanner producer."""

from __future__ import annotations

import os
import threading
from pathlib import Path

import pytest

from hashcalc.core.pipeline.components import DirectoryScanner, matches_pattern
from hashcalc.core.pipeline.components.scanner import compile_pattern
from hashcalc.core.pipeline.utils import BoundedQueue, ScanStatistics
from hashcalc.shared.errors import ErrorCode, TraversalError
from hashcalc.shared.models import HashResult


def _make_scanner(
    root: Path,
    pattern: str = "*",
    maxsize: int = 0,
    cancel_event: threading.Event | None = None,
) -> tuple[DirectoryScanner, BoundedQueue, BoundedQueue, ScanStatistics]:
    job_queue = BoundedQueue(maxsize=maxsize)
    result_queue = BoundedQueue()
    stats = ScanStatistics()
    scanner = DirectoryScanner(
        root_path=root,
        file_pattern=pattern,
        input_queue=job_queue,
        result_queue=result_queue,
        stats=stats,
        cancel_event=cancel_event,
    )
    return scanner, job_queue, result_queue, stats


def _drain(q: BoundedQueue) -> list[object]:
    items = []
    while not q.empty():
        items.append(q.get())
    return items


def _deny_directory(monkeypatch: pytest.MonkeyPatch, denied: Path) -> None:
    """Make os.walk fail to list ``denied`` with a permission error."""
    real_scandir = os.scandir

    def fake_scandir(path: str | os.PathLike[str] = ".") -> object:
        if Path(path) == denied:
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", fake_scandir)


class TestMatchesPattern:
    """Test glob matching against base names."""

    @pytest.mark.parametrize(
        ("file_name", "pattern", "expected"),
        [
            ("photo.jpg", "*.jpg", True),
            ("photo.png", "*.jpg", False),
            ("a.txt", "*", True),
            ("a.txt", "?.txt", True),
            ("ab.txt", "?.txt", False),
            ("b.txt", "[ab].txt", True),
            ("c.txt", "[ab].txt", False),
        ],
    )
    def test_glob_matching(self, file_name: str, pattern: str, expected: bool) -> None:
        assert matches_pattern(file_name, pattern) is expected

    def test_matching_is_case_sensitive(self) -> None:
        assert matches_pattern("PHOTO.JPG", "*.jpg") is False

    @pytest.mark.parametrize(
        ("file_name", "pattern", "expected"),
        [
            ("c.txt", "[^ab].txt", True),
            ("a.txt", "[^ab].txt", False),
            ("!.txt", "[!a].txt", True),
            ("m.txt", "[a-z].txt", True),
            ("M.txt", "[a-z].txt", False),
            ("a*", "a\\*", True),
            ("ab", "a\\*", False),
            ("]", "[\\]]", True),
            ("a.txt", "[z-a].txt", False),
        ],
    )
    def test_classes_and_escapes(self, file_name: str, pattern: str, expected: bool) -> None:
        assert matches_pattern(file_name, pattern) is expected

    @pytest.mark.parametrize(
        ("file_name", "pattern"),
        [
            ("[", "["),
            ("a[b", "a[b"),
            ("photo.jpg", "[a-"),
            ("photo.jpg", "*.[jpg"),
            ("x", "[]"),
            ("]a", "[]a]"),
            ("a", "[-a]"),
            ("a\\", "a\\"),
        ],
    )
    def test_malformed_pattern_never_matches(self, file_name: str, pattern: str) -> None:
        """A malformed pattern does not even match a name spelled like it."""
        assert compile_pattern(pattern) is None
        assert matches_pattern(file_name, pattern) is False

    def test_compiled_patterns_are_cached(self) -> None:
        assert compile_pattern("*.jpg") is compile_pattern("*.jpg")


class TestScanFiles:
    """Test the lazy scan_files() generator."""

    def test_yields_every_file_recursively(self, sample_tree: Path, sample_files: set[Path]) -> None:
        # Given
        scanner, _, _, _ = _make_scanner(sample_tree)

        # When
        found = set(scanner.scan_files())

        # Then
        assert found == sample_files

    def test_directories_are_never_yielded(self, sample_tree: Path) -> None:
        scanner, _, _, _ = _make_scanner(sample_tree)

        assert all(not path.is_dir() for path in scanner.scan_files())

    def test_pattern_filters_base_names(self, sample_tree: Path) -> None:
        scanner, _, _, _ = _make_scanner(sample_tree, "*.jpg")

        assert list(scanner.scan_files()) == [sample_tree / "photo.jpg"]

    def test_pattern_applies_to_nested_files(self, sample_tree: Path) -> None:
        scanner, _, _, _ = _make_scanner(sample_tree, "c.*")

        assert list(scanner.scan_files()) == [sample_tree / "nested" / "deep" / "c.txt"]

    def test_zero_match_pattern_yields_nothing(self, sample_tree: Path) -> None:
        scanner, _, result_queue, _ = _make_scanner(sample_tree, "*.mp4")

        assert list(scanner.scan_files()) == []
        assert result_queue.empty()

    @pytest.mark.parametrize("pattern", ["[", "a[b"])
    def test_malformed_pattern_skips_files_named_like_it(self, tmp_path: Path, pattern: str) -> None:
        # Given
        (tmp_path / "[").write_bytes(b"bracket")
        (tmp_path / "a[b").write_bytes(b"bracket")
        scanner, _, _, _ = _make_scanner(tmp_path, pattern)

        # When / Then
        assert list(scanner.scan_files()) == []

    def test_escaped_bracket_selects_literal_name(self, tmp_path: Path) -> None:
        (tmp_path / "[").write_bytes(b"bracket")
        (tmp_path / "a[b").write_bytes(b"bracket")
        scanner, _, _, _ = _make_scanner(tmp_path, "a\\[b")

        assert list(scanner.scan_files()) == [tmp_path / "a[b"]

    def test_empty_pattern_means_every_file(self, sample_tree: Path, sample_files: set[Path]) -> None:
        scanner, _, _, _ = _make_scanner(sample_tree, "")

        assert scanner.file_pattern == "*"
        assert set(scanner.scan_files()) == sample_files

    def test_relative_root_yields_relative_paths(
        self,
        sample_tree: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.chdir(sample_tree.parent)
        scanner, _, _, _ = _make_scanner(Path("root"), "a.txt")

        assert list(scanner.scan_files()) == [Path("root") / "a.txt"]

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
    def test_broken_symlink_is_a_candidate(self, tmp_path: Path) -> None:
        (tmp_path / "dangling").symlink_to(tmp_path / "missing-target")
        scanner, _, _, _ = _make_scanner(tmp_path)

        assert list(scanner.scan_files()) == [tmp_path / "dangling"]

    def test_directory_count(self, sample_tree: Path) -> None:
        scanner, _, _, stats = _make_scanner(sample_tree)

        list(scanner.scan_files())

        assert stats.directories_scanned == 3


class TestTraversalErrors:
    """Traversal errors become error results and never stop the walk."""

    def test_missing_root_yields_one_error_result(self, tmp_path: Path) -> None:
        # Given
        missing = tmp_path / "does-not-exist"
        scanner, job_queue, result_queue, stats = _make_scanner(missing)

        # When
        scanner.run()

        # Then
        assert job_queue.empty()
        results = _drain(result_queue)
        assert len(results) == 1
        result = results[0]
        assert isinstance(result, HashResult)
        assert result.path == missing
        assert result.digest is None
        assert isinstance(result.error, TraversalError)
        assert result.error.code == ErrorCode.TRAVERSAL_ERROR
        assert result.worker_id == "scanner"
        assert stats.traversal_errors == 1

    def test_denied_subtree_does_not_stop_siblings(
        self,
        sample_tree: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        # Given
        denied = sample_tree / "nested"
        _deny_directory(monkeypatch, denied)
        scanner, job_queue, result_queue, stats = _make_scanner(sample_tree)

        # When
        scanner.run()

        # Then
        jobs = set(_drain(job_queue))
        assert jobs == {
            sample_tree / "a.txt",
            sample_tree / "b.txt",
            sample_tree / "empty.txt",
            sample_tree / "photo.jpg",
            sample_tree / "image.png",
        }
        errors = _drain(result_queue)
        assert len(errors) == 1
        assert errors[0].path == denied
        assert "Permission denied" in errors[0].error.message
        assert stats.traversal_errors == 1
        assert stats.files_matched == 5

    @pytest.mark.skipif(
        not hasattr(os, "geteuid") or os.geteuid() == 0,
        reason="permission bits are not enforced for root",
    )
    def test_unreadable_directory_on_disk(self, sample_tree: Path) -> None:
        locked = sample_tree / "nested"
        locked.chmod(0)
        try:
            scanner, job_queue, result_queue, _ = _make_scanner(sample_tree)
            scanner.run()
        finally:
            locked.chmod(0o755)

        assert len(_drain(job_queue)) == 5
        errors = _drain(result_queue)
        assert [error.path for error in errors] == [locked]


class TestScannerThread:
    """Test the scanner running as a thread."""

    def test_run_queues_every_match(self, sample_tree: Path, sample_files: set[Path]) -> None:
        scanner, job_queue, _, stats = _make_scanner(sample_tree)

        scanner.start()
        scanner.join(timeout=5)

        assert not scanner.is_alive()
        assert set(_drain(job_queue)) == sample_files
        assert stats.files_matched == len(sample_files)

    def test_backpressure_blocks_on_full_queue(self, sample_tree: Path, sample_files: set[Path]) -> None:
        """The producer waits for a consumer when the job queue is full."""
        # Given
        scanner, job_queue, _, _ = _make_scanner(sample_tree, maxsize=1)

        # When
        scanner.start()
        received = [job_queue.get(timeout=5) for _ in range(len(sample_files))]
        scanner.join(timeout=5)

        # Then
        assert not scanner.is_alive()
        assert set(received) == sample_files

    def test_cancel_event_stops_emission(self, sample_tree: Path) -> None:
        cancel_event = threading.Event()
        cancel_event.set()
        scanner, job_queue, _, stats = _make_scanner(sample_tree, cancel_event=cancel_event)

        scanner.run()

        assert job_queue.empty()
        assert stats.files_matched == 0

    def test_stop_sets_cancel_event(self, sample_tree: Path) -> None:
        cancel_event = threading.Event()
        scanner, _, _, _ = _make_scanner(sample_tree, cancel_event=cancel_event)

        scanner.stop()

        assert cancel_event.is_set()

    def test_scan_summary(self, sample_tree: Path) -> None:
        scanner, _, _, _ = _make_scanner(sample_tree, "*.txt", maxsize=10)

        scanner.run()
        summary = scanner.get_scan_summary()

        assert summary["root_path"] == str(sample_tree)
        assert summary["file_pattern"] == "*.txt"
        assert summary["files_matched"] == 4
        assert summary["traversal_errors"] == 0
        assert summary["queue_size"] == 4
        assert summary["queue_maxsize"] == 10
