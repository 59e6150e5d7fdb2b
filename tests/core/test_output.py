"""Tests for the results file writer."""

from __future__ import annotations

from pathlib import Path

import pytest

from hashcalc.core.output import format_result_line, write_results_to_file
from hashcalc.shared.errors import ErrorCode, OutputWriteError


class TestWriteResultsToFile:
    """Test writing 'path: digest' lines."""

    def test_format_result_line(self) -> None:
        assert format_result_line(Path("dir/a.txt"), "abc") == f"{Path('dir/a.txt')}: abc"

    def test_writes_one_line_per_entry(self, tmp_path: Path) -> None:
        # Given
        digests = {Path("b.txt"): "bb", Path("a.txt"): "aa", Path("c/d.txt"): "dd"}
        out_file = tmp_path / "hashes.txt"

        # When
        written = write_results_to_file(digests, out_file)

        # Then
        assert written == 3
        lines = out_file.read_text(encoding="utf-8").splitlines()
        assert sorted(lines) == sorted(f"{path}: {digest}" for path, digest in digests.items())

    def test_empty_mapping_creates_empty_file(self, tmp_path: Path) -> None:
        out_file = tmp_path / "hashes.txt"

        assert write_results_to_file({}, out_file) == 0
        assert out_file.read_text(encoding="utf-8") == ""

    def test_existing_file_is_truncated(self, tmp_path: Path) -> None:
        out_file = tmp_path / "hashes.txt"
        out_file.write_text("stale\nlines\n", encoding="utf-8")

        write_results_to_file({Path("a.txt"): "aa"}, out_file)

        assert out_file.read_text(encoding="utf-8") == f"{Path('a.txt')}: aa\n"

    def test_unicode_paths(self, tmp_path: Path) -> None:
        out_file = tmp_path / "hashes.txt"

        write_results_to_file({Path("사진.jpg"): "aa"}, out_file)

        assert "사진.jpg: aa" in out_file.read_text(encoding="utf-8")

    def test_unwritable_destination(self, tmp_path: Path) -> None:
        out_file = tmp_path / "missing-dir" / "hashes.txt"

        with pytest.raises(OutputWriteError) as exc_info:
            write_results_to_file({Path("a.txt"): "aa"}, out_file)

        assert exc_info.value.code == ErrorCode.FILE_WRITE_ERROR
        assert exc_info.value.context.file_path == str(out_file)
