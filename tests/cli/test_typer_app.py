"""Tests for the Typer CLI application.

Assertions on human-readable text use ``result.output``; JSON is only
parsed from runs that write nothing to stderr.
"""

from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from hashcalc.cli.common.context import get_cli_context
from hashcalc.cli.typer_app import app

WIDE_TERMINAL = {"COLUMNS": "400"}


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def _md5(data: bytes) -> str:
    return hashlib.md5(data).hexdigest()


class TestGlobalOptions:
    """Test the main callback options."""

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "Hash MT Generator - Version: 1.0.0" in result.output

    def test_short_version_flag(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["-V"])

        assert result.exit_code == 0
        assert "Version: 1.0.0" in result.output

    def test_verbose_sets_debug_logging(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["-vv", "algorithms"])

        assert result.exit_code == 0
        assert get_cli_context().verbose == 2
        assert logging.getLogger("hashcalc").level == logging.DEBUG

    def test_log_level_option(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--log-level", "error", "algorithms"])

        assert result.exit_code == 0
        assert logging.getLogger("hashcalc").level == logging.ERROR

    def test_config_file_is_loaded(self, runner: CliRunner, sample_tree: Path, tmp_path: Path) -> None:
        # Given
        config_file = tmp_path / "custom.toml"
        config_file.write_text(
            '[pipeline]\nalgorithm = "sha1"\nfile_pattern = "a.txt"\n',
            encoding="utf-8",
        )

        # When
        result = runner.invoke(app, ["--config", str(config_file), "hash", str(sample_tree)])

        # Then
        assert result.exit_code == 0
        assert result.output.strip() == f"{sample_tree / 'a.txt'}: {hashlib.sha1(b'hi').hexdigest()}"

    def test_missing_config_file_is_usage_error(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["--config", str(tmp_path / "nope.toml"), "algorithms"])

        assert result.exit_code == 2

    def test_invalid_config_file(self, runner: CliRunner, tmp_path: Path) -> None:
        config_file = tmp_path / "bad.toml"
        config_file.write_text('[pipeline]\nalgorithm = "CRC32"\n', encoding="utf-8")

        result = runner.invoke(app, ["--config", str(config_file), "algorithms"])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


class TestAlgorithmsCommand:
    """Test the algorithms command."""

    def test_lists_algorithms(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["algorithms"])

        assert result.exit_code == 0
        assert result.output.split() == ["MD5", "SHA1", "SHA256", "XXHASH64", "BLAKE3"]

    def test_json_output(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--json", "algorithms"])

        payload = json.loads(result.stdout)
        assert payload["success"] is True
        assert payload["command"] == "algorithms"
        assert payload["data"]["algorithms"][0] == "MD5"


class TestHashCommand:
    """Test the hash command."""

    def test_prints_path_digest_lines(self, runner: CliRunner, sample_tree: Path) -> None:
        # When
        result = runner.invoke(app, ["hash", str(sample_tree), "-p", "*.txt"])

        # Then
        assert result.exit_code == 0
        lines = set(result.output.splitlines())
        assert lines == {
            f"{sample_tree / 'a.txt'}: {_md5(b'hi')}",
            f"{sample_tree / 'b.txt'}: {_md5(b'hi')}",
            f"{sample_tree / 'empty.txt'}: {_md5(b'')}",
            f"{sample_tree / 'nested' / 'deep' / 'c.txt'}: {_md5(b'hello world')}",
        }

    @pytest.mark.parametrize("algorithm", ["sha256", "XXHASH64", "blake3"])
    def test_algorithm_option(self, runner: CliRunner, sample_tree: Path, algorithm: str) -> None:
        result = runner.invoke(app, ["hash", str(sample_tree), "-p", "a.txt", "--hash", algorithm])

        assert result.exit_code == 0
        assert result.output.startswith(f"{sample_tree / 'a.txt'}: ")

    def test_worker_count_does_not_change_output(self, runner: CliRunner, sample_tree: Path) -> None:
        one = runner.invoke(app, ["hash", str(sample_tree), "-w", "1"])
        eight = runner.invoke(app, ["hash", str(sample_tree), "-w", "8"])

        assert one.exit_code == eight.exit_code == 0
        assert set(one.output.splitlines()) == set(eight.output.splitlines())

    def test_zero_workers_rejected(self, runner: CliRunner, sample_tree: Path) -> None:
        result = runner.invoke(app, ["hash", str(sample_tree), "-w", "0"])

        assert result.exit_code == 2

    def test_unsupported_algorithm(self, runner: CliRunner, sample_tree: Path) -> None:
        result = runner.invoke(app, ["hash", str(sample_tree), "-a", "CRC32"])

        assert result.exit_code == 1
        assert "unsupported hash type: CRC32" in result.output

    def test_unsupported_algorithm_json(self, runner: CliRunner, sample_tree: Path) -> None:
        result = runner.invoke(app, ["--json", "hash", str(sample_tree), "-a", "CRC32"])

        assert result.exit_code == 1
        assert '"CLI_HASH_COMMAND_FAILED"' in result.output

    def test_missing_root_reports_error(self, runner: CliRunner, tmp_path: Path) -> None:
        missing = tmp_path / "missing"

        result = runner.invoke(app, ["hash", str(missing)])

        assert result.exit_code == 1
        assert f"error processing file {missing}" in result.output

    def test_zero_matches(self, runner: CliRunner, sample_tree: Path) -> None:
        result = runner.invoke(app, ["hash", str(sample_tree), "-p", "*.mp4"])

        assert result.exit_code == 0
        assert result.output == ""

    def test_no_display(self, runner: CliRunner, sample_tree: Path) -> None:
        result = runner.invoke(app, ["hash", str(sample_tree), "--no-display"])

        assert result.exit_code == 0
        assert result.output == ""

    def test_out_file(self, runner: CliRunner, sample_tree: Path, tmp_path: Path) -> None:
        """With an output file the digests are written, not printed."""
        # Given
        out_file = tmp_path / "hashes.txt"

        # When
        result = runner.invoke(app, ["hash", str(sample_tree), "-p", "*.jpg", "-o", str(out_file)])

        # Then
        assert result.exit_code == 0
        assert result.output == ""
        assert out_file.read_text(encoding="utf-8") == (
            f"{sample_tree / 'photo.jpg'}: {_md5(b'jpeg bytes')}\n"
        )

    def test_unwritable_out_file(self, runner: CliRunner, sample_tree: Path, tmp_path: Path) -> None:
        out_file = tmp_path / "missing-dir" / "hashes.txt"

        result = runner.invoke(app, ["hash", str(sample_tree), "-o", str(out_file)])

        assert result.exit_code == 1
        assert "could not write results" in result.output

    def test_rename(self, runner: CliRunner, sample_tree: Path) -> None:
        result = runner.invoke(app, ["hash", str(sample_tree), "-p", "*.jpg", "--rename", "--no-display"])

        assert result.exit_code == 0
        assert not (sample_tree / "photo.jpg").exists()
        assert (sample_tree / f"{_md5(b'jpeg bytes')}.jpg").read_bytes() == b"jpeg bytes"

    def test_rename_conflict_keeps_original(self, runner: CliRunner, tmp_path: Path) -> None:
        """Two files with the same content cannot both take the digest name."""
        # Given
        (tmp_path / "a.txt").write_bytes(b"hi")
        (tmp_path / "b.txt").write_bytes(b"hi")

        # When
        result = runner.invoke(app, ["hash", str(tmp_path), "--rename", "--no-display"])

        # Then
        assert result.exit_code == 1
        assert "file already exists" in result.output
        assert (tmp_path / f"{_md5(b'hi')}.txt").exists()
        assert (tmp_path / "b.txt").read_bytes() == b"hi"

    def test_table_output(self, runner: CliRunner, sample_tree: Path) -> None:
        result = runner.invoke(app, ["hash", str(sample_tree), "-p", "*.jpg", "--table"], env=WIDE_TERMINAL)

        assert result.exit_code == 0
        assert "Hash Results" in result.output
        assert _md5(b"jpeg bytes") in result.output

    def test_stats_report(self, runner: CliRunner, sample_tree: Path) -> None:
        result = runner.invoke(app, ["hash", str(sample_tree), "--stats"], env=WIDE_TERMINAL)

        assert result.exit_code == 0
        assert "PIPELINE STATISTICS" in result.output

    def test_json_output(self, runner: CliRunner, sample_tree: Path) -> None:
        # When
        result = runner.invoke(app, ["--json", "hash", str(sample_tree), "-p", "*.txt", "-a", "SHA1", "--stats"])

        # Then
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["success"] is True
        assert payload["command"] == "hash"
        data = payload["data"]
        assert data["algorithm"] == "SHA1"
        assert data["file_pattern"] == "*.txt"
        assert data["success_count"] == 4
        assert data["error_count"] == 0
        assert data["results"][str(sample_tree / "a.txt")] == hashlib.sha1(b"hi").hexdigest()
        assert data["statistics"]["hashing"]["successes"] == 4

    def test_json_output_with_rename(self, runner: CliRunner, sample_tree: Path) -> None:
        result = runner.invoke(app, ["--json", "hash", str(sample_tree), "-p", "*.png", "--rename"])

        assert result.exit_code == 0
        renamed = json.loads(result.stdout)["data"]["renamed"]
        assert renamed == [
            {
                "source": str(sample_tree / "image.png"),
                "target": str(sample_tree / f"{_md5(b'png bytes')}.png"),
                "renamed": True,
            },
        ]

    def test_rename_from_environment(
        self,
        runner: CliRunner,
        sample_tree: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("HASHCALC_OUTPUT__RENAME", "true")

        result = runner.invoke(app, ["hash", str(sample_tree), "-p", "*.png", "--no-display"])

        assert result.exit_code == 0
        assert (sample_tree / f"{_md5(b'png bytes')}.png").exists()
