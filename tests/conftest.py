"""
Pytest configuration and shared fixtures for hashcalc tests.

This module provides common fixtures and configuration that can be used
across all test modules in the project.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Generator
from pathlib import Path

import pytest

from hashcalc.cli.common.context import clear_cli_context
from hashcalc.config import reset_config
from hashcalc.shared.logging import ROOT_LOGGER_NAME


@pytest.fixture(autouse=True)
def isolated_environment(
    tmp_path_factory: pytest.TempPathFactory,
    monkeypatch: pytest.MonkeyPatch,
) -> Generator[Path, None, None]:
    """Keep configuration, CLI context and logging state out of each test.

    - HOME points to an empty directory, so no user config file is found
    - the working directory is empty, so no ./hashcalc.toml is found
    - HASHCALC_* variables from the outer environment are removed
    """
    home = tmp_path_factory.mktemp("home")
    workdir = tmp_path_factory.mktemp("cwd")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(workdir)
    for key in list(os.environ):
        if key.startswith("HASHCALC_"):
            monkeypatch.delenv(key)

    reset_config()
    clear_cli_context()

    yield workdir

    reset_config()
    clear_cli_context()
    app_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(app_logger.handlers):
        handler.close()
    app_logger.handlers.clear()
    app_logger.setLevel(logging.NOTSET)
    app_logger.propagate = True


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create a small directory tree for hashing tests.

    Layout::

        root/
            a.txt        "hi"
            b.txt        "hi"
            empty.txt    ""
            photo.jpg    "jpeg bytes"
            image.png    "png bytes"
            nested/
                deep/
                    c.txt  "hello world"

    Returns:
        Path to the root directory.
    """
    root = tmp_path / "root"
    (root / "nested" / "deep").mkdir(parents=True)
    (root / "a.txt").write_bytes(b"hi")
    (root / "b.txt").write_bytes(b"hi")
    (root / "empty.txt").write_bytes(b"")
    (root / "photo.jpg").write_bytes(b"jpeg bytes")
    (root / "image.png").write_bytes(b"png bytes")
    (root / "nested" / "deep" / "c.txt").write_bytes(b"hello world")
    return root


@pytest.fixture
def sample_files(sample_tree: Path) -> set[Path]:
    """All regular files of ``sample_tree``."""
    return {path for path in sample_tree.rglob("*") if path.is_file()}
