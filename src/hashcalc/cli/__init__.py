"""Command-line interface for hashcalc."""

from __future__ import annotations

from hashcalc.cli.typer_app import app, run

__all__ = ["app", "run"]
