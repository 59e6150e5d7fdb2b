"""Hash command handler for hashcalc CLI.

Runs the pipeline over a directory, then applies the collaborators
(console printer, renamer, results file writer) to the results.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from hashcalc.cli.common.models import HashOptions
from hashcalc.cli.json_formatter import echo_json, format_json_output
from hashcalc.config import Settings, get_config
from hashcalc.core.output import format_result_line, write_results_to_file
from hashcalc.core.pipeline import PipelineHandle
from hashcalc.core.renamer import RenameOutcome, rename_to_digest
from hashcalc.shared.constants import CLICommands, CLIDefaults
from hashcalc.shared.errors import HashCalcError
from hashcalc.shared.logging import log_operation_error
from hashcalc.shared.models import CollectedResults

logger = logging.getLogger(__name__)


def handle_hash_command(options: HashOptions, settings: Settings | None = None) -> int:
    """Handle the hash command.

    Per-file failures are reported and never stop the run; they only
    turn the exit code into EXIT_ERROR.

    Args:
        options: Validated hash command options
        settings: Settings to use, defaults to get_config()

    Returns:
        Exit code (0 when nothing failed, 1 otherwise)
    """
    settings = settings or get_config()
    out_file = options.out_file or (
        Path(settings.output.out_file) if settings.output.out_file else None
    )
    rename = options.rename or settings.output.rename
    display = options.display and settings.output.display
    # Results are printed live only in the plain text mode without an output file
    live_display = display and out_file is None and not options.table and not options.json_output

    handle = PipelineHandle.from_settings(
        options.path,
        settings,
        file_pattern=options.file_pattern,
        algorithm=options.algorithm,
        num_workers=options.workers,
    )
    logger.info(
        "Hashing %s with %s (%s workers)",
        options.path,
        handle.hasher.name,
        handle.num_workers,
    )

    for result in handle.stream():
        if options.json_output:
            continue
        if result.ok:
            if live_display:
                typer.echo(format_result_line(result.path, result.digest or ""))
        else:
            typer.echo(result.describe_error(), err=True)

    results = handle.results
    failures: list[str] = [result.describe_error() for result in results.errors]

    renamed: list[RenameOutcome] = []
    if rename:
        renamed, rename_failures = _rename_all(results, quiet=options.json_output)
        failures.extend(rename_failures)

    if out_file is not None:
        try:
            write_results_to_file(results.digests, out_file)
        except HashCalcError as e:
            log_operation_error(logger, e)
            failures.append(e.message)
            if not options.json_output:
                typer.echo(f"Error: {e.message}", err=True)

    if options.json_output:
        data = _collect_hash_data(handle, results, renamed, include_stats=options.stats)
        output = format_json_output(
            success=not failures,
            command=CLICommands.HASH,
            data=data,
            errors=failures,
        )
        echo_json(output)
    else:
        if options.table and display:
            display_hash_results(results, Console())
        if options.stats:
            Console(stderr=True).print(handle.statistics().format_report(), markup=False)

    return CLIDefaults.EXIT_ERROR if failures else CLIDefaults.EXIT_SUCCESS


def _rename_all(results: CollectedResults, *, quiet: bool) -> tuple[list[RenameOutcome], list[str]]:
    """Rename every hashed file to its digest, collecting failures."""
    outcomes: list[RenameOutcome] = []
    failures: list[str] = []

    for path in sorted(results.digests, key=str):
        try:
            outcomes.append(rename_to_digest(path, results.digests[path]))
        except HashCalcError as e:
            log_operation_error(logger, e, level=logging.WARNING)
            failures.append(e.message)
            if not quiet:
                typer.echo(f"Error: {e.message}", err=True)

    return outcomes, failures


def display_hash_results(results: CollectedResults, console: Console) -> None:
    """Display results in a Rich table, failures last.

    Args:
        results: Aggregated pipeline results
        console: Rich console for output
    """
    if not results.result_count:
        console.print("[yellow]No files matched.[/yellow]")
        return

    table = Table(title="Hash Results")
    table.add_column("File", style="cyan", overflow="fold")
    table.add_column("Digest / Error", style="green", overflow="fold")

    for path in sorted(results.digests, key=str):
        table.add_row(str(path), results.digests[path])
    for failed in results.errors:
        message = failed.error.message if failed.error else ""
        table.add_row(str(failed.path), f"[red]{message}[/red]")

    console.print(table)


def _collect_hash_data(
    handle: PipelineHandle,
    results: CollectedResults,
    renamed: list[RenameOutcome],
    *,
    include_stats: bool,
) -> dict[str, Any]:
    """Collect the JSON payload of the hash command."""
    data: dict[str, Any] = {
        "root": str(handle.root_path),
        "file_pattern": handle.file_pattern,
        "algorithm": handle.hasher.name,
        "workers": handle.num_workers,
        "results": {str(path): results.digests[path] for path in sorted(results.digests, key=str)},
        "errors": [failed.to_dict() for failed in results.errors],
        "success_count": len(results.digests),
        "error_count": len(results.errors),
    }
    if renamed:
        data["renamed"] = [
            {"source": str(o.source), "target": str(o.target), "renamed": o.renamed} for o in renamed
        ]
    if include_stats:
        data["statistics"] = handle.statistics().to_dict()
    return data
