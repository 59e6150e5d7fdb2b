"""
hashcalc Typer CLI Application

This is the main Typer-based CLI application for hashcalc.
It provides a type-safe command-line interface with automatic help
generation and consistent error handling.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer

from hashcalc.cli.common.context import (
    CliContext,
    LogLevel,
    get_cli_context,
    set_cli_context,
)
from hashcalc.cli.common.error_handler import handle_cli_error
from hashcalc.cli.common.models import HashOptions
from hashcalc.cli.common.options import (
    config_option,
    json_output_option,
    log_level_option,
    verbose_option,
    version_option,
)
from hashcalc.cli.hash_handler import handle_hash_command
from hashcalc.cli.json_formatter import echo_json, format_json_output
from hashcalc.config import get_config, reload_config
from hashcalc.core.hashing import supported_algorithms
from hashcalc.shared.constants import (
    CLICommands,
    CLIDefaults,
    CLIHelp,
    CLIOptions,
)
from hashcalc.shared.logging import setup_structured_logger

# Version information
__version__ = CLIDefaults.VERSION


def main_callback(
    verbose: int,
    log_level: LogLevel | None,
    json_output: bool,
    config: Path | None,
) -> None:
    """
    Process the common options.

    Sets up the global CLI context, loads the configuration and
    configures logging before any command runs.

    Args:
        verbose: Verbosity level (count-based)
        log_level: Logging level (enum-based)
        json_output: Whether to output in JSON format
        config: Optional TOML configuration file
    """
    context = CliContext(
        verbose=verbose,
        log_level=log_level,
        json_output=json_output,
        config_path=config,
    )
    set_cli_context(context)

    settings = reload_config(config) if config is not None else get_config()
    setup_structured_logger(
        level=context.get_effective_log_level(settings.logging.level),
        log_file=settings.logging.log_file,
        use_rich_console=settings.logging.rich_console,
    )


app = typer.Typer(
    name=CLIHelp.APP_NAME,
    help=CLIHelp.APP_DESCRIPTION,
    add_completion=True,
    rich_markup_mode=CLIHelp.APP_STYLE,
    no_args_is_help=True,
    invoke_without_command=True,
)


@app.callback()
def main(
    verbose: Annotated[int, verbose_option] = 0,
    log_level: Annotated[LogLevel | None, log_level_option] = None,
    json_output: Annotated[bool, json_output_option] = False,
    version: Annotated[bool, version_option] = False,  # noqa: ARG001
    config: Annotated[Path | None, config_option] = None,
) -> None:
    """Main CLI callback with error handling."""
    try:
        main_callback(verbose, log_level, json_output, config)
    except typer.Exit:
        raise
    except Exception as e:  # noqa: BLE001
        exit_code = handle_cli_error(e, "main-callback", json_output=json_output)
        raise typer.Exit(exit_code) from e


@app.command(CLICommands.HASH)
def hash_command_typer(  # pylint: disable=too-many-arguments
    path: Path = typer.Argument(
        Path(CLIDefaults.DEFAULT_PATH),
        help=CLIHelp.HASH_PATH_HELP,
    ),
    file_pattern: str | None = typer.Option(
        None,
        CLIOptions.FILE_PATTERN,
        CLIOptions.FILE_PATTERN_SHORT,
        help=CLIHelp.FILE_PATTERN_HELP,
    ),
    algorithm: str | None = typer.Option(
        None,
        CLIOptions.HASH,
        CLIOptions.HASH_SHORT,
        help=CLIHelp.HASH_TYPE_HELP.format(algorithms=", ".join(supported_algorithms())),
    ),
    out_file: Path | None = typer.Option(
        None,
        CLIOptions.OUT_FILE,
        CLIOptions.OUT_FILE_SHORT,
        help=CLIHelp.OUT_FILE_HELP,
        dir_okay=False,
    ),
    rename: bool = typer.Option(
        False,
        CLIOptions.RENAME,
        help=CLIHelp.RENAME_HELP,
    ),
    display: bool = typer.Option(
        True,
        CLIOptions.DISPLAY,
        help=CLIHelp.DISPLAY_HELP,
    ),
    workers: int | None = typer.Option(
        None,
        CLIOptions.WORKERS,
        CLIOptions.WORKERS_SHORT,
        min=1,
        help=CLIHelp.WORKERS_HELP,
    ),
    table: bool = typer.Option(
        False,
        CLIOptions.TABLE,
        help=CLIHelp.TABLE_HELP,
    ),
    stats: bool = typer.Option(
        False,
        CLIOptions.STATS,
        help=CLIHelp.STATS_HELP,
    ),
) -> None:
    """
    Compute file digests concurrently.

    Walks PATH recursively, hashes every file whose name matches the
    pattern and prints "path: digest" for each of them.

    Examples:
        # MD5 of every file under the current directory
        hashcalc hash

        # SHA256 of the JPEG files, written to a file
        hashcalc hash ./photos -p "*.jpg" -a SHA256 -o hashes.txt

        # Rename files to their BLAKE3 digest
        hashcalc hash ./photos -a BLAKE3 --rename --no-display
    """
    context = get_cli_context()
    try:
        options = HashOptions(
            path=path,
            file_pattern=file_pattern,
            algorithm=algorithm,
            out_file=out_file,
            rename=rename,
            display=display,
            workers=workers,
            table=table,
            stats=stats,
            json_output=context.is_json_output_enabled(),
        )
        exit_code = handle_hash_command(options)
    except (Exception, KeyboardInterrupt) as e:  # noqa: BLE001
        exit_code = handle_cli_error(
            e,
            CLICommands.HASH,
            json_output=context.is_json_output_enabled(),
        )

    raise typer.Exit(exit_code)


@app.command(CLICommands.ALGORITHMS, help=CLIHelp.ALGORITHMS_HELP)
def algorithms_command_typer() -> None:
    """List supported hash algorithms."""
    algorithms = supported_algorithms()
    if get_cli_context().is_json_output_enabled():
        output = format_json_output(
            success=True,
            command=CLICommands.ALGORITHMS,
            data={"algorithms": algorithms},
        )
        echo_json(output)
        return

    for name in algorithms:
        typer.echo(name)


def run() -> None:
    """Console script entry point."""
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(CLIDefaults.EXIT_INTERRUPTED)


if __name__ == "__main__":
    run()
