"""
Reusable Typer Options Module

This module provides the global Typer options used by the main callback:
- verbose: Verbosity level (count-based)
- log_level: Logging level (enum-based)
- json_output: JSON output mode (flag-based)
- version: Version information (eager)
- config: TOML configuration file
"""

from __future__ import annotations

import typer

from hashcalc.shared.constants import CLIDefaults, CLIHelp, CLIOptions

# Verbose option - count-based for multiple -v flags
verbose_option = typer.Option(
    "--verbose",
    "-v",
    count=True,
    help="Enable verbose output (-v for INFO, -vv for DEBUG).",
)

# Log level option - enum-based with case-insensitive choices
log_level_option = typer.Option(
    "--log-level",
    case_sensitive=False,
    help="Set the logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Default: from configuration.",
)

# JSON output option - flag-based
json_output_option = typer.Option(
    "--json",
    help="Enable machine-readable JSON output instead of human-readable format.",
)


def version_callback(value: bool) -> None:
    """Print version information and exit."""
    if value:
        typer.echo(CLIHelp.VERSION_TEXT.format(version=CLIDefaults.VERSION))
        raise typer.Exit


# Version option - for main app only, handled while parsing
version_option = typer.Option(
    "--version",
    "-V",
    help=CLIHelp.VERSION_HELP,
    callback=version_callback,
    is_eager=True,
)

config_option = typer.Option(
    CLIOptions.CONFIG,
    CLIOptions.CONFIG_SHORT,
    help=CLIHelp.CONFIG_HELP,
    exists=True,
    file_okay=True,
    dir_okay=False,
)
