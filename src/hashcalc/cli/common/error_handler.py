"""
CLI Error Handling Utilities

This module maps any exception escaping a command to a CliError, logs it
and prints it (plain text on stderr, or a JSON document on stdout in
--json mode), and returns the process exit code.
"""

from __future__ import annotations

import logging
from typing import Any

import typer

from hashcalc.cli.json_formatter import echo_json, format_error_output
from hashcalc.shared.constants import CLIDefaults
from hashcalc.shared.errors import (
    ApplicationError,
    CliError,
    ErrorCode,
    InfrastructureError,
    create_cli_error,
)

logger = logging.getLogger(__name__)


def handle_cli_error(
    error: BaseException,
    command: str,
    *,
    json_output: bool = False,
) -> int:
    """Handle CLI errors with consistent formatting and logging.

    Args:
        error: The exception that occurred
        command: The CLI command being executed
        json_output: Whether to output JSON format

    Returns:
        Exit code for the CLI command
    """
    error_context: dict[str, Any] = {
        "command": command,
        "error_type": type(error).__name__,
        "json_output": json_output,
    }
    cli_error = _map_error_to_cli_error(error, command, error_context)
    _log_error(error, command, cli_error, error_context)
    _output_error(cli_error, error, command, error_context, json_output=json_output)

    return cli_error.exit_code


def _map_error_to_cli_error(
    error: BaseException,
    command: str,
    error_context: dict[str, Any],
) -> CliError:
    """Map specific exception types to CLI errors."""
    if isinstance(error, CliError):
        error_context["error_code"] = error.code.value
        return error

    if isinstance(error, (ApplicationError, InfrastructureError)):
        error_context["error_code"] = error.code.value
        return create_cli_error(
            message=error.message,
            command=command,
            original_error=error,
            code=ErrorCode.CLI_HASH_COMMAND_FAILED,
        )

    if isinstance(error, KeyboardInterrupt):
        error_context["interrupt_type"] = "user_interrupt"
        return create_cli_error(
            message="Command interrupted by user",
            command=command,
            exit_code=CLIDefaults.EXIT_INTERRUPTED,
        )

    if isinstance(error, OSError):
        error_context["error_category"] = "file_system"
        return create_cli_error(
            message=f"File system error: {error}",
            command=command,
            original_error=error,
        )

    if isinstance(error, (ValueError, TypeError)):
        error_context["error_category"] = "invalid_arguments"
        return create_cli_error(
            message=f"Invalid arguments: {error}",
            command=command,
            original_error=error,
            code=ErrorCode.CLI_INVALID_ARGUMENTS,
        )

    error_context["error_category"] = "unexpected"
    return create_cli_error(
        message=f"Unexpected error: {error}",
        command=command,
        original_error=error if isinstance(error, Exception) else None,
    )


def _log_error(
    error: BaseException,
    command: str,
    cli_error: CliError,
    error_context: dict[str, Any],
) -> None:
    """Log the error with structured context."""
    if isinstance(error, KeyboardInterrupt):
        logger.warning("Command interrupted: %s", cli_error.message, extra={"context": error_context})
    elif isinstance(error, (ApplicationError, InfrastructureError)):
        # Expected failures, no traceback
        logger.error(
            "CLI error in %s: %s",
            command,
            cli_error.message,
            extra={"error_code": cli_error.code.value, "context": error_context},
        )
    else:
        logger.error(
            "CLI error in %s: %s",
            command,
            cli_error.message,
            exc_info=(type(error), error, error.__traceback__),
            extra={"error_code": cli_error.code.value, "context": error_context},
        )


def _output_error(
    cli_error: CliError,
    error: BaseException,
    command: str,
    error_context: dict[str, Any],
    *,
    json_output: bool,
) -> None:
    """Output error message in appropriate format."""
    if json_output:
        payload = format_error_output(
            command,
            [cli_error.message],
            data={
                "error_code": cli_error.code.value,
                "error_type": type(error).__name__,
                "exit_code": cli_error.exit_code,
                "context": error_context,
            },
        )
        echo_json(payload)
    else:
        typer.echo(f"Error: {cli_error.message}", err=True)
