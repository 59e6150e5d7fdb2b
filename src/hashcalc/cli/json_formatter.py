"""JSON envelope for ``--json`` mode.

Every command prints one document on stdout::

    {"command": ..., "data": ..., "errors": [...], "success": ...,
     "timestamp": ..., "warnings": [...]}
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from pathlib import PurePath
from typing import Any

import orjson
import typer

_DUMP_OPTIONS = orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2


def _default(obj: Any) -> Any:
    """Serialize the non-native values found in hash results."""
    if isinstance(obj, PurePath):
        return str(obj)
    if isinstance(obj, Enum):
        return obj.value
    raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")


def _envelope(
    success: bool,
    command: str,
    data: Any,
    errors: list[str],
    warnings: list[str],
) -> dict[str, Any]:
    return {
        "success": success and not errors,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "command": command,
        "data": data,
        "errors": errors,
        "warnings": warnings,
    }


def format_json_output(
    success: bool,
    command: str,
    data: Any | None = None,
    errors: list[str] | None = None,
    warnings: list[str] | None = None,
) -> bytes:
    """Format command output as a JSON envelope.

    Any error message forces ``success`` to False. Paths and enums in
    ``data`` are rendered as strings; if ``data`` still cannot be
    serialized, a failure envelope describing why is returned instead.

    Args:
        success: Whether the command executed successfully
        command: The command name ("hash" or "algorithms")
        data: The command's output data
        errors: List of error messages
        warnings: List of warning messages

    Returns:
        JSON-encoded bytes ready for output
    """
    document = _envelope(success, command, data, list(errors or []), list(warnings or []))
    try:
        return orjson.dumps(document, default=_default, option=_DUMP_OPTIONS)
    except TypeError as e:
        fallback = _envelope(False, command, None, [f"JSON serialization failed: {e!s}"], [])
        return orjson.dumps(fallback, option=_DUMP_OPTIONS)


def format_error_output(command: str, errors: list[str], data: Any | None = None) -> bytes:
    """Format a failure envelope."""
    return format_json_output(success=False, command=command, data=data, errors=errors)


def echo_json(payload: bytes) -> None:
    """Print an encoded envelope on stdout."""
    typer.echo(payload.decode("utf-8"))
