"""hashcalc Error Handling Module

This module defines the error handling system for hashcalc, providing
structured error classes with context information and user-friendly messages.

The error hierarchy follows these principles:
- One Source of Truth: All error codes are defined in ErrorCode enum
- Structured Context: ErrorContext provides additional information
- Per-file errors are values: pipeline errors travel inside HashResult
  records instead of unwinding the run
- Proper Exception Chaining: Original exceptions are preserved
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Union

# Type alias for primitive context values (str, int, float, bool only)
PrimitiveContextValue = Union[str, int, float, bool]


class ErrorCode(str, Enum):
    """Error codes for hashcalc.

    This enum serves as the single source of truth for all error codes
    used throughout the application.
    """

    # Configuration Errors
    UNSUPPORTED_ALGORITHM = "UNSUPPORTED_ALGORITHM"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    CONFIG_MISSING = "CONFIG_MISSING"
    INVALID_CONFIG = "INVALID_CONFIG"

    # Traversal Errors
    TRAVERSAL_ERROR = "TRAVERSAL_ERROR"

    # File System Errors
    FILE_OPEN_ERROR = "FILE_OPEN_ERROR"
    FILE_READ_ERROR = "FILE_READ_ERROR"
    FILE_WRITE_ERROR = "FILE_WRITE_ERROR"
    FILE_ALREADY_EXISTS = "FILE_ALREADY_EXISTS"
    FILE_RENAME_ERROR = "FILE_RENAME_ERROR"

    # Hashing Errors
    HASH_COMPUTATION_FAILED = "HASH_COMPUTATION_FAILED"

    # Application Errors
    APPLICATION_ERROR = "APPLICATION_ERROR"
    OPERATION_CANCELLED = "OPERATION_CANCELLED"

    # Pipeline Errors
    PIPELINE_EXECUTION_ERROR = "PIPELINE_EXECUTION_ERROR"
    PIPELINE_STATE_ERROR = "PIPELINE_STATE_ERROR"
    QUEUE_OPERATION_ERROR = "QUEUE_OPERATION_ERROR"
    SCANNER_ERROR = "SCANNER_ERROR"
    WORKER_POOL_ERROR = "WORKER_POOL_ERROR"
    COLLECTOR_ERROR = "COLLECTOR_ERROR"

    # CLI Errors
    CLI_UNEXPECTED_ERROR = "CLI_UNEXPECTED_ERROR"
    CLI_INVALID_ARGUMENTS = "CLI_INVALID_ARGUMENTS"
    CLI_HASH_COMMAND_FAILED = "CLI_HASH_COMMAND_FAILED"


def _coerce_primitives(value: Any | None) -> dict[str, PrimitiveContextValue] | None:
    """Coerce additional_data values to primitives.

    Converts Path and Enum values to primitive types.

    Args:
        value: Input dictionary or None

    Returns:
        Dictionary with primitive values only, or None

    Raises:
        TypeError: If value is not a dict or contains unconvertible types
    """
    if value is None:
        return None

    if not isinstance(value, dict):
        error_msg = f"additional_data must be dict, got {type(value).__name__}"
        raise TypeError(error_msg)

    coerced: dict[str, PrimitiveContextValue] = {}
    for key, val in value.items():
        if isinstance(val, (str, int, float, bool)):
            coerced[key] = val
        elif isinstance(val, Path):
            coerced[key] = str(val)
        elif isinstance(val, Enum):
            coerced[key] = val.value
        else:
            error_msg = (
                f"Cannot coerce {type(val).__name__} to primitive type. "
                f"Only str, int, float, bool, Path, Enum are allowed."
            )
            raise TypeError(error_msg)

    return coerced


@dataclass(frozen=True)
class ErrorContext:
    """Context information for errors.

    Only primitive types (str, int, float, bool) are allowed in
    additional_data so that contexts serialize safely into log records.

    Attributes:
        file_path: Optional file path associated with the error
        operation: Optional operation name that caused the error
        additional_data: Optional dict with primitive values only
    """

    file_path: str | None = None
    operation: str | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        """Post-initialization coercion of additional_data."""
        if self.additional_data is not None:
            coerced = _coerce_primitives(self.additional_data)
            object.__setattr__(self, "additional_data", coerced)

    def safe_dict(self) -> dict[str, Any]:
        """Export context as a dict with a guaranteed additional_data key.

        Returns:
            Dictionary containing the populated fields.

        Example:
            >>> ErrorContext(file_path="/a.txt").safe_dict()
            {'file_path': '/a.txt', 'additional_data': {}}
        """
        data: dict[str, Any] = {}
        if self.file_path is not None:
            data["file_path"] = self.file_path
        if self.operation is not None:
            data["operation"] = self.operation
        data["additional_data"] = self.additional_data or {}
        return data


class HashCalcError(Exception):
    """Base exception class for all hashcalc errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize HashCalcError.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            context: Additional context information
            original_error: Original exception that caused this error
        """
        self.code = code
        self.message = message
        self.context = context or ErrorContext()
        self.original_error = original_error
        super().__init__(f"{code.value}: {message}")

    def __str__(self) -> str:
        """Return string representation of the error."""
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging and JSON output.

        Returns:
            Dictionary with code, message, context and original_error.
        """
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }


class InfrastructureError(HashCalcError):
    """Infrastructure-related errors.

    These errors occur when interacting with the file system:
    walking directories, opening, reading, writing or renaming files.
    """


class ApplicationError(HashCalcError):
    """Application-level errors.

    These errors describe invalid configuration or invalid use of the
    application's own objects (for example restarting a finished pipeline).
    """


class UnsupportedAlgorithmError(ApplicationError):
    """Raised when a hash algorithm identifier is not in the registry.

    This is the only error that is fatal to a whole run; it is raised
    before any traversal starts.
    """

    def __init__(self, identifier: str, supported: list[str] | None = None) -> None:
        supported = supported or []
        super().__init__(
            ErrorCode.UNSUPPORTED_ALGORITHM,
            f"unsupported hash type: {identifier}",
            ErrorContext(
                operation="get_hasher",
                additional_data={
                    "identifier": identifier,
                    "supported": ", ".join(supported),
                },
            ),
        )
        self.identifier = identifier


class TraversalError(InfrastructureError):
    """A directory (or the root itself) could not be walked."""


class OpenFailureError(InfrastructureError):
    """A discovered file could not be opened for reading."""


class ReadFailureError(InfrastructureError):
    """Reading a file failed while its digest was being computed."""


class AlreadyExistsError(InfrastructureError):
    """The digest-named rename target is already occupied."""


class RenameError(InfrastructureError):
    """Renaming a file to its digest name failed."""


class OutputWriteError(InfrastructureError):
    """The results file could not be written."""


class OperationCancelledError(ApplicationError):
    """The run was cancelled before this file could be hashed."""


class PipelineStateError(ApplicationError):
    """A pipeline handle was used outside of its allowed state."""


class CliError(ApplicationError):
    """CLI-specific error carrying the process exit code."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
        command: str | None = None,
        exit_code: int = 1,
    ) -> None:
        super().__init__(code, message, context, original_error)
        self.command = command
        self.exit_code = exit_code


def create_traversal_error(path: str | Path, original_error: OSError) -> TraversalError:
    """Create a TraversalError for a directory that could not be walked."""
    return TraversalError(
        ErrorCode.TRAVERSAL_ERROR,
        f"cannot walk {path}: {original_error.strerror or original_error}",
        ErrorContext(
            file_path=str(path),
            operation="scan_directory",
            additional_data={"error_type": type(original_error).__name__},
        ),
        original_error=original_error,
    )


def create_open_failure_error(path: str | Path, original_error: OSError) -> OpenFailureError:
    """Create an OpenFailureError for a file that could not be opened."""
    return OpenFailureError(
        ErrorCode.FILE_OPEN_ERROR,
        f"could not open file: {original_error.strerror or original_error}",
        ErrorContext(
            file_path=str(path),
            operation="open_file",
            additional_data={"error_type": type(original_error).__name__},
        ),
        original_error=original_error,
    )


def create_cli_error(
    message: str,
    command: str | None = None,
    original_error: Exception | None = None,
    exit_code: int = 1,
    code: ErrorCode = ErrorCode.CLI_UNEXPECTED_ERROR,
) -> CliError:
    """Create a CLI error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"command": command} if command else None
    )
    return CliError(
        code,
        message,
        ErrorContext(operation="cli", additional_data=additional_data),
        original_error,
        command,
        exit_code,
    )
