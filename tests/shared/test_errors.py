"""Tests for the structured error hierarchy."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

import pytest

from hashcalc.shared.errors import (
    AlreadyExistsError,
    ApplicationError,
    CliError,
    ErrorCode,
    ErrorContext,
    HashCalcError,
    InfrastructureError,
    OpenFailureError,
    OperationCancelledError,
    ReadFailureError,
    TraversalError,
    UnsupportedAlgorithmError,
    create_cli_error,
    create_open_failure_error,
    create_traversal_error,
)


class _Color(Enum):
    RED = "red"


class TestErrorContext:
    """Test context coercion and export."""

    def test_coerces_path_and_enum(self) -> None:
        context = ErrorContext(additional_data={"path": Path("a/b"), "color": _Color.RED, "n": 3})

        assert context.additional_data == {"path": str(Path("a/b")), "color": "red", "n": 3}

    def test_rejects_non_primitive_values(self) -> None:
        with pytest.raises(TypeError, match="Cannot coerce list"):
            ErrorContext(additional_data={"items": [1, 2]})

    def test_rejects_non_dict(self) -> None:
        with pytest.raises(TypeError, match="additional_data must be dict"):
            ErrorContext(additional_data="oops")  # type: ignore[arg-type]

    def test_safe_dict(self) -> None:
        context = ErrorContext(file_path="/a.txt", operation="open_file")

        assert context.safe_dict() == {
            "file_path": "/a.txt",
            "operation": "open_file",
            "additional_data": {},
        }


class TestHashCalcError:
    """Test the base error."""

    def test_str_and_to_dict(self) -> None:
        original = OSError("disk gone")
        error = ReadFailureError(
            ErrorCode.FILE_READ_ERROR,
            "error reading stream",
            ErrorContext(file_path="/a.txt"),
            original_error=original,
        )

        assert str(error) == "FILE_READ_ERROR: error reading stream"
        assert error.to_dict() == {
            "code": "FILE_READ_ERROR",
            "message": "error reading stream",
            "context": {"file_path": "/a.txt", "additional_data": {}},
            "original_error": "disk gone",
        }

    def test_default_context(self) -> None:
        error = HashCalcError(ErrorCode.APPLICATION_ERROR, "failed")

        assert error.context == ErrorContext()
        assert error.original_error is None

    @pytest.mark.parametrize(
        ("error_class", "base"),
        [
            (TraversalError, InfrastructureError),
            (OpenFailureError, InfrastructureError),
            (ReadFailureError, InfrastructureError),
            (AlreadyExistsError, InfrastructureError),
            (OperationCancelledError, ApplicationError),
            (CliError, ApplicationError),
        ],
    )
    def test_hierarchy(self, error_class: type, base: type) -> None:
        assert issubclass(error_class, base)
        assert issubclass(error_class, HashCalcError)


class TestFactories:
    """Test the error factory functions."""

    def test_unsupported_algorithm(self) -> None:
        error = UnsupportedAlgorithmError("CRC32", ["MD5", "SHA1"])

        assert error.message == "unsupported hash type: CRC32"
        assert error.context.additional_data == {"identifier": "CRC32", "supported": "MD5, SHA1"}

    def test_traversal_error(self) -> None:
        cause = PermissionError(13, "Permission denied", "/locked")

        error = create_traversal_error("/locked", cause)

        assert error.code == ErrorCode.TRAVERSAL_ERROR
        assert error.message == "cannot walk /locked: Permission denied"
        assert error.context.additional_data == {"error_type": "PermissionError"}
        assert error.original_error is cause

    def test_open_failure_error(self) -> None:
        cause = FileNotFoundError(2, "No such file or directory")

        error = create_open_failure_error(Path("/gone.txt"), cause)

        assert error.code == ErrorCode.FILE_OPEN_ERROR
        assert error.message == "could not open file: No such file or directory"
        assert error.context.file_path == str(Path("/gone.txt"))

    def test_cli_error(self) -> None:
        error = create_cli_error("bad input", command="hash", exit_code=2)

        assert error.code == ErrorCode.CLI_UNEXPECTED_ERROR
        assert error.command == "hash"
        assert error.exit_code == 2
        assert error.context.additional_data == {"command": "hash"}
