"""Unified CLI output formatting for JSON and human-readable output."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from typing import Any, NoReturn

import click

from mediashrink.cli.exit_codes import ExitCode
from mediashrink.errors import (
    HashFailureError,
    InvalidSignatureError,
    MalformedHeaderError,
    MalformedStringError,
    MediaShrinkError,
    ToolInvocationError,
    ToolOutputUnparsableError,
    UnknownMediaTypeError,
    UnsupportedFormatError,
)


@dataclass
class CLIResult:
    """Result object for CLI operations.

    Provides consistent JSON serialization for command results.
    """

    success: bool
    message: str
    data: dict[str, Any] = field(default_factory=dict)
    exit_code: ExitCode | int = ExitCode.SUCCESS

    def to_json(self) -> str:
        """Serialize to JSON string."""
        output: dict[str, Any] = {
            "status": "completed" if self.success else "failed",
        }
        if self.success:
            output["message"] = self.message
            output.update(self.data)
        else:
            if isinstance(self.exit_code, ExitCode):
                code_name = self.exit_code.name
            else:
                code_name = "UNKNOWN_ERROR"
            output["error"] = {
                "code": code_name,
                "message": self.message,
            }
        return json.dumps(output, indent=2)


def exit_code_for(error: BaseException) -> ExitCode:
    """Map an exception raised by the library to a CLI exit code."""
    if isinstance(error, (InvalidSignatureError, MalformedStringError)):
        return ExitCode.INVALID_INPUT
    if isinstance(error, UnknownMediaTypeError):
        return ExitCode.UNKNOWN_MEDIA_TYPE
    if isinstance(error, ToolInvocationError):
        if error.returncode is None:
            return ExitCode.TOOL_NOT_AVAILABLE
        return ExitCode.OPERATION_FAILED
    if isinstance(error, (ToolOutputUnparsableError, MalformedHeaderError)):
        return ExitCode.PARSE_ERROR
    if isinstance(error, (UnsupportedFormatError, HashFailureError)):
        return ExitCode.OPERATION_FAILED
    if isinstance(error, FileNotFoundError):
        return ExitCode.TARGET_NOT_FOUND
    if isinstance(error, (MediaShrinkError, OSError)):
        return ExitCode.OPERATION_FAILED
    return ExitCode.GENERAL_ERROR


def error_exit(
    message: str,
    code: ExitCode | int,
    json_output: bool = False,
) -> NoReturn:
    """Exit with formatted error message.

    Args:
        message: Error message to display.
        code: Exit code to use (ExitCode enum or int).
        json_output: Whether to format output as JSON.

    Note:
        This function never returns; it always calls sys.exit().
    """
    if isinstance(code, ExitCode):
        code_name = code.name
        exit_value = int(code)
    else:
        code_name = "UNKNOWN_ERROR"
        exit_value = code

    if json_output:
        click.echo(
            json.dumps(
                {
                    "status": "failed",
                    "error": {
                        "code": code_name,
                        "message": message,
                    },
                }
            ),
            err=True,
        )
    else:
        click.echo(f"Error: {message}", err=True)

    sys.exit(exit_value)


def fail_with(error: BaseException, json_output: bool = False) -> NoReturn:
    """Exit with the message and exit code matching error."""
    error_exit(str(error), exit_code_for(error), json_output)


def success_output(result: CLIResult, json_output: bool = False) -> None:
    """Output successful result in appropriate format."""
    if json_output:
        click.echo(result.to_json())
    else:
        click.echo(result.message)


def warning_output(message: str, json_output: bool = False) -> None:
    """Output a warning message (suppressed in JSON mode)."""
    if not json_output:
        click.echo(f"Warning: {message}", err=True)
