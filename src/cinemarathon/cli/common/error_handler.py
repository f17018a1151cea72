"""
CLI Error Handling Utilities

Consistent error handling across CLI commands: exceptions are mapped to
CliError instances, logged with structured context and reported to the
user as plain text or JSON.
"""

from __future__ import annotations

import functools
import json
import logging
import sys
from typing import Any, Callable, TypeVar

import typer

from cinemarathon.cli.common.context import get_cli_context
from cinemarathon.shared.errors import (
    ApplicationError,
    CliError,
    ErrorCode,
    InfrastructureError,
    SecurityError,
    create_cli_error,
)

logger = logging.getLogger(__name__)

EXIT_INTERRUPTED = 130


def format_json_output(
    command: str,
    *,
    success: bool,
    errors: list[str] | None = None,
    data: dict[str, Any] | list[Any] | None = None,
) -> str:
    """Format command output as a JSON document.

    Args:
        command: The command that was executed
        success: Whether the operation was successful
        errors: List of error messages
        data: Payload to include

    Returns:
        Indented JSON string
    """
    output: dict[str, Any] = {"success": success, "command": command}

    if errors:
        output["errors"] = errors

    if data is not None:
        output["data"] = data

    return json.dumps(output, indent=2, ensure_ascii=False, default=str)


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
    error_context = {
        "command": command,
        "error_type": type(error).__name__,
        "json_output": json_output,
    }
    cli_error = _map_error_to_cli_error(error, command, error_context)
    _log_error(error, command, cli_error, error_context)

    if json_output:
        sys.stdout.write(
            format_json_output(
                command,
                success=False,
                errors=[cli_error.message],
                data={
                    "error_code": cli_error.code.value,
                    "error_type": type(error).__name__,
                    "exit_code": cli_error.exit_code,
                },
            )
            + "\n"
        )
    else:
        sys.stderr.write(f"Error: {cli_error.message}\n")

    return cli_error.exit_code


def _map_error_to_cli_error(
    error: BaseException,
    command: str,
    error_context: dict[str, Any],
) -> CliError:
    """Map specific exception types to CLI errors."""
    original = error if isinstance(error, Exception) else None

    if isinstance(error, CliError):
        error_context["error_code"] = error.code.value
        return error

    if isinstance(error, SecurityError):
        error_context["error_code"] = error.code.value
        return create_cli_error(
            message=f"Configuration error: {error.message}",
            command=command,
            exit_code=2,
            original_error=original,
        )

    if isinstance(error, ApplicationError):
        error_context["error_code"] = error.code.value
        return create_cli_error(
            message=f"Application error: {error.message}",
            command=command,
            original_error=original,
        )

    if isinstance(error, InfrastructureError):
        error_context["error_code"] = error.code.value
        return create_cli_error(
            message=f"Source error: {error.message}",
            command=command,
            original_error=original,
        )

    if isinstance(error, KeyboardInterrupt):
        error_context["interrupt_type"] = "user_interrupt"
        return CliError(
            code=ErrorCode.OPERATION_CANCELLED,
            message="Command interrupted by user",
            command=command,
            exit_code=EXIT_INTERRUPTED,
        )

    if isinstance(error, (ValueError, KeyError, TypeError, AttributeError)):
        error_context["error_category"] = "data_processing"
        return create_cli_error(
            message=f"Data processing error: {error}",
            command=command,
            original_error=original,
        )

    error_context["error_category"] = "unexpected"
    return CliError(
        code=ErrorCode.CLI_UNEXPECTED_ERROR,
        message=f"Unexpected error: {error}",
        command=command,
        original_error=original,
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
    elif isinstance(error, (ApplicationError, SecurityError, InfrastructureError)):
        logger.error("CLI error in %s: %s", command, cli_error.message, extra={"context": error_context})
    else:
        logger.error(
            "CLI error in %s: %s",
            command,
            cli_error.message,
            extra={"context": error_context},
            exc_info=error,
        )


F = TypeVar("F", bound=Callable[..., Any])


def handle_cli_errors(command: str) -> Callable[[F], F]:
    """Decorator for standardized CLI error handling.

    Wraps a Typer command so any failure is reported through
    ``handle_cli_error`` and turned into a ``typer.Exit`` with the mapped
    exit code.

    Example:
        >>> @app.command("plan")
        ... @handle_cli_errors("plan")
        ... def plan_command(budget: str) -> None: ...
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except (typer.Exit, typer.Abort):
                raise
            except (Exception, KeyboardInterrupt) as e:  # noqa: BLE001
                exit_code = handle_cli_error(e, command, json_output=get_cli_context().json_output)
                raise typer.Exit(exit_code) from e

        return wrapper  # type: ignore[return-value]

    return decorator
