"""CineMarathon Error Handling Module

This module defines the error handling system for CineMarathon, providing
structured error classes with context information.

The error hierarchy follows these principles:
- One Source of Truth: All error codes are defined in ErrorCode enum
- Structured Context: ErrorContext provides additional information
- Proper Exception Chaining: Original exceptions are preserved

Source failures are not raised through the enrichment path. They travel as
values inside ``Failure`` results (see ``cinemarathon.shared.result``), so
the same error objects serve both as exceptions and as failure payloads.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Union

# Type alias for primitive context values (str, int, float, bool only)
PrimitiveContextValue = Union[str, int, float, bool]

class ErrorCode(str, Enum):
    """Error codes for CineMarathon.

    This enum serves as the single source of truth for all error codes
    used throughout the application.
    """

    # Network and API Errors
    NETWORK_ERROR = "NETWORK_ERROR"
    API_TIMEOUT = "API_TIMEOUT"

    # Primary catalog (TMDB) errors
    TMDB_API_CONNECTION_ERROR = "TMDB_API_CONNECTION_ERROR"
    TMDB_API_AUTHENTICATION_ERROR = "TMDB_API_AUTHENTICATION_ERROR"
    TMDB_API_RATE_LIMIT_EXCEEDED = "TMDB_API_RATE_LIMIT_EXCEEDED"
    TMDB_API_REQUEST_FAILED = "TMDB_API_REQUEST_FAILED"
    TMDB_API_TIMEOUT = "TMDB_API_TIMEOUT"
    TMDB_API_SERVER_ERROR = "TMDB_API_SERVER_ERROR"
    TMDB_API_INVALID_RESPONSE = "TMDB_API_INVALID_RESPONSE"
    TMDB_API_MEDIA_NOT_FOUND = "TMDB_API_MEDIA_NOT_FOUND"

    # Secondary video source (YouTube) errors
    YOUTUBE_API_REQUEST_FAILED = "YOUTUBE_API_REQUEST_FAILED"
    YOUTUBE_API_TIMEOUT = "YOUTUBE_API_TIMEOUT"
    YOUTUBE_API_QUOTA_EXCEEDED = "YOUTUBE_API_QUOTA_EXCEEDED"
    YOUTUBE_API_INVALID_RESPONSE = "YOUTUBE_API_INVALID_RESPONSE"

    # Validation Errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Configuration Errors
    MISSING_CONFIG = "MISSING_CONFIG"
    INVALID_CONFIG = "INVALID_CONFIG"

    # Application Errors
    OPERATION_CANCELLED = "OPERATION_CANCELLED"

    # CLI Errors
    CLI_COMMAND_FAILED = "CLI_COMMAND_FAILED"
    CLI_UNEXPECTED_ERROR = "CLI_UNEXPECTED_ERROR"

    # Business Logic Errors
    DATA_PROCESSING_ERROR = "DATA_PROCESSING_ERROR"


def _coerce_primitives(value: Any | None) -> dict[str, PrimitiveContextValue] | None:
    """Coerce additional_data values to primitives.

    Converts Path, Enum, Decimal to primitive types.

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
        elif isinstance(val, Decimal):
            coerced[key] = float(val)
        else:
            error_msg = (
                f"Cannot coerce {type(val).__name__} to primitive type. "
                f"Only str, int, float, bool, Path, Enum, Decimal are allowed."
            )
            raise TypeError(error_msg)

    return coerced

@dataclass(frozen=True)
class ErrorContext:
    """Context information for errors.

    Only primitive types (str, int, float, bool) are allowed in
    additional_data to ensure safe serialization into log records.

    Attributes:
        operation: Optional operation name that caused the error
        source: Optional external source name ("tmdb", "youtube")
        additional_data: Optional dict with primitive values only
    """

    operation: str | None = None
    source: str | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        """Post-initialization validation and coercion."""
        if self.additional_data is not None:
            coerced = _coerce_primitives(self.additional_data)
            object.__setattr__(self, "additional_data", coerced)

    def safe_dict(self) -> dict[str, Any]:
        """Export context as dict for logging.

        Returns:
            Dictionary with a guaranteed additional_data key.
        """
        data: dict[str, Any] = {}
        if self.operation is not None:
            data["operation"] = self.operation
        if self.source is not None:
            data["source"] = self.source
        data["additional_data"] = self.additional_data or {}
        return data

class CineMarathonError(Exception):
    """Base exception class for all CineMarathon errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize CineMarathonError.

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
        """Convert error to dictionary for logging.

        Returns:
            Dictionary representation of the error with code, message,
            context, and original_error (if present)
        """
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }

class DomainError(CineMarathonError):
    """Domain-specific errors.

    These errors occur when business rules are violated, e.g. a catalog
    record that fails structural validation after normalization.
    """

class InfrastructureError(CineMarathonError):
    """Infrastructure-related errors.

    These errors occur when interacting with external systems like the
    movie catalog or the video platform.
    """

class SourceUnavailableError(InfrastructureError):
    """An external source could not be reached or answered with an error.

    Examples:
    - Connection errors
    - Request timeouts
    - HTTP 4xx/5xx responses other than quota exhaustion
    - Malformed response payloads
    """

class QuotaExceededError(InfrastructureError):
    """An external source refused the request because its quota is spent.

    This is a distinguished failure: callers may substitute a labelled
    placeholder instead of silently omitting the data.
    """

class ApplicationError(CineMarathonError):
    """Application-level errors.

    These errors occur at the application layer, typically related to
    configuration or invalid construction arguments.
    """

class SecurityError(CineMarathonError):
    """Security-related errors, e.g. a missing API key."""

class CliError(ApplicationError):
    """CLI-specific errors carrying an exit code."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        command: str,
        exit_code: int = 1,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(code, message, context, original_error)
        self.command = command
        self.exit_code = exit_code

def create_source_error(
    source: str,
    operation: str,
    message: str,
    code: ErrorCode,
    original_error: Exception | None = None,
    **additional_data: PrimitiveContextValue,
) -> SourceUnavailableError:
    """Create a SourceUnavailableError with standard context.

    Args:
        source: External source name
        operation: Operation that failed
        message: Human-readable message
        code: Error code
        original_error: Underlying exception
        **additional_data: Extra primitive context values

    Returns:
        SourceUnavailableError instance
    """
    return SourceUnavailableError(
        code=code,
        message=message,
        context=ErrorContext(
            operation=operation,
            source=source,
            additional_data=dict(additional_data) or None,
        ),
        original_error=original_error,
    )

def create_cli_error(
    message: str,
    command: str,
    exit_code: int = 1,
    original_error: Exception | None = None,
) -> CliError:
    """Create a CLI error.

    Args:
        message: Error message
        command: CLI command that failed
        exit_code: Process exit code
        original_error: Original exception

    Returns:
        CliError instance
    """
    return CliError(
        code=ErrorCode.CLI_COMMAND_FAILED,
        message=message,
        command=command,
        exit_code=exit_code,
        context=ErrorContext(operation=command),
        original_error=original_error,
    )
