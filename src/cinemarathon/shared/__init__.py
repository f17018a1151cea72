"""Shared building blocks for CineMarathon.

This package holds the error hierarchy, structured logging helpers,
result values, cache key helpers, constants, domain models and the
protocols the core depends on.
"""

from cinemarathon.shared.errors import (
    ApplicationError,
    CineMarathonError,
    DomainError,
    ErrorCode,
    ErrorContext,
    InfrastructureError,
    QuotaExceededError,
    SourceUnavailableError,
)
from cinemarathon.shared.result import Failure, Result, Success

__all__ = [
    "ApplicationError",
    "CineMarathonError",
    "DomainError",
    "ErrorCode",
    "ErrorContext",
    "Failure",
    "InfrastructureError",
    "QuotaExceededError",
    "Result",
    "SourceUnavailableError",
    "Success",
]
