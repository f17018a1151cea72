"""
CLI Context Management Module

Holds the options parsed by the main callback in a ContextVar so every
Typer command can read them.
"""

from __future__ import annotations

import contextvars
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class LogLevel(str, Enum):
    """Log level enumeration for type safety."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class CliContext(BaseModel):
    """
    CLI context model for managing global state.

    Attributes:
        verbose: Verbosity level (0 = normal, 1+ = verbose)
        log_level: Logging level given on the command line, if any
        json_output: Whether to output in JSON format
        config_path: Optional TOML configuration file
    """

    verbose: int = Field(default=0, ge=0)
    log_level: LogLevel | None = Field(default=None)
    json_output: bool = Field(default=False)
    config_path: Path | None = Field(default=None)

    def resolve_log_level(self, configured: str = LogLevel.WARNING.value) -> str:
        """Pick the log level: ``-v``, then ``--log-level``, then ``configured``."""
        if self.verbose:
            return LogLevel.DEBUG.value
        if self.log_level is not None:
            return self.log_level.value
        return configured.upper()

    @property
    def effective_log_level(self) -> str:
        return self.resolve_log_level()


_cli_context: contextvars.ContextVar[CliContext | None] = contextvars.ContextVar(
    "cli_context",
    default=None,
)


def get_cli_context() -> CliContext:
    """Return the current CLI context, a default one if none was set."""
    context = _cli_context.get()
    return context if context is not None else CliContext()


def set_cli_context(context: CliContext) -> None:
    _cli_context.set(context)
