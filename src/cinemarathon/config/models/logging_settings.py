"""Logging configuration model."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class LoggingSettings(BaseModel):
    """Logging configuration.

    ``level`` applies when neither ``--log-level`` nor ``-v`` is given on
    the command line.
    """

    level: str = Field(default="WARNING", description="Logging level")
    file: str | None = Field(default=None, description="Optional JSON log file path")
    rich_console: bool = Field(default=True, description="Render console logs with rich")

    @field_validator("level")
    @classmethod
    def _validate_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            msg = f"Unknown log level: {value}"
            raise ValueError(msg)
        return level


__all__ = ["LoggingSettings"]
