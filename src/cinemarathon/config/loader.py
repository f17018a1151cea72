"""Settings loader and singleton manager.

This module handles:
- Environment variable loading from .env files
- Configuration file loading from TOML
- Thread-safe singleton pattern for Settings instance
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from cinemarathon.config.models.settings import Settings
from cinemarathon.shared.errors import ApplicationError, ErrorCode, ErrorContext

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATHS = (
    Path("config/config.toml"),
    Path("cinemarathon.toml"),
    Path.home() / ".cinemarathon" / "config.toml",
)


class SettingsLoader:
    """Thread-safe singleton manager for Settings.

    Uses double-checked locking pattern to ensure thread-safety
    while minimizing lock overhead.
    """

    _instance: Settings | None = None
    _lock: threading.RLock = threading.RLock()

    def get_config(self) -> Settings:
        """Get the global settings instance, loading it if necessary."""
        if self._instance is None:
            with self._lock:
                if self._instance is None:
                    self._instance = load_settings()

        return self._instance

    def reload_config(self, config_path: str | Path | None = None) -> Settings:
        """Reload the global settings instance from configuration files."""
        with self._lock:
            self._instance = load_settings(config_path)

        return self._instance

    def reset(self) -> None:
        """Forget the cached instance."""
        with self._lock:
            self._instance = None


def _load_env_file(env_file: Path = Path(".env")) -> None:
    """Load environment variables from a .env file when one exists.

    Variables already present in the environment win over the file.
    """
    if env_file.exists():
        load_dotenv(env_file, override=False)
        logger.debug("Loaded environment from %s", env_file)


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from a TOML configuration file or the environment.

    Args:
        config_path: Optional path to a TOML file. If None, the default
            locations are tried before falling back to environment variables.

    Returns:
        Settings instance loaded from the first available source

    Raises:
        ApplicationError: If an explicit file is missing or any source fails
            validation
    """
    _load_env_file()

    candidates = [Path(config_path)] if config_path else [p for p in DEFAULT_CONFIG_PATHS if p.exists()]

    try:
        if candidates:
            return Settings.from_toml_file(candidates[0])
        return Settings()
    except (FileNotFoundError, ValidationError) as e:
        raise ApplicationError(
            code=ErrorCode.INVALID_CONFIG if isinstance(e, ValidationError) else ErrorCode.MISSING_CONFIG,
            message=f"Failed to load configuration: {e}",
            context=ErrorContext(
                operation="load_settings",
                additional_data={"config_path": str(candidates[0]) if candidates else "<environment>"},
            ),
            original_error=e,
        ) from e


_loader = SettingsLoader()


def get_config() -> Settings:
    """Get the global settings instance (thread-safe)."""
    return _loader.get_config()


def reload_config(config_path: str | Path | None = None) -> Settings:
    """Reload the global settings instance from configuration files."""
    return _loader.reload_config(config_path)


def reset_config() -> None:
    """Drop the global settings instance so the next access reloads it."""
    _loader.reset()


__all__ = [
    "SettingsLoader",
    "get_config",
    "load_settings",
    "reload_config",
    "reset_config",
]
