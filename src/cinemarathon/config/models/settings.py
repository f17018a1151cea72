"""CineMarathon Settings Configuration Model.

Main Settings class that consolidates all configuration domains.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import toml
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cinemarathon.config.models.api_settings import APISettings
from cinemarathon.config.models.logging_settings import LoggingSettings
from cinemarathon.config.models.cache_settings import CacheSettings
from cinemarathon.config.models.enrichment_settings import EnrichmentSettings
from cinemarathon.config.models.marathon_settings import MarathonSettings

logger = logging.getLogger(__name__)

# Conventional variable names used when the prefixed ones are unset
TMDB_API_KEY_ENV = "TMDB_API_KEY"
YOUTUBE_API_KEY_ENV = "YOUTUBE_API_KEY"


class Settings(BaseSettings):
    """Settings facade providing unified configuration access.

    Every field can be overridden from the environment, e.g.
    ``CINEMARATHON_ENRICHMENT__CONCURRENCY=8``.
    """

    model_config = SettingsConfigDict(
        env_prefix="CINEMARATHON_",
        env_nested_delimiter="__",
        env_ignore_empty=True,
        extra="ignore",
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    api: APISettings = Field(default_factory=APISettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    enrichment: EnrichmentSettings = Field(default_factory=EnrichmentSettings)
    marathon: MarathonSettings = Field(default_factory=MarathonSettings)

    @model_validator(mode="after")
    def _fill_api_keys_from_env(self) -> Settings:
        # Assign only when a value is found so unset keys stay unset
        tmdb_key = os.getenv(TMDB_API_KEY_ENV, "").strip()
        if tmdb_key and not self.api.tmdb.api_key:
            self.api.tmdb.api_key = tmdb_key
        youtube_key = os.getenv(YOUTUBE_API_KEY_ENV, "").strip()
        if youtube_key and not self.api.youtube.api_key:
            self.api.youtube.api_key = youtube_key
        return self

    @classmethod
    def from_toml_file(cls, file_path: str | Path) -> Settings:
        """Load settings from a TOML file.

        Priority: Environment Variables > TOML File > Default Values
        """
        file_path = Path(file_path)
        if not file_path.exists():
            msg = f"Configuration file not found: {file_path}"
            raise FileNotFoundError(msg)

        raw_config = toml.load(file_path)
        env_config = cls().model_dump(exclude_unset=True)
        return cls(**_merge_nested(raw_config, env_config))

    def to_toml_file(self, file_path: str | Path) -> None:
        """Save settings to TOML file.

        API keys are written too; logs mask them via __repr__.
        """
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        config_dict = self.model_dump(exclude_none=True)

        with open(file_path, "w", encoding="utf-8") as f:
            toml.dump(config_dict, f)


def _merge_nested(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` with ``override`` applied, merging nested tables."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge_nested(merged[key], value)
        else:
            merged[key] = value
    return merged
