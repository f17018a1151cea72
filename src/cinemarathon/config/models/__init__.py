"""Configuration domain models."""

from __future__ import annotations

from .api_settings import APISettings, TMDBSettings, YouTubeSettings
from .logging_settings import LoggingSettings
from .cache_settings import CacheSettings
from .enrichment_settings import EnrichmentSettings
from .marathon_settings import MarathonSettings
from .settings import Settings

__all__ = [
    "APISettings",
    "CacheSettings",
    "EnrichmentSettings",
    "LoggingSettings",
    "MarathonSettings",
    "Settings",
    "TMDBSettings",
    "YouTubeSettings",
]
