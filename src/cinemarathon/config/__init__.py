"""CineMarathon Configuration Module

This module provides unified access to configuration models and settings
management:
- Settings: Main configuration facade
- Loader functions: get_config, load_settings, reload_config
- Domain models: API, cache, enrichment, marathon and logging settings
"""

from __future__ import annotations

from .loader import get_config, load_settings, reload_config, reset_config
from .models import (
    APISettings,
    CacheSettings,
    EnrichmentSettings,
    LoggingSettings,
    MarathonSettings,
    Settings,
    TMDBSettings,
    YouTubeSettings,
)

__all__ = [
    "APISettings",
    "CacheSettings",
    "EnrichmentSettings",
    "LoggingSettings",
    "MarathonSettings",
    "Settings",
    "TMDBSettings",
    "YouTubeSettings",
    "get_config",
    "load_settings",
    "reload_config",
    "reset_config",
]
