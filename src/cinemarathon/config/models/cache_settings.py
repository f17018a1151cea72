"""Cache configuration model.

This module contains the configuration of the in-memory result cache.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from cinemarathon.shared.constants import CacheDefaults


class CacheSettings(BaseModel):
    """Result cache configuration."""

    enabled: bool = Field(default=True, description="Enable caching")
    ttl: int = Field(
        default=CacheDefaults.TTL,
        gt=0,
        description="Cache time-to-live in seconds",
    )
    sweep_interval: int = Field(
        default=CacheDefaults.SWEEP_INTERVAL,
        gt=0,
        description="Seconds between background purges of expired entries",
    )


__all__ = ["CacheSettings"]
