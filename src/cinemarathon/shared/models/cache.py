"""Cache entry model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntry:
    """A cached successful lookup.

    Attributes:
        key: Canonical cache key
        value: Cached value
        inserted_at: Clock reading at insertion time (seconds)
        ttl: Lifetime in seconds
    """

    key: str
    value: Any
    inserted_at: float
    ttl: float

    def is_expired(self, now: float) -> bool:
        """Whether the entry's age exceeds its TTL at ``now``."""
        return now - self.inserted_at > self.ttl
