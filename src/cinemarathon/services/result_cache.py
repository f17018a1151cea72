"""In-memory TTL cache for outbound source lookups.

The cache memoizes successful results of catalog and video lookups so a
repeated request inside the TTL never reaches the source again. Failures
are never stored, so a transient outage is retried on the next lookup.

Expired entries are dropped lazily on read and, while the sweeper task is
running, periodically in the background. There is no size bound; TTL expiry
is the only eviction policy.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
import time
from collections.abc import Awaitable
from typing import Any, Callable, TypeVar

from cinemarathon.shared.constants import CacheDefaults
from cinemarathon.shared.models import CacheEntry
from cinemarathon.shared.result import Result, Success

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResultCache:
    """Thread-safe TTL cache shared by the enrichment pipeline.

    Args:
        default_ttl: Lifetime of entries stored without an explicit TTL
        sweep_interval: Seconds between background purges
        clock: Time source in seconds, injectable for tests

    Example:
        >>> cache = ResultCache(default_ttl=3600)
        >>> result = await cache.fetch_through("detail:550", lambda: catalog.fetch_detail(550, fields))
    """

    def __init__(
        self,
        default_ttl: float = CacheDefaults.TTL,
        sweep_interval: float = CacheDefaults.SWEEP_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if default_ttl <= 0:
            msg = f"default_ttl must be positive, got {default_ttl}"
            raise ValueError(msg)
        if sweep_interval <= 0:
            msg = f"sweep_interval must be positive, got {sweep_interval}"
            raise ValueError(msg)

        self.default_ttl = default_ttl
        self.sweep_interval = sweep_interval
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._sweeper: asyncio.Task[None] | None = None

        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None when absent or expired.

        An expired entry is removed as part of the read.
        """
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry.is_expired(now):
                del self._entries[key]
                entry = None

            if entry is None:
                self._misses += 1
            else:
                self._hits += 1

        if entry is None:
            logger.debug("Cache miss: %s", key)
            return None

        logger.debug("Cache hit: %s", key)
        return entry.value

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Store a value, overwriting any existing entry."""
        entry = CacheEntry(
            key=key,
            value=value,
            inserted_at=self._clock(),
            ttl=ttl if ttl is not None else self.default_ttl,
        )
        with self._lock:
            self._entries[key] = entry

    async def fetch_through(
        self,
        key: str,
        loader: Callable[[], Awaitable[Result[T]]],
        ttl: float | None = None,
    ) -> Result[T]:
        """Return a cached success or call ``loader`` and cache its success.

        Failures pass through to the caller without being stored.

        Args:
            key: Canonical cache key
            loader: Zero-argument coroutine factory producing a Result
            ttl: Optional lifetime override

        Returns:
            The cached or freshly loaded Result
        """
        cached = self.get(key)
        if cached is not None:
            return Success(cached)

        result = await loader()
        if isinstance(result, Success):
            self.set(key, result.value, ttl)
        return result

    def purge_expired(self) -> int:
        """Remove every expired entry.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        with self._lock:
            expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
            for key in expired:
                del self._entries[key]

        if expired:
            logger.debug("Purged %d expired cache entries", len(expired))
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def get_stats(self) -> dict[str, Any]:
        """Get cache statistics.

        Returns:
            Dictionary with hits, misses, size and hit_rate
        """
        with self._lock:
            hits, misses, size = self._hits, self._misses, len(self._entries)

        total = hits + misses
        return {
            "hits": hits,
            "misses": misses,
            "size": size,
            "hit_rate": hits / total if total else 0.0,
        }

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    @property
    def sweeper_running(self) -> bool:
        return self._sweeper is not None and not self._sweeper.done()

    def start_sweeper(self) -> None:
        """Start the periodic purge task on the running event loop."""
        if self.sweeper_running:
            return
        self._sweeper = asyncio.get_running_loop().create_task(self._sweep_loop())
        logger.debug("Cache sweeper started (interval=%ss)", self.sweep_interval)

    async def stop_sweeper(self) -> None:
        """Cancel the periodic purge task and wait for it to finish."""
        if self._sweeper is None:
            return
        self._sweeper.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._sweeper
        self._sweeper = None
        logger.debug("Cache sweeper stopped")

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self.sweep_interval)
            self.purge_expired()

    async def __aenter__(self) -> ResultCache:
        self.start_sweeper()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.stop_sweeper()
