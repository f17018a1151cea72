"""Source fetchers for movie enrichment.

This module wraps the catalog and video sources with the result cache and
a per-request timeout, isolating network concerns from the enrichment
logic. Fetchers never raise for source problems: timeouts and connection
errors come back as ``Failure`` values like any other source failure.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Sequence
from typing import Any, Callable, TypeVar

from cinemarathon.services.result_cache import ResultCache
from cinemarathon.shared.cache_utils import generate_cache_key
from cinemarathon.shared.constants import CacheDefaults, NetworkConfig, TMDBEndpoints
from cinemarathon.shared.errors import ErrorCode, create_source_error
from cinemarathon.shared.models import VideoResult, VideoStatistics
from cinemarathon.shared.protocols import CatalogSource, VideoSource
from cinemarathon.shared.result import Failure, Result

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def _call_with_timeout(
    loader: Callable[[], Awaitable[Result[T]]],
    timeout: float,
    source: str,
    operation: str,
) -> Result[T]:
    """Await a source call, turning timeouts and connection errors into Failure."""
    try:
        return await asyncio.wait_for(loader(), timeout=timeout)
    except asyncio.TimeoutError as e:
        return Failure(
            create_source_error(
                source=source,
                operation=operation,
                message=f"{source} request timed out after {timeout}s",
                code=ErrorCode.API_TIMEOUT,
                original_error=e,
                timeout=timeout,
            )
        )
    except (ConnectionError, OSError) as e:
        return Failure(
            create_source_error(
                source=source,
                operation=operation,
                message=f"{source} connection failed: {e}",
                code=ErrorCode.NETWORK_ERROR,
                original_error=e,
            )
        )


class _CachedFetcher:
    """Shared plumbing: optional cache plus timeout per outbound call."""

    source_name = ""

    def __init__(self, cache: ResultCache | None, request_timeout: float) -> None:
        if request_timeout <= 0:
            msg = f"request_timeout must be positive, got {request_timeout}"
            raise ValueError(msg)
        self.cache = cache
        self.request_timeout = request_timeout

    async def _fetch(
        self,
        key: str,
        loader: Callable[[], Awaitable[Result[T]]],
        operation: str,
    ) -> Result[T]:
        def timed() -> Awaitable[Result[T]]:
            return _call_with_timeout(loader, self.request_timeout, self.source_name, operation)

        if self.cache is None:
            return await timed()
        return await self.cache.fetch_through(key, timed)


class CatalogFetcher(_CachedFetcher):
    """Cached, time-bounded access to the movie catalog.

    Attributes:
        catalog: Catalog source implementation
        cache: Shared result cache, or None to disable caching
        request_timeout: Timeout per outbound call in seconds
        detail_fields: Sub-records appended to detail lookups
    """

    source_name = "tmdb"

    def __init__(
        self,
        catalog: CatalogSource,
        cache: ResultCache | None = None,
        request_timeout: float = NetworkConfig.DEFAULT_TIMEOUT,
        detail_fields: Sequence[str] = TMDBEndpoints.DEFAULT_DETAIL_FIELDS,
    ) -> None:
        if catalog is None:
            raise ValueError("Catalog source cannot be None")
        super().__init__(cache, request_timeout)
        self.catalog = catalog
        self.detail_fields = tuple(detail_fields)

    async def fetch_detail(self, movie_id: int) -> Result[dict[str, Any]]:
        """Fetch one detail record, keyed by id and requested fields."""
        key = generate_cache_key(
            CacheDefaults.DETAIL,
            movie_id,
            {"fields": ",".join(self.detail_fields)},
        )
        return await self._fetch(
            key,
            lambda: self.catalog.fetch_detail(movie_id, self.detail_fields),
            "fetch_detail",
        )

    async def fetch_popular(self, page: int = 1) -> Result[list[dict[str, Any]]]:
        key = generate_cache_key(CacheDefaults.POPULAR, None, {"page": page})
        return await self._fetch(key, lambda: self.catalog.fetch_popular(page), "fetch_popular")

    async def fetch_top_rated(self, page: int = 1) -> Result[list[dict[str, Any]]]:
        key = generate_cache_key(CacheDefaults.TOP_RATED, None, {"page": page})
        return await self._fetch(key, lambda: self.catalog.fetch_top_rated(page), "fetch_top_rated")

    async def search(self, query: str) -> Result[list[dict[str, Any]]]:
        key = generate_cache_key(CacheDefaults.SEARCH, None, {"query": query.strip()})
        return await self._fetch(key, lambda: self.catalog.search(query.strip()), "search")

    async def discover_by_date_range(
        self,
        start: str,
        end: str,
        filters: dict[str, Any] | None = None,
    ) -> Result[list[dict[str, Any]]]:
        key = generate_cache_key(
            CacheDefaults.DISCOVER,
            None,
            {"start": start, "end": end, **(filters or {})},
        )
        return await self._fetch(
            key,
            lambda: self.catalog.discover_by_date_range(start, end, filters),
            "discover_by_date_range",
        )


class TrailerFetcher(_CachedFetcher):
    """Cached, time-bounded access to the video platform search."""

    source_name = "youtube"

    def __init__(
        self,
        videos: VideoSource,
        cache: ResultCache | None = None,
        request_timeout: float = NetworkConfig.DEFAULT_TIMEOUT,
        max_results: int = 5,
    ) -> None:
        if videos is None:
            raise ValueError("Video source cannot be None")
        super().__init__(cache, request_timeout)
        self.videos = videos
        self.max_results = max_results

    async def search(self, query: str, max_results: int | None = None) -> Result[list[VideoResult]]:
        limit = max_results or self.max_results
        key = generate_cache_key(CacheDefaults.VIDEO_SEARCH, None, {"q": query, "max_results": limit})
        return await self._fetch(key, lambda: self.videos.search(query, limit), "video_search")

    async def fetch_statistics(self, video_id: str) -> Result[VideoStatistics]:
        key = generate_cache_key(CacheDefaults.VIDEO_STATISTICS, video_id)
        return await self._fetch(key, lambda: self.videos.fetch_statistics(video_id), "video_statistics")
