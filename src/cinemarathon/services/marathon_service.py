"""Caller-facing marathon service.

MarathonService owns the two sources, the result cache and the enrichment
orchestrator, and exposes catalog listings, enrichment and marathon
planning as one API. Use it as an async context manager so the cache
sweeper and the HTTP sessions are released:

    >>> async with MarathonService.from_settings(get_config()) as service:
    ...     plan, report = await service.plan_from_popular(360)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from cinemarathon.config.models.settings import Settings
from cinemarathon.core.marathon import (
    analyze_plan,
    plan_decade_marathon,
    plan_marathon,
    plan_thematic_marathon,
)
from cinemarathon.services.enricher import BatchProcessor, CatalogFetcher, MovieEnricher, TrailerFetcher
from cinemarathon.services.enricher.movie_enricher import normalizer, trailers
from cinemarathon.services.result_cache import ResultCache
from cinemarathon.shared.constants import TrailerKeywords, YouTubeEndpoints
from cinemarathon.shared.logging import log_operation_error
from cinemarathon.shared.models import (
    EnrichedMovie,
    MarathonOptions,
    Movie,
    Plan,
    PlanReport,
    TrailerRef,
    UnificationReport,
    VideoStatistics,
)
from cinemarathon.shared.protocols import CatalogSource, VideoSource
from cinemarathon.shared.result import Failure, Result

logger = logging.getLogger(__name__)


class MarathonService:
    """Facade over catalog access, enrichment and marathon planning.

    Args:
        catalog: Primary movie catalog source
        videos: Secondary video platform source
        settings: Application settings, defaults when None
        cache: Shared result cache; built from settings when None and
            caching is enabled
    """

    def __init__(
        self,
        catalog: CatalogSource,
        videos: VideoSource,
        settings: Settings | None = None,
        cache: ResultCache | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.catalog = catalog
        self.videos = videos

        if cache is None and self.settings.cache.enabled:
            cache = ResultCache(
                default_ttl=self.settings.cache.ttl,
                sweep_interval=self.settings.cache.sweep_interval,
            )
        self.cache = cache

        enrichment = self.settings.enrichment
        self.catalog_fetcher = CatalogFetcher(
            catalog,
            cache=self.cache,
            request_timeout=enrichment.request_timeout,
            detail_fields=enrichment.detail_fields,
        )
        self.trailer_fetcher = TrailerFetcher(
            videos,
            cache=self.cache,
            request_timeout=enrichment.request_timeout,
            max_results=self.settings.api.youtube.max_results,
        )
        self.enricher = MovieEnricher(
            self.catalog_fetcher,
            self.trailer_fetcher,
            BatchProcessor(concurrency=enrichment.concurrency),
            use_quota_placeholder=enrichment.use_quota_placeholder,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> MarathonService:
        """Build a service talking to the real TMDB and YouTube APIs."""
        # Imported here so fakes can be used without the HTTP client stack
        from cinemarathon.services.tmdb import TMDBCatalogSource
        from cinemarathon.services.youtube import YouTubeVideoSource

        return cls(
            catalog=TMDBCatalogSource(settings.api.tmdb),
            videos=YouTubeVideoSource(settings.api.youtube),
            settings=settings,
        )

    # Lifecycle

    async def start(self) -> None:
        if self.cache is not None:
            self.cache.start_sweeper()

    async def close(self) -> None:
        if self.cache is not None:
            await self.cache.stop_sweeper()
        for source in (self.catalog, self.videos):
            close = getattr(source, "close", None)
            if close is not None:
                await close()

    async def __aenter__(self) -> MarathonService:
        await self.start()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    # Catalog listings

    async def get_popular(self, page: int = 1) -> list[Movie]:
        return self._listings(await self.catalog_fetcher.fetch_popular(page), "get_popular")

    async def get_top_rated(self, page: int = 1) -> list[Movie]:
        return self._listings(await self.catalog_fetcher.fetch_top_rated(page), "get_top_rated")

    async def search(self, term: str) -> list[Movie]:
        if not term or not term.strip():
            return []
        return self._listings(await self.catalog_fetcher.search(term), "search")

    async def discover_decade(self, decade: int) -> list[Movie]:
        result = await self.catalog_fetcher.discover_by_date_range(
            f"{decade}-01-01",
            f"{decade + 9}-12-31",
        )
        return self._listings(result, "discover_decade")

    async def find_trailers(self, title: str, year: int | None = None, limit: int = 3) -> list[TrailerRef]:
        """Search several trailer candidates for a title."""
        if not title or limit <= 0:
            return []
        query = " ".join(part for part in (title, str(year) if year else "", "official trailer") if part)
        result = await self.trailer_fetcher.search(query, min(limit * 2, YouTubeEndpoints.MAX_RESULTS_CAP))
        if isinstance(result, Failure):
            log_operation_error(logger=logger, error=result.error, operation="find_trailers", level=logging.WARNING)
            return []
        hits = [video for video in result.value if trailers.is_trailer_like(video)]
        return [trailers.to_trailer_ref(video) for video in hits[:limit]]

    async def video_stats(self, video_id: str) -> VideoStatistics | None:
        """Engagement statistics of a trailer video.

        Returns None for blank ids, the quota placeholder, and when the
        video platform cannot answer.
        """
        if not video_id or video_id == TrailerKeywords.PLACEHOLDER_VIDEO_ID:
            return None
        result = await self.trailer_fetcher.fetch_statistics(video_id)
        if isinstance(result, Failure):
            log_operation_error(logger=logger, error=result.error, operation="video_stats", level=logging.WARNING)
            return None
        return result.value

    # Enrichment

    async def enrich(self, movie_ids: Sequence[int]) -> list[EnrichedMovie]:
        return await self.enricher.enrich_batch(movie_ids)

    async def get_popular_enriched(self, limit: int = 10) -> list[EnrichedMovie]:
        movies = await self.get_popular()
        return await self.enricher.enrich_movies(movies[: max(limit, 0)])

    async def search_enriched(self, term: str, limit: int = 5) -> list[EnrichedMovie]:
        movies = await self.search(term)
        return await self.enricher.enrich_movies(movies[: max(limit, 0)])

    async def discover_decade_enriched(self, decade: int, limit: int | None = None) -> list[EnrichedMovie]:
        movies = await self.discover_decade(decade)
        if limit is None:
            limit = self.settings.marathon.decade_pool_size
        return await self.enricher.enrich_movies(movies[: max(limit, 0)])

    def analyze_unification(self, enriched: Sequence[EnrichedMovie]) -> UnificationReport:
        return self.enricher.analyze_unification(enriched)

    # Planning

    def default_options(self) -> MarathonOptions:
        return self.settings.marathon.to_options()

    def plan_marathon(
        self,
        candidates: Sequence[EnrichedMovie],
        budget: int,
        options: MarathonOptions | None = None,
    ) -> Plan:
        return plan_marathon(candidates, budget, options or self.default_options())

    def plan_thematic_marathon(
        self,
        candidates: Sequence[EnrichedMovie],
        budget: int,
        genres: Sequence[str],
        options: MarathonOptions | None = None,
    ) -> Plan:
        return plan_thematic_marathon(candidates, budget, genres, options or self.default_options())

    def analyze_plan(self, plan: Plan) -> PlanReport:
        return analyze_plan(plan)

    async def plan_from_popular(
        self,
        budget: int,
        options: MarathonOptions | None = None,
    ) -> tuple[Plan, PlanReport]:
        pool = await self.get_popular_enriched(self.settings.marathon.popular_pool_size)
        plan = self.plan_marathon(pool, budget, options)
        return plan, analyze_plan(plan)

    async def plan_thematic_from_popular(
        self,
        budget: int,
        genres: Sequence[str],
        options: MarathonOptions | None = None,
    ) -> tuple[Plan, PlanReport]:
        pool = await self.get_popular_enriched(self.settings.marathon.thematic_pool_size)
        plan = self.plan_thematic_marathon(pool, budget, genres, options)
        return plan, analyze_plan(plan)

    async def plan_from_decade(
        self,
        decade: int,
        budget: int,
        options: MarathonOptions | None = None,
    ) -> tuple[Plan, PlanReport]:
        pool = await self.discover_decade_enriched(decade)
        plan = plan_decade_marathon(pool, budget, decade, options or self.default_options())
        return plan, analyze_plan(plan)

    @staticmethod
    def _listings(result: Result[list[dict[str, Any]]], operation: str) -> list[Movie]:
        # Listing failures degrade to an empty list
        if isinstance(result, Failure):
            log_operation_error(logger=logger, error=result.error, operation=operation, level=logging.WARNING)
            return []
        return normalizer.normalize_listings(result.value)
