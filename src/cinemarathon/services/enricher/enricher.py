"""Movie enrichment service.

This module unifies catalog detail records with trailer references from
the video platform. Each movie is enriched independently under a bounded
admission limit, and a failing source degrades the result instead of
failing the batch:

- detail lookup fails -> the movie is dropped
- video search fails  -> the movie is kept without a trailer
- video quota spent   -> the movie is kept with a labelled placeholder
  trailer when placeholders are enabled, otherwise without a trailer
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Sequence

from cinemarathon.shared.logging import log_operation_error, log_operation_start, log_operation_success
from cinemarathon.shared.models import Candidate, EnrichedMovie, Movie, TrailerRef, UnificationReport
from cinemarathon.shared.result import Failure

from .movie_enricher import normalizer, trailers, unification
from .movie_enricher.batch_processor import BatchProcessor
from .movie_enricher.fetcher import CatalogFetcher, TrailerFetcher

logger = logging.getLogger(__name__)


class MovieEnricher:
    """Service for enriching catalog movies with trailers.

    Args:
        catalog_fetcher: Cached access to the movie catalog
        trailer_fetcher: Cached access to the video platform
        batch_processor: Processor bounding concurrent enrichments
        use_quota_placeholder: Attach a placeholder trailer on quota failures
    """

    def __init__(
        self,
        catalog_fetcher: CatalogFetcher,
        trailer_fetcher: TrailerFetcher,
        batch_processor: BatchProcessor | None = None,
        *,
        use_quota_placeholder: bool = True,
    ) -> None:
        self.catalog_fetcher = catalog_fetcher
        self.trailer_fetcher = trailer_fetcher
        self.batch_processor = batch_processor if batch_processor is not None else BatchProcessor()
        self.use_quota_placeholder = use_quota_placeholder

    async def enrich_movie(self, movie_id: int) -> EnrichedMovie | None:
        """Enrich a single movie by catalog id.

        Returns:
            EnrichedMovie, or None when the movie had to be dropped
        """
        detail = await self.catalog_fetcher.fetch_detail(movie_id)
        if isinstance(detail, Failure):
            log_operation_error(
                logger=logger,
                error=detail.error,
                operation="enrich_movie",
                additional_context={"movie_id": movie_id},
                level=logging.WARNING,
            )
            return None

        if not normalizer.has_identifier(detail.value):
            logger.debug("Dropping detail record without identifier for %s", movie_id)
            return None

        candidate = normalizer.normalize(detail.value)
        if not candidate.title:
            logger.debug("Dropping detail record without title for %s", movie_id)
            return None

        trailer = await self.find_trailer(candidate)
        return unification.unify(candidate, trailer)

    async def find_trailer(self, candidate: Candidate) -> TrailerRef | None:
        """Find a trailer, preferring one embedded in the catalog record."""
        embedded = trailers.select_catalog_trailer(candidate.videos)
        if embedded is not None:
            return embedded

        result = await self.trailer_fetcher.search(trailers.build_search_query(candidate))
        if isinstance(result, Failure):
            log_operation_error(
                logger=logger,
                error=result.error,
                operation="find_trailer",
                additional_context={"movie_id": candidate.id or 0},
                level=logging.WARNING,
            )
            if result.is_quota_exceeded and self.use_quota_placeholder:
                return trailers.quota_placeholder(candidate)
            return None

        return trailers.pick_search_trailer(result.value)

    async def enrich_batch(self, movie_ids: Sequence[int]) -> list[EnrichedMovie]:
        """Enrich many movies concurrently.

        Failed or invalid items are left out; the result order is not
        guaranteed to follow ``movie_ids``.
        """
        log_operation_start(logger, "enrich_batch", {"total_count": len(movie_ids)})
        start = time.perf_counter()
        summary = await self.batch_processor.process(items=list(movie_ids), worker=self.enrich_movie)

        log_operation_success(
            logger=logger,
            operation="enrich_batch",
            duration_ms=(time.perf_counter() - start) * 1000,
            result_info={
                "success_count": summary.success_count,
                "failed_count": summary.failed_count,
                "total_count": len(movie_ids),
            },
        )
        logger.info(
            "Enriched %d of %d movies (%d failed)",
            summary.success_count,
            len(movie_ids),
            summary.failed_count,
        )

        return summary.results

    async def enrich_movies(self, movies: Iterable[Movie]) -> list[EnrichedMovie]:
        """Enrich listing records by their identifiers."""
        return await self.enrich_batch([movie.id for movie in movies if movie.id])

    @staticmethod
    def analyze_unification(enriched: Sequence[EnrichedMovie]) -> UnificationReport:
        return unification.analyze_unification(enriched)
