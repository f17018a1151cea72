"""Unification of catalog candidates with trailer references."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, timezone

from cinemarathon.shared.constants import TMDBEndpoints
from cinemarathon.shared.models import (
    Candidate,
    EnrichedMovie,
    TrailerOrigin,
    TrailerRef,
    UnificationReport,
)

logger = logging.getLogger(__name__)

CATALOG_SOURCE = "tmdb"
VIDEO_SOURCE = "youtube"


def unify(
    candidate: Candidate,
    trailer: TrailerRef | None,
    unified_at: datetime | None = None,
) -> EnrichedMovie | None:
    """Merge a candidate and an optional trailer into an EnrichedMovie.

    Returns None when the candidate lacks an identifier, a title or a
    rating, so the caller can drop it. Duration is not checked here; the
    marathon filters handle that.
    """
    if candidate.id is None or not candidate.title or candidate.rating is None:
        logger.debug(
            "Dropping candidate without id, title or rating",
            extra={"context": {"movie_id": candidate.id, "title": candidate.title}},
        )
        return None

    sources = {CATALOG_SOURCE}
    if trailer is not None and trailer.origin is TrailerOrigin.VIDEO_SEARCH:
        sources.add(VIDEO_SOURCE)

    return EnrichedMovie(
        candidate=candidate,
        trailer=trailer,
        sources=frozenset(sources),
        unified_at=unified_at or datetime.now(timezone.utc),
    )


def analyze_unification(enriched: Sequence[EnrichedMovie]) -> UnificationReport:
    """Report how much of a batch is covered by trailers, overviews and genres.

    ``completeness`` is the share of the three facets filled across the
    whole batch. An empty batch reports zeros.
    """
    total = len(enriched)
    with_trailer = sum(1 for movie in enriched if movie.trailer is not None)
    with_overview = sum(
        1
        for movie in enriched
        if movie.overview and movie.overview != TMDBEndpoints.DEFAULT_OVERVIEW
    )
    with_genres = sum(1 for movie in enriched if movie.genres)

    if total == 0:
        return UnificationReport(0, 0, 0, 0, 0.0, 0.0, 0.0, 0.0)

    return UnificationReport(
        total=total,
        with_trailer=with_trailer,
        with_overview=with_overview,
        with_genres=with_genres,
        trailer_rate=with_trailer / total,
        overview_rate=with_overview / total,
        genre_rate=with_genres / total,
        completeness=(with_trailer + with_overview + with_genres) / (3 * total),
    )
