"""Tests for MovieEnricher."""

from __future__ import annotations

import pytest

from cinemarathon.services.enricher import BatchProcessor, CatalogFetcher, MovieEnricher, TrailerFetcher
from cinemarathon.services.result_cache import ResultCache
from cinemarathon.shared.models import TrailerOrigin

from conftest import FakeCatalog, FakeVideoSource, detail_record, listing_record


def build_enricher(
    catalog: FakeCatalog,
    videos: FakeVideoSource,
    *,
    concurrency: int = 5,
    use_quota_placeholder: bool = True,
    cache: ResultCache | None = None,
) -> MovieEnricher:
    return MovieEnricher(
        CatalogFetcher(catalog, cache=cache),
        TrailerFetcher(videos, cache=cache),
        BatchProcessor(concurrency=concurrency),
        use_quota_placeholder=use_quota_placeholder,
    )


class TestEnrichMovie:
    """Test cases for MovieEnricher.enrich_movie."""

    async def test_trailer_from_video_search(self, fake_catalog, fake_videos):
        enricher = build_enricher(fake_catalog, fake_videos)

        enriched = await enricher.enrich_movie(1)

        assert enriched is not None
        assert enriched.is_complete
        assert enriched.trailer.origin is TrailerOrigin.VIDEO_SEARCH
        assert enriched.sources == frozenset({"tmdb", "youtube"})
        assert fake_videos.queries == ["Movie 1 2001 official trailer"]

    async def test_embedded_trailer_skips_video_search(self, fake_videos):
        record = detail_record(
            1,
            videos={"results": [{"key": "emb", "name": "Trailer", "site": "YouTube", "type": "Trailer"}]},
        )
        enricher = build_enricher(FakeCatalog(details={1: record}), fake_videos)

        enriched = await enricher.enrich_movie(1)

        assert enriched is not None
        assert enriched.trailer.id == "emb"
        assert enriched.sources == frozenset({"tmdb"})
        assert fake_videos.queries == []

    async def test_missing_detail_drops_movie(self, fake_catalog, fake_videos):
        enricher = build_enricher(fake_catalog, fake_videos)

        assert await enricher.enrich_movie(404) is None

    async def test_record_without_title_is_dropped(self, fake_videos):
        enricher = build_enricher(FakeCatalog(details={1: detail_record(1, title="")}), fake_videos)

        assert await enricher.enrich_movie(1) is None

    async def test_unreachable_video_source_keeps_movie(self, fake_catalog):
        enricher = build_enricher(fake_catalog, FakeVideoSource(mode="unavailable"))

        enriched = await enricher.enrich_movie(1)

        assert enriched is not None
        assert enriched.trailer is None
        assert not enriched.is_complete

    async def test_quota_without_placeholder(self, fake_catalog):
        enricher = build_enricher(fake_catalog, FakeVideoSource(mode="quota"), use_quota_placeholder=False)

        enriched = await enricher.enrich_movie(1)

        assert enriched is not None
        assert enriched.trailer is None

    async def test_quota_with_placeholder(self, fake_catalog):
        enricher = build_enricher(fake_catalog, FakeVideoSource(mode="quota"))

        enriched = await enricher.enrich_movie(1)

        assert enriched is not None
        assert enriched.trailer.origin is TrailerOrigin.PLACEHOLDER
        assert enriched.is_complete
        assert enriched.sources == frozenset({"tmdb"})


class TestEnrichBatch:
    """Test cases for MovieEnricher.enrich_batch."""

    async def test_batch_with_bounded_concurrency(self, fake_catalog, fake_videos):
        fake_catalog.delay = 0.01
        enricher = build_enricher(fake_catalog, fake_videos, concurrency=5)

        enriched = await enricher.enrich_batch(list(range(1, 8)))

        assert sorted(movie.id for movie in enriched) == list(range(1, 8))
        assert len(fake_catalog.detail_calls) == 7
        assert enricher.batch_processor.peak_in_flight <= 5

    async def test_failed_details_are_left_out(self, fake_catalog, fake_videos):
        fake_catalog.failing_ids = {2, 5}
        enricher = build_enricher(fake_catalog, fake_videos)

        enriched = await enricher.enrich_batch([1, 2, 3, 4, 5])

        assert sorted(movie.id for movie in enriched) == [1, 3, 4]

    async def test_video_outage_keeps_every_movie(self, fake_catalog):
        enricher = build_enricher(fake_catalog, FakeVideoSource(mode="unavailable"))

        enriched = await enricher.enrich_batch([1, 2, 3])

        assert len(enriched) == 3
        assert all(movie.trailer is None for movie in enriched)
        assert enricher.analyze_unification(enriched).trailer_rate == 0.0

    async def test_empty_batch(self, fake_catalog, fake_videos):
        assert await build_enricher(fake_catalog, fake_videos).enrich_batch([]) == []

    async def test_repeated_batch_served_from_cache(self, fake_catalog, fake_videos):
        enricher = build_enricher(fake_catalog, fake_videos, cache=ResultCache())

        await enricher.enrich_batch([1, 2])
        await enricher.enrich_batch([1, 2])

        assert sorted(fake_catalog.detail_calls) == [1, 2]
        assert len(fake_videos.queries) == 2

    async def test_enrich_movies_uses_listing_ids(self, fake_catalog, fake_videos):
        from cinemarathon.services.enricher.movie_enricher import normalizer

        listings = normalizer.normalize_listings([listing_record(3), listing_record(4)])

        enriched = await build_enricher(fake_catalog, fake_videos).enrich_movies(listings)

        assert sorted(movie.id for movie in enriched) == [3, 4]


@pytest.mark.parametrize("concurrency", [1, 3])
async def test_results_do_not_depend_on_concurrency(fake_catalog, fake_videos, concurrency):
    enricher = build_enricher(fake_catalog, fake_videos, concurrency=concurrency)

    enriched = await enricher.enrich_batch([1, 2, 3, 4])

    assert sorted(movie.id for movie in enriched) == [1, 2, 3, 4]
