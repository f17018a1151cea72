"""Integration tests for MarathonService over in-memory sources."""

from __future__ import annotations

import pytest

from cinemarathon.config.models.settings import Settings
from cinemarathon.services.marathon_service import MarathonService
from cinemarathon.shared.constants import MarathonMessages, QualityLabels, TrailerKeywords
from cinemarathon.shared.errors import SecurityError
from cinemarathon.shared.models import MarathonOptions, TrailerOrigin

from conftest import FakeCatalog, FakeVideoSource, detail_record, listing_record

pytestmark = pytest.mark.integration


@pytest.fixture
def catalog() -> FakeCatalog:
    details = {
        1: detail_record(1, title="Alien", vote_average=8.4, runtime=117, release_date="1979-05-25",
                         genres=[{"id": 27, "name": "Horror"}, {"id": 878, "name": "Science Fiction"}]),
        2: detail_record(2, title="Heat", vote_average=8.3, runtime=170, release_date="1995-12-15",
                         genres=[{"id": 80, "name": "Crime"}]),
        3: detail_record(3, title="Scream", vote_average=7.4, runtime=111, release_date="1996-12-20",
                         genres=[{"id": 27, "name": "Horror"}]),
        4: detail_record(4, title="Clueless", vote_average=6.9, runtime=97, release_date="1995-07-19",
                         genres=[{"id": 35, "name": "Comedy"}]),
        5: detail_record(5, title="Bad", vote_average=4.0, runtime=90, release_date="1997-01-01"),
    }
    listing = [
        listing_record(1, title="Alien", release_date="1979-05-25"),
        listing_record(2, title="Heat", release_date="1995-12-15"),
        listing_record(3, title="Scream", release_date="1996-12-20"),
        listing_record(4, title="Clueless", release_date="1995-07-19"),
        listing_record(5, title="Bad", release_date="1997-01-01"),
    ]
    return FakeCatalog(details=details, listing=listing)


@pytest.fixture
def settings() -> Settings:
    return Settings(marathon={"popular_pool_size": 5, "thematic_pool_size": 5, "decade_pool_size": 5})


@pytest.fixture
async def service(catalog, fake_videos, settings):
    async with MarathonService(catalog, fake_videos, settings) as running:
        yield running


class TestListings:
    """Test cases for catalog listings."""

    async def test_popular(self, service):
        movies = await service.get_popular()

        assert [movie.title for movie in movies] == ["Alien", "Heat", "Scream", "Clueless", "Bad"]
        assert movies[0].genres == ("Drama",)

    async def test_listing_failure_gives_empty_list(self, service, catalog):
        catalog.fail_listings = True

        assert await service.get_top_rated() == []

    async def test_blank_search(self, service, catalog):
        assert await service.search("  ") == []
        assert "search" not in catalog.calls

    async def test_discover_decade(self, service):
        movies = await service.discover_decade(1990)

        assert {movie.title for movie in movies} == {"Heat", "Scream", "Clueless", "Bad"}

    async def test_find_trailers(self, service, fake_videos):
        found = await service.find_trailers("Heat", 1995, limit=1)

        assert len(found) == 1
        assert fake_videos.queries == ["Heat 1995 official trailer"]

    async def test_find_trailers_when_video_source_down(self, catalog):
        async with MarathonService(catalog, FakeVideoSource(mode="unavailable")) as service:
            assert await service.find_trailers("Heat") == []

    async def test_video_stats(self, service, fake_videos):
        stats = await service.video_stats("abc123")

        assert stats is not None
        assert stats.views == 1200
        assert stats.duration_seconds == 150
        assert fake_videos.stats_calls == ["abc123"]

    @pytest.mark.parametrize("video_id", ["", TrailerKeywords.PLACEHOLDER_VIDEO_ID])
    async def test_video_stats_skips_placeholder_and_blank(self, service, fake_videos, video_id):
        assert await service.video_stats(video_id) is None
        assert fake_videos.stats_calls == []

    async def test_video_stats_when_source_down(self, catalog):
        async with MarathonService(catalog, FakeVideoSource(mode="unavailable")) as service:
            assert await service.video_stats("abc123") is None

    async def test_video_stats_are_cached(self, service, fake_videos):
        await service.video_stats("abc123")
        await service.video_stats("abc123")

        assert fake_videos.stats_calls == ["abc123"]


class TestEnrichment:
    """Test cases for enrichment through the service."""

    async def test_get_popular_enriched(self, service):
        enriched = await service.get_popular_enriched(limit=3)

        assert sorted(movie.id for movie in enriched) == [1, 2, 3]
        assert all(movie.is_complete for movie in enriched)

    async def test_video_outage_keeps_movies(self, catalog, settings):
        async with MarathonService(catalog, FakeVideoSource(mode="unavailable"), settings) as service:
            enriched = await service.enrich([1, 2, 3])
            report = service.analyze_unification(enriched)

        assert len(enriched) == 3
        assert not any(movie.is_complete for movie in enriched)
        assert report.with_trailer == 0

    async def test_repeat_lookups_are_cached(self, service, catalog):
        await service.enrich([1, 2])
        await service.enrich([1, 2])

        assert sorted(catalog.detail_calls) == [1, 2]

    async def test_spent_quota_gives_placeholder_by_default(self, catalog):
        async with MarathonService(catalog, FakeVideoSource(mode="quota"), Settings()) as service:
            enriched = await service.enrich([1])

        assert enriched[0].trailer is not None
        assert enriched[0].trailer.origin is TrailerOrigin.PLACEHOLDER
        assert enriched[0].is_complete

    async def test_placeholder_can_be_switched_off(self, catalog):
        settings = Settings(enrichment={"use_quota_placeholder": False})
        async with MarathonService(catalog, FakeVideoSource(mode="quota"), settings) as service:
            enriched = await service.enrich([1])

        assert enriched[0].trailer is None

    @pytest.mark.parametrize(("limit", "expected"), [(0, []), (-1, []), (2, [1, 2])])
    async def test_enriched_listing_limits(self, service, limit, expected):
        popular = await service.get_popular_enriched(limit=limit)
        found = await service.search_enriched("e", limit=limit)

        assert sorted(movie.id for movie in popular) == expected
        assert sorted(movie.id for movie in found) == expected

    async def test_decade_limit_zero_is_respected(self, service):
        assert await service.discover_decade_enriched(1990, limit=0) == []

    async def test_decade_limit_defaults_to_pool_size(self, service):
        enriched = await service.discover_decade_enriched(1990)

        assert {movie.title for movie in enriched} == {"Heat", "Scream", "Clueless", "Bad"}


class TestPlanning:
    """Test cases for marathon planning through the service."""

    async def test_plan_from_popular(self, service):
        plan, report = await service.plan_from_popular(300)

        assert plan.total_duration <= 300
        assert "Bad" not in [movie.title for movie in plan.items]
        assert {movie.title for movie in plan.items} == {"Alien", "Heat"}
        assert report.quality == QualityLabels.EXCELLENT

    async def test_thematic_plan(self, service):
        plan, _ = await service.plan_thematic_from_popular(240, ["horror"])

        assert {movie.title for movie in plan.items} == {"Alien", "Scream"}

    async def test_decade_plan(self, service):
        plan, _ = await service.plan_from_decade(1990, 200, MarathonOptions(min_rating=7.0))

        assert [movie.title for movie in plan.items] == ["Heat"]

    async def test_impossible_budget(self, service):
        plan, report = await service.plan_from_popular(30)

        assert plan.is_empty
        assert plan.description == MarathonMessages.EMPTY_PLAN
        assert report.time_utilization == 0.0


class TestLifecycle:
    """Test cases for service construction and shutdown."""

    async def test_close_releases_sources_and_sweeper(self, catalog, fake_videos):
        service = MarathonService(catalog, fake_videos)

        async with service:
            assert service.cache.sweeper_running

        assert not service.cache.sweeper_running
        assert fake_videos.closed

    def test_cache_can_be_disabled(self, catalog, fake_videos):
        service = MarathonService(catalog, fake_videos, Settings(cache={"enabled": False}))

        assert service.cache is None

    def test_from_settings_requires_api_keys(self):
        with pytest.raises(SecurityError):
            MarathonService.from_settings(Settings())
