"""
Pytest configuration and shared fixtures for CineMarathon tests.

Provides in-memory catalog and video sources plus builders for candidates
and enriched movies, so no test reaches a real network service.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import pytest

from cinemarathon.config import reset_config
from cinemarathon.shared.errors import ErrorCode, ErrorContext, QuotaExceededError, create_source_error
from cinemarathon.shared.models import Candidate, EnrichedMovie, TrailerRef, VideoResult, VideoStatistics
from cinemarathon.shared.result import Failure, Result, Success


def detail_record(movie_id: int, **overrides: Any) -> dict[str, Any]:
    """Raw catalog detail record as the TMDB API returns it."""
    record: dict[str, Any] = {
        "id": movie_id,
        "title": f"Movie {movie_id}",
        "original_title": f"Movie {movie_id}",
        "overview": f"Overview of movie {movie_id}",
        "vote_average": 7.0,
        "vote_count": 1000,
        "release_date": "2001-05-04",
        "runtime": 100,
        "genres": [{"id": 18, "name": "Drama"}],
        "poster_path": f"/poster{movie_id}.jpg",
        "backdrop_path": f"/backdrop{movie_id}.jpg",
        "credits": {"cast": [{"name": "Actor", "character": "Lead", "profile_path": None}]},
        "videos": {"results": []},
    }
    record.update(overrides)
    return record


def listing_record(movie_id: int, **overrides: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": movie_id,
        "title": f"Movie {movie_id}",
        "overview": "",
        "vote_average": 7.0,
        "vote_count": 1000,
        "release_date": "2001-05-04",
        "genre_ids": [18],
        "poster_path": None,
    }
    record.update(overrides)
    return record


class FakeCatalog:
    """In-memory CatalogSource.

    Attributes:
        details: Detail records by id
        listing: Records returned by every listing call
        failing_ids: Ids whose detail lookup fails
        delay: Seconds every call sleeps before answering
        calls: Names of the methods called, in order
    """

    def __init__(
        self,
        details: dict[int, dict[str, Any]] | None = None,
        listing: list[dict[str, Any]] | None = None,
        failing_ids: set[int] | None = None,
        delay: float = 0.0,
    ) -> None:
        self.details = details or {}
        self.listing = listing or []
        self.failing_ids = failing_ids or set()
        self.delay = delay
        self.fail_listings = False
        self.calls: list[str] = []
        self.detail_calls: list[int] = []

    async def _answer(self, name: str, value: Any) -> Result[Any]:
        self.calls.append(name)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_listings and name != "fetch_detail":
            return Failure(
                create_source_error(
                    source="tmdb",
                    operation=name,
                    message="catalog down",
                    code=ErrorCode.TMDB_API_CONNECTION_ERROR,
                )
            )
        return Success(value)

    async def fetch_popular(self, page: int = 1) -> Result[list[dict[str, Any]]]:
        return await self._answer("fetch_popular", list(self.listing))

    async def fetch_top_rated(self, page: int = 1) -> Result[list[dict[str, Any]]]:
        return await self._answer("fetch_top_rated", list(self.listing))

    async def search(self, query: str) -> Result[list[dict[str, Any]]]:
        return await self._answer("search", [r for r in self.listing if query.lower() in r["title"].lower()])

    async def discover_by_date_range(
        self,
        start: str,
        end: str,
        filters: dict[str, Any] | None = None,
    ) -> Result[list[dict[str, Any]]]:
        return await self._answer(
            "discover_by_date_range",
            [r for r in self.listing if start <= r.get("release_date", "") <= end],
        )

    async def fetch_detail(self, movie_id: int, fields: Any = ()) -> Result[dict[str, Any]]:
        self.detail_calls.append(movie_id)
        if movie_id in self.failing_ids or movie_id not in self.details:
            self.calls.append("fetch_detail")
            return Failure(
                create_source_error(
                    source="tmdb",
                    operation="fetch_detail",
                    message=f"Movie {movie_id} not found",
                    code=ErrorCode.TMDB_API_MEDIA_NOT_FOUND,
                )
            )
        return await self._answer("fetch_detail", self.details[movie_id])


class FakeVideoSource:
    """In-memory VideoSource.

    ``mode`` is one of "ok", "unavailable" or "quota".
    """

    def __init__(
        self,
        results: list[VideoResult] | None = None,
        mode: str = "ok",
        delay: float = 0.0,
    ) -> None:
        self.results = results
        self.mode = mode
        self.delay = delay
        self.queries: list[str] = []
        self.stats_calls: list[str] = []
        self.closed = False

    async def search(self, query: str, max_results: int = 5) -> Result[list[VideoResult]]:
        self.queries.append(query)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.mode != "ok":
            return self._failure("video_search")
        if self.results is not None:
            return Success(list(self.results)[:max_results])
        slug = query.split(" ")[0]
        return Success(
            [
                VideoResult(
                    id=f"yt-{slug}",
                    title=f"{query.title()}",
                    description="",
                    thumbnail_url=None,
                    channel="Studio",
                )
            ]
        )

    async def fetch_statistics(self, video_id: str) -> Result[VideoStatistics]:
        self.stats_calls.append(video_id)
        if self.mode != "ok":
            return self._failure("video_statistics")
        return Success(VideoStatistics(video_id=video_id, views=1200, likes=80, comments=7, duration_seconds=150))

    def _failure(self, operation: str) -> Failure:
        if self.mode == "quota":
            return Failure(
                QuotaExceededError(
                    code=ErrorCode.YOUTUBE_API_QUOTA_EXCEEDED,
                    message="YouTube quota exceeded",
                    context=ErrorContext(operation=operation, source="youtube"),
                )
            )
        return Failure(
            create_source_error(
                source="youtube",
                operation=operation,
                message="video platform unreachable",
                code=ErrorCode.NETWORK_ERROR,
            )
        )

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_catalog() -> FakeCatalog:
    details = {movie_id: detail_record(movie_id) for movie_id in range(1, 8)}
    listing = [listing_record(movie_id) for movie_id in range(1, 8)]
    return FakeCatalog(details=details, listing=listing)


@pytest.fixture
def fake_videos() -> FakeVideoSource:
    return FakeVideoSource()


@pytest.fixture
def make_candidate() -> Callable[..., Candidate]:
    def build(
        movie_id: int | None = 1,
        title: str | None = "Movie",
        rating: float | None = 7.0,
        duration: int = 100,
        **kwargs: Any,
    ) -> Candidate:
        return Candidate(id=movie_id, title=title, rating=rating, duration=duration, **kwargs)

    return build


@pytest.fixture
def make_enriched(make_candidate: Callable[..., Candidate]) -> Callable[..., EnrichedMovie]:
    def build(
        movie_id: int = 1,
        rating: float | None = 7.0,
        duration: int = 100,
        trailer: TrailerRef | None = None,
        **kwargs: Any,
    ) -> EnrichedMovie:
        kwargs.setdefault("title", f"Movie {movie_id}")
        return EnrichedMovie(
            candidate=make_candidate(movie_id=movie_id, rating=rating, duration=duration, **kwargs),
            trailer=trailer,
        )

    return build


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Any) -> None:
    """Run every test with fresh settings and no real API keys."""
    for name in ("TMDB_API_KEY", "YOUTUBE_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_config()
