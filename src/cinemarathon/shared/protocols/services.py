"""Service protocols for dependency inversion.

This module defines the interfaces external sources must implement. The
enrichment pipeline only talks to these protocols, so tests can swap in
fakes and the real adapters stay in the services layer.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from cinemarathon.shared.models import VideoResult, VideoStatistics
from cinemarathon.shared.result import Result


class CatalogSource(Protocol):
    """Protocol for the primary movie catalog.

    Every method returns a result value instead of raising, so a failed
    request arrives as ``Failure`` holding an ``InfrastructureError``.

    Example:
        >>> from cinemarathon.services.tmdb import TMDBCatalogSource
        >>> catalog: CatalogSource = TMDBCatalogSource(settings.api.tmdb)
        >>> result = await catalog.fetch_detail(550, ["credits", "videos"])
    """

    async def fetch_popular(self, page: int = 1) -> Result[list[dict[str, Any]]]:
        """Fetch a page of currently popular movies as raw records."""

    async def fetch_top_rated(self, page: int = 1) -> Result[list[dict[str, Any]]]:
        """Fetch a page of top rated movies as raw records."""

    async def fetch_detail(
        self,
        movie_id: int,
        fields: Sequence[str],
    ) -> Result[dict[str, Any]]:
        """Fetch one raw detail record with the requested appended fields."""

    async def search(self, query: str) -> Result[list[dict[str, Any]]]:
        """Search movies by title."""

    async def discover_by_date_range(
        self,
        start: str,
        end: str,
        filters: dict[str, Any] | None = None,
    ) -> Result[list[dict[str, Any]]]:
        """Discover movies released between two ISO dates."""


class VideoSource(Protocol):
    """Protocol for the secondary video platform.

    A quota refusal is reported as ``Failure`` holding a
    ``QuotaExceededError``.
    """

    async def search(self, query: str, max_results: int) -> Result[list[VideoResult]]:
        """Search videos matching a free-text query."""

    async def fetch_statistics(self, video_id: str) -> Result[VideoStatistics]:
        """Fetch engagement statistics and duration of one video."""


class PlannableItem(Protocol):
    """Anything the marathon filters and optimizer can reason about."""

    @property
    def id(self) -> int | None: ...

    @property
    def title(self) -> str | None: ...

    @property
    def rating(self) -> float | None: ...

    @property
    def duration(self) -> int: ...

    @property
    def genres(self) -> tuple[str, ...]: ...

    @property
    def release_date(self) -> str: ...

    @property
    def release_year(self) -> int | None: ...
