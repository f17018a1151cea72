"""Movie models for catalog records and enriched output."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any

from .video import TrailerRef


@dataclass(frozen=True)
class CastMember:
    """A credited cast member."""

    name: str
    character: str = ""
    profile_url: str | None = None


@dataclass(frozen=True)
class CatalogVideo:
    """A video entry embedded in a catalog detail record.

    Attributes:
        key: Video identifier on the hosting site
        name: Video title
        site: Host tag, e.g. "YouTube"
        type: Video kind, e.g. "Trailer" or "Teaser"
        official: Whether the studio published it
    """

    key: str
    name: str = ""
    site: str = ""
    type: str = ""
    official: bool = False


def _year_of(release_date: str | None) -> int | None:
    if release_date and len(release_date) >= 4 and release_date[:4].isdigit():
        return int(release_date[:4])
    return None


@dataclass(frozen=True)
class Movie:
    """Listing record from the movie catalog (popular, search, discover)."""

    id: int
    title: str
    overview: str
    poster_url: str | None
    rating: float
    vote_count: int
    release_date: str
    genres: tuple[str, ...] = ()
    runtime: int | None = None

    @property
    def release_year(self) -> int | None:
        return _year_of(self.release_date)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["genres"] = list(self.genres)
        return data


@dataclass(frozen=True)
class Candidate:
    """Normalized catalog detail record, ready for enrichment and planning.

    A candidate is usable only when it has an identifier, a title, a rating
    and a positive duration; see ``is_valid``.
    """

    id: int | None
    title: str | None
    rating: float | None
    duration: int
    genres: tuple[str, ...] = ()
    release_date: str = "unknown"
    overview: str = ""
    original_title: str | None = None
    poster_url: str | None = None
    backdrop_url: str | None = None
    vote_count: int = 0
    cast: tuple[CastMember, ...] = ()
    videos: tuple[CatalogVideo, ...] = ()

    @property
    def release_year(self) -> int | None:
        return _year_of(self.release_date)

    def is_valid(self) -> bool:
        """Whether the candidate can take part in a marathon."""
        return (
            self.id is not None
            and bool(self.title)
            and self.rating is not None
            and self.duration > 0
        )


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class EnrichedMovie:
    """A candidate unified with an optional trailer.

    Attributes:
        candidate: Catalog detail the record was built from
        trailer: Trailer reference, None when no trailer could be found
        sources: Tags of the sources that contributed data
        unified_at: UTC timestamp of the unification
    """

    candidate: Candidate
    trailer: TrailerRef | None = None
    sources: frozenset[str] = frozenset({"tmdb"})
    unified_at: datetime = field(default_factory=_utc_now)

    @property
    def is_complete(self) -> bool:
        return self.trailer is not None

    @property
    def id(self) -> int | None:
        return self.candidate.id

    @property
    def title(self) -> str | None:
        return self.candidate.title

    @property
    def rating(self) -> float | None:
        return self.candidate.rating

    @property
    def duration(self) -> int:
        return self.candidate.duration

    @property
    def genres(self) -> tuple[str, ...]:
        return self.candidate.genres

    @property
    def release_date(self) -> str:
        return self.candidate.release_date

    @property
    def release_year(self) -> int | None:
        return self.candidate.release_year

    @property
    def overview(self) -> str:
        return self.candidate.overview

    def is_valid(self) -> bool:
        return self.candidate.is_valid()

    def to_dict(self) -> dict[str, Any]:
        candidate = self.candidate
        return {
            "id": candidate.id,
            "title": candidate.title,
            "original_title": candidate.original_title,
            "overview": candidate.overview,
            "rating": candidate.rating,
            "vote_count": candidate.vote_count,
            "duration": candidate.duration,
            "release_date": candidate.release_date,
            "genres": list(candidate.genres),
            "poster_url": candidate.poster_url,
            "backdrop_url": candidate.backdrop_url,
            "cast": [asdict(member) for member in candidate.cast],
            "trailer": self.trailer.to_dict() if self.trailer else None,
            "sources": sorted(self.sources),
            "is_complete": self.is_complete,
            "unified_at": self.unified_at.isoformat(),
        }


@dataclass(frozen=True)
class UnificationReport:
    """Coverage statistics of a batch of enriched movies."""

    total: int
    with_trailer: int
    with_overview: int
    with_genres: int
    trailer_rate: float
    overview_rate: float
    genre_rate: float
    completeness: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
