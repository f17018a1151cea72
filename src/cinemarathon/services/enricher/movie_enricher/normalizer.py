"""Normalization of raw catalog records.

This module converts the loosely typed dictionaries returned by the movie
catalog into canonical ``Movie`` and ``Candidate`` values. It is pure: no
I/O, no logging, and it never raises on missing or malformed fields.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from cinemarathon.shared.constants import TMDB_MOVIE_GENRES, TMDBEndpoints
from cinemarathon.shared.models import Candidate, CastMember, CatalogVideo, Movie


def has_identifier(raw: Mapping[str, Any] | None) -> bool:
    """Whether a raw record carries a usable identifier."""
    return raw is not None and _to_int(raw.get("id")) is not None


def image_url(path: str | None, size: str = TMDBEndpoints.POSTER_SIZE) -> str | None:
    """Build an image CDN URL from a catalog image path."""
    if not path:
        return None
    return f"{TMDBEndpoints.IMAGE_BASE_URL}/{size}{path}"


def normalize(raw_detail: Mapping[str, Any]) -> Candidate:
    """Convert a raw detail record into a Candidate.

    Missing fields get defaults: a placeholder overview, rating 0,
    release date "unknown", duration 0, no images, no genres, no cast and
    no videos. The identifier is left as found; records without one are
    filtered by the caller via ``has_identifier``.

    Args:
        raw_detail: Detail record, optionally with appended ``credits`` and
            ``videos`` sub-records

    Returns:
        Normalized Candidate
    """
    credits = _mapping(raw_detail.get("credits"))
    videos = _mapping(raw_detail.get("videos"))

    return Candidate(
        id=_to_int(raw_detail.get("id")),
        title=raw_detail.get("title") or None,
        original_title=raw_detail.get("original_title") or None,
        overview=raw_detail.get("overview") or TMDBEndpoints.DEFAULT_OVERVIEW,
        rating=_to_float(raw_detail.get("vote_average")),
        vote_count=_to_int(raw_detail.get("vote_count")) or 0,
        release_date=raw_detail.get("release_date") or TMDBEndpoints.UNKNOWN_RELEASE_DATE,
        duration=_to_int(raw_detail.get("runtime")) or 0,
        genres=_genre_names(raw_detail),
        poster_url=image_url(raw_detail.get("poster_path")),
        backdrop_url=image_url(raw_detail.get("backdrop_path"), TMDBEndpoints.BACKDROP_SIZE),
        cast=tuple(
            _cast_member(entry)
            for entry in _records(credits.get("cast"))[: TMDBEndpoints.MAX_CAST_MEMBERS]
        ),
        videos=tuple(
            _catalog_video(entry) for entry in _records(videos.get("results")) if entry.get("key")
        ),
    )


def normalize_listing(raw: Mapping[str, Any]) -> Movie:
    """Convert a raw list/search/discover record into a Movie.

    Listing records normally have no runtime, so ``runtime`` stays None
    unless the source provided one.
    """
    runtime = _to_int(raw.get("runtime"))
    return Movie(
        id=_to_int(raw.get("id")) or 0,
        title=raw.get("title") or "",
        overview=raw.get("overview") or TMDBEndpoints.DEFAULT_OVERVIEW,
        poster_url=image_url(raw.get("poster_path")),
        rating=_to_float(raw.get("vote_average")),
        vote_count=_to_int(raw.get("vote_count")) or 0,
        release_date=raw.get("release_date") or TMDBEndpoints.UNKNOWN_RELEASE_DATE,
        genres=_genre_names(raw),
        runtime=runtime if runtime else None,
    )


def normalize_listings(records: Iterable[Mapping[str, Any]]) -> list[Movie]:
    """Normalize every record that has an identifier, keeping order."""
    return [normalize_listing(raw) for raw in records if has_identifier(raw)]


def _genre_names(raw: Mapping[str, Any]) -> tuple[str, ...]:
    # Detail records carry named genres, listing records only ids
    named = [entry.get("name") for entry in _records(raw.get("genres"))]
    if any(named):
        return tuple(name for name in named if name)

    ids = raw.get("genre_ids") or []
    return tuple(TMDB_MOVIE_GENRES[gid] for gid in ids if gid in TMDB_MOVIE_GENRES)


def _cast_member(entry: Mapping[str, Any]) -> CastMember:
    return CastMember(
        name=entry.get("name") or "",
        character=entry.get("character") or "",
        profile_url=image_url(entry.get("profile_path")),
    )


def _catalog_video(entry: Mapping[str, Any]) -> CatalogVideo:
    return CatalogVideo(
        key=str(entry.get("key")),
        name=entry.get("name") or "",
        site=entry.get("site") or "",
        type=entry.get("type") or "",
        official=bool(entry.get("official", False)),
    )


def _records(value: Any) -> list[Mapping[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, Mapping)]


def _to_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _to_float(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}
