"""Trailer selection rules.

Pure helpers that pick a trailer for a candidate: first from the videos
embedded in the catalog record, otherwise from video platform search hits.
"""

from __future__ import annotations

from collections.abc import Iterable

from cinemarathon.shared.constants import TrailerKeywords, VideoSites, YouTubeEndpoints
from cinemarathon.shared.models import Candidate, CatalogVideo, TrailerOrigin, TrailerRef, VideoResult


def watch_url(video_id: str) -> str:
    return YouTubeEndpoints.WATCH_URL.format(video_id=video_id)


def embed_url(video_id: str) -> str:
    return YouTubeEndpoints.EMBED_URL.format(video_id=video_id)


def select_catalog_trailer(videos: Iterable[CatalogVideo]) -> TrailerRef | None:
    """Pick the best YouTube-hosted trailer from embedded catalog videos.

    Only Trailer and Teaser entries hosted on YouTube qualify. Official
    entries win over unofficial ones, then Trailer wins over Teaser; the
    original order breaks remaining ties.
    """
    eligible = [
        video
        for video in videos
        if video.site == VideoSites.YOUTUBE and video.type in VideoSites.TRAILER_TYPES and video.key
    ]
    if not eligible:
        return None

    best = min(
        eligible,
        key=lambda video: (not video.official, VideoSites.TRAILER_TYPES.index(video.type)),
    )
    return TrailerRef(
        id=best.key,
        title=best.name,
        url=watch_url(best.key),
        embed_url=embed_url(best.key),
        thumbnail_url=YouTubeEndpoints.THUMBNAIL_URL.format(video_id=best.key),
        channel="",
        origin=TrailerOrigin.CATALOG,
    )


def build_search_query(candidate: Candidate) -> str:
    """Query used to look a trailer up, e.g. "Heat 1995 official trailer"."""
    parts = [candidate.title or ""]
    if candidate.release_year is not None:
        parts.append(str(candidate.release_year))
    parts.append(TrailerKeywords.QUERY_SUFFIX)
    return " ".join(part for part in parts if part)


def is_trailer_like(video: VideoResult) -> bool:
    title = video.title.lower()
    return any(keyword in title for keyword in TrailerKeywords.KEYWORDS)


def pick_search_trailer(results: Iterable[VideoResult]) -> TrailerRef | None:
    """Build a TrailerRef from the first trailer-like search hit."""
    for video in results:
        if is_trailer_like(video):
            return to_trailer_ref(video)
    return None


def to_trailer_ref(video: VideoResult) -> TrailerRef:
    return TrailerRef(
        id=video.id,
        title=video.title,
        url=watch_url(video.id),
        embed_url=embed_url(video.id),
        thumbnail_url=video.thumbnail_url,
        channel=video.channel,
        origin=TrailerOrigin.VIDEO_SEARCH,
    )


def quota_placeholder(candidate: Candidate) -> TrailerRef:
    """Labelled stand-in used when the video quota is exhausted."""
    watch_key = TrailerKeywords.PLACEHOLDER_WATCH_KEY
    return TrailerRef(
        id=TrailerKeywords.PLACEHOLDER_VIDEO_ID,
        title=f"{TrailerKeywords.PLACEHOLDER_TITLE}: {candidate.title}",
        url=watch_url(watch_key),
        embed_url=embed_url(watch_key),
        thumbnail_url=TrailerKeywords.PLACEHOLDER_THUMBNAIL_URL,
        channel=TrailerKeywords.PLACEHOLDER_CHANNEL,
        origin=TrailerOrigin.PLACEHOLDER,
    )
