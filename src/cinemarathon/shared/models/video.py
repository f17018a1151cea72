"""Video models for trailer lookup."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any


class TrailerOrigin(str, Enum):
    """Where a trailer reference came from."""

    CATALOG = "catalog"
    VIDEO_SEARCH = "video_search"
    PLACEHOLDER = "placeholder"


@dataclass(frozen=True)
class VideoResult:
    """A hit from the video platform search."""

    id: str
    title: str
    description: str = ""
    thumbnail_url: str | None = None
    channel: str = ""
    published_at: str | None = None


@dataclass(frozen=True)
class VideoStatistics:
    """Engagement statistics of a single video."""

    video_id: str
    views: int = 0
    likes: int = 0
    comments: int = 0
    duration_seconds: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TrailerRef:
    """Reference to a playable trailer.

    Attributes:
        id: Video identifier on the hosting platform
        title: Video title
        url: Watch URL
        embed_url: Embeddable player URL
        thumbnail_url: Preview image, if known
        channel: Publishing channel name
        origin: Whether the trailer came from the catalog record, a video
            search, or is a quota placeholder
    """

    id: str
    title: str
    url: str
    embed_url: str
    thumbnail_url: str | None = None
    channel: str = ""
    origin: TrailerOrigin = TrailerOrigin.VIDEO_SEARCH

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["origin"] = self.origin.value
        return data
