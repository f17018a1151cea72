"""Shared constants for CineMarathon.

Constants are grouped into classes by concern so call sites read as
``CacheDefaults.TTL`` or ``MarathonDefaults.MAX_COUNT``.
"""

from .api import TMDB_MOVIE_GENRES, TMDBEndpoints, TrailerKeywords, VideoSites, YouTubeEndpoints
from .cache import CacheDefaults
from .marathon import MARATHON_PRESETS, MarathonDefaults, MarathonMessages, QualityLabels
from .network import HTTPStatusCodes, NetworkConfig

__all__ = [
    "MARATHON_PRESETS",
    "TMDB_MOVIE_GENRES",
    "CacheDefaults",
    "HTTPStatusCodes",
    "MarathonDefaults",
    "MarathonMessages",
    "NetworkConfig",
    "QualityLabels",
    "TMDBEndpoints",
    "TrailerKeywords",
    "VideoSites",
    "YouTubeEndpoints",
]
