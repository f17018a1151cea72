"""Domain models shared across CineMarathon layers."""

from .cache import CacheEntry
from .movie import Candidate, CastMember, CatalogVideo, EnrichedMovie, Movie, UnificationReport
from .plan import MarathonOptions, Plan, PlanReport
from .video import TrailerOrigin, TrailerRef, VideoResult, VideoStatistics

__all__ = [
    "CacheEntry",
    "Candidate",
    "CastMember",
    "CatalogVideo",
    "EnrichedMovie",
    "MarathonOptions",
    "Movie",
    "Plan",
    "PlanReport",
    "TrailerOrigin",
    "TrailerRef",
    "UnificationReport",
    "VideoResult",
    "VideoStatistics",
]
