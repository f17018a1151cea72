"""
External API Constants

URLs, field defaults and keyword lists used when talking to the movie
catalog (TMDB) and the video platform (YouTube).
"""

from typing import ClassVar


class TMDBEndpoints:
    """TMDB catalog constants."""

    IMAGE_BASE_URL = "https://image.tmdb.org/t/p"
    POSTER_SIZE = "w500"
    BACKDROP_SIZE = "original"

    DEFAULT_LANGUAGE = "en-US"
    DEFAULT_DETAIL_FIELDS: ClassVar[tuple[str, ...]] = ("credits", "videos")
    MAX_CAST_MEMBERS = 10

    # Discover filters for decade listings
    DISCOVER_SORT_BY = "popularity.desc"
    DISCOVER_MIN_VOTE_AVERAGE = 6.0
    DISCOVER_MIN_VOTE_COUNT = 100

    # Defaults for missing fields
    DEFAULT_OVERVIEW = "No description available."
    UNKNOWN_RELEASE_DATE = "unknown"


class YouTubeEndpoints:
    """YouTube Data API constants."""

    BASE_URL = "https://www.googleapis.com/youtube/v3"
    SEARCH_PATH = "search"
    VIDEOS_PATH = "videos"
    WATCH_URL = "https://www.youtube.com/watch?v={video_id}"
    EMBED_URL = "https://www.youtube.com/embed/{video_id}"
    THUMBNAIL_URL = "https://img.youtube.com/vi/{video_id}/hqdefault.jpg"

    DEFAULT_MAX_RESULTS = 5
    MAX_RESULTS_CAP = 10
    SEARCH_ORDER = "relevance"
    SEARCH_TYPE = "video"
    STATISTICS_PARTS = "statistics,contentDetails"


class VideoSites:
    """Embedded video host tags and types."""

    YOUTUBE = "YouTube"
    TRAILER = "Trailer"
    TEASER = "Teaser"
    TRAILER_TYPES: ClassVar[tuple[str, ...]] = (TRAILER, TEASER)


class TrailerKeywords:
    """Keywords that mark a video search hit as trailer-like."""

    KEYWORDS: ClassVar[tuple[str, ...]] = (
        "trailer",
        "official",
        "tráiler",
        "oficial",
        "teaser",
        "hd",
        "4k",
    )
    QUERY_SUFFIX = "official trailer"

    # Placeholder used when the video quota is exhausted
    PLACEHOLDER_VIDEO_ID = "fallback_quota"
    # Generic cinema intro the placeholder links to
    PLACEHOLDER_WATCH_KEY = "EngW7tLk6R8"
    PLACEHOLDER_THUMBNAIL_URL = "https://via.placeholder.com/640x360?text=Trailer+Unavailable"
    PLACEHOLDER_TITLE = "Trailer unavailable (video quota exceeded)"
    PLACEHOLDER_CHANNEL = "CineMarathon"


# TMDB movie genre identifiers used by listing records (which carry
# ``genre_ids`` instead of named genres)
TMDB_MOVIE_GENRES: dict[int, str] = {
    28: "Action",
    12: "Adventure",
    16: "Animation",
    35: "Comedy",
    80: "Crime",
    99: "Documentary",
    18: "Drama",
    10751: "Family",
    14: "Fantasy",
    36: "History",
    27: "Horror",
    10402: "Music",
    9648: "Mystery",
    10749: "Romance",
    878: "Science Fiction",
    10770: "TV Movie",
    53: "Thriller",
    10752: "War",
    37: "Western",
}
