"""
Cache Configuration Constants
"""


class CacheDefaults:
    """Default result cache parameters."""

    TTL = 3600  # 1 hour
    SWEEP_INTERVAL = 600  # 10 minutes

    # Cache key object types
    DETAIL = "detail"
    SEARCH = "search"
    POPULAR = "popular"
    TOP_RATED = "top_rated"
    DISCOVER = "discover"
    VIDEO_SEARCH = "video_search"
    VIDEO_STATISTICS = "video_statistics"
