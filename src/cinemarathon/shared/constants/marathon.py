"""
Marathon Planning Constants
"""

from types import MappingProxyType


class MarathonDefaults:
    """Default optimizer options and candidate pool sizes."""

    MIN_RATING = 6.0
    MAX_COUNT = 10
    PREFER_RECENT = False
    MAX_OPTIMIZER_INPUT = 60

    POPULAR_POOL_SIZE = 5
    THEMATIC_POOL_SIZE = 10
    DECADE_POOL_SIZE = 15

    EXCELLENT_RATING = 8.0
    EXCELLENT_PLAN_AVERAGE = 7.5
    RATING_TOLERANCE = 1e-9


class QualityLabels:
    """Plan quality labels."""

    EXCELLENT = "Excellent"
    GOOD = "Good"


class MarathonMessages:
    """User-facing plan descriptions."""

    EMPTY_PLAN = "No compatible movies found."
    PLAN_TEMPLATE = "Marathon of {count} movie(s) [{duration}] with an average rating of {rating:.1f}★: {titles}"


# Named time budgets in minutes
MARATHON_PRESETS = MappingProxyType(
    {
        "afternoon": 240,
        "night": 360,
        "weekend": 720,
        "full_day": 960,
    }
)
