"""Marathon planning: filters, optimizer, analyzer and presets."""

from .analyzer import analyze_plan
from .filters import filter_by_decade, filter_by_genres, filter_by_min_rating, filter_valid
from .formatting import format_minutes
from .optimizer import build_plan, plan_decade_marathon, plan_marathon, plan_thematic_marathon
from .presets import MARATHON_PRESETS, get_preset_budget

__all__ = [
    "MARATHON_PRESETS",
    "analyze_plan",
    "build_plan",
    "filter_by_decade",
    "filter_by_genres",
    "filter_by_min_rating",
    "filter_valid",
    "format_minutes",
    "get_preset_budget",
    "plan_decade_marathon",
    "plan_marathon",
    "plan_thematic_marathon",
]
