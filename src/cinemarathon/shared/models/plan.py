"""Marathon plan models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from cinemarathon.shared.constants import MarathonDefaults

from .movie import EnrichedMovie


@dataclass(frozen=True)
class MarathonOptions:
    """Optimizer options.

    Attributes:
        min_rating: Minimum rating a movie needs to be considered
        max_count: Maximum number of movies in a plan
        prefer_recent: Order candidates by release date before density
        max_optimizer_input: Cap on candidates handed to the knapsack search
    """

    min_rating: float = MarathonDefaults.MIN_RATING
    max_count: int = MarathonDefaults.MAX_COUNT
    prefer_recent: bool = MarathonDefaults.PREFER_RECENT
    max_optimizer_input: int = MarathonDefaults.MAX_OPTIMIZER_INPUT

    def __post_init__(self) -> None:
        if self.max_count < 0:
            msg = f"max_count must be non-negative, got {self.max_count}"
            raise ValueError(msg)
        if self.max_optimizer_input < 1:
            msg = f"max_optimizer_input must be at least 1, got {self.max_optimizer_input}"
            raise ValueError(msg)


@dataclass(frozen=True)
class Plan:
    """A selected marathon.

    ``items`` keeps selection order. ``total_duration`` never exceeds
    ``budget`` when the budget is positive.
    """

    items: tuple[EnrichedMovie, ...]
    total_duration: int
    budget: int
    remaining: int
    average_rating: float
    description: str

    @property
    def count(self) -> int:
        return len(self.items)

    @property
    def total_rating(self) -> float:
        return sum(item.rating or 0.0 for item in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def to_dict(self) -> dict[str, Any]:
        return {
            "movies": [item.to_dict() for item in self.items],
            "total_duration": self.total_duration,
            "budget": self.budget,
            "remaining": self.remaining,
            "average_rating": self.average_rating,
            "count": self.count,
            "description": self.description,
        }


@dataclass(frozen=True)
class PlanReport:
    """Summary statistics derived from a Plan."""

    time_utilization: float
    excellent_count: int
    free_time: str
    quality: str

    @property
    def utilization_label(self) -> str:
        """Utilization rendered as a percentage, e.g. "87.5%"."""
        return f"{self.time_utilization * 100:.1f}%"

    def to_dict(self) -> dict[str, Any]:
        return {
            "time_utilization": self.time_utilization,
            "utilization_label": self.utilization_label,
            "excellent_count": self.excellent_count,
            "free_time": self.free_time,
            "quality": self.quality,
        }
