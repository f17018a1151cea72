"""Marathon planning configuration model."""

from __future__ import annotations

from pydantic import BaseModel, Field

from cinemarathon.shared.constants import MarathonDefaults
from cinemarathon.shared.models import MarathonOptions


class MarathonSettings(BaseModel):
    """Optimizer defaults and candidate pool sizes."""

    min_rating: float = Field(default=MarathonDefaults.MIN_RATING, ge=0, le=10)
    max_count: int = Field(default=MarathonDefaults.MAX_COUNT, ge=0)
    prefer_recent: bool = Field(default=MarathonDefaults.PREFER_RECENT)
    max_optimizer_input: int = Field(default=MarathonDefaults.MAX_OPTIMIZER_INPUT, ge=1)

    popular_pool_size: int = Field(
        default=MarathonDefaults.POPULAR_POOL_SIZE,
        ge=1,
        description="Popular movies enriched for a general marathon",
    )
    thematic_pool_size: int = Field(
        default=MarathonDefaults.THEMATIC_POOL_SIZE,
        ge=1,
        description="Popular movies enriched for a genre marathon",
    )
    decade_pool_size: int = Field(
        default=MarathonDefaults.DECADE_POOL_SIZE,
        ge=1,
        description="Discovered movies enriched for a decade marathon",
    )

    def to_options(self) -> MarathonOptions:
        return MarathonOptions(
            min_rating=self.min_rating,
            max_count=self.max_count,
            prefer_recent=self.prefer_recent,
            max_optimizer_input=self.max_optimizer_input,
        )


__all__ = ["MarathonSettings"]
