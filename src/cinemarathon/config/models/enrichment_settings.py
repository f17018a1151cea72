"""Enrichment pipeline configuration model."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from cinemarathon.shared.constants import NetworkConfig, TMDBEndpoints


class EnrichmentSettings(BaseModel):
    """Enrichment pipeline configuration.

    Controls the admission limit of concurrent item enrichments, the
    fields appended to detail lookups, the per-request timeout and what
    happens when the video quota runs out.
    """

    concurrency: int = Field(
        default=5,
        ge=1,
        description="Maximum number of items enriched at once",
    )
    detail_fields: list[str] = Field(
        default_factory=lambda: list(TMDBEndpoints.DEFAULT_DETAIL_FIELDS),
        description="Fields appended to catalog detail lookups",
    )
    request_timeout: float = Field(
        default=NetworkConfig.DEFAULT_TIMEOUT,
        gt=0,
        description="Timeout applied to every outbound call in seconds",
    )
    use_quota_placeholder: bool = Field(
        default=True,
        description="Attach a labelled placeholder trailer when the video quota is exhausted",
    )

    @field_validator("detail_fields", mode="before")
    @classmethod
    def _split_fields(cls, value: object) -> object:
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value


__all__ = ["EnrichmentSettings"]
