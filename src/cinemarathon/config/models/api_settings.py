"""API configuration models (TMDB and YouTube).

This module contains configuration models for the two external sources:
the TMDB movie catalog and the YouTube Data API.

Security: api keys are masked in __repr__ so settings can be logged.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from cinemarathon.shared.constants import NetworkConfig, TMDBEndpoints, YouTubeEndpoints


class TMDBSettings(BaseModel):
    """TMDB API configuration.

    Note: base_url is managed internally by tmdbv3api library.
    """

    api_key: str = Field(
        default="",
        repr=False,
        description="TMDB API key (falls back to TMDB_API_KEY)",
    )
    language: str = Field(
        default=TMDBEndpoints.DEFAULT_LANGUAGE,
        description="Language of titles and overviews",
    )
    region: str | None = Field(default=None, description="Optional ISO 3166-1 region")

    timeout: float = Field(
        default=NetworkConfig.DEFAULT_TIMEOUT,
        gt=0,
        description="Request timeout in seconds",
    )
    retry_attempts: int = Field(
        default=NetworkConfig.DEFAULT_RETRIES,
        ge=0,
        description="Number of retry attempts",
    )
    retry_delay: float = Field(
        default=NetworkConfig.RETRY_DELAY,
        ge=0,
        description="Base delay between retries in seconds, doubled per attempt",
    )
    rate_limit_rps: float = Field(
        default=NetworkConfig.DEFAULT_TOKEN_REFILL_RATE,
        gt=0,
        description="Rate limit in requests per second",
    )

    def __repr__(self) -> str:
        masked_key = "****" if self.api_key else "[empty]"
        return (
            f"TMDBSettings("
            f"api_key={masked_key}, "
            f"language={self.language}, "
            f"timeout={self.timeout}, "
            f"retry_attempts={self.retry_attempts}, "
            f"rate_limit_rps={self.rate_limit_rps})"
        )


class YouTubeSettings(BaseModel):
    """YouTube Data API configuration."""

    api_key: str = Field(
        default="",
        repr=False,
        description="YouTube Data API key (falls back to YOUTUBE_API_KEY)",
    )
    base_url: str = Field(default=YouTubeEndpoints.BASE_URL, description="Data API base URL")
    timeout: float = Field(
        default=NetworkConfig.DEFAULT_TIMEOUT,
        gt=0,
        description="Request timeout in seconds",
    )
    max_results: int = Field(
        default=YouTubeEndpoints.DEFAULT_MAX_RESULTS,
        gt=0,
        le=50,
        description="Search hits requested per trailer lookup",
    )
    rate_limit_rps: float = Field(
        default=10.0,
        gt=0,
        description="Rate limit in requests per second",
    )

    def __repr__(self) -> str:
        masked_key = "****" if self.api_key else "[empty]"
        return (
            f"YouTubeSettings("
            f"api_key={masked_key}, "
            f"timeout={self.timeout}, "
            f"max_results={self.max_results}, "
            f"rate_limit_rps={self.rate_limit_rps})"
        )


class APISettings(BaseModel):
    """API configuration container.

    Note: Environment variable loading is handled by the parent Settings class.
    """

    tmdb: TMDBSettings = Field(
        default_factory=TMDBSettings,
        description="TMDB API configuration",
    )
    youtube: YouTubeSettings = Field(
        default_factory=YouTubeSettings,
        description="YouTube Data API configuration",
    )


__all__ = ["APISettings", "TMDBSettings", "YouTubeSettings"]
