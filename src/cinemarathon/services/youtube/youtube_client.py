"""YouTube Data API video source built on aiohttp.

This module implements the ``VideoSource`` protocol against the YouTube
Data API v3. A 403 answer means the daily quota is spent and is reported
as a ``QuotaExceededError`` so the enrichment pipeline can react to it;
every other problem becomes a ``SourceUnavailableError``. Nothing is
raised to the caller.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any

import aiohttp

from cinemarathon.config.models.api_settings import YouTubeSettings
from cinemarathon.services.rate_limiter import TokenBucketRateLimiter
from cinemarathon.shared.constants import HTTPStatusCodes, YouTubeEndpoints
from cinemarathon.shared.errors import (
    ErrorCode,
    ErrorContext,
    QuotaExceededError,
    SecurityError,
    create_source_error,
)
from cinemarathon.shared.logging import log_operation_error
from cinemarathon.shared.models import VideoResult, VideoStatistics
from cinemarathon.shared.result import Failure, Result, Success

logger = logging.getLogger(__name__)

SOURCE = "youtube"

_ISO_DURATION = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")


def parse_iso_duration(duration: str | None) -> int:
    """Convert an ISO-8601 duration such as "PT1H2M3S" into seconds.

    Unparseable or empty values give 0.
    """
    if not duration:
        return 0
    match = _ISO_DURATION.match(duration)
    if not match:
        return 0
    hours, minutes, seconds = (int(part) if part else 0 for part in match.groups())
    return hours * 3600 + minutes * 60 + seconds


def normalize_search_item(item: dict[str, Any]) -> VideoResult | None:
    """Convert one search API item into a VideoResult, None if it has no video id."""
    video_id = (item.get("id") or {}).get("videoId")
    if not video_id:
        return None
    snippet = item.get("snippet") or {}
    thumbnails = snippet.get("thumbnails") or {}
    thumbnail = (thumbnails.get("high") or thumbnails.get("default") or {}).get("url")
    return VideoResult(
        id=video_id,
        title=snippet.get("title") or "",
        description=snippet.get("description") or "",
        thumbnail_url=thumbnail,
        channel=snippet.get("channelTitle") or "",
        published_at=snippet.get("publishedAt"),
    )


class YouTubeVideoSource:
    """Asynchronous YouTube Data API client.

    The aiohttp session is created lazily and must be released with
    ``close()`` or by using the client as an async context manager.

    Args:
        settings: YouTube API settings
        rate_limiter: Token bucket rate limiter instance
        session: Optional externally managed aiohttp session

    Raises:
        SecurityError: If no API key is configured
    """

    def __init__(
        self,
        settings: YouTubeSettings,
        rate_limiter: TokenBucketRateLimiter | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        if not settings.api_key:
            raise SecurityError(
                code=ErrorCode.MISSING_CONFIG,
                message="YouTube API key is not configured. Set YOUTUBE_API_KEY or CINEMARATHON_API__YOUTUBE__API_KEY.",
                context=ErrorContext(operation="youtube_client_init", source=SOURCE),
            )

        self.settings = settings
        self.rate_limiter = rate_limiter or TokenBucketRateLimiter(
            capacity=max(1, int(settings.rate_limit_rps)),
            refill_rate=settings.rate_limit_rps,
        )
        self._session = session
        self._owns_session = session is None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.settings.timeout),
            )
            self._owns_session = True
        return self._session

    async def search(self, query: str, max_results: int | None = None) -> Result[list[VideoResult]]:
        """Search videos, most relevant first."""
        limit = max_results or self.settings.max_results
        result = await self._make_request(
            YouTubeEndpoints.SEARCH_PATH,
            {
                "part": "snippet",
                "q": query,
                "maxResults": limit,
                "type": YouTubeEndpoints.SEARCH_TYPE,
                "order": YouTubeEndpoints.SEARCH_ORDER,
            },
            "video_search",
        )
        if isinstance(result, Failure):
            return result

        videos = [normalize_search_item(item) for item in result.value.get("items") or []]
        return Success([video for video in videos if video is not None])

    async def fetch_statistics(self, video_id: str) -> Result[VideoStatistics]:
        """Fetch views, likes, comments and duration of one video."""
        result = await self._make_request(
            YouTubeEndpoints.VIDEOS_PATH,
            {"part": YouTubeEndpoints.STATISTICS_PARTS, "id": video_id},
            "video_statistics",
        )
        if isinstance(result, Failure):
            return result

        items = result.value.get("items") or []
        if not items:
            return Failure(
                create_source_error(
                    source=SOURCE,
                    operation="video_statistics",
                    message=f"Video not found: {video_id}",
                    code=ErrorCode.YOUTUBE_API_INVALID_RESPONSE,
                    video_id=video_id,
                )
            )

        stats = items[0].get("statistics") or {}
        details = items[0].get("contentDetails") or {}
        return Success(
            VideoStatistics(
                video_id=video_id,
                views=int(stats.get("viewCount", 0)),
                likes=int(stats.get("likeCount", 0)),
                comments=int(stats.get("commentCount", 0)),
                duration_seconds=parse_iso_duration(details.get("duration")),
            )
        )

    async def _make_request(
        self,
        path: str,
        params: dict[str, Any],
        operation: str,
    ) -> Result[dict[str, Any]]:
        """Make a rate-limited GET request to the Data API.

        Returns:
            Success with the decoded JSON body or Failure describing the error
        """
        await self.rate_limiter.acquire()
        session = await self._get_session()
        url = f"{self.settings.base_url.rstrip('/')}/{path}"

        try:
            async with session.get(url, params={**params, "key": self.settings.api_key}) as response:
                if response.status == HTTPStatusCodes.FORBIDDEN:
                    error = QuotaExceededError(
                        code=ErrorCode.YOUTUBE_API_QUOTA_EXCEEDED,
                        message="YouTube quota exceeded",
                        context=ErrorContext(operation=operation, source=SOURCE),
                    )
                    log_operation_error(logger=logger, error=error, level=logging.WARNING)
                    return Failure(error)

                response.raise_for_status()
                data = await response.json()
        except aiohttp.ClientResponseError as e:
            return self._failure(
                operation,
                f"YouTube request failed with status {e.status}",
                ErrorCode.YOUTUBE_API_REQUEST_FAILED,
                e,
            )
        except asyncio.TimeoutError as e:
            return self._failure(operation, "YouTube request timed out", ErrorCode.YOUTUBE_API_TIMEOUT, e)
        except (aiohttp.ClientError, ValueError) as e:
            return self._failure(
                operation,
                f"YouTube request failed: {e}",
                ErrorCode.YOUTUBE_API_REQUEST_FAILED,
                e,
            )

        if not isinstance(data, dict):
            return self._failure(
                operation,
                "YouTube returned an unexpected payload",
                ErrorCode.YOUTUBE_API_INVALID_RESPONSE,
                None,
            )
        return Success(data)

    @staticmethod
    def _failure(
        operation: str,
        message: str,
        code: ErrorCode,
        original_error: Exception | None,
    ) -> Failure:
        error = create_source_error(
            source=SOURCE,
            operation=operation,
            message=message,
            code=code,
            original_error=original_error,
        )
        log_operation_error(logger=logger, error=error, level=logging.WARNING)
        return Failure(error)

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
            logger.debug("YouTube session closed")

    async def __aenter__(self) -> YouTubeVideoSource:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
