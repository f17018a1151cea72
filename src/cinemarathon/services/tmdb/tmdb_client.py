"""TMDB catalog source built on tmdbv3api.

This module wraps the tmdbv3api library behind the ``CatalogSource``
protocol. The blocking library calls run in worker threads, every request
passes the token bucket rate limiter first, and failed requests are retried
with exponential backoff. Callers never see exceptions: every method
returns a ``Success`` or a ``Failure``.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Any, Callable

from tmdbv3api import Discover, Movie, TMDb
from tmdbv3api.exceptions import TMDbException

from cinemarathon.config.models.api_settings import TMDBSettings
from cinemarathon.services.rate_limiter import TokenBucketRateLimiter
from cinemarathon.shared.constants import HTTPStatusCodes, TMDBEndpoints
from cinemarathon.shared.errors import (
    ErrorCode,
    ErrorContext,
    SecurityError,
    SourceUnavailableError,
    create_source_error,
)
from cinemarathon.shared.logging import log_operation_error, log_operation_success
from cinemarathon.shared.result import Failure, Result, Success

logger = logging.getLogger(__name__)

SOURCE = "tmdb"


def _raw_json(response: Any) -> Any:
    """Unwrap a tmdbv3api AsObj into plain JSON data."""
    return getattr(response, "_json", response)


def _raw_results(response: Any) -> list[dict[str, Any]]:
    data = _raw_json(response)
    if isinstance(data, dict):
        data = data.get("results", [])
    if not isinstance(data, list):
        return []
    return [_raw_json(item) for item in data]


class TMDBCatalogSource:
    """TMDB catalog client with rate limiting and retries.

    Args:
        settings: TMDB API settings
        rate_limiter: Token bucket rate limiter instance

    Raises:
        SecurityError: If no API key is configured
    """

    def __init__(
        self,
        settings: TMDBSettings,
        rate_limiter: TokenBucketRateLimiter | None = None,
    ) -> None:
        if not settings.api_key:
            raise SecurityError(
                code=ErrorCode.MISSING_CONFIG,
                message="TMDB API key is not configured. Set TMDB_API_KEY or CINEMARATHON_API__TMDB__API_KEY.",
                context=ErrorContext(operation="tmdb_client_init", source=SOURCE),
            )

        self.settings = settings
        self.rate_limiter = rate_limiter or TokenBucketRateLimiter(
            capacity=max(1, int(settings.rate_limit_rps)),
            refill_rate=settings.rate_limit_rps,
        )

        # TMDb must be configured before creating the API objects
        self._tmdb = TMDb()
        self._tmdb.api_key = settings.api_key
        self._tmdb.language = settings.language
        if settings.region:
            self._tmdb.region = settings.region
        # ResultCache handles caching
        self._tmdb.cache = False

        self._movie = Movie()
        self._discover = Discover()

        logger.info("TMDB catalog source initialized with language: %s", settings.language)

    async def fetch_popular(self, page: int = 1) -> Result[list[dict[str, Any]]]:
        result = await self._make_request(lambda: self._movie.popular(page=page), "fetch_popular")
        return self._map(result, _raw_results)

    async def fetch_top_rated(self, page: int = 1) -> Result[list[dict[str, Any]]]:
        result = await self._make_request(lambda: self._movie.top_rated(page=page), "fetch_top_rated")
        return self._map(result, _raw_results)

    async def fetch_detail(
        self,
        movie_id: int,
        fields: Sequence[str] = TMDBEndpoints.DEFAULT_DETAIL_FIELDS,
    ) -> Result[dict[str, Any]]:
        append = ",".join(fields)
        result = await self._make_request(
            lambda: self._movie.details(movie_id, append_to_response=append),
            "fetch_detail",
        )
        return self._map(result, self._detail_json)

    async def search(self, query: str) -> Result[list[dict[str, Any]]]:
        if not query.strip():
            return Success([])
        result = await self._make_request(lambda: self._movie.search(query.strip()), "search")
        return self._map(result, _raw_results)

    async def discover_by_date_range(
        self,
        start: str,
        end: str,
        filters: dict[str, Any] | None = None,
    ) -> Result[list[dict[str, Any]]]:
        params = {
            "primary_release_date.gte": start,
            "primary_release_date.lte": end,
            "sort_by": TMDBEndpoints.DISCOVER_SORT_BY,
            "vote_average.gte": TMDBEndpoints.DISCOVER_MIN_VOTE_AVERAGE,
            "vote_count.gte": TMDBEndpoints.DISCOVER_MIN_VOTE_COUNT,
            **(filters or {}),
        }
        result = await self._make_request(
            lambda: self._discover.discover_movies(params),
            "discover_by_date_range",
        )
        return self._map(result, _raw_results)

    @staticmethod
    def _detail_json(response: Any) -> dict[str, Any]:
        data = _raw_json(response)
        if not isinstance(data, dict):
            msg = f"Unexpected detail payload type: {type(data).__name__}"
            raise TypeError(msg)
        return data

    @staticmethod
    def _map(result: Result[Any], convert: Callable[[Any], Any]) -> Result[Any]:
        if isinstance(result, Failure):
            return result
        try:
            return Success(convert(result.value))
        except (TypeError, ValueError, KeyError) as e:
            return Failure(
                create_source_error(
                    source=SOURCE,
                    operation="parse_response",
                    message=f"Invalid TMDB response: {e}",
                    code=ErrorCode.TMDB_API_INVALID_RESPONSE,
                    original_error=e,
                )
            )

    async def _make_request(self, api_call: Callable[[], Any], operation: str) -> Result[Any]:
        """Make a rate-limited API request with retry logic.

        Args:
            api_call: Blocking function that makes the actual API call
            operation: Operation name for logging

        Returns:
            Success with the raw response, or Failure after all retries
        """
        last_exception: Exception | None = None

        for attempt in range(self.settings.retry_attempts + 1):
            await self.rate_limiter.acquire()
            try:
                response = await asyncio.to_thread(api_call)
                log_operation_success(
                    logger=logger,
                    operation=operation,
                    duration_ms=0,
                    context={"attempt": attempt},
                )
                return Success(response)
            except (TMDbException, OSError) as e:
                last_exception = e
                code, _ = self._convert_exception(e)
                if code in (ErrorCode.TMDB_API_AUTHENTICATION_ERROR, ErrorCode.TMDB_API_MEDIA_NOT_FOUND):
                    break
                if attempt < self.settings.retry_attempts:
                    await asyncio.sleep(self.settings.retry_delay * (2**attempt))

        return Failure(self._exhausted_error(last_exception, operation))

    def _exhausted_error(self, exception: Exception | None, operation: str) -> SourceUnavailableError:
        code, message = self._convert_exception(exception)
        error = create_source_error(
            source=SOURCE,
            operation=operation,
            message=message,
            code=code,
            original_error=exception,
            retry_attempts=self.settings.retry_attempts,
        )
        log_operation_error(logger=logger, error=error, operation=operation, level=logging.WARNING)
        return error

    @staticmethod
    def _convert_exception(exception: Exception | None) -> tuple[ErrorCode, str]:
        """Convert a request exception to an ErrorCode and message."""
        if exception is None:
            return ErrorCode.TMDB_API_REQUEST_FAILED, "TMDB request failed"

        response = getattr(exception, "response", None)
        status_code = getattr(response, "status_code", 0) if response is not None else 0
        message = str(exception)
        lowered = message.lower()

        if status_code == HTTPStatusCodes.UNAUTHORIZED or "invalid api key" in lowered:
            return ErrorCode.TMDB_API_AUTHENTICATION_ERROR, f"TMDB authentication failed: {message}"
        if status_code == HTTPStatusCodes.NOT_FOUND or "could not be found" in lowered:
            return ErrorCode.TMDB_API_MEDIA_NOT_FOUND, f"TMDB resource not found: {message}"
        if status_code == HTTPStatusCodes.TOO_MANY_REQUESTS:
            return ErrorCode.TMDB_API_RATE_LIMIT_EXCEEDED, "TMDB rate limit exceeded"
        if HTTPStatusCodes.is_server_error(status_code):
            return ErrorCode.TMDB_API_SERVER_ERROR, f"TMDB server error ({status_code})"
        if "timeout" in lowered or "timed out" in lowered:
            return ErrorCode.TMDB_API_TIMEOUT, f"TMDB request timed out: {message}"
        if isinstance(exception, OSError) or "connection" in lowered:
            return ErrorCode.TMDB_API_CONNECTION_ERROR, f"TMDB connection failed: {message}"
        return ErrorCode.TMDB_API_REQUEST_FAILED, f"TMDB request failed: {message}"
