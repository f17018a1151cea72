"""Token Bucket Rate Limiter implementation.

This module provides a thread-safe token bucket rate limiter that both
source adapters consult before every outbound request.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from typing import Callable

from cinemarathon.shared.constants import NetworkConfig
from cinemarathon.shared.errors import ApplicationError, ErrorCode, ErrorContext

logger = logging.getLogger(__name__)


class TokenBucketRateLimiter:
    """Thread-safe token bucket rate limiter.

    The bucket holds up to ``capacity`` tokens and regains ``refill_rate``
    tokens per second. Each request consumes one token.

    Args:
        capacity: Maximum number of tokens the bucket can hold
        refill_rate: Number of tokens to add per second
        clock: Monotonic time source, injectable for tests
    """

    def __init__(
        self,
        capacity: int = NetworkConfig.DEFAULT_TOKEN_BUCKET_CAPACITY,
        refill_rate: float = NetworkConfig.DEFAULT_TOKEN_REFILL_RATE,
        clock: Callable[[], float] = time.monotonic,
    ):
        context = ErrorContext(
            operation="rate_limiter_init",
            additional_data={"capacity": capacity, "refill_rate": refill_rate},
        )

        if capacity <= 0:
            raise ApplicationError(
                code=ErrorCode.VALIDATION_ERROR,
                message=f"Capacity must be positive, got: {capacity}",
                context=context,
            )

        if refill_rate <= 0:
            raise ApplicationError(
                code=ErrorCode.VALIDATION_ERROR,
                message=f"Refill rate must be positive, got: {refill_rate}",
                context=context,
            )

        self.capacity = capacity
        self.refill_rate = refill_rate
        self._clock = clock
        self.tokens = float(capacity)
        self.last_refill = clock()
        self._lock = threading.Lock()

    def _refill(self) -> None:
        """Add the tokens earned since the last refill, up to capacity.

        Callers must hold the lock.
        """
        now = self._clock()
        tokens_to_add = (now - self.last_refill) * self.refill_rate

        if tokens_to_add > 0:
            self.tokens = min(self.capacity, self.tokens + tokens_to_add)
            self.last_refill = now

    def try_acquire(self, tokens: int = 1) -> bool:
        """Try to take tokens from the bucket without waiting.

        Args:
            tokens: Number of tokens to acquire (default: 1)

        Returns:
            True if the tokens were consumed, False otherwise

        Raises:
            ApplicationError: If the token count is not positive or exceeds
                the bucket capacity
        """
        if tokens <= 0 or tokens > self.capacity:
            raise ApplicationError(
                code=ErrorCode.VALIDATION_ERROR,
                message=f"Tokens to acquire must be in 1..{self.capacity}, got: {tokens}",
                context=ErrorContext(
                    operation="rate_limiter_acquire",
                    additional_data={"requested_tokens": tokens, "capacity": self.capacity},
                ),
            )

        with self._lock:
            self._refill()
            if self.tokens >= tokens:
                self.tokens -= tokens
                return True

        logger.debug("Rate limiter out of tokens, requested %d", tokens)
        return False

    async def acquire(self, tokens: int = 1) -> None:
        """Wait on the event loop until tokens are available."""
        while not self.try_acquire(tokens):
            await asyncio.sleep(NetworkConfig.RATE_LIMIT_POLL_INTERVAL)

    def get_tokens_available(self) -> int:
        """Get the current number of whole tokens in the bucket."""
        with self._lock:
            self._refill()
            return int(self.tokens)

    def reset(self) -> None:
        """Refill the bucket to capacity."""
        with self._lock:
            self.tokens = float(self.capacity)
            self.last_refill = self._clock()
