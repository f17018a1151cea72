"""Batch processing module for concurrent movie enrichment.

This module provides the BatchProcessor class that fans items out to an
async worker under a semaphore-bounded admission limit and collects the
successful outcomes.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Sequence
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, TypeVar

from cinemarathon.shared.errors import CineMarathonError, ErrorCode, InfrastructureError
from cinemarathon.shared.logging import log_operation_error

logger = logging.getLogger(__name__)

ItemT = TypeVar("ItemT")
ResultT = TypeVar("ResultT")


@dataclass
class BatchSummary(Generic[ResultT]):
    """Summary of batch processing results.

    Attributes:
        success_count: Number of items that produced a result
        failed_count: Number of items that raised or were excluded
        results: Successful results only, in no guaranteed order

    Example:
        >>> summary = BatchSummary(success_count=8, failed_count=2, results=[...])
        >>> print(f"Success rate: {summary.success_count}/{summary.total}")
    """

    success_count: int
    failed_count: int
    results: list[ResultT] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.success_count + self.failed_count


class BatchProcessor:
    """Async batch processor with concurrency control.

    At most ``concurrency`` workers run at once across every batch this
    processor handles. A worker may return None to exclude its item, or
    raise; either way the item is counted as failed and left out of the
    results while its siblings carry on.

    Attributes:
        concurrency: Maximum number of concurrent workers (default: 5)
        peak_in_flight: Highest number of workers observed running at once

    Example:
        >>> processor = BatchProcessor(concurrency=5)
        >>> summary = await processor.process(items=movie_ids, worker=enricher.enrich_movie)
        >>> print(f"Processed {summary.success_count} successfully")
    """

    def __init__(self, concurrency: int = 5) -> None:
        """Initialize BatchProcessor with concurrency limit.

        Raises:
            ValueError: If concurrency is less than 1
        """
        if concurrency < 1:
            msg = f"concurrency must be at least 1, got {concurrency}"
            raise ValueError(msg)

        self.concurrency = concurrency
        self.in_flight = 0
        self.peak_in_flight = 0
        self._semaphore: asyncio.Semaphore | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    def _get_semaphore(self) -> asyncio.Semaphore:
        # Semaphores belong to one event loop
        loop = asyncio.get_running_loop()
        if self._semaphore is None or self._loop is not loop:
            self._semaphore = asyncio.Semaphore(self.concurrency)
            self._loop = loop
        return self._semaphore

    async def process(
        self,
        items: Sequence[ItemT],
        worker: Callable[[ItemT], Awaitable[ResultT | None]],
    ) -> BatchSummary[ResultT]:
        """Apply ``worker`` to every item with bounded concurrency.

        Cancelling the awaiting task cancels every in-flight worker.

        Args:
            items: Sequence of items to process
            worker: Async function to apply to each item

        Returns:
            BatchSummary with success/failure counts and successful results
        """
        if not items:
            return BatchSummary(success_count=0, failed_count=0, results=[])

        semaphore = self._get_semaphore()

        async def wrapped(item: ItemT) -> ResultT | None:
            async with semaphore:
                self.in_flight += 1
                self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
                try:
                    return await worker(item)
                finally:
                    self.in_flight -= 1

        results = await asyncio.gather(
            *(wrapped(item) for item in items),
            return_exceptions=True,
        )

        return self._build_summary(items, results)

    def _build_summary(
        self,
        items: Sequence[ItemT],
        results: Sequence[Any],
    ) -> BatchSummary[ResultT]:
        successes: list[ResultT] = []
        failed_count = 0

        for index, result in enumerate(results):
            if isinstance(result, BaseException):
                if isinstance(result, asyncio.CancelledError):
                    raise result
                self._log_error(result, items[index], index)
                failed_count += 1
            elif result is None:
                failed_count += 1
            else:
                successes.append(result)

        return BatchSummary(
            success_count=len(successes),
            failed_count=failed_count,
            results=successes,
        )

    def _log_error(self, error: BaseException, item: Any, index: int) -> None:
        """Log a worker exception with the item it belonged to."""
        if isinstance(error, CineMarathonError):
            log_operation_error(
                logger=logger,
                operation="batch_process_item",
                error=error,
                additional_context={"item_index": index, "item": str(item)},
                level=logging.WARNING,
            )
            return

        wrapped_error = InfrastructureError(
            code=ErrorCode.DATA_PROCESSING_ERROR,
            message=f"Unexpected error during batch processing item {index}: {error!s}",
            original_error=error if isinstance(error, Exception) else None,
        )
        log_operation_error(
            logger=logger,
            operation="batch_process_item",
            error=wrapped_error,
            additional_context={"item_index": index, "item": str(item)},
        )


__all__ = ["BatchProcessor", "BatchSummary"]
