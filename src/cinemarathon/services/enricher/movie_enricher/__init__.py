"""Building blocks of the movie enrichment pipeline."""

from .batch_processor import BatchProcessor, BatchSummary
from .fetcher import CatalogFetcher, TrailerFetcher

__all__ = ["BatchProcessor", "BatchSummary", "CatalogFetcher", "TrailerFetcher"]
