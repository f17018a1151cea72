"""Movie enrichment services."""

from .enricher import MovieEnricher
from .movie_enricher import BatchProcessor, BatchSummary, CatalogFetcher, TrailerFetcher

__all__ = ["BatchProcessor", "BatchSummary", "CatalogFetcher", "MovieEnricher", "TrailerFetcher"]
