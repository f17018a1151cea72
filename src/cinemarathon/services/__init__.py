"""Services: source adapters, result cache, enrichment and the marathon facade."""

from .enricher import BatchProcessor, CatalogFetcher, MovieEnricher, TrailerFetcher
from .marathon_service import MarathonService
from .rate_limiter import TokenBucketRateLimiter
from .result_cache import ResultCache

__all__ = [
    "BatchProcessor",
    "CatalogFetcher",
    "MarathonService",
    "MovieEnricher",
    "ResultCache",
    "TokenBucketRateLimiter",
    "TrailerFetcher",
]
