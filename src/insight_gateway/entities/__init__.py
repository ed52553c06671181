"""Domain entities for internal representation.

These are frozen dataclasses used by services and repositories. They are NOT
used for API contracts - use DTOs from the dto package for that.
"""

from .cached_response import CachedResponseEntity, CacheStatus, InsightResult
from .insight_query import CACHE_KEY_PREFIX, InsightQuery, build_cache_key

__all__ = [
    "CACHE_KEY_PREFIX",
    "CacheStatus",
    "CachedResponseEntity",
    "InsightQuery",
    "InsightResult",
    "build_cache_key",
]
