"""Cached response domain entities."""

from dataclasses import dataclass
from enum import Enum

from insight_gateway.headers import JSON_CONTENT_TYPE


class CacheStatus(str, Enum):
    """Value of the ``x-cache`` response header."""

    HIT = "HIT"
    MISS = "MISS"


@dataclass(frozen=True)
class CachedResponseEntity:
    """Upstream body as stored in the response cache.

    Attributes:
        body: Raw upstream response bytes, never re-serialized
        content_type: Content type the body was stored with
    """

    body: bytes
    content_type: str = JSON_CONTENT_TYPE


@dataclass(frozen=True)
class InsightResult:
    """Outcome of resolving a query through the cache and upstream."""

    body: bytes
    cache_status: CacheStatus
