"""Insight service for core business logic.

This service resolves a query through the response cache, falling back to the
upstream orchestration service on a miss and populating the cache with the
exact upstream bytes.
"""

import logging

from insight_gateway.entities import (
    CachedResponseEntity,
    CacheStatus,
    InsightQuery,
    InsightResult,
)
from insight_gateway.protocols import InsightUpstream, ResponseStore

logger = logging.getLogger(__name__)


class InsightService:
    """Cache-aside orchestration around the upstream service.

    This service depends on PROTOCOLS, not concrete implementations:
    - ResponseStore: Redis or in-process memory
    - InsightUpstream: the HTTP upstream, or a fake in tests

    Example:
        ```python
        service = InsightService.create(
            store=MemoryResponseRepository(),
            upstream=HttpUpstreamClient.create(settings),
        )
        result = await service.resolve(InsightQuery(topic="bitcoin"))
        ```
    """

    def __init__(
        self,
        store: ResponseStore,
        upstream: InsightUpstream,
        ttl: int = 900,
    ) -> None:
        """Initialize the insight service.

        Args:
            store: Response cache backend (required).
            upstream: Upstream orchestration service (required).
            ttl: Time-to-live for cached responses in seconds.
        """
        self._store = store
        self._upstream = upstream
        self._ttl = ttl

    @classmethod
    def create(
        cls,
        store: ResponseStore,
        upstream: InsightUpstream,
        ttl: int = 900,
    ) -> "InsightService":
        """Factory method to create InsightService."""
        return cls(store=store, upstream=upstream, ttl=ttl)

    async def resolve(self, query: InsightQuery) -> InsightResult:
        """Return the insight for a query, from cache when possible.

        Business logic:
        1. Look the cache key up in the store; a hit is returned as-is
        2. On a miss, call the upstream (errors propagate, nothing is cached)
        3. Store the raw upstream body, awaiting the write
        4. Return the upstream body

        Args:
            query: The validated query

        Returns:
            InsightResult with the body and whether it came from cache
        """
        key = query.cache_key

        cached = await self._store.match(key)
        if cached is not None:
            logger.debug("Cache hit for %s", key)
            return InsightResult(body=cached.body, cache_status=CacheStatus.HIT)

        logger.debug("Cache miss for %s, calling upstream", key)
        body = await self._upstream.analyze(query)

        stored = await self._store.put(key, CachedResponseEntity(body=body), ttl=self._ttl)
        if not stored:
            logger.warning("Response for %s was not cached", key)

        return InsightResult(body=body, cache_status=CacheStatus.MISS)

    async def is_healthy(self) -> bool:
        """Check if the response store is reachable."""
        return await self._store.health_check()

    @property
    def ttl(self) -> int:
        return self._ttl

    @property
    def store(self) -> ResponseStore:
        """Get the underlying store (for testing)."""
        return self._store

    @property
    def upstream(self) -> InsightUpstream:
        """Get the underlying upstream client (for testing)."""
        return self._upstream
