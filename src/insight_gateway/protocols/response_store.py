"""Response store protocol.

Defines the interface for the keyed blob store used as a TTL-bounded response
cache. Expiry is the store's job; callers only hand over the TTL.

Implementations:
- Redis (default, shared across processes)
- In-process memory (local development and tests)
"""

from typing import Protocol, runtime_checkable

from insight_gateway.entities import CachedResponseEntity


@runtime_checkable
class ResponseStore(Protocol):
    """Protocol for response cache backends.

    Any type that implements these methods satisfies the protocol, no explicit
    inheritance needed.

    Store failures are not errors for callers: ``match`` reports them as a
    miss and ``put`` reports them by returning False.
    """

    async def match(self, key: str) -> CachedResponseEntity | None:
        """Look up a cached response.

        Args:
            key: The cache key (without the store namespace)

        Returns:
            The cached entry, or None on a miss or store failure
        """
        ...

    async def put(self, key: str, entry: CachedResponseEntity, ttl: int) -> bool:
        """Store a response.

        Args:
            key: The cache key (without the store namespace)
            entry: The response to cache
            ttl: Time-to-live in seconds

        Returns:
            True if stored, False if the store rejected the write
        """
        ...

    async def health_check(self) -> bool:
        """Check if the store is reachable."""
        ...

    async def close(self) -> None:
        """Release connections held by the store."""
        ...
