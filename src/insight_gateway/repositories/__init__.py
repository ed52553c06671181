"""Repository layer for data access.

This layer puts external dependencies (Redis, the upstream HTTP service)
behind the protocols in ``insight_gateway.protocols``. The repositories are
protocol-based (structural typing), not inheritance-based.
"""

from insight_gateway.config import Settings
from insight_gateway.protocols import InsightUpstream, ResponseStore

from .memory_repository import MemoryResponseRepository
from .redis_repository import RedisResponseRepository
from .upstream_client import HttpUpstreamClient


def build_response_store(settings: Settings) -> ResponseStore:
    """Create the response store selected by ``settings.cache_backend``."""
    if settings.cache_backend == "memory":
        return MemoryResponseRepository(namespace=settings.cache_namespace)
    return RedisResponseRepository.create(settings)


__all__ = [
    "HttpUpstreamClient",
    "InsightUpstream",
    "MemoryResponseRepository",
    "RedisResponseRepository",
    "ResponseStore",
    "build_response_store",
]
