"""Insight Gateway - authenticated, cached proxy to an insight orchestration service.

Layers:
    - protocols: Interface contracts (ResponseStore, InsightUpstream)
    - repositories: Redis/memory response caches and the upstream HTTP client
    - services: Cache-aside business logic
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from insight_gateway.api.app import create_app
    from insight_gateway.config import Settings

    app = create_app(Settings.from_env())
    ```
"""

from insight_gateway.config import Settings, get_settings
from insight_gateway.dto import AnalyzeRequest
from insight_gateway.entities import CachedResponseEntity, InsightQuery, build_cache_key
from insight_gateway.errors import GatewayError
from insight_gateway.handlers import AnalyzeHandler
from insight_gateway.protocols import InsightUpstream, ResponseStore
from insight_gateway.repositories import (
    HttpUpstreamClient,
    MemoryResponseRepository,
    RedisResponseRepository,
)
from insight_gateway.services import InsightService

__all__ = [
    # Configuration
    "Settings",
    "get_settings",
    # Protocols (interfaces)
    "InsightUpstream",
    "ResponseStore",
    # Services (business logic)
    "InsightService",
    # Handlers (HTTP)
    "AnalyzeHandler",
    # Repositories (data access)
    "HttpUpstreamClient",
    "MemoryResponseRepository",
    "RedisResponseRepository",
    # Entities (domain models)
    "CachedResponseEntity",
    "InsightQuery",
    "build_cache_key",
    # DTOs (API contracts)
    "AnalyzeRequest",
    # Errors
    "GatewayError",
]
