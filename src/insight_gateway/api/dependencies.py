"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Settings stored in app.state by the app factory
    - Store and upstream built during lifespan unless already present
      (tests put fakes on app.state before starting the app)
    - Dependency functions retrieve from request.app.state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from insight_gateway.config import Settings
from insight_gateway.handlers import AnalyzeHandler
from insight_gateway.protocols import InsightUpstream
from insight_gateway.repositories import HttpUpstreamClient, build_response_store
from insight_gateway.services import InsightService

logger = logging.getLogger(__name__)


def get_handler(request: Request) -> AnalyzeHandler:
    """Dependency injection for AnalyzeHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "analyze_handler", None)
    if handler is None:
        raise RuntimeError("AnalyzeHandler not initialized. Check lifespan setup.")
    return handler


def get_upstream(request: Request) -> InsightUpstream:
    """Dependency injection for the upstream client from app.state."""
    upstream = getattr(request.app.state, "upstream", None)
    if upstream is None:
        raise RuntimeError("Upstream client not initialized. Check lifespan setup.")
    return upstream


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores them in app.state:
    1. Response store and upstream client (data access)
    2. Service (business logic) - app.state.insight_service
    3. Handler (HTTP) - app.state.analyze_handler

    Cleanup:
        Closes the store and upstream client, then removes everything
        from app.state.
    """
    settings: Settings = app.state.settings

    missing = settings.validate()
    if missing:
        logger.warning("Missing env vars (requests will fail): %s", ", ".join(missing))

    store = getattr(app.state, "response_store", None)
    if store is None:
        store = build_response_store(settings)
    upstream = getattr(app.state, "upstream", None)
    if upstream is None:
        upstream = HttpUpstreamClient.create(settings)

    insight_service = InsightService.create(store=store, upstream=upstream, ttl=settings.cache_ttl)
    analyze_handler = AnalyzeHandler(insight_service=insight_service, api_key=settings.public_api_key)

    app.state.response_store = store
    app.state.upstream = upstream
    app.state.insight_service = insight_service
    app.state.analyze_handler = analyze_handler

    logger.info(
        "Insight gateway started (cache=%s, ttl=%ss, upstream timeout=%sms)",
        settings.cache_backend,
        settings.cache_ttl,
        settings.upstream_timeout_ms,
    )

    yield

    del app.state.analyze_handler
    del app.state.insight_service
    del app.state.upstream
    del app.state.response_store

    try:
        await upstream.close()
    finally:
        await store.close()
    logger.info("Insight gateway shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[AnalyzeHandler, Depends(get_handler)]
UpstreamDep = Annotated[InsightUpstream, Depends(get_upstream)]
