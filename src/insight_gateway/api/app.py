"""FastAPI application entry point for the insight gateway."""

import logging
import sys

import structlog
from fastapi import FastAPI, Request, Response

from insight_gateway.api.dependencies import HandlerDep, UpstreamDep, lifespan
from insight_gateway.config import Settings, get_settings
from insight_gateway.dto import ErrorResponse, HealthCheckResponse
from insight_gateway.errors import register_error_handlers

# Dispatch on the method happens in the handler; anything else is a 405 from the router
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    405: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
    504: {"model": ErrorResponse},
}


def json_log_formatter() -> logging.Formatter:
    """Render stdlib log records as one JSON object per line."""
    return structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
        ],
    )


def configure_logging(settings: Settings) -> None:
    """JSON lines in production, human-readable locally."""
    if settings.is_production:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(json_log_formatter())
        logging.basicConfig(level=settings.log_level, handlers=[handler])
    else:
        logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Insight Gateway",
        description="Authenticated, cached proxy to the insight orchestration service",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Centralized error handlers
    register_error_handlers(app)

    @app.api_route("/", methods=ALL_METHODS, responses=ERROR_RESPONSES, include_in_schema=False)
    @app.api_route("/api/analyze", methods=ALL_METHODS, responses=ERROR_RESPONSES)
    async def analyze(request: Request, handler: HandlerDep) -> Response:
        """Return the insight for a topic, from cache when fresh."""
        return await handler.handle(request)

    @app.get("/health", response_model=HealthCheckResponse)
    async def health(handler: HandlerDep, upstream: UpstreamDep) -> HealthCheckResponse:
        """Health check endpoint."""
        return await handler.health_check(upstream_configured=upstream.is_configured)

    return app


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "insight_gateway.api.app:create_app",
        factory=True,
        host=_settings.api_host,
        port=_settings.api_port,
        reload=_settings.api_reload,
    )
