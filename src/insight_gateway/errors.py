"""Gateway exceptions and centralized FastAPI error handlers.

Every exception maps to one HTTP status and one stable, machine-readable
``error`` code. Handlers raise them; ``register_error_handlers`` turns them
into JSON responses carrying the same CORS headers as successful responses.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from insight_gateway.headers import CORS_HEADERS

logger = logging.getLogger(__name__)

UPSTREAM_DETAIL_LIMIT = 300


class GatewayError(Exception):
    """Base exception with HTTP status code and error code."""

    status_code: int = 500
    code: str = "internal_error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.code)

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.code}


class MethodNotAllowedError(GatewayError):
    status_code = 405
    code = "method_not_allowed"


class UnauthorizedError(GatewayError):
    status_code = 401
    code = "unauthorized"


class InvalidJSONError(GatewayError):
    status_code = 400
    code = "invalid_json"


class MissingTopicError(GatewayError):
    status_code = 400
    code = "missing_topic"


class UpstreamHTTPError(GatewayError):
    """Upstream answered with a non-2xx status."""

    status_code = 502
    code = "upstream_error"

    def __init__(self, status: int, detail: str = ""):
        super().__init__(f"upstream returned HTTP {status}")
        self.status = status
        self.detail = detail[:UPSTREAM_DETAIL_LIMIT]

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.code, "status": self.status, "detail": self.detail}


class UpstreamTimeoutError(GatewayError):
    status_code = 504
    code = "upstream_timeout"


class GatewayExceptionError(GatewayError):
    """Upstream call failed before any response (network, protocol, bad URL)."""

    status_code = 504
    code = "gateway_exception"


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(GatewayError)
    async def handle_gateway_error(request: Request, exc: GatewayError):
        if exc.status_code >= 500:
            logger.warning("%s %s failed: %s (%s)", request.method, request.url.path, exc.code, exc)
        return JSONResponse(exc.to_payload(), status_code=exc.status_code, headers=CORS_HEADERS)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        # Methods outside the route's list never reach the analyze handler
        if exc.status_code == MethodNotAllowedError.status_code:
            error = MethodNotAllowedError()
            return JSONResponse(error.to_payload(), status_code=error.status_code, headers=CORS_HEADERS)
        return await http_exception_handler(request, exc)
