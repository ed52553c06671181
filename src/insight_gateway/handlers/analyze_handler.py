"""HTTP handler for the analyze endpoint.

The handler owns the HTTP concerns: method dispatch, client authentication,
body parsing and response headers. It raises ``GatewayError`` subclasses and
leaves rendering them to the handlers in ``insight_gateway.errors``.
"""

import hmac
import json

from fastapi import Request, Response

from insight_gateway.dto import AnalyzeRequest, HealthCheckResponse
from insight_gateway.entities import CacheStatus, InsightQuery, InsightResult
from insight_gateway.errors import (
    InvalidJSONError,
    MethodNotAllowedError,
    MissingTopicError,
    UnauthorizedError,
)
from insight_gateway.headers import (
    API_KEY_HEADER,
    CACHE_STATUS_HEADER,
    CORS_HEADERS,
    JSON_CONTENT_TYPE,
    cache_control,
)
from insight_gateway.services import InsightService


class AnalyzeHandler:
    """HTTP handler for analyze requests.

    Example:
        ```python
        handler = AnalyzeHandler(insight_service=service, api_key=settings.public_api_key)

        @app.api_route("/", methods=ALL_METHODS)
        async def analyze(request: Request) -> Response:
            return await handler.handle(request)
        ```
    """

    def __init__(self, insight_service: InsightService, api_key: str | None) -> None:
        """Initialize the analyze handler.

        Args:
            insight_service: Service resolving queries (required).
            api_key: Shared client secret. When None every request is rejected.
        """
        self._insights = insight_service
        self._api_key = api_key

    async def handle(self, request: Request) -> Response:
        """Handle one request to the analyze endpoint.

        Raises:
            GatewayError: For every non-200 outcome
        """
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS)
        if request.method != "POST":
            raise MethodNotAllowedError()

        self._authenticate(request.headers.get(API_KEY_HEADER))
        query = await self._parse(request)

        result = await self._insights.resolve(query)
        return self._render(result)

    def _authenticate(self, client_key: str | None) -> None:
        if not client_key or not self._api_key:
            raise UnauthorizedError()
        if not hmac.compare_digest(client_key.encode(), self._api_key.encode()):
            raise UnauthorizedError()

    async def _parse(self, request: Request) -> InsightQuery:
        raw = await request.body()
        try:
            payload = json.loads(raw)
        except (ValueError, RecursionError) as e:
            raise InvalidJSONError() from e

        body = AnalyzeRequest.from_payload(payload)
        if not body.topic:
            raise MissingTopicError()
        return body.to_query()

    def _render(self, result: InsightResult) -> Response:
        headers = {**CORS_HEADERS, CACHE_STATUS_HEADER: result.cache_status.value}
        if result.cache_status is CacheStatus.MISS:
            headers["cache-control"] = cache_control(self._insights.ttl)
        return Response(
            content=result.body,
            status_code=200,
            media_type=JSON_CONTENT_TYPE,
            headers=headers,
        )

    async def health_check(self, upstream_configured: bool) -> HealthCheckResponse:
        """Handle GET /health requests."""
        is_healthy = await self._insights.is_healthy()

        return HealthCheckResponse(
            status="healthy" if is_healthy else "unhealthy",
            cache_healthy=is_healthy,
            upstream_configured=upstream_configured,
        )
