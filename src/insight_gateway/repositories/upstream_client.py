"""HTTP client for the upstream orchestration service.

Sends ``{topic, language, geo}`` as JSON and returns the raw response body.
The body is never parsed so the exact bytes can be cached and forwarded.

The call runs under an explicit deadline (``asyncio.wait_for``). When the
deadline elapses the in-flight request is cancelled, not just ignored.
"""

import asyncio
import logging

import httpx

from insight_gateway.config import Settings
from insight_gateway.entities import InsightQuery
from insight_gateway.errors import (
    GatewayExceptionError,
    UpstreamHTTPError,
    UpstreamTimeoutError,
)
from insight_gateway.headers import JSON_CONTENT_TYPE

logger = logging.getLogger(__name__)


def _error_detail(response: httpx.Response) -> str:
    """Best-effort text of an upstream error body."""
    try:
        return response.text
    except (UnicodeDecodeError, LookupError):
        return ""


class HttpUpstreamClient:
    """httpx-based implementation of the InsightUpstream protocol.

    Example:
        ```python
        upstream = HttpUpstreamClient.create(settings)
        body = await upstream.analyze(InsightQuery(topic="ai regulation", geo="US"))
        ```
    """

    def __init__(
        self,
        url: str | None,
        token: str | None = None,
        timeout: float = 12.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the upstream client.

        Args:
            url: Upstream endpoint. Calls fail with gateway_exception when unset.
            token: Optional bearer token sent as ``authorization``.
            timeout: Deadline in seconds for the whole call, body included.
            client: Pre-built AsyncClient (tests inject a MockTransport here).
        """
        self._url = url
        self._token = token
        self._timeout = timeout
        self._client = client

    @classmethod
    def create(cls, settings: Settings) -> "HttpUpstreamClient":
        """Factory method to create the client from settings."""
        return cls(
            url=settings.upstream_url,
            token=settings.upstream_token,
            timeout=settings.upstream_timeout,
        )

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    @property
    def is_configured(self) -> bool:
        return bool(self._url)

    def _headers(self) -> dict[str, str]:
        headers = {"content-type": JSON_CONTENT_TYPE}
        if self._token:
            headers["authorization"] = f"Bearer {self._token}"
        return headers

    async def analyze(self, query: InsightQuery) -> bytes:
        """Forward a query upstream and return the raw response body.

        Args:
            query: The validated query

        Returns:
            The upstream body bytes (2xx responses only)

        Raises:
            UpstreamHTTPError: Upstream answered with a non-2xx status
            UpstreamTimeoutError: The deadline elapsed and the call was cancelled
            GatewayExceptionError: Any other call failure
        """
        if not self._url:
            raise GatewayExceptionError("upstream URL is not configured")

        try:
            response = await asyncio.wait_for(
                self.client.post(self._url, json=query.to_payload(), headers=self._headers()),
                timeout=self._timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise UpstreamTimeoutError(f"no upstream response within {self._timeout}s") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise GatewayExceptionError(f"upstream call failed: {e}") from e

        if not response.is_success:
            raise UpstreamHTTPError(response.status_code, _error_detail(response))

        logger.debug("Upstream answered %s with %d bytes", response.status_code, len(response.content))
        return response.content

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
