"""Upstream orchestration service protocol."""

from typing import Protocol, runtime_checkable

from insight_gateway.entities import InsightQuery


@runtime_checkable
class InsightUpstream(Protocol):
    """Protocol for the service that produces insights on a cache miss.

    Example:
        ```python
        upstream: InsightUpstream = HttpUpstreamClient.create(settings)
        body = await upstream.analyze(InsightQuery(topic="bitcoin"))
        ```
    """

    @property
    def is_configured(self) -> bool:
        """Whether an upstream endpoint is configured at all."""
        ...

    async def analyze(self, query: InsightQuery) -> bytes:
        """Forward a query and return the raw response body.

        Raises:
            UpstreamHTTPError: Upstream answered with a non-2xx status
            UpstreamTimeoutError: The deadline elapsed and the call was cancelled
            GatewayExceptionError: Any other call failure
        """
        ...

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        ...
