"""
Tests for the upstream HTTP client.
"""

import asyncio

import httpx
import pytest

from insight_gateway.entities import InsightQuery
from insight_gateway.errors import (
    GatewayExceptionError,
    UpstreamHTTPError,
    UpstreamTimeoutError,
)

QUERY = InsightQuery(topic="ai regulation", language="en", geo="US")


def test_posts_query_as_json(upstream_factory, fake_upstream):
    body = asyncio.run(upstream_factory().analyze(QUERY))

    assert body == fake_upstream.body
    request = fake_upstream.requests[0]
    assert request.method == "POST"
    assert str(request.url) == "https://upstream.test/flow"
    assert request.headers["content-type"] == "application/json"
    assert "authorization" not in request.headers
    assert fake_upstream.payload() == {"topic": "ai regulation", "language": "en", "geo": "US"}


def test_sends_bearer_token_when_configured(upstream_factory, fake_upstream):
    asyncio.run(upstream_factory(token="flow-token").analyze(QUERY))
    assert fake_upstream.requests[0].headers["authorization"] == "Bearer flow-token"


def test_body_is_returned_byte_for_byte(upstream_factory, fake_upstream):
    fake_upstream.body = b'{ "b":1,\n  "a" : "\xc3\xa9" }'
    assert asyncio.run(upstream_factory().analyze(QUERY)) == fake_upstream.body


@pytest.mark.parametrize("status", [404, 429, 500, 503])
def test_non_success_status_raises(upstream_factory, fake_upstream, status):
    fake_upstream.status = status
    fake_upstream.body = b"x" * 400

    with pytest.raises(UpstreamHTTPError) as excinfo:
        asyncio.run(upstream_factory().analyze(QUERY))

    assert excinfo.value.status == status
    assert excinfo.value.to_payload() == {"error": "upstream_error", "status": status, "detail": "x" * 300}


def test_deadline_cancels_call(upstream_factory, fake_upstream):
    fake_upstream.delay = 5.0

    with pytest.raises(UpstreamTimeoutError):
        asyncio.run(upstream_factory(timeout=0.05).analyze(QUERY))

    assert fake_upstream.cancelled is True


def test_client_timeout_is_upstream_timeout(upstream_factory, fake_upstream):
    fake_upstream.error = httpx.ReadTimeout("read timed out")

    with pytest.raises(UpstreamTimeoutError):
        asyncio.run(upstream_factory().analyze(QUERY))


@pytest.mark.parametrize(
    "error",
    [httpx.ConnectError("refused"), httpx.RemoteProtocolError("bad frame")],
)
def test_transport_failures_are_gateway_exceptions(upstream_factory, fake_upstream, error):
    fake_upstream.error = error

    with pytest.raises(GatewayExceptionError):
        asyncio.run(upstream_factory().analyze(QUERY))


def test_missing_url_is_gateway_exception(upstream_factory, fake_upstream):
    upstream = upstream_factory(url=None)
    assert upstream.is_configured is False

    with pytest.raises(GatewayExceptionError):
        asyncio.run(upstream.analyze(QUERY))
    assert fake_upstream.calls == 0
