"""
Shared fixtures: settings, an in-memory cache and a simulated upstream.
"""

import asyncio
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from insight_gateway.api.app import create_app
from insight_gateway.config import Settings
from insight_gateway.repositories import HttpUpstreamClient, MemoryResponseRepository

API_KEY = "test-secret"
UPSTREAM_URL = "https://upstream.test/flow"
UPSTREAM_BODY = b'{"summary": "AI regulation is tightening in the US.", "sources": []}'


class FakeUpstream:
    """Async MockTransport handler that records every upstream call."""

    def __init__(self, status: int = 200, body: bytes = UPSTREAM_BODY, delay: float = 0.0, error=None):
        self.status = status
        self.body = body
        self.delay = delay
        self.error = error
        self.requests: list[httpx.Request] = []
        self.cancelled = False

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.delay:
            try:
                await asyncio.sleep(self.delay)
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status, content=self.body)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def payload(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


def make_upstream_client(
    fake: FakeUpstream,
    url: str | None = UPSTREAM_URL,
    token: str | None = None,
    timeout: float = 12.0,
) -> HttpUpstreamClient:
    return HttpUpstreamClient(
        url=url,
        token=token,
        timeout=timeout,
        client=httpx.AsyncClient(transport=httpx.MockTransport(fake)),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        public_api_key=API_KEY,
        upstream_url=UPSTREAM_URL,
        cache_backend="memory",
    )


@pytest.fixture
def fake_upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def store() -> MemoryResponseRepository:
    return MemoryResponseRepository()


@pytest.fixture
def client(settings, fake_upstream, store):
    """Create a test client wired to the fake upstream and memory cache."""
    app = create_app(settings)
    app.state.response_store = store
    app.state.upstream = make_upstream_client(
        fake_upstream,
        url=settings.upstream_url,
        token=settings.upstream_token,
        timeout=settings.upstream_timeout,
    )
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"x-api-key": API_KEY, "content-type": "application/json"}


@pytest.fixture
def upstream_factory(fake_upstream):
    """Build HttpUpstreamClients talking to the fake upstream."""

    def factory(**kwargs) -> HttpUpstreamClient:
        return make_upstream_client(fake_upstream, **kwargs)

    return factory
