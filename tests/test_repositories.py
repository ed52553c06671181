"""
Tests for the response store implementations.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

from redis.exceptions import ConnectionError as RedisConnectionError

from insight_gateway.config import Settings
from insight_gateway.entities import CachedResponseEntity
from insight_gateway.protocols import ResponseStore
from insight_gateway.repositories import (
    MemoryResponseRepository,
    RedisResponseRepository,
    build_response_store,
)

ENTRY = CachedResponseEntity(body=b'{"summary": "ok"}')


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def _pipeline_client(execute: AsyncMock) -> tuple[MagicMock, MagicMock]:
    pipe = MagicMock()
    pipe.__aenter__.return_value = pipe
    pipe.__aexit__.return_value = False
    pipe.execute = execute
    client = MagicMock()
    client.pipeline.return_value = pipe
    return client, pipe


def test_implementations_satisfy_protocol():
    assert isinstance(MemoryResponseRepository(), ResponseStore)
    assert isinstance(RedisResponseRepository(MagicMock()), ResponseStore)


def test_memory_store_roundtrip_and_expiry():
    clock = FakeClock()
    store = MemoryResponseRepository(clock=clock)

    async def scenario():
        assert await store.match("insight:en::bitcoin") is None
        assert await store.put("insight:en::bitcoin", ENTRY, ttl=900) is True
        assert await store.match("insight:en::bitcoin") == ENTRY

        clock.now += 899
        assert await store.match("insight:en::bitcoin") == ENTRY

        clock.now += 1
        assert await store.match("insight:en::bitcoin") is None
        assert len(store) == 0

    asyncio.run(scenario())


def test_memory_store_last_write_wins():
    store = MemoryResponseRepository()
    newer = CachedResponseEntity(body=b'{"summary": "newer"}')

    async def scenario():
        await store.put("k", ENTRY, ttl=900)
        await store.put("k", newer, ttl=900)
        return await store.match("k")

    assert asyncio.run(scenario()) == newer


def test_redis_hit_uses_namespaced_key():
    client = MagicMock()
    client.hgetall = AsyncMock(return_value={b"body": ENTRY.body, b"content_type": b"application/json"})
    repo = RedisResponseRepository(client, namespace="insight-cache")

    result = asyncio.run(repo.match("insight:en::bitcoin"))

    assert result == ENTRY
    client.hgetall.assert_awaited_once_with("insight-cache:insight:en::bitcoin")


def test_redis_empty_hash_is_miss():
    client = MagicMock()
    client.hgetall = AsyncMock(return_value={})
    assert asyncio.run(RedisResponseRepository(client).match("k")) is None


def test_redis_read_failure_is_miss():
    client = MagicMock()
    client.hgetall = AsyncMock(side_effect=RedisConnectionError("redis down"))
    assert asyncio.run(RedisResponseRepository(client).match("k")) is None


def test_redis_put_sets_hash_and_expiry():
    client, pipe = _pipeline_client(AsyncMock(return_value=[2, True]))
    repo = RedisResponseRepository(client, namespace="insight-cache")

    assert asyncio.run(repo.put("k", ENTRY, ttl=900)) is True

    pipe.hset.assert_called_once_with(
        "insight-cache:k",
        mapping={"body": ENTRY.body, "content_type": "application/json"},
    )
    pipe.expire.assert_called_once_with("insight-cache:k", 900)
    pipe.execute.assert_awaited_once()


def test_redis_write_failure_returns_false():
    client, _ = _pipeline_client(AsyncMock(side_effect=RedisConnectionError("redis down")))
    assert asyncio.run(RedisResponseRepository(client).put("k", ENTRY, ttl=900)) is False


def test_redis_health_check():
    client = MagicMock()
    client.ping = AsyncMock(return_value=True)
    assert asyncio.run(RedisResponseRepository(client).health_check()) is True

    client.ping = AsyncMock(side_effect=RedisConnectionError("redis down"))
    assert asyncio.run(RedisResponseRepository(client).health_check()) is False


def test_build_response_store_follows_backend_setting():
    memory = build_response_store(Settings(cache_backend="memory"))
    assert isinstance(memory, MemoryResponseRepository)

    redis_store = build_response_store(Settings(cache_backend="redis", cache_namespace="other"))
    assert isinstance(redis_store, RedisResponseRepository)
    assert redis_store.namespace == "other"


def test_memory_store_sweeps_expired_keys_on_write():
    clock = FakeClock()
    store = MemoryResponseRepository(clock=clock)

    asyncio.run(store.put("a", ENTRY, ttl=900))
    asyncio.run(store.put("b", ENTRY, ttl=900))
    assert len(store) == 2

    clock.now += 901
    asyncio.run(store.put("c", ENTRY, ttl=900))

    assert len(store) == 1
    assert asyncio.run(store.match("c")) == ENTRY
