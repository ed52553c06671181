"""Redis implementation of ResponseStore.

Each response is a hash (``body``, ``content_type``) under the store
namespace, with a Redis-side EXPIRE enforcing the TTL.
"""

import logging

import redis.asyncio as redis
from redis.exceptions import RedisError

from insight_gateway.config import Settings, get_redis_client
from insight_gateway.entities import CachedResponseEntity
from insight_gateway.headers import JSON_CONTENT_TYPE

logger = logging.getLogger(__name__)


class RedisResponseRepository:
    """Redis-backed response cache.

    This class satisfies the ResponseStore protocol through structural
    typing - no explicit inheritance needed.

    Redis errors never reach the caller: a failed read is a miss and a failed
    write returns False. Both are logged.
    """

    def __init__(self, redis_client: redis.Redis, namespace: str = "insight-cache") -> None:
        """Initialize the Redis response repository.

        Args:
            redis_client: asyncio Redis client instance.
            namespace: Prefix separating this cache from other keys.
        """
        self._client = redis_client
        self._namespace = namespace

    @classmethod
    def create(cls, settings: Settings) -> "RedisResponseRepository":
        """Factory method building the client and namespace from settings."""
        return cls(redis_client=get_redis_client(settings), namespace=settings.cache_namespace)

    def _storage_key(self, key: str) -> str:
        return f"{self._namespace}:{key}"

    async def match(self, key: str) -> CachedResponseEntity | None:
        try:
            data = await self._client.hgetall(self._storage_key(key))
        except RedisError as e:
            logger.warning("Cache read failed for %s, treating as miss: %s", key, e)
            return None

        if not data or b"body" not in data:
            return None

        content_type = data.get(b"content_type", JSON_CONTENT_TYPE.encode())
        return CachedResponseEntity(body=data[b"body"], content_type=content_type.decode())

    async def put(self, key: str, entry: CachedResponseEntity, ttl: int) -> bool:
        storage_key = self._storage_key(key)
        try:
            async with self._client.pipeline(transaction=True) as pipe:
                pipe.hset(
                    storage_key,
                    mapping={
                        "body": entry.body,
                        "content_type": entry.content_type,
                    },
                )
                pipe.expire(storage_key, ttl)
                await pipe.execute()
        except RedisError as e:
            logger.warning("Cache write failed for %s: %s", key, e)
            return False
        return True

    async def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except RedisError:
            return False

    async def close(self) -> None:
        await self._client.aclose()

    @property
    def namespace(self) -> str:
        return self._namespace
