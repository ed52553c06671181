"""In-process implementation of ResponseStore.

Useful for local development without Redis and for tests. Entries live in a
dict and expire when read after their TTL. Writes also sweep out every
expired entry, at most once per ``sweep_interval`` seconds, so keys that are
never read again do not pile up.
"""

import time

from insight_gateway.entities import CachedResponseEntity


class MemoryResponseRepository:
    """Dict-backed response cache, scoped to a single process."""

    def __init__(
        self,
        namespace: str = "insight-cache",
        clock=time.monotonic,
        sweep_interval: float = 60.0,
    ) -> None:
        self._namespace = namespace
        self._clock = clock
        self._sweep_interval = sweep_interval
        self._next_sweep = 0.0
        self._entries: dict[str, tuple[float, CachedResponseEntity]] = {}

    def _storage_key(self, key: str) -> str:
        return f"{self._namespace}:{key}"

    def _sweep(self, now: float) -> None:
        if now < self._next_sweep:
            return
        self._entries = {k: item for k, item in self._entries.items() if item[0] > now}
        self._next_sweep = now + self._sweep_interval

    async def match(self, key: str) -> CachedResponseEntity | None:
        storage_key = self._storage_key(key)
        item = self._entries.get(storage_key)
        if item is None:
            return None

        expires_at, entry = item
        if self._clock() >= expires_at:
            del self._entries[storage_key]
            return None
        return entry

    async def put(self, key: str, entry: CachedResponseEntity, ttl: int) -> bool:
        now = self._clock()
        self._sweep(now)
        self._entries[self._storage_key(key)] = (now + ttl, entry)
        return True

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
