"""
Cache stores for guild stats payloads.

The guild stats service only depends on the ``CacheStore`` protocol; concrete
stores are picked at startup by ``build_cache_store`` from configuration.
"""

from __future__ import annotations

import asyncio
import copy
import json
import os
import time
from collections import OrderedDict
from typing import Any, Protocol, runtime_checkable

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from utils.errors import ConfigError
from utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_ENTRIES = 1000


@runtime_checkable
class CacheStore(Protocol):
    """Key-value store with per-entry time-to-live."""

    name: str

    async def get(self, key: str) -> Any | None:
        """Return the cached value for ``key`` or None when absent."""
        ...

    async def set(self, key: str, value: Any, ttl: int) -> bool:
        """Store ``value`` under ``key`` for ``ttl`` seconds. Returns True on success."""
        ...

    async def close(self) -> None:
        ...


class NullCache:
    """Store that never holds anything; every read is a miss."""

    name = "none"

    async def get(self, key: str) -> Any | None:
        return None

    async def set(self, key: str, value: Any, ttl: int) -> bool:
        return False

    async def close(self) -> None:
        return None


class MemoryCache:
    """
    In-process TTL store.

    Entries past their expiry are dropped when read. When the store grows past
    ``max_entries`` the oldest insertions are evicted first. Values are deep
    copied on write and read so callers can't mutate cached payloads.
    """

    name = "memory"

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES, clock=time.monotonic):
        self.max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, tuple[float, Any]] = OrderedDict()
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> Any | None:
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                logger.debug("Cache entry expired", extra={"cache_key": key})
                return None
            return copy.deepcopy(value)

    async def set(self, key: str, value: Any, ttl: int) -> bool:
        async with self._lock:
            self._entries.pop(key, None)
            self._entries[key] = (self._clock() + ttl, copy.deepcopy(value))
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)
        return True

    async def close(self) -> None:
        async with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class RedisCache:
    """Redis-backed store; values are stored as JSON with a native expiry."""

    name = "redis"

    def __init__(self, redis_url: str, client: aioredis.Redis | None = None):
        self.redis_url = redis_url
        self._client = client or aioredis.from_url(
            redis_url, decode_responses=True
        )

    async def get(self, key: str) -> Any | None:
        try:
            raw = await self._client.get(key)
        except RedisError as e:
            logger.warning(
                f"Redis read failed, treating as miss: {e}", extra={"cache_key": key}
            )
            return None

        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, json.JSONDecodeError):
            logger.warning("Discarding undecodable cache entry", extra={"cache_key": key})
            return None

    async def set(self, key: str, value: Any, ttl: int) -> bool:
        try:
            await self._client.set(key, json.dumps(value), ex=ttl)
        except RedisError as e:
            logger.warning(f"Redis write failed: {e}", extra={"cache_key": key})
            return False
        return True

    async def close(self) -> None:
        await self._client.aclose()


def build_cache_store(cache_config: dict[str, Any] | None = None) -> CacheStore:
    """
    Build the cache store named by ``cache.backend``.

    ``CACHE_BACKEND`` and ``REDIS_URL`` environment variables take priority
    over the YAML values.

    Raises:
        ConfigError: If the backend name is not recognised.
    """
    cache_config = cache_config or {}
    backend = (os.getenv("CACHE_BACKEND") or cache_config.get("backend") or "none").lower()

    if backend == "none":
        store: CacheStore = NullCache()
    elif backend == "memory":
        store = MemoryCache(
            max_entries=int(cache_config.get("max_entries", DEFAULT_MAX_ENTRIES))
        )
    elif backend == "redis":
        redis_url = os.getenv("REDIS_URL") or cache_config.get("redis_url")
        if not redis_url:
            raise ConfigError.missing("REDIS_URL")
        store = RedisCache(redis_url)
    else:
        raise ConfigError(f"Unknown cache backend: {backend}")

    logger.info("Cache store configured", extra={"cache_backend": store.name})
    return store
