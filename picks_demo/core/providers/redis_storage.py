"""redis_storage.py: Redis-backed key-value storage.

Lets demo datasets survive a backend restart and be shared by several
workers pointed at the same REDIS_URL. Redis failures are re-raised as
``StorageUnavailableError`` so the demo store can degrade to its
in-process cache.

Called by: DemoStore (via registry) when DEMO_STORAGE_PROVIDER=redis
Depends on: Redis, config.py (Settings)
"""

from __future__ import annotations

import logging

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from picks_demo.config import Settings
from picks_demo.core.protocols import StorageUnavailableError
from picks_demo.core.registry import register_storage

logger = logging.getLogger(__name__)


class RedisStorage:
    """Key-value storage on top of an async Redis client."""

    def __init__(self, settings: Settings, client: aioredis.Redis | None = None) -> None:
        """Initialize the provider.

        Args:
            settings: App settings; ``redis_url`` is used to build the client.
            client: Pre-built client (tests inject an AsyncMock here).
        """
        self._settings = settings
        self._client = client

    @property
    def client(self) -> aioredis.Redis:
        """Lazily created Redis connection pool."""
        if self._client is None:
            self._client = aioredis.from_url(self._settings.redis_url, decode_responses=True)
        return self._client

    async def get(self, key: str) -> str | None:
        try:
            value = await self.client.get(key)
            if isinstance(value, bytes):
                value = value.decode("utf-8")
        except (RedisError, UnicodeDecodeError) as exc:
            # Non-UTF-8 payloads fail inside the client when decode_responses=True.
            raise StorageUnavailableError(f"redis get failed for '{key}': {exc}") from exc
        return value

    async def set(self, key: str, value: str) -> None:
        try:
            await self.client.set(key, value)
        except RedisError as exc:
            raise StorageUnavailableError(f"redis set failed for '{key}': {exc}") from exc

    async def delete(self, key: str) -> None:
        try:
            await self.client.delete(key)
        except RedisError as exc:
            raise StorageUnavailableError(f"redis delete failed for '{key}': {exc}") from exc


register_storage("redis", RedisStorage)
