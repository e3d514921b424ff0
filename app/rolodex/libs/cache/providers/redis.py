import logging
from typing import Any, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError
from rolodex.libs.cache.exceptions import CacheConnectionError, CacheError
from rolodex.libs.cache.interface import CacheProvider
from rolodex.libs.cache.schemas import CacheResponse, RedisCacheConfiguration

logger = logging.getLogger(__name__)


class RedisCacheProvider(CacheProvider):
    """
    Cache entries in Redis, shared by every worker pointing at the same server.

    Expiry is left to Redis (``SET ... EX``) and size bounds to the server's
    ``maxmemory-policy``. The client is created lazily on first use. Redis
    failures are logged and reported as unsuccessful responses so a cache
    outage degrades to cache misses.
    """

    def __init__(self, config: RedisCacheConfiguration) -> None:
        super().__init__(config)
        self.config: RedisCacheConfiguration = config
        self._client: Optional[redis.Redis] = None

    async def _connection(self) -> redis.Redis:
        if self._client is not None:
            return self._client

        client = redis.Redis.from_url(
            self.config.url,
            decode_responses=True,
            socket_timeout=self.config.socket_timeout,
            socket_connect_timeout=self.config.socket_connect_timeout,
            max_connections=self.config.max_connections,
        )
        try:
            await client.ping()
        except RedisError as e:
            await client.aclose()
            raise CacheConnectionError(f"Failed to connect to Redis: {e}") from e

        logger.info("Connected to Redis cache", extra={"event_type": "cache_connected"})
        self._client = client
        return client

    @staticmethod
    def _failed(operation: str, key: Optional[str], error: Exception) -> CacheResponse:
        logger.error("Redis cache %s failed for %s: %s", operation, key or "*", error)
        return CacheResponse(success=False, error=f"{operation} failed: {error}")

    async def get(self, key: str) -> CacheResponse:
        try:
            client = await self._connection()
            raw = await client.get(self._build_key(key))
            if raw is None:
                return CacheResponse(success=True)
            return CacheResponse(success=True, value=self._decode(raw), from_cache=True)
        except (CacheError, RedisError) as e:
            return self._failed("get", key, e)

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> CacheResponse:
        ttl = self.config.default_ttl if ttl is None else ttl
        try:
            client = await self._connection()
            await client.set(self._build_key(key), self._encode(value), ex=ttl if ttl > 0 else None)
            return CacheResponse(success=True)
        except (CacheError, RedisError) as e:
            return self._failed("set", key, e)

    async def delete(self, key: str) -> CacheResponse:
        try:
            client = await self._connection()
            removed = await client.delete(self._build_key(key))
            return CacheResponse(success=True, value=removed)
        except (CacheError, RedisError) as e:
            return self._failed("delete", key, e)

    async def exists(self, key: str) -> bool:
        try:
            client = await self._connection()
            return bool(await client.exists(self._build_key(key)))
        except (CacheError, RedisError) as e:
            self._failed("exists", key, e)
            return False

    async def clear(self, pattern: Optional[str] = None) -> CacheResponse:
        try:
            client = await self._connection()
            match = self._build_key(pattern or "*")
            keys = [key async for key in client.scan_iter(match=match, count=100)]
            if keys:
                await client.delete(*keys)
            return CacheResponse(success=True, value=len(keys))
        except (CacheError, RedisError) as e:
            return self._failed("clear", pattern, e)

    async def health_check(self) -> bool:
        try:
            client = await self._connection()
            return bool(await client.ping())
        except (CacheError, RedisError) as e:
            self._failed("ping", None, e)
            return False

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get_stats(self) -> dict:
        stats = await super().get_stats()
        try:
            client = await self._connection()
            info = await client.info("stats")
        except (CacheError, RedisError) as e:
            return {**stats, "error": str(e)}
        return {**stats, "hits": info.get("keyspace_hits", 0), "misses": info.get("keyspace_misses", 0)}
