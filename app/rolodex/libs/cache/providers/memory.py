import fnmatch
import logging
import time
from collections import OrderedDict
from threading import RLock
from typing import Any, Callable, Optional

from rolodex.libs.cache.exceptions import CacheError
from rolodex.libs.cache.interface import CacheProvider
from rolodex.libs.cache.schemas import CacheItem, CacheResponse, MemoryCacheConfiguration

logger = logging.getLogger(__name__)


class MemoryCacheProvider(CacheProvider):
    """
    In-process cache bounded by entry count and per-entry TTL.

    Entries live in an ``OrderedDict`` ordered from least to most recently
    used. A read moves the entry to the end, a write into a full cache evicts
    from the front, and an entry past its expiry is dropped when it is next
    touched. Values are stored JSON-encoded so callers never share mutable
    state with the cache.

    ``clock`` returns seconds and defaults to ``time.monotonic``; tests pass a
    fake one to step over expiry.
    """

    def __init__(self, config: MemoryCacheConfiguration, clock: Callable[[], float] = time.monotonic) -> None:
        if config.max_size <= 0:
            raise ValueError("max_size must be positive")

        super().__init__(config)
        self.config: MemoryCacheConfiguration = config
        self._clock = clock
        self._entries: "OrderedDict[str, CacheItem]" = OrderedDict()
        self._lock = RLock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def _live(self, full_key: str, now: float) -> Optional[CacheItem]:
        item = self._entries.get(full_key)
        if item is not None and item.expired(now):
            del self._entries[full_key]
            return None
        return item

    def _make_room(self, now: float) -> None:
        for key in [key for key, item in self._entries.items() if item.expired(now)]:
            del self._entries[key]

        while len(self._entries) >= self.config.max_size:
            evicted, _ = self._entries.popitem(last=False)
            self._evictions += 1
            logger.debug("Evicted least recently used cache entry %s", evicted)

    async def get(self, key: str) -> CacheResponse:
        try:
            full_key = self._build_key(key)
            with self._lock:
                now = self._clock()
                item = self._live(full_key, now)
                if item is None:
                    self._misses += 1
                    return CacheResponse(success=True)

                self._entries.move_to_end(full_key)
                self._hits += 1
                remaining = None if item.expires_at is None else max(0, int(item.expires_at - now))
                return CacheResponse(success=True, value=self._decode(item.value), from_cache=True, ttl_remaining=remaining)
        except CacheError as e:
            logger.error("Cache get failed for key %s: %s", key, e)
            return CacheResponse(success=False, error=str(e))

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> CacheResponse:
        ttl = self.config.default_ttl if ttl is None else ttl
        try:
            full_key = self._build_key(key)
            encoded = self._encode(value)
        except CacheError as e:
            logger.error("Cache set failed for key %s: %s", key, e)
            return CacheResponse(success=False, error=str(e))

        with self._lock:
            now = self._clock()
            if self._entries.pop(full_key, None) is None and len(self._entries) >= self.config.max_size:
                self._make_room(now)
            self._entries[full_key] = CacheItem(value=encoded, expires_at=now + ttl if ttl > 0 else None)

        return CacheResponse(success=True)

    async def delete(self, key: str) -> CacheResponse:
        try:
            full_key = self._build_key(key)
        except CacheError as e:
            return CacheResponse(success=False, error=str(e))

        with self._lock:
            removed = self._entries.pop(full_key, None) is not None
        return CacheResponse(success=True, value=int(removed))

    async def exists(self, key: str) -> bool:
        try:
            full_key = self._build_key(key)
        except CacheError:
            return False

        with self._lock:
            return self._live(full_key, self._clock()) is not None

    async def clear(self, pattern: Optional[str] = None) -> CacheResponse:
        match = f"{self.config.key_prefix}:{pattern or '*'}"
        with self._lock:
            doomed = [key for key in self._entries if fnmatch.fnmatchcase(key, match)]
            for key in doomed:
                del self._entries[key]
        return CacheResponse(success=True, value=len(doomed))

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        with self._lock:
            self._entries.clear()

    async def get_stats(self) -> dict:
        stats = await super().get_stats()
        with self._lock:
            return {
                **stats,
                "total_keys": len(self._entries),
                "max_size": self.config.max_size,
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
            }
