from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class CacheConfiguration:
    """Base cache configuration."""

    default_ttl: int = 10
    key_prefix: str = "rolodex_cache"


@dataclass
class MemoryCacheConfiguration(CacheConfiguration):
    """In-memory cache configuration."""

    max_size: int = 1024  # Entries kept before the least recently used one is evicted


@dataclass
class RedisCacheConfiguration(CacheConfiguration):
    """Redis cache configuration."""

    url: str = "redis://localhost:6379/1"
    socket_timeout: int = 5
    socket_connect_timeout: int = 5
    max_connections: int = 10


@dataclass
class CacheItem:
    """An encoded value and the clock reading it expires at (None for never)."""

    value: str
    expires_at: Optional[float] = None

    def expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


@dataclass
class CacheResponse:
    """Response object for cache operations."""

    success: bool
    value: Any = None
    error: Optional[str] = None
    from_cache: bool = False
    ttl_remaining: Optional[int] = None


@dataclass
class CachedHttpResponse:
    """A rendered HTTP response kept in the cache."""

    status_code: int
    body: str
    media_type: str = "application/json"

    def to_dict(self) -> dict[str, Any]:
        return {"status_code": self.status_code, "body": self.body, "media_type": self.media_type}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CachedHttpResponse":
        return cls(status_code=int(data["status_code"]), body=data["body"], media_type=data["media_type"])
