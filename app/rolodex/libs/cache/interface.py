import json
from abc import ABC, abstractmethod
from typing import Any, Optional

from rolodex.libs.cache.exceptions import CacheKeyError, CacheSerializationError
from rolodex.libs.cache.schemas import CacheConfiguration, CacheResponse

MAX_KEY_LENGTH = 250


class CacheProvider(ABC):
    """
    Contract for cache backends.

    Keys handed to a provider are relative, the provider prefixes them with
    ``config.key_prefix`` so several applications can share one backend.
    Values must be JSON-serializable and are stored encoded.
    """

    def __init__(self, config: CacheConfiguration) -> None:
        self.config = config

    @abstractmethod
    async def get(self, key: str) -> CacheResponse:
        """``value`` is None and ``from_cache`` False on a miss."""

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> CacheResponse:
        """Store ``value`` for ``ttl`` seconds, ``config.default_ttl`` when None, forever when 0."""

    @abstractmethod
    async def delete(self, key: str) -> CacheResponse: ...

    @abstractmethod
    async def exists(self, key: str) -> bool: ...

    @abstractmethod
    async def clear(self, pattern: Optional[str] = None) -> CacheResponse:
        """
        Remove entries whose relative key matches the glob ``pattern``
        (e.g. ``"users:*"``), or every prefixed entry when None.
        ``value`` holds the number of removed entries.
        """

    @abstractmethod
    async def health_check(self) -> bool: ...

    async def close(self) -> None:
        return None

    async def get_stats(self) -> dict:
        return {"provider_type": type(self).__name__, "key_prefix": self.config.key_prefix}

    def _build_key(self, key: str) -> str:
        if not key or len(key) > MAX_KEY_LENGTH or any(char.isspace() for char in key):
            raise CacheKeyError(f"Cache keys must be 1-{MAX_KEY_LENGTH} characters without whitespace")
        return f"{self.config.key_prefix}:{key}"

    @staticmethod
    def _encode(value: Any) -> str:
        try:
            return json.dumps(value)
        except (TypeError, ValueError) as e:
            raise CacheSerializationError(f"Failed to serialize value: {e}") from e

    @staticmethod
    def _decode(raw: str) -> Any:
        try:
            return json.loads(raw)
        except (TypeError, ValueError) as e:
            raise CacheSerializationError(f"Failed to deserialize value: {e}") from e
