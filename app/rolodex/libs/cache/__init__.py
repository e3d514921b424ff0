from .exceptions import CacheConfigurationError, CacheConnectionError, CacheError, CacheKeyError, CacheSerializationError
from .factory import CacheFactory
from .interface import CacheProvider
from .schemas import (
    CacheConfiguration,
    CachedHttpResponse,
    CacheItem,
    CacheResponse,
    MemoryCacheConfiguration,
    RedisCacheConfiguration,
)
from .service import CacheService, cache_invalidate, cached_response, setup_cache, teardown_cache

__all__ = [
    # Core classes
    "CacheFactory",
    "CacheProvider",
    "CacheService",
    # Decorators and utilities
    "cached_response",
    "cache_invalidate",
    "setup_cache",
    "teardown_cache",
    # Schemas
    "CacheConfiguration",
    "MemoryCacheConfiguration",
    "RedisCacheConfiguration",
    "CacheResponse",
    "CacheItem",
    "CachedHttpResponse",
    # Exceptions
    "CacheError",
    "CacheConfigurationError",
    "CacheConnectionError",
    "CacheSerializationError",
    "CacheKeyError",
]
