class CacheError(Exception):
    """Base exception for cache operations, always raised with a message."""


class CacheConnectionError(CacheError):
    pass


class CacheSerializationError(CacheError):
    pass


class CacheKeyError(CacheError):
    pass


class CacheConfigurationError(CacheError):
    pass
