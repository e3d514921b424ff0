from rolodex.core.logging import get_logger
from rolodex.core.settings.base import Settings
from rolodex.libs.cache.exceptions import CacheConfigurationError
from rolodex.libs.cache.interface import CacheProvider
from rolodex.libs.cache.providers.memory import MemoryCacheProvider
from rolodex.libs.cache.providers.redis import RedisCacheProvider
from rolodex.libs.cache.schemas import MemoryCacheConfiguration, RedisCacheConfiguration

logger = get_logger(__name__)


class CacheFactory:
    """Builds the cache provider named by ``CACHE_BACKEND``."""

    @staticmethod
    def get_configured_provider(settings: Settings) -> CacheProvider:
        backend = settings.CACHE_BACKEND

        if backend == "memory":
            provider: CacheProvider = MemoryCacheProvider(
                MemoryCacheConfiguration(
                    default_ttl=settings.CACHE_TTL,
                    key_prefix=settings.CACHE_KEY_PREFIX,
                    max_size=settings.CACHE_MEMORY_MAX_SIZE,
                )
            )
        elif backend == "redis":
            provider = RedisCacheProvider(
                RedisCacheConfiguration(
                    default_ttl=settings.CACHE_TTL,
                    key_prefix=settings.CACHE_KEY_PREFIX,
                    url=settings.REDIS_URL,
                )
            )
        else:
            raise CacheConfigurationError(f"Unsupported cache backend: {backend}")

        logger.info(
            "Using %s cache with a %ss TTL",
            backend,
            settings.CACHE_TTL,
            extra={"event_type": "cache_provider_created", "provider_type": backend},
        )
        return provider
