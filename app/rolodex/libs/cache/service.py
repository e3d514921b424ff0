import functools
import hashlib
import uuid
from typing import Any, Awaitable, Callable, Optional, ParamSpec

from fastapi import Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from rolodex.core.constants import CACHE_STATUS_HEADER
from rolodex.core.logging import get_logger
from rolodex.core.settings.base import Settings
from rolodex.libs.cache.factory import CacheFactory
from rolodex.libs.cache.interface import CacheProvider
from rolodex.libs.cache.schemas import CachedHttpResponse

logger = get_logger(__name__)

P = ParamSpec("P")


class CacheService:
    """
    High-level cache service providing caching utilities and decorators.
    """

    def __init__(self, provider: CacheProvider) -> None:
        self._provider = provider

    @property
    def provider(self) -> CacheProvider:
        return self._provider

    @property
    def default_ttl(self) -> int:
        return self._provider.config.default_ttl

    async def get(self, key: str) -> Any:
        """
        Get a value from cache.

        Returns:
            Cached value or None if not found
        """
        response = await self._provider.get(key)
        return response.value if response.success else None

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        response = await self._provider.set(key, value, ttl)
        return response.success

    async def clear(self, pattern: Optional[str] = None) -> bool:
        response = await self._provider.clear(pattern)
        return response.success

    async def namespace_generation(self, namespace: str) -> str:
        """
        Current generation of ``namespace``, created on first use.

        Entries are keyed by generation, so replacing it hides everything
        stored before, including entries written late by requests that
        started before the replacement.
        """
        key = f"generation:{namespace}"
        generation = await self.get(key)
        if generation is None:
            generation = uuid.uuid4().hex
            await self.set(key, generation, ttl=0)
        return generation

    async def invalidate_namespace(self, namespace: str) -> bool:
        """Start a new generation of ``namespace`` and drop the entries of earlier ones."""
        await self.set(f"generation:{namespace}", uuid.uuid4().hex, ttl=0)
        cleared = await self.clear(f"{namespace}:*")
        logger.debug("Invalidated cache namespace %s", namespace, extra={"event_type": "cache_invalidate"})
        return cleared

    def generate_key(self, prefix: str, *args, **kwargs) -> str:
        """
        Generate a cache key based on arguments.

        The arguments are hashed so arbitrarily long URLs still produce a
        valid key.
        """
        key_parts = [str(arg) for arg in args]
        key_parts.extend(f"{k}={v}" for k, v in sorted(kwargs.items()))

        key_hash = hashlib.md5("|".join(key_parts).encode(), usedforsecurity=False).hexdigest()

        return f"{prefix}:{key_hash}"

    async def health_check(self) -> bool:
        return await self._provider.health_check()

    async def close(self) -> None:
        await self._provider.close()


def _find_request(args: tuple, kwargs: dict) -> Request:
    for value in (*args, *kwargs.values()):
        if isinstance(value, Request):
            return value
    raise TypeError("Cached endpoints must declare a `request: Request` parameter")


def _cache_service_for(request: Request) -> Optional[CacheService]:
    return getattr(request.app.state, "cache", None)


def _render(result: Any, status_code: int) -> Response:
    if isinstance(result, Response):
        return result
    return JSONResponse(content=jsonable_encoder(result, by_alias=True), status_code=status_code)


def cached_response(
    namespace: str,
    ttl: Optional[int] = None,
    status_code: int = status.HTTP_200_OK,
) -> Callable[[Callable[P, Awaitable[Any]]], Callable[P, Awaitable[Response]]]:
    """
    Decorator that serves a GET endpoint from the response cache.

    The cache key is derived from the namespace generation (see
    ``CacheService.namespace_generation``), the request path and the raw
    query string. On a
    hit the stored status code and body are returned without running the
    endpoint. On a miss the endpoint runs, its result is rendered once, and a
    2xx rendering is stored for ``ttl`` seconds (the cache default when None).
    The same bytes are returned in both cases; ``X-Cache`` tells them apart.

    The endpoint must take a ``request: Request`` parameter. Authentication
    dependencies resolve before the wrapper runs, so cached content is never
    served to unauthenticated callers.
    """

    def decorator(func: Callable[P, Awaitable[Any]]) -> Callable[P, Awaitable[Response]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> Response:
            request = _find_request(args, kwargs)
            cache = _cache_service_for(request)

            if cache is None or request.method != "GET":
                return _render(await func(*args, **kwargs), status_code)

            generation = await cache.namespace_generation(namespace)
            cache_key = cache.generate_key(namespace, generation, f"{request.url.path}?{request.url.query}")

            stored = await cache.get(cache_key)
            if stored is not None:
                entry = CachedHttpResponse.from_dict(stored)
                logger.debug("Cache hit for %s", request.url, extra={"event_type": "cache_hit", "cache_key": cache_key})
                return Response(
                    content=entry.body.encode("utf-8"),
                    status_code=entry.status_code,
                    media_type=entry.media_type,
                    headers={CACHE_STATUS_HEADER: "HIT"},
                )

            logger.debug("Cache miss for %s", request.url, extra={"event_type": "cache_miss", "cache_key": cache_key})

            response = _render(await func(*args, **kwargs), status_code)

            if 200 <= response.status_code < 300:
                if await cache.namespace_generation(namespace) == generation:
                    entry = CachedHttpResponse(
                        status_code=response.status_code,
                        body=bytes(response.body).decode("utf-8"),
                        media_type=response.media_type or "application/json",
                    )
                    await cache.set(cache_key, entry.to_dict(), ttl)
                else:
                    logger.debug(
                        "Not caching %s, %s was invalidated meanwhile",
                        request.url,
                        namespace,
                        extra={"event_type": "cache_skip", "cache_key": cache_key},
                    )

            response.headers[CACHE_STATUS_HEADER] = "MISS"
            return response

        return wrapper

    return decorator


def cache_invalidate(namespace: str) -> Callable[[Callable[P, Awaitable[Any]]], Callable[P, Awaitable[Any]]]:
    """
    Decorator that clears ``namespace`` after the endpoint completes successfully.

    Like ``cached_response`` it finds the application cache through the
    endpoint's ``request`` parameter.
    """

    def decorator(func: Callable[P, Awaitable[Any]]) -> Callable[P, Awaitable[Any]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> Any:
            result = await func(*args, **kwargs)

            cache = _cache_service_for(_find_request(args, kwargs))
            if cache is not None:
                await cache.invalidate_namespace(namespace)

            return result

        return wrapper

    return decorator


async def setup_cache(settings: Settings) -> CacheService:
    """Build the configured cache service and report its health."""
    cache_service = CacheService(CacheFactory.get_configured_provider(settings))

    if await cache_service.health_check():
        logger.info("Cache service initialized successfully", extra={"event_type": "cache_ready"})
    else:
        logger.warning("Cache service health check failed", extra={"event_type": "cache_unhealthy"})

    return cache_service


async def teardown_cache(cache_service: CacheService) -> None:
    await cache_service.close()
