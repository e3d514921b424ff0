from limits import RateLimitItem, WindowStats, parse
from limits.aio.storage.base import Storage
from limits.aio.strategies import MovingWindowRateLimiter
from rolodex.core.settings.base import Settings
from rolodex.libs.throttler.limiter_storage import get_limiter_storage


class LimiterConfig:
    """
    Moving-window rate limiting keyed by ``<namespace>:<client key>``.

    ``namespace_limits`` maps a namespace to a limit string such as
    ``"10/minute"``; other namespaces use ``default_limit``. A ``custom_limit``
    passed at call time wins over both.
    """

    def __init__(
        self,
        storage: Storage,
        default_limit: str = "100/minute",
        namespace_limits: dict[str, str] | None = None,
    ) -> None:
        self.storage = storage
        self.default_limit = default_limit
        self.namespace_limits = namespace_limits or {}
        self._strategy = MovingWindowRateLimiter(storage)

    def limit_for(self, namespace: str, custom_limit: str | None = None) -> RateLimitItem:
        return parse(custom_limit or self.namespace_limits.get(namespace, self.default_limit))

    async def hit(self, namespace: str, client_key: str, custom_limit: str | None = None) -> bool:
        """Count one request, False once the window is full."""
        return await self._strategy.hit(self.limit_for(namespace, custom_limit), namespace, client_key)

    async def get_window_stats_with_limit(
        self, namespace: str, client_key: str, custom_limit: str | None = None
    ) -> tuple[WindowStats, int]:
        item = self.limit_for(namespace, custom_limit)
        stats = await self._strategy.get_window_stats(item, namespace, client_key)
        return stats, item.amount


def build_limiter(settings: Settings) -> LimiterConfig:
    return LimiterConfig(
        storage=get_limiter_storage(settings),
        default_limit=f"{settings.RATE_LIMIT_PER_MINUTE}/minute",
        namespace_limits={"auth": settings.AUTH_RATE_LIMIT},
    )
