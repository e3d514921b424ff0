import json
import time
from typing import Callable

from fastapi import Request, Response, status
from limits.errors import StorageError
from rolodex.core.exceptions import errors
from rolodex.core.exceptions.handler import documentation_uri_template
from rolodex.core.helpers.request import get_client_ip
from rolodex.core.logging import get_logger
from rolodex.libs.throttler import LimiterConfig
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

logger = get_logger(__name__)


class RequestThrottlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware to apply rate limiting to incoming requests.

    The limiter is read from ``app.state.limiter`` so each application
    instance counts its own clients.
    """

    def __init__(
        self,
        app: ASGIApp,
        namespace: str,
        custom_limit: str | None = None,
        key_func: Callable[[Request], str] | None = None,
    ) -> None:
        super().__init__(app)
        self.namespace = namespace
        self.custom_limit = custom_limit
        self.key_func = key_func or self._default_key_func

    def _default_key_func(self, request: Request) -> str:
        client_ip = getattr(request.state, "client_ip", None) or get_client_ip(request)
        return client_ip or "unknown"

    async def dispatch(self, request: Request, call_next) -> Response:
        limiter: LimiterConfig | None = getattr(request.app.state, "limiter", None)
        if limiter is None:
            return await call_next(request)

        client_key = self.key_func(request)

        try:
            allowed = await limiter.hit(
                namespace=self.namespace,
                client_key=client_key,
                custom_limit=self.custom_limit,
            )
            stats, limit_amount = await limiter.get_window_stats_with_limit(
                namespace=self.namespace,
                client_key=client_key,
                custom_limit=self.custom_limit,
            )
        except StorageError as e:
            logger.error(
                "Rate limiter storage unavailable, letting request through: %s",
                e,
                extra={"event_type": "rate_limit_storage_error", "namespace": self.namespace},
            )
            return await call_next(request)

        if not allowed:
            retry_after = max(1, int(stats.reset_time - time.time()))

            logger.warning(
                "Rate limit exceeded for client %s in namespace %s",
                client_key,
                self.namespace,
                extra={
                    "event_type": "rate_limit_exceeded",
                    "client_key": client_key,
                    "namespace": self.namespace,
                    "reset_time": stats.reset_time,
                },
            )

            settings = request.app.state.settings
            problem = errors.RateLimitExceededError()

            return Response(
                content=json.dumps(
                    problem.marshal(uri=documentation_uri_template(settings), strict=True)
                ),
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                media_type="application/problem+json",
                headers={
                    "Retry-After": str(retry_after),
                    "X-RateLimit-Limit": str(limit_amount),
                    "X-RateLimit-Remaining": "0",
                    "X-RateLimit-Reset": str(int(stats.reset_time)),
                },
            )

        response = await call_next(request)

        response.headers["X-RateLimit-Limit"] = str(limit_amount)
        response.headers["X-RateLimit-Remaining"] = str(stats.remaining)
        response.headers["X-RateLimit-Reset"] = str(int(stats.reset_time))

        return response
