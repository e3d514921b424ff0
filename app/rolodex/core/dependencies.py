import time
from typing import Annotated, Awaitable, Callable

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from multidict import CIMultiDict
from rolodex.core.exceptions import errors
from rolodex.core.helpers.request import get_bearer_token, get_client_ip
from rolodex.domain.schemas import AuthSessionState
from rolodex.domain.services import AuthService, ProfileService, TokenService

# Documents the scheme in OpenAPI only, the header is parsed by hand below
bearer_scheme = HTTPBearer(auto_error=False, description="Access token obtained from /auth/login")


def create_rate_limit_dependency(
    namespace: str,
    custom_limit: str | None = None,
    key_func: Callable[[Request], str] | None = None,
) -> Callable[[Request], Awaitable[None]]:
    """
    Create a rate limit dependency for specific routes or routers.

    The limiter is read from ``app.state`` at request time, when rate limiting
    is disabled the dependency does nothing.

    Args:
        namespace (str): The namespace for rate limiting (e.g., "auth")
        custom_limit (str | None): Optional custom limit string (e.g., "10/minute")
        key_func (Callable[[Request], str] | None): Optional function to extract client key from request

    Returns:
        Dependency function that can be used with FastAPI routes
    """

    def _default_key_func(request: Request) -> str:
        return get_client_ip(request) or "unknown"

    async def rate_limit_dependency(request: Request) -> None:
        limiter = getattr(request.app.state, "limiter", None)
        if limiter is None:
            return

        client_key = (key_func or _default_key_func)(request)

        allowed = await limiter.hit(namespace=namespace, client_key=client_key, custom_limit=custom_limit)

        if not allowed:
            stats, limit_amount = await limiter.get_window_stats_with_limit(
                namespace=namespace,
                client_key=client_key,
                custom_limit=custom_limit,
            )

            retry_after = max(1, int(stats.reset_time - time.time()))

            raise errors.RateLimitExceededError(
                headers=CIMultiDict(
                    {
                        "X-RateLimit-Limit": str(limit_amount),
                        "X-RateLimit-Remaining": "0",
                        "X-RateLimit-Reset": str(int(stats.reset_time)),
                        "Retry-After": str(retry_after),
                    }
                ),
            )

    return rate_limit_dependency


AUTH_RATE_LIMIT_NAMESPACE = "auth"

# limit comes from AUTH_RATE_LIMIT, see build_limiter
auth_rate_limit = Depends(create_rate_limit_dependency(AUTH_RATE_LIMIT_NAMESPACE))


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_profile_service(request: Request) -> ProfileService:
    return request.app.state.profile_service


async def requires_authenticated_account(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],  # noqa: ARG001
    token_service: Annotated[TokenService, Depends(get_token_service)],
) -> AuthSessionState:
    """
    Dependency to ensure the request carries a valid bearer token.

    The token is the second whitespace-separated part of the ``Authorization``
    header, whatever the scheme word in front of it.

    Returns:
        AuthSessionState: The identity carried by the token, also set on ``request.state.user``

    Raises:
        MissingTokenError: If no token was sent
        InvalidTokenError: If the token does not verify
    """
    token = get_bearer_token(request)
    if not token:
        raise errors.MissingTokenError()

    identity = token_service.verify(token)

    auth_state = AuthSessionState(user_id=identity.user_id, username=identity.username)
    request.state.user = auth_state

    return auth_state
