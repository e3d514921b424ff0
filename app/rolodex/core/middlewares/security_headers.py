from fastapi import Request, Response
from rolodex.core.constants import HSTS_HEADER_VALUE, SECURITY_HEADERS
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Adds a fixed set of hardening headers to every response.

    ``Strict-Transport-Security`` is only sent when ``enable_hsts`` is set,
    which the application does outside of local development.
    """

    def __init__(
        self,
        app: ASGIApp,
        headers: dict[str, str] | None = None,
        enable_hsts: bool = False,
    ) -> None:
        super().__init__(app)
        self.headers = dict(SECURITY_HEADERS if headers is None else headers)

        if enable_hsts:
            self.headers["Strict-Transport-Security"] = HSTS_HEADER_VALUE

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        for name, value in self.headers.items():
            response.headers.setdefault(name, value)

        return response
