import logging
import time
import uuid
from typing import Any

from fastapi import Request, Response
from rolodex.core.constants import REQUEST_ID_CTX, REQUEST_ID_HEADER
from rolodex.core.helpers.request import get_client_ip, get_user_agent
from rolodex.core.logging import add_to_log_context, get_logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

logger = get_logger(__name__)


def _status_level(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestUtilsMiddleware(BaseHTTPMiddleware):
    """
    Tag each request with an id and log one line when it completes.

    The id, client ip and user agent are put on ``request.state`` and the id
    and ip are added to the log context for everything logged while the
    request is handled. Responses carry ``X-Request-ID`` and
    ``X-Process-Time`` (seconds).
    """

    def __init__(self, app: ASGIApp, *, trust_request_id: bool = False) -> None:
        super().__init__(app)
        self.trust_request_id = trust_request_id

    async def dispatch(self, request: Request, call_next: Any) -> Response:
        request_id = self._request_id(request)
        REQUEST_ID_CTX.set(request_id)

        request.state.request_id = request_id
        request.state.client_ip = get_client_ip(request)
        request.state.user_agent = get_user_agent(request)

        started = time.perf_counter()

        with add_to_log_context(
            request_id=request_id,
            client_ip=request.state.client_ip,
            method=request.method,
            path=request.url.path,
        ):
            try:
                response = await call_next(request)
            except Exception as exc:
                logger.error(
                    "%s %s raised %s",
                    request.method,
                    request.url.path,
                    type(exc).__name__,
                    exc_info=True,
                    extra={"event_type": "request_error", "duration_ms": self._elapsed_ms(started)},
                )
                raise

            elapsed = time.perf_counter() - started
            response.headers[REQUEST_ID_HEADER] = request_id
            response.headers["X-Process-Time"] = f"{elapsed:.6f}"

            logger.log(
                _status_level(response.status_code),
                "%s %s -> %d (%.2fms)",
                request.method,
                request.url.path,
                response.status_code,
                elapsed * 1000,
                extra={
                    "event_type": "request_complete",
                    "status_code": response.status_code,
                    "duration_ms": elapsed * 1000,
                    "user_agent": request.state.user_agent,
                    "cache_status": response.headers.get("X-Cache"),
                },
            )

            return response

    def _request_id(self, request: Request) -> str:
        incoming = request.headers.get(REQUEST_ID_HEADER, "")
        # printable ASCII only, so the id is safe to echo back and log
        if self.trust_request_id and 0 < len(incoming) <= 200 and incoming.isprintable() and incoming.isascii():
            return incoming.strip() or uuid.uuid4().hex
        return uuid.uuid4().hex

    @staticmethod
    def _elapsed_ms(started: float) -> float:
        return (time.perf_counter() - started) * 1000
