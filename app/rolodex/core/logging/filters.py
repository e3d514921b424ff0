import contextvars
import logging
import os
import socket
from contextlib import contextmanager
from typing import Any, Dict, Iterator

from rolodex.core.constants import REQUEST_ID_CTX

_log_context: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar("log_context", default={})


class ContextFilter(logging.Filter):
    """
    Stamp every record with service details and the active log context.

    Service details (host, pid, app name/version, environment) are fixed when
    the filter is built. The per-request values come from ``add_to_log_context``
    and ``request_id`` falls back to ``"-"`` outside a request.
    """

    def __init__(self, name: str = "", **service: Any) -> None:
        super().__init__(name)
        self.service = {"hostname": socket.gethostname(), "process_id": os.getpid(), **service}

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in self.service.items():
            setattr(record, key, value)

        context = _log_context.get()
        for key, value in context.items():
            setattr(record, key, value)

        if not getattr(record, "request_id", None):
            record.request_id = REQUEST_ID_CTX.get() or "-"

        return True


class HealthCheckFilter(logging.Filter):
    """Drop request log lines for the health endpoint."""

    def __init__(self, name: str = "", path: str = "/health") -> None:
        super().__init__(name)
        self.path = path

    def filter(self, record: logging.LogRecord) -> bool:
        return getattr(record, "path", None) != self.path


@contextmanager
def add_to_log_context(**kwargs: Any) -> Iterator[None]:
    """
    Add ``kwargs`` to every record logged inside the block.

    Example:
        with add_to_log_context(user_id="123"):
            logger.info("Updating profile")
    """
    token = _log_context.set({**_log_context.get(), **kwargs})
    try:
        yield
    finally:
        _log_context.reset(token)


def get_log_context() -> Dict[str, Any]:
    return dict(_log_context.get())
