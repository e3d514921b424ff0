from typing import Any, Literal

from fastapi import Request
from rolodex.core.constants import CLIENT_IP_HEADERS


def get_client_ip(request: Request, headers: list[str] | None = None) -> str | None:
    """
    Best guess at the caller's address.

    The first forwarding header present wins (for ``X-Forwarded-For`` the
    left-most entry), then the socket peer.
    """
    for name in headers or CLIENT_IP_HEADERS:
        value = request.headers.get(name)
        if value:
            return value.split(",")[0].strip()

    return request.client.host if request.client else None


def get_user_agent(request: Request) -> str:
    return request.headers.get("User-Agent", "Unknown")


def get_bearer_token(request: Request) -> str | None:
    """
    Return the token part of an ``Authorization: Bearer <token>`` header.

    The second whitespace-separated part of the header is taken as the token,
    ``None`` is returned when the header or that part is missing.
    """
    parts = request.headers.get("Authorization", "").split()
    return parts[1] if len(parts) >= 2 else None


def get_request_info(request: Request, keys: list[Literal["user_agent", "ip_address", "request_id"]]) -> dict[str, Any]:
    """Collect the named request details for log records, ``"Unknown"`` when absent."""
    info: dict[str, Any] = {}

    if "user_agent" in keys:
        info["user_agent"] = get_user_agent(request)
    if "request_id" in keys:
        info["request_id"] = getattr(request.state, "request_id", None) or "Unknown"
    if "ip_address" in keys:
        info["ip_address"] = getattr(request.state, "client_ip", None) or get_client_ip(request) or "Unknown"

    return info
