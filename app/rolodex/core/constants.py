import re
from contextvars import ContextVar

REQUEST_ID_CTX = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"

# Checked in order before falling back to the socket peer
CLIENT_IP_HEADERS = ["X-Forwarded-For", "X-Real-IP"]

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

USERNAME_MIN_LENGTH = 5
PASSWORD_MIN_LENGTH = 8

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

DEFAULT_SORT_FIELD = "createdAt"

# Public (wire) name -> model attribute
PROFILE_SORT_FIELDS: dict[str, str] = {
    "id": "id",
    "name": "name",
    "email": "email",
    "phone": "phone",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}

USERS_CACHE_NAMESPACE = "users"

CACHE_STATUS_HEADER = "X-Cache"

SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "0",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
}

HSTS_HEADER_VALUE = "max-age=31536000; includeSubDomains"
