from .request_throttler import RequestThrottlerMiddleware  # noqa: F401
from .request_utils import RequestUtilsMiddleware  # noqa: F401
from .security_headers import SecurityHeadersMiddleware  # noqa: F401

__all__ = ["RequestThrottlerMiddleware", "RequestUtilsMiddleware", "SecurityHeadersMiddleware"]
