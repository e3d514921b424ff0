"""
JSON logging for Rolodex.

``setup_logging`` is called by the application factory. Records logged inside
``add_to_log_context`` carry the given fields, the request middleware uses it
to attach the request id, client ip, method and path.
"""

from .config import get_logger, get_logging_config, setup_exception_logging, setup_logging
from .filters import add_to_log_context, get_log_context

__all__ = [
    "setup_logging",
    "setup_exception_logging",
    "get_logger",
    "get_logging_config",
    "add_to_log_context",
    "get_log_context",
]
