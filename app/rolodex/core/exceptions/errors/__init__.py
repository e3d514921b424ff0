from .account import DuplicateUserError, ProfileNotFoundError  # noqa: F401
from .auth import IncorrectPasswordError, InvalidCredentialsError, InvalidTokenError, MissingTokenError  # noqa: F401
from .base import (  # noqa: F401
    ForbiddenError,
    InternalServerError,
    NotFoundError,
    RateLimitExceededError,
    ServiceError,
    UnauthorizedError,
    ValidationError,
)
from .database import DatabaseError, DuplicateRecordError  # noqa: F401

__all__ = [
    "DuplicateUserError",
    "ProfileNotFoundError",
    "IncorrectPasswordError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "MissingTokenError",
    "ForbiddenError",
    "InternalServerError",
    "NotFoundError",
    "RateLimitExceededError",
    "ServiceError",
    "UnauthorizedError",
    "ValidationError",
    "DatabaseError",
    "DuplicateRecordError",
]
