from fastapi import status

from .base import ForbiddenError, ServiceError, UnauthorizedError


class InvalidCredentialsError(ServiceError):
    """
    An error indicating that the username or password presented at login is wrong.

    Raised with status 400 when the username is unknown, see
    ``IncorrectPasswordError`` for a wrong password.
    """

    type_ = "invalid_credentials"
    title = "Invalid credentials"
    detail = "Invalid credentials"
    status = status.HTTP_400_BAD_REQUEST


class MissingTokenError(UnauthorizedError):
    """
    An error indicating that no bearer token was sent with the request.
    """

    type_ = "missing_token"
    detail = "Unauthorized: Missing token"


class InvalidTokenError(ForbiddenError):
    """
    An error indicating that the provided bearer token is invalid or expired.
    """

    type_ = "invalid_token"
    title = "Invalid or expired authentication token"
    detail = "Forbidden: Invalid token"


class IncorrectPasswordError(InvalidCredentialsError):
    """
    An error indicating that the password presented at login does not match the account.
    """

    status = status.HTTP_401_UNAUTHORIZED
