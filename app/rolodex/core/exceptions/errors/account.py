from .base import NotFoundError, ServiceError


class DuplicateUserError(ServiceError):
    """
    An error indicating that an account with the same username or email already exists.
    """

    type_ = "duplicate_user"
    title = "Account already exists"
    detail = "Username already exists"


class ProfileNotFoundError(NotFoundError):
    """
    An error indicating that no profile exists with the given id.
    """

    type_ = "profile_not_found"
    title = "Profile not found"
    detail = "User not found"
