from .auth import (  # noqa: F401
    AuthLoginRequest,
    AuthLoginResponse,
    AuthRegisterRequest,
    AuthRegisterResponse,
    AuthSessionState,
    TokenIdentity,
)
from .profile import (  # noqa: F401
    ProfileCreateRequest,
    ProfileListQuery,
    ProfileResponse,
    ProfileUpdateRequest,
)

__all__ = [
    "AuthLoginRequest",
    "AuthLoginResponse",
    "AuthRegisterRequest",
    "AuthRegisterResponse",
    "AuthSessionState",
    "TokenIdentity",
    "ProfileCreateRequest",
    "ProfileListQuery",
    "ProfileResponse",
    "ProfileUpdateRequest",
]
