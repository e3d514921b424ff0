from .auth_service import AuthService
from .profile_service import ProfileService
from .security_service import SecurityService
from .token_service import TokenService

__all__ = ["AuthService", "ProfileService", "SecurityService", "TokenService"]
