from .account import UserAccount
from .profile import UserProfile

__all__ = ["UserAccount", "UserProfile"]
