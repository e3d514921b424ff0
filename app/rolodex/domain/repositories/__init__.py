from .factory import create_store
from .interface import AccountRepository, ProfileRepository, Store

__all__ = ["AccountRepository", "ProfileRepository", "Store", "create_store"]
