from .database import DatabaseStore, SQLAccountRepository, SQLProfileRepository
from .memory import MemoryAccountRepository, MemoryProfileRepository, MemoryStore

__all__ = [
    "DatabaseStore",
    "SQLAccountRepository",
    "SQLProfileRepository",
    "MemoryAccountRepository",
    "MemoryProfileRepository",
    "MemoryStore",
]
