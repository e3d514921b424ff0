from rolodex.core.logging import get_logger
from rolodex.core.settings.base import Settings
from rolodex.domain.repositories.interface import Store
from rolodex.domain.repositories.providers.database import DatabaseStore
from rolodex.domain.repositories.providers.memory import MemoryStore

logger = get_logger(__name__)


def create_store(settings: Settings) -> Store:
    """
    Build the store selected by ``STORE_BACKEND``.

    The database store is not connected yet, call ``connect()`` on startup.
    """
    logger.info(
        "Creating %s store for environment: %s",
        settings.STORE_BACKEND,
        settings.ENVIRONMENT,
        extra={"event_type": "store_created", "store_backend": settings.STORE_BACKEND},
    )

    if settings.STORE_BACKEND == "database":
        return DatabaseStore(settings.SQLALCHEMY_DATABASE_URI, echo=settings.DATABASE_ECHO)

    return MemoryStore()
