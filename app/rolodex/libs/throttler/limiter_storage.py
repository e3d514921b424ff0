from limits.aio.storage.base import Storage
from limits.storage import storage_from_string
from rolodex.core.settings.base import Settings


def get_limiter_storage(settings: Settings) -> Storage:
    """
    Counters live in process memory for local runs and in Redis elsewhere,
    unless ``RATE_LIMIT_STORAGE_URL`` names a storage explicitly.
    """
    url = settings.RATE_LIMIT_STORAGE_URL
    if not url:
        url = "async+memory://" if settings.ENVIRONMENT == "local" else f"async+{settings.REDIS_URL}"

    return storage_from_string(url)  # type: ignore[return-value]
