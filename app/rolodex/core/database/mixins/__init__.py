from .id import UUIDHexMixin  # noqa: F401
from .timestamp import TimestampMixin, utcnow  # noqa: F401
