from datetime import datetime, timezone

from sqlalchemy import TIMESTAMP
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin(SQLModel):
    """
    Mixin that adds created and updated datetime columns to a model

    Attributes:\n
        created_at (datetime): The datetime when the record was created.
        updated_at (datetime): The datetime when the record was last updated.
    """

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_type=TIMESTAMP(timezone=True),  # type: ignore[call-overload]
        nullable=False,
        index=True,
    )
    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_type=TIMESTAMP(timezone=True),  # type: ignore[call-overload]
        nullable=False,
    )
