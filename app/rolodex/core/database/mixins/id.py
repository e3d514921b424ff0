from uuid import uuid4

import inflection
from sqlalchemy.orm import declared_attr
from sqlmodel import Field, SQLModel


def new_id() -> str:
    return uuid4().hex


class BaseIDMixin(SQLModel):
    """
    A base mixin for models with a primary key.\n

    The table name is the pluralized snake case of the model name
    (``UserProfile`` -> ``user_profiles``).
    """

    @declared_attr  # type: ignore
    def __tablename__(cls) -> str:  # type: ignore
        return inflection.pluralize(inflection.underscore(cls.__name__))


class UUIDHexMixin(BaseIDMixin):
    """
    A mixin for models with an opaque string primary key.

    Attributes:\n
        id (str): 32 character hex form of a random UUID.
    """

    id: str = Field(
        default_factory=new_id,
        primary_key=True,
        index=True,
        nullable=False,
        max_length=32,
    )
