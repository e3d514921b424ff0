from rolodex.core.database.mixins import TimestampMixin, UUIDHexMixin
from sqlmodel import Field


class UserProfile(UUIDHexMixin, TimestampMixin, table=True):
    """
    Represents a profile record managed through the ``/users`` endpoints.

    Profiles are independent of accounts, no foreign key links the two.

    Attributes:\n
        id (str): The unique identifier for the profile.
        name (str): Display name.
        email (str): Contact email address.
        phone (str | None): Optional phone number, stored as given.
        created_at (datetime): When the profile was created.
        updated_at (datetime): When the profile was last changed.
    """

    name: str = Field(max_length=255, nullable=False, index=True)
    email: str = Field(max_length=255, nullable=False, index=True)
    phone: str | None = Field(default=None, max_length=64, nullable=True)
