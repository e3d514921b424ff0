from rolodex.core.database.mixins import TimestampMixin, UUIDHexMixin
from sqlmodel import Field


class UserAccount(UUIDHexMixin, TimestampMixin, table=True):
    """
    Represents a login account.

    Attributes:\n
        id (str): The unique identifier for the account.
        username (str): The unique login name.
        email (str): The unique email address of the account.
        password_hash (str): bcrypt hash of the password, the plain password is never stored.
        created_at (datetime): When the account was registered.
        updated_at (datetime): When the account was last changed.
    """

    username: str = Field(max_length=255, nullable=False, unique=True, index=True)
    email: str = Field(max_length=255, nullable=False, unique=True, index=True)
    password_hash: str = Field(max_length=255, nullable=False)
