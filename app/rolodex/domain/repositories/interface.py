from abc import ABC, abstractmethod
from typing import Any

from rolodex.domain.models import UserAccount, UserProfile


class AccountRepository(ABC):
    """
    Persistence contract for login accounts.

    Implementations enforce username and email uniqueness at write time and
    raise ``DuplicateRecordError`` naming the conflicting field. Any other
    store failure surfaces as ``DatabaseError``.
    """

    @abstractmethod
    async def create(self, account: UserAccount) -> UserAccount: ...

    @abstractmethod
    async def get_by_id(self, account_id: str) -> UserAccount | None: ...

    @abstractmethod
    async def get_by_username(self, username: str) -> UserAccount | None: ...

    @abstractmethod
    async def get_by_email(self, email: str) -> UserAccount | None: ...

    @abstractmethod
    async def count(self) -> int: ...


class ProfileRepository(ABC):
    """
    Persistence contract for profile records.

    Listing is offset paginated and ordered by a single model attribute,
    ties are broken by ``id`` so pages never overlap.
    """

    @abstractmethod
    async def create(self, profile: UserProfile) -> UserProfile: ...

    @abstractmethod
    async def get_by_id(self, profile_id: str) -> UserProfile | None: ...

    @abstractmethod
    async def list(self, *, offset: int, limit: int, sort_field: str, descending: bool) -> list[UserProfile]: ...

    @abstractmethod
    async def update(self, profile_id: str, changes: dict[str, Any]) -> UserProfile | None:
        """
        Replace the given fields and bump ``updated_at``.

        Returns:
            The updated profile, or None when no profile has that id
        """

    @abstractmethod
    async def delete(self, profile_id: str) -> bool:
        """
        Returns:
            True when a profile was removed
        """

    @abstractmethod
    async def count(self) -> int: ...


class Store(ABC):
    """
    A deployment's persistence backend: both repositories plus lifecycle hooks.
    """

    name: str = "unknown"

    accounts: AccountRepository
    profiles: ProfileRepository

    async def connect(self) -> None:
        """
        Prepare the backend for use.

        Raises:
            DatabaseError: If the backend cannot be reached
        """

    async def close(self) -> None:
        """Release backend resources."""

    @abstractmethod
    async def health_check(self) -> dict[str, str]: ...
