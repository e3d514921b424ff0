import asyncio
from typing import Any

from rolodex.core.database.mixins import utcnow
from rolodex.core.exceptions import errors
from rolodex.domain.models import UserAccount, UserProfile
from rolodex.domain.repositories.interface import AccountRepository, ProfileRepository, Store


def _copy_account(account: UserAccount) -> UserAccount:
    return UserAccount(**account.model_dump())


def _copy_profile(profile: UserProfile) -> UserProfile:
    return UserProfile(**profile.model_dump())


class MemoryAccountRepository(AccountRepository):
    """
    Volatile account storage.

    Records are copied in and out so callers never hold a reference to the
    stored instance, and writes are serialized by an ``asyncio.Lock`` so the
    uniqueness check and the insert happen as one step.
    """

    def __init__(self) -> None:
        self._records: dict[str, UserAccount] = {}
        self._lock = asyncio.Lock()

    async def create(self, account: UserAccount) -> UserAccount:
        async with self._lock:
            for existing in self._records.values():
                if existing.username == account.username:
                    raise errors.DuplicateRecordError(field="username")
                if existing.email == account.email:
                    raise errors.DuplicateRecordError(field="email")

            self._records[account.id] = _copy_account(account)
            return _copy_account(account)

    async def get_by_id(self, account_id: str) -> UserAccount | None:
        account = self._records.get(account_id)
        return _copy_account(account) if account else None

    async def get_by_username(self, username: str) -> UserAccount | None:
        for account in self._records.values():
            if account.username == username:
                return _copy_account(account)
        return None

    async def get_by_email(self, email: str) -> UserAccount | None:
        for account in self._records.values():
            if account.email == email:
                return _copy_account(account)
        return None

    async def count(self) -> int:
        return len(self._records)


class MemoryProfileRepository(ProfileRepository):
    """
    Volatile profile storage with the same ordering rules as the SQL backend.

    Missing values sort after present ones when ascending and before them
    when descending.
    """

    def __init__(self) -> None:
        self._records: dict[str, UserProfile] = {}
        self._lock = asyncio.Lock()

    async def create(self, profile: UserProfile) -> UserProfile:
        async with self._lock:
            self._records[profile.id] = _copy_profile(profile)
            return _copy_profile(profile)

    async def get_by_id(self, profile_id: str) -> UserProfile | None:
        profile = self._records.get(profile_id)
        return _copy_profile(profile) if profile else None

    async def list(self, *, offset: int, limit: int, sort_field: str, descending: bool) -> list[UserProfile]:
        def sort_key(profile: UserProfile) -> tuple:
            value = getattr(profile, sort_field)
            return (value is None, value if value is not None else "", profile.id)

        ordered = sorted(self._records.values(), key=sort_key, reverse=descending)
        return [_copy_profile(profile) for profile in ordered[offset : offset + limit]]

    async def update(self, profile_id: str, changes: dict[str, Any]) -> UserProfile | None:
        async with self._lock:
            profile = self._records.get(profile_id)
            if profile is None:
                return None

            updated = _copy_profile(profile)
            for field, value in changes.items():
                setattr(updated, field, value)
            updated.updated_at = utcnow()

            self._records[profile_id] = updated
            return _copy_profile(updated)

    async def delete(self, profile_id: str) -> bool:
        async with self._lock:
            return self._records.pop(profile_id, None) is not None

    async def count(self) -> int:
        return len(self._records)


class MemoryStore(Store):
    """Both repositories held in process memory, lost on restart."""

    name = "memory"

    def __init__(self) -> None:
        self.accounts = MemoryAccountRepository()
        self.profiles = MemoryProfileRepository()

    async def health_check(self) -> dict[str, str]:
        return {"status": "ok"}
