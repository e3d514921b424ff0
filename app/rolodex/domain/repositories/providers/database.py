from typing import Any, Generic, TypeVar

from rolodex.core.database.mixins import utcnow
from rolodex.core.database.session import (
    build_engine,
    build_sessionmaker,
    check_db_health,
    init_db,
    session_scope,
)
from rolodex.core.exceptions import errors
from rolodex.core.logging import get_logger
from rolodex.domain.models import UserAccount, UserProfile
from rolodex.domain.repositories.interface import AccountRepository, ProfileRepository, Store
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio.session import async_sessionmaker
from sqlmodel import SQLModel, col, select
from sqlmodel.ext.asyncio.session import AsyncSession

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=SQLModel)


def _duplicate_field(error: IntegrityError) -> str:
    message = str(error.orig).lower()
    return "email" if "email" in message else "username"


class SQLRepository(Generic[ModelType]):
    """
    Shared plumbing for the SQL repositories.

    Every call opens its own short-lived session, so repositories are safe to
    share between concurrent requests.
    """

    model: type[ModelType]

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]):
        self.sessionmaker = sessionmaker

    async def _find_one(self, field: str, value: Any) -> ModelType | None:
        try:
            async with session_scope(self.sessionmaker) as session:
                statement = select(self.model).where(col(getattr(self.model, field)) == value)
                result = await session.exec(statement)
                return result.one_or_none()
        except SQLAlchemyError as e:
            raise errors.DatabaseError(detail=str(e)) from e

    async def _insert(self, obj: ModelType) -> ModelType:
        try:
            async with session_scope(self.sessionmaker) as session:
                session.add(obj)
                await session.commit()
                await session.refresh(obj)
                return obj
        except IntegrityError as e:
            raise errors.DuplicateRecordError(field=_duplicate_field(e)) from e
        except SQLAlchemyError as e:
            raise errors.DatabaseError(detail=str(e)) from e

    async def get_by_id(self, obj_id: str) -> ModelType | None:
        return await self._find_one("id", obj_id)

    async def count(self) -> int:
        try:
            async with session_scope(self.sessionmaker) as session:
                result = await session.exec(select(func.count()).select_from(self.model))
                return result.one()
        except SQLAlchemyError as e:
            raise errors.DatabaseError(detail=str(e)) from e


class SQLAccountRepository(SQLRepository[UserAccount], AccountRepository):
    model = UserAccount

    async def create(self, account: UserAccount) -> UserAccount:
        # the unique indexes still catch races between this check and the insert
        if await self.get_by_username(account.username) is not None:
            raise errors.DuplicateRecordError(field="username")
        if await self.get_by_email(account.email) is not None:
            raise errors.DuplicateRecordError(field="email")

        return await self._insert(account)

    async def get_by_username(self, username: str) -> UserAccount | None:
        return await self._find_one("username", username)

    async def get_by_email(self, email: str) -> UserAccount | None:
        return await self._find_one("email", email)


class SQLProfileRepository(SQLRepository[UserProfile], ProfileRepository):
    model = UserProfile

    async def create(self, profile: UserProfile) -> UserProfile:
        return await self._insert(profile)

    async def list(self, *, offset: int, limit: int, sort_field: str, descending: bool) -> list[UserProfile]:
        column = col(getattr(UserProfile, sort_field))
        ordering = column.desc().nulls_first() if descending else column.asc().nulls_last()
        tie_break = col(UserProfile.id).desc() if descending else col(UserProfile.id).asc()

        statement = select(UserProfile).order_by(ordering, tie_break).offset(offset).limit(limit)

        try:
            async with session_scope(self.sessionmaker) as session:
                result = await session.exec(statement)
                return list(result.all())
        except SQLAlchemyError as e:
            raise errors.DatabaseError(detail=str(e)) from e

    async def update(self, profile_id: str, changes: dict[str, Any]) -> UserProfile | None:
        try:
            async with session_scope(self.sessionmaker) as session:
                profile = await session.get(UserProfile, profile_id)
                if profile is None:
                    return None

                for field, value in changes.items():
                    setattr(profile, field, value)
                profile.updated_at = utcnow()

                session.add(profile)
                await session.commit()
                await session.refresh(profile)
                return profile
        except SQLAlchemyError as e:
            raise errors.DatabaseError(detail=str(e)) from e

    async def delete(self, profile_id: str) -> bool:
        try:
            async with session_scope(self.sessionmaker) as session:
                profile = await session.get(UserProfile, profile_id)
                if profile is None:
                    return False

                await session.delete(profile)
                await session.commit()
                return True
        except SQLAlchemyError as e:
            raise errors.DatabaseError(detail=str(e)) from e


class DatabaseStore(Store):
    """SQLModel backed store for SQLite or PostgreSQL."""

    name = "database"

    def __init__(self, url: str, echo: bool = False) -> None:
        self.engine = build_engine(url, echo=echo)
        self.sessionmaker = build_sessionmaker(self.engine)
        self.accounts = SQLAccountRepository(self.sessionmaker)
        self.profiles = SQLProfileRepository(self.sessionmaker)

    async def connect(self) -> None:
        try:
            await init_db(self.engine)
        except SQLAlchemyError as e:
            logger.error("Database initialization failed: %s", e, extra={"event_type": "database_unavailable"})
            raise errors.DatabaseError(detail=f"Database unavailable: {e}") from e

        logger.info("Database initialized", extra={"event_type": "database_ready"})

    async def close(self) -> None:
        await self.engine.dispose()

    async def health_check(self) -> dict[str, str]:
        return await check_db_health(self.engine)
