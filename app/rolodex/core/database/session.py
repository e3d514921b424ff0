from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from rolodex.core.logging import get_logger
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.ext.asyncio.session import async_sessionmaker
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

logger = get_logger(__name__)


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """
    Create the async engine for ``url``.

    Pool sizing only applies to server databases, SQLite runs on the pool
    SQLAlchemy picks for it.
    """
    options: dict[str, Any] = {"echo": echo}

    if make_url(url).get_backend_name() != "sqlite":
        options.update(pool_pre_ping=True, pool_recycle=3600, pool_size=20, max_overflow=0)

    return create_async_engine(url, **options)


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


def session_scope(sessionmaker: async_sessionmaker[AsyncSession]):
    """Async context manager yielding a session that is always closed."""

    @asynccontextmanager
    async def _scope() -> AsyncGenerator[AsyncSession, None]:
        session = sessionmaker()
        try:
            yield session
        finally:
            try:
                await session.close()
            except SQLAlchemyError as e:
                logger.warning("Session unexpectedly closed", exc_info=e)

    return _scope()


async def init_db(engine: AsyncEngine) -> None:
    """Verify connectivity and create missing tables."""
    # make sure all SQLModel models are imported before creating tables
    import rolodex.domain.models  # noqa: F401

    async with engine.begin() as connection:
        await connection.run_sync(SQLModel.metadata.create_all)


async def check_db_health(engine: AsyncEngine) -> dict[str, str]:
    try:
        async with AsyncSession(engine) as session:
            await session.exec(select(1))
            return {"status": "ok"}
    except SQLAlchemyError as e:
        return {"status": "error", "details": str(e)}
