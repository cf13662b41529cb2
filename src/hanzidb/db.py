import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from hanzidb.errors import StoreConnectionError
from hanzidb.paths import database_path
from hanzidb.settings import settings

logger = logging.getLogger(__name__)


def database_url(db_path: Path, read_only: bool = False) -> str:
    if read_only:
        # sqlite URI filename, refuses writes at the connection level
        return f"sqlite+aiosqlite:///file:{db_path.as_posix()}?mode=ro&uri=true"
    return f"sqlite+aiosqlite:///{db_path.as_posix()}"


def create_engine_for(db_path: Path, read_only: bool = False) -> AsyncEngine:
    return create_async_engine(
        database_url(db_path, read_only=read_only),
        echo=settings.sql_echo,
    )


def make_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@asynccontextmanager
async def open_session(
    db_path: Path | None = None,
    read_only: bool = False,
) -> AsyncIterator[AsyncSession]:
    """
    Opens a fresh engine + session for one operation and always disposes it.

    The connection is established up front so a bad path surfaces as
    StoreConnectionError instead of failing on the first statement.
    """
    db_path = db_path or database_path()
    if not read_only:
        db_path.parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine_for(db_path, read_only=read_only)
    try:
        async with make_sessionmaker(engine)() as session:
            try:
                await session.connection()
            except SQLAlchemyError as exc:
                raise StoreConnectionError("open_session", f"{db_path}: {exc}") from exc
            # the eager connect autobegins; leave the transaction to the caller
            await session.rollback()
            yield session
    finally:
        await engine.dispose()
        logger.debug("Closed store connection to %s", db_path)
