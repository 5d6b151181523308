import logging

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy import URL
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from xferlogic.common.model import Base
from xferlogic.core.conf import settings

logger = logging.getLogger(__name__)


def create_database_url() -> URL:
    """Build the async database URL from settings.

    PostgreSQL goes through asyncpg, SQLite through aiosqlite.
    """
    if settings.DATABASE_TYPE == 'sqlite':
        return URL.create(drivername='sqlite+aiosqlite', database=settings.DATABASE_SQLITE_PATH)

    return URL.create(
        drivername='postgresql+asyncpg',
        username=settings.DATABASE_USER,
        password=settings.DATABASE_PASSWORD,
        host=settings.DATABASE_HOST,
        port=settings.DATABASE_PORT,
        database=settings.DATABASE_SCHEMA,
    )


def create_async_engine_and_session(url: str | URL) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    """Create the async engine and session factory.

    The engine connects lazily, so building it at import time does not need a
    running database.
    """
    engine = create_async_engine(
        url,
        echo=settings.DATABASE_ECHO,
        future=True,
        pool_pre_ping=True,
    )
    db_session = async_sessionmaker(bind=engine, class_=AsyncSession, autoflush=False, expire_on_commit=False)
    return engine, db_session


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session dependency; commits on success, rolls back on error."""
    async with async_db_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def create_tables() -> None:
    """Create all tables registered on ``Base.metadata``."""
    import xferlogic.app.gateway.model  # noqa: F401

    async with async_engine.begin() as coon:
        await coon.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")


async def drop_tables() -> None:
    """Drop all tables registered on ``Base.metadata``."""
    import xferlogic.app.gateway.model  # noqa: F401

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.info("Database tables dropped")


SQLALCHEMY_DATABASE_URL = create_database_url()

async_engine, async_db_session = create_async_engine_and_session(SQLALCHEMY_DATABASE_URL)

# Session Annotated
CurrentSession = Annotated[AsyncSession, Depends(get_db)]
