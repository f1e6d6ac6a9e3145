"""
Database connection management.

Provides the async SQLAlchemy engine, session factory and table creation
for the SQLite database holding chunk content, local vectors and prompt
overrides.

Dependencies: sqlalchemy, aiosqlite, landmark_rag.configs
System role: Database connection lifecycle management
"""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from landmark_rag.boundary.db.base import Base
from landmark_rag.configs import get_settings
from landmark_rag.configs.database import DatabaseSettings

logger = logging.getLogger(__name__)


def get_async_engine(db_config: DatabaseSettings | None = None) -> AsyncEngine:
    """
    Create async SQLAlchemy engine.

    Args:
        db_config: Database settings (application settings when omitted)

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine

    Raises:
        ArgumentError: If database URL is invalid or engine creation fails

    Usage:
        engine = get_async_engine()
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
    """
    db_config = db_config or get_settings().database
    return create_async_engine(
        db_config.url,
        echo=db_config.echo_sql,
        pool_pre_ping=True,
    )


def get_async_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """
    Create async session factory for database operations.

    Returns async_sessionmaker bound to engine with autoflush=False and
    expire_on_commit=False for explicit transaction control.

    Args:
        engine: Async engine to bind

    Returns:
        async_sessionmaker: Async session factory

    Usage:
        SessionFactory = get_async_session_factory(engine)
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    return async_sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """
    Create all tables from registered ORM models.

    Idempotent: CREATE TABLE IF NOT EXISTS for each model.

    Args:
        engine: Async engine to run DDL on

    Raises:
        SQLAlchemyError: If table creation fails
    """
    # Register models with Base.metadata
    from landmark_rag.boundary.db import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info(
        f"{__name__}:create_tables - Tables ready",
        extra={"tables": sorted(Base.metadata.tables)},
    )
