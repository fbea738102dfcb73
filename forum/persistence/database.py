"""Async engine and session factory for PostgreSQL (asyncpg driver)."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from forum.config import DatabaseSettings


def create_engine(database: DatabaseSettings) -> AsyncEngine:
    """Create the async engine from the database section of the settings."""
    return create_async_engine(
        database.url,
        echo=database.echo,
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory used for per-request sessions.

    Entities are mapped to domain models right after each query, so objects
    are not expired on commit and nothing relies on autoflush.
    """
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
