"""Async PostgreSQL engine and session factory."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from anemi.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the pooled asyncpg engine.

    Pool sizing comes from ``DATABASE__POOL_SIZE``, ``DATABASE__MAX_OVERFLOW``
    and ``DATABASE__POOL_TIMEOUT``; a request that cannot get a connection
    within the timeout fails instead of queueing forever.

    Args:
        settings: Application settings

    Returns:
        Async engine
    """
    database = settings.database
    return create_async_engine(
        database.url,
        echo=settings.debug,
        pool_pre_ping=True,  # Drop connections the server closed while idle
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
        pool_timeout=database.pool_timeout,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the per-request session factory.

    Repositories flush explicitly and services commit before sending
    notifications, so sessions neither autoflush nor expire on commit.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
