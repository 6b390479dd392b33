"""
Database connection management.

Provides the async SQLAlchemy engine, session factory, and FastAPI
dependency for database session injection. The engine is created lazily
and shared for the lifetime of the process.

Dependencies: sqlalchemy, docportal.configs
System role: Database connection lifecycle management
"""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from docportal.configs import get_settings

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker | None = None


def get_async_engine() -> AsyncEngine:
    """
    Return the process-wide async engine, creating it on first use.

    pool_pre_ping=True verifies connections before use to detect
    stale/broken connections early. Pool sizing only applies to
    server databases; SQLite URLs use SQLAlchemy's default pool.

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine
    """
    global _engine
    if _engine is None:
        db_config = get_settings().database
        url = db_config.async_database_url
        options: dict = {"echo": db_config.echo_sql, "pool_pre_ping": True}
        if not url.startswith("sqlite"):
            options.update(
                pool_size=db_config.pool_size,
                max_overflow=db_config.max_overflow,
                pool_timeout=db_config.pool_timeout,
            )
        _engine = create_async_engine(url, **options)
    return _engine


def get_async_session_factory() -> async_sessionmaker:
    """
    Return the async session factory bound to the shared engine.

    Sessions use autoflush=False and expire_on_commit=False for explicit
    transaction control and predictable attribute access after commit.

    Returns:
        async_sessionmaker: Async session factory

    Usage:
        SessionFactory = get_async_session_factory()
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            bind=get_async_engine(),
            autoflush=False,
            expire_on_commit=False,
        )
    return _session_factory


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for async database session injection with automatic cleanup.

    Yields:
        AsyncSession: Async SQLAlchemy database session (scoped to request lifetime)
    """
    SessionFactory = get_async_session_factory()
    async with SessionFactory() as session:
        yield session


async def dispose_engine() -> None:
    """Close pooled connections; called on application shutdown."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
