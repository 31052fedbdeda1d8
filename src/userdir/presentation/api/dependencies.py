"""FastAPI dependency injection for the user directory API.

Provides dependencies for:
- Database engine and sessions
- Change event publisher and notifier
- Repository and service instances
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Annotated, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from userdir.application.ports import UserEventPublisher
from userdir.application.services import UserChangeNotifier, UserDirectoryService
from userdir.infrastructure.messaging import NullEventPublisher, RedisEventPublisher
from userdir.infrastructure.persistence.sqlalchemy import (
    Base,
    UserRepositorySQLAlchemy,
    build_engine,
)
from userdir_config.settings import get_settings

logger = logging.getLogger(__name__)


@lru_cache()
def get_database_url() -> str:
    """
    Get database URL from application settings.

    Returns
    -------
    Database URL string
    """
    url = get_settings().database_url

    # Ensure data directory exists for file-based SQLite
    if url.startswith("sqlite") and ":memory:" not in url:
        db_path = url.split("///")[-1]
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    return url


# -----------------------------------------------------------------------------
# Database Engine & Session (Singleton)
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """
    Get the shared async database engine (singleton).

    The engine manages the connection pool and is reused across all requests.

    Returns
    -------
    AsyncEngine instance
    """
    return build_engine(
        get_database_url(),
        echo=False,
        pool_pre_ping=True,  # Verify connections before use
    )


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """
    Get the shared async session maker (singleton).

    Returns
    -------
    async_sessionmaker configured with the shared engine
    """
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Creates an async session for the request using the shared engine/pool.
    Anything not committed by the endpoint is rolled back on close.

    Yields
    ------
    AsyncSession for database operations
    """
    async with get_session_maker()() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Database Schema Management
# -----------------------------------------------------------------------------


async def create_tables() -> None:
    """
    Create all database tables (idempotent).

    Uses SQLAlchemy's create_all() which only creates missing tables.
    Existing tables and their data are never modified or deleted.
    """
    engine = get_engine()
    logger.info("Ensuring all database tables exist...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database schema is up to date (missing tables created if needed)")


async def drop_tables() -> None:
    """
    Drop all database tables (USE WITH CAUTION!).

    This is primarily for testing and development reset scenarios.
    """
    engine = get_engine()
    logger.warning("Dropping all database tables...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    logger.info("Database tables dropped successfully")


# -----------------------------------------------------------------------------
# Change Notifications (Singleton)
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_event_publisher() -> UserEventPublisher:
    """Get the configured event publisher (Redis, or a no-op when disabled)."""
    settings = get_settings()
    if not settings.events_enabled:
        return NullEventPublisher()
    return RedisEventPublisher.from_url(
        settings.events_redis_url,
        settings.events_channel,
    )


@lru_cache(maxsize=1)
def get_change_notifier() -> UserChangeNotifier:
    """Get the shared change notifier (singleton)."""
    return UserChangeNotifier(get_event_publisher())


# -----------------------------------------------------------------------------
# Application Services
# -----------------------------------------------------------------------------


def get_user_directory_service(
    session: DBSession,
    notifier: UserChangeNotifier = Depends(get_change_notifier),
) -> UserDirectoryService:
    """Get the user directory service bound to the request's session."""
    return UserDirectoryService(
        user_repository=UserRepositorySQLAlchemy(session),
        notifier=notifier,
    )


# Type alias for injected directory service
DirectoryService = Annotated[UserDirectoryService, Depends(get_user_directory_service)]
