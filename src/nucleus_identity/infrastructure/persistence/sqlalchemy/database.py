"""Engine, session factory and schema management."""

import logging
from functools import lru_cache
from pathlib import Path

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

# Import models to register with IdentityBase.metadata
import nucleus_identity.infrastructure.persistence.sqlalchemy.models  # noqa: F401
from nucleus_config import get_settings
from nucleus_identity.infrastructure.persistence.sqlalchemy.base import IdentityBase

logger = logging.getLogger(__name__)


def create_engine_for_url(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine; SQLite files get their parent directory created."""
    if database_url.startswith("sqlite") and ":memory:" not in database_url:
        db_path = database_url.split("///")[-1]
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    return create_async_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,  # Verify connections before use
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """
    Get the shared async database engine (singleton).

    The engine manages the connection pool and is reused across all units
    of work.
    """
    settings = get_settings()
    return create_engine_for_url(settings.database_url, echo=settings.debug)


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """Get the shared async session maker (singleton)."""
    return create_session_maker(get_engine())


async def create_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all identity tables (idempotent).

    Uses SQLAlchemy's create_all() which only creates missing tables.
    Existing tables and their data are never modified or deleted.
    """
    engine = engine or get_engine()
    logger.info("Ensuring identity tables exist...")

    async with engine.begin() as conn:
        await conn.run_sync(IdentityBase.metadata.create_all)

    logger.info("Identity schema is up to date (missing tables created if needed)")


async def drop_tables(engine: AsyncEngine | None = None) -> None:
    """
    Drop all identity tables (USE WITH CAUTION!).

    This is primarily for testing and development reset scenarios.
    """
    engine = engine or get_engine()
    logger.warning("Dropping all identity tables...")

    async with engine.begin() as conn:
        await conn.run_sync(IdentityBase.metadata.drop_all)

    logger.info("Identity tables dropped successfully")
