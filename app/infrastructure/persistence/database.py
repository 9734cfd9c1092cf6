"""Persistence: async engine, session factory, and Base for SQLAlchemy ORM.

Engine and session factory are created lazily on first use so import does
not trigger Settings validation. They are process-wide: one engine (and
connection pool) is shared by every request.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from app.core.config import get_settings

logger = logging.getLogger(__name__)

# Set by _ensure_engine() on first use; avoids get_settings() at import time.
engine: Any = None
AsyncSessionLocal: async_sessionmaker[AsyncSession] | None = None


def _ensure_engine() -> None:
    """Create engine and AsyncSessionLocal on first use."""
    global engine, AsyncSessionLocal
    if AsyncSessionLocal is not None:
        return
    settings = get_settings()
    engine_kwargs: dict[str, Any] = {
        "echo": settings.database_echo,
        "pool_pre_ping": True,
    }
    if "postgresql" in settings.database_url:
        command_timeout = (
            settings.db_command_timeout
            if settings.db_command_timeout is not None
            else 60
        )
        engine_kwargs["pool_size"] = (
            settings.db_pool_size if settings.db_pool_size is not None else 20
        )
        engine_kwargs["max_overflow"] = (
            settings.db_max_overflow if settings.db_max_overflow is not None else 30
        )
        engine_kwargs["pool_recycle"] = 3600
        engine_kwargs["connect_args"] = {"command_timeout": command_timeout}
    engine = create_async_engine(settings.database_url, **engine_kwargs)
    AsyncSessionLocal = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy declarative models."""


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the shared session factory, creating the engine on first use."""
    _ensure_engine()
    assert AsyncSessionLocal is not None
    return AsyncSessionLocal


async def create_tables() -> None:
    """Create all tables (development convenience; see database_auto_create)."""
    # Register models on Base.metadata
    from app.infrastructure.persistence import models  # noqa: F401

    _ensure_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured")


async def dispose_engine() -> None:
    """Dispose the engine and forget the session factory (app shutdown)."""
    global engine, AsyncSessionLocal
    if engine is not None:
        await engine.dispose()
        logger.info("Database engine disposed")
    engine = None
    AsyncSessionLocal = None
