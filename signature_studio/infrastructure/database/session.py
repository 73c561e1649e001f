"""Async SQLAlchemy engine and session management."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from signature_studio.core.config import Settings, get_settings
from signature_studio.infrastructure.database.base import Base

_engine: AsyncEngine | None = None
_engine_url: str | None = None
AsyncSessionFactory: async_sessionmaker[AsyncSession] | None = None


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _build_engine(settings: Settings) -> AsyncEngine:
    engine_kwargs: dict[str, Any] = {
        "echo": settings.database.echo,
        "future": True,
    }
    is_sqlite = settings.database_url.startswith("sqlite")
    if is_sqlite:
        # one connection per session; the file is shared between event loops in tests
        engine_kwargs["poolclass"] = NullPool
    else:
        if settings.database.pool_size is not None:
            engine_kwargs["pool_size"] = settings.database.pool_size
        if settings.database.max_overflow is not None:
            engine_kwargs["max_overflow"] = settings.database.max_overflow

    engine = create_async_engine(settings.database_url, **engine_kwargs)
    if is_sqlite:
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def get_engine(settings: Settings | None = None) -> AsyncEngine:
    """Return the shared engine, rebuilding it when ``settings`` names another database."""
    global _engine, _engine_url, AsyncSessionFactory
    if _engine is not None and (settings is None or settings.database_url == _engine_url):
        return _engine

    settings = settings or get_settings()
    _engine = _build_engine(settings)
    _engine_url = settings.database_url
    AsyncSessionFactory = async_sessionmaker(
        bind=_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    if AsyncSessionFactory is None:
        get_engine()
    assert AsyncSessionFactory is not None  # for mypy
    return AsyncSessionFactory


def reset_engine() -> None:
    """Forget the cached engine so the next call picks up fresh settings."""
    global _engine, _engine_url, AsyncSessionFactory
    _engine = None
    _engine_url = None
    AsyncSessionFactory = None


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db(settings: Settings | None = None) -> None:
    """Create database tables in development mode (migrations preferred)."""
    # imported lazily to avoid a models <-> session import cycle
    from signature_studio.db import models  # noqa: F401

    engine = get_engine(settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    if _engine is not None:
        await _engine.dispose()
    reset_engine()
