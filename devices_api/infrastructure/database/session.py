"""Async engine and per-request sessions for the device store."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from devices_api.core.config import Settings, get_settings
from devices_api.infrastructure.database.base import Base

logger = logging.getLogger(__name__)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def _build_engine(settings: Settings) -> AsyncEngine:
    url = make_url(settings.database_url)
    engine_kwargs: dict[str, Any] = {"echo": settings.database.echo or settings.debug}
    # SQLite pools reject sizing arguments
    if url.get_backend_name() != "sqlite":
        if settings.database.pool_size is not None:
            engine_kwargs["pool_size"] = settings.database.pool_size
        if settings.database.max_overflow is not None:
            engine_kwargs["max_overflow"] = settings.database.max_overflow

    logger.info("Connecting device store to %s", url.render_as_string(hide_password=True))
    return create_async_engine(url, **engine_kwargs)


def get_engine() -> AsyncEngine:
    global _engine, _session_factory
    if _engine is None:
        _engine = _build_engine(get_settings())
        _session_factory = async_sessionmaker(bind=_engine, expire_on_commit=False)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    get_engine()
    assert _session_factory is not None  # for mypy
    return _session_factory


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """One session per request; commits on success, rolls back on any error."""
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            logger.debug("Rolling back device store session")
            await session.rollback()
            raise


async def init_db() -> None:
    """Create the device tables when they do not exist yet."""
    from devices_api.infrastructure.database import models  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
