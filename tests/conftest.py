"""Shared fixtures: in-memory SQLite engine, sessions and an HTTP client."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from devices_api.core.config import PaginationSettings, Settings
from devices_api.infrastructure.database import Base
from devices_api.infrastructure.database import models  # noqa: F401
from devices_api.infrastructure.database.repositories import SqlDeviceRepository
from devices_api.interfaces.http.deps import get_app_settings, get_db_session
from devices_api.main import create_app
from devices_api.modules.devices import DeviceService


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def file_session_factory(tmp_path: Path) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Sessions on a file-backed database, each with its own connection."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'devices.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
async def session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def repository(session: AsyncSession) -> SqlDeviceRepository:
    return SqlDeviceRepository(session)


@pytest.fixture
def service(session: AsyncSession) -> DeviceService:
    return DeviceService.with_session(session)


@pytest.fixture
def settings() -> Settings:
    return Settings(environment="test", pagination=PaginationSettings(default_size=10, max_size=50))


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession], settings: Settings
) -> AsyncGenerator[AsyncClient, None]:
    app = create_app()

    async def _get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = _get_db_session
    app.dependency_overrides[get_app_settings] = lambda: settings

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

