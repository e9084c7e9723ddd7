"""Shared fixtures for integration tests — in-memory SQLite and temp storage."""

from collections.abc import AsyncIterator
from dataclasses import dataclass

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.infrastructure.database import Base
from app.infrastructure.database.session import get_db_session
from app.infrastructure.dependencies import get_document_storage
from app.infrastructure.storage.local_document_storage import LocalDocumentStorage
from app.infrastructure.storage.url_signer import UrlSigner
from app.main import app


@dataclass
class ApiHarness:
    client: AsyncClient
    session_factory: async_sessionmaker[AsyncSession]
    storage: LocalDocumentStorage


@pytest_asyncio.fixture
async def session_factory() -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def api(session_factory, tmp_path) -> AsyncIterator[ApiHarness]:
    storage = LocalDocumentStorage(
        storage_dir=str(tmp_path / "storage"),
        public_base_url="http://test",
        signer=UrlSigner("test-secret"),
    )

    async def _session() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = _session
    app.dependency_overrides[get_document_storage] = lambda: storage

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield ApiHarness(client=client, session_factory=session_factory, storage=storage)

    app.dependency_overrides.clear()
