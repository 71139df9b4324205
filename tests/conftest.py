"""Pytest configuration for all tests."""

from typing import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from inviteflow.core.config import get_settings
from inviteflow.infrastructure.persistence.database import (
    Base,
    configure_sqlite_transactions,
)
from inviteflow.infrastructure.persistence.models import TenantModel


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Uses an in-memory SQLite database seeded with the default tenant and an
    "acme" tenant served under the "acme" subdomain.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    configure_sqlite_transactions(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_maker = sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    # Seed tenants
    async with async_session_maker() as session:
        session.add_all(
            [
                TenantModel(
                    id=get_settings().default_tenant_id,
                    subdomain="",
                    name="InviteFlow",
                ),
                TenantModel(id="acme", subdomain="acme", name="Acme Corp"),
            ]
        )
        await session.commit()

    async with async_session_maker() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with overridden database dependency."""
    from inviteflow.infrastructure.api.app import app
    from inviteflow.infrastructure.persistence.database import get_db_session

    app.dependency_overrides[get_db_session] = lambda: db_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides = {}
