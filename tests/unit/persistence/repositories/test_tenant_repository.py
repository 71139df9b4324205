"""Tests for TenantRepository against SQLite."""

import pytest
from sqlalchemy.exc import IntegrityError

from inviteflow.domain.entities.tenant import Tenant
from inviteflow.infrastructure.persistence.repositories import TenantRepository


@pytest.mark.asyncio
async def test_create_and_lookup(db_session):
    repo = TenantRepository(db_session)

    created = await repo.create(
        Tenant(id="globex", subdomain="Globex", name="Globex", allowed_email_domains=["globex.com"])
    )

    assert created.allowed_email_domains == ["globex.com"]
    assert (await repo.get_by_id("globex")).subdomain == "Globex"
    assert (await repo.get_by_subdomain("Globex")).id == "globex"


@pytest.mark.asyncio
async def test_subdomain_lookup_is_exact(db_session):
    repo = TenantRepository(db_session)

    assert await repo.get_by_subdomain("ACME") is None
    assert await repo.get_by_id("missing") is None


@pytest.mark.asyncio
async def test_list_all(db_session):
    tenants = await TenantRepository(db_session).list_all()

    assert [t.id for t in tenants] == ["acme", "default"]


@pytest.mark.asyncio
async def test_subdomain_is_unique(db_session):
    repo = TenantRepository(db_session)

    with pytest.raises(IntegrityError):
        await repo.create(Tenant(id="acme-2", subdomain="acme", name="Acme Again"))


@pytest.mark.asyncio
async def test_empty_subdomain_may_repeat(db_session):
    repo = TenantRepository(db_session)

    await repo.create(Tenant(id="legacy", subdomain="", name="Legacy"))

    assert (await repo.get_by_id("legacy")).subdomain == ""
