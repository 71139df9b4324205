"""Unit tests for TenantAddressResolver."""

from unittest.mock import AsyncMock

import pytest

from inviteflow.domain.entities.tenant import Tenant
from inviteflow.domain.services.tenant_address_resolver import (
    TenantAddressError,
    TenantAddressResolver,
    TenantNotFoundError,
)


@pytest.fixture
def mock_tenant_repo():
    """Mock tenant repository."""
    return AsyncMock()


@pytest.fixture
def resolver(mock_tenant_repo):
    return TenantAddressResolver(mock_tenant_repo, "http://localhost", "default")


@pytest.mark.asyncio
async def test_default_tenant_uses_root_url(resolver, mock_tenant_repo):
    assert await resolver.base_url_for("default") == "http://localhost"
    mock_tenant_repo.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_tenant_uses_its_subdomain(resolver, mock_tenant_repo):
    mock_tenant_repo.get_by_id.return_value = Tenant(id="t1", subdomain="acme", name="Acme")

    assert await resolver.base_url_for("t1") == "http://acme.localhost"


@pytest.mark.asyncio
async def test_subdomain_is_used_verbatim(resolver, mock_tenant_repo):
    mock_tenant_repo.get_by_id.return_value = Tenant(id="t1", subdomain="AcMe", name="Acme")

    assert await resolver.base_url_for("t1") == "http://AcMe.localhost"


@pytest.mark.asyncio
async def test_port_and_scheme_are_kept(mock_tenant_repo):
    resolver = TenantAddressResolver(mock_tenant_repo, "https://login.example.org:8443/", "default")
    mock_tenant_repo.get_by_id.return_value = Tenant(id="t1", subdomain="acme", name="Acme")

    assert await resolver.base_url_for("t1") == "https://acme.login.example.org:8443"
    assert await resolver.base_url_for("default") == "https://login.example.org:8443"


@pytest.mark.asyncio
async def test_unknown_tenant_raises(resolver, mock_tenant_repo):
    mock_tenant_repo.get_by_id.return_value = None

    with pytest.raises(TenantNotFoundError):
        await resolver.base_url_for("missing")


@pytest.mark.asyncio
async def test_tenant_without_subdomain_never_falls_back(resolver, mock_tenant_repo):
    """Handing out the root URL for another tenant would leak links across tenants."""
    mock_tenant_repo.get_by_id.return_value = Tenant(id="t1", subdomain="", name="Acme")

    with pytest.raises(TenantAddressError):
        await resolver.base_url_for("t1")


@pytest.mark.asyncio
async def test_link_for_encodes_the_code(resolver, mock_tenant_repo):
    mock_tenant_repo.get_by_id.return_value = Tenant(id="t1", subdomain="acme", name="Acme")

    link = await resolver.link_for("t1", "a@b&c=d/e")

    assert link == "http://acme.localhost/invitations/accept?code=a%40b%26c%3Dd%2Fe"


@pytest.mark.asyncio
async def test_link_for_default_tenant(resolver):
    link = await resolver.link_for("default", "abc_-123")

    assert link == "http://localhost/invitations/accept?code=abc_-123"
