"""Tenant address resolution.

Maps a tenant to the externally reachable base URL its users should be sent
to. The default tenant lives at the configured external URL; every other
tenant lives under its own subdomain of that host.
"""

from urllib.parse import quote, urlsplit, urlunsplit

from inviteflow.infrastructure.persistence.repositories.tenant_repository import (
    TenantRepository,
)

ACCEPT_PATH = "/invitations/accept"


class TenantNotFoundError(Exception):
    """Raised when a tenant ID does not match any tenant."""

    def __init__(self, tenant_id: str) -> None:
        self.tenant_id = tenant_id
        self.message = f"Tenant '{tenant_id}' not found"
        super().__init__(self.message)


class TenantAddressError(Exception):
    """Raised when a tenant has no usable address."""

    def __init__(self, tenant_id: str, message: str) -> None:
        self.tenant_id = tenant_id
        self.message = message
        super().__init__(message)


class TenantAddressResolver:
    """Resolves tenant base URLs and invitation links."""

    def __init__(
        self,
        tenant_repo: TenantRepository,
        external_url: str,
        default_tenant_id: str,
    ) -> None:
        """Initialize the resolver.

        Args:
            tenant_repo: Repository for tenant lookups.
            external_url: Public root URL of the default tenant.
            default_tenant_id: ID of the tenant served at the root URL.
        """
        self.tenant_repo = tenant_repo
        self.external_url = external_url.rstrip("/")
        self.default_tenant_id = default_tenant_id

    async def base_url_for(self, tenant_id: str) -> str:
        """Get the externally reachable base URL for a tenant.

        Args:
            tenant_id: Tenant ID.

        Returns:
            Base URL without a trailing slash.

        Raises:
            TenantNotFoundError: If the tenant does not exist.
            TenantAddressError: If a non-default tenant has no subdomain.
        """
        if tenant_id == self.default_tenant_id:
            return self.external_url

        tenant = await self.tenant_repo.get_by_id(tenant_id)
        if tenant is None:
            raise TenantNotFoundError(tenant_id)
        if not tenant.subdomain:
            raise TenantAddressError(
                tenant_id, f"Tenant '{tenant_id}' has no subdomain configured"
            )

        parts = urlsplit(self.external_url)
        netloc = f"{tenant.subdomain}.{parts.netloc}"
        return urlunsplit((parts.scheme, netloc, parts.path, "", "")).rstrip("/")

    async def link_for(self, tenant_id: str, code: str) -> str:
        """Build the invitation acceptance link for a code.

        Raises:
            TenantNotFoundError: If the tenant does not exist.
            TenantAddressError: If a non-default tenant has no subdomain.
        """
        return self.link_from_base(await self.base_url_for(tenant_id), code)

    @staticmethod
    def link_from_base(base_url: str, code: str) -> str:
        """Build an acceptance link against an already resolved base URL.

        The code is fully percent-encoded so nothing in it can be read as a
        separate query parameter.
        """
        return f"{base_url}{ACCEPT_PATH}?code={quote(code, safe='')}"
