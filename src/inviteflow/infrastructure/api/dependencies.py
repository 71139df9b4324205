"""FastAPI dependencies for tenant resolution and service wiring.

The tenant is resolved once per request and handed to services as an
explicit argument.
"""

from typing import Annotated
from urllib.parse import urlsplit

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from inviteflow.core.config import get_settings
from inviteflow.core.logging import get_logger
from inviteflow.domain.services import (
    CodeGenerator,
    ExpiringCodeStore,
    InvitationService,
    TenantAddressResolver,
)
from inviteflow.infrastructure.persistence.database import get_db_session
from inviteflow.infrastructure.persistence.repositories import (
    ExpiringCodeRepository,
    TenantRepository,
    UserRepository,
)

logger = get_logger(__name__)


def subdomain_from_host(host: str | None, external_url: str) -> str | None:
    """Extract the tenant label from a Host header.

    Args:
        host: Host header value, possibly with a port.
        external_url: Public root URL of the default tenant.

    Returns:
        The part of the host in front of the external host name, or None if
        the host is the external host itself or unrelated to it.
    """
    if not host:
        return None
    hostname = host.rsplit(":", 1)[0] if not host.endswith("]") else host
    root = urlsplit(external_url).hostname or ""
    suffix = f".{root}"
    if root and hostname.lower().endswith(suffix.lower()) and len(hostname) > len(suffix):
        return hostname[: -len(suffix)]
    return None


async def get_tenant_id(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    x_tenant_id: Annotated[str | None, Header()] = None,
    x_tenant_subdomain: Annotated[str | None, Header()] = None,
    host: Annotated[str | None, Header()] = None,
) -> str:
    """Resolve the tenant a request is made under.

    Checked in order: the X-Tenant-Id header, the X-Tenant-Subdomain header,
    the subdomain of the Host header. Falls back to the default tenant.

    Raises:
        HTTPException: 404 if a tenant was named but does not exist.
    """
    settings = get_settings()
    tenant_repo = TenantRepository(session)

    if x_tenant_id:
        tenant = await tenant_repo.get_by_id(x_tenant_id)
        if tenant is None:
            logger.info("Tenant resolution failed: unknown tenant ID", tenant_id=x_tenant_id)
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Tenant not found",
            )
        return tenant.id

    subdomain = x_tenant_subdomain or subdomain_from_host(host, settings.external_url)
    if subdomain:
        tenant = await tenant_repo.get_by_subdomain(subdomain)
        if tenant is None:
            logger.info("Tenant resolution failed: unknown subdomain", subdomain=subdomain)
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Tenant not found",
            )
        return tenant.id

    return settings.default_tenant_id


def get_invitation_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> InvitationService:
    """Build an invitation service bound to the request session."""
    settings = get_settings()
    tenant_repo = TenantRepository(session)
    code_store = ExpiringCodeStore(
        ExpiringCodeRepository(session),
        CodeGenerator(settings.code_length_bytes),
        settings.code_generation_max_attempts,
    )
    resolver = TenantAddressResolver(
        tenant_repo,
        settings.external_url,
        settings.default_tenant_id,
    )
    return InvitationService(
        session=session,
        code_store=code_store,
        resolver=resolver,
        user_repo=UserRepository(session),
        tenant_repo=tenant_repo,
        expire_days=settings.invitation_expire_days,
    )


# Type aliases for dependency injection
TenantId = Annotated[str, Depends(get_tenant_id)]
InvitationServiceDep = Annotated[InvitationService, Depends(get_invitation_service)]
