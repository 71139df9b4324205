"""Tenant repository for database operations."""

from datetime import timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from inviteflow.domain.entities.tenant import Tenant
from inviteflow.infrastructure.persistence.models import TenantModel


class TenantRepository:
    """Repository for tenant database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    @staticmethod
    def _to_entity(model: TenantModel) -> Tenant:
        created_at = model.created_at
        if created_at is not None and created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return Tenant(
            id=model.id,
            subdomain=model.subdomain or "",
            name=model.name,
            allowed_email_domains=list(model.allowed_email_domains or []),
            created_at=created_at,
        )

    async def create(self, tenant: Tenant) -> Tenant:
        """Create a new tenant.

        Args:
            tenant: Tenant entity to store.

        Returns:
            The stored tenant.

        Raises:
            IntegrityError: If the ID or a non-empty subdomain is already taken.
        """
        model = TenantModel(
            id=tenant.id,
            subdomain=tenant.subdomain,
            name=tenant.name,
            allowed_email_domains=tenant.allowed_email_domains or None,
        )
        self.session.add(model)
        await self.session.flush()
        await self.session.refresh(model)
        return self._to_entity(model)

    async def get_by_id(self, tenant_id: str) -> Tenant | None:
        """Get a tenant by ID.

        Args:
            tenant_id: Tenant ID.

        Returns:
            Tenant if found, None otherwise.
        """
        result = await self.session.execute(
            select(TenantModel).where(TenantModel.id == tenant_id)
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_subdomain(self, subdomain: str) -> Tenant | None:
        """Get a tenant by its subdomain.

        Subdomains are matched exactly as stored; no case folding is applied.

        Args:
            subdomain: Host label.

        Returns:
            Tenant if found, None otherwise.
        """
        result = await self.session.execute(
            select(TenantModel).where(TenantModel.subdomain == subdomain)
        )
        model = result.scalars().first()
        return self._to_entity(model) if model else None

    async def list_all(self) -> list[Tenant]:
        """List all tenants ordered by ID."""
        result = await self.session.execute(select(TenantModel).order_by(TenantModel.id))
        return [self._to_entity(m) for m in result.scalars().all()]
