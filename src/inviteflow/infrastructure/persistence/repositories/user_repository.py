"""User directory repository for database operations."""

import uuid
from datetime import timezone

from sqlalchemy import and_, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from inviteflow.domain.entities.user import ORIGIN_LOCAL, DirectoryUser
from inviteflow.infrastructure.persistence.models import UserModel


class UserRepository:
    """Repository for user directory operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    @staticmethod
    def _to_entity(model: UserModel) -> DirectoryUser:
        created_at = model.created_at
        if created_at is not None and created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return DirectoryUser(
            id=model.id,
            tenant_id=model.tenant_id,
            username=model.username,
            email=model.email,
            origin=model.origin,
            verified=model.verified,
            active=model.active,
            created_at=created_at,
        )

    async def create(self, user: DirectoryUser) -> DirectoryUser:
        """Create a new user.

        Args:
            user: User entity to store.

        Returns:
            The stored user.
        """
        model = UserModel(
            id=user.id,
            tenant_id=user.tenant_id,
            username=user.username,
            email=user.email,
            origin=user.origin,
            verified=user.verified,
            active=user.active,
        )
        self.session.add(model)
        await self.session.flush()
        await self.session.refresh(model)
        return self._to_entity(model)

    async def create_pending(
        self, email: str, tenant_id: str, origin: str = ORIGIN_LOCAL
    ) -> DirectoryUser:
        """Create an unverified account for an invited address.

        The username is the email address. The insert runs in a savepoint, so
        a clash with an existing username leaves the surrounding transaction
        usable.

        Args:
            email: Address being invited.
            tenant_id: Tenant the account belongs to.
            origin: Identity source for the new account.

        Returns:
            The created user.

        Raises:
            IntegrityError: If another account in the tenant already has this
                address as its username for the same origin.
        """
        async with self.session.begin_nested():
            return await self.create(
                DirectoryUser(
                    id=str(uuid.uuid4()),
                    tenant_id=tenant_id,
                    username=email,
                    email=email,
                    origin=origin,
                    verified=False,
                )
            )

    async def find_by_email(self, email: str, tenant_id: str) -> list[DirectoryUser]:
        """Find all accounts in a tenant with this email.

        Matching is case-insensitive.

        Args:
            email: Email address to look up.
            tenant_id: Tenant to search within.

        Returns:
            Matching users, oldest first.
        """
        result = await self.session.execute(
            select(UserModel)
            .where(
                and_(
                    func.lower(UserModel.email) == email.lower(),
                    UserModel.tenant_id == tenant_id,
                )
            )
            .order_by(UserModel.created_at, UserModel.id)
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def get_by_id(self, user_id: str, tenant_id: str) -> DirectoryUser | None:
        """Get a user by ID within a tenant."""
        result = await self.session.execute(
            select(UserModel).where(
                and_(UserModel.id == user_id, UserModel.tenant_id == tenant_id)
            )
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def mark_verified(self, user_id: str, tenant_id: str) -> bool:
        """Mark a user as having completed account setup.

        Returns:
            True if the user was updated, False if not found.
        """
        result = await self.session.execute(
            update(UserModel)
            .where(and_(UserModel.id == user_id, UserModel.tenant_id == tenant_id))
            .values(verified=True)
        )
        return result.rowcount > 0
