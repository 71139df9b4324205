"""Repository for expiring code operations.

Every write here is a single conditional statement so that concurrent
callers are arbitrated by the database: colliding inserts are rejected by
the (code, tenant_id) primary key, and of several racing consumers only
one gets a row back from the delete.
"""

from datetime import datetime, timezone

from sqlalchemy import and_, delete, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from inviteflow.domain.entities.expiring_code import ExpiringCode, ExpiringCodeIntent
from inviteflow.infrastructure.persistence.models import ExpiringCodeModel

_COLUMNS = (
    ExpiringCodeModel.code,
    ExpiringCodeModel.tenant_id,
    ExpiringCodeModel.intent,
    ExpiringCodeModel.data,
    ExpiringCodeModel.expires_at,
    ExpiringCodeModel.created_at,
)


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes; everything is stored in UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class ExpiringCodeRepository:
    """Repository for expiring code database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    @staticmethod
    def _to_entity(row) -> ExpiringCode:
        """Convert a result row or model into a domain entity."""
        return ExpiringCode(
            code=row.code,
            tenant_id=row.tenant_id,
            intent=ExpiringCodeIntent(row.intent),
            data=row.data,
            expires_at=_as_utc(row.expires_at),
            created_at=_as_utc(row.created_at),
        )

    def _dialect_insert(self):
        """Pick an INSERT construct that supports ON CONFLICT for this backend."""
        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            from sqlalchemy.dialects.postgresql import insert as pg_insert

            return pg_insert
        if dialect == "sqlite":
            from sqlalchemy.dialects.sqlite import insert as sqlite_insert

            return sqlite_insert
        return None

    async def insert_if_absent(self, entity: ExpiringCode) -> bool:
        """Insert a code unless (code, tenant_id) is already taken.

        Args:
            entity: The code to store.

        Returns:
            True if the row was inserted, False on a key conflict.
        """
        values = {
            "code": entity.code,
            "tenant_id": entity.tenant_id,
            "intent": entity.intent.value,
            "data": entity.data,
            "expires_at": entity.expires_at,
            "created_at": entity.created_at,
        }

        dialect_insert = self._dialect_insert()
        if dialect_insert is not None:
            stmt = (
                dialect_insert(ExpiringCodeModel)
                .values(**values)
                .on_conflict_do_nothing(index_elements=["code", "tenant_id"])
                .returning(ExpiringCodeModel.code)
            )
            result = await self.session.execute(stmt)
            return result.scalar_one_or_none() is not None

        # Backends without ON CONFLICT: let the primary key reject the row
        # inside a savepoint so the outer transaction survives
        try:
            async with self.session.begin_nested():
                await self.session.execute(insert(ExpiringCodeModel).values(**values))
        except IntegrityError:
            return False
        return True

    async def get(self, code: str, tenant_id: str) -> ExpiringCode | None:
        """Get a code regardless of expiry.

        Args:
            code: The code string.
            tenant_id: Tenant the code must belong to.

        Returns:
            The code if a row exists for this tenant, None otherwise.
        """
        result = await self.session.execute(
            select(*_COLUMNS).where(
                and_(
                    ExpiringCodeModel.code == code,
                    ExpiringCodeModel.tenant_id == tenant_id,
                )
            )
        )
        row = result.one_or_none()
        return self._to_entity(row) if row else None

    async def get_unexpired(
        self, code: str, tenant_id: str, now: datetime
    ) -> ExpiringCode | None:
        """Get a code only if it is still valid at ``now``."""
        result = await self.session.execute(
            select(*_COLUMNS).where(
                and_(
                    ExpiringCodeModel.code == code,
                    ExpiringCodeModel.tenant_id == tenant_id,
                    ExpiringCodeModel.expires_at >= now,
                )
            )
        )
        row = result.one_or_none()
        return self._to_entity(row) if row else None

    async def consume(
        self,
        code: str,
        tenant_id: str,
        now: datetime,
        intent: ExpiringCodeIntent | None = None,
    ) -> ExpiringCode | None:
        """Delete a valid code and return what was deleted.

        The match on tenant, intent and expiry is part of the DELETE itself,
        so at most one caller ever receives the row.

        Args:
            code: The code string.
            tenant_id: Tenant the code must belong to.
            now: Reference instant for the expiry check.
            intent: If given, only a code with this intent is consumed.

        Returns:
            The consumed code, or None if nothing matched.
        """
        conditions = [
            ExpiringCodeModel.code == code,
            ExpiringCodeModel.tenant_id == tenant_id,
            ExpiringCodeModel.expires_at >= now,
        ]
        if intent is not None:
            conditions.append(ExpiringCodeModel.intent == intent.value)

        stmt = (
            delete(ExpiringCodeModel)
            .where(and_(*conditions))
            .returning(*_COLUMNS)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        row = result.one_or_none()
        return self._to_entity(row) if row else None

    async def delete(self, code: str, tenant_id: str) -> int:
        """Delete a code unconditionally.

        Returns:
            Number of rows deleted.
        """
        result = await self.session.execute(
            delete(ExpiringCodeModel)
            .where(
                and_(
                    ExpiringCodeModel.code == code,
                    ExpiringCodeModel.tenant_id == tenant_id,
                )
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def delete_by_intent(self, intent: ExpiringCodeIntent, tenant_id: str) -> int:
        """Delete every code of one intent within a tenant.

        Returns:
            Number of rows deleted.
        """
        result = await self.session.execute(
            delete(ExpiringCodeModel)
            .where(
                and_(
                    ExpiringCodeModel.intent == intent.value,
                    ExpiringCodeModel.tenant_id == tenant_id,
                )
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def delete_expired(self, now: datetime) -> int:
        """Delete all codes that expired before ``now``.

        Returns:
            Number of rows deleted.
        """
        result = await self.session.execute(
            delete(ExpiringCodeModel)
            .where(ExpiringCodeModel.expires_at < now)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
