"""SQLAlchemy model for the expiring_codes table.

Codes are partitioned per tenant: the primary key is (code, tenant_id), so
two tenants may hold the same code string without colliding.
"""

from datetime import datetime

from sqlalchemy import DateTime, Index, PrimaryKeyConstraint, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from inviteflow.infrastructure.persistence.database import Base


class ExpiringCodeModel(Base):
    """SQLAlchemy model for the expiring_codes table.

    Attributes:
        code: Opaque random token.
        tenant_id: Tenant the code was issued under.
        intent: Purpose tag (ExpiringCodeIntent name).
        data: Serialized payload, a flat JSON object of strings.
        expires_at: Timestamp after which the code is invalid.
        created_at: Timestamp when the code was issued.
    """

    __tablename__ = "expiring_codes"

    code: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Opaque random token",
    )
    tenant_id: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        comment="Owning tenant",
    )
    intent: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="Purpose the code was issued for",
    )
    data: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Serialized payload (flat JSON object)",
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
        comment="Timestamp when the code expires",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        comment="Timestamp when the code was issued",
    )

    __table_args__ = (
        PrimaryKeyConstraint("code", "tenant_id", name="pk_expiring_codes"),
        Index("ix_expiring_codes_tenant_intent", "tenant_id", "intent"),
    )

    def __repr__(self) -> str:
        return f"<ExpiringCode(tenant_id={self.tenant_id}, intent={self.intent})>"
