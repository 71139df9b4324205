"""SQLAlchemy model for the tenants table.

Tenants represent isolated namespaces in the multi-tenant system.
"""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Index, String, func, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inviteflow.infrastructure.persistence.database import Base


class TenantModel(Base):
    """SQLAlchemy model for the tenants table.

    Attributes:
        id: Primary key.
        subdomain: Host label the tenant is served under. Empty for the default tenant.
        name: Display name for the tenant.
        allowed_email_domains: Optional invitation allow-list.
        created_at: Timestamp when the tenant was created.
    """

    __tablename__ = "tenants"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Tenant ID",
    )
    subdomain: Mapped[str] = mapped_column(
        String(63),
        nullable=False,
        default="",
        comment="Host label, stored verbatim",
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name for the tenant",
    )
    allowed_email_domains: Mapped[list[str] | None] = mapped_column(
        JSON,
        nullable=True,
        comment="Email domains invitations are restricted to",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    users: Mapped[list["UserModel"]] = relationship(  # noqa: F821
        "UserModel",
        back_populates="tenant",
        cascade="all, delete-orphan",
    )

    # A host label routes to at most one tenant; empty labels may repeat
    __table_args__ = (
        Index(
            "uq_tenants_subdomain",
            "subdomain",
            unique=True,
            sqlite_where=text("subdomain <> ''"),
            postgresql_where=text("subdomain <> ''"),
        ),
    )

    def __repr__(self) -> str:
        return f"<Tenant(id={self.id}, subdomain={self.subdomain})>"
