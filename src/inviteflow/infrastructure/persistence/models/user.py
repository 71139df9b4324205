"""SQLAlchemy model for the users table.

Users belong to tenants and are uniquely identified by (tenant_id, username, origin).
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inviteflow.infrastructure.persistence.database import Base


class UserModel(Base):
    """SQLAlchemy model for the users table.

    The same email may appear on several rows of one tenant when the
    accounts come from different origins.

    Attributes:
        id: Primary key (UUID string).
        tenant_id: Foreign key to tenants table.
        username: Login name.
        email: Primary email address.
        origin: Identity source the account belongs to.
        verified: Whether the owner completed account setup.
        active: Whether the user can log in.
        created_at: Timestamp when the user was created.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="User ID (UUID)",
    )
    tenant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Foreign key to tenants table",
    )
    username: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Login name",
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Primary email address",
    )
    origin: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        default="local",
        comment="Identity source (local, ldap, saml, ...)",
    )
    verified: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Whether the owner completed account setup",
    )
    active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        comment="Whether the user can log in",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    tenant: Mapped["TenantModel"] = relationship(  # noqa: F821
        "TenantModel",
        back_populates="users",
    )

    __table_args__ = (
        UniqueConstraint("tenant_id", "username", "origin", name="uq_users_tenant_username_origin"),
        Index("ix_users_tenant_email", "tenant_id", "email"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, tenant_id={self.tenant_id})>"
