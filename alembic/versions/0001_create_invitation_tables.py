"""create_invitation_tables

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "tenants",
        sa.Column("id", sa.String(length=36), nullable=False, comment="Tenant ID"),
        sa.Column(
            "subdomain",
            sa.String(length=63),
            nullable=False,
            server_default="",
            comment="Host label, stored verbatim",
        ),
        sa.Column("name", sa.String(length=255), nullable=False, comment="Display name for the tenant"),
        sa.Column(
            "allowed_email_domains",
            sa.JSON(),
            nullable=True,
            comment="Email domains invitations are restricted to",
        ),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("tenants", schema=None) as batch_op:
        batch_op.create_index(
            "uq_tenants_subdomain",
            ["subdomain"],
            unique=True,
            sqlite_where=sa.text("subdomain <> ''"),
            postgresql_where=sa.text("subdomain <> ''"),
        )

    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), nullable=False, comment="User ID (UUID)"),
        sa.Column(
            "tenant_id",
            sa.String(length=36),
            nullable=False,
            comment="Foreign key to tenants table",
        ),
        sa.Column("username", sa.String(length=255), nullable=False, comment="Login name"),
        sa.Column("email", sa.String(length=255), nullable=False, comment="Primary email address"),
        sa.Column(
            "origin",
            sa.String(length=64),
            nullable=False,
            server_default="local",
            comment="Identity source (local, ldap, saml, ...)",
        ),
        sa.Column(
            "verified",
            sa.Boolean(),
            nullable=False,
            server_default="0",
            comment="Whether the owner completed account setup",
        ),
        sa.Column(
            "active",
            sa.Boolean(),
            nullable=False,
            server_default="1",
            comment="Whether the user can log in",
        ),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "tenant_id", "username", "origin", name="uq_users_tenant_username_origin"
        ),
    )
    with op.batch_alter_table("users", schema=None) as batch_op:
        batch_op.create_index("ix_users_tenant_id", ["tenant_id"], unique=False)
        batch_op.create_index("ix_users_tenant_email", ["tenant_id", "email"], unique=False)

    op.create_table(
        "expiring_codes",
        sa.Column("code", sa.String(length=255), nullable=False, comment="Opaque random token"),
        sa.Column("tenant_id", sa.String(length=36), nullable=False, comment="Owning tenant"),
        sa.Column(
            "intent",
            sa.String(length=64),
            nullable=False,
            comment="Purpose the code was issued for",
        ),
        sa.Column(
            "data",
            sa.Text(),
            nullable=False,
            comment="Serialized payload (flat JSON object)",
        ),
        sa.Column(
            "expires_at",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="Timestamp when the code expires",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
            comment="Timestamp when the code was issued",
        ),
        sa.PrimaryKeyConstraint("code", "tenant_id", name="pk_expiring_codes"),
    )
    with op.batch_alter_table("expiring_codes", schema=None) as batch_op:
        batch_op.create_index("ix_expiring_codes_expires_at", ["expires_at"], unique=False)
        batch_op.create_index(
            "ix_expiring_codes_tenant_intent", ["tenant_id", "intent"], unique=False
        )


def downgrade() -> None:
    """Downgrade schema."""
    with op.batch_alter_table("expiring_codes", schema=None) as batch_op:
        batch_op.drop_index("ix_expiring_codes_tenant_intent")
        batch_op.drop_index("ix_expiring_codes_expires_at")
    op.drop_table("expiring_codes")

    with op.batch_alter_table("users", schema=None) as batch_op:
        batch_op.drop_index("ix_users_tenant_email")
        batch_op.drop_index("ix_users_tenant_id")
    op.drop_table("users")

    with op.batch_alter_table("tenants", schema=None) as batch_op:
        batch_op.drop_index("uq_tenants_subdomain")
    op.drop_table("tenants")
