"""Directory user entity.

Users are scoped to tenants. The same email can belong to several accounts
within a tenant when they come from different origins.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

ORIGIN_LOCAL = "local"


@dataclass
class DirectoryUser:
    """User account as seen by the invitation pipeline.

    Attributes:
        id: Unique identifier (UUID string).
        tenant_id: Tenant the account belongs to.
        username: Login name, unique per (tenant, origin).
        email: Primary email address.
        origin: Identity source the account belongs to.
        verified: False until the account owner completes setup.
        active: Whether the account can log in.
        created_at: Timestamp when the account was created.
    """

    id: str
    tenant_id: str
    username: str
    email: str
    origin: str = ORIGIN_LOCAL
    verified: bool = False
    active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        """Validate user data after initialization."""
        if not self.id:
            raise ValueError("User ID is required")
        if not self.tenant_id:
            raise ValueError("Tenant ID is required")
        if not self.email:
            raise ValueError("Email is required")
