"""Tenant entity for multi-tenant isolation.

Tenants are isolated namespaces of users, configuration, and addressing.
Each tenant other than the default one is reachable under its own subdomain.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class Tenant:
    """Tenant entity.

    Attributes:
        id: Unique tenant identifier.
        subdomain: Host label the tenant is served under, used verbatim.
            Empty for the default tenant.
        name: Display name.
        allowed_email_domains: Domains invitations may be sent to. Empty
            means no restriction.
        created_at: Timestamp when the tenant was created.
    """

    id: str
    subdomain: str
    name: str
    allowed_email_domains: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        """Validate tenant data after initialization."""
        if not self.id:
            raise ValueError("Tenant ID is required")
        if not self.name:
            raise ValueError("Name is required")

    def is_email_domain_allowed(self, email: str) -> bool:
        """Check an address's domain against the tenant allow-list."""
        if not self.allowed_email_domains:
            return True
        domain = email.rsplit("@", 1)[-1].lower()
        return domain in {d.lower() for d in self.allowed_email_domains}
