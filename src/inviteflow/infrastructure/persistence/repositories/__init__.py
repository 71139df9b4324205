"""Persistence repositories for database operations."""

from inviteflow.infrastructure.persistence.repositories.expiring_code_repository import (
    ExpiringCodeRepository,
)
from inviteflow.infrastructure.persistence.repositories.tenant_repository import (
    TenantRepository,
)
from inviteflow.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = [
    "ExpiringCodeRepository",
    "TenantRepository",
    "UserRepository",
]
