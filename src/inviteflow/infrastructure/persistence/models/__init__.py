"""SQLAlchemy models for InviteFlow tables.

All models inherit from the Base class defined in database.py and are
automatically created on application startup in development mode.
"""

from inviteflow.infrastructure.persistence.models.expiring_code import ExpiringCodeModel
from inviteflow.infrastructure.persistence.models.tenant import TenantModel
from inviteflow.infrastructure.persistence.models.user import UserModel

__all__ = [
    "ExpiringCodeModel",
    "TenantModel",
    "UserModel",
]
