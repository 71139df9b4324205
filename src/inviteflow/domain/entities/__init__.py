"""Domain entities for InviteFlow.

Entities are pure Python dataclasses that represent core business concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from inviteflow.domain.entities.expiring_code import (
    ExpiringCode,
    ExpiringCodeIntent,
    flatten_payload,
    parse_payload,
)
from inviteflow.domain.entities.invitation import (
    ERROR_CODE_UNAVAILABLE,
    ERROR_EMAIL_DOMAIN_NOT_ALLOWED,
    ERROR_EMAIL_INVALID,
    ERROR_USER_AMBIGUOUS,
    ERROR_USER_CONFLICT,
    AcceptancePayload,
    InvitationOutcome,
    InvitationResult,
)
from inviteflow.domain.entities.tenant import Tenant
from inviteflow.domain.entities.user import ORIGIN_LOCAL, DirectoryUser

__all__ = [
    "AcceptancePayload",
    "DirectoryUser",
    "ERROR_CODE_UNAVAILABLE",
    "ERROR_EMAIL_DOMAIN_NOT_ALLOWED",
    "ERROR_EMAIL_INVALID",
    "ERROR_USER_AMBIGUOUS",
    "ERROR_USER_CONFLICT",
    "ExpiringCode",
    "ExpiringCodeIntent",
    "InvitationOutcome",
    "InvitationResult",
    "ORIGIN_LOCAL",
    "Tenant",
    "flatten_payload",
    "parse_payload",
]
