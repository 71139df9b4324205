"""Domain services for InviteFlow.

Services contain business logic that doesn't naturally fit within a single entity.
"""

from inviteflow.domain.services.code_generator import MIN_CODE_BYTES, CodeGenerator
from inviteflow.domain.services.expiring_code_store import (
    CodeExpiredError,
    CodeGenerationExhaustedError,
    CodeNotFoundError,
    ExpiringCodeError,
    ExpiringCodeStore,
    IntentMismatchError,
)
from inviteflow.domain.services.invitation_service import (
    INVALID_INVITATION_MESSAGE,
    InvalidInvitationError,
    InvitationService,
)
from inviteflow.domain.services.tenant_address_resolver import (
    ACCEPT_PATH,
    TenantAddressError,
    TenantAddressResolver,
    TenantNotFoundError,
)

__all__ = [
    "ACCEPT_PATH",
    "CodeExpiredError",
    "CodeGenerationExhaustedError",
    "CodeGenerator",
    "CodeNotFoundError",
    "ExpiringCodeError",
    "ExpiringCodeStore",
    "INVALID_INVITATION_MESSAGE",
    "IntentMismatchError",
    "InvalidInvitationError",
    "InvitationService",
    "MIN_CODE_BYTES",
    "TenantAddressError",
    "TenantAddressResolver",
    "TenantNotFoundError",
]
