"""Pydantic schemas for API request/response validation."""

from inviteflow.infrastructure.api.schemas.invitation_schemas import (
    InvitationAcceptResponse,
    InvitationOutcomeResponse,
    InviteUsersRequest,
    InviteUsersResponse,
)

__all__ = [
    "InvitationAcceptResponse",
    "InvitationOutcomeResponse",
    "InviteUsersRequest",
    "InviteUsersResponse",
]
