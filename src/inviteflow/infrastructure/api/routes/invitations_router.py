"""Invitation API routes.

Provides endpoints for inviting a batch of users and for accepting an
invitation link.
"""

from dataclasses import asdict

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from inviteflow.core.logging import get_logger
from inviteflow.domain.services import (
    InvalidInvitationError,
    TenantAddressError,
    TenantNotFoundError,
)
from inviteflow.infrastructure.api.dependencies import InvitationServiceDep, TenantId
from inviteflow.infrastructure.api.schemas import (
    InvitationAcceptResponse,
    InvitationOutcomeResponse,
    InviteUsersRequest,
    InviteUsersResponse,
)

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/invite_users",
    status_code=status.HTTP_200_OK,
    response_model=InviteUsersResponse,
    responses={
        404: {"description": "Tenant not found"},
        409: {"description": "Tenant has no usable address"},
    },
)
async def invite_users(
    request: InviteUsersRequest,
    tenant_id: TenantId,
    service: InvitationServiceDep,
    client_id: str = Query(..., description="Client the invitations are sent for"),
    redirect_uri: str = Query("", description="Where to send users after they accept"),
) -> InviteUsersResponse | JSONResponse:
    """Invite a batch of users into the current tenant.

    Every address gets an outcome. Malformed, disallowed and ambiguous
    addresses are listed under failed_invites; the request itself succeeds.
    """
    try:
        result = await service.invite(request.emails, tenant_id, client_id, redirect_uri)
    except TenantNotFoundError as e:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": "Not found", "message": e.message},
        )
    except TenantAddressError as e:
        logger.error("Invitation failed: tenant has no address", tenant_id=tenant_id)
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"error": "Conflict", "message": e.message},
        )

    return InviteUsersResponse(
        new_invites=[InvitationOutcomeResponse(**asdict(o)) for o in result.new_invites],
        failed_invites=[
            InvitationOutcomeResponse(**asdict(o)) for o in result.failed_invites
        ],
    )


@router.get(
    "/invitations/accept",
    status_code=status.HTTP_200_OK,
    response_model=InvitationAcceptResponse,
    responses={404: {"description": "Invalid or expired invitation"}},
)
async def accept_invitation(
    tenant_id: TenantId,
    service: InvitationServiceDep,
    code: str = Query(..., description="Code from the invitation link"),
) -> InvitationAcceptResponse | JSONResponse:
    """Accept an invitation.

    The response does not reveal whether a rejected code never existed,
    expired, or was already used.
    """
    try:
        payload = await service.accept(code, tenant_id)
    except InvalidInvitationError as e:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": "Not found", "message": e.message},
        )

    return InvitationAcceptResponse(**asdict(payload))
