"""Pydantic schemas for invitation API endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class InviteUsersRequest(BaseModel):
    """Request schema for inviting a batch of users.

    Addresses are validated one by one by the service so that a malformed
    address is reported in the result instead of rejecting the request.
    """

    emails: list[str] = Field(..., description="Email addresses to invite")


class InvitationOutcomeResponse(BaseModel):
    """Response schema for the outcome of inviting one address."""

    email: str = Field(..., description="Address as submitted")
    user_id: str | None = Field(None, description="ID of the invited user")
    origin: str | None = Field(None, description="Identity source of the invited user")
    invite_link: str | None = Field(None, description="Link the user follows to accept")
    error_code: str | None = Field(None, description="Machine-readable failure code")
    error_message: str | None = Field(None, description="Human-readable failure message")

    model_config = ConfigDict(from_attributes=True)


class InviteUsersResponse(BaseModel):
    """Response schema for a batch of invitations."""

    new_invites: list[InvitationOutcomeResponse] = Field(
        ..., description="Successful invitations, in request order"
    )
    failed_invites: list[InvitationOutcomeResponse] = Field(
        ..., description="Failed invitations, in request order"
    )

    model_config = ConfigDict(from_attributes=True)


class InvitationAcceptResponse(BaseModel):
    """Response schema for an accepted invitation."""

    user_id: str = Field(..., description="ID of the invited user")
    email: str = Field(..., description="Invited address")
    origin: str = Field(..., description="Identity source of the user")
    client_id: str = Field(..., description="Client the invitation was sent for")
    redirect_uri: str = Field(..., description="Where to continue after setup")

    model_config = ConfigDict(from_attributes=True)
