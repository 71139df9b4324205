"""API Routes for InviteFlow."""

from inviteflow.infrastructure.api.routes.invitations_router import (
    router as invitations_router,
)

__all__ = [
    "invitations_router",
]
