"""InviteFlow - multi-tenant invitations over single-use expiring codes.

Issues unguessable, tenant-scoped codes with an expiry and an intent, and
turns them into invitation links that can be redeemed exactly once.
"""

__version__ = "0.1.0"

from inviteflow.infrastructure.api.app import app

__all__ = ["app", "__version__"]
