"""Expiring code entity.

An expiring code is a single-use, time-bounded opaque token bound to a
tenant and an intent. The payload travels with the code as a flat JSON
object of strings and is interpreted only by whoever redeems it.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Mapping


class ExpiringCodeIntent(str, Enum):
    """Declared purpose of a code, checked at redemption."""

    INVITATION = "INVITATION"
    PASSWORD_RESET = "PASSWORD_RESET"
    REGISTRATION = "REGISTRATION"
    EMAIL_VERIFICATION = "EMAIL_VERIFICATION"
    AUTOLOGIN = "AUTOLOGIN"


@dataclass
class ExpiringCode:
    """Expiring code entity.

    Attributes:
        code: Opaque random token, unique within its tenant.
        tenant_id: Tenant the code was issued under.
        intent: Purpose the code was issued for.
        data: Serialized payload (flat JSON object of strings).
        expires_at: Instant after which the code is no longer valid.
        created_at: When the code was issued.
    """

    code: str
    tenant_id: str
    intent: ExpiringCodeIntent
    data: str
    expires_at: datetime
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        """Validate code data after initialization."""
        if not self.code:
            raise ValueError("Code is required")
        if not self.tenant_id:
            raise ValueError("Tenant ID is required")
        if self.expires_at is None:
            raise ValueError("Expiry is required")

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check if the code is past its expiry.

        A code is still valid at exactly ``expires_at``.
        """
        now = now or datetime.now(timezone.utc)
        return now > self.expires_at

    @property
    def payload(self) -> dict[str, str]:
        """Decode the stored payload."""
        return parse_payload(self.data)


def flatten_payload(payload: Mapping[str, object]) -> str:
    """Serialize a payload mapping to the stored text form.

    Values are coerced to strings; nested structures are not allowed.

    Raises:
        ValueError: If a value is a mapping or a list.
    """
    flat: dict[str, str] = {}
    for key, value in payload.items():
        if isinstance(value, (Mapping, list, tuple, set)):
            raise ValueError(f"Payload value for {key!r} must be a scalar")
        flat[str(key)] = "" if value is None else str(value)
    return json.dumps(flat, sort_keys=True)


def parse_payload(data: str) -> dict[str, str]:
    """Decode stored payload text back into a string map.

    Raises:
        ValueError: If the text is not a JSON object.
    """
    decoded = json.loads(data)
    if not isinstance(decoded, dict):
        raise ValueError("Payload must be a JSON object")
    return {str(k): str(v) for k, v in decoded.items()}
