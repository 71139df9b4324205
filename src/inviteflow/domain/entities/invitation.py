"""Invitation value objects.

These are built and discarded within a single request. Nothing here is
persisted; the durable part of an invitation is its expiring code.
"""

from dataclasses import dataclass, field

from inviteflow.domain.entities.expiring_code import flatten_payload, parse_payload

# Per-recipient failure codes reported back to the caller
ERROR_EMAIL_INVALID = "email.invalid"
ERROR_EMAIL_DOMAIN_NOT_ALLOWED = "email.domain.not.allowed"
ERROR_USER_AMBIGUOUS = "user.ambiguous"
ERROR_USER_CONFLICT = "user.conflict"
ERROR_CODE_UNAVAILABLE = "invitation.code.unavailable"


@dataclass
class InvitationOutcome:
    """Result of inviting one address.

    Exactly one of ``invite_link`` and ``error_code`` is set.
    """

    email: str
    user_id: str | None = None
    origin: str | None = None
    invite_link: str | None = None
    error_code: str | None = None
    error_message: str | None = None

    def __post_init__(self) -> None:
        if (self.invite_link is None) == (self.error_code is None):
            raise ValueError("Exactly one of invite_link and error_code must be set")

    @classmethod
    def success(cls, email: str, user_id: str, origin: str, invite_link: str) -> "InvitationOutcome":
        return cls(email=email, user_id=user_id, origin=origin, invite_link=invite_link)

    @classmethod
    def failure(
        cls,
        email: str,
        error_code: str,
        error_message: str,
        user_id: str | None = None,
        origin: str | None = None,
    ) -> "InvitationOutcome":
        return cls(
            email=email,
            user_id=user_id,
            origin=origin,
            error_code=error_code,
            error_message=error_message,
        )

    @property
    def succeeded(self) -> bool:
        return self.error_code is None


@dataclass
class InvitationResult:
    """Per-request result of an invite batch, each list in input order."""

    new_invites: list[InvitationOutcome] = field(default_factory=list)
    failed_invites: list[InvitationOutcome] = field(default_factory=list)

    @classmethod
    def from_outcomes(cls, outcomes: list[InvitationOutcome]) -> "InvitationResult":
        """Partition outcomes, keeping relative order within each list."""
        return cls(
            new_invites=[o for o in outcomes if o.succeeded],
            failed_invites=[o for o in outcomes if not o.succeeded],
        )


@dataclass(frozen=True)
class AcceptancePayload:
    """Data carried by an invitation code, needed to finish account setup."""

    user_id: str
    email: str
    origin: str
    client_id: str
    redirect_uri: str

    def to_data(self) -> str:
        """Flatten into the stored payload text."""
        return flatten_payload(
            {
                "user_id": self.user_id,
                "email": self.email,
                "origin": self.origin,
                "client_id": self.client_id,
                "redirect_uri": self.redirect_uri,
            }
        )

    @classmethod
    def from_data(cls, data: str) -> "AcceptancePayload":
        """Rebuild from stored payload text.

        Raises:
            ValueError: If the payload is not a JSON object.
        """
        values = parse_payload(data)
        return cls(
            user_id=values.get("user_id", ""),
            email=values.get("email", ""),
            origin=values.get("origin", ""),
            client_id=values.get("client_id", ""),
            redirect_uri=values.get("redirect_uri", ""),
        )
