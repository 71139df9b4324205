"""Service for invitation logic.

Turns a batch of email addresses into invitation links for one tenant, and
redeems those links when the invited user follows one. Problems with a
single address are reported in the result and never abort the batch.
"""

from datetime import datetime, timedelta, timezone

from email_validator import EmailNotValidError, validate_email
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from inviteflow.core.logging import get_logger
from inviteflow.domain.entities.expiring_code import ExpiringCodeIntent
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
from inviteflow.domain.entities.user import ORIGIN_LOCAL
from inviteflow.domain.services.expiring_code_store import (
    CodeGenerationExhaustedError,
    CodeNotFoundError,
    ExpiringCodeStore,
    IntentMismatchError,
)
from inviteflow.domain.services.tenant_address_resolver import TenantAddressResolver
from inviteflow.infrastructure.persistence.repositories.tenant_repository import (
    TenantRepository,
)
from inviteflow.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

logger = get_logger(__name__)

INVALID_INVITATION_MESSAGE = "Invalid or expired invitation"


class InvalidInvitationError(Exception):
    """Raised when an invitation code cannot be accepted.

    Deliberately does not say whether the code never existed, expired, or
    was already used.
    """

    def __init__(self) -> None:
        self.message = INVALID_INVITATION_MESSAGE
        super().__init__(self.message)


class InvitationService:
    """Service for issuing and accepting invitations."""

    def __init__(
        self,
        session: AsyncSession,
        code_store: ExpiringCodeStore,
        resolver: TenantAddressResolver,
        user_repo: UserRepository,
        tenant_repo: TenantRepository,
        expire_days: int = 7,
    ) -> None:
        """Initialize the invitation service.

        Args:
            session: SQLAlchemy async session, committed once per call.
            code_store: Store for invitation codes.
            resolver: Resolves tenant base URLs for links.
            user_repo: Repository for the user directory.
            tenant_repo: Repository for tenant configuration.
            expire_days: How long an invitation stays valid.
        """
        self.session = session
        self.code_store = code_store
        self.resolver = resolver
        self.user_repo = user_repo
        self.tenant_repo = tenant_repo
        self.expire_days = expire_days

    async def invite(
        self,
        emails: list[str],
        tenant_id: str,
        client_id: str,
        redirect_uri: str,
    ) -> InvitationResult:
        """Invite a batch of addresses into a tenant.

        Args:
            emails: Addresses to invite, in the order results are reported.
            tenant_id: Tenant the invitations are for.
            client_id: Client the invitations were sent on behalf of.
            redirect_uri: Where to send users after they accept.

        Returns:
            Successful and failed outcomes, each in input order.

        Raises:
            TenantNotFoundError: If the tenant does not exist.
            TenantAddressError: If the tenant has no usable address.
            SQLAlchemyError: If persistence fails. Nothing is committed.
        """
        base_url = await self.resolver.base_url_for(tenant_id)
        tenant = await self.tenant_repo.get_by_id(tenant_id)
        expires_at = datetime.now(timezone.utc) + timedelta(days=self.expire_days)

        outcomes: list[InvitationOutcome | None] = [None] * len(emails)
        try:
            for index, email in enumerate(emails):
                outcomes[index] = await self._invite_one(
                    email, tenant, tenant_id, base_url, client_id, redirect_uri, expires_at
                )
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            logger.error(
                "Invitation batch failed, rolled back",
                tenant_id=tenant_id,
                batch_size=len(emails),
            )
            raise

        result = InvitationResult.from_outcomes(outcomes)
        logger.info(
            "Invitations processed",
            tenant_id=tenant_id,
            client_id=client_id,
            invited=len(result.new_invites),
            failed=len(result.failed_invites),
        )
        return result

    async def _invite_one(
        self,
        email: str,
        tenant: Tenant | None,
        tenant_id: str,
        base_url: str,
        client_id: str,
        redirect_uri: str,
        expires_at: datetime,
    ) -> InvitationOutcome:
        """Process a single address. Per-address problems become failures."""
        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError:
            return InvitationOutcome.failure(
                email, ERROR_EMAIL_INVALID, f"{email} is invalid email."
            )

        if tenant is not None and not tenant.is_email_domain_allowed(email):
            return InvitationOutcome.failure(
                email,
                ERROR_EMAIL_DOMAIN_NOT_ALLOWED,
                f"{email} is not in an allowed email domain.",
            )

        users = await self.user_repo.find_by_email(email, tenant_id)
        if len(users) > 1:
            logger.info(
                "Invitation skipped, address matches several accounts",
                tenant_id=tenant_id,
                matches=len(users),
            )
            return InvitationOutcome.failure(
                email,
                ERROR_USER_AMBIGUOUS,
                f"{email} matches more than one existing user.",
            )
        if users:
            user = users[0]
        else:
            try:
                user = await self.user_repo.create_pending(email, tenant_id, ORIGIN_LOCAL)
            except IntegrityError:
                logger.info(
                    "Invitation skipped, address is another account's username",
                    tenant_id=tenant_id,
                )
                return InvitationOutcome.failure(
                    email,
                    ERROR_USER_CONFLICT,
                    f"{email} is already the username of another user.",
                )

        payload = AcceptancePayload(
            user_id=user.id,
            email=email,
            origin=user.origin,
            client_id=client_id,
            redirect_uri=redirect_uri,
        )
        try:
            code = await self.code_store.generate(
                ExpiringCodeIntent.INVITATION,
                payload.to_data(),
                expires_at,
                tenant_id,
            )
        except CodeGenerationExhaustedError:
            return InvitationOutcome.failure(
                email,
                ERROR_CODE_UNAVAILABLE,
                "Unable to generate an invitation code.",
                user_id=user.id,
                origin=user.origin,
            )

        link = self.resolver.link_from_base(base_url, code.code)
        return InvitationOutcome.success(email, user.id, user.origin, link)

    async def accept(self, code: str, tenant_id: str) -> AcceptancePayload:
        """Accept an invitation by redeeming its code.

        The invited user is marked verified.

        Args:
            code: Code from the invitation link.
            tenant_id: Tenant the link was followed under.

        Returns:
            The data needed to finish account setup.

        Raises:
            InvalidInvitationError: If the code is missing, expired, already
                used, or not an invitation.
        """
        try:
            redeemed = await self.code_store.redeem(
                code, tenant_id, ExpiringCodeIntent.INVITATION
            )
        except (CodeNotFoundError, IntentMismatchError) as e:
            # Expired-code purges must still be persisted
            await self.session.commit()
            logger.info(
                "Invitation acceptance rejected",
                tenant_id=tenant_id,
                reason=type(e).__name__,
            )
            raise InvalidInvitationError() from e

        try:
            payload = AcceptancePayload.from_data(redeemed.data)
        except ValueError as e:
            await self.session.commit()
            logger.error("Invitation payload unreadable", tenant_id=tenant_id)
            raise InvalidInvitationError() from e

        await self.user_repo.mark_verified(payload.user_id, tenant_id)
        await self.session.commit()

        logger.info(
            "Invitation accepted",
            tenant_id=tenant_id,
            user_id=payload.user_id,
            client_id=payload.client_id,
        )
        return payload
