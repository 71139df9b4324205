"""Expiring code store.

Issues, reads and redeems single-use codes bound to a tenant and an intent.
Each code is redeemable at most once and never after its expiry. The store
does not look inside payloads.
"""

from datetime import datetime, timezone
from typing import Mapping

from inviteflow.core.logging import get_logger
from inviteflow.domain.entities.expiring_code import (
    ExpiringCode,
    ExpiringCodeIntent,
    flatten_payload,
)
from inviteflow.domain.services.code_generator import CodeGenerator
from inviteflow.infrastructure.persistence.repositories.expiring_code_repository import (
    ExpiringCodeRepository,
)

logger = get_logger(__name__)


class ExpiringCodeError(Exception):
    """Base class for expiring code failures."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class CodeNotFoundError(ExpiringCodeError):
    """Raised when no valid code exists for the tenant."""

    def __init__(self) -> None:
        super().__init__("Code not found")


class CodeExpiredError(CodeNotFoundError):
    """Raised when a code existed but is past its expiry.

    Subclasses CodeNotFoundError so callers that only care about validity
    treat an expired code the same as a missing one.
    """

    def __init__(self) -> None:
        ExpiringCodeError.__init__(self, "Code has expired")


class IntentMismatchError(ExpiringCodeError):
    """Raised when a code is redeemed for a purpose it was not issued for."""

    def __init__(self, expected: ExpiringCodeIntent, actual: ExpiringCodeIntent) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Code was issued for {actual.value}, not {expected.value}")


class CodeGenerationExhaustedError(ExpiringCodeError):
    """Raised when every attempt to store a fresh code collided."""

    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(f"Could not store a unique code after {attempts} attempts")


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class ExpiringCodeStore:
    """Service for issuing and redeeming expiring codes."""

    def __init__(
        self,
        repository: ExpiringCodeRepository,
        generator: CodeGenerator,
        max_attempts: int = 3,
    ) -> None:
        """Initialize the store.

        Args:
            repository: Repository for expiring code rows.
            generator: Source of fresh code strings.
            max_attempts: Total insert attempts before giving up on collisions.
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.repository = repository
        self.generator = generator
        self.max_attempts = max_attempts

    async def generate(
        self,
        intent: ExpiringCodeIntent,
        data: str | Mapping[str, object],
        expires_at: datetime,
        tenant_id: str,
    ) -> ExpiringCode:
        """Issue and persist a new code.

        Args:
            intent: Purpose of the code.
            data: Payload text, or a flat mapping to serialize.
            expires_at: Expiry instant. Naive values are taken as UTC.
            tenant_id: Tenant the code belongs to.

        Returns:
            The stored code.

        Raises:
            ValueError: If the expiry is missing or not in the future.
            CodeGenerationExhaustedError: If every attempt collided.
        """
        if expires_at is None:
            raise ValueError("Expiry is required")
        expires_at = _as_utc(expires_at)
        now = datetime.now(timezone.utc)
        if expires_at <= now:
            raise ValueError("Expiry must be in the future")

        payload = data if isinstance(data, str) else flatten_payload(data)

        for attempt in range(1, self.max_attempts + 1):
            entity = ExpiringCode(
                code=self.generator.generate(),
                tenant_id=tenant_id,
                intent=intent,
                data=payload,
                expires_at=expires_at,
                created_at=now,
            )
            if await self.repository.insert_if_absent(entity):
                logger.debug(
                    "Expiring code stored",
                    tenant_id=tenant_id,
                    intent=intent.value,
                    attempt=attempt,
                )
                return entity
            logger.warning(
                "Expiring code collision, retrying",
                tenant_id=tenant_id,
                intent=intent.value,
                attempt=attempt,
            )

        # With 128+ bits of entropy this means the generator is broken
        logger.error(
            "Expiring code generation exhausted",
            tenant_id=tenant_id,
            intent=intent.value,
            attempts=self.max_attempts,
        )
        raise CodeGenerationExhaustedError(self.max_attempts)

    async def retrieve(self, code: str, tenant_id: str) -> ExpiringCode:
        """Read a code without consuming it.

        Raises:
            CodeNotFoundError: If the code is absent, belongs to another
                tenant, or has expired.
        """
        entity = await self.repository.get_unexpired(
            code, tenant_id, datetime.now(timezone.utc)
        )
        if entity is None:
            raise CodeNotFoundError()
        return entity

    async def redeem(
        self,
        code: str,
        tenant_id: str,
        expected_intent: ExpiringCodeIntent | None = None,
    ) -> ExpiringCode:
        """Consume a code exactly once.

        The consuming delete is attempted first; the code is only read back
        afterwards to explain why nothing was consumed.

        Args:
            code: The code string.
            tenant_id: Tenant the code must belong to.
            expected_intent: If given, the code must have been issued for it.

        Returns:
            The consumed code.

        Raises:
            CodeNotFoundError: If there is no such code for the tenant.
            CodeExpiredError: If the code is past its expiry. It is purged.
            IntentMismatchError: If the intent differs. The code is kept.
        """
        now = datetime.now(timezone.utc)
        consumed = await self.repository.consume(code, tenant_id, now, expected_intent)
        if consumed is not None:
            logger.info(
                "Expiring code redeemed",
                tenant_id=tenant_id,
                intent=consumed.intent.value,
            )
            return consumed

        existing = await self.repository.get(code, tenant_id)
        if existing is None:
            raise CodeNotFoundError()
        if existing.is_expired(now):
            await self.repository.delete(code, tenant_id)
            logger.info(
                "Expired code purged on redemption",
                tenant_id=tenant_id,
                intent=existing.intent.value,
            )
            raise CodeExpiredError()
        if expected_intent is not None and existing.intent != expected_intent:
            logger.warning(
                "Expiring code intent mismatch",
                tenant_id=tenant_id,
                expected=expected_intent.value,
                actual=existing.intent.value,
            )
            raise IntentMismatchError(expected_intent, existing.intent)
        # Lost a race with another redeemer between the delete and the read
        raise CodeNotFoundError()

    async def expire_by_intent(self, intent: ExpiringCodeIntent, tenant_id: str) -> int:
        """Delete every code of one intent within a tenant.

        Returns:
            Number of codes deleted.
        """
        count = await self.repository.delete_by_intent(intent, tenant_id)
        logger.info(
            "Expiring codes revoked by intent",
            tenant_id=tenant_id,
            intent=intent.value,
            count=count,
        )
        return count

    async def purge_expired(self, now: datetime | None = None) -> int:
        """Delete codes past their expiry across all tenants.

        Returns:
            Number of codes deleted.
        """
        now = _as_utc(now) if now is not None else datetime.now(timezone.utc)
        count = await self.repository.delete_expired(now)
        if count:
            logger.info("Expired codes purged", count=count)
        return count
