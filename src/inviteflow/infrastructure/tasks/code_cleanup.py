"""Background sweep of expired codes.

Expired codes are already rejected on every read and redemption; the sweep
only keeps the table from growing with rows nobody will ever redeem.
"""

import asyncio

from sqlalchemy.exc import SQLAlchemyError

from inviteflow.core.config import get_settings
from inviteflow.core.logging import get_logger
from inviteflow.domain.services.code_generator import CodeGenerator
from inviteflow.domain.services.expiring_code_store import ExpiringCodeStore
from inviteflow.infrastructure.persistence.database import get_db_manager
from inviteflow.infrastructure.persistence.repositories.expiring_code_repository import (
    ExpiringCodeRepository,
)

logger = get_logger(__name__)


async def purge_expired_codes() -> int:
    """Delete every expired code in one transaction.

    Returns:
        Number of codes deleted.
    """
    settings = get_settings()
    db = get_db_manager()
    async with db.session() as session:
        store = ExpiringCodeStore(
            ExpiringCodeRepository(session),
            CodeGenerator(settings.code_length_bytes),
            settings.code_generation_max_attempts,
        )
        count = await store.purge_expired()
        await session.commit()
    return count


async def run_code_cleanup_loop(interval_seconds: float) -> None:
    """Purge expired codes every ``interval_seconds`` until cancelled."""
    logger.info("Starting expired code cleanup", interval_seconds=interval_seconds)

    while True:
        try:
            await purge_expired_codes()
        except SQLAlchemyError as e:
            # Keep sweeping; the next run retries
            logger.error("Expired code cleanup failed", error=str(e))
        await asyncio.sleep(interval_seconds)
