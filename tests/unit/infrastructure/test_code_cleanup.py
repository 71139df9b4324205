"""Unit tests for the expired code sweep."""

import asyncio
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from inviteflow.infrastructure.tasks import code_cleanup


@pytest.mark.asyncio
async def test_loop_keeps_running_after_database_errors():
    calls = []

    async def flaky_purge():
        calls.append(1)
        if len(calls) == 1:
            raise OperationalError("DELETE", {}, Exception("locked"))
        return 0

    with patch.object(code_cleanup, "purge_expired_codes", side_effect=flaky_purge):
        task = asyncio.create_task(code_cleanup.run_code_cleanup_loop(0.01))
        await asyncio.sleep(0.05)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    assert len(calls) >= 2


@pytest.mark.asyncio
async def test_purge_expired_codes_commits(db_session):
    db = MagicMock()
    db.session.return_value.__aenter__.return_value = db_session

    with patch.object(code_cleanup, "get_db_manager", return_value=db):
        assert await code_cleanup.purge_expired_codes() == 0
