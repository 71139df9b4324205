"""Tests for UserRepository against SQLite."""

import pytest
from sqlalchemy.exc import IntegrityError

from inviteflow.domain.entities.user import DirectoryUser
from inviteflow.infrastructure.persistence.repositories import UserRepository


@pytest.mark.asyncio
async def test_create_pending_user(db_session):
    repo = UserRepository(db_session)

    user = await repo.create_pending("New@X.com", "default")

    assert user.username == "New@X.com"
    assert user.origin == "local"
    assert user.verified is False
    assert user.active is True


@pytest.mark.asyncio
async def test_create_pending_username_clash_keeps_session_usable(db_session):
    repo = UserRepository(db_session)
    kept = await repo.create_pending("first@x.com", "default")
    await repo.create(
        DirectoryUser(id="u-1", tenant_id="default", username="a@x.com", email="other@y.com")
    )

    with pytest.raises(IntegrityError):
        await repo.create_pending("a@x.com", "default")

    assert await repo.get_by_id(kept.id, "default") is not None
    assert await repo.get_by_id("u-1", "default") is not None
    assert await repo.find_by_email("a@x.com", "default") == []


@pytest.mark.asyncio
async def test_find_by_email_is_case_insensitive_and_scoped(db_session):
    repo = UserRepository(db_session)
    await repo.create_pending("bob@x.com", "default")
    await repo.create_pending("bob@x.com", "acme")

    matches = await repo.find_by_email("BOB@x.com", "default")

    assert len(matches) == 1
    assert matches[0].tenant_id == "default"
    assert await repo.find_by_email("nobody@x.com", "default") == []


@pytest.mark.asyncio
async def test_same_email_under_two_origins(db_session):
    repo = UserRepository(db_session)
    await repo.create(
        DirectoryUser(id="u-1", tenant_id="default", username="bob", email="bob@x.com")
    )
    await repo.create(
        DirectoryUser(
            id="u-2", tenant_id="default", username="bob", email="bob@x.com", origin="ldap"
        )
    )

    matches = await repo.find_by_email("bob@x.com", "default")

    assert {m.origin for m in matches} == {"local", "ldap"}


@pytest.mark.asyncio
async def test_mark_verified(db_session):
    repo = UserRepository(db_session)
    user = await repo.create_pending("v@x.com", "default")

    assert await repo.mark_verified(user.id, "default") is True
    assert await repo.mark_verified(user.id, "acme") is False
    assert (await repo.get_by_id(user.id, "default")).verified is True
