"""Unit tests for invitation value objects."""

import json

import pytest

from inviteflow.domain.entities.invitation import (
    ERROR_EMAIL_INVALID,
    ERROR_USER_AMBIGUOUS,
    AcceptancePayload,
    InvitationOutcome,
    InvitationResult,
)


def test_from_outcomes_keeps_relative_order():
    outcomes = [
        InvitationOutcome.failure("bad", ERROR_EMAIL_INVALID, "bad is invalid email."),
        InvitationOutcome.success("a@x.com", "u-1", "local", "http://localhost/a"),
        InvitationOutcome.failure("dup@x.com", ERROR_USER_AMBIGUOUS, "ambiguous"),
        InvitationOutcome.success("b@x.com", "u-2", "local", "http://localhost/b"),
    ]

    result = InvitationResult.from_outcomes(outcomes)

    assert [o.email for o in result.new_invites] == ["a@x.com", "b@x.com"]
    assert [o.email for o in result.failed_invites] == ["bad", "dup@x.com"]


def test_outcome_has_link_or_error():
    ok = InvitationOutcome.success("a@x.com", "u-1", "local", "http://localhost/a")
    failed = InvitationOutcome.failure("bad", ERROR_EMAIL_INVALID, "bad is invalid email.")

    assert ok.succeeded and ok.error_code is None
    assert not failed.succeeded and failed.invite_link is None


def test_outcome_rejects_neither_link_nor_error():
    with pytest.raises(ValueError):
        InvitationOutcome(email="a@x.com")


def test_outcome_rejects_both_link_and_error():
    with pytest.raises(ValueError):
        InvitationOutcome(
            email="a@x.com",
            invite_link="http://localhost/a",
            error_code=ERROR_EMAIL_INVALID,
        )


def test_acceptance_payload_keys():
    payload = AcceptancePayload(
        user_id="u-1",
        email="a@x.com",
        origin="local",
        client_id="admin",
        redirect_uri="http://app/cb",
    )

    data = json.loads(payload.to_data())

    assert set(data) == {"user_id", "email", "origin", "client_id", "redirect_uri"}
    assert AcceptancePayload.from_data(payload.to_data()) == payload
