"""Unit tests for the ExpiringCode entity and payload helpers."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from inviteflow.domain.entities.expiring_code import (
    ExpiringCode,
    ExpiringCodeIntent,
    flatten_payload,
    parse_payload,
)


def _code(expires_at: datetime) -> ExpiringCode:
    return ExpiringCode(
        code="abc",
        tenant_id="default",
        intent=ExpiringCodeIntent.INVITATION,
        data="{}",
        expires_at=expires_at,
    )


def test_valid_until_expiry_instant():
    """A code is still valid at exactly its expiry and invalid right after."""
    expires_at = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
    code = _code(expires_at)

    assert code.is_expired(expires_at) is False
    assert code.is_expired(expires_at + timedelta(microseconds=1)) is True
    assert code.is_expired(expires_at - timedelta(days=1)) is False


def test_requires_code_and_tenant():
    with pytest.raises(ValueError, match="Code is required"):
        ExpiringCode(
            code="",
            tenant_id="default",
            intent=ExpiringCodeIntent.INVITATION,
            data="{}",
            expires_at=datetime.now(timezone.utc),
        )
    with pytest.raises(ValueError, match="Tenant ID is required"):
        ExpiringCode(
            code="abc",
            tenant_id="",
            intent=ExpiringCodeIntent.INVITATION,
            data="{}",
            expires_at=datetime.now(timezone.utc),
        )


def test_flatten_payload_stringifies_values():
    data = flatten_payload({"user_id": "u-1", "count": 2, "note": None})

    assert json.loads(data) == {"user_id": "u-1", "count": "2", "note": ""}


def test_flatten_payload_rejects_nested_values():
    with pytest.raises(ValueError, match="scalar"):
        flatten_payload({"groups": ["a", "b"]})
    with pytest.raises(ValueError, match="scalar"):
        flatten_payload({"profile": {"name": "x"}})


def test_parse_payload_requires_object():
    assert parse_payload('{"a": "1"}') == {"a": "1"}
    with pytest.raises(ValueError):
        parse_payload('["a"]')
    with pytest.raises(ValueError):
        parse_payload("not json")


def test_payload_property_decodes_data():
    code = _code(datetime.now(timezone.utc))
    code.data = flatten_payload({"email": "a@x.com"})

    assert code.payload == {"email": "a@x.com"}
