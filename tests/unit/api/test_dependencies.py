"""Unit tests for API dependencies."""

import pytest

from inviteflow.infrastructure.api.dependencies import subdomain_from_host


@pytest.mark.parametrize(
    "host,expected",
    [
        ("acme.localhost", "acme"),
        ("acme.localhost:8000", "acme"),
        ("a.b.localhost", "a.b"),
        ("localhost", None),
        ("localhost:8000", None),
        ("test", None),
        ("evil-localhost", None),
        (None, None),
        ("", None),
    ],
)
def test_subdomain_from_host(host, expected):
    assert subdomain_from_host(host, "http://localhost") == expected
