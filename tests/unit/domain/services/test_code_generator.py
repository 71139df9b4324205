"""Unit tests for CodeGenerator."""

import base64

import pytest

from inviteflow.domain.services.code_generator import CodeGenerator


def test_codes_are_url_safe_and_unique():
    generator = CodeGenerator()

    codes = {generator.generate() for _ in range(200)}

    assert len(codes) == 200
    for code in codes:
        assert "@" not in code and "/" not in code and "+" not in code


def test_code_carries_requested_entropy():
    code = CodeGenerator(length_bytes=16).generate()

    padded = code + "=" * (-len(code) % 4)
    assert len(base64.urlsafe_b64decode(padded)) == 16


def test_rejects_short_codes():
    with pytest.raises(ValueError, match="at least 16 bytes"):
        CodeGenerator(length_bytes=15)
