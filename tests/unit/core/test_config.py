import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from inviteflow.core.config import Settings, get_settings


def test_settings_defaults():
    """Test that settings load with correct defaults."""
    get_settings.cache_clear()

    settings = Settings(_env_file=None)

    assert settings.app_name == "InviteFlow"
    assert settings.environment == "development"
    assert settings.external_url == "http://localhost"
    assert settings.default_tenant_id == "default"
    assert settings.invitation_expire_days == 7
    assert settings.code_length_bytes == 32
    assert settings.code_generation_max_attempts == 3
    assert settings.is_development is True
    assert settings.is_production is False


def test_settings_env_override():
    """Test that environment variables override defaults."""
    get_settings.cache_clear()

    with patch.dict(
        os.environ,
        {
            "INVITEFLOW_ENVIRONMENT": "production",
            "INVITEFLOW_EXTERNAL_URL": "https://login.example.org/",
            "INVITEFLOW_INVITATION_EXPIRE_DAYS": "3",
        },
    ):
        settings = Settings(_env_file=None)

        assert settings.is_production is True
        assert settings.external_url == "https://login.example.org"
        assert settings.invitation_expire_days == 3


def test_external_url_must_be_absolute():
    """A bare host name is rejected."""
    with pytest.raises(ValidationError):
        Settings(_env_file=None, external_url="localhost")


def test_code_length_has_a_floor():
    """Codes shorter than 128 bits are rejected."""
    with pytest.raises(ValidationError):
        Settings(_env_file=None, code_length_bytes=8)


def test_max_attempts_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, code_generation_max_attempts=0)


def test_database_url_sync():
    settings = Settings(_env_file=None, database_url="sqlite+aiosqlite:///./x.db")
    assert settings.database_url_sync == "sqlite:///./x.db"
