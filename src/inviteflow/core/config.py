"""Configuration management for InviteFlow.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Configuration is loaded at application
startup and is immutable during runtime.
"""

from functools import lru_cache
from typing import Literal
from urllib.parse import urlsplit

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables and .env files.
    All configuration values are validated at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="INVITEFLOW_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "InviteFlow"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False

    # Public root address of the default tenant. Other tenants are served
    # from "<subdomain>.<host>" under the same scheme and port.
    external_url: str = "http://localhost"
    default_tenant_id: str = "default"

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8000

    # Database Settings
    database_url: str = "sqlite+aiosqlite:///./if_data/inviteflow.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 3600
    db_echo: bool = False

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Expiring Code Settings
    invitation_expire_days: int = Field(default=7, ge=1)
    code_length_bytes: int = Field(
        default=32,
        ge=16,
        description="Random bytes per generated code (16 bytes = 128 bits minimum)",
    )
    code_generation_max_attempts: int = Field(
        default=3,
        ge=1,
        description="Insert attempts before giving up on a colliding code",
    )
    code_cleanup_interval_seconds: int = Field(
        default=300,
        ge=0,
        description="Seconds between expired-code sweeps (0 disables the sweep)",
    )

    @field_validator("external_url")
    @classmethod
    def validate_external_url(cls, v: str) -> str:
        """Require an absolute URL and strip the trailing slash."""
        parts = urlsplit(v)
        if not parts.scheme or not parts.hostname:
            raise ValueError(f"external_url must be an absolute URL, got {v!r}")
        return v.rstrip("/")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == "testing"

    @property
    def database_url_sync(self) -> str:
        """Get synchronous database URL for migrations."""
        url = self.database_url
        if url.startswith("sqlite+aiosqlite"):
            return url.replace("sqlite+aiosqlite", "sqlite")
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql")
        return url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    This function caches the settings instance to avoid reloading
    configuration on every call. Settings are loaded once at startup.

    Returns:
        Settings: Cached application settings instance.
    """
    return Settings()
