"""Application configuration via pydantic-settings.

Settings are loaded from environment variables (.env file), organized into
logical groups and composed into a single Settings object.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from audit_trail.audit.log import AUTHORIZED_CONTRACTS


class DatabaseSettings(BaseSettings):
    """Storage backend selection and connection string."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    storage_backend: str = Field(
        default="memory",
        description="Event store backend: 'memory' or 'sql'",
    )
    database_url: str = Field(
        default="sqlite://",
        description="SQLAlchemy connection string (used when storage_backend='sql')",
    )

    @field_validator("storage_backend")
    @classmethod
    def validate_storage_backend(cls, v: str) -> str:
        """Ensure the backend is one we know how to build."""
        lower = v.lower()
        if lower not in {"memory", "sql"}:
            msg = f"Invalid storage backend: {v}. Must be 'memory' or 'sql'"
            raise ValueError(msg)
        return lower


class AuditSettings(BaseSettings):
    """Administrator principal and writer allow-list."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    audit_admin_principal: str = Field(
        default="",
        description="Principal allowed to read audit events",
    )
    audit_authorized_writers: str = Field(
        default=",".join(sorted(AUTHORIZED_CONTRACTS)),
        description="Comma-separated caller identities allowed to append events",
    )

    @property
    def authorized_writers(self) -> frozenset[str]:
        """Parse the comma-separated allow-list into a set of identities."""
        return frozenset(
            writer.strip() for writer in self.audit_authorized_writers.split(",") if writer.strip()
        )


class Settings(BaseSettings):
    """Root settings composing all sub-settings.

    Usage:
        settings = Settings()
        settings.audit.audit_admin_principal
        settings.db.database_url
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Environment
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    # Composed settings (loaded from same .env)
    db: DatabaseSettings = Field(default_factory=DatabaseSettings)
    audit: AuditSettings = Field(default_factory=AuditSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid:
            msg = f"Invalid log level: {v}. Must be one of {valid}"
            raise ValueError(msg)
        return upper

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


# Module-level singleton — import this wherever settings are needed.
settings = Settings()
