"""
Configuration Management for the Campaign Escrow Ledger

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The ledger's rules (goal, deadline, ordering) are not configurable; only the
operational surroundings are: who holds the administrator capability and
where the audit trail is written.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuditSettings(BaseSettings):
    """Audit trail persistence configuration."""

    model_config = SettingsConfigDict(
        env_prefix="ESCROW_AUDIT_",
        extra="ignore"
    )

    log_path: Optional[str] = Field(
        default=None,
        description="Path of the append-only JSON lines audit file. "
                    "If unset, events are kept in memory only."
    )
    retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts for each audit file write before giving up"
    )

    @field_validator('log_path')
    @classmethod
    def validate_log_path(cls, v: Optional[str]) -> Optional[str]:
        """Warn if the parent directory doesn't exist (but don't fail - might be mounted later)."""
        if v and not Path(v).parent.exists():
            import warnings
            warnings.warn(
                f"Audit log directory not found for {v}. "
                "Make sure it exists before running the ledger."
            )
        return v


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Operational housekeeping
    administrators: str = Field(
        default="",
        description="Comma-separated identities holding the administrator capability"
    )

    @property
    def administrators_list(self) -> list[str]:
        """Get administrator identities as a list."""
        return [a.strip() for a in self.administrators.split(",") if a.strip()]


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def audit(self) -> AuditSettings:
        return AuditSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.audit
        results["audit"] = True
    except Exception as e:
        results["audit"] = False
        results["audit_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
