"""Configuration package."""

from campaign_escrow.config.settings import (
    AppSettings,
    AuditSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "AuditSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
