"""Configuration package."""

from expenso.config.settings import (
    AppSettings,
    GoogleSheetsSettings,
    InsightSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "GoogleSheetsSettings",
    "InsightSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
