"""
Configuration Management for Expenso

Uses pydantic-settings for type-safe configuration from environment variables.

All configuration is centralized here, so every external dependency and every
tunable insight threshold can be seen in one place.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class GoogleSheetsSettings(BaseSettings):
    """Google Sheets storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="GOOGLE_SHEETS_",
        extra="ignore"
    )

    credentials_path: str = Field(
        ...,
        description="Path to Google service account credentials JSON"
    )
    spreadsheet_id: str = Field(
        ...,
        description="ID of the Google Sheets spreadsheet to use"
    )
    transactions_sheet_name: str = Field(
        default="Transactions",
        description="Name of the worksheet holding transactions"
    )

    @field_validator('credentials_path')
    @classmethod
    def validate_credentials_path(cls, v: str) -> str:
        """Warn if credentials file doesn't exist (but don't fail - might be mounted later)."""
        if not Path(v).exists():
            import warnings
            warnings.warn(
                f"Google credentials file not found at {v}. "
                "Make sure it exists before running the application."
            )
        return v


class InsightSettings(BaseSettings):
    """
    Thresholds and presentation knobs for the insight generator.

    Amounts are in the same (currency-agnostic) unit as transaction amounts.
    """

    model_config = SettingsConfigDict(
        env_prefix="EXPENSO_INSIGHT_",
        extra="ignore"
    )

    daily_warning_threshold: float = Field(
        default=100.0,
        ge=0.0,
        description="Spending today above this triggers the slow-down warning"
    )
    weekly_warning_threshold: float = Field(
        default=500.0,
        ge=0.0,
        description="Spending over the last 7 days above this adds a roast"
    )
    streak_lookback_days: int = Field(
        default=30,
        ge=1,
        le=365,
        description="How many days back the spending streak may look"
    )
    daily_series_days: int = Field(
        default=7,
        ge=1,
        le=31,
        description="Length of the daily spending series on the dashboard"
    )
    recent_limit: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Number of recent transactions on the dashboard"
    )
    currency_symbol: str = Field(
        default="$",
        max_length=3,
        description="Symbol used when amounts are interpolated into text"
    )
    roasting_enabled: bool = Field(
        default=True,
        description="Default state of the friendly roasting toggle"
    )


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
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Minimum level for structured logs"
    )

    # Validation thresholds
    max_transaction_amount: float = Field(
        default=1000000.0,
        gt=0.0,
        description="Amounts above this are flagged for review (sanity check)"
    )


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

    # Sub-settings are loaded lazily to allow partial configuration

    @property
    def google_sheets(self) -> GoogleSheetsSettings:
        return GoogleSheetsSettings()

    @property
    def insights(self) -> InsightSettings:
        return InsightSettings()

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


def validate_all_settings() -> dict[str, bool | str]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid} plus {setting_name_error: message}
    for every section that failed. Useful for startup checks.
    """
    results: dict[str, bool | str] = {}

    settings = get_settings()

    sections = {
        "google_sheets": lambda: settings.google_sheets,
        "insights": lambda: settings.insights,
        "app": lambda: settings.app,
    }

    for name, load in sections.items():
        try:
            load()
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
