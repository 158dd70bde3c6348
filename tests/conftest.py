"""Shared fixtures for the Expenso test suite."""

from datetime import datetime

import pytest

from expenso.config.settings import AppSettings, InsightSettings
from tests.factories import NOW


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def insight_settings() -> InsightSettings:
    """Default thresholds, independent of the environment."""
    return InsightSettings(
        daily_warning_threshold=100.0,
        weekly_warning_threshold=500.0,
        streak_lookback_days=30,
        daily_series_days=7,
        recent_limit=5,
        currency_symbol="$",
        roasting_enabled=True,
    )


@pytest.fixture
def app_settings() -> AppSettings:
    return AppSettings(
        app_environment="test",
        debug_mode=False,
        log_level="INFO",
        max_transaction_amount=1000000.0,
    )
