"""Aggregation engine and insight text generator."""

from expenso.analytics.aggregation import (
    CATEGORY_COLORS,
    DEFAULT_CATEGORY_COLOR,
    calculate_balance,
    get_category_spending,
    get_daily_average,
    get_daily_spending,
    get_mood_correlation,
    get_recent_transactions,
    get_spending_streak,
    get_today_spending,
    get_top_category,
    get_weekly_spending,
    sort_transactions,
)
from expenso.analytics.insights import (
    CATEGORY_ROASTS,
    QUICK_TIPS,
    WHY_BROKE_ROASTS,
    InsightGenerator,
)

__all__ = [
    "CATEGORY_COLORS",
    "CATEGORY_ROASTS",
    "DEFAULT_CATEGORY_COLOR",
    "QUICK_TIPS",
    "WHY_BROKE_ROASTS",
    "InsightGenerator",
    "calculate_balance",
    "get_category_spending",
    "get_daily_average",
    "get_daily_spending",
    "get_mood_correlation",
    "get_recent_transactions",
    "get_spending_streak",
    "get_today_spending",
    "get_top_category",
    "get_weekly_spending",
    "sort_transactions",
]
