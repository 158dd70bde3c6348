"""
Insight Text Generator

Turns aggregated numbers into the short texts shown on the home and insights
screens. Although the app labels them "AI insights", they come from fixed
rule tables: thresholds pick a template, category and mood names are filled
in, and optional "roast" lines are appended when the user has friendly
roasting switched on.

Same transactions, same `now` and same roasting flag always give the same
text. There is no randomness and no external call.
"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from expenso.analytics import aggregation
from expenso.config import get_settings
from expenso.config.settings import InsightSettings
from expenso.models.insights import MoodSpending
from expenso.models.transaction import Transaction


NO_SPEND_TODAY = "Great job! You haven't spent anything today. 🌟"
DOING_FINE = "Actually, you're doing fine! Keep it up! 💪"
BREAKDOWN_INTRO = "Alright, let's break this down... 🔍\n\n"
WEEKLY_OVERSPEND_ROAST = "That's... a lot. Maybe slow down? 😅"
NO_TOP_CATEGORY = "nothing"

# Shown under the top spending category card
CATEGORY_ROASTS: dict[str, str] = {
    "Food": "You could start a restaurant with all that food money! 🍕",
    "Shopping": "Your closet called... it's full! 👗",
    "Travel": "Living that wanderlust life! ✈️",
    "Fun": "All fun and games until you check your balance! 🎮",
    "Bills": "Adulting is expensive, isn't it? 📄",
    "Other": "What exactly is 'Other'? 🤔",
}

# Appended to the "why am I broke" breakdown; other categories get nothing
WHY_BROKE_ROASTS: dict[str, str] = {
    "Food": "Maybe cook at home once in a while? 🍳",
    "Shopping": "Do you really need another thing? 🛍️",
    "Fun": "Living your best life, but at what cost? 🎉",
}

QUICK_TIPS: tuple[str, ...] = (
    "Track every expense, no matter how small",
    "Set a daily spending limit and stick to it",
    "Review your spending patterns weekly",
    "Note your mood to understand emotional spending",
)


class InsightGenerator:
    """
    Builds insight texts from a transaction collection.

    Holds only its configuration (thresholds, currency symbol), never the
    transactions themselves, so one instance can serve every request.
    """

    def __init__(self, settings: Optional[InsightSettings] = None):
        self._settings = settings or get_settings().insights

    @property
    def settings(self) -> InsightSettings:
        return self._settings

    def _money(self, amount: float, decimals: int = 2) -> str:
        """Format an amount rounding halves away from zero."""
        quantum = Decimal(1).scaleb(-decimals)
        rounded = Decimal(amount).quantize(quantum, rounding=ROUND_HALF_UP)
        return f"{self._settings.currency_symbol}{rounded}"

    def daily_insight(
        self,
        transactions: Iterable[Transaction],
        now: Optional[datetime] = None,
    ) -> str:
        """
        One-line card for the home screen, based on today's spending.

        Nothing spent today earns praise, a total above the daily threshold
        earns a warning, anything else names the top spending category.
        """
        transactions = list(transactions)
        today_total = aggregation.get_today_spending(transactions, now=now)

        if today_total == 0:
            return NO_SPEND_TODAY

        if today_total > self._settings.daily_warning_threshold:
            return (
                f"Whoa there! You've spent {self._money(today_total, 0)} today. "
                "Maybe time to slow down? 😅"
            )

        top = aggregation.get_top_category(transactions)
        top_name = top.category if top else NO_TOP_CATEGORY
        return f"You're spending most on {top_name}. Keep an eye on that! 👀"

    def why_broke(
        self,
        transactions: Iterable[Transaction],
        roasting_enabled: bool,
        now: Optional[datetime] = None,
    ) -> str:
        """
        Explain a negative balance.

        A balance of zero or more short-circuits to a fixed positive message.
        Otherwise the text names the top category and this week's spending,
        with roast lines only when roasting is enabled.
        """
        transactions = list(transactions)
        if aggregation.calculate_balance(transactions).balance >= 0:
            return DOING_FINE

        explanation = BREAKDOWN_INTRO

        top = aggregation.get_top_category(transactions)
        if top:
            explanation += (
                f"You're spending the most on {top.category} ({self._money(top.amount)}). "
            )
            if roasting_enabled:
                explanation += WHY_BROKE_ROASTS.get(top.category, "")

        weekly = aggregation.get_weekly_spending(transactions, now=now)
        explanation += f"\n\nYou've spent {self._money(weekly)} this week. "

        if roasting_enabled and weekly > self._settings.weekly_warning_threshold:
            explanation += WEEKLY_OVERSPEND_ROAST

        return explanation

    def category_roast(self, category: Optional[str], roasting_enabled: bool) -> str:
        """Roast line for a top category; empty when off or unmatched."""
        if not roasting_enabled or not category:
            return ""
        return CATEGORY_ROASTS.get(category, "")

    def mood_roast(
        self,
        correlation: Optional[list[MoodSpending]],
        roasting_enabled: bool,
    ) -> str:
        """Name the mood with the highest average spend."""
        if not roasting_enabled or not correlation:
            return ""
        return f"Looks like when you're {correlation[0].mood}, your wallet suffers the most! 💸"

    def greeting(self, now: Optional[datetime] = None) -> str:
        hour = aggregation.resolve_now(now).hour
        if hour < 12:
            return "Good morning"
        if hour < 18:
            return "Good afternoon"
        return "Good evening"

    def tips(self) -> list[str]:
        return list(QUICK_TIPS)
