"""
Aggregation Engine

Pure functions over an in-memory collection of transactions. Nothing here
reads storage, holds state, or mutates its input: the same collection always
produces the same numbers, and an empty collection produces zeros, empty
lists or None rather than an error.

Time handling: every windowed function accepts an optional `now`, defaulting
to the current local time. Timestamps are compared as local wall-clock time;
timezone-aware values are converted to the local zone first, naive values are
taken to be local already.

Sorting is always stable, so ties keep the order in which categories or moods
were first encountered in the input.
"""

from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from expenso.models.insights import BalanceSummary, CategorySpending, MoodSpending
from expenso.models.transaction import (
    SortField,
    SortOrder,
    Transaction,
    TransactionType,
)


CATEGORY_COLORS: dict[str, str] = {
    "Food": "#FF8B94",
    "Travel": "#6FA8FF",
    "Shopping": "#FFB86C",
    "Bills": "#A8C5FF",
    "Fun": "#C9A0DC",
    "Other": "#9CA3AF",
}
DEFAULT_CATEGORY_COLOR = "#9CA3AF"

DAY = timedelta(hours=24)


# =============================================================================
# TIME HELPERS
# =============================================================================

def _local(ts: datetime) -> datetime:
    """Express a timestamp as naive local wall-clock time."""
    if ts.tzinfo is not None:
        return ts.astimezone().replace(tzinfo=None)
    return ts


def resolve_now(now: Optional[datetime] = None) -> datetime:
    """`now` as local wall-clock time, defaulting to the current time."""
    return _local(now) if now is not None else datetime.now()


def start_of_day(ts: datetime) -> datetime:
    return ts.replace(hour=0, minute=0, second=0, microsecond=0)


def _expenses(transactions: Iterable[Transaction]) -> list[Transaction]:
    return [t for t in transactions if t.type == TransactionType.EXPENSE]


def _sum_amounts(transactions: Iterable[Transaction]) -> float:
    return sum((t.amount for t in transactions), 0.0)


# =============================================================================
# TOTALS
# =============================================================================

def calculate_balance(transactions: Iterable[Transaction]) -> BalanceSummary:
    """
    Total income, total expense and their difference.

    No rounding happens here; presentation decides how many decimals to show.
    """
    transactions = list(transactions)
    total_income = _sum_amounts(t for t in transactions if t.type == TransactionType.INCOME)
    total_expense = _sum_amounts(t for t in transactions if t.type == TransactionType.EXPENSE)
    return BalanceSummary(
        total_income=total_income,
        total_expense=total_expense,
        balance=total_income - total_expense,
    )


def get_category_spending(transactions: Iterable[Transaction]) -> list[CategorySpending]:
    """
    Expense totals per category, largest first.

    Categories are grouped by exact, case-sensitive match. Categories outside
    the canonical six get the neutral gray.
    """
    totals: dict[str, float] = {}
    for t in _expenses(transactions):
        totals[t.category] = totals.get(t.category, 0.0) + t.amount

    breakdown = [
        CategorySpending(
            category=category,
            amount=amount,
            color=CATEGORY_COLORS.get(category, DEFAULT_CATEGORY_COLOR),
        )
        for category, amount in totals.items()
    ]
    # sorted() is stable with reverse=True: equal amounts keep insertion order
    return sorted(breakdown, key=lambda c: c.amount, reverse=True)


def get_top_category(transactions: Iterable[Transaction]) -> Optional[CategorySpending]:
    """The category with the highest expense total, or None without expenses."""
    breakdown = get_category_spending(transactions)
    return breakdown[0] if breakdown else None


# =============================================================================
# TIME WINDOWS
# =============================================================================

def get_daily_spending(
    transactions: Iterable[Transaction],
    days: int = 7,
    now: Optional[datetime] = None,
) -> list[float]:
    """
    Expense totals for each of the last `days` calendar days, oldest first.

    Today is the last entry. A transaction counts for a day when it falls
    strictly after that day's midnight and strictly before the next 24h mark.
    """
    current = resolve_now(now)
    expenses = [(_local(t.created_at), t.amount) for t in _expenses(transactions)]

    series = []
    for offset in range(days - 1, -1, -1):
        day_start = start_of_day(current - timedelta(days=offset))
        day_end = day_start + DAY
        series.append(
            sum((amount for ts, amount in expenses if day_start < ts < day_end), 0.0)
        )
    return series


def get_today_spending(
    transactions: Iterable[Transaction],
    now: Optional[datetime] = None,
) -> float:
    """Expenses recorded strictly after local midnight today."""
    today = start_of_day(resolve_now(now))
    return _sum_amounts(t for t in _expenses(transactions) if _local(t.created_at) > today)


def get_weekly_spending(
    transactions: Iterable[Transaction],
    now: Optional[datetime] = None,
) -> float:
    """Expenses recorded strictly after exactly seven days ago."""
    week_ago = resolve_now(now) - timedelta(days=7)
    return _sum_amounts(t for t in _expenses(transactions) if _local(t.created_at) > week_ago)


def get_daily_average(
    transactions: Iterable[Transaction],
    now: Optional[datetime] = None,
) -> float:
    """
    Total expense spread over the whole days since the oldest expense.

    The divisor never drops below one day. Returns 0 without expenses.
    """
    expenses = _expenses(transactions)
    if not expenses:
        return 0.0

    oldest = min(_local(t.created_at) for t in expenses)
    days = max((resolve_now(now) - oldest).days, 1)
    return _sum_amounts(expenses) / days


def get_spending_streak(
    transactions: Iterable[Transaction],
    now: Optional[datetime] = None,
    max_days: int = 30,
) -> int:
    """
    Consecutive days with at least one expense, counting back from today.

    The walk stops at the first day without an expense and never looks
    further back than `max_days`, so the result is capped at `max_days`.
    """
    spend_days: set[date] = {_local(t.created_at).date() for t in _expenses(transactions)}
    if not spend_days:
        return 0

    streak = 0
    day = resolve_now(now).date()
    for _ in range(max_days):
        if day not in spend_days:
            break
        streak += 1
        day -= timedelta(days=1)
    return streak


# =============================================================================
# MOOD
# =============================================================================

def get_mood_correlation(transactions: Iterable[Transaction]) -> Optional[list[MoodSpending]]:
    """
    Average spend per expense for each mood tag, highest average first.

    Returns None when no expense carries a mood.
    """
    groups: dict[str, list[float]] = {}
    for t in _expenses(transactions):
        if not t.mood:
            continue
        groups.setdefault(t.mood, []).append(t.amount)

    if not groups:
        return None

    moods = []
    for mood, amounts in groups.items():
        total = sum(amounts, 0.0)
        moods.append(MoodSpending(
            mood=mood,
            total=total,
            count=len(amounts),
            average=total / len(amounts),
        ))
    return sorted(moods, key=lambda m: m.average, reverse=True)


# =============================================================================
# LISTING
# =============================================================================

def get_recent_transactions(
    transactions: Iterable[Transaction],
    limit: int = 5,
) -> list[Transaction]:
    """The first `limit` transactions of a newest-first collection."""
    return list(transactions)[:limit]


def sort_transactions(
    transactions: Iterable[Transaction],
    sort_by: SortField = SortField.DATE,
    order: SortOrder = SortOrder.DESC,
) -> list[Transaction]:
    """
    Order transactions for the list screen.

    Text fields compare case-insensitively; `source` falls back to the
    category for expenses, which have no source.
    """
    keys = {
        SortField.DATE: lambda t: _local(t.created_at),
        SortField.CATEGORY: lambda t: t.category.casefold(),
        SortField.SOURCE: lambda t: (t.source or t.category).casefold(),
    }
    return sorted(transactions, key=keys[sort_by], reverse=order == SortOrder.DESC)
