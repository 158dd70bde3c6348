"""
Tests for the aggregation engine.

All windowed functions get an explicit `now` so results never depend on the
wall clock.
"""

import pytest
from datetime import datetime, timedelta, timezone

from expenso.analytics import aggregation
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
from expenso.models.transaction import SortField, SortOrder
from tests.factories import NOW, make_income, make_transaction


@pytest.fixture
def mixed():
    """A small ledger spread over the last two weeks."""
    return [
        make_transaction(50, "Food", days_ago=0, mood="😊"),
        make_income(1000, "Salary", days_ago=0),
        make_transaction(20, "Travel", days_ago=1, mood="😤"),
        make_transaction(35.5, "Food", days_ago=3),
        make_income(200, "Freelance", days_ago=5),
        make_transaction(80, "Shopping", days_ago=10, mood="😤"),
    ]


class TestBalance:
    """Tests for calculate_balance."""

    def test_income_and_expense_scenario(self):
        """50 Food expense and 1000 Salary income today."""
        transactions = [
            make_transaction(50, "Food"),
            make_income(1000, "Salary"),
        ]
        summary = calculate_balance(transactions)
        assert summary.total_income == 1000
        assert summary.total_expense == 50
        assert summary.balance == 950

        breakdown = get_category_spending(transactions)
        assert [(c.category, c.amount) for c in breakdown] == [("Food", 50)]

    def test_balance_is_income_minus_expense(self, mixed):
        summary = calculate_balance(mixed)
        assert summary.total_income == 1200
        assert summary.total_expense == pytest.approx(185.5)
        assert summary.balance == summary.total_income - summary.total_expense

    def test_totals_only_count_their_type(self):
        summary = calculate_balance([make_income(10), make_income(5)])
        assert summary.total_expense == 0
        assert summary.total_income == 15

    def test_negative_balance(self):
        summary = calculate_balance([make_transaction(70), make_income(20)])
        assert summary.balance == -50

    def test_no_rounding(self):
        summary = calculate_balance([make_transaction(0.1), make_transaction(0.2)])
        assert summary.total_expense == 0.1 + 0.2


class TestEmptyCollection:
    """Every aggregation tolerates an empty collection."""

    def test_zeros_and_empties(self):
        summary = calculate_balance([])
        assert summary.balance == 0
        assert summary.total_income == 0
        assert summary.total_expense == 0
        assert get_daily_average([], now=NOW) == 0
        assert get_weekly_spending([], now=NOW) == 0
        assert get_today_spending([], now=NOW) == 0
        assert get_spending_streak([], now=NOW) == 0
        assert get_category_spending([]) == []
        assert get_top_category([]) is None
        assert get_mood_correlation([]) is None
        assert get_daily_spending([], now=NOW) == [0.0] * 7
        assert get_recent_transactions([]) == []
        assert sort_transactions([]) == []

    def test_income_only_has_no_expense_aggregates(self):
        incomes = [make_income(100)]
        assert get_category_spending(incomes) == []
        assert get_daily_average(incomes, now=NOW) == 0
        assert get_spending_streak(incomes, now=NOW) == 0


class TestCategorySpending:
    """Tests for the category breakdown."""

    def test_sums_to_total_expense(self, mixed):
        breakdown = get_category_spending(mixed)
        assert sum(c.amount for c in breakdown) == calculate_balance(mixed).total_expense

    def test_sorted_descending(self, mixed):
        breakdown = get_category_spending(mixed)
        assert [c.category for c in breakdown] == ["Food", "Shopping", "Travel"]
        assert breakdown[0].amount == pytest.approx(85.5)

    def test_colors(self, mixed):
        breakdown = get_category_spending(mixed + [make_transaction(5, "Pets")])
        colors = {c.category: c.color for c in breakdown}
        assert colors["Food"] == CATEGORY_COLORS["Food"] == "#FF8B94"
        assert colors["Travel"] == "#6FA8FF"
        assert colors["Pets"] == DEFAULT_CATEGORY_COLOR == "#9CA3AF"

    def test_grouping_is_case_sensitive(self):
        breakdown = get_category_spending([
            make_transaction(10, "Food"),
            make_transaction(10, "food"),
        ])
        assert len(breakdown) == 2

    def test_ties_keep_first_encountered_order(self):
        transactions = [
            make_transaction(30, "Fun"),
            make_transaction(30, "Bills"),
            make_transaction(30, "Travel"),
        ]
        assert [c.category for c in get_category_spending(transactions)] == [
            "Fun", "Bills", "Travel",
        ]
        assert get_top_category(transactions).category == "Fun"

    def test_top_category(self, mixed):
        top = get_top_category(mixed)
        assert top.category == "Food"


class TestDailySpending:
    """Tests for the seven-day series."""

    def test_always_seven_entries_oldest_first(self, mixed):
        series = get_daily_spending(mixed, now=NOW)
        assert len(series) == 7
        assert all(value >= 0 for value in series)
        # today last, yesterday second to last, three days ago fourth from last
        assert series[-1] == 50
        assert series[-2] == 20
        assert series[-4] == 35.5
        assert sum(series) == pytest.approx(105.5)

    def test_ignores_income_and_older_expenses(self, mixed):
        series = get_daily_spending(mixed, now=NOW)
        assert 80 not in series
        assert 1000 not in series

    def test_custom_length(self, mixed):
        series = get_daily_spending(mixed, days=14, now=NOW)
        assert len(series) == 14
        assert series[-11] == 80

    def test_midnight_exactly_is_excluded(self):
        midnight = NOW.replace(hour=0, minute=0, second=0, microsecond=0)
        series = get_daily_spending([make_transaction(10, created_at=midnight)], now=NOW)
        assert series == [0.0] * 7

    def test_aware_timestamps_are_converted_to_local(self):
        local_noon = NOW.replace(hour=12)
        aware = local_noon.astimezone(timezone.utc)
        series = get_daily_spending([make_transaction(10, created_at=aware)], now=NOW)
        assert series[-1] == 10


class TestWindows:
    """Tests for today, weekly and daily-average figures."""

    def test_today_spending(self, mixed):
        assert get_today_spending(mixed, now=NOW) == 50

    def test_weekly_spending(self, mixed):
        assert get_weekly_spending(mixed, now=NOW) == pytest.approx(105.5)

    def test_weekly_window_is_strict(self):
        exactly_week_ago = make_transaction(10, created_at=NOW - timedelta(days=7))
        just_inside = make_transaction(5, created_at=NOW - timedelta(days=7) + timedelta(seconds=1))
        assert get_weekly_spending([exactly_week_ago, just_inside], now=NOW) == 5

    def test_daily_average_divides_by_days_since_oldest(self, mixed):
        # oldest expense is 10 days ago at 10:00, NOW is 15:00
        assert get_daily_average(mixed, now=NOW) == pytest.approx(185.5 / 10)

    def test_daily_average_minimum_one_day(self):
        assert get_daily_average([make_transaction(42)], now=NOW) == 42


class TestStreak:
    """Tests for the spending streak."""

    def test_consecutive_days(self):
        transactions = [make_transaction(5, days_ago=d) for d in (0, 1, 2)]
        assert get_spending_streak(transactions, now=NOW) == 3

    def test_stops_at_first_gap(self):
        transactions = [make_transaction(5, days_ago=d) for d in (0, 1, 3, 4)]
        assert get_spending_streak(transactions, now=NOW) == 2

    def test_zero_without_expense_today(self):
        transactions = [make_transaction(5, days_ago=d) for d in (1, 2)]
        assert get_spending_streak(transactions, now=NOW) == 0

    def test_multiple_expenses_one_day_count_once(self):
        transactions = [make_transaction(5), make_transaction(7)]
        assert get_spending_streak(transactions, now=NOW) == 1

    def test_capped_at_thirty_days(self):
        transactions = [make_transaction(5, days_ago=d) for d in range(40)]
        assert get_spending_streak(transactions, now=NOW) == 30

    def test_custom_cap(self):
        transactions = [make_transaction(5, days_ago=d) for d in range(40)]
        assert get_spending_streak(transactions, now=NOW, max_days=7) == 7

    def test_income_does_not_extend_streak(self):
        transactions = [make_transaction(5), make_income(100, days_ago=1)]
        assert get_spending_streak(transactions, now=NOW) == 1


class TestMoodCorrelation:
    """Tests for spending per mood."""

    def test_sorted_by_average(self):
        """Three 😊 totaling 30 and two 😤 totaling 40."""
        transactions = [
            make_transaction(5, mood="😊"),
            make_transaction(10, mood="😊"),
            make_transaction(15, mood="😊"),
            make_transaction(25, mood="😤"),
            make_transaction(15, mood="😤"),
        ]
        correlation = get_mood_correlation(transactions)
        assert [(m.mood, m.average, m.count) for m in correlation] == [
            ("😤", 20, 2),
            ("😊", 10, 3),
        ]
        assert correlation[0].total == 40

    def test_none_without_moods(self):
        assert get_mood_correlation([make_transaction(5), make_income(10)]) is None

    def test_ignores_income_and_blank_mood(self):
        transactions = [
            make_transaction(5, mood=""),
            make_transaction(8, mood="😢"),
        ]
        correlation = get_mood_correlation(transactions)
        assert [m.mood for m in correlation] == ["😢"]

    def test_unknown_mood_is_grouped(self):
        correlation = get_mood_correlation([make_transaction(3, mood="🤷")])
        assert correlation[0].mood == "🤷"


class TestListing:
    """Tests for recent transactions and list sorting."""

    def test_recent_takes_first_items(self, mixed):
        recent = get_recent_transactions(mixed, limit=2)
        assert recent == mixed[:2]

    def test_sort_by_date_descending(self, mixed):
        ordered = sort_transactions(mixed)
        timestamps = [t.created_at for t in ordered]
        assert timestamps == sorted(timestamps, reverse=True)

    def test_sort_by_date_ascending(self, mixed):
        ordered = sort_transactions(mixed, SortField.DATE, SortOrder.ASC)
        assert ordered[0].amount == 80

    def test_sort_by_category_ignores_case(self):
        transactions = [
            make_transaction(1, "travel"),
            make_transaction(2, "Bills"),
            make_transaction(3, "food"),
        ]
        ordered = sort_transactions(transactions, SortField.CATEGORY, SortOrder.ASC)
        assert [t.category for t in ordered] == ["Bills", "food", "travel"]

    def test_sort_by_source_falls_back_to_category(self):
        transactions = [
            make_income(1, "Salary"),
            make_transaction(2, "Bills"),
            make_income(3, "Freelance"),
        ]
        ordered = sort_transactions(transactions, SortField.SOURCE, SortOrder.ASC)
        assert [t.amount for t in ordered] == [2, 3, 1]

    def test_sort_returns_new_list(self, mixed):
        before = list(mixed)
        sort_transactions(mixed, SortField.CATEGORY, SortOrder.ASC)
        assert mixed == before


class TestPurity:
    """Aggregations hold no state between calls."""

    def test_repeated_calls_are_identical(self, mixed):
        for func in (
            calculate_balance,
            get_category_spending,
            get_mood_correlation,
            get_top_category,
        ):
            assert func(mixed) == func(mixed)

        for func in (
            get_daily_spending,
            get_today_spending,
            get_weekly_spending,
            get_daily_average,
            get_spending_streak,
        ):
            assert func(mixed, now=NOW) == func(mixed, now=NOW)

    def test_accepts_generators(self, mixed):
        assert calculate_balance(t for t in mixed) == calculate_balance(mixed)

    def test_resolve_now_converts_aware_to_local(self):
        aware = datetime(2025, 3, 14, 12, 0, tzinfo=timezone.utc)
        resolved = aggregation.resolve_now(aware)
        assert resolved.tzinfo is None
        assert resolved == aware.astimezone().replace(tzinfo=None)
