"""
Result models for aggregations and generated insights.

These are plain value objects. They carry unrounded numbers; formatting to
two decimal places is left to whoever renders them.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from expenso.models.transaction import Transaction


class BalanceSummary(BaseModel):
    """Income, expense and the difference between them."""
    model_config = ConfigDict(frozen=True)

    total_income: float = 0.0
    total_expense: float = 0.0
    balance: float = 0.0


class CategorySpending(BaseModel):
    """Summed expense amount for one category, with its chart color."""
    model_config = ConfigDict(frozen=True)

    category: str
    amount: float
    color: str


class MoodSpending(BaseModel):
    """How much is spent, on average, per expense tagged with a mood."""
    model_config = ConfigDict(frozen=True)

    mood: str
    total: float
    count: int = Field(ge=1)
    average: float


class DashboardSnapshot(BaseModel):
    """Everything the home screen shows, computed from one fetch."""

    generated_at: datetime
    greeting: str
    summary: BalanceSummary
    daily_insight: str
    daily_spending: list[float] = Field(
        default_factory=list,
        description="Expense totals per day, oldest first, today last"
    )
    category_spending: list[CategorySpending] = Field(default_factory=list)
    recent_transactions: list[Transaction] = Field(default_factory=list)

    @property
    def has_daily_spending(self) -> bool:
        """The line chart is only worth drawing when some day is non-zero."""
        return any(value > 0 for value in self.daily_spending)


class InsightsReport(BaseModel):
    """Everything the insights screen shows, computed from one fetch."""

    generated_at: datetime
    roasting_enabled: bool
    why_broke: str
    weekly_spending: float = 0.0
    daily_average: float = 0.0
    streak: int = Field(default=0, ge=0)
    top_category: Optional[CategorySpending] = None
    top_category_roast: str = ""
    mood_correlation: Optional[list[MoodSpending]] = None
    mood_roast: str = ""
    tips: list[str] = Field(default_factory=list)
