"""
Core Data Models for Expenso

These models define the schemas for all transaction data flowing through the
system. They are designed to:
1. Enforce the store's constraints (positive amount, known type) at runtime
2. Provide clear validation error messages
3. Be serializable for storage and logging

A Transaction is immutable once created. The only way to change one is to
delete it and record a new one.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Union
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """Direction of a money movement. Partitions every collection in two."""
    EXPENSE = "expense"
    INCOME = "income"


class ExpenseCategory(str, Enum):
    """Canonical expense categories offered by the Add flow."""
    FOOD = "Food"
    TRAVEL = "Travel"
    SHOPPING = "Shopping"
    BILLS = "Bills"
    FUN = "Fun"
    OTHER = "Other"


class IncomeSource(str, Enum):
    """
    Canonical income sources.

    Stored in the same `category` field as expense categories.
    """
    SALARY = "Salary"
    FREELANCE = "Freelance"
    INVESTMENT = "Investment"
    GIFT = "Gift"
    OTHER = "Other"


class Mood(str, Enum):
    """
    Mood tags a user can attach to an expense.

    The glyphs are opaque tags. Stored transactions may carry values outside
    this set and the analytics treat them like any other tag.
    """
    HAPPY = "😊"
    NEUTRAL = "😐"
    SAD = "😢"
    ANGRY = "😤"
    CELEBRATING = "🎉"


class SortField(str, Enum):
    """Fields the transaction list can be ordered by."""
    DATE = "date"
    CATEGORY = "category"
    SOURCE = "source"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


# =============================================================================
# TRANSACTION MODELS
# =============================================================================

class TransactionInput(BaseModel):
    """
    Data needed to create a transaction.

    Identity and timestamp are assigned by the store, so they are absent here.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    type: TransactionType = Field(
        ...,
        description="expense or income"
    )
    amount: float = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Positive amount, currency-agnostic"
    )
    category: str = Field(
        ...,
        min_length=1,
        description="Expense category, or income source for income"
    )
    source: Optional[str] = Field(
        default=None,
        description="Income source (income only, mirrors category)"
    )
    note: Optional[str] = Field(
        default=None,
        description="Optional user note"
    )
    mood: Optional[str] = Field(
        default=None,
        description="Optional mood tag (expenses only)"
    )
    user_id: Optional[UUID] = None

    @model_validator(mode='after')
    def validate_type_specific_fields(self) -> 'TransactionInput':
        """Mood belongs to expenses, source belongs to income."""
        if self.type == TransactionType.INCOME and self.mood:
            raise ValueError("Mood can only be set on expense transactions")
        if self.type == TransactionType.EXPENSE and self.source:
            raise ValueError("Source can only be set on income transactions")
        return self


class Transaction(BaseModel):
    """
    A recorded money movement as returned by the store.

    Frozen: analytics treat every fetched collection as an immutable snapshot.
    """
    model_config = ConfigDict(frozen=True)

    # Identity (assigned by the store)
    id: UUID = Field(
        ...,
        description="Unique transaction ID"
    )
    user_id: Optional[UUID] = Field(
        default=None,
        description="Owner, reserved for authenticated use"
    )

    type: TransactionType
    amount: float = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
    )
    category: str
    source: Optional[str] = None
    note: Optional[str] = None
    mood: Optional[str] = None

    # Sole ordering key and time axis for all windowed aggregations
    created_at: datetime = Field(
        ...,
        description="When the store recorded the transaction"
    )

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME


class TransactionDraft(BaseModel):
    """
    Raw input from the Add form, before validation.

    Everything is optional or loosely typed because this is what the user
    typed, not what we trust. TransactionValidator turns it into a
    TransactionInput.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    type: TransactionType = TransactionType.EXPENSE
    amount: Optional[Union[str, float]] = Field(
        default=None,
        description="Amount as entered (text or number)"
    )
    category: Optional[str] = None
    note: Optional[str] = None
    mood: Optional[str] = None


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_value', 'unknown_value')"
    )
    title: str = Field(
        ...,
        description="Short heading for the issue (e.g., 'Invalid Amount')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """
    Result of the two-stage validation of a transaction draft.

    Stage 1: Schema validation (amount parses and is positive, category present)
    Stage 2: Semantic validation (canonical values, sanity limits)
    """

    schema_valid: bool
    semantic_valid: bool
    is_valid: bool = Field(
        ...,
        description="True when the draft may be sent to the store"
    )
    issues: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[str] = Field(
        default_factory=list,
        description="Non-blocking warnings"
    )

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def first_error(self) -> Optional[ValidationIssue]:
        return next((i for i in self.issues if i.severity == "error"), None)
