"""
Data Models Package

This package contains all Pydantic models used in Expenso.
All data flowing through the system must conform to these schemas.
"""

from expenso.models.transaction import (
    ExpenseCategory,
    IncomeSource,
    Mood,
    SortField,
    SortOrder,
    Transaction,
    TransactionDraft,
    TransactionInput,
    TransactionType,
    ValidationIssue,
    ValidationResult,
)
from expenso.models.insights import (
    BalanceSummary,
    CategorySpending,
    DashboardSnapshot,
    InsightsReport,
    MoodSpending,
)
from expenso.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Transaction models
    "ExpenseCategory",
    "IncomeSource",
    "Mood",
    "SortField",
    "SortOrder",
    "Transaction",
    "TransactionDraft",
    "TransactionInput",
    "TransactionType",
    "ValidationIssue",
    "ValidationResult",
    # Result models
    "BalanceSummary",
    "CategorySpending",
    "DashboardSnapshot",
    "InsightsReport",
    "MoodSpending",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
