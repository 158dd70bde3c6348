"""
Two-Stage Validation Pipeline for the Add flow

STAGE 1 - SCHEMA VALIDATION:
- Amount present, numeric, finite and greater than zero
- Category (or income source) selected
These block the draft: nothing reaches the store.

STAGE 2 - SEMANTIC VALIDATION:
- Category outside the canonical set for the transaction type
- Unknown mood tag, or a mood on an income
- Absurd amount
These only warn; the user may still save.

Stage 2 runs only when stage 1 passes.
"""

import math
from typing import Optional

from expenso.config import get_settings
from expenso.config.settings import AppSettings
from expenso.models.transaction import (
    ExpenseCategory,
    IncomeSource,
    Mood,
    TransactionDraft,
    TransactionInput,
    TransactionType,
    ValidationIssue,
    ValidationResult,
)


EXPENSE_CATEGORIES = {c.value for c in ExpenseCategory}
INCOME_SOURCES = {s.value for s in IncomeSource}
MOODS = {m.value for m in Mood}


def parse_amount(raw) -> Optional[float]:
    """
    Parse a user-entered amount.

    Returns None for anything that is not a finite number. A comma is
    accepted as the decimal separator.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = str(raw).strip().replace(",", ".")
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    return value if math.isfinite(value) else None


class TransactionValidator:
    """Validates Add-form drafts before they are sent to the store."""

    def __init__(self, settings: Optional[AppSettings] = None):
        self._settings = settings or get_settings().app

    def _validate_schema(
        self,
        draft: TransactionDraft,
    ) -> tuple[bool, list[ValidationIssue]]:
        """
        Stage 1: required fields and amount format.

        Returns: (is_valid, list_of_issues)
        """
        issues = []

        amount = parse_amount(draft.amount)
        if amount is None or amount <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="missing" if draft.amount in (None, "") else "invalid_value",
                title="Invalid Amount",
                message="Please enter a valid amount",
                severity="error",
            ))

        if not draft.category:
            issues.append(ValidationIssue(
                field="category",
                issue_type="missing",
                title="Missing Category",
                message=(
                    "Please select a category"
                    if draft.type == TransactionType.EXPENSE
                    else "Please select an income source"
                ),
                severity="error",
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)
        return is_valid, issues

    def _validate_semantic(
        self,
        draft: TransactionDraft,
    ) -> tuple[bool, list[ValidationIssue]]:
        """
        Stage 2: values that parse but look wrong.

        Returns: (is_valid, list_of_issues)
        """
        issues = []
        is_expense = draft.type == TransactionType.EXPENSE

        allowed = EXPENSE_CATEGORIES if is_expense else INCOME_SOURCES
        if draft.category not in allowed:
            kind = "category" if is_expense else "income source"
            issues.append(ValidationIssue(
                field="category",
                issue_type="unknown_value",
                title="Unusual Category",
                message=f"'{draft.category}' is not a standard {kind}",
                severity="warning",
            ))

        if draft.mood:
            if not is_expense:
                issues.append(ValidationIssue(
                    field="mood",
                    issue_type="not_applicable",
                    title="Mood Ignored",
                    message="Mood is only recorded for expenses and will be dropped",
                    severity="warning",
                ))
            elif draft.mood not in MOODS:
                issues.append(ValidationIssue(
                    field="mood",
                    issue_type="unknown_value",
                    title="Unusual Mood",
                    message=f"'{draft.mood}' is not one of the standard moods",
                    severity="warning",
                ))

        amount = parse_amount(draft.amount)
        if amount is not None and amount > self._settings.max_transaction_amount:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                title="Large Amount",
                message=f"Amount ({amount:,.2f}) seems unusually high",
                severity="warning",
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)
        return is_valid, issues

    def validate(self, draft: TransactionDraft) -> ValidationResult:
        """
        Run the full two-stage validation pipeline.

        Returns:
            ValidationResult with all issues found
        """
        all_issues = []

        schema_valid, schema_issues = self._validate_schema(draft)
        all_issues.extend(schema_issues)

        semantic_valid = False
        if schema_valid:
            semantic_valid, semantic_issues = self._validate_semantic(draft)
            all_issues.extend(semantic_issues)

        warnings = [issue.message for issue in all_issues if issue.severity == "warning"]

        return ValidationResult(
            schema_valid=schema_valid,
            semantic_valid=semantic_valid,
            is_valid=schema_valid and semantic_valid,
            issues=all_issues,
            warnings=warnings,
        )

    def to_input(self, draft: TransactionDraft) -> TransactionInput:
        """
        Convert a draft into store input.

        Income mirrors its category into `source`; mood is kept for expenses
        only; blank note and mood become None.

        Raises:
            ValueError: If the draft does not pass validation
        """
        result = self.validate(draft)
        if not result.is_valid:
            error = result.first_error
            raise ValueError(error.message if error else "Transaction draft is not valid")

        is_income = draft.type == TransactionType.INCOME
        return TransactionInput(
            type=draft.type,
            amount=parse_amount(draft.amount),
            category=draft.category,
            source=draft.category if is_income else None,
            note=draft.note or None,
            mood=None if is_income else (draft.mood or None),
        )

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """Summary of a validation result, ready to show in an alert."""
        if result.is_valid and not result.warnings:
            return "✅ Looks good!"

        lines = []

        if result.has_errors:
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"❌ {issue.title}: {issue.message}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("⚠️ Please double-check:")
            for warning in result.warnings:
                lines.append(f"   • {warning}")

        return "\n".join(lines)
