"""
Main Orchestrator for Expenso

This module ties the components together and defines the flows the
presentation layer calls:
1. Transactions (draft → validate → store; list; delete)
2. Dashboard (fetch → aggregate → home screen snapshot)
3. Insights (fetch → aggregate → insight texts and roasts)

The orchestrator enforces the boundaries:
- Nothing reaches the store unless the draft passes validation
- Every report is computed from a single fetch
- Every step is audited, and storage errors are audited before they propagate
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

import structlog

from expenso.analytics import aggregation
from expenso.analytics.insights import InsightGenerator
from expenso.audit import AuditLogger, configure_logging, create_correlation_id
from expenso.config import get_settings
from expenso.config.settings import InsightSettings
from expenso.models.insights import DashboardSnapshot, InsightsReport
from expenso.models.transaction import (
    SortField,
    SortOrder,
    Transaction,
    TransactionDraft,
    ValidationResult,
)
from expenso.services.storage import (
    GoogleSheetsClient,
    GoogleSheetsTransactionStorage,
    InMemoryTransactionStorage,
    NotFoundError,
    StorageError,
    TransactionStorageInterface,
)
from expenso.validation import TransactionValidator


logger = structlog.get_logger(__name__)


async def _audit_failure(
    audit_logger: Optional[AuditLogger],
    operation: str,
    error: Exception,
    correlation_id: UUID,
) -> None:
    if not audit_logger:
        return
    if isinstance(error, StorageError):
        await audit_logger.log_storage_error(
            operation=operation,
            error_message=str(error),
            correlation_id=correlation_id,
        )
    else:
        await audit_logger.log_error(
            error_type=type(error).__name__,
            error_message=str(error),
            details={"operation": operation},
            correlation_id=correlation_id,
        )


class TransactionFlow:
    """
    Orchestrates adding, listing and deleting transactions.

    Flow for Add:
    1. Validate → Two-stage validation of the raw draft
    2. Convert → TransactionInput (income mirrors category into source)
    3. Store → The store assigns id and created_at
    """

    def __init__(
        self,
        storage: TransactionStorageInterface,
        validator: Optional[TransactionValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._validator = validator or TransactionValidator()
        self._audit_logger = audit_logger

    async def add_transaction(
        self,
        draft: TransactionDraft,
        correlation_id: Optional[UUID] = None,
    ) -> tuple[Optional[Transaction], ValidationResult, str]:
        """
        Validate a draft and store it.

        Returns:
            (transaction, validation_result, user_message)

        transaction is None when the draft was rejected; the store is not
        called in that case.

        Raises:
            StorageError: If the store rejects or fails the write
        """
        correlation_id = correlation_id or create_correlation_id()

        result = self._validator.validate(draft)
        message = self._validator.get_user_friendly_summary(result)

        if result.has_errors:
            if self._audit_logger:
                issues = [
                    {"field": i.field, "type": i.issue_type, "message": i.message}
                    for i in result.issues
                ]
                await self._audit_logger.log_validation_failed(
                    issues=issues,
                    correlation_id=correlation_id,
                )
            return None, result, message

        data = self._validator.to_input(draft)

        try:
            transaction = await self._storage.create(data)
        except Exception as e:
            await _audit_failure(self._audit_logger, "create", e, correlation_id)
            raise

        if self._audit_logger:
            await self._audit_logger.log_transaction_created(
                transaction_id=transaction.id,
                transaction_type=transaction.type.value,
                amount=transaction.amount,
                category=transaction.category,
                correlation_id=correlation_id,
            )

        if result.warnings:
            return transaction, result, f"✅ Transaction added\n\n{message}"
        return transaction, result, "✅ Transaction added"

    async def list_transactions(
        self,
        sort_by: SortField = SortField.DATE,
        order: SortOrder = SortOrder.DESC,
        correlation_id: Optional[UUID] = None,
    ) -> list[Transaction]:
        """Every transaction, ordered for the list screen."""
        correlation_id = correlation_id or create_correlation_id()

        try:
            transactions = await self._storage.fetch_all()
        except Exception as e:
            await _audit_failure(self._audit_logger, "fetch_all", e, correlation_id)
            raise

        if self._audit_logger:
            await self._audit_logger.log_transactions_fetched(
                count=len(transactions),
                correlation_id=correlation_id,
            )

        return aggregation.sort_transactions(transactions, sort_by=sort_by, order=order)

    async def get_transaction(
        self,
        transaction_id: UUID,
        correlation_id: Optional[UUID] = None,
    ) -> Transaction:
        """
        Look up one transaction for the detail view.

        Raises:
            NotFoundError: If no transaction has this id
        """
        correlation_id = correlation_id or create_correlation_id()

        try:
            transaction = await self._storage.get_by_id(transaction_id)
        except Exception as e:
            await _audit_failure(self._audit_logger, "get_by_id", e, correlation_id)
            raise

        if transaction is None:
            raise NotFoundError(f"Transaction not found: {transaction_id}")
        return transaction

    async def delete_transaction(
        self,
        transaction_id: UUID,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """
        Delete a transaction by id.

        Deleting an id that does not exist is a no-op and returns False.
        """
        correlation_id = correlation_id or create_correlation_id()

        try:
            deleted = await self._storage.delete(transaction_id)
        except Exception as e:
            await _audit_failure(self._audit_logger, "delete", e, correlation_id)
            raise

        if self._audit_logger:
            if deleted:
                await self._audit_logger.log_transaction_deleted(
                    transaction_id=transaction_id,
                    correlation_id=correlation_id,
                )
            else:
                await self._audit_logger.log_transaction_delete_missed(
                    transaction_id=transaction_id,
                    correlation_id=correlation_id,
                )

        return deleted


class InsightsFlow:
    """
    Builds the home screen snapshot and the insights report.

    Each call fetches the collection once and treats it as an immutable
    snapshot; every number and text in the result comes from that fetch.
    """

    def __init__(
        self,
        storage: TransactionStorageInterface,
        generator: Optional[InsightGenerator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._generator = generator or InsightGenerator()
        self._audit_logger = audit_logger

    @property
    def settings(self) -> InsightSettings:
        return self._generator.settings

    async def _fetch(self, correlation_id: UUID) -> list[Transaction]:
        try:
            transactions = await self._storage.fetch_all()
        except Exception as e:
            await _audit_failure(self._audit_logger, "fetch_all", e, correlation_id)
            raise

        if self._audit_logger:
            await self._audit_logger.log_transactions_fetched(
                count=len(transactions),
                correlation_id=correlation_id,
            )
        return transactions

    async def dashboard(
        self,
        now: Optional[datetime] = None,
        correlation_id: Optional[UUID] = None,
    ) -> DashboardSnapshot:
        """Greeting, balance, daily insight, charts and recent transactions."""
        correlation_id = correlation_id or create_correlation_id()
        now = aggregation.resolve_now(now)

        transactions = await self._fetch(correlation_id)

        snapshot = DashboardSnapshot(
            generated_at=now,
            greeting=self._generator.greeting(now),
            summary=aggregation.calculate_balance(transactions),
            daily_insight=self._generator.daily_insight(transactions, now=now),
            daily_spending=aggregation.get_daily_spending(
                transactions,
                days=self.settings.daily_series_days,
                now=now,
            ),
            category_spending=aggregation.get_category_spending(transactions),
            recent_transactions=aggregation.get_recent_transactions(
                transactions,
                limit=self.settings.recent_limit,
            ),
        )

        if self._audit_logger:
            await self._audit_logger.log_insights_generated(
                report="dashboard",
                transaction_count=len(transactions),
                correlation_id=correlation_id,
            )

        return snapshot

    async def insights(
        self,
        roasting_enabled: Optional[bool] = None,
        now: Optional[datetime] = None,
        correlation_id: Optional[UUID] = None,
    ) -> InsightsReport:
        """
        Weekly figures, streak, top category, mood correlation and texts.

        roasting_enabled=None uses the configured default.
        """
        correlation_id = correlation_id or create_correlation_id()
        now = aggregation.resolve_now(now)
        if roasting_enabled is None:
            roasting_enabled = self.settings.roasting_enabled

        transactions = await self._fetch(correlation_id)

        top = aggregation.get_top_category(transactions)
        correlation = aggregation.get_mood_correlation(transactions)

        report = InsightsReport(
            generated_at=now,
            roasting_enabled=roasting_enabled,
            why_broke=self._generator.why_broke(transactions, roasting_enabled, now=now),
            weekly_spending=aggregation.get_weekly_spending(transactions, now=now),
            daily_average=aggregation.get_daily_average(transactions, now=now),
            streak=aggregation.get_spending_streak(
                transactions,
                now=now,
                max_days=self.settings.streak_lookback_days,
            ),
            top_category=top,
            top_category_roast=self._generator.category_roast(
                top.category if top else None,
                roasting_enabled,
            ),
            mood_correlation=correlation,
            mood_roast=self._generator.mood_roast(correlation, roasting_enabled),
            tips=self._generator.tips(),
        )

        if self._audit_logger:
            await self._audit_logger.log_insights_generated(
                report="insights",
                transaction_count=len(transactions),
                correlation_id=correlation_id,
            )

        return report


def create_app_components(
    use_storage: bool = True,
) -> tuple[TransactionFlow, InsightsFlow, TransactionStorageInterface]:
    """
    Factory function to create all application components.

    Args:
        use_storage: Whether to initialize Google Sheets storage.
                    Set to False to run on in-memory storage.

    Returns:
        (transaction_flow, insights_flow, storage)
    """
    settings = get_settings()
    configure_logging(settings.app.log_level)

    storage: TransactionStorageInterface
    if use_storage:
        try:
            storage = GoogleSheetsTransactionStorage(GoogleSheetsClient())
        except Exception as e:
            # Storage not configured - continue in memory
            logger.warning("storage_not_configured", error=str(e))
            storage = InMemoryTransactionStorage()
    else:
        storage = InMemoryTransactionStorage()

    audit_logger = AuditLogger()

    transaction_flow = TransactionFlow(
        storage=storage,
        validator=TransactionValidator(settings.app),
        audit_logger=audit_logger,
    )
    insights_flow = InsightsFlow(
        storage=storage,
        generator=InsightGenerator(settings.insights),
        audit_logger=audit_logger,
    )

    return transaction_flow, insights_flow, storage
