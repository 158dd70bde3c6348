"""
In-memory transaction storage.

Used by the test suite and by local runs where Google Sheets is not
configured. Nothing survives the process.
"""

from datetime import datetime, timezone
from typing import Iterable, Optional
from uuid import UUID, uuid4

from expenso.models.transaction import Transaction, TransactionInput
from expenso.services.storage.interface import (
    TransactionStorageInterface,
    enforce_constraints,
)


class InMemoryTransactionStorage(TransactionStorageInterface):
    """Dict-backed store with the same semantics as the hosted backend."""

    def __init__(self, transactions: Optional[Iterable[Transaction]] = None):
        self._transactions: dict[UUID, Transaction] = {}
        for transaction in transactions or ():
            self._transactions[transaction.id] = transaction

    def __len__(self) -> int:
        return len(self._transactions)

    async def fetch_all(self) -> list[Transaction]:
        return sorted(
            self._transactions.values(),
            key=lambda t: t.created_at.astimezone(),
            reverse=True,
        )

    async def get_by_id(self, transaction_id: UUID) -> Optional[Transaction]:
        return self._transactions.get(transaction_id)

    async def create(self, data: TransactionInput) -> Transaction:
        enforce_constraints(data)
        transaction = Transaction(
            id=uuid4(),
            created_at=datetime.now(timezone.utc),
            **data.model_dump(),
        )
        self._transactions[transaction.id] = transaction
        return transaction

    async def delete(self, transaction_id: UUID) -> bool:
        return self._transactions.pop(transaction_id, None) is not None
