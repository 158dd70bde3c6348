"""
Abstract Storage Interface

Business logic talks to the transaction store only through this interface.
This allows us to:
1. Swap Google Sheets for a relational database later
2. Use in-memory storage for testing and unconfigured local runs
3. Keep the analytics decoupled from where transactions live

The interface is intentionally small: transactions are created and deleted,
never updated in place.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from expenso.models.transaction import Transaction, TransactionInput, TransactionType


class TransactionStorageInterface(ABC):
    """
    Abstract interface for transaction storage operations.

    Any storage implementation (Google Sheets, PostgreSQL, etc.)
    must implement these methods.
    """

    @abstractmethod
    async def fetch_all(self) -> list[Transaction]:
        """
        Retrieve every stored transaction.

        Returns:
            Transactions ordered by created_at, newest first

        Raises:
            StorageError: If the store cannot be read
        """
        pass

    @abstractmethod
    async def get_by_id(self, transaction_id: UUID) -> Optional[Transaction]:
        """
        Retrieve a transaction by its ID.

        Returns:
            The transaction if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, data: TransactionInput) -> Transaction:
        """
        Record a new transaction.

        The store assigns the id and created_at.

        Returns:
            The stored transaction

        Raises:
            ConstraintViolationError: If the data breaks a store constraint
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    async def delete(self, transaction_id: UUID) -> bool:
        """
        Delete a transaction by ID.

        Returns:
            True if a transaction was removed, False if none matched
        """
        pass


def enforce_constraints(data: TransactionInput) -> None:
    """
    Apply the store's table constraints to an input before writing it.

    TransactionInput already validates these, but a model built with
    model_construct() skips validation, so backends check again.

    Raises:
        ConstraintViolationError: On non-positive amount, unknown type or empty category
    """
    if not isinstance(data.amount, (int, float)) or not data.amount > 0:
        raise ConstraintViolationError(f"amount must be greater than zero, got {data.amount!r}")
    if data.type not in (TransactionType.EXPENSE, TransactionType.INCOME):
        raise ConstraintViolationError(f"invalid transaction type: {data.type!r}")
    if not data.category:
        raise ConstraintViolationError("category is required")


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class ConstraintViolationError(StorageError):
    """Data rejected by a store constraint (e.g. non-positive amount)."""
    pass


class StorageConnectionError(StorageError):
    """Could not connect to storage backend."""
    pass
