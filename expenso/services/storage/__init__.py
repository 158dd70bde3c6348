"""
Storage Services Package

Provides the abstract transaction store interface and its implementations.
Google Sheets is the hosted backend; the in-memory store serves tests and
unconfigured local runs.
"""

from expenso.services.storage.interface import (
    ConstraintViolationError,
    NotFoundError,
    StorageConnectionError,
    StorageError,
    TransactionStorageInterface,
)
from expenso.services.storage.google_sheets import (
    GoogleSheetsClient,
    GoogleSheetsTransactionStorage,
)
from expenso.services.storage.memory import InMemoryTransactionStorage

__all__ = [
    # Interface
    "TransactionStorageInterface",
    # Exceptions
    "ConstraintViolationError",
    "NotFoundError",
    "StorageConnectionError",
    "StorageError",
    # Implementations
    "GoogleSheetsClient",
    "GoogleSheetsTransactionStorage",
    "InMemoryTransactionStorage",
]
