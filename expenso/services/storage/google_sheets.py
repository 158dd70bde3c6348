"""
Google Sheets Storage Implementation

Google Sheets is the hosted backend for transactions:
1. Users can inspect their own data directly in Sheets
2. No database setup required
3. Easy to export/migrate later

TRADEOFFS:
- Not suitable for high-volume data (a personal ledger is a few hundred rows)
- No server-side queries, so ordering is done in Python
- No transactions; a row is the unit of atomicity

The implementation follows the abstract interface, so a relational backend
can replace it without touching the analytics.
"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

import gspread
import structlog
from google.oauth2.service_account import Credentials
from tenacity import retry, stop_after_attempt, wait_exponential

from expenso.config import get_settings
from expenso.config.settings import GoogleSheetsSettings
from expenso.models.transaction import (
    Transaction,
    TransactionInput,
    TransactionType,
)
from expenso.services.storage.interface import (
    StorageConnectionError,
    StorageError,
    TransactionStorageInterface,
    enforce_constraints,
)


logger = structlog.get_logger(__name__)


# Column mappings for the Transactions sheet
TRANSACTION_COLUMNS = [
    "id",
    "user_id",
    "type",
    "amount",
    "category",
    "source",
    "note",
    "mood",
    "created_at",
]


class GoogleSheetsClient:
    """
    Low-level Google Sheets client wrapper.

    Handles authentication and provides retry logic for API calls.
    """

    def __init__(self, settings: Optional[GoogleSheetsSettings] = None):
        self._client: Optional[gspread.Client] = None
        self._spreadsheet: Optional[gspread.Spreadsheet] = None
        self._settings = settings or get_settings().google_sheets

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def connect(self) -> gspread.Client:
        """
        Establish connection to Google Sheets.

        Uses service account credentials for authentication.
        """
        if self._client is None:
            try:
                scopes = [
                    "https://www.googleapis.com/auth/spreadsheets",
                    "https://www.googleapis.com/auth/drive",
                ]
                credentials = Credentials.from_service_account_file(
                    self._settings.credentials_path,
                    scopes=scopes,
                )
                self._client = gspread.authorize(credentials)
            except FileNotFoundError:
                raise StorageConnectionError(
                    f"Google credentials file not found: {self._settings.credentials_path}"
                )
            except Exception as e:
                raise StorageConnectionError(f"Failed to connect to Google Sheets: {e}")

        return self._client

    def get_spreadsheet(self) -> gspread.Spreadsheet:
        """Get the configured spreadsheet."""
        if self._spreadsheet is None:
            client = self.connect()
            try:
                self._spreadsheet = client.open_by_key(
                    self._settings.spreadsheet_id
                )
            except gspread.SpreadsheetNotFound:
                raise StorageConnectionError(
                    f"Spreadsheet not found: {self._settings.spreadsheet_id}"
                )
        return self._spreadsheet

    def get_transactions_sheet(self) -> gspread.Worksheet:
        """Get or create the Transactions worksheet."""
        spreadsheet = self.get_spreadsheet()
        try:
            sheet = spreadsheet.worksheet(self._settings.transactions_sheet_name)
        except gspread.WorksheetNotFound:
            sheet = spreadsheet.add_worksheet(
                title=self._settings.transactions_sheet_name,
                rows=1000,
                cols=len(TRANSACTION_COLUMNS),
            )
            sheet.append_row(TRANSACTION_COLUMNS)
        return sheet


class GoogleSheetsTransactionStorage(TransactionStorageInterface):
    """
    Google Sheets implementation of transaction storage.

    One transaction per row, columns in TRANSACTION_COLUMNS order,
    first row is the header.
    """

    def __init__(self, client: Optional[GoogleSheetsClient] = None):
        self._client = client or GoogleSheetsClient()

    def _transaction_to_row(self, transaction: Transaction) -> list:
        """Convert a Transaction to a spreadsheet row."""
        return [
            str(transaction.id),
            str(transaction.user_id) if transaction.user_id else "",
            transaction.type.value,
            repr(transaction.amount),
            transaction.category,
            transaction.source or "",
            transaction.note or "",
            transaction.mood or "",
            transaction.created_at.isoformat(),
        ]

    def _row_to_transaction(self, row: list) -> Transaction:
        """Convert a spreadsheet row to a Transaction."""
        # Handle missing trailing cells gracefully
        def safe_get(index: int, default: str = "") -> str:
            try:
                return row[index] if row[index] else default
            except IndexError:
                return default

        return Transaction(
            id=UUID(safe_get(0)),
            user_id=UUID(safe_get(1)) if safe_get(1) else None,
            type=TransactionType(safe_get(2)),
            amount=float(safe_get(3)),
            category=safe_get(4),
            source=safe_get(5) or None,
            note=safe_get(6) or None,
            mood=safe_get(7) or None,
            created_at=datetime.fromisoformat(safe_get(8)),
        )

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def fetch_all(self) -> list[Transaction]:
        """Read every transaction, newest first."""
        try:
            sheet = self._client.get_transactions_sheet()
            all_rows = sheet.get_all_values()[1:]  # Skip header
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to fetch transactions: {e}")

        transactions = []
        for line_no, row in enumerate(all_rows, start=2):
            if not row or not row[0]:  # Skip empty rows
                continue
            try:
                transactions.append(self._row_to_transaction(row))
            except (ValueError, TypeError) as e:
                logger.warning("malformed_transaction_row", row=line_no, error=str(e))

        transactions.sort(key=lambda t: t.created_at.astimezone(), reverse=True)
        return transactions

    async def get_by_id(self, transaction_id: UUID) -> Optional[Transaction]:
        """Retrieve a transaction by its ID."""
        try:
            sheet = self._client.get_transactions_sheet()
            all_rows = sheet.get_all_values()[1:]
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to get transaction: {e}")

        for line_no, row in enumerate(all_rows, start=2):
            if row and row[0] == str(transaction_id):
                try:
                    return self._row_to_transaction(row)
                except (ValueError, TypeError) as e:
                    raise StorageError(
                        f"Malformed transaction row {line_no}: {e}"
                    ) from e
        return None

    async def create(self, data: TransactionInput) -> Transaction:
        """Append a new transaction row. Not retried, to avoid duplicate rows."""
        enforce_constraints(data)

        transaction = Transaction(
            id=uuid4(),
            created_at=datetime.now(timezone.utc),
            **data.model_dump(),
        )
        try:
            sheet = self._client.get_transactions_sheet()
            sheet.append_row(
                self._transaction_to_row(transaction),
                value_input_option="RAW",
            )
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to save transaction: {e}")

        logger.debug("transaction_row_appended", transaction_id=str(transaction.id))
        return transaction

    async def delete(self, transaction_id: UUID) -> bool:
        """Delete the row holding this transaction, if any."""
        try:
            sheet = self._client.get_transactions_sheet()
            all_rows = sheet.get_all_values()

            for idx, row in enumerate(all_rows[1:], start=2):  # Row 1 is the header
                if row and row[0] == str(transaction_id):
                    sheet.delete_rows(idx)
                    return True

            return False
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to delete transaction: {e}")
