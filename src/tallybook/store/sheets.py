"""Google Sheets transaction store.

Each transaction is one row of ``id, date, name, type, category, amount``
in columns A to F of a single tab.
"""

from typing import Any, Callable, Optional

from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from tallybook.config import SHEETS_SCOPES, SheetsConfig
from tallybook.domain.entities import Transaction
from tallybook.domain.errors import StoreError
from tallybook.logging_setup import get_logger
from tallybook.store.base import TransactionStore
from tallybook.store.mappers import domain_to_row, is_header_row, row_to_domain
from tallybook.utils.retry import call_with_retry

logger = get_logger("tallybook.store.sheets")

TOKEN_URI = "https://oauth2.googleapis.com/token"


def build_credentials(config: SheetsConfig) -> service_account.Credentials:
    """Build service account credentials from config.

    Inline credentials (email and private key) take precedence over a
    service account file.
    """
    if config.service_account_email and config.private_key:
        logger.info("Using inline service account credentials")
        info = {
            "type": "service_account",
            "client_email": config.service_account_email,
            "private_key": config.private_key,
            "token_uri": TOKEN_URI,
        }
        return service_account.Credentials.from_service_account_info(
            info, scopes=list(SHEETS_SCOPES)
        )

    logger.info("Using service account file %s", config.service_account_file)
    return service_account.Credentials.from_service_account_file(
        config.service_account_file, scopes=list(SHEETS_SCOPES)
    )


class GoogleSheetsStore(TransactionStore):
    """Transaction store backed by a Google spreadsheet.

    The Sheets API client is built on first use from the store's own
    config. Pass ``service`` to use an already built client.
    """

    def __init__(
        self,
        config: SheetsConfig,
        service: Optional[Any] = None,
        max_retries: int = 3,
        initial_delay: float = 1.0,
    ):
        self.config = config
        self._service = service
        self.max_retries = max_retries
        self.initial_delay = initial_delay

    def _get_service(self) -> Any:
        if self._service is None:
            try:
                credentials = build_credentials(self.config)
                self._service = build(
                    "sheets", "v4", credentials=credentials, cache_discovery=False
                )
            except (GoogleAuthError, ValueError, OSError) as e:
                raise StoreError(f"Could not connect to Google Sheets: {e}") from e
            logger.info("Sheets client initialized for %s", self.config.spreadsheet_id)
        return self._service

    def close(self) -> None:
        """Drop the API client; it is rebuilt on next use."""
        if self._service is not None and hasattr(self._service, "close"):
            self._service.close()
        self._service = None

    def _execute(self, action: str, request: Callable[[], dict]) -> dict:
        """Run a Sheets request with retries, mapping failures to StoreError."""
        try:
            return call_with_retry(
                request,
                max_retries=self.max_retries,
                initial_delay=self.initial_delay,
            )
        except HttpError as e:
            logger.error("Sheets %s failed: %s", action, e)
            raise StoreError(f"Google Sheets {action} failed with status {e.resp.status}") from e
        except (GoogleAuthError, OSError) as e:
            logger.error("Sheets %s failed: %s", action, e)
            raise StoreError(f"Google Sheets {action} failed: {e}") from e

    def list_transactions(self) -> list[Transaction]:
        """Read every transaction row from the sheet."""
        values = self._get_service().spreadsheets().values()

        def read_rows() -> dict:
            return values.get(
                spreadsheetId=self.config.spreadsheet_id,
                range=self.config.range,
            ).execute()

        response = self._execute("read", read_rows)
        rows = response.get("values", [])

        transactions = []
        for index, row in enumerate(rows, start=1):
            if index == 1 and is_header_row(row):
                continue
            txn = row_to_domain(row)
            if txn is None:
                logger.warning("Skipping malformed sheet row %d: %r", index, row)
                continue
            transactions.append(txn)

        logger.debug("Read %d transactions from sheet", len(transactions))
        return transactions

    def append(self, transaction: Transaction) -> None:
        """Append one transaction as a new sheet row."""
        values = self._get_service().spreadsheets().values()
        body = {"values": [domain_to_row(transaction)]}

        def append_row() -> dict:
            return values.append(
                spreadsheetId=self.config.spreadsheet_id,
                range=self.config.range,
                valueInputOption="RAW",
                body=body,
            ).execute()

        self._execute("append", append_row)
        logger.info("Appended transaction %s to sheet", transaction.id)
