"""Transaction domain service."""

import dataclasses
import uuid
from datetime import datetime, UTC
from typing import Any, Optional, Sequence, Union

from tallybook.domain.entities import Transaction, TransactionType
from tallybook.domain.errors import NotFoundError, ValidationError, transaction_not_found
from tallybook.logging_setup import get_logger
from tallybook.store.base import TransactionStore
from tallybook.utils.date_parser import format_timestamp, parse_timestamp

logger = get_logger("tallybook.domain.transaction")

DEFAULT_CATEGORY = "General"
_EDITABLE_FIELDS = {"date", "description", "amount", "type", "category"}


def _normalize_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Normalize entered field values before they reach a Transaction.

    Datetimes become stored timestamps, text is stripped, and type and
    amount are coerced to TransactionType and float.
    """
    normalized = dict(fields)
    if isinstance(normalized.get("date"), datetime):
        normalized["date"] = format_timestamp(normalized["date"])
    for name in ("description", "category"):
        if name in normalized:
            normalized[name] = (normalized[name] or "").strip()
    if "type" in normalized:
        try:
            normalized["type"] = TransactionType(normalized["type"])
        except ValueError:
            raise ValidationError(
                f"Unknown transaction type: {normalized['type']!r}"
            ) from None
    if "amount" in normalized:
        try:
            normalized["amount"] = float(normalized["amount"])
        except (TypeError, ValueError):
            raise ValidationError(
                f"Amount must be a number, got {normalized['amount']!r}"
            ) from None
    return normalized


def validate_transaction(transaction: Transaction) -> None:
    """Check the entry rules for a transaction.

    Type and amount range are enforced by Transaction itself; this adds
    the rules for entered data.

    Raises:
        ValidationError: If a rule is broken
    """
    if not transaction.description or not transaction.description.strip():
        raise ValidationError("Description must not be empty")
    if transaction.amount <= 0:
        raise ValidationError(f"Amount must be positive, got {transaction.amount}")
    try:
        parse_timestamp(transaction.date)
    except ValueError as e:
        raise ValidationError(str(e)) from None


class TransactionService:
    """Service for recording transactions.

    The service keeps a working copy of the store's transactions. New
    transactions are appended to the store and the working copy; edits and
    deletions only change the working copy, since the store is append-only.
    """

    def __init__(self, store: TransactionStore):
        """Initialize transaction service.

        Args:
            store: Transaction store instance
        """
        self.store = store
        self._transactions: list[Transaction] = []

    def load(self) -> list[Transaction]:
        """Refresh the working copy from the store.

        Raises:
            StoreError: If the store cannot be read
        """
        self._transactions = self.store.list_transactions()
        return list(self._transactions)

    def list_transactions(self) -> list[Transaction]:
        """Return the working copy."""
        return list(self._transactions)

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get a transaction from the working copy by ID."""
        for txn in self._transactions:
            if txn.id == transaction_id:
                return txn
        return None

    def create_transaction(
        self,
        description: str,
        amount: float,
        type: Union[TransactionType, str],
        category: str = DEFAULT_CATEGORY,
        date: Optional[Union[datetime, str]] = None,
        transaction_id: Optional[str] = None,
    ) -> Transaction:
        """Create a transaction and append it to the store.

        Args:
            description: Free-text label
            amount: Positive amount
            type: "income" or "expense"
            category: Free-text category
            date: Timestamp; defaults to now
            transaction_id: ID to use; generated if not provided

        Returns:
            The stored transaction

        Raises:
            ValidationError: If the entry rules are broken
            StoreError: If the store cannot be written
        """
        if date is None:
            date = datetime.now(UTC)

        fields = _normalize_fields(
            {
                "date": date,
                "description": description,
                "amount": amount,
                "type": type,
                "category": category,
            }
        )
        transaction = Transaction(id=transaction_id or uuid.uuid4().hex, **fields)
        validate_transaction(transaction)

        self.store.append(transaction)
        self._transactions.append(transaction)
        logger.info("Created %s transaction %s", transaction.type.value, transaction.id)
        return transaction

    def update_transaction(self, transaction_id: str, **changes: Any) -> Transaction:
        """Replace fields of a transaction in the working copy.

        Raises:
            NotFoundError: If the transaction is not in the working copy
            ValidationError: If a field is not editable or the result is invalid
        """
        unknown = set(changes) - _EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot edit fields: {', '.join(sorted(unknown))}")

        for index, txn in enumerate(self._transactions):
            if txn.id == transaction_id:
                updated = dataclasses.replace(txn, **_normalize_fields(changes))
                validate_transaction(updated)
                self._transactions[index] = updated
                return updated

        raise NotFoundError(transaction_not_found(transaction_id))

    def delete_transaction(self, transaction_id: str) -> None:
        """Remove a transaction from the working copy.

        Raises:
            NotFoundError: If the transaction is not in the working copy
        """
        remaining = [txn for txn in self._transactions if txn.id != transaction_id]
        if len(remaining) == len(self._transactions):
            raise NotFoundError(transaction_not_found(transaction_id))
        self._transactions = remaining

    def balance(self, transactions: Optional[Sequence[Transaction]] = None) -> float:
        """Income minus expenses over ``transactions`` (the working copy by default)."""
        if transactions is None:
            transactions = self._transactions
        return sum(
            float(txn.amount) if txn.type == TransactionType.INCOME else -float(txn.amount)
            for txn in transactions
        )
