"""In-memory transaction store."""

from typing import Iterable

from tallybook.domain.entities import Transaction
from tallybook.domain.errors import ConflictError, duplicate_transaction_id
from tallybook.store.base import TransactionStore


class InMemoryStore(TransactionStore):
    """List-backed store, used for tests and embedding."""

    def __init__(self, transactions: Iterable[Transaction] = ()):
        self._transactions: list[Transaction] = []
        for txn in transactions:
            self.append(txn)

    def list_transactions(self) -> list[Transaction]:
        return list(self._transactions)

    def append(self, transaction: Transaction) -> None:
        if any(existing.id == transaction.id for existing in self._transactions):
            raise ConflictError(duplicate_transaction_id(transaction.id))
        self._transactions.append(transaction)
