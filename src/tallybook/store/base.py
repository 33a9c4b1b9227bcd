"""Abstract transaction store interface."""

from abc import ABC, abstractmethod

# Import entities directly to avoid circular import through domain/__init__.py
from tallybook.domain.entities import Transaction


class TransactionStore(ABC):
    """Append-only store of transactions."""

    @abstractmethod
    def list_transactions(self) -> list[Transaction]:
        """Return every stored transaction in store order.

        Raises:
            StoreError: If the backing store cannot be read
        """
        pass

    @abstractmethod
    def append(self, transaction: Transaction) -> None:
        """Append one transaction.

        Raises:
            StoreError: If the backing store cannot be written
            ConflictError: If the store already holds the transaction ID
        """
        pass

    def close(self) -> None:
        """Release any resources held by the store."""
        pass
