"""Transaction stores for tallybook."""

from tallybook.store.base import TransactionStore
from tallybook.store.memory import InMemoryStore
from tallybook.store.factories import create_store, create_sqlite_store, create_sheets_store

__all__ = [
    "TransactionStore",
    "InMemoryStore",
    "create_store",
    "create_sqlite_store",
    "create_sheets_store",
]
