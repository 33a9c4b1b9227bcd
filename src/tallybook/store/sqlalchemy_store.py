"""SQLAlchemy-backed transaction store."""

from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tallybook.domain.entities import Transaction as DomainTransaction
from tallybook.domain.errors import ConflictError, StoreError, duplicate_transaction_id
from tallybook.logging_setup import get_logger
from tallybook.store.base import TransactionStore
from tallybook.store.mappers import transaction_to_domain, transaction_to_orm
from tallybook.store.models import Transaction, create_session_factory

logger = get_logger("tallybook.store.sqlalchemy_store")


class SQLAlchemyStore(TransactionStore):
    """SQLAlchemy-based implementation of the TransactionStore interface."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy store.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')

        Raises:
            StoreError: If the database cannot be opened or created
        """
        self.database_url = database_url
        try:
            self.session_factory = create_session_factory(database_url)
        except SQLAlchemyError as e:
            raise StoreError(f"Could not open database {database_url}: {e}") from e
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def close(self) -> None:
        """Close the current session."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def list_transactions(self) -> list[DomainTransaction]:
        """List all transactions in append order."""
        session = self._get_session()
        try:
            rows = session.query(Transaction).order_by(Transaction.position).all()
        except SQLAlchemyError as e:
            raise StoreError(f"Could not read transactions: {e}") from e
        return [transaction_to_domain(row) for row in rows]

    def transaction_exists(self, transaction_id: str) -> bool:
        """Check if a transaction with the given ID is stored."""
        session = self._get_session()
        try:
            row = (
                session.query(Transaction)
                .filter(Transaction.transaction_id == transaction_id)
                .first()
            )
        except SQLAlchemyError as e:
            raise StoreError(f"Could not read transactions: {e}") from e
        return row is not None

    def append(self, transaction: DomainTransaction) -> None:
        """Append a transaction."""
        if self.transaction_exists(transaction.id):
            raise ConflictError(duplicate_transaction_id(transaction.id))

        session = self._get_session()
        session.add(transaction_to_orm(transaction))
        try:
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise StoreError(f"Could not save transaction '{transaction.id}': {e}") from e
        logger.debug("Stored transaction %s", transaction.id)
