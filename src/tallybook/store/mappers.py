"""Mapper functions between domain entities and stored representations.

Two layouts are supported: SQLAlchemy rows for the local store and
spreadsheet rows (``id, date, name, type, category, amount``) for the
Google Sheets store.
"""

import math
from typing import Optional, Sequence

from tallybook.domain import entities as domain
from tallybook.store.models import Transaction as ORMTransaction

SHEET_COLUMNS = ("id", "date", "name", "type", "category", "amount")


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.transaction_id,
        date=orm_transaction.date,
        description=orm_transaction.description,
        amount=float(orm_transaction.amount),
        type=domain.TransactionType(orm_transaction.type),
        category=orm_transaction.category,
    )


def transaction_to_orm(transaction: domain.Transaction) -> ORMTransaction:
    """Convert domain Transaction entity to a new SQLAlchemy model."""
    return ORMTransaction(
        transaction_id=transaction.id,
        date=transaction.date,
        description=transaction.description,
        amount=float(transaction.amount),
        type=domain.TransactionType(transaction.type).value,
        category=transaction.category or "",
    )


def is_header_row(row: Sequence[str]) -> bool:
    """Whether a sheet row is the column header."""
    return bool(row) and str(row[0]).strip().lower() == SHEET_COLUMNS[0]


def row_to_domain(row: Sequence[str]) -> Optional[domain.Transaction]:
    """Convert a spreadsheet row to a Transaction.

    Returns None for rows that are too short or carry an unparseable
    amount or an unknown type. The date is passed through unchanged.
    """
    if len(row) < len(SHEET_COLUMNS):
        return None

    txn_id, txn_date, name, txn_type, category, amount = row[: len(SHEET_COLUMNS)]
    try:
        parsed_amount = float(str(amount).replace(",", ""))
        parsed_type = domain.TransactionType(str(txn_type).strip().lower())
    except ValueError:
        return None
    if not math.isfinite(parsed_amount) or parsed_amount < 0:
        return None

    return domain.Transaction(
        id=str(txn_id),
        date=str(txn_date),
        description=str(name),
        amount=parsed_amount,
        type=parsed_type,
        category=str(category),
    )


def domain_to_row(transaction: domain.Transaction) -> list[str]:
    """Convert a Transaction to a spreadsheet row in column order."""
    return [
        transaction.id,
        transaction.date,
        transaction.description,
        domain.TransactionType(transaction.type).value,
        transaction.category,
        format_amount(transaction.amount),
    ]


def format_amount(amount: float) -> str:
    """Render an amount as plain text, without a trailing ".0" for whole numbers."""
    amount = float(amount)
    if amount.is_integer():
        return str(int(amount))
    return repr(amount)
