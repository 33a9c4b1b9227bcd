"""Domain layer for tallybook application."""

from tallybook.domain.entities import (
    AggregationResult,
    Bucket,
    Category,
    CategoryTotals,
    Period,
    Transaction,
    TransactionType,
)
from tallybook.domain.aggregation import aggregate
from tallybook.domain.categories import reconcile_category

__all__ = [
    "AggregationResult",
    "Bucket",
    "Category",
    "CategoryTotals",
    "Period",
    "Transaction",
    "TransactionType",
    "aggregate",
    "reconcile_category",
]
