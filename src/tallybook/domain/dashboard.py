"""Dashboard domain service."""

from dataclasses import dataclass, field
from typing import Union

from tallybook.domain.aggregation import aggregate, coerce_period
from tallybook.domain.categories import category_shares
from tallybook.domain.entities import AggregationResult, Period
from tallybook.store.base import TransactionStore


@dataclass(frozen=True)
class Dashboard:
    """Everything the dashboard view renders for one period."""

    period: Period
    result: AggregationResult
    category_shares: dict[str, float] = field(default_factory=dict)
    transaction_count: int = 0

    @property
    def balance(self) -> float:
        return self.result.balance


class DashboardService:
    """Service for building dashboard views from a store."""

    def __init__(self, store: TransactionStore):
        """Initialize dashboard service.

        Args:
            store: Transaction store instance
        """
        self.store = store

    def build_dashboard(self, period: Union[Period, str] = Period.MONTHLY) -> Dashboard:
        """Read the store and aggregate it for ``period``.

        Every call re-reads the store.

        Raises:
            UnknownPeriodError: If the period is not recognized
            InvalidDateError: If a stored date does not parse
            StoreError: If the store cannot be read
        """
        period = coerce_period(period)
        transactions = self.store.list_transactions()
        result = aggregate(transactions, period)
        return Dashboard(
            period=period,
            result=result,
            category_shares=category_shares(result.category_totals),
            transaction_count=len(transactions),
        )
