"""Aggregation of transactions into period buckets and category totals."""

import math
from datetime import datetime
from typing import Sequence, Union

from tallybook.domain.categories import breakdown_slot, reconcile_category
from tallybook.domain.entities import (
    AggregationResult,
    Bucket,
    CategoryTotals,
    Period,
    Transaction,
    TransactionType,
)
from tallybook.domain.errors import InvalidDateError, UnknownPeriodError, unknown_period
from tallybook.logging_setup import get_logger
from tallybook.utils.date_parser import parse_timestamp

logger = get_logger("tallybook.domain.aggregation")

# Number of distinct buckets kept for every period except yearly
BUCKET_WINDOW = 10

# English abbreviations, independent of the process locale
_MONTH_ABBR = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def coerce_period(value: Union[Period, str]) -> Period:
    """Return ``value`` as a Period.

    Raises:
        UnknownPeriodError: If the value is not one of the four periods
    """
    if isinstance(value, Period):
        return value
    try:
        return Period(value)
    except ValueError:
        raise UnknownPeriodError(unknown_period(value)) from None


def parse_transaction_date(txn: Transaction) -> datetime:
    """Parse a transaction's stored date into an aware UTC datetime.

    Raises:
        InvalidDateError: If the date does not parse
    """
    try:
        return parse_timestamp(txn.date)
    except ValueError:
        raise InvalidDateError(txn.id, txn.date) from None


def week_number(moment: datetime) -> int:
    """Week of the year for ``moment``.

    Weeks are counted from January 1, offset by the weekday January 1
    falls on (0 = Sunday), so week 1 ends on the first Saturday.
    """
    jan1 = moment.date().replace(month=1, day=1)
    day_of_year = (moment.date() - jan1).days
    jan1_weekday = (jan1.weekday() + 1) % 7
    return math.ceil((day_of_year + jan1_weekday + 1) / 7)


def bucket_key(moment: datetime, period: Union[Period, str]) -> str:
    """Key of the bucket ``moment`` falls into for ``period``."""
    period = coerce_period(period)
    if period == Period.DAILY:
        return moment.strftime("%Y-%m-%d")
    if period == Period.WEEKLY:
        return f"Week {week_number(moment)}, {moment.year}"
    if period == Period.MONTHLY:
        return f"{_MONTH_ABBR[moment.month - 1]} {moment.year}"
    return str(moment.year)


def aggregate(
    transactions: Sequence[Transaction], period: Union[Period, str]
) -> AggregationResult:
    """Aggregate transactions into buckets, grand totals and category totals.

    Buckets appear in the order their keys are first seen. For every period
    except yearly, only the first ``BUCKET_WINDOW`` buckets are kept and that
    window is returned reversed; yearly returns every bucket unchanged.

    Args:
        transactions: Transactions in store order
        period: Bucketing granularity

    Returns:
        AggregationResult for the whole batch

    Raises:
        UnknownPeriodError: If the period is not recognized
        InvalidDateError: If any transaction date does not parse; the whole
            batch is rejected
    """
    period = coerce_period(period)

    grouped: dict[str, dict[str, float]] = {}
    total_income = 0.0
    total_expenses = 0.0
    category_totals = {"food": 0.0, "transport": 0.0, "taxes": 0.0, "others": 0.0}

    for txn in transactions:
        key = bucket_key(parse_transaction_date(txn), period)

        group = grouped.setdefault(key, {"income": 0.0, "expenses": 0.0})
        amount = float(txn.amount)
        if txn.type == TransactionType.INCOME:
            group["income"] += amount
            total_income += amount
        elif txn.type == TransactionType.EXPENSE:
            group["expenses"] += amount
            total_expenses += amount
            slot = breakdown_slot(reconcile_category(txn.category))
            if slot is not None:
                category_totals[slot] += amount

    buckets = [
        Bucket(key=key, income=values["income"], expenses=values["expenses"])
        for key, values in grouped.items()
    ]
    if period != Period.YEARLY:
        buckets = list(reversed(buckets[:BUCKET_WINDOW]))

    logger.debug(
        "Aggregated %d transactions into %d %s buckets",
        len(transactions),
        len(buckets),
        period.value,
    )
    return AggregationResult(
        buckets=tuple(buckets),
        total_income=total_income,
        total_expenses=total_expenses,
        category_totals=CategoryTotals(**category_totals),
    )
