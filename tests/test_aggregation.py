"""Tests for the aggregation engine."""

import logging
from datetime import UTC, datetime, timedelta

import pytest

from tallybook.domain.aggregation import (
    BUCKET_WINDOW,
    aggregate,
    bucket_key,
    coerce_period,
    parse_transaction_date,
    week_number,
)
from tallybook.domain.entities import (
    AggregationResult,
    Bucket,
    CategoryTotals,
    Period,
    Transaction,
    TransactionType,
)
from tallybook.domain.errors import InvalidDateError, UnknownPeriodError, ValidationError

INCOME = TransactionType.INCOME
EXPENSE = TransactionType.EXPENSE


def _utc(*args):
    return datetime(*args, tzinfo=UTC)


class TestBucketKeys:
    """Tests for bucket key derivation."""

    def test_daily_key(self):
        assert bucket_key(_utc(2024, 3, 15, 10, 0), Period.DAILY) == "2024-03-15"

    def test_monthly_key(self):
        assert bucket_key(_utc(2024, 3, 15), Period.MONTHLY) == "Mar 2024"
        assert bucket_key(_utc(2023, 12, 1), Period.MONTHLY) == "Dec 2023"

    def test_yearly_key(self):
        assert bucket_key(_utc(2024, 3, 15), Period.YEARLY) == "2024"

    def test_weekly_key(self):
        assert bucket_key(_utc(2024, 3, 15), Period.WEEKLY) == "Week 11, 2024"

    def test_key_accepts_period_string(self):
        assert bucket_key(_utc(2024, 3, 15), "daily") == "2024-03-15"

    def test_unknown_period_key(self):
        with pytest.raises(UnknownPeriodError):
            bucket_key(_utc(2024, 3, 15), "hourly")


class TestWeekNumber:
    """Week numbers count from January 1, offset by its weekday (0 = Sunday)."""

    def test_first_day_is_week_one(self):
        # 2024-01-01 is a Monday
        assert week_number(_utc(2024, 1, 1)) == 1

    def test_week_one_ends_on_first_saturday(self):
        assert week_number(_utc(2024, 1, 6)) == 1
        assert week_number(_utc(2024, 1, 7)) == 2

    def test_year_starting_on_sunday(self):
        # 2023-01-01 is a Sunday
        assert week_number(_utc(2023, 1, 1)) == 1
        assert week_number(_utc(2023, 1, 7)) == 1
        assert week_number(_utc(2023, 1, 8)) == 2

    def test_year_starting_on_saturday(self):
        # 2022-01-01 is a Saturday, so Jan 2 starts week 2
        assert week_number(_utc(2022, 1, 1)) == 1
        assert week_number(_utc(2022, 1, 2)) == 2

    def test_last_day_of_leap_year(self):
        assert week_number(_utc(2024, 12, 31)) == 53

    def test_time_of_day_does_not_change_week(self):
        assert week_number(_utc(2023, 1, 7, 23, 59)) == week_number(_utc(2023, 1, 7, 0, 0))


class TestParsing:
    """Tests for period coercion and date parsing."""

    def test_coerce_period(self):
        assert coerce_period("weekly") is Period.WEEKLY
        assert coerce_period(Period.YEARLY) is Period.YEARLY

    def test_coerce_unknown_period(self):
        with pytest.raises(UnknownPeriodError) as exc_info:
            coerce_period("quarterly")
        assert "quarterly" in str(exc_info.value)

    def test_unknown_period_is_validation_error(self):
        with pytest.raises(ValidationError):
            coerce_period("")

    def test_parse_transaction_date_is_utc(self, make_transaction):
        txn = make_transaction(date="2024-03-15T23:30:00-05:00")
        assert parse_transaction_date(txn) == _utc(2024, 3, 16, 4, 30)

    def test_parse_transaction_date_invalid(self, make_transaction):
        txn = make_transaction(id="bad-1", date="not a date")
        with pytest.raises(InvalidDateError) as exc_info:
            parse_transaction_date(txn)
        assert exc_info.value.transaction_id == "bad-1"
        assert exc_info.value.value == "not a date"


class TestAggregate:
    """Tests for aggregate()."""

    def test_empty_input(self):
        result = aggregate([], Period.MONTHLY)

        assert result == AggregationResult()
        assert result.buckets == ()
        assert result.total_income == 0
        assert result.total_expenses == 0
        assert result.category_totals == CategoryTotals()

    @pytest.mark.parametrize("period", list(Period))
    def test_empty_input_every_period(self, period):
        result = aggregate([], period)
        assert result.buckets == ()
        assert result.balance == 0

    def test_single_daily_expense(self, make_transaction):
        txn = make_transaction(
            date="2024-03-15T00:00:00.000Z", type=EXPENSE, amount=42.50, category="food"
        )

        result = aggregate([txn], Period.DAILY)

        assert result.buckets == (Bucket(key="2024-03-15", income=0.0, expenses=42.5),)
        assert result.total_expenses == 42.5
        assert result.total_income == 0
        assert result.category_totals.food == 42.5

    def test_monthly_income_and_expense_share_bucket(self, make_transaction):
        transactions = [
            make_transaction(date="2024-03-01T09:00:00Z", type=INCOME, amount=1000, category="salary"),
            make_transaction(date="2024-03-20T18:00:00Z", type=EXPENSE, amount=200, category="transport"),
        ]

        result = aggregate(transactions, Period.MONTHLY)

        assert result.buckets == (Bucket(key="Mar 2024", income=1000.0, expenses=200.0),)
        assert result.total_income == 1000
        assert result.total_expenses == 200
        assert result.category_totals.transport == 200
        assert result.balance == 800

    def test_yearly_keeps_insertion_order(self, make_transaction):
        transactions = [
            make_transaction(date="2022-06-01T00:00:00Z"),
            make_transaction(date="2023-06-01T00:00:00Z"),
            make_transaction(date="2024-06-01T00:00:00Z"),
        ]

        result = aggregate(transactions, Period.YEARLY)

        assert [bucket.key for bucket in result.buckets] == ["2022", "2023", "2024"]

    def test_yearly_is_not_capped(self, make_transaction):
        transactions = [
            make_transaction(date=f"{year}-01-01T00:00:00Z") for year in range(2000, 2015)
        ]

        result = aggregate(transactions, Period.YEARLY)

        assert len(result.buckets) == 15
        assert result.buckets[0].key == "2000"

    def test_daily_window_keeps_first_ten_reversed(self, make_transaction):
        start = _utc(2024, 1, 1)
        transactions = [
            make_transaction(
                date=(start + timedelta(days=offset)).isoformat(), type=INCOME, amount=1
            )
            for offset in range(15)
        ]

        result = aggregate(transactions, Period.DAILY)

        assert len(result.buckets) == BUCKET_WINDOW == 10
        expected = [f"2024-01-{day:02d}" for day in range(10, 0, -1)]
        assert [bucket.key for bucket in result.buckets] == expected
        # Totals still cover every transaction
        assert result.total_income == 15

    def test_window_reverses_short_sequences(self, make_transaction):
        transactions = [
            make_transaction(date="2024-01-01T00:00:00Z"),
            make_transaction(date="2024-02-01T00:00:00Z"),
            make_transaction(date="2024-03-01T00:00:00Z"),
        ]

        result = aggregate(transactions, Period.MONTHLY)

        assert [bucket.key for bucket in result.buckets] == ["Mar 2024", "Feb 2024", "Jan 2024"]

    def test_buckets_follow_first_seen_order(self, make_transaction):
        transactions = [
            make_transaction(date="2024-05-01T00:00:00Z", amount=1),
            make_transaction(date="2024-01-01T00:00:00Z", amount=2),
            make_transaction(date="2024-05-20T00:00:00Z", amount=3),
        ]

        result = aggregate(transactions, Period.MONTHLY)

        # Keys in first-seen order are [May, Jan]; the window is then reversed
        assert result.buckets == (
            Bucket(key="Jan 2024", income=0.0, expenses=2.0),
            Bucket(key="May 2024", income=0.0, expenses=4.0),
        )

    def test_weekly_grouping(self, make_transaction):
        transactions = [
            make_transaction(date="2024-01-01T00:00:00Z", amount=5),
            make_transaction(date="2024-01-06T23:00:00Z", amount=5),
            make_transaction(date="2024-01-07T00:00:00Z", amount=7),
        ]

        result = aggregate(transactions, "weekly")

        assert result.buckets == (
            Bucket(key="Week 2, 2024", income=0.0, expenses=7.0),
            Bucket(key="Week 1, 2024", income=0.0, expenses=10.0),
        )

    def test_daily_key_uses_utc(self, make_transaction):
        txn = make_transaction(date="2024-03-15T23:30:00-05:00")
        result = aggregate([txn], Period.DAILY)
        assert result.buckets[0].key == "2024-03-16"

    def test_categories_outside_breakdown_count_toward_totals(self, make_transaction):
        transactions = [
            make_transaction(type=EXPENSE, amount=30, category="food"),
            make_transaction(type=EXPENSE, amount=20, category="General"),
            make_transaction(type=EXPENSE, amount=50, category="investment"),
        ]

        result = aggregate(transactions, Period.MONTHLY)

        assert result.total_expenses == 100
        assert result.category_totals == CategoryTotals(food=30.0)
        assert result.category_totals.total() < result.total_expenses

    def test_breakdown_equals_expenses_when_all_categorized(self, make_transaction):
        transactions = [
            make_transaction(type=EXPENSE, amount=1.5, category="food"),
            make_transaction(type=EXPENSE, amount=2.5, category="Transport"),
            make_transaction(type=EXPENSE, amount=3.0, category=" taxes "),
            make_transaction(type=EXPENSE, amount=4.0, category="OTHERS"),
        ]

        result = aggregate(transactions, Period.DAILY)

        assert result.category_totals == CategoryTotals(
            food=1.5, transport=2.5, taxes=3.0, others=4.0
        )
        assert result.category_totals.total() == result.total_expenses

    def test_income_never_reaches_breakdown(self, make_transaction):
        txn = make_transaction(type=INCOME, amount=100, category="food")

        result = aggregate([txn], Period.DAILY)

        assert result.category_totals == CategoryTotals()
        assert result.total_income == 100

    def test_totals_independent_of_period(self, make_transaction):
        transactions = [
            make_transaction(date="2023-12-31T12:00:00Z", type=INCOME, amount=250),
            make_transaction(date="2024-01-01T12:00:00Z", type=EXPENSE, amount=75.25),
            make_transaction(date="2024-02-14T12:00:00Z", type=EXPENSE, amount=24.75),
            make_transaction(date="2024-02-15T12:00:00Z", type=INCOME, amount=10),
        ]

        for period in Period:
            result = aggregate(transactions, period)
            assert result.total_income == 260
            assert result.total_expenses == 100

    def test_amounts_are_not_rounded(self, make_transaction):
        transactions = [
            make_transaction(type=INCOME, amount=0.1),
            make_transaction(type=INCOME, amount=0.2),
        ]

        result = aggregate(transactions, Period.DAILY)

        assert result.total_income == 0.1 + 0.2
        assert result.buckets[0].income == 0.1 + 0.2

    def test_deterministic(self, make_transaction):
        transactions = [
            make_transaction(date=f"2024-01-{day:02d}T08:00:00Z", amount=day * 1.1)
            for day in range(1, 29)
        ]

        assert aggregate(transactions, Period.WEEKLY) == aggregate(transactions, Period.WEEKLY)

    def test_invalid_date_rejects_batch(self, make_transaction):
        transactions = [
            make_transaction(date="2024-03-15T00:00:00Z"),
            make_transaction(id="broken", date="31/02/2024"),
        ]

        with pytest.raises(InvalidDateError) as exc_info:
            aggregate(transactions, Period.DAILY)
        assert "broken" in str(exc_info.value)

    def test_invalid_date_is_raised_without_logging(self, make_transaction, caplog):
        aggregation_logger = logging.getLogger("tallybook.domain.aggregation")
        aggregation_logger.addHandler(caplog.handler)
        try:
            with pytest.raises(InvalidDateError):
                aggregate([make_transaction(date="someday")], Period.DAILY)
        finally:
            aggregation_logger.removeHandler(caplog.handler)

        assert [r for r in caplog.records if r.levelno >= logging.WARNING] == []

    def test_string_types_are_counted_by_direction(self):
        transactions = [
            Transaction(id="1", date="2024-03-15T00:00:00Z", description="Pay",
                        amount="100", type="income", category="salary"),
            Transaction(id="2", date="2024-03-15T00:00:00Z", description="Bus",
                        amount=10, type="expense", category="transport"),
        ]

        result = aggregate(transactions, Period.DAILY)

        assert result.total_income == 100.0
        assert result.total_expenses == 10.0
        assert result.category_totals == CategoryTotals(transport=10.0)

    def test_unknown_type_never_reaches_expense_totals(self, make_transaction):
        with pytest.raises(ValidationError):
            aggregate([make_transaction(type="refund", amount=10.0)], Period.DAILY)

    def test_negative_amount_never_reaches_totals(self, make_transaction):
        with pytest.raises(ValidationError):
            aggregate([make_transaction(type="income", amount=-50.0)], Period.DAILY)

    def test_empty_date_rejected(self, make_transaction):
        with pytest.raises(InvalidDateError):
            aggregate([make_transaction(date="")], Period.YEARLY)

    def test_unknown_period_rejected(self, make_transaction):
        with pytest.raises(UnknownPeriodError):
            aggregate([make_transaction()], "fortnightly")

    def test_unknown_period_rejected_for_empty_input(self):
        with pytest.raises(UnknownPeriodError):
            aggregate([], "fortnightly")
