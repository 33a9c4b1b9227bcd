"""Domain model entities for tallybook.

These are pure data classes representing business concepts, independent of
how a store lays them out (spreadsheet columns or database rows).
"""

import math
from dataclasses import dataclass, field
from enum import Enum

from tallybook.domain.errors import ValidationError


class TransactionType(str, Enum):
    """Direction of a transaction. The amount itself is never negative."""

    INCOME = "income"
    EXPENSE = "expense"


class Category(str, Enum):
    """Categories recognized for analysis."""

    FOOD = "food"
    TRANSPORT = "transport"
    TAXES = "taxes"
    OTHERS = "others"
    SALARY = "salary"
    INVESTMENT = "investment"
    FREELANCE = "freelance"


class Period(str, Enum):
    """Time granularity used to bucket transactions."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    ``date`` is kept as the ISO-8601 string the store holds; it is parsed
    when the transaction is aggregated. ``type`` is coerced to
    TransactionType and ``amount`` to float on construction; an unknown
    type or a negative or non-finite amount raises ValidationError.
    """

    id: str
    date: str
    description: str
    amount: float
    type: TransactionType
    category: str

    def __post_init__(self):
        try:
            txn_type = TransactionType(self.type)
        except ValueError:
            raise ValidationError(f"Unknown transaction type: {self.type!r}") from None
        try:
            amount = float(self.amount)
        except (TypeError, ValueError):
            raise ValidationError(f"Amount must be a number, got {self.amount!r}") from None
        if not math.isfinite(amount) or amount < 0:
            raise ValidationError(f"Amount must not be negative, got {self.amount!r}")
        object.__setattr__(self, "type", txn_type)
        object.__setattr__(self, "amount", amount)

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME


@dataclass(frozen=True)
class Bucket:
    """Accumulated totals for one period key."""

    key: str
    income: float = 0.0
    expenses: float = 0.0


@dataclass(frozen=True)
class CategoryTotals:
    """Expense totals for the categories shown in the breakdown chart."""

    food: float = 0.0
    transport: float = 0.0
    taxes: float = 0.0
    others: float = 0.0

    def total(self) -> float:
        return self.food + self.transport + self.taxes + self.others

    def as_dict(self) -> dict[str, float]:
        return {
            "food": self.food,
            "transport": self.transport,
            "taxes": self.taxes,
            "others": self.others,
        }


@dataclass(frozen=True)
class AggregationResult:
    """Output of a single aggregation call."""

    buckets: tuple[Bucket, ...] = ()
    total_income: float = 0.0
    total_expenses: float = 0.0
    category_totals: CategoryTotals = field(default_factory=CategoryTotals)

    @property
    def balance(self) -> float:
        return self.total_income - self.total_expenses
