"""Category reconciliation between free-text entry and the analysis set."""

from typing import Optional

from tallybook.domain.entities import Category, CategoryTotals

# Order used by the breakdown chart
BREAKDOWN_CATEGORIES: tuple[Category, ...] = (
    Category.FOOD,
    Category.TRANSPORT,
    Category.TAXES,
    Category.OTHERS,
)

# Categories offered by the entry form
ENTRY_CATEGORIES: tuple[str, ...] = ("General", "Food", "Transport", "Taxes", "Others")

_BY_NAME = {category.value: category for category in Category}


def reconcile_category(raw: Optional[str]) -> Optional[Category]:
    """Map a free-text category onto the analysis enumeration.

    Matching ignores case and surrounding whitespace. Anything that does
    not name a known category (including the form default "General")
    yields None.
    """
    if raw is None:
        return None
    if isinstance(raw, Category):
        return raw
    return _BY_NAME.get(raw.strip().casefold())


def breakdown_slot(category: Optional[Category]) -> Optional[str]:
    """Return the CategoryTotals field for a category, if it has one."""
    if category in BREAKDOWN_CATEGORIES:
        return category.value
    return None


def category_shares(totals: CategoryTotals) -> dict[str, float]:
    """Percentage share of each breakdown category.

    All shares are zero when there are no categorized expenses.
    """
    grand_total = totals.total()
    values = totals.as_dict()
    if grand_total <= 0:
        return {name: 0.0 for name in values}
    return {name: value / grand_total * 100 for name, value in values.items()}
