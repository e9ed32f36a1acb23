"""Domain type definitions for moneygoes.

These NewTypes provide semantic clarity and help with type checking:
- Money: Amount as a Decimal in whole currency units (e.g. 3.50)
- Month: Month in YYYY-MM format
- CategoryName: One of the fixed spending categories
- CurrencyCode: Display currency code (e.g. "JMD"), never converted
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import NewType, TypedDict

# Money is kept as Decimal so sums of cents never drift
Money = NewType("Money", Decimal)

# Month is always in YYYY-MM format (e.g., "2025-01")
Month = NewType("Month", str)

CategoryName = NewType("CategoryName", str)

CurrencyCode = NewType("CurrencyCode", str)

CATEGORIES: tuple[CategoryName, ...] = (
    CategoryName("Housing"),
    CategoryName("Food"),
    CategoryName("Transport"),
    CategoryName("Utilities"),
    CategoryName("Entertainment"),
    CategoryName("Healthcare"),
    CategoryName("Shopping"),
    CategoryName("Other"),
)

DEFAULT_BUDGETS: dict[CategoryName, Money] = {
    CategoryName("Housing"): Money(Decimal("50000")),
    CategoryName("Food"): Money(Decimal("30000")),
    CategoryName("Transport"): Money(Decimal("20000")),
    CategoryName("Utilities"): Money(Decimal("15000")),
    CategoryName("Entertainment"): Money(Decimal("10000")),
    CategoryName("Healthcare"): Money(Decimal("10000")),
    CategoryName("Shopping"): Money(Decimal("15000")),
    CategoryName("Other"): Money(Decimal("20000")),
}

DEFAULT_CURRENCY = CurrencyCode("JMD")
DEFAULT_MONTHLY_INCOME = Money(Decimal("160000"))

CURRENCY_SYMBOLS: dict[str, str] = {
    "JMD": "J$",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "CAD": "C$",
    "AUD": "A$",
}


class UnknownCategoryError(ValueError):
    """Raised when a category outside the fixed set reaches the store."""

    def __init__(self, category: str) -> None:
        super().__init__(f"Unknown category: {category}")
        self.category = category


def is_category(value: object) -> bool:
    """Check whether value names one of the fixed categories."""
    return isinstance(value, str) and value in CATEGORIES


class ExpenseDraft(TypedDict, total=False):
    """User-supplied expense input, not yet validated."""

    name: str
    category: str
    amount: object
    date: str
    notes: str


@dataclass(frozen=True)
class Expense:
    """Immutable expense record."""

    id: int
    name: str
    category: CategoryName
    amount: Money
    date: str
    notes: str = ""
    created_at: str = ""


@dataclass(frozen=True)
class AppDocument:
    """The single aggregate holding a user's tracking data."""

    currency: CurrencyCode
    monthly_income: Money
    expenses: tuple[Expense, ...]
    budgets: dict[CategoryName, Money]
    current_month: Month


def default_budgets() -> dict[CategoryName, Money]:
    """Return a fresh copy of the default category budgets."""
    return dict(DEFAULT_BUDGETS)


@dataclass(frozen=True)
class DocumentDefaults:
    """Values a fresh document starts from."""

    currency: CurrencyCode = DEFAULT_CURRENCY
    monthly_income: Money = DEFAULT_MONTHLY_INCOME
    budgets: dict[CategoryName, Money] = field(default_factory=default_budgets)
