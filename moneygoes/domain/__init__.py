"""Domain models and types for moneygoes.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from storage and the CLI
"""

from moneygoes.domain.models import (
    CATEGORIES,
    AppDocument,
    CategoryName,
    CurrencyCode,
    Expense,
    ExpenseDraft,
    Money,
    Month,
    UnknownCategoryError,
)

__all__ = [
    "CATEGORIES",
    "AppDocument",
    "CategoryName",
    "CurrencyCode",
    "Expense",
    "ExpenseDraft",
    "Money",
    "Month",
    "UnknownCategoryError",
]
