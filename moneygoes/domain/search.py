"""Pure functions for searching, sorting and validating expenses."""

import unicodedata
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal

from moneygoes.dates import parse_expense_date
from moneygoes.domain.formatting import exceeds_max_amount, parse_money
from moneygoes.domain.models import CATEGORIES, Expense, ExpenseDraft

SortKey = Literal["date", "amount", "name", "category"]
SortOrder = Literal["asc", "desc"]

SORT_KEYS: tuple[str, ...] = ("date", "amount", "name", "category")
SORT_ORDERS: tuple[str, ...] = ("asc", "desc")


@dataclass(frozen=True)
class ValidationResult:
    """Immutable outcome of validating an expense draft."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)


def filter_expenses(expenses: Sequence[Expense], term: str | None) -> Sequence[Expense]:
    """Filter expenses by a search term.

    Matches case-insensitively against name, category and notes.

    Args:
        expenses: Expenses to search.
        term: Search text. Blank or None returns expenses unchanged.

    Returns:
        Matching expenses in their original order.
    """
    if not term or not term.strip():
        return expenses

    needle = term.lower()
    return [
        e
        for e in expenses
        if needle in e.name.lower() or needle in e.category.lower() or (e.notes and needle in e.notes.lower())
    ]


def collation_key(text: str) -> str:
    """Sort key approximating a locale-aware, case-insensitive comparison."""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


_KEY_FUNCS: dict[str, Callable[[Expense], Any]] = {
    "amount": lambda e: e.amount,
    "name": lambda e: collation_key(e.name),
    "category": lambda e: collation_key(e.category),
}


def sort_expenses(
    expenses: Sequence[Expense],
    key: SortKey | str = "date",
    order: SortOrder | str = "desc",
) -> list[Expense]:
    """Stable sort of expenses.

    Args:
        expenses: Expenses to sort.
        key: "date", "amount", "name" or "category".
        order: "asc" or "desc". Equal elements keep their input order either way.

    Returns:
        New sorted list. When sorting by date, expenses with malformed dates
        come last in their input order.

    Raises:
        ValueError: If key or order is not recognised.
    """
    if key not in SORT_KEYS:
        raise ValueError(f"Unknown sort key: {key}")
    if order not in SORT_ORDERS:
        raise ValueError(f"Unknown sort order: {order}")

    reverse = order == "desc"

    if key == "date":
        dated = [(parse_expense_date(e.date), e) for e in expenses]
        valid = [(d, e) for d, e in dated if d is not None]
        undated = [e for d, e in dated if d is None]
        ordered = sorted(valid, key=lambda pair: pair[0], reverse=reverse)
        return [e for _, e in ordered] + undated

    return sorted(expenses, key=_KEY_FUNCS[key], reverse=reverse)


def validate(draft: ExpenseDraft | dict[str, Any]) -> ValidationResult:
    """Validate an expense draft.

    Every check runs so all problems are reported together.

    Args:
        draft: Prospective expense fields.

    Returns:
        ValidationResult with human-readable error messages.
    """
    errors: list[str] = []

    name = draft.get("name")
    if not isinstance(name, str) or not name.strip():
        errors.append("Expense name is required")

    category = draft.get("category")
    if not category:
        errors.append("Category is required")
    elif category not in CATEGORIES:
        errors.append(f"Unknown category: {category}")

    raw_amount = draft.get("amount")
    amount = parse_money(raw_amount)
    if exceeds_max_amount(raw_amount):
        errors.append("Amount is too large")
    elif amount is None or amount <= 0:
        errors.append("Amount must be greater than 0")

    date_value = draft.get("date")
    if not date_value:
        errors.append("Date is required")
    elif parse_expense_date(date_value) is None:
        errors.append("Date must be a valid date (YYYY-MM-DD)")

    return ValidationResult(is_valid=not errors, errors=errors)
