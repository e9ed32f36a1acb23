"""Document persistence and mutation operations.

Every mutation takes the current document and returns a new one; the input
is never modified. Persistence failures are logged and degraded, never
raised to the caller.
"""

import json
import logging
import threading
from collections.abc import Mapping
from dataclasses import replace
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any

from moneygoes.dates import current_month, expense_month, parse_month
from moneygoes.domain.formatting import parse_money, to_money
from moneygoes.domain.models import (
    CATEGORIES,
    AppDocument,
    CategoryName,
    CurrencyCode,
    DocumentDefaults,
    Expense,
    ExpenseDraft,
    Money,
    Month,
    UnknownCategoryError,
    is_category,
)
from moneygoes.store.storage import Storage

logger = logging.getLogger(__name__)

DATA_KEY = "whereTheMoneyGoes_data"

EDITABLE_FIELDS = ("name", "category", "amount", "date", "notes")


class IdGenerator:
    """Issues strictly increasing expense ids derived from the clock.

    Ids are millisecond timestamps, bumped past the last issued id (and past
    any floor the caller supplies) when the clock hasn't moved on.
    """

    def __init__(self) -> None:
        self._last = 0
        self._lock = threading.Lock()

    def next_id(self, now: datetime, floor: int = 0) -> int:
        candidate = int(now.timestamp() * 1000)
        with self._lock:
            candidate = max(candidate, self._last + 1, floor + 1)
            self._last = candidate
        return candidate


_default_ids = IdGenerator()


def _json_number(amount: Decimal) -> int | float:
    if amount == amount.to_integral_value():
        return int(amount)
    return float(amount)


def expense_to_dict(expense: Expense) -> dict[str, Any]:
    """Wire representation of an expense."""
    return {
        "id": expense.id,
        "name": expense.name,
        "category": expense.category,
        "amount": _json_number(expense.amount),
        "date": expense.date,
        "notes": expense.notes,
        "createdAt": expense.created_at,
    }


def document_to_dict(doc: AppDocument) -> dict[str, Any]:
    """Wire representation of the whole document."""
    return {
        "currency": doc.currency,
        "monthlyIncome": _json_number(doc.monthly_income),
        "expenses": [expense_to_dict(e) for e in doc.expenses],
        "budgets": {category: _json_number(amount) for category, amount in doc.budgets.items()},
        "currentMonth": doc.current_month,
    }


def serialize_document(doc: AppDocument) -> bytes:
    """Encode a document as JSON bytes."""
    return json.dumps(document_to_dict(doc)).encode("utf-8")


def default_document(today: date | None = None, defaults: DocumentDefaults | None = None) -> AppDocument:
    """Create an empty document for the current month."""
    if defaults is None:
        defaults = DocumentDefaults()
    return AppDocument(
        currency=defaults.currency,
        monthly_income=defaults.monthly_income,
        expenses=(),
        budgets=dict(defaults.budgets),
        current_month=current_month(today),
    )


def expense_from_dict(data: Any) -> Expense | None:
    """Build an Expense from its wire form.

    Returns:
        The expense, or None if a required field is missing or malformed.
    """
    if not isinstance(data, dict):
        return None

    expense_id = data.get("id")
    name = data.get("name")
    category = data.get("category")
    expense_date = data.get("date")
    amount = parse_money(data.get("amount"))

    if not isinstance(expense_id, int) or isinstance(expense_id, bool):
        return None
    if not isinstance(name, str) or not isinstance(category, str) or not isinstance(expense_date, str):
        return None
    if amount is None:
        return None

    notes = data.get("notes")
    created_at = data.get("createdAt")
    return Expense(
        id=expense_id,
        name=name,
        category=CategoryName(category),
        amount=amount,
        date=expense_date,
        notes=notes if isinstance(notes, str) else "",
        created_at=created_at if isinstance(created_at, str) else "",
    )


def _merge_budgets(persisted: Any, defaults: Mapping[CategoryName, Money]) -> dict[CategoryName, Money]:
    if not isinstance(persisted, dict):
        logger.warning("Ignoring malformed budgets, using defaults")
        return dict(defaults)

    budgets: dict[CategoryName, Money] = {}
    for category in CATEGORIES:
        default = defaults[category]
        if category not in persisted:
            budgets[category] = default
            continue

        amount = parse_money(persisted[category])
        if amount is None or amount < 0:
            logger.warning("Ignoring invalid budget for %s: %r", category, persisted[category])
            budgets[category] = default
        else:
            budgets[category] = amount

    for key in persisted:
        if key not in CATEGORIES:
            logger.debug("Dropping budget for unknown category %r", key)

    return budgets


def _merge_expenses(persisted: Any) -> tuple[Expense, ...]:
    if not isinstance(persisted, list):
        logger.warning("Ignoring malformed expense list")
        return ()

    expenses: list[Expense] = []
    seen: set[int] = set()
    for raw in persisted:
        expense = expense_from_dict(raw)
        if expense is None:
            logger.warning("Skipping invalid expense: %r", raw)
            continue
        if expense.id in seen:
            logger.warning("Skipping expense with duplicate id %s", expense.id)
            continue
        seen.add(expense.id)
        expenses.append(expense)
    return tuple(expenses)


def document_from_dict(
    data: Mapping[str, Any],
    today: date | None = None,
    defaults: DocumentDefaults | None = None,
) -> AppDocument:
    """Merge persisted fields over the default document.

    Missing or malformed top-level fields fall back to their defaults.
    Budgets merge per category; current_month is always recomputed.
    """
    doc = default_document(today, defaults)

    currency = data.get("currency", doc.currency)
    if not isinstance(currency, str) or not currency:
        logger.warning("Ignoring invalid currency: %r", currency)
        currency = doc.currency

    income = doc.monthly_income
    if "monthlyIncome" in data:
        parsed_income = parse_money(data["monthlyIncome"])
        if parsed_income is None or parsed_income < 0:
            logger.warning("Ignoring invalid monthly income: %r", data["monthlyIncome"])
        else:
            income = parsed_income

    expenses = _merge_expenses(data["expenses"]) if "expenses" in data else doc.expenses
    budgets = _merge_budgets(data["budgets"], doc.budgets) if "budgets" in data else doc.budgets

    return replace(
        doc,
        currency=CurrencyCode(currency),
        monthly_income=income,
        expenses=expenses,
        budgets=budgets,
    )


def parse_document(
    payload: bytes | str,
    today: date | None = None,
    defaults: DocumentDefaults | None = None,
) -> AppDocument:
    """Decode a JSON payload into a document.

    Raises:
        ValueError: If the payload isn't JSON or isn't a JSON object.
        RecursionError: If the payload is nested too deeply to decode.
    """
    data = json.loads(payload, parse_float=Decimal)
    if not isinstance(data, dict):
        raise ValueError("Document payload is not a JSON object")
    return document_from_dict(data, today, defaults)


def load_or_default(
    storage: Storage,
    today: date | None = None,
    defaults: DocumentDefaults | None = None,
) -> AppDocument:
    """Load the stored document, falling back to defaults.

    Args:
        storage: Storage collaborator to read from.
        today: Day used to resolve the current month.
        defaults: Values for fields the stored document lacks.

    Returns:
        The merged document; the default document if nothing usable is stored.
    """
    try:
        payload = storage.get(DATA_KEY)
    except Exception:
        logger.exception("Error reading stored data")
        payload = None

    if payload is None:
        return default_document(today, defaults)

    try:
        return parse_document(payload, today, defaults)
    except (ValueError, UnicodeDecodeError, RecursionError) as e:
        logger.error("Error loading data: %s", e)
        return default_document(today, defaults)


def save(storage: Storage, doc: AppDocument) -> bool:
    """Persist the document.

    Returns:
        True if written, False on any failure (which is logged).
    """
    try:
        return bool(storage.set(DATA_KEY, serialize_document(doc)))
    except Exception:
        logger.exception("Error saving data")
        return False


def _check_category(category: Any) -> CategoryName:
    if not is_category(category):
        raise UnknownCategoryError(str(category))
    return CategoryName(category)


def add_expense(
    doc: AppDocument,
    draft: ExpenseDraft | Mapping[str, Any],
    now: datetime | None = None,
    ids: IdGenerator | None = None,
) -> AppDocument:
    """Append a new expense built from a draft.

    The draft is not validated here beyond what's needed to keep the
    document consistent; call search.validate first.

    Args:
        doc: Current document.
        draft: Expense fields (name, category, amount, date, notes).
        now: Creation time. Defaults to the current UTC time.
        ids: Id source. Defaults to the process-wide generator.

    Returns:
        New document with the expense appended.

    Raises:
        UnknownCategoryError: If the category isn't one of the fixed set.
        ValueError: If the amount isn't numeric.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    if ids is None:
        ids = _default_ids

    category = _check_category(draft.get("category"))
    amount = to_money(draft.get("amount"))

    floor = max((e.id for e in doc.expenses), default=0)
    expense = Expense(
        id=ids.next_id(now, floor),
        name=str(draft.get("name", "")),
        category=category,
        amount=amount,
        date=str(draft.get("date", "")),
        notes=str(draft.get("notes") or ""),
        created_at=now.isoformat(timespec="milliseconds"),
    )
    return replace(doc, expenses=doc.expenses + (expense,))


def find_expense(doc: AppDocument, expense_id: int) -> Expense | None:
    """Look up an expense by id."""
    return next((e for e in doc.expenses if e.id == expense_id), None)


def delete_expense(doc: AppDocument, expense_id: int) -> AppDocument:
    """Remove the expense with the given id; unknown ids are a no-op."""
    remaining = tuple(e for e in doc.expenses if e.id != expense_id)
    if len(remaining) == len(doc.expenses):
        return doc
    return replace(doc, expenses=remaining)


def update_expense(doc: AppDocument, expense_id: int, fields: Mapping[str, Any]) -> AppDocument:
    """Merge fields into an existing expense.

    Only name, category, amount, date and notes can change; id and
    created_at are fixed. Unknown ids are a no-op.

    Raises:
        UnknownCategoryError: If a new category isn't one of the fixed set.
        ValueError: If a new amount isn't numeric.
    """
    index = next((i for i, e in enumerate(doc.expenses) if e.id == expense_id), None)
    if index is None:
        return doc

    changes: dict[str, Any] = {key: fields[key] for key in EDITABLE_FIELDS if key in fields}
    if "category" in changes:
        changes["category"] = _check_category(changes["category"])
    if "amount" in changes:
        changes["amount"] = to_money(changes["amount"])
    if "notes" in changes:
        changes["notes"] = str(changes["notes"] or "")

    expenses = list(doc.expenses)
    expenses[index] = replace(expenses[index], **changes)
    return replace(doc, expenses=tuple(expenses))


def update_budget(doc: AppDocument, category: str, amount: object) -> AppDocument:
    """Set the budget limit for a category.

    Raises:
        UnknownCategoryError: If category isn't one of the fixed set.
        ValueError: If amount isn't a non-negative number.
    """
    name = _check_category(category)
    limit = to_money(amount)
    if limit < 0:
        raise ValueError("Budget must not be negative")
    return replace(doc, budgets={**doc.budgets, name: limit})


def clear_month_expenses(doc: AppDocument, month: Month) -> AppDocument:
    """Remove every expense dated within month.

    Raises:
        ValueError: If month isn't a valid YYYY-MM token.
    """
    year, month_num = parse_month(month)
    target = Month(f"{year:04d}-{month_num:02d}")
    return replace(doc, expenses=tuple(e for e in doc.expenses if expense_month(e.date) != target))


def export_json(doc: AppDocument) -> str:
    """Pretty-printed JSON of the whole document, for backups."""
    return json.dumps(document_to_dict(doc), indent=2)


def import_json(
    text: str,
    today: date | None = None,
    defaults: DocumentDefaults | None = None,
) -> AppDocument | None:
    """Parse a document previously produced by export_json.

    Returns:
        The merged document, or None if the text isn't a JSON object.
    """
    try:
        return parse_document(text, today, defaults)
    except (ValueError, RecursionError) as e:
        logger.error("Error importing data: %s", e)
        return None

