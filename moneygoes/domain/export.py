"""Pure functions for exporting expenses as CSV text."""

from collections.abc import Iterable

from moneygoes.domain.formatting import round_cents
from moneygoes.domain.models import Expense, Month

CSV_HEADER = ("Date", "Name", "Category", "Amount", "Notes")


def quote_field(value: str) -> str:
    """Wrap a value in double quotes, doubling any embedded quotes."""
    return '"' + value.replace('"', '""') + '"'


def expense_row(expense: Expense) -> str:
    """Format one expense as a CSV row."""
    return ",".join(
        [
            expense.date,
            quote_field(expense.name),
            expense.category,
            f"{round_cents(expense.amount):.2f}",
            quote_field(expense.notes or ""),
        ]
    )


def to_csv(expenses: Iterable[Expense]) -> str:
    """Serialize expenses to CSV text.

    Name and Notes are always quoted; Amount always has two decimals.
    Rows keep input order and are joined by "\\n" with no trailing newline.
    """
    lines = [",".join(CSV_HEADER)]
    lines.extend(expense_row(e) for e in expenses)
    return "\n".join(lines)


def export_filename(month: Month) -> str:
    """Default file name for a month's CSV export."""
    return f"expenses-{month}.csv"
