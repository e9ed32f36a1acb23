"""Pure functions deriving views from the expense document.

This module contains the functional core for reporting:
- No I/O operations (no storage, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

All monetary amounts are Money (Decimal) values.
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from moneygoes.dates import (
    current_month,
    days_remaining_in_month,
    expense_month,
    parse_month,
    shift_month,
    short_month_label,
)
from moneygoes.domain.formatting import (
    budget_status,
    calculate_percentage,
    daily_budget_remaining,
)
from moneygoes.domain.models import (
    CATEGORIES,
    AppDocument,
    CategoryName,
    Expense,
    Money,
    Month,
)

ZERO = Money(Decimal("0"))


@dataclass(frozen=True)
class CategorySpend:
    """Immutable spending aggregate for one category in a month."""

    total: Money
    count: int
    items: tuple[Expense, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class TrendPoint:
    """Immutable total for one month of a spending trend."""

    month: Month
    label: str
    total: Money


@dataclass(frozen=True)
class Insights:
    """Immutable spending insight summary."""

    total_spent: Money
    remaining: Money
    savings_rate: float
    highest_category: CategoryName | None
    highest_category_amount: Money
    over_budget_count: int
    average_expense: Money
    expense_count: int


@dataclass(frozen=True)
class BudgetLine:
    """Immutable budget usage for a single category."""

    category: CategoryName
    budget: Money
    spent: Money
    remaining: Money
    percentage: float
    status: str


@dataclass(frozen=True)
class MonthSummary:
    """Immutable headline figures for a month."""

    month: Month
    income: Money
    total_spent: Money
    remaining: Money
    percent_spent: float
    days_remaining: int
    daily_budget: Money


def _sum_amounts(expenses: Iterable[Expense]) -> Money:
    return Money(sum((e.amount for e in expenses), ZERO))


def expenses_for_month(doc: AppDocument, month: Month) -> list[Expense]:
    """Get the expenses dated within a month.

    Args:
        doc: Document to read.
        month: Month in YYYY-MM format.

    Returns:
        Expenses in insertion order. Expenses whose date can't be parsed
        never match.

    Raises:
        ValueError: If month is not a valid YYYY-MM token.
    """
    year, month_num = parse_month(month)
    target = Month(f"{year:04d}-{month_num:02d}")
    return [e for e in doc.expenses if expense_month(e.date) == target]


def total_for_month(doc: AppDocument, month: Month) -> Money:
    """Total amount spent in a month."""
    return _sum_amounts(expenses_for_month(doc, month))


def aggregate_by_category(expenses: Iterable[Expense]) -> dict[CategoryName, CategorySpend]:
    """Group expenses by category.

    Only categories that appear in expenses are present as keys, in order
    of first appearance.
    """
    totals: dict[CategoryName, Money] = {}
    items: dict[CategoryName, list[Expense]] = {}

    for expense in expenses:
        totals[expense.category] = Money(totals.get(expense.category, ZERO) + expense.amount)
        items.setdefault(expense.category, []).append(expense)

    return {
        category: CategorySpend(total=totals[category], count=len(items[category]), items=tuple(items[category]))
        for category in totals
    }


def by_category(doc: AppDocument, month: Month) -> dict[CategoryName, CategorySpend]:
    """Per-category totals, counts and items for a month (sparse)."""
    return aggregate_by_category(expenses_for_month(doc, month))


def spending_trend(doc: AppDocument, months: int = 6, today: date | None = None) -> list[TrendPoint]:
    """Monthly totals for the last N calendar months.

    Args:
        doc: Document to read.
        months: Number of months to cover, ending at the current month.
        today: Day treated as "now". Defaults to the real current date.

    Returns:
        TrendPoints ordered oldest to newest; the last one is the current month.
    """
    this_month = current_month(today)
    trend: list[TrendPoint] = []

    for offset in range(months - 1, -1, -1):
        month = shift_month(this_month, -offset)
        trend.append(
            TrendPoint(
                month=month,
                label=short_month_label(month),
                total=total_for_month(doc, month),
            )
        )

    return trend


def find_highest_category(spending: Mapping[CategoryName, Decimal]) -> tuple[CategoryName | None, Money]:
    """Category with the largest spend.

    Ties go to the alphabetically first category name so the result does not
    depend on aggregation order.
    """
    if not spending:
        return None, ZERO
    category = min(spending, key=lambda cat: (-spending[cat], cat))
    return category, Money(spending[category])


def count_over_budget(spending: Mapping[CategoryName, Decimal], budgets: Mapping[CategoryName, Decimal]) -> int:
    """Count categories whose spend exceeds their budget.

    A category with spend but no configured budget counts as over budget.
    """
    return sum(1 for category, spent in spending.items() if spent > budgets.get(category, ZERO))


def insights(
    expenses: Sequence[Expense],
    income: Decimal,
    budgets: Mapping[CategoryName, Decimal],
) -> Insights:
    """Compute spending insights for a set of expenses.

    Args:
        expenses: Expenses to summarise (usually one month's worth).
        income: Monthly income.
        budgets: Category budget limits.

    Returns:
        Insights with totals, savings rate, top category and over-budget count.
    """
    total = _sum_amounts(expenses)
    remaining = Money(income - total)
    savings_rate = float(remaining / income * 100) if income > 0 else 0.0

    spending = {category: spend.total for category, spend in aggregate_by_category(expenses).items()}
    highest_category, highest_amount = find_highest_category(spending)

    count = len(expenses)
    average = Money(total / count) if count > 0 else ZERO

    return Insights(
        total_spent=total,
        remaining=remaining,
        savings_rate=savings_rate,
        highest_category=highest_category,
        highest_category_amount=highest_amount,
        over_budget_count=count_over_budget(spending, budgets),
        average_expense=average,
        expense_count=count,
    )


def month_insights(doc: AppDocument, month: Month) -> Insights:
    """Insights for one month of the document."""
    return insights(expenses_for_month(doc, month), doc.monthly_income, doc.budgets)


def budget_overview(doc: AppDocument, month: Month) -> list[BudgetLine]:
    """Budget usage for every fixed category, in category order."""
    spending = by_category(doc, month)
    lines: list[BudgetLine] = []

    for category in CATEGORIES:
        budget = doc.budgets.get(category, ZERO)
        spent = spending[category].total if category in spending else ZERO
        lines.append(
            BudgetLine(
                category=category,
                budget=budget,
                spent=spent,
                remaining=Money(budget - spent),
                percentage=calculate_percentage(spent, budget),
                status=budget_status(spent, budget),
            )
        )

    return lines


def month_summary(doc: AppDocument, month: Month, today: date | None = None) -> MonthSummary:
    """Headline figures for a month: spent, remaining and daily allowance.

    Days remaining are counted from today; for a month other than the
    current one this is 0 once the month has passed.
    """
    if today is None:
        today = date.today()

    year, month_num = parse_month(month)
    month = Month(f"{year:04d}-{month_num:02d}")
    total = total_for_month(doc, month)
    remaining = Money(doc.monthly_income - total)

    this_month = current_month(today)
    if month == this_month:
        days_left = days_remaining_in_month(today)
    elif month > this_month:
        days_left = days_remaining_in_month(date(year, month_num, 1)) + 1
    else:
        days_left = 0

    return MonthSummary(
        month=month,
        income=doc.monthly_income,
        total_spent=total,
        remaining=remaining,
        percent_spent=calculate_percentage(total, doc.monthly_income),
        days_remaining=days_left,
        daily_budget=daily_budget_remaining(remaining, days_left),
    )
