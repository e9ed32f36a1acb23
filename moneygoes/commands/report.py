"""Summary and trend commands for viewing spending."""

import sys
from decimal import Decimal

from rich.table import Table

from moneygoes.commands.shared import console, load_settings_or_exit, open_session, resolve_month
from moneygoes.dates import month_label
from moneygoes.domain.derive import by_category, month_insights, month_summary, spending_trend
from moneygoes.domain.formatting import format_currency
from moneygoes.domain.models import Money


def calculate_bar_length(amount: Money, max_amount: Money, bar_width: int) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int(abs(amount) / max_amount * bar_width)


def format_savings_rate(rate: float) -> str:
    """Savings rate colored green (>= 20%), yellow (>= 10%) or red."""
    text = f"{rate:.1f}%"
    if rate >= 20:
        return f"[green]{text}[/green]"
    elif rate >= 10:
        return f"[yellow]{text}[/yellow]"
    else:
        return f"[red]{text}[/red]"


def summary_command(month: str | None = None) -> None:
    """Show totals, insights and the category breakdown for a month."""
    settings = load_settings_or_exit()
    document = open_session(settings).document
    target = resolve_month(month)
    currency = document.currency

    summary = month_summary(document, target)
    insight = month_insights(document, target)

    console.print(f"\n[bold cyan]Summary - {month_label(target)}[/bold cyan]\n")
    console.print(f"  Monthly income: {format_currency(summary.income, currency)}")
    console.print(
        f"  Total spent:    {format_currency(summary.total_spent, currency)}"
        f" [dim]({summary.percent_spent:.1f}% of income)[/dim]"
    )
    remaining = format_currency(summary.remaining, currency)
    if summary.remaining < 0:
        remaining = f"[red]-{remaining}[/red]"
    console.print(f"  Remaining:      {remaining} [dim]({summary.days_remaining} days left)[/dim]")
    console.print(f"  Daily budget:   {format_currency(summary.daily_budget, currency)} [dim]per day remaining[/dim]")

    console.print("\n[bold]Insights[/bold]")
    console.print(f"  Savings rate:   {format_savings_rate(insight.savings_rate)}")
    if insight.highest_category:
        console.print(
            f"  Top category:   {insight.highest_category}"
            f" ({format_currency(insight.highest_category_amount, currency)})"
        )
    if insight.over_budget_count > 0:
        noun = "category" if insight.over_budget_count == 1 else "categories"
        console.print(f"  [red]Over budget:    {insight.over_budget_count} {noun}[/red]")
    console.print(
        f"  Avg expense:    {format_currency(insight.average_expense, currency)}"
        f" [dim]({insight.expense_count} total)[/dim]"
    )

    categories = by_category(document, target)
    if not categories:
        console.print("\n[yellow]No expenses this month[/yellow]")
        return

    table = Table(title="By category")
    table.add_column("Category", style="magenta")
    table.add_column("Count", justify="right")
    table.add_column("Spent", justify="right")
    table.add_column("Share", justify="right")

    ordered = sorted(categories.items(), key=lambda item: (-item[1].total, item[0]))
    for category, spend in ordered:
        share = spend.total / summary.total_spent * 100 if summary.total_spent else 0
        table.add_row(category, str(spend.count), format_currency(spend.total, currency), f"{share:.0f}%")

    console.print()
    console.print(table)


def trend_command(months: int = 6, histogram: bool = True) -> None:
    """Show monthly spending totals for recent months."""
    if months < 1:
        console.print("[red]Months must be at least 1[/red]")
        sys.exit(1)

    settings = load_settings_or_exit()
    document = open_session(settings).document
    trend = spending_trend(document, months)

    max_total = max((point.total for point in trend), default=Money(Decimal("0")))
    bar_width = 40

    console.print(f"\n[bold cyan]Spending trend (last {months} months)[/bold cyan]\n")
    for point in trend:
        amount = format_currency(point.total, document.currency)
        if histogram:
            bar = "█" * calculate_bar_length(point.total, max_total, bar_width)
            console.print(f"  {point.label:10} {amount:>16} {bar}")
        else:
            console.print(f"  {point.label}: {amount}")
