"""Budget command for viewing and setting category budgets."""

import sys

from rich.table import Table

from moneygoes.commands.expenses import resolve_category
from moneygoes.commands.shared import console, load_settings_or_exit, open_session, report_save, resolve_month
from moneygoes.dates import month_label
from moneygoes.domain.derive import budget_overview
from moneygoes.domain.formatting import format_currency, parse_money
from moneygoes.domain.models import UnknownCategoryError
from moneygoes.store.document import update_budget

STATUS_STYLES = {
    "ok": "green",
    "caution": "yellow",
    "warning": "dark_orange",
    "over": "red",
}


def show_budget_status(month: str | None = None) -> None:
    """Print budget usage for every category."""
    settings = load_settings_or_exit()
    document = open_session(settings).document
    target = resolve_month(month)
    currency = document.currency

    table = Table(title=f"Budget - {month_label(target)}")
    table.add_column("#", style="dim")
    table.add_column("Category", style="magenta")
    table.add_column("Spent", justify="right")
    table.add_column("Budget", justify="right")
    table.add_column("Used", justify="right")
    table.add_column("Remaining", justify="right")

    for index, line in enumerate(budget_overview(document, target), start=1):
        style = STATUS_STYLES[line.status]
        remaining = format_currency(line.remaining, currency)
        remaining_display = f"[green]{remaining}[/green]" if line.remaining >= 0 else f"[red]-{remaining}[/red]"
        table.add_row(
            str(index),
            line.category,
            format_currency(line.spent, currency),
            format_currency(line.budget, currency),
            f"[{style}]{line.percentage:.0f}%[/{style}]",
            remaining_display,
        )

    console.print(table)


def set_budget(category: str, amount: str) -> None:
    """Set the budget limit for one category."""
    limit = parse_money(amount)
    if limit is None or limit < 0:
        console.print(f"[red]Invalid amount '{amount}' (must be a number >= 0)[/red]")
        sys.exit(1)

    session = open_session()
    name = resolve_category(category)
    try:
        document = session.apply(update_budget, name, limit)
    except UnknownCategoryError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    report_save(session)

    console.print(f"[green]✓ {name} budget now {format_currency(document.budgets[name], document.currency)}[/green]")


def budget_command(category: str | None = None, amount: str | None = None, month: str | None = None) -> None:
    """Show budgets, or set one when a category and amount are given."""
    if category is None and amount is None:
        show_budget_status(month)
        return

    if category is None or amount is None:
        console.print("[red]Both a category and an amount are needed to set a budget[/red]")
        sys.exit(1)

    set_budget(category, amount)
