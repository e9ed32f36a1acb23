"""CLI entry point for moneygoes."""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from moneygoes.commands.admin import (
    clear_month_command,
    config_command,
    export_command,
    import_command,
    init_command,
)
from moneygoes.commands.budget import budget_command
from moneygoes.commands.expenses import (
    add_command,
    delete_command,
    edit_command,
    list_command,
    quick_command,
)
from moneygoes.commands.report import summary_command, trend_command

app = typer.Typer(
    name="moneygoes",
    help="Where The Money Goes - track expenses against monthly budgets",
    add_completion=False,
)


def configure_logging(verbose: bool) -> None:
    """Route log records through rich on stderr."""
    root = logging.getLogger()
    root.handlers = [RichHandler(console=Console(stderr=True), show_path=False, show_time=False)]
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Where The Money Goes - track expenses against monthly budgets."""
    configure_logging(verbose)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing config"),
) -> None:
    """Create the config file and data file."""
    init_command(force)


@app.command(name="config")
def config(
    currency: str = typer.Option(None, "--currency", help="Display currency code (e.g. JMD, USD)"),
    income: str = typer.Option(None, "--income", help="Monthly income"),
    autosave: float = typer.Option(None, "--autosave", help="Autosave interval in seconds"),
    data_dir: str = typer.Option(None, "--data-dir", help="Directory holding the data file"),
) -> None:
    """Show or change your settings."""
    config_command(currency, income, autosave, data_dir)


@app.command()
def add(
    name: str,
    amount: str,
    category: str = typer.Option(..., "--category", "-c", help="Category name or number (1-8)"),
    date: str = typer.Option(None, "--date", "-d", help="Transaction date (default: today)"),
    notes: str = typer.Option("", "--notes", "-n", help="Optional notes"),
) -> None:
    """Add an expense."""
    add_command(name, amount, category, date, notes)


@app.command()
def quick(
    category: str = typer.Option(None, "--category", "-c", help="Use this category for every expense"),
) -> None:
    """Add several expenses interactively."""
    quick_command(category)


@app.command()
def edit(
    expense_id: int,
    name: str = typer.Option(None, "--name", help="New name"),
    amount: str = typer.Option(None, "--amount", help="New amount"),
    category: str = typer.Option(None, "--category", "-c", help="New category"),
    date: str = typer.Option(None, "--date", "-d", help="New transaction date"),
    notes: str = typer.Option(None, "--notes", "-n", help="New notes"),
) -> None:
    """Change an existing expense."""
    edit_command(expense_id, name, amount, category, date, notes)


@app.command()
def delete(
    expense_id: int,
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Delete an expense."""
    delete_command(expense_id, yes)


@app.command(name="list")
def list_expenses(
    month: str = typer.Option(None, "--month", help="Month to show (YYYY-MM, default: current)"),
    search: str = typer.Option(None, "--search", "-s", help="Match name, category or notes"),
    sort: str = typer.Option("date", "--sort", help="Sort by date, amount, name or category"),
    order: str = typer.Option("desc", "--order", help="asc or desc"),
    all: bool = typer.Option(False, "--all", "-a", help="Show all months"),
    limit: int = typer.Option(50, help="Maximum expenses to show (0 for no limit)"),
) -> None:
    """List your expenses."""
    list_command(month, search, sort, order, all, limit)


@app.command()
def summary(
    month: str = typer.Option(None, "--month", help="Specific month (YYYY-MM)"),
) -> None:
    """Show totals, insights and category breakdown for a month."""
    summary_command(month)


@app.command()
def trend(
    months: int = typer.Option(6, "--months", "-m", help="Number of months to show"),
    histogram: bool = typer.Option(True, help="Show bars"),
) -> None:
    """Show your spending over recent months."""
    trend_command(months, histogram)


@app.command()
def budget(
    category: str = typer.Argument(None, help="Category to set (omit to show all budgets)"),
    amount: str = typer.Argument(None, help="New budget amount"),
    month: str = typer.Option(None, "--month", help="Month to show (YYYY-MM)"),
) -> None:
    """Show budget usage, or set a category budget."""
    budget_command(category, amount, month)


@app.command()
def export(
    month: str = typer.Option(None, "--month", help="Month to export (YYYY-MM, default: current)"),
    output: str = typer.Option(None, "--output", "-o", help="Output file (default: expenses-<month>.csv)"),
    json_format: bool = typer.Option(False, "--json", help="Export the whole document as JSON"),
) -> None:
    """Export expenses to CSV (or a JSON backup)."""
    export_command(month, output, json_format)


@app.command(name="import")
def import_data(
    path: str,
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Replace your data with a JSON backup."""
    import_command(path, yes)


@app.command(name="clear-month")
def clear_month(
    month: str = typer.Option(None, "--month", help="Month to clear (YYYY-MM, default: current)"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Delete all expenses in a month."""
    clear_month_command(month, yes)


if __name__ == "__main__":
    app()
