"""Expense management commands (add, quick, edit, delete, list)."""

import sys
from typing import Any

import typer
from rich.markup import escape
from rich.table import Table

from moneygoes.commands.shared import (
    console,
    load_settings_or_exit,
    normalize_date,
    open_session,
    report_save,
    resolve_month,
)
from moneygoes.domain.derive import expenses_for_month
from moneygoes.domain.formatting import format_currency, format_date, format_relative_time, truncate_text
from moneygoes.domain.models import CATEGORIES, Expense, UnknownCategoryError
from moneygoes.domain.search import SORT_KEYS, SORT_ORDERS, filter_expenses, sort_expenses, validate
from moneygoes.store.document import add_expense, delete_expense, find_expense, update_expense
from moneygoes.store.session import Session


def resolve_category(value: str | None) -> str | None:
    """Match a category case-insensitively, or by its 1-based index."""
    if value is None:
        return None
    text = value.strip()
    if text.isdigit() and 1 <= int(text) <= len(CATEGORIES):
        return CATEGORIES[int(text) - 1]
    for category in CATEGORIES:
        if category.lower() == text.lower():
            return category
    return text


def print_errors(errors: list[str]) -> None:
    console.print("[red]Expense not saved:[/red]", style="bold")
    for error in errors:
        console.print(f"  [red]• {escape(error)}[/red]")


def build_draft(
    name: str,
    amount: str,
    category: str | None,
    date: str | None,
    notes: str,
) -> dict[str, Any]:
    """Turn raw command input into a draft.

    Raises:
        ValueError: If the date can't be read.
    """
    return {
        "name": name,
        "category": resolve_category(category),
        "amount": amount,
        "date": normalize_date(date),
        "notes": notes,
    }


def save_draft(session: Session, draft: dict[str, Any]) -> Expense | None:
    """Validate and add a draft, printing errors instead of saving on failure."""
    result = validate(draft)
    if not result.is_valid:
        print_errors(result.errors)
        return None

    document = session.apply(add_expense, draft)
    report_save(session)
    return document.expenses[-1]


def add_command(
    name: str,
    amount: str,
    category: str,
    date: str | None = None,
    notes: str = "",
) -> None:
    """Add an expense."""
    settings = load_settings_or_exit()
    session = open_session(settings)
    try:
        draft = build_draft(name, amount, category, date, notes)
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        console.print("[dim]Accepted formats: YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY, etc.[/dim]")
        sys.exit(1)

    expense = save_draft(session, draft)
    if expense is None:
        sys.exit(1)

    console.print("[green]✓[/green] Expense added:")
    console.print(f"  ID: {expense.id}")
    console.print(f"  Date: {expense.date}")
    console.print(f"  Name: {escape(expense.name)}")
    console.print(f"  Category: {expense.category}")
    console.print(f"  Amount: {format_currency(expense.amount, settings.currency)}")


def quick_command(category: str | None = None) -> None:
    """Prompt for expenses one after another, autosaving in the background."""
    settings = load_settings_or_exit()
    fixed_category = resolve_category(category)

    with open_session(settings) as session:
        session.start_autosave(settings.autosave_seconds)
        console.print("[dim]Leave the name blank to finish.[/dim]")
        added = 0

        while True:
            name = typer.prompt("Name", default="", show_default=False)
            if not name.strip():
                break
            amount = typer.prompt("Amount")
            chosen = fixed_category or typer.prompt("Category", default="Other")
            date = typer.prompt("Date", default="", show_default=False)
            notes = typer.prompt("Notes", default="", show_default=False)

            try:
                draft = build_draft(name, amount, chosen, date, notes)
            except ValueError as e:
                console.print(f"[red]{escape(str(e))}[/red]\n")
                continue
            expense = save_draft(session, draft)
            if expense is not None:
                added += 1
                console.print(f"[green]✓[/green] {escape(expense.name)} ({expense.id})\n")

    console.print(f"[green]Added {added} expense(s)[/green]")


def edit_command(
    expense_id: int,
    name: str | None = None,
    amount: str | None = None,
    category: str | None = None,
    date: str | None = None,
    notes: str | None = None,
) -> None:
    """Change fields of an existing expense."""
    session = open_session()
    current = find_expense(session.document, expense_id)
    if current is None:
        console.print(f"[red]Expense {expense_id} not found[/red]")
        sys.exit(1)

    fields: dict[str, Any] = {}
    if name is not None:
        fields["name"] = name
    if amount is not None:
        fields["amount"] = amount
    if category is not None:
        fields["category"] = resolve_category(category)
    if date is not None:
        try:
            fields["date"] = normalize_date(date)
        except ValueError as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            sys.exit(1)
    if notes is not None:
        fields["notes"] = notes

    if not fields:
        console.print("[yellow]Nothing to change[/yellow]")
        return

    merged = {
        "name": current.name,
        "category": current.category,
        "amount": current.amount,
        "date": current.date,
        "notes": current.notes,
        **fields,
    }
    result = validate(merged)
    if not result.is_valid:
        print_errors(result.errors)
        sys.exit(1)

    try:
        document = session.apply(update_expense, expense_id, fields)
    except (UnknownCategoryError, ValueError) as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)
    report_save(session)

    updated = find_expense(document, expense_id)
    assert updated is not None
    console.print(f"[green]✓[/green] Updated expense {expense_id}: {escape(updated.name)}")


def delete_command(expense_id: int, yes: bool = False) -> None:
    """Delete an expense by id."""
    session = open_session()
    expense = find_expense(session.document, expense_id)
    if expense is None:
        console.print(f"[yellow]Expense {expense_id} not found[/yellow]")
        sys.exit(1)

    if not yes and not typer.confirm(f"Delete '{expense.name}' ({expense.date})?", default=False):
        console.print("[dim]Cancelled[/dim]")
        return

    session.apply(delete_expense, expense_id)
    report_save(session)
    console.print(f"[green]✓[/green] Deleted expense {expense_id}")


def list_command(
    month: str | None = None,
    search: str | None = None,
    sort_by: str = "date",
    order: str = "desc",
    all: bool = False,
    limit: int = 50,
) -> None:
    """List expenses."""
    if sort_by not in SORT_KEYS:
        console.print(f"[red]Sort must be one of: {', '.join(SORT_KEYS)}[/red]")
        sys.exit(1)
    if order not in SORT_ORDERS:
        console.print(f"[red]Order must be one of: {', '.join(SORT_ORDERS)}[/red]")
        sys.exit(1)

    settings = load_settings_or_exit()
    session = open_session(settings)
    document = session.document

    if all:
        expenses: list[Expense] = list(document.expenses)
        period = "all time"
    else:
        target = resolve_month(month)
        expenses = expenses_for_month(document, target)
        period = target

    matches = sort_expenses(filter_expenses(expenses, search), sort_by, order)

    if not matches:
        console.print("[yellow]No expenses found[/yellow]")
        return

    shown = matches[:limit] if limit > 0 else matches
    table = Table(title=f"Expenses ({period}, showing {len(shown)} of {len(matches)})")
    table.add_column("ID", style="dim")
    table.add_column("Date", style="cyan")
    table.add_column("Name", style="white")
    table.add_column("Category", style="magenta")
    table.add_column("Amount", justify="right")
    table.add_column("Notes", style="dim")

    for expense in shown:
        table.add_row(
            str(expense.id),
            f"{format_date(expense.date)} [dim]({format_relative_time(expense.date)})[/dim]",
            escape(expense.name),
            expense.category,
            f"[red]{format_currency(expense.amount, settings.currency)}[/red]",
            escape(truncate_text(expense.notes, 30)),
        )

    console.print(table)
