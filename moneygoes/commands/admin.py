"""Admin commands for init, config, export, import and clearing a month."""

import sys
from pathlib import Path

import typer
from rich.markup import escape

from moneygoes.commands.shared import console, load_settings_or_exit, open_session, report_save, resolve_month
from moneygoes.config import create_default_config, get_config_path, load_settings, set_value
from moneygoes.dates import month_label
from moneygoes.domain.derive import expenses_for_month
from moneygoes.domain.export import export_filename, to_csv
from moneygoes.domain.formatting import parse_money
from moneygoes.store.document import DATA_KEY, clear_month_expenses, export_json, import_json
from moneygoes.store.storage import FileStorage


def init_command(force: bool = False) -> None:
    """Create the config file and an empty data file."""
    config_path = get_config_path()

    if config_path.exists() and not force:
        console.print("[red]Initialization failed:[/red]", style="bold")
        console.print(f"  Config already exists: {config_path}")
        console.print("\n[yellow]Use 'moneygoes init --force' to overwrite[/yellow]")
        sys.exit(1)

    try:
        console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Config file created (permissions: 600)")

        settings = load_settings(config_path)
        storage = FileStorage(settings.resolved_data_dir())
        session = open_session(settings)
        if not session.save():
            console.print(f"[red]Could not write data file in {storage.directory}[/red]", style="bold")
            sys.exit(1)
        console.print(f"[green]✓[/green] Data file ready: {storage.path_for(DATA_KEY)}")
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print("\n[green]Initialization complete![/green]", style="bold")


def config_command(
    currency: str | None = None,
    income: str | None = None,
    autosave: float | None = None,
    data_dir: str | None = None,
) -> None:
    """Show settings, or update the ones given."""
    updates: dict[str, object] = {}
    if currency is not None:
        updates["currency"] = currency.strip().upper()
    if income is not None:
        parsed = parse_money(income)
        if parsed is None or parsed < 0:
            console.print(f"[red]Invalid income '{income}'[/red]")
            sys.exit(1)
        updates["monthly_income"] = int(parsed) if parsed == parsed.to_integral_value() else float(parsed)
    if autosave is not None:
        updates["autosave_seconds"] = autosave
    if data_dir is not None:
        updates["data_dir"] = data_dir

    try:
        for key, value in updates.items():
            set_value(key, value)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    settings = load_settings_or_exit()
    if updates:
        console.print("[green]✓[/green] Config updated")
    console.print(f"[dim]Config: {get_config_path()}[/dim]")
    console.print(f"  Currency: {settings.currency}")
    console.print(f"  Monthly income: {settings.monthly_income}")
    console.print(f"  Autosave: every {settings.autosave_seconds:g}s")
    console.print(f"  Data directory: {settings.resolved_data_dir()}")
    if "currency" in updates or "monthly_income" in updates:
        console.print("[dim]New values apply to data files created from now on[/dim]")


def export_command(month: str | None = None, output: str | None = None, json_format: bool = False) -> None:
    """Export a month's expenses as CSV, or the whole document as JSON."""
    document = open_session().document

    if json_format:
        path = Path(output or "moneygoes-backup.json").expanduser()
        content = export_json(document)
        count = len(document.expenses)
    else:
        target = resolve_month(month)
        expenses = expenses_for_month(document, target)
        if not expenses:
            console.print(f"[yellow]No expenses to export for {month_label(target)}[/yellow]")
            return
        path = Path(output or export_filename(target)).expanduser()
        content = to_csv(expenses)
        count = len(expenses)

    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Export failed: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Exported {count} expense(s) to {path}")


def import_command(path: str, yes: bool = False) -> None:
    """Replace the stored document with a JSON export."""
    source = Path(path).expanduser()
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Could not read {source}: {e}[/red]")
        sys.exit(1)

    settings = load_settings_or_exit()
    imported = import_json(text, defaults=settings.document_defaults())
    if imported is None:
        console.print(f"[red]{source} is not a valid export[/red]")
        sys.exit(1)

    if not yes and not typer.confirm(
        f"Replace current data with {len(imported.expenses)} imported expense(s)?", default=False
    ):
        console.print("[dim]Cancelled[/dim]")
        return

    session = open_session(settings)
    if not session.replace_document(imported):
        console.print("[red]Import could not be saved[/red]", style="bold")
        sys.exit(1)
    console.print(f"[green]✓[/green] Imported {len(imported.expenses)} expense(s) from {escape(str(source))}")


def clear_month_command(month: str | None = None, yes: bool = False) -> None:
    """Delete every expense in a month."""
    session = open_session()
    target = resolve_month(month)
    count = len(expenses_for_month(session.document, target))

    if count == 0:
        console.print(f"[yellow]No expenses in {month_label(target)}[/yellow]")
        return

    if not yes and not typer.confirm(f"Delete all {count} expense(s) in {month_label(target)}?", default=False):
        console.print("[dim]Cancelled[/dim]")
        return

    session.apply(clear_month_expenses, target)
    report_save(session)
    console.print(f"[green]✓[/green] Cleared {count} expense(s) from {month_label(target)}")
