"""Helpers shared by the CLI commands."""

import sys
import tomllib
from datetime import date

import pandas as pd
from rich.console import Console

from moneygoes.config import Settings, get_config_path, load_settings
from moneygoes.dates import current_month, parse_month
from moneygoes.domain.models import Month
from moneygoes.store.session import Session
from moneygoes.store.storage import FileStorage

console = Console()


def load_settings_or_exit() -> Settings:
    """Load settings, exiting with a message if the config file is broken."""
    try:
        return load_settings()
    except (ValueError, tomllib.TOMLDecodeError) as e:
        console.print(f"[red]Invalid config ({get_config_path()}): {e}[/red]", style="bold")
        sys.exit(1)


def open_session(settings: Settings | None = None) -> Session:
    """Open a session on the configured data directory."""
    if settings is None:
        settings = load_settings_or_exit()
    storage = FileStorage(settings.resolved_data_dir())
    return Session.open(storage, defaults=settings.document_defaults())


def resolve_month(month: str | None) -> Month:
    """Validate a --month option, defaulting to the current month."""
    if not month:
        return current_month()
    try:
        year, month_num = parse_month(month)
    except ValueError:
        console.print(f"[red]Invalid month '{month}' (expected YYYY-MM)[/red]")
        sys.exit(1)
    return Month(f"{year:04d}-{month_num:02d}")


def normalize_date(value: str | None) -> str:
    """Normalize a user-entered date to YYYY-MM-DD.

    ISO dates pass straight through; anything else is parsed day-first
    (DD/MM/YYYY, DD-MM-YYYY, ...). Blank input means today.

    Raises:
        ValueError: If the value can't be read as a date.
    """
    if value is None or not value.strip():
        return date.today().isoformat()
    text = value.strip()
    try:
        return date.fromisoformat(text).isoformat()
    except ValueError:
        pass
    try:
        parsed = pd.to_datetime(text, dayfirst=True)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Invalid date '{value}'") from e
    if pd.isna(parsed):
        raise ValueError(f"Invalid date '{value}'")
    return parsed.strftime("%Y-%m-%d")


def report_save(session: Session) -> None:
    """Warn when the last change couldn't be written."""
    if session.last_save_ok is False:
        console.print("[yellow]Warning: change could not be saved to disk[/yellow]")
