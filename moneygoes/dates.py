"""Date utilities for moneygoes.

Pure functions for month tokens, date ranges and formatting.
"""

import calendar
from datetime import date, datetime, timedelta

from moneygoes.domain.models import Month


def current_month(today: date | None = None) -> Month:
    """Return the Year-Month token for today (or the given day)."""
    if today is None:
        today = date.today()
    return Month(f"{today.year:04d}-{today.month:02d}")


def parse_month(month: str) -> tuple[int, int]:
    """Split a YYYY-MM token into (year, month).

    Raises:
        ValueError: If the token is not a valid YYYY-MM month.
    """
    dt = datetime.strptime(month, "%Y-%m")
    return dt.year, dt.month


def month_range(month: Month) -> tuple[str, str, str]:
    """Calculate date range and label for a month.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Tuple of (since_date, until_date, label) where:
        - since_date: First day of month (YYYY-MM-DD)
        - until_date: First day of next month (YYYY-MM-DD)
        - label: Human-readable month (e.g., "January 2025")
    """
    dt = datetime.strptime(month, "%Y-%m")
    since = dt.strftime("%Y-%m-01")
    next_month = (dt.replace(day=28) + timedelta(days=4)).replace(day=1)
    until = next_month.strftime("%Y-%m-%d")
    label = dt.strftime("%B %Y")
    return since, until, label


def month_label(month: Month) -> str:
    """Long label for a month, e.g. "January 2025"."""
    return month_range(month)[2]


def short_month_label(month: Month) -> str:
    """Short label for a month, e.g. "Jan 2025"."""
    return datetime.strptime(month, "%Y-%m").strftime("%b %Y")


def shift_month(month: Month, offset: int) -> Month:
    """Move a month token forward (positive) or back (negative) by whole months."""
    year, month_num = parse_month(month)
    index = year * 12 + (month_num - 1) + offset
    return Month(f"{index // 12:04d}-{index % 12 + 1:02d}")


def parse_expense_date(value: object) -> date | None:
    """Parse an expense date string.

    Accepts plain ISO dates ("2025-01-31") and full ISO timestamps.

    Returns:
        The calendar date, or None when the value can't be parsed.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def expense_month(value: object) -> Month | None:
    """Year-Month token an expense date falls in, or None if malformed."""
    parsed = parse_expense_date(value)
    if parsed is None:
        return None
    return current_month(parsed)


def days_remaining_in_month(today: date | None = None) -> int:
    """Number of days left in the month after today."""
    if today is None:
        today = date.today()
    last_day = calendar.monthrange(today.year, today.month)[1]
    return last_day - today.day
