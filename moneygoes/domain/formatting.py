"""Pure functions for money parsing, display formatting and simple ratios.

This module contains no I/O. Amounts are Money (Decimal) values.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from moneygoes.dates import parse_expense_date
from moneygoes.domain.models import CURRENCY_SYMBOLS, Money

CENTS = Decimal("0.01")

# Keeps stored amounts within 15 significant digits so they survive a JSON float.
MAX_AMOUNT = Decimal("1e13")


def _to_decimal(value: object) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        for symbol in sorted(CURRENCY_SYMBOLS.values(), key=len, reverse=True):
            if text.startswith(symbol):
                text = text[len(symbol) :]
                break
        try:
            amount = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None

    return amount if amount.is_finite() else None


def exceeds_max_amount(value: object) -> bool:
    """True for numbers too large in magnitude to store as Money."""
    amount = _to_decimal(value)
    return amount is not None and abs(amount) >= MAX_AMOUNT


def parse_money(value: object) -> Money | None:
    """Coerce user or stored input to Money.

    Args:
        value: Decimal, int, float or numeric string (commas and a leading
            currency symbol are tolerated in strings).

    Returns:
        Money amount rounded half-up to cents, or None if the value isn't a
        finite number below MAX_AMOUNT in magnitude.
    """
    amount = _to_decimal(value)
    if amount is None or abs(amount) >= MAX_AMOUNT:
        return None
    return Money(round_cents(amount))


def round_cents(amount: Decimal) -> Decimal:
    """Round to two decimals, halves away from zero."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def to_money(value: object) -> Money:
    """Coerce value to Money, raising ValueError when it isn't numeric."""
    amount = parse_money(value)
    if amount is None:
        raise ValueError(f"Invalid amount: {value!r}")
    return amount


def format_currency(amount: Decimal, currency: str = "JMD") -> str:
    """Format money amount for display.

    The sign is dropped; callers decide how to present negatives.

    Args:
        amount: Amount in currency units.
        currency: Currency code; unknown codes are used as their own symbol.

    Returns:
        Formatted string (e.g., "J$1,234.50").
    """
    symbol = CURRENCY_SYMBOLS.get(currency, currency)
    return f"{symbol}{round_cents(abs(amount)):,.2f}"


def calculate_percentage(part: Decimal, whole: Decimal) -> float:
    """Percentage of whole that part represents, 0 when whole is 0."""
    if whole == 0:
        return 0.0
    return float(part / whole * 100)


def budget_status(spent: Decimal, budget: Decimal) -> str:
    """Classify budget usage as "ok", "caution", "warning" or "over"."""
    percentage = calculate_percentage(spent, budget)
    if percentage >= 100:
        return "over"
    if percentage >= 80:
        return "warning"
    if percentage >= 60:
        return "caution"
    return "ok"


def format_date(value: str) -> str:
    """Readable date such as "Jan 5, 2025"; malformed values are returned as-is."""
    parsed = parse_expense_date(value)
    if parsed is None:
        return value
    return f"{parsed.strftime('%b')} {parsed.day}, {parsed.year}"


def format_relative_time(value: str, today: date | None = None) -> str:
    """Describe how long ago a date was ("Today", "3 days ago", ...)."""
    parsed = parse_expense_date(value)
    if parsed is None:
        return value
    if today is None:
        today = date.today()

    diff_days = (today - parsed).days
    if diff_days == 0:
        return "Today"
    if diff_days == 1:
        return "Yesterday"
    if diff_days < 7:
        return f"{diff_days} days ago"
    if diff_days < 30:
        return f"{diff_days // 7} weeks ago"
    if diff_days < 365:
        return f"{diff_days // 30} months ago"
    return f"{diff_days // 365} years ago"


def truncate_text(text: str, max_length: int) -> str:
    """Shorten text to max_length characters, ending with "..." if cut."""
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


def daily_budget_remaining(remaining: Decimal, days_left: int) -> Money:
    """Spread the remaining amount over the days left in the month."""
    if days_left <= 0:
        return Money(Decimal("0"))
    return Money(remaining / days_left)
