"""Tests for moneygoes.dates pure functions."""

from datetime import date

import pytest

from moneygoes.dates import (
    current_month,
    days_remaining_in_month,
    expense_month,
    month_label,
    month_range,
    parse_expense_date,
    shift_month,
    short_month_label,
)
from moneygoes.domain.models import Month


class TestMonthRange:
    """Tests for month_range."""

    def test_january_range(self) -> None:
        """Should calculate range for January."""
        since, until, label = month_range(Month("2025-01"))

        assert since == "2025-01-01"
        assert until == "2025-02-01"
        assert label == "January 2025"

    def test_december_range_crosses_year(self) -> None:
        """Should handle December (crosses year boundary)."""
        since, until, label = month_range(Month("2025-12"))

        assert since == "2025-12-01"
        assert until == "2026-01-01"
        assert label == "December 2025"

    def test_february_leap_year(self) -> None:
        """Should handle February in leap year."""
        since, until, _ = month_range(Month("2024-02"))

        assert since == "2024-02-01"
        assert until == "2024-03-01"

    def test_invalid_month_format_raises_valueerror(self) -> None:
        """Should raise ValueError for invalid month format."""
        with pytest.raises(ValueError):
            month_range(Month("invalid"))

    def test_invalid_month_number_raises_valueerror(self) -> None:
        """Should raise ValueError for invalid month number."""
        with pytest.raises(ValueError):
            month_range(Month("2025-13"))


class TestMonthTokens:
    """Tests for current_month, shift_month and labels."""

    def test_current_month_pads_month(self) -> None:
        """Should zero-pad single digit months."""
        assert current_month(date(2025, 3, 9)) == "2025-03"

    def test_current_month_defaults_to_today(self) -> None:
        """Should use today's date when none is given."""
        today = date.today()
        assert current_month() == f"{today.year:04d}-{today.month:02d}"

    def test_shift_back_across_year(self) -> None:
        """Should roll back into the previous year."""
        assert shift_month(Month("2025-02"), -3) == "2024-11"

    def test_shift_forward_across_year(self) -> None:
        """Should roll forward into the next year."""
        assert shift_month(Month("2025-11"), 2) == "2026-01"

    def test_shift_zero_is_identity(self) -> None:
        """Should return the same month for offset 0."""
        assert shift_month(Month("2025-06"), 0) == "2025-06"

    def test_labels(self) -> None:
        """Should produce long and short labels."""
        assert month_label(Month("2024-01")) == "January 2024"
        assert short_month_label(Month("2024-01")) == "Jan 2024"


class TestParseExpenseDate:
    """Tests for parse_expense_date and expense_month."""

    def test_plain_iso_date(self) -> None:
        """Should parse YYYY-MM-DD."""
        assert parse_expense_date("2024-01-05") == date(2024, 1, 5)

    def test_iso_timestamp(self) -> None:
        """Should parse a full ISO timestamp to its date."""
        assert parse_expense_date("2024-01-05T10:30:00Z") == date(2024, 1, 5)

    def test_garbage_returns_none(self) -> None:
        """Should return None for unparseable values."""
        assert parse_expense_date("not a date") is None
        assert parse_expense_date("") is None
        assert parse_expense_date(None) is None
        assert parse_expense_date("2024-02-30") is None

    def test_expense_month(self) -> None:
        """Should bucket dates into Year-Month tokens."""
        assert expense_month("2024-12-31") == "2024-12"
        assert expense_month("bogus") is None


class TestDaysRemaining:
    """Tests for days_remaining_in_month."""

    def test_first_of_month(self) -> None:
        """Should count the days after the 1st."""
        assert days_remaining_in_month(date(2025, 4, 1)) == 29

    def test_last_day_of_month(self) -> None:
        """Should be zero on the last day."""
        assert days_remaining_in_month(date(2025, 1, 31)) == 0

    def test_leap_february(self) -> None:
        """Should account for leap years."""
        assert days_remaining_in_month(date(2024, 2, 28)) == 1
