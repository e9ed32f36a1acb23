"""Tests for moneygoes.domain.formatting pure functions."""

from datetime import date
from decimal import Decimal

import pytest

from moneygoes.domain.formatting import (
    budget_status,
    calculate_percentage,
    daily_budget_remaining,
    exceeds_max_amount,
    format_currency,
    format_date,
    format_relative_time,
    parse_money,
    to_money,
    truncate_text,
)


class TestParseMoney:
    """Tests for parse_money and to_money."""

    def test_parses_strings(self) -> None:
        """Should parse numeric strings, ignoring commas and symbols."""
        assert parse_money("12.50") == Decimal("12.50")
        assert parse_money("1,234.5") == Decimal("1234.5")
        assert parse_money("J$100") == Decimal("100")
        assert parse_money(" 7 ") == Decimal("7")

    def test_parses_numbers_without_float_noise(self) -> None:
        """Should convert floats through their shortest repr."""
        assert parse_money(3.5) == Decimal("3.5")
        assert parse_money(0.1) == Decimal("0.1")
        assert parse_money(10) == Decimal("10")

    def test_rejects_non_numbers(self) -> None:
        """Should return None for anything that isn't a finite number."""
        assert parse_money("abc") is None
        assert parse_money("") is None
        assert parse_money(None) is None
        assert parse_money(True) is None
        assert parse_money("NaN") is None
        assert parse_money(float("inf")) is None

    def test_rounds_half_up_to_cents(self) -> None:
        """Should keep two decimals, rounding halves away from zero."""
        assert parse_money("0.125") == Decimal("0.13")
        assert parse_money("2.675") == Decimal("2.68")
        assert parse_money(Decimal("-1.005")) == Decimal("-1.01")

    def test_rejects_oversized_amounts(self) -> None:
        """Should refuse amounts that can't be stored exactly."""
        assert parse_money("9999999999999.99") == Decimal("9999999999999.99")
        assert parse_money("10000000000000") is None
        assert parse_money("12345678901234567.89") is None
        assert parse_money("1e5000") is None
        assert exceeds_max_amount("1e5000")
        assert not exceeds_max_amount("12.50")
        assert not exceeds_max_amount("abc")

    def test_to_money_raises(self) -> None:
        """Should raise ValueError for bad input."""
        with pytest.raises(ValueError):
            to_money("twelve")


class TestFormatCurrency:
    """Tests for format_currency."""

    def test_known_currency(self) -> None:
        """Should use the currency's symbol and two decimals."""
        assert format_currency(Decimal("1234.5"), "JMD") == "J$1,234.50"
        assert format_currency(Decimal("3"), "GBP") == "£3.00"

    def test_unknown_currency_uses_code(self) -> None:
        """Should fall back to the code itself."""
        assert format_currency(Decimal("5"), "XYZ") == "XYZ5.00"

    def test_rounds_half_up(self) -> None:
        """Should round a half cent up rather than to even."""
        assert format_currency(Decimal("0.125"), "USD") == "$0.13"

    def test_drops_sign(self) -> None:
        """Should format the absolute value."""
        assert format_currency(Decimal("-20"), "USD") == "$20.00"


class TestPercentages:
    """Tests for calculate_percentage and budget_status."""

    def test_percentage(self) -> None:
        """Should compute part of whole."""
        assert calculate_percentage(Decimal("25"), Decimal("200")) == 12.5

    def test_zero_whole(self) -> None:
        """Should be 0 when whole is 0."""
        assert calculate_percentage(Decimal("25"), Decimal("0")) == 0.0

    def test_status_levels(self) -> None:
        """Should classify usage by thresholds."""
        assert budget_status(Decimal("10"), Decimal("100")) == "ok"
        assert budget_status(Decimal("60"), Decimal("100")) == "caution"
        assert budget_status(Decimal("85"), Decimal("100")) == "warning"
        assert budget_status(Decimal("100"), Decimal("100")) == "over"

    def test_daily_budget(self) -> None:
        """Should spread remaining over days left."""
        assert daily_budget_remaining(Decimal("100"), 4) == Decimal("25")
        assert daily_budget_remaining(Decimal("100"), 0) == Decimal("0")


class TestDateText:
    """Tests for format_date, format_relative_time and truncate_text."""

    def test_format_date(self) -> None:
        """Should render a readable date."""
        assert format_date("2024-01-05") == "Jan 5, 2024"

    def test_format_date_malformed(self) -> None:
        """Should pass malformed values through."""
        assert format_date("someday") == "someday"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("2025-06-15", "Today"),
            ("2025-06-14", "Yesterday"),
            ("2025-06-12", "3 days ago"),
            ("2025-06-01", "2 weeks ago"),
            ("2025-03-15", "3 months ago"),
            ("2023-06-15", "2 years ago"),
        ],
    )
    def test_relative_time(self, value: str, expected: str) -> None:
        """Should describe age relative to today."""
        assert format_relative_time(value, today=date(2025, 6, 15)) == expected

    def test_truncate(self) -> None:
        """Should cut long text with an ellipsis."""
        assert truncate_text("short", 10) == "short"
        assert truncate_text("a long piece of text", 10) == "a long ..."
