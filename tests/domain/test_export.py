"""Tests for moneygoes.domain.export pure functions."""

from decimal import Decimal

from moneygoes.domain.export import export_filename, quote_field, to_csv
from moneygoes.domain.models import CategoryName, Expense, Money, Month


def make_expense(name: str, amount: str, notes: str = "", expense_date: str = "2024-01-05") -> Expense:
    return Expense(
        id=1,
        name=name,
        category=CategoryName("Food"),
        amount=Money(Decimal(amount)),
        date=expense_date,
        notes=notes,
    )


class TestToCsv:
    """Tests for to_csv."""

    def test_single_expense(self) -> None:
        """Should match the documented layout exactly."""
        result = to_csv([make_expense("Coffee", "3.5")])
        assert result == 'Date,Name,Category,Amount,Notes\n2024-01-05,"Coffee",Food,3.50,""'

    def test_header_only_for_no_expenses(self) -> None:
        """Should still emit the header."""
        assert to_csv([]) == "Date,Name,Category,Amount,Notes"

    def test_rows_in_input_order(self) -> None:
        """Should keep input order, one row per expense."""
        result = to_csv(
            [
                make_expense("B", "10", expense_date="2024-01-09"),
                make_expense("A", "1234.567", notes="bulk", expense_date="2024-01-01"),
            ]
        )
        lines = result.split("\n")
        assert lines[1] == '2024-01-09,"B",Food,10.00,""'
        assert lines[2] == '2024-01-01,"A",Food,1234.57,"bulk"'

    def test_embedded_quotes_are_doubled(self) -> None:
        """Should escape quotes so the row still parses."""
        result = to_csv([make_expense('The "Best" Pizza', "20", notes="said \"yum\", twice")])
        assert result.split("\n")[1] == '2024-01-05,"The ""Best"" Pizza",Food,20.00,"said ""yum"", twice"'

    def test_half_cents_round_up(self) -> None:
        """Should round a half cent up."""
        assert to_csv([make_expense("Gum", "0.125")]).split("\n")[1] == '2024-01-05,"Gum",Food,0.13,""'

    def test_quote_field(self) -> None:
        """Should wrap values in quotes."""
        assert quote_field("a,b") == '"a,b"'


class TestExportFilename:
    """Tests for export_filename."""

    def test_filename(self) -> None:
        """Should include the month token."""
        assert export_filename(Month("2025-06")) == "expenses-2025-06.csv"
