from decimal import Decimal

from statement_parser.models import StatementSummary
from statement_parser.summary import extract_summary


def test_all_four_markers(statement_text: str):
    summary = extract_summary(statement_text.splitlines())
    assert summary == StatementSummary(
        opening_balance=Decimal("1000.00"),
        closing_balance=Decimal("1000.00"),
        total_credits=Decimal("250.00"),
        total_debits=Decimal("250.00"),
    )


def test_absent_is_distinct_from_zero():
    summary = extract_summary(["Total Credits 0.00"])
    assert summary.total_credits == Decimal("0.00")
    assert summary.total_debits is None
    assert summary.opening_balance is None
    assert summary.closing_balance is None


def test_markers_are_case_and_whitespace_insensitive():
    summary = extract_summary(["OPENING   BALANCE 10.00", "closing\tbalance $20.00"])
    assert summary.opening_balance == Decimal("10.00")
    assert summary.closing_balance == Decimal("20.00")


def test_first_declaration_wins():
    summary = extract_summary(["Opening Balance 10.00", "Opening Balance 99.00"])
    assert summary.opening_balance == Decimal("10.00")


def test_marker_without_amount_does_not_consume_marker():
    summary = extract_summary(["Opening balance", "see over", "Opening balance 12.34"])
    assert summary.opening_balance == Decimal("12.34")


def test_negative_balances():
    assert extract_summary(["Opening Balance -$50.00"]).opening_balance == Decimal("-50.00")
    assert extract_summary(["-Closing Balance 75.25"]).closing_balance == Decimal("-75.25")


def test_hyphen_elsewhere_does_not_negate():
    # Date ranges contain hyphens; only the token's own sign counts.
    summary = extract_summary(["Closing Balance 01-03-24 $500.00"])
    assert summary.closing_balance == Decimal("500.00")


def test_totals_are_magnitudes():
    assert extract_summary(["Total Debits -300.00"]).total_debits == Decimal("300.00")
