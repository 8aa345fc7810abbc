from decimal import Decimal

import pytest

from statement_parser.amounts import (
    ends_with_money_token,
    find_money_tokens,
    fmt_amount,
    has_money_token,
    is_strict_amount,
    to_decimal,
)


def _values(text: str) -> list[Decimal]:
    return [t.value for t in find_money_tokens(text)]


def test_plain_and_grouped_amounts_are_tokens():
    assert _values("COLES 1000.00 1,234.56") == [Decimal("1000.00"), Decimal("1234.56")]


def test_currency_and_sign_are_folded_into_value():
    assert _values("Opening $1,000.00") == [Decimal("1000.00")]
    assert _values("fee -$12.50") == [Decimal("-12.50")]
    assert _values("fee $-3.00") == [Decimal("-3.00")]


@pytest.mark.parametrize(
    "text",
    [
        "ABC123.45",  # glued to letters
        "1.234.56",  # dotted groups
        "12.345",  # three decimals
        "Ref 123456",  # bare integer
        "BSB 032-000",
    ],
)
def test_non_tokens(text: str):
    assert find_money_tokens(text) == []
    assert not has_money_token(text)


def test_token_positions_locate_the_description_boundary():
    text = "WOOLWORTHS 123 DEBIT 45.67"
    (tok,) = find_money_tokens(text)
    assert text[: tok.start].strip() == "WOOLWORTHS 123 DEBIT"
    assert tok.end == len(text)
    assert tok.magnitude == Decimal("45.67")


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("COLES 45.67 1,200.00", True),
        ("| | 2,500.00 | 5,000.00 |", True),
        ("REFUND 12.00 CR", True),
        ("45.67 REF", False),
        ("BUNNINGS WAREHOUSE", False),
    ],
)
def test_ends_with_money_token(text: str, expected: bool):
    assert ends_with_money_token(text) is expected


def test_strict_amount_cells():
    assert is_strict_amount("2,500.00")
    assert is_strict_amount("0.00")
    assert not is_strict_amount("$2.00")
    assert not is_strict_amount("2500")
    assert not is_strict_amount("Salary 2.00")


def test_to_decimal_and_fmt_amount():
    assert to_decimal("(12.00)") == Decimal("-12.00")
    assert to_decimal(" +$1,000.10 ") == Decimal("1000.10")
    assert fmt_amount(Decimal("-5")) == "-5.00"
    assert fmt_amount(Decimal("2.005")) == "2.01"
    with pytest.raises(ValueError):
        to_decimal("")
    with pytest.raises(ValueError):
        to_decimal("abc")
