import datetime as dt
from decimal import Decimal

from statement_parser.dedupe import dedupe_and_sort
from statement_parser.models import ParsedTransaction, TransactionType


def _tx(day: int, description: str, amount: str, tx_type=TransactionType.EXPENSE):
    return ParsedTransaction(
        date=dt.date(2024, 3, day),
        description=description,
        amount=Decimal(amount),
        type=tx_type,
    )


def test_exact_duplicates_collapse_to_first_occurrence():
    a = _tx(1, "COLES", "45.67")
    assert dedupe_and_sort([a, _tx(1, "COLES", "45.67")]) == [a]


def test_sub_cent_differences_are_duplicates():
    out = dedupe_and_sort([_tx(1, "COLES", "45.670"), _tx(1, "COLES", "45.675")])
    assert len(out) == 1
    assert out[0].amount == Decimal("45.670")


def test_a_cent_apart_is_not_a_duplicate():
    assert len(dedupe_and_sort([_tx(1, "COLES", "45.67"), _tx(1, "COLES", "45.68")])) == 2


def test_type_date_and_description_are_part_of_the_key():
    rows = [
        _tx(1, "COLES", "10.00"),
        _tx(1, "COLES", "10.00", TransactionType.INCOME),
        _tx(2, "COLES", "10.00"),
        _tx(1, "ALDI", "10.00"),
    ]
    assert len(dedupe_and_sort(rows)) == 4


def test_sort_is_ascending_and_stable():
    rows = [_tx(9, "LATE", "1.00"), _tx(2, "FIRST", "2.00"), _tx(2, "SECOND", "3.00")]
    out = dedupe_and_sort(rows)
    assert [t.description for t in out] == ["FIRST", "SECOND", "LATE"]
