"""Extraction of statement-declared balances and totals.

Only the first line carrying each marker contributes. A marker line without
a monetary token is ignored and the search for that marker continues.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from decimal import Decimal

from .amounts import find_money_tokens
from .logging_setup import get_logger
from .models import StatementSummary

_logger = get_logger("statement_parser.summary")

# Marker -> StatementSummary field. Balances keep their sign; totals are
# magnitudes.
_MARKERS: tuple[tuple[str, re.Pattern[str], bool], ...] = (
    ("opening_balance", re.compile(r"opening\s+balance", re.IGNORECASE), True),
    ("closing_balance", re.compile(r"closing\s+balance", re.IGNORECASE), True),
    ("total_credits", re.compile(r"total\s+credits", re.IGNORECASE), False),
    ("total_debits", re.compile(r"total\s+debits", re.IGNORECASE), False),
)


def _declared_amount(line: str, *, signed: bool) -> Decimal | None:
    tokens = find_money_tokens(line)
    if not tokens:
        return None
    first = tokens[0]
    if not signed:
        return first.magnitude
    if first.value < 0 or line.startswith("-"):
        return -first.magnitude
    return first.magnitude


def extract_summary(lines: Iterable[str]) -> StatementSummary:
    """Scan ``lines`` for opening/closing balance and total credit/debit lines."""

    found: dict[str, Decimal] = {}
    for line in lines:
        for field_name, pattern, signed in _MARKERS:
            if not pattern.search(line):
                continue
            value = _declared_amount(line, signed=signed)
            if value is None:
                continue
            if field_name in found:
                _logger.debug("Ignoring repeated %s declaration: %r", field_name, line)
                continue
            found[field_name] = value
    return StatementSummary(**found)


__all__ = ["extract_summary"]
