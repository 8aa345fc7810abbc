"""Duplicate suppression and final ordering of parsed transactions.

Two transactions are duplicates when they share date, cleaned description and
type, and their amounts differ by less than one cent. The first occurrence in
scan order is kept. Survivors are stably sorted by ISO date string, so records
on the same day keep their statement order.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable
from decimal import Decimal
from typing import TypeAlias

from .amounts import CENT
from .logging_setup import get_logger
from .models import ParsedTransaction, TransactionType

_logger = get_logger("statement_parser.dedupe")

DedupeKey: TypeAlias = tuple[dt.date, str, TransactionType]


def dedupe_and_sort(transactions: Iterable[ParsedTransaction]) -> list[ParsedTransaction]:
    seen: dict[DedupeKey, list[Decimal]] = {}
    kept: list[ParsedTransaction] = []
    for tx in transactions:
        key = (tx.date, tx.description, tx.type)
        amounts = seen.setdefault(key, [])
        if any(abs(tx.amount - prior) < CENT for prior in amounts):
            _logger.debug(
                "Dropping duplicate %s %s %s %s",
                tx.date.isoformat(),
                tx.type,
                tx.description,
                tx.amount,
            )
            continue
        amounts.append(tx.amount)
        kept.append(tx)

    kept.sort(key=lambda tx: tx.date.isoformat())
    return kept


__all__ = ["dedupe_and_sort"]
