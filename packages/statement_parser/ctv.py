"""Canonical Transaction View (CTV) hand-off for parsed statements.

Downstream collaborators (categorizer, persistence) consume flat rows. Field
order (exact):

    - idx: integer (0-based position in the parse result)
    - id: string | None (always ``None``; persistence assigns identifiers)
    - description: string
    - amount: string (2 decimal places, ASCII dot decimal, leading ``-`` for
      expenses)
    - date: string (YYYY-MM-DD)
    - merchant: string | None (not derived from statement text)
    - category: string | None (left for the categorizer)
    - memo: string (``Type=income`` or ``Type=expense``)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass
from typing import Any

from .amounts import fmt_amount
from .models import ParsedTransaction


@dataclass(frozen=True, slots=True)
class CanonicalTransaction:
    """A single canonicalized transaction row.

    All fields are strings (or ``None``) so the view stays CSV/JSON-friendly.
    ``amount`` and ``date`` are normalized strings rather than numeric/date
    types to keep output formatting exact.
    """

    idx: int
    id: str | None
    description: str | None
    amount: str | None
    date: str | None
    merchant: str | None
    category: str | None
    memo: str | None

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


def to_ctv(transactions: Iterable[ParsedTransaction]) -> list[CanonicalTransaction]:
    """Map parsed transactions to CTV rows in input order."""

    return [
        CanonicalTransaction(
            idx=idx,
            id=None,
            description=tx.description,
            amount=fmt_amount(tx.signed_amount),
            date=tx.date.isoformat(),
            merchant=None,
            category=None,
            memo=f"Type={tx.type.value}",
        )
        for idx, tx in enumerate(transactions)
    ]


__all__ = ["CanonicalTransaction", "to_ctv"]
