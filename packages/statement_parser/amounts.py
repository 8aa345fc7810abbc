"""Monetary token recognition and Decimal conversion.

A monetary token is an optional sign and/or ``$`` followed by a digit run (or
comma-grouped thousands) and exactly two decimals, e.g. ``45.67``,
``$1,000.00`` or ``-$12.50``. Tokens glued to letters or other digits
(``ABC123.45``, ``1.234.56``) are not tokens. Bare integers (reference
numbers, BSBs, page numbers) never qualify.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

MONEY_RE = re.compile(
    r"""
    (?<![\w.,$])
    (?:(?P<sign>[+-])\s?)?
    (?P<currency>\$\s?)?
    (?:(?P<inner_sign>[+-])\s?)?
    (?P<number>\d{1,3}(?:,\d{3})+|\d+)
    \.\d{2}
    (?!\d)(?![.,]\d)
    """,
    re.VERBOSE,
)

# Cell content for pipe-delimited tables: digits, optional thousands groups,
# exactly two decimals and nothing else.
STRICT_AMOUNT_RE = re.compile(r"^(?:\d{1,3}(?:,\d{3})+|\d+)\.\d{2}$")

# What may follow the last token of an amount line: column pipes and an
# optional DR/CR suffix.
_AMOUNT_LINE_TAIL_RE = re.compile(r"^[\s|]*(?:(?:CR|DR)\b[\s|]*)?$", re.IGNORECASE)

CENT = Decimal("0.01")


@dataclass(frozen=True, slots=True)
class MoneyToken:
    """A monetary token located within a line of text."""

    text: str
    value: Decimal
    start: int
    end: int

    @property
    def magnitude(self) -> Decimal:
        return abs(self.value)


def to_decimal(raw: str | None) -> Decimal:
    """Parse a monetary string such as ``"-$1,234.56"`` or ``"(12.00)"``.

    Raises ``ValueError`` for empty or unparseable input.
    """

    if raw is None:
        raise ValueError("amount is required")
    s = raw.strip()
    if not s:
        raise ValueError("amount is empty")
    negative = False

    # Strip leading sign, currency symbol and surrounding parentheses in any
    # order until stable.
    while True:
        changed = False
        if s.startswith("+"):
            s = s[1:].lstrip()
            changed = True
        elif s.startswith("-"):
            negative = True
            s = s[1:].lstrip()
            changed = True
        if s.startswith("$"):
            s = s[1:].lstrip()
            changed = True
        if s.startswith("(") and s.endswith(")") and len(s) >= 2:
            negative = True
            s = s[1:-1].strip()
            changed = True
        if not changed:
            break

    s = s.replace(",", "").strip()

    try:
        d = Decimal(s)
    except InvalidOperation as exc:
        raise ValueError(f"invalid amount: {raw!r}") from exc
    if not d.is_finite():
        raise ValueError(f"invalid amount: {raw!r}")
    return -abs(d) if negative else d


def fmt_amount(d: Decimal) -> str:
    """Format ``d`` with exactly two decimals and a leading minus when negative."""

    q = d.quantize(CENT, rounding=ROUND_HALF_UP)
    return f"{q:.2f}"


def find_money_tokens(text: str) -> list[MoneyToken]:
    """Return every monetary token in ``text`` in left-to-right order."""

    tokens: list[MoneyToken] = []
    for m in MONEY_RE.finditer(text):
        raw = m.group(0)
        value = to_decimal(raw.replace(" ", ""))
        tokens.append(MoneyToken(text=raw, value=value, start=m.start(), end=m.end()))
    return tokens


def has_money_token(text: str) -> bool:
    return MONEY_RE.search(text) is not None


def ends_with_money_token(text: str) -> bool:
    """True when the last monetary token of ``text`` sits at the end of the line.

    Trailing column pipes and a ``DR``/``CR`` suffix are tolerated, so both
    ``"COLES 45.67 1,200.00"`` and ``"| | 2,500.00 | 5,000.00 |"`` qualify.
    """

    last = None
    for last in MONEY_RE.finditer(text):
        pass
    if last is None:
        return False
    return _AMOUNT_LINE_TAIL_RE.match(text[last.end() :]) is not None


def is_strict_amount(cell: str) -> bool:
    return STRICT_AMOUNT_RE.match(cell) is not None


__all__ = [
    "CENT",
    "MONEY_RE",
    "MoneyToken",
    "ends_with_money_token",
    "find_money_tokens",
    "fmt_amount",
    "has_money_token",
    "is_strict_amount",
    "to_decimal",
]
