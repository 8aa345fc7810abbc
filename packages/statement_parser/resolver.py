"""Column and type resolution for an accreted record body.

Two body shapes are supported.

Pipe-delimited cells
    The description is the first non-empty cell with a letter that is not an
    amount. Cells after it are column slots in the order DEBIT, CREDIT,
    BALANCE; an empty cell still occupies its slot. Zero or out-of-bounds
    amounts count as absent. When both DEBIT and CREDIT hold amounts the
    DEBIT wins and the row is an expense.

Space-delimited text
    Monetary tokens are collected left to right and the description is the
    text before the first one. The type comes from the ordered keyword rules
    in :attr:`ParserConfig.type_rules`; failing that, a record with exactly one
    candidate amount and an explicit ``DEBIT``/``DR`` or ``CREDIT``/``CR`` word
    is accepted. Income takes the second-to-last candidate when there are two
    or more (the last is the running balance); expense takes the first.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal
from typing import TypeAlias

from .amounts import MONEY_RE, find_money_tokens, is_strict_amount, to_decimal
from .config import ParserConfig
from .errors import RecordRejected
from .models import TransactionType

_LETTER_RE = re.compile(r"[^\W\d_]")
_WORD_RE = re.compile(r"[A-Za-z]+")

Slot: TypeAlias = Decimal | None


@dataclass(frozen=True, slots=True)
class Resolution:
    """Amount, direction and raw description chosen for one record."""

    amount: Decimal
    type: TransactionType
    description: str
    rule: str


@dataclass(frozen=True, slots=True)
class ColumnRule:
    """Pipe-table rule: when ``applies(debit, credit)``, take ``pick`` as ``type``."""

    name: str
    applies: Callable[[Slot, Slot], bool]
    type: TransactionType
    pick: Callable[[Slot, Slot], Slot]


# Evaluated in order; the last rule is the documented DEBIT-wins tie-break.
COLUMN_RULES: tuple[ColumnRule, ...] = (
    ColumnRule(
        "debit_only",
        lambda debit, credit: debit is not None and credit is None,
        TransactionType.EXPENSE,
        lambda debit, credit: debit,
    ),
    ColumnRule(
        "credit_only",
        lambda debit, credit: credit is not None and debit is None,
        TransactionType.INCOME,
        lambda debit, credit: credit,
    ),
    ColumnRule(
        "debit_wins",
        lambda debit, credit: debit is not None and credit is not None,
        TransactionType.EXPENSE,
        lambda debit, credit: debit,
    ),
)


class ColumnResolver:
    """Turn a record body into a :class:`Resolution` or raise ``RecordRejected``."""

    def __init__(self, config: ParserConfig) -> None:
        self._config = config
        self._debit_markers = frozenset(m.upper() for m in config.debit_markers)
        self._credit_markers = frozenset(m.upper() for m in config.credit_markers)

    def resolve(self, body: str) -> Resolution:
        if "|" in body:
            return self.resolve_cells(body)
        return self.resolve_spaced(body)

    def _in_bounds(self, value: Decimal) -> bool:
        return self._config.min_amount <= value <= self._config.max_amount

    # ---- pipe-delimited ---------------------------------------------------

    def column_slots(self, cells: list[str]) -> tuple[str, list[Slot]]:
        """Split stripped ``cells`` into the description and amount slots."""

        desc_idx = next(
            (
                k
                for k, cell in enumerate(cells)
                if cell and _LETTER_RE.search(cell) and not is_strict_amount(cell)
            ),
            None,
        )
        if desc_idx is None:
            raise RecordRejected("no description cell")

        slots: list[Slot] = []
        for cell in cells[desc_idx + 1 :]:
            if not cell:
                slots.append(None)
            elif is_strict_amount(cell):
                value = to_decimal(cell)
                slots.append(value if self._in_bounds(value) else None)
        return cells[desc_idx], slots

    def resolve_cells(self, body: str) -> Resolution:
        cells = [cell.strip() for cell in body.split("|")]
        description, slots = self.column_slots(cells)
        debit = slots[0] if len(slots) > 0 else None
        credit = slots[1] if len(slots) > 1 else None

        for rule in COLUMN_RULES:
            if rule.applies(debit, credit):
                amount = rule.pick(debit, credit)
                assert amount is not None
                return Resolution(amount, rule.type, description, rule.name)
        raise RecordRejected("no amount in DEBIT or CREDIT column")

    # ---- space-delimited --------------------------------------------------

    def infer_type(self, text: str, candidate_count: int) -> tuple[TransactionType, str] | None:
        """Return ``(type, rule_name)`` for ``text`` or ``None`` when ambiguous."""

        lowered = text.lower()
        for rule in self._config.type_rules:
            if rule.matches(lowered):
                return rule.type, rule.name

        if candidate_count == 1:
            words = {w.upper() for w in _WORD_RE.findall(text)}
            is_debit = not words.isdisjoint(self._debit_markers)
            is_credit = not words.isdisjoint(self._credit_markers)
            if is_debit and not is_credit:
                return TransactionType.EXPENSE, "debit_marker"
            if is_credit and not is_debit:
                return TransactionType.INCOME, "credit_marker"
        return None

    def resolve_spaced(self, body: str) -> Resolution:
        tokens = find_money_tokens(body)
        if not tokens:
            raise RecordRejected("no monetary amount")
        candidates = [t.magnitude for t in tokens if self._in_bounds(t.magnitude)]
        if not candidates:
            raise RecordRejected("no amount within bounds")

        description = body[: tokens[0].start].strip()
        inferred = self.infer_type(MONEY_RE.sub(" ", body), len(candidates))
        if inferred is None:
            raise RecordRejected("transaction type cannot be inferred")
        tx_type, rule_name = inferred

        if tx_type is TransactionType.INCOME and len(candidates) >= 2:
            amount = candidates[-2]
        else:
            amount = candidates[0]
        return Resolution(amount, tx_type, description, rule_name)


__all__ = ["COLUMN_RULES", "ColumnResolver", "ColumnRule", "Resolution"]
