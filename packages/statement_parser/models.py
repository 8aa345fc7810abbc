"""Data models for ``statement_parser``.

All models are frozen pydantic models. Money is carried as
:class:`decimal.Decimal` so that aggregate arithmetic in the cross-validator is
exact. Field names are snake_case in Python and serialize with camelCase
aliases (``model_dump(by_alias=True)``) to match the JSON contract consumed by
the upload layer (``isValid``, ``calculatedCredits``, ``openingBalance``...).
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

MAX_DESCRIPTION_LENGTH = 200

# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------


class TransactionType(StrEnum):
    INCOME = "income"
    EXPENSE = "expense"


class _Model(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ParsedTransaction(_Model):
    """A single reconstructed statement transaction.

    ``amount`` is always strictly positive; direction is carried only by
    ``type``. Identifiers, categories and source tags are assigned by
    downstream collaborators, never here.
    """

    date: dt.date
    description: str
    amount: Decimal
    type: TransactionType

    @field_validator("description")
    @classmethod
    def _description_shape(cls, v: str) -> str:
        if not 1 <= len(v) <= MAX_DESCRIPTION_LENGTH:
            raise ValueError(f"description must be 1..{MAX_DESCRIPTION_LENGTH} characters")
        if not any(ch.isalpha() for ch in v):
            raise ValueError("description must contain at least one letter")
        return v

    @field_validator("amount")
    @classmethod
    def _amount_positive(cls, v: Decimal) -> Decimal:
        if not v.is_finite() or v <= 0:
            raise ValueError("amount must be strictly positive")
        return v

    @property
    def signed_amount(self) -> Decimal:
        """Amount with ledger polarity: inflows positive, outflows negative."""

        return self.amount if self.type is TransactionType.INCOME else -self.amount


# ---------------------------------------------------------------------------
# Statement summary and validation
# ---------------------------------------------------------------------------


class StatementSummary(_Model):
    """Figures declared by the statement itself.

    A field is ``None`` when no declaration line was found. ``None`` and zero
    are different: the cross-validator only compares fields that are present.
    """

    opening_balance: Decimal | None = None
    closing_balance: Decimal | None = None
    total_credits: Decimal | None = None
    total_debits: Decimal | None = None


class ValidationDifferences(_Model):
    """Absolute deltas between calculated and declared figures."""

    credits_diff: Decimal | None = None
    debits_diff: Decimal | None = None
    closing_balance_diff: Decimal | None = None


class ValidationResult(_Model):
    """Advisory outcome of cross-checking transactions against the summary."""

    is_valid: bool
    calculated_credits: Decimal
    calculated_debits: Decimal
    calculated_closing_balance: Decimal | None = None
    differences: ValidationDifferences = ValidationDifferences()


class ParseResult(_Model):
    """Everything derived from one statement text."""

    transactions: tuple[ParsedTransaction, ...]
    summary: StatementSummary
    validation: ValidationResult

    @property
    def is_empty(self) -> bool:
        return not self.transactions

    @property
    def date_range(self) -> tuple[dt.date, dt.date] | None:
        if not self.transactions:
            return None
        return self.transactions[0].date, self.transactions[-1].date


__all__ = [
    "MAX_DESCRIPTION_LENGTH",
    "ParseResult",
    "ParsedTransaction",
    "StatementSummary",
    "TransactionType",
    "ValidationDifferences",
    "ValidationResult",
]
