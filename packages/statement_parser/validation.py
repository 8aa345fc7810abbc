"""Arithmetic cross-validation against statement-declared figures.

The check is advisory: a failed validation never removes transactions. Each
difference is computed only when the summary field it compares against was
declared, so an absent field can neither pass nor fail the statement.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from .amounts import fmt_amount
from .logging_setup import get_logger
from .models import (
    ParsedTransaction,
    StatementSummary,
    TransactionType,
    ValidationDifferences,
    ValidationResult,
)

_logger = get_logger("statement_parser.validation")

_ZERO = Decimal("0")

_DIFF_LABELS: tuple[tuple[str, str], ...] = (
    ("credits_diff", "Credits"),
    ("debits_diff", "Debits"),
    ("closing_balance_diff", "Closing balance"),
)


def _dollars(value: Decimal | None) -> str:
    return "Not found" if value is None else f"${fmt_amount(value)}"


def cross_validate(
    transactions: Sequence[ParsedTransaction],
    summary: StatementSummary,
    *,
    tolerance: Decimal,
) -> ValidationResult:
    credits = sum(
        (tx.amount for tx in transactions if tx.type is TransactionType.INCOME), _ZERO
    )
    debits = sum(
        (tx.amount for tx in transactions if tx.type is TransactionType.EXPENSE), _ZERO
    )

    closing: Decimal | None = None
    if summary.opening_balance is not None:
        closing = summary.opening_balance + credits - debits

    credits_diff = (
        abs(credits - summary.total_credits) if summary.total_credits is not None else None
    )
    debits_diff = (
        abs(debits - summary.total_debits) if summary.total_debits is not None else None
    )
    closing_diff = (
        abs(closing - summary.closing_balance)
        if closing is not None and summary.closing_balance is not None
        else None
    )

    computed = [d for d in (credits_diff, debits_diff, closing_diff) if d is not None]
    return ValidationResult(
        is_valid=all(d <= tolerance for d in computed),
        calculated_credits=credits,
        calculated_debits=debits,
        calculated_closing_balance=closing,
        differences=ValidationDifferences(
            credits_diff=credits_diff,
            debits_diff=debits_diff,
            closing_balance_diff=closing_diff,
        ),
    )


def mismatch_warnings(result: ValidationResult, *, tolerance: Decimal) -> list[str]:
    """Human-readable warnings for each difference above ``tolerance``."""

    messages: list[str] = []
    for field_name, label in _DIFF_LABELS:
        diff = getattr(result.differences, field_name)
        if diff is not None and diff > tolerance:
            messages.append(f"{label} difference: ${fmt_amount(diff)}")
    return messages


def log_validation_report(
    result: ValidationResult,
    summary: StatementSummary,
    *,
    tolerance: Decimal,
) -> None:
    """Emit the declared-vs-calculated report through the package logger."""

    lines = [
        "Statement summary validation",
        f"  Opening balance: {_dollars(summary.opening_balance)}",
        f"  Closing balance: {_dollars(summary.closing_balance)}",
        f"  Total credits (declared): {_dollars(summary.total_credits)}",
        f"  Total credits (calculated): {_dollars(result.calculated_credits)}",
        f"  Total debits (declared): {_dollars(summary.total_debits)}",
        f"  Total debits (calculated): {_dollars(result.calculated_debits)}",
    ]
    if result.calculated_closing_balance is not None:
        lines.append(
            f"  Closing balance (calculated): {_dollars(result.calculated_closing_balance)}"
        )
    lines.append(f"  Validation: {'PASSED' if result.is_valid else 'FAILED'}")
    lines.extend(f"    {msg}" for msg in mismatch_warnings(result, tolerance=tolerance))
    _logger.info("\n".join(lines))

    if not result.is_valid:
        _logger.warning("Validation failed: parsed transactions do not match statement totals")


__all__ = ["cross_validate", "log_validation_report", "mismatch_warnings"]
