"""Parser configuration: tunables and pattern tables as immutable data.

Every heuristic table the engine consults (noise patterns, keyword cues,
description prefixes) lives on :class:`ParserConfig`, a frozen dataclass
handed to :class:`statement_parser.api.StatementParser` at construction.
Callers that need a different bank's boilerplate build a new config with
:func:`dataclasses.replace` rather than mutating shared state.

Numeric tunables can be overridden from the environment via
:meth:`ParserConfig.from_env`:

- ``STATEMENT_PARSER_MAX_CONTINUATION_LINES``
- ``STATEMENT_PARSER_TOLERANCE``
- ``STATEMENT_PARSER_MAX_AGE_YEARS``
- ``STATEMENT_PARSER_YEAR_PIVOT``
- ``STATEMENT_PARSER_MIN_AMOUNT`` / ``STATEMENT_PARSER_MAX_AMOUNT``
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation

from .errors import ConfigError
from .models import TransactionType

_ENV_PREFIX = "STATEMENT_PARSER_"


def _patterns(*sources: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(s, re.IGNORECASE) for s in sources)


@dataclass(frozen=True, slots=True)
class NoiseRule:
    """A named group of line patterns that mark a line as non-transactional."""

    name: str
    patterns: tuple[re.Pattern[str], ...]

    def matches(self, line: str) -> bool:
        return any(p.search(line) for p in self.patterns)


@dataclass(frozen=True, slots=True)
class TypeCueRule:
    """Keyword cues that, when found in a description, decide its type."""

    name: str
    cues: tuple[str, ...]
    type: TransactionType

    def matches(self, text_lower: str) -> bool:
        return any(cue in text_lower for cue in self.cues)


DEFAULT_NOISE_RULES: tuple[NoiseRule, ...] = (
    NoiseRule(
        "statement_header",
        _patterns(
            r"^statement\s+no\.?\s*\d+\s+page\s+\d+",
            r"^page\s+\d+\s+of\s+\d+",
            r"^transaction\s+history",
            r"^account\s+name",
            r"^account\s+number",
            r"^customer\s+id",
            r"^bsb",
        ),
    ),
    NoiseRule(
        "declared_balance",
        _patterns(
            r"^(?:statement\s+)?opening\s+balance",
            r"^closing\s+balance",
            r"^total\s+(?:credits|debits|deposits|withdrawals)",
            r"^balance\s+(?:brought|carried)\s+forward",
        ),
    ),
    NoiseRule(
        "column_header",
        _patterns(
            r"^date\s+transaction\s+description",
            r"^date\s+description",
            r"^\|?\s*date\s*\|\s*(?:transaction\s+)?description",
            r"^debit\s+credit\s+balance",
            r"^---+",
        ),
    ),
    NoiseRule(
        "boilerplate",
        _patterns(
            r"^westpac\s+banking",
            r"^thank\s+you",
            r"^convenience",
            r"^more\s+information",
            r"^understanding",
            r"^complaints",
            r"^interest\s+rates",
            r"^tax\s+file",
            r"^please\s+check",
        ),
    ),
    NoiseRule(
        "address",
        _patterns(
            r"^\d+\s+NSW\s+\d+",
            r"^[A-Z]+\s+ST\s*$",
            r"^[A-Z]+\s+[A-Z]+\s+NSW",
        ),
    ),
)

# Evaluated in order; the first matching rule decides the type.
DEFAULT_TYPE_RULES: tuple[TypeCueRule, ...] = (
    TypeCueRule(
        "expense_specific",
        ("debit card purchase", "eftpos debit", "payment by authority", "withdrawal"),
        TransactionType.EXPENSE,
    ),
    TypeCueRule(
        "income_specific",
        ("osko payment", "deposit", "salary"),
        TransactionType.INCOME,
    ),
    TypeCueRule("expense_generic", ("purchase", "payment"), TransactionType.EXPENSE),
    TypeCueRule("income_generic", ("transfer", "tfr"), TransactionType.INCOME),
)

DEFAULT_DESCRIPTION_PREFIXES: tuple[re.Pattern[str], ...] = _patterns(
    r"^\d{1,2}/\d{1,2}/\d{2,4}\s*",
    r"^deposit\s*-\s*osko\s+payment\s+",
    r"^deposit\s+online\s+",
    r"^(?:debit\s+card\s+purchase|eftpos\s+debit|payment\s+by\s+authority|withdrawal|deposit)\s+",
)

DEFAULT_INVALID_DESCRIPTIONS: tuple[re.Pattern[str], ...] = _patterns(
    r"^statement\s+no",
    r"^page\s+\d+",
    r"^opening\s+balance",
    r"^closing\s+balance",
    r"^balance\s+(?:brought|carried)\s+forward",
    r"^total\s+",
    r"^\d+\s+NSW",
    r"^[A-Z]+\s+ST$",
    r"^[A-Z]+\s+[A-Z]+\s+NSW",
)


@dataclass(frozen=True, slots=True)
class ParserConfig:
    """Immutable tunables and pattern tables for one parser instance."""

    noise_rules: tuple[NoiseRule, ...] = DEFAULT_NOISE_RULES
    type_rules: tuple[TypeCueRule, ...] = DEFAULT_TYPE_RULES
    debit_markers: tuple[str, ...] = ("DEBIT", "DR")
    credit_markers: tuple[str, ...] = ("CREDIT", "CR")
    description_prefixes: tuple[re.Pattern[str], ...] = DEFAULT_DESCRIPTION_PREFIXES
    invalid_descriptions: tuple[re.Pattern[str], ...] = DEFAULT_INVALID_DESCRIPTIONS

    max_continuation_lines: int = 3
    min_amount: Decimal = Decimal("0.01")
    max_amount: Decimal = Decimal("10000000")
    tolerance: Decimal = Decimal("0.10")
    max_age_years: int = 10
    two_digit_year_pivot: int = 50
    min_anchor_year: int = 2000
    max_anchor_year: int = 2099

    def __post_init__(self) -> None:
        if self.max_continuation_lines < 0:
            raise ConfigError("max_continuation_lines must be >= 0")
        if self.min_amount <= 0 or self.max_amount < self.min_amount:
            raise ConfigError("amount bounds must satisfy 0 < min_amount <= max_amount")
        if self.tolerance < 0:
            raise ConfigError("tolerance must be >= 0")
        if self.max_age_years <= 0:
            raise ConfigError("max_age_years must be a positive integer")
        if not 0 <= self.two_digit_year_pivot <= 99:
            raise ConfigError("two_digit_year_pivot must be within 0..99")
        if self.min_anchor_year > self.max_anchor_year:
            raise ConfigError("min_anchor_year must not exceed max_anchor_year")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ParserConfig:
        """Build a config from defaults plus ``STATEMENT_PARSER_*`` overrides."""

        env = os.environ if environ is None else environ
        overrides: dict[str, object] = {}

        for field_name, suffix in (
            ("max_continuation_lines", "MAX_CONTINUATION_LINES"),
            ("max_age_years", "MAX_AGE_YEARS"),
            ("two_digit_year_pivot", "YEAR_PIVOT"),
        ):
            raw = env.get(_ENV_PREFIX + suffix)
            if raw is not None and raw.strip():
                try:
                    overrides[field_name] = int(raw.strip())
                except ValueError as exc:
                    raise ConfigError(
                        f"{_ENV_PREFIX + suffix} must be an integer, got {raw!r}"
                    ) from exc

        for field_name, suffix in (
            ("tolerance", "TOLERANCE"),
            ("min_amount", "MIN_AMOUNT"),
            ("max_amount", "MAX_AMOUNT"),
        ):
            raw = env.get(_ENV_PREFIX + suffix)
            if raw is not None and raw.strip():
                try:
                    value = Decimal(raw.strip())
                except InvalidOperation as exc:
                    raise ConfigError(
                        f"{_ENV_PREFIX + suffix} must be a decimal number, got {raw!r}"
                    ) from exc
                if not value.is_finite():
                    raise ConfigError(f"{_ENV_PREFIX + suffix} must be finite, got {raw!r}")
                overrides[field_name] = value

        base = cls()
        return replace(base, **overrides) if overrides else base


__all__ = [
    "ConfigError",
    "DEFAULT_DESCRIPTION_PREFIXES",
    "DEFAULT_INVALID_DESCRIPTIONS",
    "DEFAULT_NOISE_RULES",
    "DEFAULT_TYPE_RULES",
    "NoiseRule",
    "ParserConfig",
    "TypeCueRule",
]
