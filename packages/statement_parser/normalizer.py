"""Record normalization: resolved record -> :class:`ParsedTransaction`.

Descriptions are cleaned in a fixed order: pipes become spaces, whitespace is
collapsed, each configured prefix pattern is stripped once, a trailing column
marker word (``DEBIT``/``CREDIT``/``DR``/``CR``) is removed, and the result is
truncated. Dates are rebuilt from the anchor digits and must fall within the
configured window ending at ``today``.
"""

from __future__ import annotations

import datetime as dt
import re

from .config import ParserConfig
from .dates import build_date, within_window
from .errors import RecordRejected
from .models import MAX_DESCRIPTION_LENGTH, ParsedTransaction
from .resolver import Resolution
from .segmenter import RawRecord

_WS_RE = re.compile(r"\s+")
_LETTER_RE = re.compile(r"[^\W\d_]")


def _collapse(value: str) -> str:
    return _WS_RE.sub(" ", value).strip()


def _trailing_marker_re(config: ParserConfig) -> re.Pattern[str]:
    words = sorted({*config.debit_markers, *config.credit_markers}, key=len, reverse=True)
    alternation = "|".join(re.escape(w) for w in words)
    return re.compile(rf"(?:\s+|^)(?:{alternation})$", re.IGNORECASE)


def clean_description(raw: str, config: ParserConfig) -> str:
    """Return the display form of ``raw`` (may be empty)."""

    text = _collapse(raw.replace("|", " "))
    for pattern in config.description_prefixes:
        text = pattern.sub("", text, count=1)
    text = _trailing_marker_re(config).sub("", text)
    text = _collapse(text)
    return text[:MAX_DESCRIPTION_LENGTH].strip()


def normalize_record(
    record: RawRecord,
    resolution: Resolution,
    *,
    today: dt.date,
    config: ParserConfig,
) -> ParsedTransaction:
    """Build a transaction or raise ``RecordRejected`` with the reason."""

    parts = record.date_parts
    date = build_date(record.year, parts.month, parts.day)
    if date is None:
        raise RecordRejected(f"invalid calendar date {parts.raw}")
    if not within_window(date, today=today, max_age_years=config.max_age_years):
        raise RecordRejected(
            f"date {date.isoformat()} is outside the {config.max_age_years}-year window"
        )

    description = clean_description(resolution.description, config)
    if not description or not _LETTER_RE.search(description):
        raise RecordRejected("description has no letters")
    if any(p.search(description) for p in config.invalid_descriptions):
        raise RecordRejected(f"description {description!r} is not a transaction")

    return ParsedTransaction(
        date=date,
        description=description,
        amount=resolution.amount,
        type=resolution.type,
    )


__all__ = ["clean_description", "normalize_record"]
