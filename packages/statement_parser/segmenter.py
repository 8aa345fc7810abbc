"""Record segmentation: date-anchored lines plus bounded continuation.

A record starts at a line beginning with ``D{1,2}/D{1,2}/D{2,4}``. The rest of
that line is the provisional body. Up to ``max_continuation_lines`` following
lines are then absorbed:

- a line ending in a monetary token is the amount line; it is absorbed and
  closes the record;
- a line with letters and no monetary token continues the description;
- a noise line, another date-prefixed line, a line with a monetary token in
  the middle, or reaching the cap closes the record without absorbing.

An anchor line that already ends in a monetary token is a complete record.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from .amounts import ends_with_money_token, has_money_token
from .config import ParserConfig
from .dates import DateParts, expand_year, match_date_prefix
from .logging_setup import get_logger
from .noise import NoiseFilter

_logger = get_logger("statement_parser.segmenter")

_LETTER_RE = re.compile(r"[^\W\d_]")


@dataclass(frozen=True, slots=True)
class RawRecord:
    """One accreted record prior to column resolution.

    ``line_no`` is the 1-based position of the anchor within the normalized
    (non-empty) lines; ``consumed`` counts the anchor plus absorbed lines.
    """

    line_no: int
    date_parts: DateParts
    year: int
    body: str
    consumed: int


def join_body(body: str, line: str) -> str:
    """Append ``line`` to ``body``, merging a pipe that closes one and opens the other."""

    head = body.rstrip()
    if head.endswith("|") and line.lstrip().startswith("|"):
        head = head[:-1].rstrip()
    return f"{head} {line}" if head else line


def _anchor_year(parts: DateParts, config: ParserConfig) -> int | None:
    if not 1 <= parts.day <= 31 or not 1 <= parts.month <= 12:
        return None
    year = expand_year(parts.year, pivot=config.two_digit_year_pivot)
    if not config.min_anchor_year <= year <= config.max_anchor_year:
        return None
    return year


def segment_records(
    lines: Sequence[str], noise: NoiseFilter, config: ParserConfig
) -> Iterator[RawRecord]:
    """Yield records from normalized ``lines`` in scan order."""

    cursor = 0
    total = len(lines)
    while cursor < total:
        line = lines[cursor]
        rule = noise.classify(line)
        if rule is not None:
            _logger.debug("Skipping line %d (%s)", cursor + 1, rule)
            cursor += 1
            continue
        parts = match_date_prefix(line)
        if parts is None:
            cursor += 1
            continue
        year = _anchor_year(parts, config)
        if year is None:
            _logger.warning(
                "Skipping line %d: date %s is out of range", cursor + 1, parts.raw
            )
            cursor += 1
            continue

        body = line[len(parts.raw) :].strip()
        consumed = 1
        if not ends_with_money_token(body):
            absorbed = 0
            while absorbed < config.max_continuation_lines and cursor + consumed < total:
                candidate = lines[cursor + consumed]
                if noise.is_noise(candidate) or match_date_prefix(candidate) is not None:
                    break
                if ends_with_money_token(candidate):
                    body = join_body(body, candidate)
                    consumed += 1
                    break
                if _LETTER_RE.search(candidate) and not has_money_token(candidate):
                    body = join_body(body, candidate)
                    consumed += 1
                    absorbed += 1
                    continue
                break

        yield RawRecord(
            line_no=cursor + 1,
            date_parts=parts,
            year=year,
            body=body,
            consumed=consumed,
        )
        cursor += consumed


__all__ = ["RawRecord", "join_body", "segment_records"]
