"""Public API and orchestration for the ``statement_parser`` package.

:class:`StatementParser` wires the pipeline together:

text -> lines -> {summary, noise filter + segmenter} -> column/type resolver
-> record normalizer -> deduplicator/sorter -> cross-validator

The engine performs no I/O and never raises on malformed statement text.
Records that cannot be interpreted are dropped with a ``WARNING`` naming the
line and the reason; the remaining records are still returned. Deciding
whether an empty result is an error belongs to the embedding layer (see
:mod:`statement_parser.cli`).
"""

from __future__ import annotations

import datetime as dt

from .config import ParserConfig
from .dedupe import dedupe_and_sort
from .errors import RecordRejected
from .logging_setup import get_logger
from .models import ParsedTransaction, ParseResult
from .noise import NoiseFilter
from .normalizer import normalize_record
from .resolver import ColumnResolver
from .segmenter import segment_records
from .summary import extract_summary
from .text import split_lines
from .validation import cross_validate, log_validation_report

_logger = get_logger("statement_parser.api")


class StatementParser:
    """Reusable parser bound to one immutable :class:`ParserConfig`.

    Instances hold no per-call state and can be shared between threads.
    """

    def __init__(self, config: ParserConfig | None = None) -> None:
        self.config = config if config is not None else ParserConfig()
        self._noise = NoiseFilter(self.config)
        self._resolver = ColumnResolver(self.config)

    def parse(self, text: str, *, today: dt.date | None = None) -> ParseResult:
        """Reconstruct transactions from statement ``text``.

        ``today`` bounds the accepted date window; it defaults to the current
        local date and is injectable for deterministic results.
        """

        today = today or dt.date.today()
        lines = split_lines(text)
        summary = extract_summary(lines)

        parsed: list[ParsedTransaction] = []
        for record in segment_records(lines, self._noise, self.config):
            try:
                resolution = self._resolver.resolve(record.body)
                tx = normalize_record(record, resolution, today=today, config=self.config)
            except RecordRejected as exc:
                _logger.warning("Dropping record at line %d: %s", record.line_no, exc)
                continue
            _logger.debug(
                "Line %d -> %s %s via %s", record.line_no, tx.type, tx.amount, resolution.rule
            )
            parsed.append(tx)

        transactions = dedupe_and_sort(parsed)
        validation = cross_validate(transactions, summary, tolerance=self.config.tolerance)
        result = ParseResult(
            transactions=tuple(transactions),
            summary=summary,
            validation=validation,
        )

        if result.is_empty:
            if lines:
                _logger.warning(
                    "No transactions found in %d non-empty lines of statement text", len(lines)
                )
        else:
            first, last = result.date_range  # type: ignore[misc]
            _logger.info(
                "Parsed %d transactions (%s to %s)",
                len(transactions),
                first.isoformat(),
                last.isoformat(),
            )
        log_validation_report(validation, summary, tolerance=self.config.tolerance)
        return result


def parse_statement_text(
    text: str,
    *,
    config: ParserConfig | None = None,
    today: dt.date | None = None,
) -> ParseResult:
    """One-shot convenience wrapper around :meth:`StatementParser.parse`."""

    return StatementParser(config).parse(text, today=today)


__all__ = ["StatementParser", "parse_statement_text"]
