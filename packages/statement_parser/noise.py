"""Boilerplate classification for statement lines.

:class:`NoiseFilter` evaluates an ordered list of named rules and reports the
first one that matches, which keeps each rule independently testable. Lines
flagged here never start or extend a transaction record, although declared
balance lines are still read by :mod:`statement_parser.summary`.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import TypeAlias

from .config import ParserConfig

LinePredicate: TypeAlias = Callable[[str], bool]

_MIN_LINE_LENGTH = 3
_NUMERIC_ONLY_MAX_LENGTH = 20

# Run of capitals/spaces ending in a number, e.g. "SYDNEY NSW 2000".
_ADDRESS_SHAPE_RE = re.compile(r"^[A-Z\s]{2,30}\s+\d+$")
_DATE_FRAGMENT_RE = re.compile(r"\d{1,2}[/-]\d{1,2}")
_NUMERIC_ONLY_RE = re.compile(r"^[\d\s.,$+-]+$")


def _too_short(line: str) -> bool:
    return len(line.strip()) < _MIN_LINE_LENGTH


def _address_shape(line: str) -> bool:
    return bool(_ADDRESS_SHAPE_RE.match(line)) and not _DATE_FRAGMENT_RE.search(line)


def _numeric_only(line: str) -> bool:
    return len(line) < _NUMERIC_ONLY_MAX_LENGTH and bool(_NUMERIC_ONLY_RE.match(line))


class NoiseFilter:
    """Ordered ``(name, predicate)`` rules deciding whether a line is noise."""

    def __init__(self, config: ParserConfig) -> None:
        rules: list[tuple[str, LinePredicate]] = [("too_short", _too_short)]
        rules.extend((rule.name, rule.matches) for rule in config.noise_rules)
        rules.append(("address_shape", _address_shape))
        rules.append(("numeric_only", _numeric_only))
        self._rules: tuple[tuple[str, LinePredicate], ...] = tuple(rules)

    @property
    def rule_names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self._rules)

    def classify(self, line: str) -> str | None:
        """Return the name of the first rule matching ``line``, or ``None``."""

        for name, predicate in self._rules:
            if predicate(line):
                return name
        return None

    def is_noise(self, line: str) -> bool:
        return self.classify(line) is not None


__all__ = ["NoiseFilter"]
