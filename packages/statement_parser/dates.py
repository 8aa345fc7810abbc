"""Calendar helpers for ``DD/MM/YY(YY)`` statement dates."""

from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass

ANCHOR_DATE_RE = re.compile(r"^(?P<day>\d{1,2})/(?P<month>\d{1,2})/(?P<year>\d{2,4})(?!\d)")


@dataclass(frozen=True, slots=True)
class DateParts:
    """Raw day/month/year digits captured at the start of a line."""

    day: int
    month: int
    year: str
    raw: str


def match_date_prefix(line: str) -> DateParts | None:
    """Return the leading ``D{1,2}/D{1,2}/D{2,4}`` date of ``line``, if any."""

    m = ANCHOR_DATE_RE.match(line)
    if m is None:
        return None
    return DateParts(
        day=int(m.group("day")),
        month=int(m.group("month")),
        year=m.group("year"),
        raw=m.group(0),
    )


def expand_year(year: str, *, pivot: int = 50) -> int:
    """Expand a 2-digit year: above ``pivot`` -> 1900s, otherwise 2000s.

    Four-digit years are returned unchanged.
    """

    value = int(year)
    if len(year) == 2:
        return 1900 + value if value > pivot else 2000 + value
    return value


def build_date(year: int, month: int, day: int) -> dt.date | None:
    """Construct a date, or ``None`` when the combination does not exist (31/02)."""

    try:
        candidate = dt.date(year, month, day)
    except ValueError:
        return None
    # Round-trip check against the calendar.
    if (candidate.year, candidate.month, candidate.day) != (year, month, day):
        return None
    return candidate


def years_before(today: dt.date, years: int) -> dt.date:
    """``today`` shifted back by whole calendar years (29 Feb -> 28 Feb)."""

    try:
        return today.replace(year=today.year - years)
    except ValueError:
        return today.replace(year=today.year - years, day=28)


def within_window(value: dt.date, *, today: dt.date, max_age_years: int) -> bool:
    """True when ``value`` is neither in the future nor older than the window."""

    return years_before(today, max_age_years) <= value <= today


__all__ = [
    "ANCHOR_DATE_RE",
    "DateParts",
    "build_date",
    "expand_year",
    "match_date_prefix",
    "within_window",
    "years_before",
]
