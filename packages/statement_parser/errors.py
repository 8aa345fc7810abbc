"""Exception types used inside the parsing pipeline.

``RecordRejected`` never escapes :meth:`StatementParser.parse`; it carries the
reason a single record was dropped so the orchestrator can log it and move
on. ``ConfigError`` signals a bad tunable and does propagate to the caller.
"""

from __future__ import annotations


class StatementParserError(Exception):
    """Base class for errors raised by ``statement_parser``."""


class ConfigError(StatementParserError, ValueError):
    """Raised when a configuration value (explicit or from env) is invalid."""


class RecordRejected(StatementParserError):
    """A segmented record cannot become a transaction."""


__all__ = ["ConfigError", "RecordRejected", "StatementParserError"]
