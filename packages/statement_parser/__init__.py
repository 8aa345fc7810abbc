"""Bank statement text parsing with arithmetic cross-validation."""

from .api import StatementParser, parse_statement_text
from .config import ParserConfig
from .ctv import CanonicalTransaction, to_ctv
from .errors import ConfigError, StatementParserError
from .logging_setup import configure_logging, get_logger
from .models import (
    ParsedTransaction,
    ParseResult,
    StatementSummary,
    TransactionType,
    ValidationDifferences,
    ValidationResult,
)

__all__ = [
    "CanonicalTransaction",
    "ConfigError",
    "ParseResult",
    "ParsedTransaction",
    "ParserConfig",
    "StatementParser",
    "StatementParserError",
    "StatementSummary",
    "TransactionType",
    "ValidationDifferences",
    "ValidationResult",
    "configure_logging",
    "get_logger",
    "parse_statement_text",
    "to_ctv",
]
