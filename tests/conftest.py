"""Pytest configuration for test isolation.

Parser tunables can be overridden through ``STATEMENT_PARSER_*`` environment
variables, and the CLI configures the package logger (which stops propagation
to the root logger). Either would leak state between tests, so an autouse
fixture clears the variables and restores propagation so ``caplog`` sees
package records.
"""

from __future__ import annotations

import datetime as dt
import logging
import os
import sys
import textwrap
from pathlib import Path

import pytest

# Make sure the workspace `packages/` dir is on sys.path so `statement_parser` is importable
_ROOT = Path(__file__).resolve().parents[1]
_PKG_DIR = _ROOT / "packages"
sys.path[:0] = [p for p in [str(_PKG_DIR)] if p not in sys.path]

# Fixed reference date for the 10-year window.
TODAY = dt.date(2025, 1, 15)

STATEMENT_TEXT = textwrap.dedent(
    """
    Westpac Banking Corporation
    Statement No. 12 Page 1 of 2
    Account Name: J CITIZEN
    BSB 032-000 Account Number 123456
    Opening Balance $1,000.00
    Date Transaction Description Debit Credit Balance
    01/03/24 EFTPOS DEBIT COLES SUPERMARKET 45.67 954.33
    03/03/24 DEPOSIT-OSKO PAYMENT JANE SMITH 250.00 1,204.33
    05/03/24 DEBIT CARD PURCHASE
    BUNNINGS WAREHOUSE
    ALEXANDRIA AU 89.95 1,114.38
    05/03/24 DEBIT CARD PURCHASE
    BUNNINGS WAREHOUSE
    ALEXANDRIA AU 89.95 1,114.38
    07/03/24 PAYMENT BY AUTHORITY TELSTRA 114.38 1,000.00

    Closing Balance $1,000.00
    Total Credits $250.00
    Total Debits $250.00
    Thank you for banking with Westpac
    """
)


@pytest.fixture(autouse=True)
def _isolate_env_and_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("STATEMENT_PARSER_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(logging.getLogger("statement_parser"), "propagate", True)


@pytest.fixture
def today() -> dt.date:
    return TODAY


@pytest.fixture
def statement_text() -> str:
    return STATEMENT_TEXT
