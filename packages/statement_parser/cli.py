"""CLI for the ``statement_parser`` package.

This module is the embedding layer around :class:`~statement_parser.api.StatementParser`.
It exposes a callable command handler (``cmd_parse``) and a Typer-based console
interface. Environment variables (``STATEMENT_PARSER_*``) are loaded from a local
``.env`` using ``python-dotenv`` before any command runs. Policy that the engine
leaves to its caller lives here: an empty result is an error, and with
``--strict`` so is a failed cross-validation.
"""

from __future__ import annotations

import datetime as dt
import json
from enum import StrEnum
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from .amounts import fmt_amount
from .api import StatementParser
from .config import ParserConfig
from .ctv import to_ctv
from .errors import ConfigError
from .logging_setup import configure_logging
from .models import ParseResult, TransactionType
from .validation import mismatch_warnings

console = Console()
err_console = Console(stderr=True)


class OutputFormat(StrEnum):
    TABLE = "table"
    JSON = "json"
    CTV = "ctv"


def _parse_today(value: str | None) -> dt.date | None:
    if value is None:
        return None
    try:
        return dt.date.fromisoformat(value)
    except ValueError as exc:
        raise typer.BadParameter(f"expected YYYY-MM-DD, got {value!r}") from exc


def _render_table(result: ParseResult) -> None:
    table = Table(title="Transactions")
    table.add_column("Date")
    table.add_column("Description")
    table.add_column("Type")
    table.add_column("Amount", justify="right")
    for tx in result.transactions:
        style = "green" if tx.type is TransactionType.INCOME else "red"
        table.add_row(
            tx.date.isoformat(),
            tx.description,
            f"[{style}]{tx.type.value}[/{style}]",
            fmt_amount(tx.amount),
        )
    console.print(table)

    v = result.validation
    console.print(
        f"{len(result.transactions)} transactions; "
        f"credits ${fmt_amount(v.calculated_credits)}, "
        f"debits ${fmt_amount(v.calculated_debits)}"
    )
    status = "[green]PASSED[/green]" if v.is_valid else "[red]FAILED[/red]"
    console.print(f"Validation: {status}")


def cmd_parse(
    text_path: Path,
    *,
    output: OutputFormat = OutputFormat.TABLE,
    today: dt.date | None = None,
    strict: bool = False,
) -> int:
    """Parse a statement text file and print the result. Returns an exit code."""

    try:
        text = text_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        err_console.print(f"[red]Error:[/red] File not found: {text_path}")
        return 1
    except (OSError, UnicodeDecodeError) as e:
        err_console.print(f"[red]Error:[/red] Failed to read '{text_path}': {e}")
        return 1

    try:
        config = ParserConfig.from_env()
    except ConfigError as e:
        err_console.print(f"[red]Error:[/red] Invalid configuration: {e}")
        return 1

    tolerance = config.tolerance
    result = StatementParser(config).parse(text, today=today)

    if result.is_empty:
        err_console.print(
            f"[red]Error:[/red] No transactions found in {text_path}. "
            "Make sure the file is a supported bank statement."
        )
        return 1

    warnings = mismatch_warnings(result.validation, tolerance=tolerance)
    if not result.validation.is_valid:
        err_console.print(
            "[yellow]Warning:[/yellow] transactions may not match the statement totals"
        )
        for msg in warnings:
            err_console.print(f"[yellow]Warning:[/yellow] {msg}")

    if output is OutputFormat.JSON:
        typer.echo(result.model_dump_json(by_alias=True, indent=2))
    elif output is OutputFormat.CTV:
        typer.echo(json.dumps([row.as_dict() for row in to_ctv(result.transactions)], indent=2))
    else:
        _render_table(result)

    if strict and not result.validation.is_valid:
        err_console.print("[red]Error:[/red] Validation failed (--strict)")
        return 1
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    name="statement-parser",
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Reconstruct transactions from bank statement text and cross-check them "
        "against the statement's declared totals. Loads STATEMENT_PARSER_* "
        "settings from a local .env before running."
    ),
)


@app.command("parse")
def parse_cmd(
    text_path: Annotated[
        Path,
        typer.Argument(help="UTF-8 text extracted from a bank statement", dir_okay=False),
    ],
    output: Annotated[
        OutputFormat, typer.Option("--format", "-f", help="Output format")
    ] = OutputFormat.TABLE,
    today: Annotated[
        str | None,
        typer.Option(help="Reference date (YYYY-MM-DD) for the accepted date window"),
    ] = None,
    strict: Annotated[
        bool, typer.Option("--strict", help="Exit non-zero when validation fails")
    ] = False,
) -> None:
    """Parse a statement text file."""

    code = cmd_parse(text_path, output=output, today=_parse_today(today), strict=strict)
    if code:
        raise typer.Exit(code)


@app.callback()
def _root() -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables) and configures package logging.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging()


if __name__ == "__main__":  # pragma: no cover
    app()
