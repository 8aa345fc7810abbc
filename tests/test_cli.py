import json
import os
from pathlib import Path

import pytest
from typer.testing import CliRunner

import statement_parser.cli as cli_mod
from statement_parser.cli import app

runner = CliRunner()

# ---- Helpers -----------------------------------------------------------------


@pytest.fixture(autouse=True)
def _quiet_cli(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty directory and keep package logging unconfigured."""

    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(cli_mod, "configure_logging", lambda *a, **k: None)


def _write(tmp_path: Path, text: str, name: str = "statement.txt") -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def _invoke(*args: str):
    return runner.invoke(app, ["parse", *args, "--today", "2025-01-15"])


# ---- Tests -------------------------------------------------------------------


def test_table_output(tmp_path: Path, statement_text: str):
    result = _invoke(str(_write(tmp_path, statement_text)))
    assert result.exit_code == 0, result.output
    assert "COLES SUPERMARKET" in result.output
    assert "4 transactions" in result.output
    assert "PASSED" in result.output


def test_json_output_uses_camel_case(tmp_path: Path, statement_text: str):
    result = _invoke(str(_write(tmp_path, statement_text)), "--format", "json")
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["transactions"][0] == {
        "date": "2024-03-01",
        "description": "COLES SUPERMARKET",
        "amount": "45.67",
        "type": "expense",
    }
    assert data["summary"]["openingBalance"] == "1000.00"
    assert data["validation"]["isValid"] is True
    assert data["validation"]["calculatedClosingBalance"] == "1000.00"


def test_ctv_output(tmp_path: Path, statement_text: str):
    result = _invoke(str(_write(tmp_path, statement_text)), "-f", "ctv")
    assert result.exit_code == 0, result.output
    rows = json.loads(result.output)
    assert [r["amount"] for r in rows] == ["-45.67", "250.00", "-89.95", "-114.38"]
    assert all(r["id"] is None and r["category"] is None for r in rows)


def test_empty_result_exits_non_zero(tmp_path: Path):
    result = _invoke(str(_write(tmp_path, "Page 1 of 1\nNothing here\n")))
    assert result.exit_code == 1
    assert "No transactions found" in result.output


def test_missing_file_exits_non_zero(tmp_path: Path):
    result = _invoke(str(tmp_path / "missing.txt"))
    assert result.exit_code == 1
    assert "File not found" in result.output


def test_validation_mismatch_warns_and_strict_fails(tmp_path: Path):
    text = "Total Credits $999.00\n03/03/24 DEPOSIT SALARY ACME 250.00 1,250.00\n"
    path = _write(tmp_path, text)

    lenient = _invoke(str(path))
    assert lenient.exit_code == 0, lenient.output
    assert "Credits difference: $749.00" in lenient.output

    strict = _invoke(str(path), "--strict")
    assert strict.exit_code == 1
    assert "Validation failed" in strict.output


def test_invalid_today_is_a_usage_error(tmp_path: Path, statement_text: str):
    path = _write(tmp_path, statement_text)
    result = runner.invoke(app, ["parse", str(path), "--today", "15/01/2025"])
    assert result.exit_code == 2


def test_invalid_env_config_exits_non_zero(
    tmp_path: Path, statement_text: str, monkeypatch: pytest.MonkeyPatch
):
    monkeypatch.setenv("STATEMENT_PARSER_TOLERANCE", "lots")
    result = _invoke(str(_write(tmp_path, statement_text)))
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


def test_dotenv_file_is_loaded(tmp_path: Path):
    (tmp_path / ".env").write_text("STATEMENT_PARSER_TOLERANCE=1000\n", encoding="utf-8")
    text = "Total Credits $999.00\n03/03/24 DEPOSIT SALARY ACME 250.00 1,250.00\n"
    try:
        result = _invoke(str(_write(tmp_path, text)), "--strict")
    finally:
        # load_dotenv writes straight into the process environment
        os.environ.pop("STATEMENT_PARSER_TOLERANCE", None)
    assert result.exit_code == 0, result.output
