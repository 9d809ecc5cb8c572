"""CLI tests — press, repl and keys commands through typer's CliRunner."""

import logging

import pytest
from typer.testing import CliRunner

from pocketcalc.__main__ import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("POCKETCALC_LOG_LEVEL", "POCKETCALC_LOG_FILE", "POCKETCALC_ERROR_TEXT"):
        monkeypatch.delenv(var, raising=False)
    yield
    logger = logging.getLogger("pocketcalc")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


def last_line(output: str) -> str:
    return output.strip().splitlines()[-1]


# --- press ---

def test_press_prints_display():
    result = runner.invoke(app, ["press", "12", "+", "7", "="])
    assert result.exit_code == 0
    assert last_line(result.output) == "19"


def test_press_chained():
    result = runner.invoke(app, ["press", "5", "+", "3", "+", "2", "="])
    assert last_line(result.output) == "10"


def test_press_divide_by_zero():
    result = runner.invoke(app, ["press", "7", "/", "0", "="])
    assert result.exit_code == 0
    assert last_line(result.output) == "Infinity"


def test_press_error_text_option():
    result = runner.invoke(app, ["press", "--error-text", "Error", "--", "7", "/", "0", "="])
    assert last_line(result.output) == "Error"


def test_press_error_text_from_env(monkeypatch):
    monkeypatch.setenv("POCKETCALC_ERROR_TEXT", "E")
    result = runner.invoke(app, ["press", "0", "/", "0", "="])
    assert last_line(result.output) == "E"


def test_press_negative_entry_and_backspace():
    result = runner.invoke(app, ["press", "neg", "12", "del"])
    assert last_line(result.output) == "-1"


def test_press_trace():
    result = runner.invoke(app, ["press", "-t", "--", "9", "x", "3", "="])
    assert result.exit_code == 0
    assert "Key trace" in result.output
    assert last_line(result.output) == "27"


def test_press_unknown_key_exits_1():
    result = runner.invoke(app, ["press", "2", "^", "3"])
    assert result.exit_code == 1
    assert "Unknown key" in result.output


# --- repl ---

def panel_values(output: str) -> list:
    """Values shown inside display panels, in order."""
    values = []
    for line in output.splitlines():
        line = line.strip()
        if line[:1] in ("│", "|") and line[-1:] in ("│", "|"):
            values.append(line.strip("│|").strip())
    return values


def test_repl_shows_results():
    result = runner.invoke(app, ["repl"], input="5 + 3 =\nq\n")
    assert result.exit_code == 0
    assert panel_values(result.output) == ["0", "8"]


def test_repl_keeps_state_across_lines():
    result = runner.invoke(app, ["repl"], input="6 x\n7\n=\n")
    assert result.exit_code == 0
    assert panel_values(result.output) == ["0", "6", "7", "42"]


def test_repl_redraws_only_on_change():
    result = runner.invoke(app, ["repl"], input="5\n=\n+\nq\n")
    assert panel_values(result.output) == ["0", "5"]


def test_repl_ignores_bad_line():
    result = runner.invoke(app, ["repl"], input="4 +\n9 sqrt\n5 =\nquit\n")
    assert result.exit_code == 0
    assert "line ignored" in result.output
    # the bad line never reached the engine: 4 + 5
    assert panel_values(result.output) == ["0", "4", "9"]


def test_repl_error_text():
    result = runner.invoke(app, ["repl", "--error-text", "Error"], input="1 / 0 =\n")
    assert panel_values(result.output)[-1] == "Error"


def test_repl_lists_keys():
    result = runner.invoke(app, ["repl"], input="keys\nq\n")
    assert result.exit_code == 0
    assert "Keypad" in result.output


# --- keys ---

def test_keys_command():
    result = runner.invoke(app, ["keys"])
    assert result.exit_code == 0
    assert "Keypad" in result.output
    assert "backspace" in result.output


# --- logging options ---

def test_log_file_option(tmp_path):
    log_file = tmp_path / "calc.log"
    result = runner.invoke(app, ["--log-level", "debug", "--log-file", str(log_file), "press", "1", "+", "1", "="])
    assert result.exit_code == 0
    text = log_file.read_text(encoding="utf-8")
    assert "pocketcalc.engine - DEBUG" in text
