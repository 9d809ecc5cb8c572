"""CLI for the pocketcalc calculator.

Usage:
    python -m pocketcalc press 12 + 7 =          # Print the final display
    python -m pocketcalc press 5 + 3 + 2 = -t    # With a key-by-key trace
    python -m pocketcalc repl                    # Interactive keypad session
    python -m pocketcalc keys                    # Show keypad and aliases
"""

from __future__ import annotations

from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from pocketcalc.config import Settings, load_settings, parse_level
from pocketcalc.display import TraceRow, format_display, key_label, render_display, render_keypad, render_trace
from pocketcalc.engine import CalculatorEngine
from pocketcalc.keypad import UnknownKeyError, parse_keys
from pocketcalc.logging_config import setup_logging

app = typer.Typer(
    name="pocketcalc",
    help="Four-function pocket calculator driven by key presses",
    no_args_is_help=True,
)
console = Console(stderr=True)
out = Console()

_QUIT_WORDS = {"q", "quit", "exit"}


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj if isinstance(ctx.obj, Settings) else load_settings()


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(None, "--log-level", "-l", help="Logging level (debug, info, warning...)"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Also write logs to this file"),
) -> None:
    """Four-function pocket calculator driven by key presses."""
    settings = load_settings()
    if log_level:
        settings.log_level = parse_level(log_level)
    if log_file:
        settings.log_file = log_file
    setup_logging(level=settings.log_level, log_file=settings.log_file)
    ctx.obj = settings


@app.command("press")
def cmd_press(
    ctx: typer.Context,
    keys: List[str] = typer.Argument(help="Keys to press, e.g. 12 + 7 ="),
    trace: bool = typer.Option(False, "--trace", "-t", help="Show the display after every key"),
    error_text: Optional[str] = typer.Option(None, "--error-text", help="Show this instead of Infinity/NaN"),
) -> None:
    """Press a sequence of keys on a fresh calculator and print the display."""
    error_text = error_text or _settings(ctx).error_text
    try:
        sequence = parse_keys(" ".join(keys))
    except UnknownKeyError as e:
        console.print(f"[red]{escape(str(e))}[/red]. Run 'pocketcalc keys' for the keypad.")
        raise typer.Exit(1)

    engine = CalculatorEngine()
    rows: list[TraceRow] = []
    for key in sequence:
        value = engine.handle(key)
        pending = engine.state.pending_op
        rows.append(TraceRow(key=key, display=value, pending=key_label(pending) if pending else ""))

    if trace:
        render_trace(rows, console, error_text)
    typer.echo(format_display(engine.display, error_text))


@app.command("repl")
def cmd_repl(
    ctx: typer.Context,
    error_text: Optional[str] = typer.Option(None, "--error-text", help="Show this instead of Infinity/NaN"),
) -> None:
    """Interactive session: type keys, see the display. 'q' quits."""
    error_text = error_text or _settings(ctx).error_text
    engine = CalculatorEngine()
    changed = []
    engine.subscribe(changed.append)

    console.print("[dim]Type keys separated by spaces ('keys' lists them, 'q' quits).[/dim]")
    render_display(engine.display, out, error_text)

    while True:
        try:
            line = console.input("[bold]calc>[/bold] ")
        except EOFError:
            break
        words = line.strip().lower()
        if words in _QUIT_WORDS:
            break
        if words == "keys":
            render_keypad(console)
            continue
        try:
            sequence = parse_keys(line)
        except UnknownKeyError as e:
            console.print(f"[red]{escape(str(e))}[/red] (line ignored)")
            continue

        changed.clear()
        for key in sequence:
            engine.handle(key)
        if changed:
            render_display(engine.display, out, error_text)


@app.command("keys")
def cmd_keys() -> None:
    """Show the keypad and the accepted key aliases."""
    render_keypad(console)


if __name__ == "__main__":
    app()
