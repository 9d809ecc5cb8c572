"""Pocketcalc display — formats the engine's float and renders Rich output.

The engine only produces floats; turning them into text (and deciding
whether infinity reads "Infinity" or "Error") happens here.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pocketcalc.keypad import ALIASES, KEYPAD
from pocketcalc.models import Digit, Key

# Below this magnitude integral floats are printed without an exponent.
_PLAIN_INT_LIMIT = 1e16


def format_display(value: float, error_text: Optional[str] = None) -> str:
    """Format a display value as calculator text.

    Integral values drop the ``.0``; everything else uses Python's shortest
    round-trip repr. Non-finite values become ``Infinity``, ``-Infinity`` or
    ``NaN``, or ``error_text`` when one is given.
    """
    if not math.isfinite(value):
        if error_text is not None:
            return error_text
        if math.isnan(value):
            return "NaN"
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        # -0.0 reads as plain zero
        return "0"
    if value.is_integer() and abs(value) < _PLAIN_INT_LIMIT:
        return str(int(value))
    return repr(value)


def key_label(key: Key) -> str:
    """Keypad label for a key (``Digit(7)`` → ``7``, ``Action.DELETE`` → ``DEL``)."""
    if isinstance(key, Digit):
        return str(key.value)
    for row in KEYPAD:
        for label, k in row:
            if k == key:
                return label
    return str(key)


@dataclass
class TraceRow:
    """One key press and the display it produced."""

    key: Key
    display: float
    pending: str = ""


def render_display(value: float, console: Console, error_text: Optional[str] = None) -> None:
    """Draw the display value right-aligned in a panel."""
    text = format_display(value, error_text)
    style = "bold red" if not math.isfinite(value) else "bold white"
    console.print(Panel(Text(text, style=style, justify="right"), width=32))


def render_keypad(console: Console) -> None:
    """Draw the keypad grid and the accepted aliases."""
    grid = Table(show_header=False, show_lines=True, title="Keypad")
    for _ in KEYPAD[0]:
        grid.add_column(justify="center", min_width=5)
    for row in KEYPAD:
        grid.add_row(*(label for label, _ in row))

    aliases = Table(title="Aliases", show_header=True, header_style="bold")
    aliases.add_column("Type", style="green")
    aliases.add_column("Key", justify="center")
    for alias, key in ALIASES.items():
        aliases.add_row(alias, key_label(key))

    console.print()
    console.print(grid)
    console.print(aliases)
    console.print()


def render_trace(rows: list[TraceRow], console: Console, error_text: Optional[str] = None) -> None:
    """Render a key-by-key table of what the display showed."""
    if not rows:
        console.print("[yellow]No keys pressed.[/yellow]")
        return

    table = Table(title="Key trace", show_header=True, header_style="bold")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Key", style="green", justify="center")
    table.add_column("Display", justify="right", min_width=12)
    table.add_column("Pending", style="cyan", justify="center")

    for i, row in enumerate(rows, start=1):
        shown = format_display(row.display, error_text)
        if not math.isfinite(row.display):
            shown = f"[red]{shown}[/red]"
        table.add_row(str(i), key_label(row.key), shown, row.pending or "[dim]--[/dim]")

    console.print()
    console.print(table)
    console.print()
