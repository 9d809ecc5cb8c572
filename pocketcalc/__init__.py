"""pocketcalc — a four-function pocket calculator engine.

Feed it key presses, read back the display. Operators chain left-to-right
with no precedence, exactly like the cheap calculator in a desk drawer.

Usage:
    python -m pocketcalc press 5 + 3 + 2 =      # 10
    python -m pocketcalc repl                   # Interactive keypad
    python -m pocketcalc keys                   # Keypad and aliases
"""

from pocketcalc.engine import CalculatorEngine, compute
from pocketcalc.keypad import UnknownKeyError, parse_key, parse_keys
from pocketcalc.models import Action, Digit, EngineState, Key, Operator

__all__ = [
    "Action",
    "CalculatorEngine",
    "Digit",
    "EngineState",
    "Key",
    "Operator",
    "UnknownKeyError",
    "compute",
    "parse_key",
    "parse_keys",
]
