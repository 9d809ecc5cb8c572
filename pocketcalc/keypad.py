"""Keypad layout and text-to-key parsing.

The keypad is the classic 5x4 grid:

    CE  C  DEL  /
    7   8  9    x
    4   5  6    -
    1   2  3    +
    ±   0       =

Besides the printed labels, ``parse_key`` accepts a handful of keyboard
aliases (``*``, ``enter``, ``backspace``, ``neg`` ...). Matching is
case-insensitive.
"""

from __future__ import annotations

import re
from typing import Optional

from pocketcalc.models import Action, Digit, Key, Operator


class UnknownKeyError(ValueError):
    """Raised when a token does not name any calculator key."""

    def __init__(self, token: str) -> None:
        super().__init__(f"Unknown key: {token!r}")
        self.token = token


KEYPAD: list[list[tuple[str, Optional[Key]]]] = [
    [("CE", Action.CLEAR_ENTRY), ("C", Action.CLEAR), ("DEL", Action.DELETE), ("/", Operator.DIVIDE)],
    [("7", Digit(7)), ("8", Digit(8)), ("9", Digit(9)), ("x", Operator.MULTIPLY)],
    [("4", Digit(4)), ("5", Digit(5)), ("6", Digit(6)), ("-", Operator.SUBTRACT)],
    [("1", Digit(1)), ("2", Digit(2)), ("3", Digit(3)), ("+", Operator.ADD)],
    [("±", Action.TOGGLE_SIGN), ("0", Digit(0)), ("", None), ("=", Action.COMPUTE)],
]

# Extra spellings on top of the keypad labels
ALIASES: dict[str, Key] = {
    "*": Operator.MULTIPLY,
    "×": Operator.MULTIPLY,
    "÷": Operator.DIVIDE,
    "enter": Action.COMPUTE,
    "esc": Action.CLEAR,
    "backspace": Action.DELETE,
    "bs": Action.DELETE,
    "+/-": Action.TOGGLE_SIGN,
    "neg": Action.TOGGLE_SIGN,
    "n": Action.TOGGLE_SIGN,
}


def _build_lookup() -> dict[str, Key]:
    table: dict[str, Key] = {}
    for row in KEYPAD:
        for label, key in row:
            if key is not None:
                table[label.lower()] = key
    table.update(ALIASES)
    return table


_LOOKUP = _build_lookup()
_DIGIT_RUN_RE = re.compile(r"^[0-9]{2,}$")


def parse_key(token: str) -> Key:
    """Map a keypad label or alias to its Key.

    Raises:
        UnknownKeyError: if the token names no key.
    """
    key = _LOOKUP.get(token.strip().lower())
    if key is None:
        raise UnknownKeyError(token)
    return key


def parse_keys(text: str) -> list[Key]:
    """Parse a whitespace-separated key sequence.

    Runs of digits are split into single digits, so ``"12 + 7 ="`` is
    ``1 2 + 7 =``. The whole sequence is validated before anything is
    returned.
    """
    keys: list[Key] = []
    for token in text.split():
        if _DIGIT_RUN_RE.match(token):
            keys.extend(Digit(int(ch)) for ch in token)
        else:
            keys.append(parse_key(token))
    return keys
