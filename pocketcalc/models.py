"""Data models for the pocketcalc engine.

Key types (Digit, Operator, Action) and EngineState — the typed structures
that flow from keypad parsing → engine → display.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class Operator(str, Enum):
    """Binary operators awaiting a second operand."""

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"


class Action(str, Enum):
    """Control keys."""

    CLEAR = "clear"
    CLEAR_ENTRY = "clear-entry"
    DELETE = "delete"
    TOGGLE_SIGN = "toggle-sign"
    COMPUTE = "compute"


@dataclass(frozen=True)
class Digit:
    """A single decimal digit key, 0-9."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int) or not 0 <= self.value <= 9:
            raise ValueError(f"Digit must be an integer in 0..9, got {self.value!r}")


Key = Union[Digit, Operator, Action]


@dataclass
class EngineState:
    """Mutable state of the calculator engine.

    ``accumulator`` holds the first operand (and the running result),
    ``operand`` the second one while an operator is pending. ``display``
    always mirrors whichever of the two is active.
    """

    accumulator: float = 0.0
    operand: float = 0.0
    pending_op: Optional[Operator] = None
    start_fresh: bool = False
    display: float = 0.0

    @property
    def idle(self) -> bool:
        """True when no operator is pending and digits edit the accumulator."""
        return self.pending_op is None
