"""Pocketcalc engine — the key-input state machine.

Turns a stream of keys into an accumulator and a displayed number with
pocket-calculator semantics:

- operators chain left-to-right (``5 + 3 +`` commits 8 before the next ``+``)
- after an operator or ``=`` the next digit starts a new number
- digits typed into a negative number extend it in the negative direction
- backspace truncates toward zero (``-12`` → ``-1``)

Division by zero follows IEEE-754 (``±inf``/``nan``), it is never an error.
The engine is not thread-safe; callers serialize ``handle``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Callable

from pocketcalc.models import Action, Digit, EngineState, Key, Operator

logger = logging.getLogger(__name__)

DisplayListener = Callable[[float], None]


def _divide(a: float, b: float) -> float:
    """IEEE-754 division. Python raises on a zero divisor, hardware doesn't."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


_OPERATIONS: dict[Operator, Callable[[float, float], float]] = {
    Operator.ADD: lambda a, b: a + b,
    Operator.SUBTRACT: lambda a, b: a - b,
    Operator.MULTIPLY: lambda a, b: a * b,
    Operator.DIVIDE: _divide,
}


def compute(op: Operator, a: float, b: float) -> float:
    """Apply a binary operator with plain float arithmetic."""
    return _OPERATIONS[op](a, b)


def _append_digit(current: float, digit: int) -> float:
    # Sign bit, not ``< 0``: a toggled zero (-0.0) must stay negative.
    if math.copysign(1.0, current) < 0:
        return current * 10 - digit
    return current * 10 + digit


def _drop_digit(value: float) -> float:
    """Remove the last decimal digit, truncating toward zero."""
    remainder = math.nan if math.isinf(value) else math.fmod(value, 10)
    return (value - remainder) / 10


def _same_display(old: float, new: float) -> bool:
    return old == new or (math.isnan(old) and math.isnan(new))


class CalculatorEngine:
    """Owns the EngineState and mutates it one key at a time."""

    def __init__(self) -> None:
        self._state = EngineState()
        self._listeners: list[DisplayListener] = []

    @property
    def state(self) -> EngineState:
        """A snapshot of the current state. Mutating it has no effect."""
        return replace(self._state)

    @property
    def display(self) -> float:
        return self._state.display

    def subscribe(self, listener: DisplayListener) -> Callable[[], None]:
        """Register a callback fired with the new display whenever it changes.

        Returns a function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -- active slot ------------------------------------------------------

    def _get_active(self) -> float:
        s = self._state
        return s.accumulator if s.pending_op is None else s.operand

    def _set_active(self, value: float) -> None:
        s = self._state
        if s.pending_op is None:
            s.accumulator = value
        else:
            s.operand = value

    # -- dispatch ---------------------------------------------------------

    def handle(self, key: Key) -> float:
        """Process one key and return the new display value.

        Anything that is not a Digit, Operator or Action is ignored: state
        stays as it was and a warning is logged.
        """
        previous = self._state.display

        if isinstance(key, Digit):
            self._on_digit(key.value)
        elif isinstance(key, Operator):
            self._on_operator(key)
        elif isinstance(key, Action):
            self._on_action(key)
        else:
            logger.warning("Ignoring unsupported key: %r", key)
            return previous

        # display always mirrors the active slot
        self._state.display = self._get_active()
        logger.debug("key=%s display=%r state=%s", _key_name(key), self._state.display, self._state)

        if not _same_display(previous, self._state.display):
            for listener in list(self._listeners):
                listener(self._state.display)
        return self._state.display

    def _on_digit(self, digit: int) -> None:
        if self._state.start_fresh:
            self._set_active(0.0)
            self._state.start_fresh = False
        self._set_active(_append_digit(self._get_active(), digit))

    def _on_operator(self, op: Operator) -> None:
        s = self._state
        if s.pending_op is not None:
            s.accumulator = self._evaluate()
            logger.debug("Chained %s committed, accumulator=%r", s.pending_op.value, s.accumulator)
        s.pending_op = op
        s.operand = s.accumulator
        s.start_fresh = True

    def _on_action(self, action: Action) -> None:
        s = self._state
        if action == Action.COMPUTE:
            if s.pending_op is None:
                return
            s.accumulator = self._evaluate()
            s.pending_op = None
            s.start_fresh = True
        elif action == Action.CLEAR_ENTRY:
            self._set_active(0.0)
        elif action == Action.CLEAR:
            s.accumulator = 0.0
            s.pending_op = None
            s.start_fresh = False
        elif action == Action.DELETE:
            if s.start_fresh:
                self._set_active(0.0)
                s.start_fresh = False
                return
            self._set_active(_drop_digit(self._get_active()))
        elif action == Action.TOGGLE_SIGN:
            self._set_active(-self._get_active())

    def _evaluate(self) -> float:
        s = self._state
        result = compute(s.pending_op, s.accumulator, s.operand)
        if not math.isfinite(result):
            logger.info("%r %s %r gave non-finite result %r", s.accumulator, s.pending_op.value, s.operand, result)
        return result


def _key_name(key: Key) -> str:
    if isinstance(key, Digit):
        return str(key.value)
    return key.value
