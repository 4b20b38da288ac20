"""Calculator engine: button presses applied to a running calculator state."""

from __future__ import annotations

import dataclasses
import enum
import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from decicalc.operations import operate, to_decimal

if TYPE_CHECKING:
    from collections.abc import Iterable

    from decicalc.context import Context

logger = logging.getLogger(__name__)

# Non-operator buttons
CLEAR = "AC"
DECIMAL_POINT = "."
TOGGLE_SIGN = "+/-"
EQUALS = "="

_DIGITS = re.compile(r"[0-9]+")


class _Unchanged(enum.Enum):
    UNCHANGED = "UNCHANGED"

    def __repr__(self) -> str:
        return "UNCHANGED"


UNCHANGED = _Unchanged.UNCHANGED

Field = Union[str, None, _Unchanged]

_FIELDS = ("total", "next", "operation")


def is_number(button_name: str) -> bool:
    """True for digit buttons."""
    return _DIGITS.fullmatch(button_name) is not None


@dataclass(frozen=True)
class StateUpdate:
    """
    Partial state produced by one button press.

    Fields left as UNCHANGED keep their current value when merged; a field
    set to None is cleared.
    """

    total: Field = UNCHANGED
    next: Field = UNCHANGED
    operation: Field = UNCHANGED

    def changes(self) -> dict[str, str | None]:
        """Only the fields this update sets."""
        return {
            name: value
            for name in _FIELDS
            if (value := getattr(self, name)) is not UNCHANGED
        }

    def __bool__(self) -> bool:
        return bool(self.changes())


@dataclass(frozen=True)
class CalculatorState:
    """
    Immutable calculator state.

    ``total`` and ``next`` are the numbers as typed (e.g. ``"4."``), not
    parsed values; ``operation`` is the pending operator glyph.
    """

    total: str | None = None
    next: str | None = None
    operation: str | None = None

    @property
    def display(self) -> str:
        """The number a display would show."""
        return self.next or self.total or "0"

    def merge(self, update: StateUpdate) -> CalculatorState:
        """Return a new state with the update's fields applied."""
        return dataclasses.replace(self, **update.changes())

    def __str__(self) -> str:
        return f"total={self.total!r} next={self.next!r} operation={self.operation!r}"


def calculate(
    state: CalculatorState, button_name: str, context: Context | None = None
) -> StateUpdate:
    """
    Work out how a button press changes the calculator state.

    Args:
        state: Current state
        button_name: ``AC``, a digit, ``.``, ``+/-``, ``=`` or an operator glyph
        context: Rounding configuration for evaluated operations

    Returns:
        The fields to change; an empty update means nothing changes

    Raises:
        CalculatorError: Any failure of the evaluated operation, unchanged
    """
    update = _transition(state, button_name, context)
    logger.debug("%r on [%s] -> %s", button_name, state, update.changes())
    return update


def _transition(state: CalculatorState, button_name: str, context: Context | None) -> StateUpdate:
    if button_name == CLEAR:
        return StateUpdate(total=None, next=None, operation=None)

    if is_number(button_name):
        if button_name == "0" and state.next == "0":
            return StateUpdate()
        digits = state.next + button_name if state.next else button_name
        # Typing after a finished calculation starts a new number.
        if state.operation:
            return StateUpdate(next=digits)
        return StateUpdate(next=digits, total=None)

    if button_name == DECIMAL_POINT:
        if state.next:
            if DECIMAL_POINT in state.next:
                return StateUpdate()
            return StateUpdate(next=state.next + DECIMAL_POINT)
        if state.operation:
            return StateUpdate(next="0.")
        if state.total:
            if DECIMAL_POINT in state.total:
                return StateUpdate()
            return StateUpdate(total=state.total + DECIMAL_POINT)
        return StateUpdate(total="0.")

    if button_name == EQUALS:
        if state.next and state.operation:
            return StateUpdate(
                total=operate(state.total, state.next, state.operation, context),
                next=None,
                operation=None,
            )
        return StateUpdate()

    if button_name == TOGGLE_SIGN:
        if state.next:
            return StateUpdate(next=to_decimal(state.next).negated().to_string())
        if state.total:
            return StateUpdate(total=to_decimal(state.total).negated().to_string())
        return StateUpdate()

    # Anything else is an operator.

    if state.operation:
        return StateUpdate(
            total=operate(state.total, state.next, state.operation, context),
            next=None,
            operation=button_name,
        )

    if not state.next:
        return StateUpdate(operation=button_name)

    return StateUpdate(total=state.next, next=None, operation=button_name)


class Calculator:
    """
    Owns a CalculatorState and applies button presses to it.

    Example:
        >>> calc = Calculator()
        >>> calc.press_all(["9", "+", "1", "+", "2", "="]).display
        '12'
    """

    def __init__(self, state: CalculatorState | None = None, context: Context | None = None) -> None:
        self._state = state or CalculatorState()
        self._context = context

    @property
    def state(self) -> CalculatorState:
        """Current state."""
        return self._state

    @property
    def display(self) -> str:
        """The number shown for the current state."""
        return self._state.display

    def press(self, button_name: str) -> CalculatorState:
        """
        Press one button and return the new state.

        If the press fails the state is left as it was.
        """
        self._state = self._state.merge(calculate(self._state, button_name, self._context))
        return self._state

    def press_all(self, button_names: Iterable[str]) -> CalculatorState:
        """Press buttons in order and return the final state."""
        for name in button_names:
            self.press(name)
        return self._state

    def clear(self) -> CalculatorState:
        """Press AC and return the emptied state."""
        return self.press(CLEAR)

    def __repr__(self) -> str:
        return f"Calculator({self._state})"
