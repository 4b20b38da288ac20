"""
Property-based tests for the calculator engine.

Tests the button-press reducer and the stateful Calculator using Hypothesis
stateful testing, which generates sequences of button presses and verifies
invariants after each one.
"""

from fractions import Fraction

import pytest
from hypothesis import given
from hypothesis import strategies as st
from hypothesis.stateful import RuleBasedStateMachine, invariant, rule

from decicalc import (
    OPERATORS,
    BigDecimal,
    Calculator,
    CalculatorError,
    CalculatorState,
    StateUpdate,
    calculate,
)

# Typed numbers as a user would enter them, without a leading zero
typed_numbers = st.from_regex(r"[1-9][0-9]{0,14}", fullmatch=True)

digits = st.sampled_from("0123456789")
operators = st.sampled_from(sorted(OPERATORS))
buttons = st.one_of(digits, operators, st.sampled_from([".", "+/-", "=", "AC"]))

fields = st.one_of(st.none(), typed_numbers, st.just("0."), st.just("-12.5"))
states = st.builds(
    CalculatorState,
    total=fields,
    next=fields,
    operation=st.one_of(st.none(), operators),
)

EXACT = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "×": lambda a, b: a * b,
}


def press(*button_names: str) -> CalculatorState:
    return Calculator().press_all(button_names)


@pytest.mark.property
class TestCalculatorProperties:
    """Property-based tests for the button-press reducer."""

    @given(number=typed_numbers)
    def test_typing_digits_builds_next(self, number: str):
        """Digits pressed on a fresh calculator appear verbatim."""
        state = press(*number)
        assert state == CalculatorState(next=number)
        assert state.display == number

    @given(a=typed_numbers, b=typed_numbers, operation=st.sampled_from(sorted(EXACT)))
    def test_exact_operations(self, a: str, b: str, operation: str):
        """a op b = gives the exact result for + - ×."""
        state = press(*a, operation, *b, "=")
        assert state.next is None
        assert state.operation is None
        expected = EXACT[operation](int(a), int(b))
        assert BigDecimal(state.total).as_fraction() == expected

    @given(a=typed_numbers, b=typed_numbers)
    def test_division_is_rounded(self, a: str, b: str):
        """a ÷ b = lands within half a unit in the 20th place."""
        total = press(*a, "÷", *b, "=").total
        error = BigDecimal(total).as_fraction() - Fraction(int(a), int(b))
        assert abs(error) <= Fraction(1, 2 * 10**20)

    @given(a=typed_numbers)
    def test_division_by_zero_raises(self, a: str):
        """a ÷ 0 = always fails."""
        with pytest.raises(CalculatorError):
            press(*a, "÷", "0", "=")

    @given(a=typed_numbers)
    def test_double_toggle_restores(self, a: str):
        """+/- twice restores the number."""
        assert press(*a, "+/-", "+/-").next == a

    @given(a=typed_numbers, b=typed_numbers, c=typed_numbers)
    def test_operator_chains_left_to_right(self, a: str, b: str, c: str):
        """a + b - c = evaluates (a + b) - c."""
        state = press(*a, "+", *b, "-", *c, "=")
        assert BigDecimal(state.total) == int(a) + int(b) - int(c)

    @given(state=states, button=buttons)
    def test_calculate_is_deterministic(self, state: CalculatorState, button: str):
        """The same press on the same state yields the same update."""
        try:
            first = calculate(state, button)
        except CalculatorError as exc:
            with pytest.raises(type(exc)):
                calculate(state, button)
        else:
            assert calculate(state, button) == first

    @given(state=states)
    def test_clear_always_resets(self, state: CalculatorState):
        """AC returns to the empty state from anywhere."""
        assert state.merge(calculate(state, "AC")) == CalculatorState()

    @given(state=states)
    def test_empty_update_is_identity(self, state: CalculatorState):
        """Merging an empty update leaves the state as it was."""
        assert state.merge(StateUpdate()) == state


@pytest.mark.property
@pytest.mark.slow
class CalculatorStateMachine(RuleBasedStateMachine):
    """
    Stateful testing for Calculator using Hypothesis state machines.

    This generates random sequences of button presses and verifies
    that invariants hold after each one.
    """

    def __init__(self) -> None:
        super().__init__()
        self.calc = Calculator()

    def _press(self, button: str) -> None:
        before = self.calc.state
        try:
            self.calc.press(button)
        except CalculatorError:
            assert self.calc.state == before

    @invariant()
    def display_is_a_number(self) -> None:
        """The display always parses as a decimal."""
        BigDecimal(self.calc.display)

    @invariant()
    def at_most_one_point(self) -> None:
        """Neither operand ever holds two decimal points."""
        state = self.calc.state
        for value in (state.total, state.next):
            if value is not None:
                assert value.count(".") <= 1

    @invariant()
    def operation_is_known(self) -> None:
        """The pending operation is one of the panel's glyphs."""
        assert self.calc.state.operation in (None, *OPERATORS)

    @invariant()
    def display_prefers_next(self) -> None:
        state = self.calc.state
        if state.next:
            assert self.calc.display == state.next

    @rule(digit=digits)
    def press_digit(self, digit: str) -> None:
        """Press a digit."""
        self._press(digit)

    @rule(operation=operators)
    def press_operator(self, operation: str) -> None:
        """Press an operator."""
        self._press(operation)

    @rule()
    def press_point(self) -> None:
        """Press the decimal point."""
        self._press(".")

    @rule()
    def toggle_sign(self) -> None:
        """Negate the current number."""
        self._press("+/-")

    @rule()
    def equals(self) -> None:
        """Evaluate the pending operation."""
        self._press("=")
        if self.calc.state.operation is None and self.calc.state.next is None:
            assert self.calc.display == (self.calc.state.total or "0")

    @rule()
    def clear(self) -> None:
        """Clear the calculator."""
        self.calc.clear()
        assert self.calc.state == CalculatorState()


# Run the state machine as a pytest test
TestStateMachine = CalculatorStateMachine.TestCase
