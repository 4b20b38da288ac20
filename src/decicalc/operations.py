"""Arithmetic operations over decimal-like operands, and operator-glyph dispatch."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from decicalc.bigdecimal import BigDecimal, DecimalLike
from decicalc.exceptions import InvalidNumberError, UnknownOperationError

if TYPE_CHECKING:
    from collections.abc import Callable

    from decicalc.context import Context

logger = logging.getLogger(__name__)

# Operator glyphs as they appear on the button panel
ADD = "+"
SUBTRACT = "-"
MULTIPLY = "×"
DIVIDE = "÷"
MODULO = "%"


def to_decimal(value: DecimalLike | None) -> BigDecimal:
    """
    Coerce an operand to BigDecimal.

    Raises:
        InvalidNumberError: If value is None or not a valid number
    """
    if value is None:
        raise InvalidNumberError(value)
    if isinstance(value, BigDecimal):
        return value
    return BigDecimal(value)


def add(a: DecimalLike, b: DecimalLike) -> BigDecimal:
    """
    Add two numbers exactly.

    Properties:
        - Commutative: add(a, b) == add(b, a)
        - Associative: add(add(a, b), c) == add(a, add(b, c))
        - Identity: add(a, 0) == a

    Args:
        a: First operand
        b: Second operand

    Returns:
        Sum of a and b

    Raises:
        InvalidNumberError: If inputs are invalid
    """
    return to_decimal(a).plus(to_decimal(b))


def subtract(a: DecimalLike, b: DecimalLike) -> BigDecimal:
    """
    Subtract b from a exactly.

    Properties:
        - Anti-commutative: subtract(a, b) == -subtract(b, a)
        - Identity: subtract(a, 0) == a
        - Self-inverse: subtract(a, a) == 0
    """
    return to_decimal(a).minus(to_decimal(b))


def multiply(a: DecimalLike, b: DecimalLike) -> BigDecimal:
    """
    Multiply two numbers exactly.

    Properties:
        - Commutative: multiply(a, b) == multiply(b, a)
        - Associative: multiply(multiply(a, b), c) == multiply(a, multiply(b, c))
        - Identity: multiply(a, 1) == a
        - Zero: multiply(a, 0) == 0
    """
    return to_decimal(a).times(to_decimal(b))


def divide(a: DecimalLike, b: DecimalLike, context: Context | None = None) -> BigDecimal:
    """
    Divide a by b, rounded to the context's decimal places.

    Properties:
        - Inverse of multiply: divide(multiply(a, b), b) == a (for b != 0)
        - Identity: divide(a, 1) == a
        - Self-division: divide(a, a) == 1 (for a != 0)

    Args:
        a: Dividend
        b: Divisor
        context: Rounding configuration

    Returns:
        Quotient of a and b

    Raises:
        InvalidNumberError: If inputs are invalid
        DivisionByZeroError: If b is zero
    """
    return to_decimal(a).div(to_decimal(b), context=context)


def modulo(a: DecimalLike, b: DecimalLike, context: Context | None = None) -> BigDecimal:
    """
    Calculate a modulo b using truncated division.

    Properties:
        - Sign: modulo(a, b) has the sign of a
        - Range: abs(modulo(a, b)) < abs(b)
        - Reconstruction: a == trunc(a / b) * b + modulo(a, b)

    Raises:
        InvalidNumberError: If inputs are invalid
        DivisionByZeroError: If b is zero
    """
    return to_decimal(a).mod(to_decimal(b), context=context)


def power(base: DecimalLike, exponent: int, context: Context | None = None) -> BigDecimal:
    """
    Raise base to an integer power.

    Properties:
        - Identity: power(a, 1) == a
        - Zero exponent: power(a, 0) == 1
        - One base: power(1, n) == 1

    Raises:
        InvalidExponentError: If exponent is not an integer in range
        DivisionByZeroError: If base is zero and exponent is negative
    """
    return to_decimal(base).pow(exponent, context=context)


def square_root(value: DecimalLike, context: Context | None = None) -> BigDecimal:
    """
    Square root rounded to the context's decimal places.

    Raises:
        NoSquareRootError: If value is negative
    """
    return to_decimal(value).sqrt(context=context)


OPERATORS: dict[str, Callable[..., BigDecimal]] = {
    ADD: add,
    SUBTRACT: subtract,
    MULTIPLY: multiply,
    DIVIDE: divide,
    MODULO: modulo,
}

# Operators whose result depends on rounding configuration
_CONTEXTUAL = frozenset({DIVIDE, MODULO})


def operate(
    number_one: DecimalLike | None,
    number_two: DecimalLike | None,
    operation: str,
    context: Context | None = None,
) -> str:
    """
    Apply an operator glyph to two operands and format the result.

    Args:
        number_one: Left operand, usually a calculator display string
        number_two: Right operand
        operation: One of ``+ - × ÷ %``
        context: Rounding configuration for division and modulo

    Returns:
        The result as a canonical decimal string

    Raises:
        UnknownOperationError: If operation is not a known glyph
        InvalidNumberError: If an operand is missing or malformed
        DivisionByZeroError: If dividing or taking a modulo by zero
    """
    func = OPERATORS.get(operation)
    if func is None:
        raise UnknownOperationError(operation)

    logger.debug("operate %r %s %r", number_one, operation, number_two)

    one = to_decimal(number_one)
    two = to_decimal(number_two)

    if operation in _CONTEXTUAL:
        result = func(one, two, context=context)
    else:
        result = func(one, two)

    return result.to_string(context=context)
