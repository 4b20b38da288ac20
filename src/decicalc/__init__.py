"""
Four-function calculator engine backed by exact decimal arithmetic.

This package provides:
- BigDecimal, an immutable arbitrary-precision decimal type
- Context, explicit rounding and formatting configuration
- operate(), mapping the operator glyphs + - × ÷ % onto BigDecimal
- calculate(), a pure function from (state, button) to a partial update
"""

from decicalc.bigdecimal import BigDecimal
from decicalc.context import DEFAULT_CONTEXT, Context
from decicalc.core import (
    CLEAR,
    DECIMAL_POINT,
    EQUALS,
    TOGGLE_SIGN,
    UNCHANGED,
    Calculator,
    CalculatorState,
    StateUpdate,
    calculate,
    is_number,
)
from decicalc.exceptions import (
    CalculatorError,
    DivisionByZeroError,
    InvalidDecimalPlacesError,
    InvalidExponentError,
    InvalidNumberError,
    InvalidPrecisionError,
    InvalidRoundingModeError,
    NoSquareRootError,
    OutOfRangeError,
    UnknownOperationError,
)
from decicalc.operations import (
    ADD,
    DIVIDE,
    MODULO,
    MULTIPLY,
    OPERATORS,
    SUBTRACT,
    add,
    divide,
    modulo,
    multiply,
    operate,
    power,
    square_root,
    subtract,
)
from decicalc.validators import (
    MAX_DP,
    MAX_POWER,
    RoundingMode,
    validate_decimal_places,
    validate_exponent,
    validate_precision,
    validate_range,
    validate_rounding_mode,
)

__all__ = [
    "ADD",
    "CLEAR",
    "DECIMAL_POINT",
    "DEFAULT_CONTEXT",
    "DIVIDE",
    "EQUALS",
    "MAX_DP",
    "MAX_POWER",
    "MODULO",
    "MULTIPLY",
    "OPERATORS",
    "SUBTRACT",
    "TOGGLE_SIGN",
    "UNCHANGED",
    "BigDecimal",
    "Calculator",
    "CalculatorError",
    "CalculatorState",
    "Context",
    "DivisionByZeroError",
    "InvalidDecimalPlacesError",
    "InvalidExponentError",
    "InvalidNumberError",
    "InvalidPrecisionError",
    "InvalidRoundingModeError",
    "NoSquareRootError",
    "OutOfRangeError",
    "RoundingMode",
    "StateUpdate",
    "UnknownOperationError",
    "add",
    "calculate",
    "divide",
    "is_number",
    "modulo",
    "multiply",
    "operate",
    "power",
    "square_root",
    "subtract",
    "validate_decimal_places",
    "validate_exponent",
    "validate_precision",
    "validate_range",
    "validate_rounding_mode",
]

__version__ = "0.1.0"
