"""Custom exceptions for the decicalc package."""

from typing import Any


class CalculatorError(Exception):
    """Base exception for all calculator and decimal arithmetic errors."""

    def __init__(self, message: str, value: Any = None) -> None:
        self.message = message
        self.value = value
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.value is not None:
            return f"{self.message}: {self.value!r}"
        return self.message


class InvalidNumberError(CalculatorError):
    """Raised when a value cannot be parsed as a decimal number."""

    def __init__(self, value: Any) -> None:
        super().__init__("Invalid number", value)


class InvalidDecimalPlacesError(CalculatorError):
    """Raised when a decimal-places argument is not an integer in range."""

    def __init__(self, value: Any) -> None:
        super().__init__("Invalid decimal places", value)


class InvalidPrecisionError(CalculatorError):
    """Raised when a significant-digits argument is not an integer in range."""

    def __init__(self, value: Any) -> None:
        super().__init__("Invalid precision", value)


class InvalidRoundingModeError(CalculatorError):
    """Raised when a rounding mode is not one of the four supported modes."""

    def __init__(self, value: Any) -> None:
        super().__init__("Invalid rounding mode", value)


class DivisionByZeroError(CalculatorError):
    """Raised when dividing (or taking a modulo) by zero."""

    def __init__(self, numerator: Any) -> None:
        super().__init__("Division by zero", numerator)
        self.numerator = numerator


class InvalidExponentError(CalculatorError):
    """Raised when a power exponent is not an integer or is out of range."""

    def __init__(self, value: Any) -> None:
        super().__init__("Invalid exponent", value)


class NoSquareRootError(CalculatorError):
    """Raised when taking the square root of a negative number."""

    def __init__(self, value: Any) -> None:
        super().__init__("No square root", value)


class UnknownOperationError(CalculatorError):
    """Raised when an operator glyph has no arithmetic behind it."""

    def __init__(self, operation: Any) -> None:
        super().__init__("Unknown operation", operation)
        self.operation = operation


class OutOfRangeError(CalculatorError):
    """Raised when a value is outside acceptable range."""

    def __init__(
        self, value: int, min_val: int | None = None, max_val: int | None = None
    ) -> None:
        range_str = f"[{min_val}, {max_val}]"
        super().__init__(f"Value out of range {range_str}", value)
        self.min_val = min_val
        self.max_val = max_val
