"""Argument validation for decimal arithmetic and rounding."""

from enum import IntEnum
from typing import Any

from decicalc.exceptions import (
    InvalidDecimalPlacesError,
    InvalidExponentError,
    InvalidPrecisionError,
    InvalidRoundingModeError,
    OutOfRangeError,
)

# Constants for numerical limits
MAX_DP = 1_000_000
MAX_POWER = 1_000_000


class RoundingMode(IntEnum):
    """How digits beyond the retained precision are resolved."""

    DOWN = 0  # towards zero, i.e. truncate
    HALF_UP = 1  # to nearest neighbour, if equidistant away from zero
    HALF_EVEN = 2  # to nearest neighbour, if equidistant to even
    UP = 3  # away from zero


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_decimal_places(value: Any) -> int:
    """
    Validate a number of decimal places.

    Args:
        value: The value to validate

    Returns:
        The validated value

    Raises:
        InvalidDecimalPlacesError: If value is not an integer in [0, MAX_DP]
    """
    if not _is_int(value) or value < 0 or value > MAX_DP:
        raise InvalidDecimalPlacesError(value)

    return value


def validate_precision(value: Any) -> int:
    """
    Validate a number of significant digits.

    Raises:
        InvalidPrecisionError: If value is not an integer in [1, MAX_DP]
    """
    if not _is_int(value) or value < 1 or value > MAX_DP:
        raise InvalidPrecisionError(value)

    return value


def validate_rounding_mode(value: Any) -> RoundingMode:
    """
    Validate a rounding mode given as a RoundingMode or its integer value.

    Returns:
        The matching RoundingMode member

    Raises:
        InvalidRoundingModeError: If value is not one of the four modes
    """
    if not _is_int(value):
        raise InvalidRoundingModeError(value)

    try:
        return RoundingMode(value)
    except ValueError as e:
        raise InvalidRoundingModeError(value) from e


def validate_exponent(value: Any) -> int:
    """
    Validate an exponent for integer powers.

    Raises:
        InvalidExponentError: If value is not an integer in [-MAX_POWER, MAX_POWER]
    """
    if not _is_int(value) or value < -MAX_POWER or value > MAX_POWER:
        raise InvalidExponentError(value)

    return value


def validate_range(
    value: Any,
    min_val: int | None = None,
    max_val: int | None = None,
) -> int:
    """
    Validate that an integer is within an inclusive range.

    Args:
        value: The value to validate
        min_val: Minimum allowed value (None for no limit)
        max_val: Maximum allowed value (None for no limit)

    Returns:
        The validated value

    Raises:
        OutOfRangeError: If value is not an integer or is outside the range
    """
    if not _is_int(value):
        raise OutOfRangeError(value, min_val, max_val)

    if min_val is not None and value < min_val:
        raise OutOfRangeError(value, min_val, max_val)

    if max_val is not None and value > max_val:
        raise OutOfRangeError(value, min_val, max_val)

    return value
