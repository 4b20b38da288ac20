"""Rounding and formatting configuration for BigDecimal operations."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from decicalc.validators import (
    RoundingMode,
    validate_decimal_places,
    validate_range,
    validate_rounding_mode,
)

# Maximum decimal places of the results of div, sqrt and pow with a negative exponent.
DP = 20

RM = RoundingMode.HALF_UP

# Exponent at and beneath which to_string uses exponential notation.
NE = -7

# Exponent at and above which to_string uses exponential notation.
PE = 21

EXPONENT_LIMIT = 1_000_000


@dataclass(frozen=True)
class Context:
    """
    Immutable settings consulted by division, square root, rounding and formatting.

    Pass a Context as ``context=`` to any BigDecimal method that needs one;
    derive variants with :meth:`replace`.

    Example:
        >>> from decicalc import BigDecimal, Context, RoundingMode
        >>> ctx = Context(decimal_places=2, rounding=RoundingMode.DOWN)
        >>> BigDecimal(2).div(3, context=ctx).to_string()
        '0.66'
    """

    decimal_places: int = DP
    rounding: RoundingMode = RM
    negative_exponent: int = NE
    positive_exponent: int = PE

    def __post_init__(self) -> None:
        validate_decimal_places(self.decimal_places)
        # Store the enum member even when given a plain int.
        object.__setattr__(self, "rounding", validate_rounding_mode(self.rounding))
        validate_range(self.negative_exponent, -EXPONENT_LIMIT, 0)
        validate_range(self.positive_exponent, 0, EXPONENT_LIMIT)

    def replace(self, **changes: object) -> Context:
        """Return a copy with the given fields changed."""
        return dataclasses.replace(self, **changes)


DEFAULT_CONTEXT = Context()


def resolve(context: Context | None) -> Context:
    """Return context, or the default when None."""
    return DEFAULT_CONTEXT if context is None else context
