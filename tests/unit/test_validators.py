"""Unit tests for validator functions and the rounding context."""

import dataclasses

import pytest

from decicalc import (
    DEFAULT_CONTEXT,
    MAX_DP,
    MAX_POWER,
    Context,
    InvalidDecimalPlacesError,
    InvalidExponentError,
    InvalidPrecisionError,
    InvalidRoundingModeError,
    OutOfRangeError,
    RoundingMode,
    validate_decimal_places,
    validate_exponent,
    validate_precision,
    validate_range,
    validate_rounding_mode,
)


class TestValidateDecimalPlaces:
    """Tests for validate_decimal_places function."""

    def test_accepts_zero(self):
        assert validate_decimal_places(0) == 0

    def test_accepts_default(self):
        assert validate_decimal_places(20) == 20

    def test_accepts_maximum(self):
        assert validate_decimal_places(MAX_DP) == MAX_DP

    def test_rejects_negative(self):
        with pytest.raises(InvalidDecimalPlacesError) as exc_info:
            validate_decimal_places(-1)
        assert "Invalid decimal places" in str(exc_info.value)

    def test_rejects_above_maximum(self):
        with pytest.raises(InvalidDecimalPlacesError):
            validate_decimal_places(MAX_DP + 1)

    @pytest.mark.parametrize("value", [1.5, 2.0, "2", None, True])
    def test_rejects_non_integers(self, value):
        with pytest.raises(InvalidDecimalPlacesError):
            validate_decimal_places(value)


class TestValidatePrecision:
    """Tests for validate_precision function."""

    def test_accepts_one(self):
        assert validate_precision(1) == 1

    def test_rejects_zero(self):
        with pytest.raises(InvalidPrecisionError):
            validate_precision(0)

    def test_rejects_above_maximum(self):
        with pytest.raises(InvalidPrecisionError):
            validate_precision(MAX_DP + 1)

    def test_rejects_float(self):
        with pytest.raises(InvalidPrecisionError):
            validate_precision(3.0)


class TestValidateRoundingMode:
    """Tests for validate_rounding_mode function."""

    @pytest.mark.parametrize("mode", list(RoundingMode))
    def test_accepts_members(self, mode: RoundingMode):
        assert validate_rounding_mode(mode) is mode

    def test_converts_integers(self):
        assert validate_rounding_mode(0) is RoundingMode.DOWN
        assert validate_rounding_mode(2) is RoundingMode.HALF_EVEN

    @pytest.mark.parametrize("value", [-1, 4, 1.0, "1", None, True])
    def test_rejects_unknown_modes(self, value):
        with pytest.raises(InvalidRoundingModeError) as exc_info:
            validate_rounding_mode(value)
        assert "Invalid rounding mode" in str(exc_info.value)


class TestValidateExponent:
    """Tests for validate_exponent function."""

    def test_accepts_bounds(self):
        assert validate_exponent(MAX_POWER) == MAX_POWER
        assert validate_exponent(-MAX_POWER) == -MAX_POWER

    def test_accepts_zero(self):
        assert validate_exponent(0) == 0

    def test_rejects_out_of_range(self):
        with pytest.raises(InvalidExponentError):
            validate_exponent(MAX_POWER + 1)
        with pytest.raises(InvalidExponentError):
            validate_exponent(-MAX_POWER - 1)

    def test_rejects_non_integer(self):
        with pytest.raises(InvalidExponentError):
            validate_exponent(2.5)


class TestValidateRange:
    """Tests for validate_range function."""

    def test_within_range(self):
        assert validate_range(5, 0, 10) == 5

    def test_at_bounds(self):
        assert validate_range(0, 0, 10) == 0
        assert validate_range(10, 0, 10) == 10

    def test_below_min_raises(self):
        with pytest.raises(OutOfRangeError) as exc_info:
            validate_range(-1, 0, 10)
        assert exc_info.value.min_val == 0
        assert exc_info.value.max_val == 10

    def test_above_max_raises(self):
        with pytest.raises(OutOfRangeError):
            validate_range(11, 0, 10)

    def test_no_limits(self):
        assert validate_range(1_000_000) == 1_000_000

    def test_rejects_non_integer(self):
        with pytest.raises(OutOfRangeError):
            validate_range(1.5, 0, 10)


class TestContext:
    """Tests for the Context configuration object."""

    def test_defaults(self):
        assert DEFAULT_CONTEXT.decimal_places == 20
        assert DEFAULT_CONTEXT.rounding is RoundingMode.HALF_UP
        assert DEFAULT_CONTEXT.negative_exponent == -7
        assert DEFAULT_CONTEXT.positive_exponent == 21

    def test_integer_rounding_is_stored_as_member(self):
        assert Context(rounding=3).rounding is RoundingMode.UP

    def test_replace_returns_new_context(self):
        ctx = DEFAULT_CONTEXT.replace(decimal_places=2)
        assert ctx.decimal_places == 2
        assert DEFAULT_CONTEXT.decimal_places == 20

    def test_is_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CONTEXT.decimal_places = 5  # type: ignore

    def test_rejects_invalid_decimal_places(self):
        with pytest.raises(InvalidDecimalPlacesError):
            Context(decimal_places=-1)

    def test_rejects_invalid_rounding(self):
        with pytest.raises(InvalidRoundingModeError):
            Context(rounding=7)  # type: ignore

    def test_rejects_positive_negative_exponent(self):
        with pytest.raises(OutOfRangeError):
            Context(negative_exponent=1)

    def test_rejects_negative_positive_exponent(self):
        with pytest.raises(OutOfRangeError):
            Context(positive_exponent=-1)
