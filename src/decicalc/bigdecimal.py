"""
Arbitrary-precision decimal arithmetic.

A BigDecimal stores a sign, a decimal exponent and a tuple of base-10 digits,
so values such as 0.1 + 0.2 are exact. Operations that can produce
non-terminating results (division, square root, negative powers) are rounded
to ``Context.decimal_places`` using ``Context.rounding``.
"""

from __future__ import annotations

import logging
import math
import re
from fractions import Fraction
from typing import Union

from decicalc.context import Context, resolve
from decicalc.exceptions import (
    DivisionByZeroError,
    InvalidNumberError,
    NoSquareRootError,
)
from decicalc.validators import (
    RoundingMode,
    validate_decimal_places,
    validate_exponent,
    validate_precision,
    validate_rounding_mode,
)

logger = logging.getLogger(__name__)

NUMERIC = re.compile(r"-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:e[+-]?[0-9]+)?", re.IGNORECASE)

DecimalLike = Union["BigDecimal", int, float, str]

Digits = tuple[int, ...]

# String formatting modes
_NORMAL = 0
_EXPONENTIAL = 1
_FIXED = 2
_PRECISION = 3
_VALUE = 4


def _to_text(value: object) -> str:
    if isinstance(value, bool):
        raise InvalidNumberError(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidNumberError(value)
        if value == 0 and math.copysign(1.0, value) < 0:
            return "-0"
        return repr(value)
    if isinstance(value, str):
        return value
    raise InvalidNumberError(value)


def _parse(text: str) -> tuple[int, int, Digits]:
    """Split a numeric string into (sign, exponent, digits)."""
    if not NUMERIC.fullmatch(text):
        raise InvalidNumberError(text)

    sign = 1
    if text[0] == "-":
        sign = -1
        text = text[1:]

    point = text.find(".")
    if point > -1:
        text = text.replace(".", "", 1)

    marker = text.lower().find("e")
    if marker > 0:
        if point < 0:
            point = marker
        point += int(text[marker + 1 :])
        text = text[:marker]
    elif point < 0:
        point = len(text)

    significant = text.lstrip("0")
    if not significant:
        return sign, 0, (0,)

    leading = len(text) - len(significant)
    significant = significant.rstrip("0")
    return sign, point - leading - 1, tuple(int(ch) for ch in significant)


def _round(
    sign: int,
    exponent: int,
    digits: Digits | list[int],
    decimal_places: int,
    rounding: RoundingMode | int,
    more: bool = False,
) -> tuple[int, int, Digits]:
    """
    Round a (sign, exponent, digits) triple to decimal_places.

    decimal_places may be negative when called from formatting. ``more``
    tells whether a non-zero remainder was already discarded (division).
    """
    rounding = validate_rounding_mode(rounding)
    i = exponent + decimal_places + 1

    if i >= len(digits):
        return sign, exponent, tuple(digits)

    # The first discarded digit; None when it lies left of the first digit.
    following = digits[i] if i >= 0 else None

    if rounding is RoundingMode.HALF_UP:
        more = following is not None and following >= 5
    elif rounding is RoundingMode.HALF_EVEN:
        more = following is not None and (
            following > 5
            or following == 5
            and (more or i + 1 < len(digits) or (i >= 1 and digits[i - 1] % 2 == 1))
        )
    elif rounding is RoundingMode.UP:
        more = more or following is not None or i < 0
    else:
        more = False

    if i < 1:
        if more:
            # 1, 0.1, 0.01, 0.001 etc.
            return sign, -decimal_places, (1,)
        return sign, 0, (0,)

    kept = list(digits[:i])

    if more:
        j = i - 1
        while True:
            kept[j] += 1
            if kept[j] <= 9:
                break
            kept[j] = 0
            if j == 0:
                exponent += 1
                kept.insert(0, 1)
                break
            j -= 1

    while kept[-1] == 0:
        kept.pop()

    return sign, exponent, tuple(kept)


def _compare_magnitude(a: list[int], b: list[int]) -> int:
    """Compare two digit lists without leading zeros as integers."""
    if len(a) != len(b):
        return 1 if len(a) > len(b) else -1
    for x, y in zip(a, b):
        if x != y:
            return 1 if x > y else -1
    return 0


def _subtract_digits(larger: list[int], smaller: list[int]) -> list[int]:
    """Right-aligned schoolbook subtraction; larger must not be less than smaller."""
    result = list(larger)
    offset = len(result) - len(smaller)
    borrow = 0

    for i in range(len(result) - 1, -1, -1):
        digit = result[i] - borrow - (smaller[i - offset] if i >= offset else 0)
        borrow = 1 if digit < 0 else 0
        result[i] = digit + 10 * borrow

    return result


def _align(x: BigDecimal, y: BigDecimal) -> tuple[list[int], list[int], int]:
    """Pad both digit sequences to a shared leading exponent and equal length."""
    top = max(x._exponent, y._exponent)
    xs = [0] * (top - x._exponent) + list(x._digits)
    ys = [0] * (top - y._exponent) + list(y._digits)
    width = max(len(xs), len(ys))
    xs.extend([0] * (width - len(xs)))
    ys.extend([0] * (width - len(ys)))
    return xs, ys, top


def _coerce(value: DecimalLike) -> BigDecimal:
    return value if isinstance(value, BigDecimal) else BigDecimal(value)


def _operand(value: object) -> BigDecimal | None:
    """Coerce operands of Python operators; only BigDecimal and int mix implicitly."""
    if isinstance(value, BigDecimal):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return BigDecimal(value)
    return None


class BigDecimal:
    """
    An immutable arbitrary-precision decimal number.

    Example:
        >>> (BigDecimal("0.1") + BigDecimal("0.2")).to_string()
        '0.3'
        >>> BigDecimal(1).div(3).to_string()
        '0.33333333333333333333'
    """

    __slots__ = ("_sign", "_exponent", "_digits")

    _sign: int
    _exponent: int
    _digits: Digits

    def __init__(self, value: DecimalLike = 0) -> None:
        """
        Create a BigDecimal from an int, a finite float, a numeric string or a BigDecimal.

        Strings must match ``-?(digits[.digits]|.digits)[e[+-]digits]``.

        Raises:
            InvalidNumberError: If value cannot be parsed
        """
        if isinstance(value, BigDecimal):
            self._sign = value._sign
            self._exponent = value._exponent
            self._digits = value._digits
        else:
            self._sign, self._exponent, self._digits = _parse(_to_text(value))

    @classmethod
    def _create(cls, sign: int, exponent: int, digits: Digits) -> BigDecimal:
        instance = cls.__new__(cls)
        instance._sign = sign
        instance._exponent = exponent
        instance._digits = digits
        return instance

    @classmethod
    def _normalized(cls, sign: int, exponent: int, digits: list[int]) -> BigDecimal:
        """Strip leading and trailing zeros; an all-zero sequence becomes +0."""
        start = 0
        while start < len(digits) and digits[start] == 0:
            start += 1
        if start == len(digits):
            return cls._create(1, 0, (0,))

        end = len(digits)
        while digits[end - 1] == 0:
            end -= 1

        return cls._create(sign, exponent - start, tuple(digits[start:end]))

    # ── Representation ───────────────────────────────────────────

    @property
    def sign(self) -> int:
        """+1 or -1; zero keeps the sign it was created with."""
        return self._sign

    @property
    def exponent(self) -> int:
        """Power of ten of the most significant digit."""
        return self._exponent

    @property
    def digits(self) -> Digits:
        """Significant digits, most significant first."""
        return self._digits

    @property
    def is_zero(self) -> bool:
        return self._digits[0] == 0

    # ── Comparison ───────────────────────────────────────────────

    def cmp(self, other: DecimalLike) -> int:
        """
        Compare with another value.

        Returns:
            1 if self is greater, -1 if less, 0 if equal (+0 equals -0)
        """
        y = _coerce(other)

        if self.is_zero or y.is_zero:
            if self.is_zero:
                return 0 if y.is_zero else -y._sign
            return self._sign

        if self._sign != y._sign:
            return self._sign

        negative = self._sign < 0

        if self._exponent != y._exponent:
            return 1 if (self._exponent > y._exponent) ^ negative else -1

        for a, b in zip(self._digits, y._digits):
            if a != b:
                return 1 if (a > b) ^ negative else -1

        if len(self._digits) == len(y._digits):
            return 0
        return 1 if (len(self._digits) > len(y._digits)) ^ negative else -1

    def eq(self, other: DecimalLike) -> bool:
        return self.cmp(other) == 0

    def gt(self, other: DecimalLike) -> bool:
        return self.cmp(other) > 0

    def gte(self, other: DecimalLike) -> bool:
        return self.cmp(other) >= 0

    def lt(self, other: DecimalLike) -> bool:
        return self.cmp(other) < 0

    def lte(self, other: DecimalLike) -> bool:
        return self.cmp(other) <= 0

    # ── Arithmetic ───────────────────────────────────────────────

    def abs(self) -> BigDecimal:
        """Return the absolute value."""
        return BigDecimal._create(1, self._exponent, self._digits)

    def negated(self) -> BigDecimal:
        """Return the value with the opposite sign (zero included)."""
        return BigDecimal._create(-self._sign, self._exponent, self._digits)

    def plus(self, other: DecimalLike) -> BigDecimal:
        """
        Add another value.

        Properties:
            - Commutative: a.plus(b) == b.plus(a)
            - Identity: a.plus(0) == a
        """
        y = _coerce(other)

        if self._sign != y._sign:
            return self.minus(y.negated())

        if self.is_zero or y.is_zero:
            return self if y.is_zero else y

        xs, ys, top = _align(self, y)
        carry = 0
        for i in range(len(xs) - 1, -1, -1):
            total = xs[i] + ys[i] + carry
            xs[i] = total % 10
            carry = total // 10

        if carry:
            xs.insert(0, carry)
            top += 1

        return BigDecimal._normalized(self._sign, top, xs)

    add = plus

    def minus(self, other: DecimalLike) -> BigDecimal:
        """
        Subtract another value.

        Properties:
            - Anti-commutative: a.minus(b) == b.minus(a).negated()
            - Self-inverse: a.minus(a) == 0
        """
        y = _coerce(other)

        if self._sign != y._sign:
            return self.plus(y.negated())

        if self.is_zero or y.is_zero:
            if not y.is_zero:
                return y.negated()
            return self if not self.is_zero else BigDecimal()

        xs, ys, top = _align(self, y)
        sign = self._sign

        # Equal lengths, so list ordering is magnitude ordering.
        if xs < ys:
            xs, ys = ys, xs
            sign = -sign

        return BigDecimal._normalized(sign, top, _subtract_digits(xs, ys))

    sub = minus

    def times(self, other: DecimalLike) -> BigDecimal:
        """
        Multiply by another value using schoolbook long multiplication.

        Properties:
            - Commutative: a.times(b) == b.times(a)
            - Zero: a.times(0) == 0
        """
        y = _coerce(other)
        sign = 1 if self._sign == y._sign else -1

        if self.is_zero or y.is_zero:
            return BigDecimal._create(sign, 0, (0,))

        xc, yc = self._digits, y._digits
        if len(xc) < len(yc):
            xc, yc = yc, xc

        product = [0] * (len(xc) + len(yc))
        for i in range(len(yc) - 1, -1, -1):
            carry = 0
            for j in range(len(xc) - 1, -1, -1):
                total = product[i + j + 1] + yc[i] * xc[j] + carry
                product[i + j + 1] = total % 10
                carry = total // 10
            product[i] += carry

        # product[0] holds the final carry; without one its leading zero is stripped.
        return BigDecimal._normalized(sign, self._exponent + y._exponent + 1, product)

    mul = times

    def div(self, other: DecimalLike, context: Context | None = None) -> BigDecimal:
        """
        Divide by another value using long division.

        The quotient is rounded to ``context.decimal_places`` with
        ``context.rounding`` if it has more digits than that.

        Args:
            other: Divisor
            context: Rounding configuration (default DEFAULT_CONTEXT)

        Returns:
            The rounded quotient

        Raises:
            DivisionByZeroError: If other is zero
        """
        ctx = resolve(context)
        y = _coerce(other)
        decimal_places = ctx.decimal_places

        if y.is_zero:
            raise DivisionByZeroError(self)

        sign = 1 if self._sign == y._sign else -1

        if self.is_zero:
            return BigDecimal._create(sign, 0, (0,))

        dividend = self._digits
        divisor = list(y._digits)
        size = len(divisor)

        remainder = list(dividend[:size])
        remainder.extend([0] * (size - len(remainder)))

        quotient: list[int] = []
        exponent = self._exponent - y._exponent
        digit_budget = decimal_places + exponent + 1
        remaining = max(digit_budget, 0)
        position = size

        while True:
            # How many times the divisor goes into the current remainder.
            count = 0
            order = _compare_magnitude(divisor, remainder)
            while order < 0:
                remainder = _subtract_digits(remainder, divisor)
                while remainder[0] == 0:
                    remainder.pop(0)
                count += 1
                order = _compare_magnitude(divisor, remainder)

            if order == 0:
                count += 1
                remainder = []

            quotient.append(count)

            following = dividend[position] if position < len(dividend) else None
            if remainder and remainder[0]:
                remainder.append(following or 0)
            else:
                remainder = [] if following is None else [following]

            has_input = position < len(dividend)
            position += 1

            if not (has_input or remainder) or remaining == 0:
                break
            remaining -= 1

        produced = len(quotient)

        # At most one leading zero; keep it if it is the whole result.
        if quotient[0] == 0 and produced != 1:
            quotient.pop(0)
            exponent -= 1

        if produced > digit_budget:
            return BigDecimal._create(
                *_round(sign, exponent, quotient, decimal_places, ctx.rounding, bool(remainder))
            )

        return BigDecimal._create(sign, exponent, tuple(quotient))

    def mod(self, other: DecimalLike, context: Context | None = None) -> BigDecimal:
        """
        Remainder of truncated division: ``a - trunc(a / b) * b``.

        The result has the sign of self.

        Raises:
            DivisionByZeroError: If other is zero
        """
        y = _coerce(other)

        if y.is_zero:
            raise DivisionByZeroError(self)

        if y.abs().cmp(self.abs()) == 1:
            return self

        truncating = resolve(context).replace(decimal_places=0, rounding=RoundingMode.DOWN)
        quotient = self.div(y, context=truncating)
        return self.minus(quotient.times(y))

    def pow(self, n: int, context: Context | None = None) -> BigDecimal:
        """
        Raise to an integer power by square-and-multiply.

        A negative n returns ``1 / self ** -n`` rounded per the context.

        Args:
            n: Integer exponent in [-MAX_POWER, MAX_POWER]
            context: Rounding configuration for negative exponents

        Raises:
            InvalidExponentError: If n is not an integer or out of range
            DivisionByZeroError: If self is zero and n is negative
        """
        validate_exponent(n)
        one = BigDecimal(1)
        result = one
        base = self
        k = -n if n < 0 else n

        while True:
            if k & 1:
                result = result.times(base)
            k >>= 1
            if not k:
                break
            base = base.times(base)

        return one.div(result, context=context) if n < 0 else result

    def sqrt(self, context: Context | None = None) -> BigDecimal:
        """
        Square root by Newton-Raphson iteration.

        Iterates at four extra decimal places, rounding every estimate,
        until two successive estimates agree, then rounds to
        ``context.decimal_places``. A root smaller than one unit in the
        place after the last kept one is rounded straight from the float
        estimate.

        Raises:
            NoSquareRootError: If self is negative
        """
        ctx = resolve(context)
        decimal_places = ctx.decimal_places

        if self.is_zero:
            return self

        if self._sign < 0:
            raise NoSquareRootError(self)

        r = self._sqrt_seed()

        if r._exponent < -(decimal_places + 1):
            return BigDecimal._create(
                *_round(1, r._exponent, r._digits, decimal_places, ctx.rounding)
            )

        inner = ctx.replace(decimal_places=decimal_places + 4)
        half = BigDecimal("0.5")
        before: BigDecimal | None = None
        iterations = 0

        while True:
            previous = r
            r = half.times(previous.plus(self.div(previous, context=inner)))
            r = BigDecimal._create(
                *_round(r._sign, r._exponent, r._digits, inner.decimal_places, inner.rounding)
            )
            iterations += 1
            if r.cmp(previous) == 0:
                break
            if before is not None and r.cmp(before) == 0:
                # Alternating between two neighbours one unit apart.
                r = min(r, previous)
                break
            before = previous

        logger.debug("sqrt(%s) converged after %d iterations", self, iterations)

        return BigDecimal._create(
            *_round(r._sign, r._exponent, r._digits, decimal_places, ctx.rounding)
        )

    def _sqrt_seed(self) -> BigDecimal:
        """Float estimate of the root from at most 16 leading digits, at any magnitude."""
        lead = self._digits[:16]
        mantissa = 0
        for digit in lead:
            mantissa = mantissa * 10 + digit

        # value ~= mantissa * 10**shift, with shift made even so it halves exactly
        shift = self._exponent - len(lead) + 1
        if shift % 2:
            mantissa *= 10
            shift -= 1

        seed = BigDecimal(math.sqrt(mantissa))
        return BigDecimal._create(1, seed._exponent + shift // 2, seed._digits)

    def round(
        self,
        decimal_places: int = 0,
        rounding: RoundingMode | int | None = None,
        context: Context | None = None,
    ) -> BigDecimal:
        """
        Round to a number of decimal places.

        Args:
            decimal_places: Integer in [0, MAX_DP]
            rounding: Rounding mode (default ``context.rounding``)
            context: Supplies the default rounding mode

        Raises:
            InvalidDecimalPlacesError: If decimal_places is out of range
            InvalidRoundingModeError: If rounding is not a known mode
        """
        validate_decimal_places(decimal_places)
        mode = resolve(context).rounding if rounding is None else rounding
        return BigDecimal._create(
            *_round(self._sign, self._exponent, self._digits, decimal_places, mode)
        )

    # ── Formatting ───────────────────────────────────────────────

    def _stringify(self, mode: int, n: int | None = None, context: Context | None = None) -> str:
        ctx = resolve(context)
        sign, e, digits = self._sign, self._exponent, self._digits
        zero = self.is_zero
        k: int | None = None

        if n is not None:
            if mode == _PRECISION:
                validate_precision(n)
                k = n - 1
            else:
                validate_decimal_places(n)
                k = e + n if mode == _FIXED else n

            # Index of the digit that may be rounded up.
            places = k - e
            k += 1

            if len(digits) > k:
                sign, e, digits = _round(sign, e, digits, places, ctx.rounding)

            # Rounding up may have moved the exponent.
            if mode == _FIXED:
                k = e + places + 1

            if len(digits) < k:
                digits = digits + (0,) * (k - len(digits))

        s = "".join(map(str, digits))
        length = len(s)

        if mode != _FIXED and (
            mode == _EXPONENTIAL
            or (mode == _PRECISION and k is not None and k <= e)
            or e <= ctx.negative_exponent
            or e >= ctx.positive_exponent
        ):
            s = s[0] + ("." + s[1:] if length > 1 else "") + ("e" if e < 0 else "e+") + str(e)
        elif e < 0:
            s = "0." + "0" * (-e - 1) + s
        elif e > 0:
            point = e + 1
            if point > length:
                s += "0" * (point - length)
            elif point < length:
                s = s[:point] + "." + s[point:]
        elif length > 1:
            s = s[0] + "." + s[1:]

        if sign < 0 and (not zero or mode == _VALUE):
            return "-" + s
        return s

    def to_string(self, context: Context | None = None) -> str:
        """
        Canonical string, exponential when the exponent is at or beyond
        the context's negative/positive thresholds. Negative zero is "0".
        """
        return self._stringify(_NORMAL, context=context)

    def value_of(self, context: Context | None = None) -> str:
        """Like to_string, but negative zero keeps its sign."""
        return self._stringify(_VALUE, context=context)

    def to_fixed(self, decimal_places: int | None = None, context: Context | None = None) -> str:
        """
        Normal notation, rounded and zero-padded to decimal_places if given.

        (-0).to_fixed(0) is '0', but BigDecimal('-0.1').to_fixed(0) is '-0'.
        """
        return self._stringify(_FIXED, decimal_places, context)

    def to_exponential(
        self, decimal_places: int | None = None, context: Context | None = None
    ) -> str:
        """Exponential notation with decimal_places digits after the point if given."""
        return self._stringify(_EXPONENTIAL, decimal_places, context)

    def to_precision(
        self, significant_digits: int | None = None, context: Context | None = None
    ) -> str:
        """
        Round to significant_digits; exponential notation when they cannot
        show the integer part.
        """
        return self._stringify(_PRECISION, significant_digits, context)

    def as_fraction(self) -> Fraction:
        """Exact value as a Fraction."""
        mantissa = 0
        for digit in self._digits:
            mantissa = mantissa * 10 + digit
        mantissa *= self._sign
        scale = self._exponent - len(self._digits) + 1
        if scale >= 0:
            return Fraction(mantissa * 10**scale)
        return Fraction(mantissa, 10**-scale)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"BigDecimal('{self.value_of()}')"

    def __int__(self) -> int:
        return int(self.as_fraction())

    def __float__(self) -> float:
        return float(self.value_of())

    def __bool__(self) -> bool:
        return not self.is_zero

    # ── Python operators ─────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        y = _operand(other)
        if y is None:
            return NotImplemented
        return self.cmp(y) == 0

    def __lt__(self, other: object) -> bool:
        y = _operand(other)
        if y is None:
            return NotImplemented
        return self.cmp(y) < 0

    def __le__(self, other: object) -> bool:
        y = _operand(other)
        if y is None:
            return NotImplemented
        return self.cmp(y) <= 0

    def __gt__(self, other: object) -> bool:
        y = _operand(other)
        if y is None:
            return NotImplemented
        return self.cmp(y) > 0

    def __ge__(self, other: object) -> bool:
        y = _operand(other)
        if y is None:
            return NotImplemented
        return self.cmp(y) >= 0

    def __hash__(self) -> int:
        return hash(self.as_fraction())

    def __neg__(self) -> BigDecimal:
        return self.negated()

    def __pos__(self) -> BigDecimal:
        return self

    def __abs__(self) -> BigDecimal:
        return self.abs()

    def __add__(self, other: object) -> BigDecimal:
        y = _operand(other)
        return NotImplemented if y is None else self.plus(y)

    def __radd__(self, other: object) -> BigDecimal:
        y = _operand(other)
        return NotImplemented if y is None else y.plus(self)

    def __sub__(self, other: object) -> BigDecimal:
        y = _operand(other)
        return NotImplemented if y is None else self.minus(y)

    def __rsub__(self, other: object) -> BigDecimal:
        y = _operand(other)
        return NotImplemented if y is None else y.minus(self)

    def __mul__(self, other: object) -> BigDecimal:
        y = _operand(other)
        return NotImplemented if y is None else self.times(y)

    def __rmul__(self, other: object) -> BigDecimal:
        y = _operand(other)
        return NotImplemented if y is None else y.times(self)

    def __truediv__(self, other: object) -> BigDecimal:
        y = _operand(other)
        return NotImplemented if y is None else self.div(y)

    def __rtruediv__(self, other: object) -> BigDecimal:
        y = _operand(other)
        return NotImplemented if y is None else y.div(self)

    def __mod__(self, other: object) -> BigDecimal:
        y = _operand(other)
        return NotImplemented if y is None else self.mod(y)

    def __rmod__(self, other: object) -> BigDecimal:
        y = _operand(other)
        return NotImplemented if y is None else y.mod(self)

    def __pow__(self, n: int) -> BigDecimal:
        return self.pow(n)
