"""
Conversion strategies between host numbers and numerals.

Each strategy implements one capability interface (`Conversion`):
- order_of_magnitude / number_of_digits of a value in a base;
- is_exact: whether the host kind denotes exact quantities;
- number_to_numeral(value, WriteMode, Rounding) -> Numeral;
- numeral_to_number(numeral, ReadMode) -> value;
- write / read: entry points choosing the exact/approximate paths.

Variants (closed set, selected by `conversion_for`):
- IntegerConversion: int, exact.
- RationalConversion: fractions.Fraction, exact.
- FloatConversion: floating kinds through an explicit NumericContext
  (FloatContext for float, DecimalContext for decimal.Decimal); values are
  approximate unless written with exact_input.

Alignment notes:
- Approximate writes choose digits inside the value's rounding envelope under
  the conversion's `input_rounding` (the mode that produced the value; the
  context rounding when unset). The output Rounding only acts on the digits.
- Digits that a fixed rounding asks for beyond the value's own precision are
  not significant; they are written as zeros (approximate numeral). Exact
  writes show the exact digits instead.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import Decimal
from fractions import Fraction
from typing import Any, Optional

from .contexts import DecimalContext, FloatContext, NumericContext
from .core import (
    DEFAULT_BASE,
    MAX_EXACT_DIGITS,
    SPECIAL_NAN,
    InvalidConversion,
    Numeral,
    ReadMode,
    Rounding,
    RoundingMode,
    WriteMode,
    base_power,
    count_digits,
    fixed_digits,
    fraction_magnitude,
)
from .core.digits import strip_trailing_zeros
from .formatter import Envelope, resolution_digits, rounding_envelope, shortest_digits
from .reader import read_numeral

# Debug printing control
DEBUG_CONVERSIONS = False

def _dbg(msg: str) -> None:
    if DEBUG_CONVERSIONS:
        print(msg)


# ----------------------------
# Shared helpers
# ----------------------------

def _signed(numeral: Numeral, sign: int) -> Numeral:
    return numeral if numeral.sign == sign else numeral.negated()


def _exact_numeral(q: Fraction, sign: int, base: int, max_digits: Optional[int] = None) -> Numeral:
    q = abs(q)
    numeral = Numeral.from_quotient(q.numerator, q.denominator, base=base, max_digits=max_digits)
    return _signed(numeral, sign)


def _window(rounding: Rounding, k: int) -> int:
    """Significant digits a fixed rounding keeps for a magnitude-k value."""
    if rounding.is_relative:
        return rounding.value
    return rounding.value + k


def _fixed_exact_numeral(q: Fraction, sign: int, rounding: Rounding) -> Numeral:
    """Round an exact rational to a fixed rounding without expanding it fully."""
    q = abs(q)
    if q == 0:
        return rounding.round(Numeral.zero(sign=sign, base=rounding.base))
    b = rounding.base
    k = fraction_magnitude(q, b)
    c, s, round_up = fixed_digits(q, b, k, _window(rounding, k))
    truncated = Numeral.from_coefficient_scale(c, s, sign=sign, base=b, approximate=True)
    _dbg(f"fixed exact: q={q}, k={k}, c={c}, s={s}, round_up={round_up}")
    return rounding.adjust(truncated, round_up)


def _exact_digit_count(q: Fraction, base: int) -> int:
    """Digits of the exact base expansion of q (0 for zero or a repeating expansion)."""
    n, d = abs(q.numerator), q.denominator
    if n == 0:
        return 0
    rest = d
    g = math.gcd(rest, base)
    while g > 1:
        while rest % g == 0:
            rest //= g
        g = math.gcd(rest, base)
    if rest != 1:
        return 0
    s = 0
    while (n * base ** s) % d:
        s += 1
    m, _ = strip_trailing_zeros(n * base ** s // d, base)
    return count_digits(m, base)


# ----------------------------
# Interface
# ----------------------------

class Conversion:
    """Conversion strategy between a host numeric kind and numerals (abstract)."""

    @property
    def is_exact(self) -> bool:
        raise NotImplementedError

    def order_of_magnitude(self, value: Any, base: int = DEFAULT_BASE) -> int:
        """floor(log_base(|value|)) + 1; 0 for zero."""
        raise NotImplementedError

    def number_of_digits(self, value: Any, base: int = DEFAULT_BASE) -> int:
        raise NotImplementedError

    def number_to_numeral(self, value: Any, mode: WriteMode = WriteMode.EXACT,
                          rounding: Optional[Rounding] = None) -> Numeral:
        raise NotImplementedError

    def numeral_to_number(self, numeral: Numeral, mode: ReadMode = ReadMode.FIXED) -> Any:
        raise NotImplementedError

    def write(self, value: Any, exact_input: bool = False,
              rounding: Optional[Rounding] = None) -> Numeral:
        raise NotImplementedError

    def read(self, numeral: Numeral, exact_input: bool = False,
             approximate_simplified: bool = False) -> Any:
        raise NotImplementedError


class _ExactConversion(Conversion):
    """Shared behaviour of the exact kinds (values are their own quotient)."""

    @property
    def is_exact(self) -> bool:
        return True

    def _fraction(self, value: Any) -> Fraction:
        raise NotImplementedError

    def order_of_magnitude(self, value: Any, base: int = DEFAULT_BASE) -> int:
        q = abs(self._fraction(value))
        if q == 0:
            return 0
        return fraction_magnitude(q, base)

    def number_of_digits(self, value: Any, base: int = DEFAULT_BASE) -> int:
        return _exact_digit_count(self._fraction(value), base)

    def number_to_numeral(self, value: Any, mode: WriteMode = WriteMode.EXACT,
                          rounding: Optional[Rounding] = None) -> Numeral:
        rounding = rounding or Rounding()
        q = self._fraction(value)
        sign = -1 if q < 0 else 1
        if rounding.is_fixed:
            return _fixed_exact_numeral(q, sign, rounding)
        return _exact_numeral(q, sign, rounding.base)

    def write(self, value: Any, exact_input: bool = False,
              rounding: Optional[Rounding] = None) -> Numeral:
        return self.number_to_numeral(value, WriteMode.EXACT, rounding)

    def read(self, numeral: Numeral, exact_input: bool = False,
             approximate_simplified: bool = False) -> Any:
        return self.numeral_to_number(numeral, ReadMode.FIXED)


# ----------------------------
# Integers
# ----------------------------

class IntegerConversion(_ExactConversion):
    """int <-> Numeral (exact)."""

    def _fraction(self, value: int) -> Fraction:
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidConversion(f"not an integer: {value!r}")
        return Fraction(value)

    def order_of_magnitude(self, value: int, base: int = DEFAULT_BASE) -> int:
        self._fraction(value)
        return count_digits(value, base)

    def number_of_digits(self, value: int, base: int = DEFAULT_BASE) -> int:
        self._fraction(value)
        if value == 0:
            return 0
        m, _ = strip_trailing_zeros(abs(value), base)
        return count_digits(m, base)

    def numeral_to_number(self, numeral: Numeral, mode: ReadMode = ReadMode.FIXED) -> int:
        if numeral.is_special:
            raise InvalidConversion(f"special numeral {numeral.special!r} is not an integer")
        q = numeral.to_fraction()
        if q.denominator != 1:
            raise InvalidConversion(f"numeral value {q} is not an integer")
        return q.numerator

    def __repr__(self) -> str:
        return "IntegerConversion()"


# ----------------------------
# Rationals
# ----------------------------

class RationalConversion(_ExactConversion):
    """fractions.Fraction <-> Numeral (exact)."""

    def _fraction(self, value: Fraction) -> Fraction:
        if not isinstance(value, Fraction):
            raise InvalidConversion(f"not a Fraction: {value!r}")
        return value

    def numeral_to_number(self, numeral: Numeral, mode: ReadMode = ReadMode.FIXED) -> Fraction:
        if numeral.is_special:
            raise InvalidConversion(f"special numeral {numeral.special!r} has no rational value")
        return numeral.to_fraction()

    def __repr__(self) -> str:
        return "RationalConversion()"


INTEGER_CONVERSION = IntegerConversion()
RATIONAL_CONVERSION = RationalConversion()


# ----------------------------
# Floating kinds
# ----------------------------

@dataclass(frozen=True)
class FloatConversion(Conversion):
    """Floating host kind <-> Numeral through an explicit numeric context.

    Fields:
    - context: NumericContext of the host kind (FloatContext by default).
    - input_rounding: rounding mode that produced the values being written
      (and that numerals being read stand for); the context rounding when None.
    """

    context: NumericContext = field(default_factory=FloatContext)
    input_rounding: Optional[RoundingMode] = None

    def __post_init__(self):
        if self.input_rounding is not None:
            object.__setattr__(self, "input_rounding", RoundingMode(self.input_rounding))

    @property
    def is_exact(self) -> bool:
        return False

    @property
    def input_mode(self) -> RoundingMode:
        return self.input_rounding or self.context.rounding

    # ------------- value decomposition -------------

    def _split(self, value: Any):
        ctx = self.context
        if not ctx.accepts(value):
            raise InvalidConversion(f"{value!r} is not a value of {ctx!r}")
        if ctx.special_of(value) is not None:
            raise InvalidConversion(f"special value {value!r} has no finite decomposition")
        return ctx.split(value)

    def _magnitude(self, c: int, e: int) -> Fraction:
        return c * base_power(self.context.radix, e)

    def _envelope_precision(self, c: int) -> int:
        # variable-precision kinds carry their precision in the coefficient
        if self.context.variable_precision:
            return max(count_digits(c, self.context.radix), 1)
        return self.context.precision

    # ------------- magnitudes -------------

    def order_of_magnitude(self, value: Any, base: int = DEFAULT_BASE) -> int:
        _, c, e = self._split(value)
        if c == 0:
            return 0
        r = self.context.radix
        if base == r:
            return e + count_digits(c, r)
        return fraction_magnitude(self._magnitude(c, e), base)

    def number_of_digits(self, value: Any, base: int = DEFAULT_BASE) -> int:
        _, c, e = self._split(value)
        if c == 0:
            return 0
        r = self.context.radix
        if base == r:
            return count_digits(c, r)
        return resolution_digits(self._magnitude(c, e), base_power(r, e), base)

    # ------------- number -> numeral -------------

    def number_to_numeral(self, value: Any, mode: WriteMode = WriteMode.EXACT,
                          rounding: Optional[Rounding] = None) -> Numeral:
        rounding = rounding or Rounding()
        ctx = self.context
        if not ctx.accepts(value):
            raise InvalidConversion(f"{value!r} is not a value of {ctx!r}")
        special = ctx.special_of(value)
        if special is not None:
            if special == SPECIAL_NAN:
                return Numeral.nan(rounding.base)
            return Numeral.infinity(ctx.sign_of(value), rounding.base)

        sign, c, e = ctx.split(value)
        if WriteMode(mode) is WriteMode.EXACT:
            q = self._magnitude(c, e)
            if rounding.is_fixed:
                return _fixed_exact_numeral(q, sign, rounding)
            return _exact_numeral(q, sign, rounding.base, MAX_EXACT_DIGITS)
        return self._approximate_numeral(sign, c, e, rounding)

    def _approximate_numeral(self, sign: int, c: int, e: int, rounding: Rounding) -> Numeral:
        ctx = self.context
        r, b = ctx.radix, rounding.base
        negative = sign < 0

        if c == 0:
            if rounding.is_fixed:
                return rounding.round(Numeral.zero(sign=sign, base=b))
            scale = e if b == r else 0
            return rounding.round(Numeral.zero(sign=sign, base=b, approximate=True, scale=scale))

        q = self._magnitude(c, e)
        envelope = self._envelope(c, e, negative)
        if rounding.is_preserving:
            if b == r:
                return Numeral.from_coefficient_scale(c, e, sign=sign, base=b, approximate=True)
            return self._resolution_numeral(q, sign, e, envelope, rounding)

        found = shortest_digits(q, envelope, b)
        _dbg(f"approximate write: c={c}, e={e}, base={b}, shortest={found}")

        if rounding.is_simplifying:
            if found is None:
                return self._resolution_numeral(q, sign, e, envelope,
                                                Rounding.preserve(rounding.mode, b)).as_exact()
            return Numeral.from_coefficient_scale(found[0], found[1], sign=sign, base=b)

        if found is not None:
            sc, ss = found
            k = ss + count_digits(sc, b)
            window_scale = k - _window(rounding, k) if rounding.is_relative else -rounding.value
            if ss >= window_scale:
                padded = sc * b ** (ss - window_scale)
                return Numeral.from_coefficient_scale(padded, window_scale, sign=sign, base=b,
                                                      approximate=True)
        return _fixed_exact_numeral(q, sign, rounding)

    def _envelope(self, c: int, e: int, negative: bool) -> Envelope:
        ctx = self.context
        return rounding_envelope(
            c, e, ctx.radix, self.input_mode,
            precision=self._envelope_precision(c),
            etiny=None if ctx.variable_precision else ctx.etiny,
            negative=negative,
        )

    def _resolution_numeral(self, q: Fraction, sign: int, e: int, envelope: Envelope,
                            rounding: Rounding) -> Numeral:
        """Resolution digits of q, nearest to q among those inside `envelope`."""
        b = rounding.base
        n = resolution_digits(q, base_power(self.context.radix, e), b)
        if not envelope.is_degenerate:
            found = shortest_digits(q, envelope, b, min_digits=n)
            if found is not None:
                return Numeral.from_coefficient_scale(found[0], found[1], sign=sign, base=b,
                                                      approximate=True)
        # only the value itself reads back: round it to the resolution
        k = fraction_magnitude(q, b)
        coefficient, scale, round_up = fixed_digits(q, b, k, n)
        truncated = Numeral.from_coefficient_scale(coefficient, scale, sign=sign, base=b,
                                                   approximate=True)
        return rounding.round(truncated, round_up)

    # ------------- numeral -> number -------------

    def numeral_to_number(self, numeral: Numeral, mode: ReadMode = ReadMode.FIXED) -> Any:
        mode = ReadMode(mode)
        ctx = self.context
        if numeral.is_special:
            return read_numeral(ctx, numeral)
        if mode is ReadMode.FIXED:
            return self._read_fixed(numeral)
        if mode is ReadMode.FREE:
            return self._read_free(numeral)
        return read_numeral(ctx, numeral, ReadMode.SHORT, self.input_mode)

    def _read_fixed(self, numeral: Numeral) -> Any:
        ctx = self.context
        if numeral.base == ctx.radix and not numeral.is_repeating:
            kept = numeral
            if len(numeral.digits) > ctx.precision:
                rounding = Rounding.relative(ctx.precision, mode=self.input_mode, base=ctx.radix)
                kept = rounding.round(numeral)
            sign, c, s = kept.split()
            # near the subnormal range the precision shrinks: round the original digits once
            if ctx.fits(c, s) and not ctx.is_subnormal(c, s):
                return ctx.make(sign, c, s)
        return read_numeral(ctx, numeral, ReadMode.FIXED, self.input_mode)

    def _read_free(self, numeral: Numeral) -> Any:
        ctx = self.context
        if numeral.base == ctx.radix and not numeral.is_repeating:
            sign, c, s = numeral.split()
            if ctx.fits(c, s):
                return ctx.make(sign, c, s)
            return read_numeral(ctx, numeral, ReadMode.FIXED, self.input_mode)
        return read_numeral(ctx, numeral, ReadMode.FREE, self.input_mode)

    # ------------- entry points -------------

    def write(self, value: Any, exact_input: bool = False,
              rounding: Optional[Rounding] = None) -> Numeral:
        """Numeral for a value; approximate unless `exact_input`.

        An exact write in the native base with a free rounding returns the
        value's own coefficient digits (exact numeral).
        """
        rounding = rounding or Rounding()
        ctx = self.context
        if exact_input:
            if (rounding.base == ctx.radix and rounding.is_free and ctx.accepts(value)
                    and ctx.special_of(value) is None):
                sign, c, e = ctx.split(value)
                return Numeral.from_coefficient_scale(c, e, sign=sign, base=ctx.radix)
            return self.number_to_numeral(value, WriteMode.EXACT, rounding)
        return self.number_to_numeral(value, WriteMode.APPROXIMATE, rounding)

    def read(self, numeral: Numeral, exact_input: bool = False,
             approximate_simplified: bool = False) -> Any:
        """Value for a numeral.

        Approximate numerals are read freely (or as the shortest value they
        stand for when `approximate_simplified`); exact numerals, and any
        numeral when `exact_input`, are correctly rounded to the context.
        """
        if numeral.is_special:
            return self.numeral_to_number(numeral)
        if numeral.approximate and not exact_input:
            mode = ReadMode.SHORT if approximate_simplified else ReadMode.FREE
            return self.numeral_to_number(numeral, mode)
        return self.numeral_to_number(numeral.as_exact() if exact_input else numeral, ReadMode.FIXED)


# ----------------------------
# Dispatch
# ----------------------------

def conversion_for(value: Any, context: Any = None) -> Conversion:
    """Conversion strategy for a host value.

    `context` binds floating kinds: a FloatContext for float; a DecimalContext
    or a `decimal.Context` for Decimal (a default `decimal.Context()` when None).
    """
    if isinstance(value, bool):
        raise InvalidConversion("bool is not a numeric kind")
    if isinstance(value, int):
        return INTEGER_CONVERSION
    if isinstance(value, Fraction):
        return RATIONAL_CONVERSION
    if isinstance(value, float):
        return FloatConversion(context if isinstance(context, FloatContext) else FloatContext())
    if isinstance(value, Decimal):
        if isinstance(context, DecimalContext):
            return FloatConversion(context)
        return FloatConversion(DecimalContext(context))
    raise InvalidConversion(f"no conversion for {type(value).__name__}")


def order_of_magnitude(value: Any, base: int = DEFAULT_BASE) -> int:
    """floor(log_base(|value|)) + 1 (0 for zero), exact for every supported kind."""
    return conversion_for(value).order_of_magnitude(value, base)


def number_of_digits(value: Any, base: int = DEFAULT_BASE) -> int:
    """Significant digits of value in base (0 for zero or a repeating expansion)."""
    return conversion_for(value).number_of_digits(value, base)


__all__ = [
    "Conversion",
    "IntegerConversion",
    "RationalConversion",
    "FloatConversion",
    "INTEGER_CONVERSION",
    "RATIONAL_CONVERSION",
    "conversion_for",
    "order_of_magnitude",
    "number_of_digits",
]
