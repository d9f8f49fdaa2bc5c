from __future__ import annotations

import decimal
import math
from decimal import Decimal
from fractions import Fraction
from typing import Any, Optional, Tuple

from .core import (
    BINARY64_EMAX,
    BINARY64_ETINY,
    BINARY64_PRECISION,
    DEFAULT_ROUNDING_MODE,
    SPECIAL_INF,
    SPECIAL_NAN,
    RoundingMode,
    count_digits,
    digits_to_int,
    fixed_digits,
    fraction_magnitude,
    int_to_digits,
    rounds_away,
)


class NumericContext:
    """Host numeric-kind adapter (abstract).

    A context supplies the only facts the conversion algorithms need about a
    floating host kind:

    - radix, precision, emin/emax (adjusted exponents) and etiny (exponent of
      the least significant digit of the smallest subnormal);
    - the default rounding mode of the kind;
    - sign/coefficient/exponent decomposition and exact reconstruction;
    - specials (NaN, infinities);
    - correctly rounded construction from an exact rational.

    Values are sign * coefficient * radix**exponent with 0 <= coefficient < radix**precision.
    Contexts are immutable and safe to share.
    """

    radix: int
    precision: int
    emin: int
    emax: int
    rounding: RoundingMode = DEFAULT_ROUNDING_MODE
    #: True when the kind can hold more digits than `precision` (free reads
    #: may then produce a precision derived from the numeral).
    variable_precision: bool = False

    @property
    def etiny(self) -> int:
        return self.etiny_for(self.precision)

    def etiny_for(self, precision: int) -> int:
        return self.emin - precision + 1

    # ------------- host values -------------

    def accepts(self, x: Any) -> bool:
        raise NotImplementedError

    def special_of(self, x: Any) -> Optional[str]:
        """Return the special tag of x ('nan', 'inf') or None for finite values."""
        raise NotImplementedError

    def sign_of(self, x: Any) -> int:
        raise NotImplementedError

    def split(self, x: Any) -> Tuple[int, int, int]:
        """Return (sign, coefficient, exponent) of a finite value."""
        raise NotImplementedError

    def make(self, sign: int, coefficient: int, exponent: int) -> Any:
        """Exact value sign * coefficient * radix**exponent (caller ensures it fits)."""
        raise NotImplementedError

    def nan(self) -> Any:
        raise NotImplementedError

    def infinity(self, sign: int = 1) -> Any:
        raise NotImplementedError

    # ------------- limits -------------

    def fits(self, coefficient: int, exponent: int, precision: Optional[int] = None) -> bool:
        """True if coefficient * radix**exponent is representable without rounding."""
        p = precision or self.precision
        if coefficient == 0:
            return True
        ndigits = count_digits(coefficient, self.radix)
        if ndigits > p and not self.variable_precision:
            return False
        if exponent < self.etiny_for(max(p, ndigits)):
            return False
        return exponent + ndigits - 1 <= self.emax

    def is_subnormal(self, coefficient: int, exponent: int) -> bool:
        if coefficient == 0:
            return False
        return exponent + count_digits(coefficient, self.radix) - 1 < self.emin

    def max_finite(self, sign: int = 1, precision: Optional[int] = None) -> Any:
        p = precision or self.precision
        return self.make(sign, self.radix ** p - 1, self.emax - p + 1)

    # ------------- correctly rounded construction -------------

    def round_fraction(
        self,
        q: Fraction,
        negative: bool = False,
        mode: Optional[RoundingMode] = None,
        precision: Optional[int] = None,
    ) -> Any:
        """Value of the kind nearest to |q| (per `mode`), with the given sign.

        `q` is a magnitude (the sign is passed separately so that negative
        zero survives). Values above the largest finite magnitude overflow to
        infinity, or to the largest finite value for modes that round toward
        zero, as IEEE 754 and the decimal module do.
        """
        mode = RoundingMode(mode or self.rounding)
        p = precision or self.precision
        sign = -1 if negative else 1
        q = abs(Fraction(q))
        r = self.radix
        if q == 0:
            return self.make(sign, 0, 0)
        k = fraction_magnitude(q, r)
        e = max(k - p, self.etiny_for(p))
        c, e, round_up = fixed_digits(q, r, k, k - e)
        if rounds_away(mode, round_up, c % r, negative, r):
            c += 1
            if c == r ** p:
                c //= r
                e += 1
        if c and e + count_digits(c, r) - 1 > self.emax:
            if mode.magnitude_mode(negative) in (RoundingMode.DOWN, RoundingMode.UP05):
                return self.max_finite(sign, p)
            return self.infinity(sign)
        return self.make(sign, c, e)


# ----------------------------
# IEEE 754 binary64 (Python float)
# ----------------------------

class FloatContext(NumericContext):
    """Python float: radix 2, 53-bit coefficients, round-half-even."""

    radix = 2
    precision = BINARY64_PRECISION
    emin = BINARY64_ETINY + BINARY64_PRECISION - 1
    emax = BINARY64_EMAX
    rounding = RoundingMode.HALF_EVEN

    def accepts(self, x: Any) -> bool:
        return isinstance(x, float)

    def special_of(self, x: float) -> Optional[str]:
        if math.isnan(x):
            return SPECIAL_NAN
        if math.isinf(x):
            return SPECIAL_INF
        return None

    def sign_of(self, x: float) -> int:
        return -1 if math.copysign(1.0, x) < 0 else 1

    def split(self, x: float) -> Tuple[int, int, int]:
        sign = self.sign_of(x)
        if x == 0:
            return sign, 0, 0
        m, ex = math.frexp(abs(x))
        c = int(m * (1 << BINARY64_PRECISION))
        ex -= BINARY64_PRECISION
        if ex < BINARY64_ETINY:
            # subnormal: the low bits are zero
            c >>= BINARY64_ETINY - ex
            ex = BINARY64_ETINY
        return sign, c, ex

    def make(self, sign: int, coefficient: int, exponent: int) -> float:
        v = math.ldexp(float(coefficient), exponent)
        return -v if sign < 0 else v

    def nan(self) -> float:
        return math.nan

    def infinity(self, sign: int = 1) -> float:
        return -math.inf if sign < 0 else math.inf

    def __repr__(self) -> str:
        return "FloatContext()"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, FloatContext)

    def __hash__(self) -> int:
        return hash(FloatContext)


# ----------------------------
# decimal.Decimal under an explicit decimal.Context
# ----------------------------

class DecimalContext(NumericContext):
    """decimal.Decimal bound to an explicit `decimal.Context`.

    Notes:
    - The context is copied on construction; later changes to the caller's
      context object do not leak in. `decimal.getcontext()` is never read.
    - Decimal values may hold more digits than the context precision, so free
      reads can produce them (`variable_precision`).
    """

    radix = 10
    variable_precision = True

    def __init__(self, context: Optional[decimal.Context] = None):
        ctx = (context or decimal.Context()).copy()
        self._context = ctx
        self.precision = ctx.prec
        self.emin = ctx.Emin
        self.emax = ctx.Emax
        self.rounding = RoundingMode(ctx.rounding)

    @property
    def context(self) -> decimal.Context:
        return self._context.copy()

    def accepts(self, x: Any) -> bool:
        return isinstance(x, Decimal)

    def special_of(self, x: Decimal) -> Optional[str]:
        if x.is_nan():
            return SPECIAL_NAN
        if x.is_infinite():
            return SPECIAL_INF
        return None

    def sign_of(self, x: Decimal) -> int:
        return -1 if x.is_signed() else 1

    def split(self, x: Decimal) -> Tuple[int, int, int]:
        t = x.as_tuple()
        return (-1 if t.sign else 1), digits_to_int(t.digits, 10), t.exponent

    def make(self, sign: int, coefficient: int, exponent: int) -> Decimal:
        digits = int_to_digits(coefficient, 10) or (0,)
        return Decimal((1 if sign < 0 else 0, digits, exponent))

    def nan(self) -> Decimal:
        return Decimal("NaN")

    def infinity(self, sign: int = 1) -> Decimal:
        return Decimal("-Infinity") if sign < 0 else Decimal("Infinity")

    def __repr__(self) -> str:
        return (f"DecimalContext(prec={self.precision}, rounding={self.rounding.name}, "
                f"Emin={self.emin}, Emax={self.emax})")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DecimalContext):
            return NotImplemented
        return (self.precision, self.emin, self.emax, self.rounding) == \
            (other.precision, other.emin, other.emax, other.rounding)

    def __hash__(self) -> int:
        return hash((DecimalContext, self.precision, self.emin, self.emax, self.rounding))


__all__ = [
    "NumericContext",
    "FloatContext",
    "DecimalContext",
]
