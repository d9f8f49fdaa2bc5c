"""
General numeral-to-number algorithm for floating host kinds.

Modes:
- FIXED: the numeral's exact value correctly rounded to the context precision.
- FREE: the precision comes from the numeral: a kind with variable precision
  gets as many radix digits as the numeral's digits carry; fixed-precision
  kinds behave as FIXED.
- SHORT: among the values the numeral stands for (its rounding envelope at
  its own precision), the one with the fewest radix digits; FIXED when none
  fits the context.

Notes:
- Same-base shortcuts (direct digit reinterpretation) live in the float
  conversion; this module only deals with the general cross-base case.
- The numeral's value is used exactly; rounding happens once, in
  `NumericContext.round_fraction`.
"""

from __future__ import annotations

import math
from typing import Any, Optional

from .contexts import NumericContext
from .core import Numeral, ReadMode, RoundingMode, digits_to_int
from .formatter import rounding_envelope, shortest_digits

# Debug printing control
DEBUG_READER = False

def _dbg(msg: str) -> None:
    if DEBUG_READER:
        print(msg)


def equivalent_precision(ndigits: int, base: int, radix: int) -> int:
    """Smallest p with radix**p >= base**ndigits (radix digits matching ndigits base digits)."""
    if ndigits <= 0:
        return 1
    if base == radix:
        return ndigits
    p = max(1, math.ceil(ndigits * math.log(base) / math.log(radix)))
    target = base ** ndigits
    while p > 1 and radix ** (p - 1) >= target:
        p -= 1
    while radix ** p < target:
        p += 1
    return p


def read_numeral(
    context: NumericContext,
    numeral: Numeral,
    mode: ReadMode = ReadMode.FIXED,
    rounding: Optional[RoundingMode] = None,
) -> Any:
    """Convert a numeral of any base to a value of the context's kind."""
    mode = ReadMode(mode)
    rounding = RoundingMode(rounding or context.rounding)
    if numeral.is_special:
        if numeral.is_nan:
            return context.nan()
        return context.infinity(numeral.sign)

    q = abs(numeral.to_fraction())
    negative = numeral.is_negative
    if q == 0:
        return context.make(numeral.sign, 0, 0)

    if numeral.is_repeating or mode is ReadMode.FIXED:
        return context.round_fraction(q, negative, rounding)

    if mode is ReadMode.FREE:
        if not context.variable_precision:
            return context.round_fraction(q, negative, rounding)
        p = equivalent_precision(len(numeral.digits), numeral.base, context.radix)
        _dbg(f"read_numeral[free]: {len(numeral.digits)} base-{numeral.base} digits -> precision {p}")
        return context.round_fraction(q, negative, rounding, precision=p)

    # SHORT
    coefficient = digits_to_int(numeral.digits, numeral.base)
    envelope = rounding_envelope(coefficient, numeral.scale, numeral.base, rounding,
                                 precision=len(numeral.digits), negative=negative)
    found = shortest_digits(q, envelope, context.radix,
                            max_digits=context.precision, min_scale=context.etiny)
    if found is not None and context.fits(*found):
        c, s = found
        _dbg(f"read_numeral[short]: {q} -> c={c}, s={s}")
        return context.make(numeral.sign, c, s)
    _dbg(f"read_numeral[short]: no short value for {q}; reading fixed")
    return context.round_fraction(q, negative, rounding)


__all__ = [
    "equivalent_precision",
    "read_numeral",
]
