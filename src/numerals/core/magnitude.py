"""
Exact magnitude and digit-window helpers on rationals (integer domain).

Alignment notes:
- Orders of magnitude start from a floating-point logarithm estimate, which
  can be off by one at exact powers of the base, and are then verified and
  corrected with exact rational comparisons. Results are always exact.
- Digit windows are computed with integer division; the discarded remainder
  is classified exactly. In even bases this is the same as looking at the
  first discarded digit and whether anything nonzero follows it.
- Odd bases have no tie digit: the first discarded digit decides on its own
  (<= base // 2 is LO), matching `Rounding.truncate` on the digit sequence.
"""

from __future__ import annotations

import math
from fractions import Fraction
from typing import Optional, Tuple

from .datatypes import RoundUp


def base_power(base: int, e: int) -> Fraction:
    """Return base**e as an exact Fraction (any integer e)."""
    if e >= 0:
        return Fraction(base ** e)
    return Fraction(1, base ** (-e))


def _log_estimate(q: Fraction, base: int) -> int:
    # math.log accepts arbitrarily large ints; Fraction -> float could overflow
    est = (math.log(q.numerator) - math.log(q.denominator)) / math.log(base)
    return math.floor(est) + 1


def fraction_magnitude(q: Fraction, base: int) -> int:
    """Return k such that base**(k-1) <= q < base**k, for q > 0."""
    if q <= 0:
        raise ValueError("fraction_magnitude expects q > 0")
    k = _log_estimate(q, base)
    while base_power(base, k - 1) > q:
        k -= 1
    while base_power(base, k) <= q:
        k += 1
    return k


def classify_remainder(rem: int, den: int, base: int = 10) -> Optional[RoundUp]:
    """Classify a discarded fraction rem/den (0 <= rem < den) of one base-`base` unit."""
    if rem == 0:
        return None
    if base % 2:
        next_digit = (rem * base) // den
        return RoundUp.LO if next_digit <= base // 2 else RoundUp.HI
    twice = 2 * rem
    if twice < den:
        return RoundUp.LO
    if twice == den:
        return RoundUp.TIE
    return RoundUp.HI


def fixed_digits(q: Fraction, base: int, k: int, n: int) -> Tuple[int, int, Optional[RoundUp]]:
    """Truncate q >= 0 to a window of n digits below magnitude k.

    Returns (coefficient, scale, round_up) with coefficient * base**scale the
    truncated value, scale == k - n, and round_up classifying the remainder.
    When n <= 0 the coefficient is 0 and the whole value is the remainder.
    """
    if q < 0:
        raise ValueError("fixed_digits expects q >= 0")
    scale = k - n
    num, den = q.numerator, q.denominator
    if scale >= 0:
        den *= base ** scale
    else:
        num *= base ** (-scale)
    coefficient, rem = divmod(num, den)
    return coefficient, scale, classify_remainder(rem, den, base)


def resolution_scale(unit: Fraction, base: int) -> int:
    """Largest s with base**s <= unit: the finest base-`base` digit weight
    that does not exceed `unit`."""
    return fraction_magnitude(unit, base) - 1


__all__ = [
    "base_power",
    "fraction_magnitude",
    "classify_remainder",
    "fixed_digits",
    "resolution_scale",
]
