"""
General number-to-digits algorithms for approximate (floating) values.

A floating value x = c * r**e stands for every real that the kind's rounding
maps onto it: its rounding envelope. Writing it in another base b means
choosing digits inside that envelope.

- `rounding_envelope`: the interval (with bound inclusivity) for a rounding mode.
- `shortest_digits`: fewest base-b digits whose value lies in the envelope,
  nearest to x among candidates of that length.
- `resolution_digits`: digits needed so that the last base-b digit weighs no
  more than the unit in the last place of x.

Alignment notes:
- All computations are exact on `fractions.Fraction`; candidates are checked
  against the envelope bounds, never against floating approximations.
- Below the smallest normalized coefficient the unit below x is one radix
  step finer (u / r), except in the subnormal range where it is u.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Optional, Tuple

from .core import (
    MAX_EXACT_DIGITS,
    RoundingMode,
    base_power,
    fraction_magnitude,
    resolution_scale,
)
from .core.digits import zero_or_half

# Debug printing control
DEBUG_FORMATTER = False

def _dbg(msg: str) -> None:
    if DEBUG_FORMATTER:
        print(msg)


@dataclass(frozen=True)
class Envelope:
    """Interval of magnitudes that round to a given floating value."""

    low: Fraction
    high: Fraction
    low_inclusive: bool
    high_inclusive: bool

    def contains(self, v: Fraction) -> bool:
        if v < self.low or (v == self.low and not self.low_inclusive):
            return False
        if v > self.high or (v == self.high and not self.high_inclusive):
            return False
        return True

    @property
    def is_degenerate(self) -> bool:
        return self.low == self.high


def rounding_envelope(
    coefficient: int,
    exponent: int,
    radix: int,
    mode: RoundingMode,
    *,
    precision: int,
    etiny: Optional[int] = None,
    negative: bool = False,
) -> Envelope:
    """Envelope of the magnitude coefficient * radix**exponent under `mode`.

    `precision` and `etiny` locate the coefficient in the kind's format: when
    coefficient == radix**(precision-1) and exponent > etiny the neighbour
    below is one radix step finer.
    """
    m = RoundingMode(mode).magnitude_mode(negative)
    u = base_power(radix, exponent)
    x = coefficient * u
    if coefficient == radix ** (precision - 1) and (etiny is None or exponent > etiny):
        u_below = u / radix
    else:
        u_below = u

    if m is RoundingMode.HALF_EVEN:
        inclusive = coefficient % 2 == 0
        return Envelope(x - u_below / 2, x + u / 2, inclusive, inclusive)
    if m is RoundingMode.HALF_UP:
        return Envelope(x - u_below / 2, x + u / 2, True, False)
    if m is RoundingMode.HALF_DOWN:
        return Envelope(x - u_below / 2, x + u / 2, False, True)
    if m is RoundingMode.DOWN:
        return Envelope(x, x + u, True, False)
    if m is RoundingMode.UP:
        return Envelope(x - u_below, x, False, True)
    # UP05: truncation, then away from zero when the kept digit is 0 or half
    if zero_or_half(coefficient % radix, radix):
        high, high_inclusive = x, True
    else:
        high, high_inclusive = x + u, False
    if zero_or_half((coefficient - 1) % radix, radix):
        low, low_inclusive = x - u_below, False
    else:
        low, low_inclusive = x, True
    return Envelope(low, high, low_inclusive, high_inclusive)


def _candidates(t: Fraction):
    """floor(t) and ceil(t), nearest first; halfway prefers the even one."""
    lo = math.floor(t)
    if lo == t:
        return (lo,)
    hi = lo + 1
    d = t - lo
    if d < Fraction(1, 2) or (d == Fraction(1, 2) and lo % 2 == 0):
        return (lo, hi)
    return (hi, lo)


def shortest_digits(
    q: Fraction,
    envelope: Envelope,
    base: int,
    *,
    max_digits: Optional[int] = None,
    min_scale: Optional[int] = None,
    min_digits: int = 1,
) -> Optional[Tuple[int, int]]:
    """Fewest base-`base` digits for a value of `envelope` near q > 0.

    Returns (coefficient, scale) with coefficient * base**scale inside the
    envelope, or None when no candidate exists within `max_digits` digits
    (default MAX_EXACT_DIGITS) or at a scale >= `min_scale`. The search
    starts at `min_digits` digits.
    """
    limit = MAX_EXACT_DIGITS if max_digits is None else max_digits
    k = fraction_magnitude(q, base)
    n = max(min_digits, 1)
    while n <= limit:
        s = k - n
        if min_scale is not None and s < min_scale:
            break
        w = base_power(base, s)
        for c in _candidates(q / w):
            if c > 0 and envelope.contains(c * w):
                _dbg(f"shortest_digits: q={q}, base={base} -> c={c}, s={s} (n={n})")
                return c, s
        n += 1
    _dbg(f"shortest_digits: q={q}, base={base}: none within {limit} digits / min_scale={min_scale}")
    return None


def resolution_digits(q: Fraction, unit: Fraction, base: int) -> int:
    """Digits of q > 0 in `base` down to the finest weight not above `unit`."""
    return fraction_magnitude(q, base) - resolution_scale(unit, base)


__all__ = [
    "Envelope",
    "rounding_envelope",
    "shortest_digits",
    "resolution_digits",
]
