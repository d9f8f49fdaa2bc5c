"""
Digit-level primitives (integer domain).

- `DigitSequence`: a finite prefix plus an optional repeating cycle, with a
  pure mapping from any index to a digit value. Infinite expansions are never
  materialised.
- Integer <-> digit helpers for arbitrary bases.
- `rounds_away`: the single rounding decision used by every carry step
  (numeral adjustment, digit windows, host context rounding).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .datatypes import RoundingMode, RoundUp


# ----------------------------
# Integer <-> digits
# ----------------------------

def int_to_digits(n: int, base: int) -> Tuple[int, ...]:
    """Digits of a non-negative integer, most significant first; () for zero."""
    if n < 0:
        raise ValueError("int_to_digits expects n >= 0")
    if base == 10:
        return () if n == 0 else tuple(int(c) for c in str(n))
    out = []
    while n:
        n, d = divmod(n, base)
        out.append(d)
    return tuple(reversed(out))


def digits_to_int(digits: Sequence[int], base: int) -> int:
    """Integer value of a digit sequence, most significant first."""
    n = 0
    for d in digits:
        n = n * base + d
    return n


def count_digits(n: int, base: int) -> int:
    """Number of base-`base` digits of |n| (0 for zero), computed exactly."""
    n = abs(n)
    if n == 0:
        return 0
    if base == 2:
        return n.bit_length()
    if base == 10:
        return len(str(n))
    return len(int_to_digits(n, base))


def strip_trailing_zeros(n: int, base: int) -> Tuple[int, int]:
    """Return (m, z) with n == m * base**z and m not divisible by base (n != 0)."""
    z = 0
    while n and n % base == 0:
        n //= base
        z += 1
    return n, z


# ----------------------------
# Finite-or-periodic sequences
# ----------------------------

@dataclass(frozen=True)
class DigitSequence:
    """Finite digit prefix with an optional repeating tail.

    The cycle is `digits[repeat:]`, repeated forever. Beyond a finite sequence
    every digit is an implicit 0; before the first digit (negative index) too.
    """

    digits: Tuple[int, ...] = ()
    repeat: Optional[int] = None

    def __len__(self) -> int:
        return len(self.digits)

    @property
    def is_repeating(self) -> bool:
        return self.repeat is not None

    @property
    def cycle(self) -> Tuple[int, ...]:
        if self.repeat is None:
            return ()
        return self.digits[self.repeat:]

    def value_at(self, i: int) -> int:
        if i < 0:
            return 0
        if i < len(self.digits):
            return self.digits[i]
        if self.repeat is None:
            return 0
        period = len(self.digits) - self.repeat
        return self.digits[self.repeat + (i - self.repeat) % period]

    def window(self, start: int, stop: int) -> Tuple[int, ...]:
        """Digits in positions [start, stop), extending through the cycle."""
        return tuple(self.value_at(i) for i in range(start, stop))

    def any_nonzero_from(self, i: int) -> bool:
        """True if some digit at position >= i (cycle included) is nonzero."""
        if any(self.digits[max(i, 0):]):
            return True
        # the cycle recurs past any position
        return self.repeat is not None and any(self.cycle)


# ----------------------------
# Rounding decision
# ----------------------------

def zero_or_half(last_digit: int, base: int) -> bool:
    """The up05 trigger: last digit 0, or half the base for even bases (5 in base 10)."""
    return last_digit == 0 or (base % 2 == 0 and last_digit == base // 2)


def rounds_away(
    mode: RoundingMode,
    round_up: Optional[RoundUp],
    last_digit: int,
    negative: bool,
    base: int,
) -> bool:
    """Decide whether a truncated magnitude must be incremented by one unit.

    `last_digit` is the last digit kept by the truncation, `round_up` the
    classification of what was discarded (None when nothing was).
    """
    if round_up is None:
        return False
    mode = RoundingMode(mode).magnitude_mode(negative)
    if mode is RoundingMode.DOWN:
        return False
    if mode is RoundingMode.UP:
        return True
    if mode is RoundingMode.UP05:
        return zero_or_half(last_digit, base)
    # half-* modes
    if round_up is RoundUp.HI:
        return True
    if round_up is RoundUp.LO:
        return False
    if mode is RoundingMode.HALF_UP:
        return True
    if mode is RoundingMode.HALF_DOWN:
        return False
    return last_digit % 2 == 1  # HALF_EVEN


def increment_digits(digits: Sequence[int], base: int) -> Tuple[Tuple[int, ...], bool]:
    """Add one unit to the last digit, propagating carries leftward.

    Returns (digits, carried_out); when the carry leaves the most significant
    digit a leading 1 is inserted.
    """
    out = list(digits)
    i = len(out) - 1
    while i >= 0:
        if out[i] + 1 < base:
            out[i] += 1
            return tuple(out), False
        out[i] = 0
        i -= 1
    return (1,) + tuple(out), True


__all__ = [
    "int_to_digits",
    "digits_to_int",
    "count_digits",
    "strip_trailing_zeros",
    "DigitSequence",
    "zero_or_half",
    "rounds_away",
    "increment_digits",
]
