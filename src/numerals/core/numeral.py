"""
Numeral: a number written as base-b digits, a radix point position, an
optional repeating cycle and an exactness marker.

- Exact numerals denote precisely one rational value.
- Approximate numerals stand for every value that rounds to them; their
  trailing zeros are significant.
- Special numerals (NaN, infinities) carry no digits.

Representation:
  value = sign * 0.d1 d2 ... dn (cycle) * base**point
  scale = point - len(digits) is the exponent of the last stored digit, so a
  non-repeating numeral equals sign * int(digits) * base**scale.

Normalisation (see `Numeral.from_digits`):
- leading zeros are removed (a leading zero inside the cycle rotates it);
- an all-zero cycle is dropped;
- exact numerals lose trailing zeros and get a minimal cycle; exact zero is
  digits=() and point=0;
- approximate numerals keep their scale, so an approximate zero is digits=()
  with point == scale.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from fractions import Fraction
from typing import List, Optional, Sequence, Tuple, Union

from .constants import DEFAULT_BASE, MIN_BASE, SPECIAL_INF, SPECIAL_NAN, SPECIALS
from .datatypes import RoundingMode
from .digits import DigitSequence, digits_to_int, int_to_digits, rounds_away
from .exc import InvalidNumeral
from .magnitude import base_power, fixed_digits, fraction_magnitude, resolution_scale


# ----------------------------
# Validation & normalisation helpers
# ----------------------------

def _validate(digits: Tuple[int, ...], point: int, sign: int, base: int,
              repeat: Optional[int], special: Optional[str]) -> None:
    if not isinstance(base, int) or base < MIN_BASE:
        raise InvalidNumeral(f"base must be an integer >= {MIN_BASE}, got {base!r}")
    if sign not in (1, -1):
        raise InvalidNumeral(f"sign must be +1 or -1, got {sign!r}")
    if not isinstance(point, int):
        raise InvalidNumeral(f"point must be an integer, got {point!r}")
    if special is not None:
        if special not in SPECIALS:
            raise InvalidNumeral(f"unknown special numeral {special!r}")
        if digits or point != 0 or repeat is not None:
            raise InvalidNumeral("special numerals carry no digits")
        return
    for d in digits:
        if not isinstance(d, int) or not 0 <= d < base:
            raise InvalidNumeral(f"digit {d!r} out of range for base {base}")
    if repeat is not None and not 0 <= repeat < len(digits):
        raise InvalidNumeral(f"repeat index {repeat} out of bounds for {len(digits)} digits")


def _minimal_cycle(digits: List[int], repeat: int) -> Tuple[List[int], int]:
    """Shortest period, then shortest pre-period (value unchanged)."""
    cycle = digits[repeat:]
    size = len(cycle)
    for p in range(1, size):
        if size % p == 0 and cycle == cycle[:p] * (size // p):
            digits = digits[:repeat] + cycle[:p]
            break
    # 0.x(yx) == 0.(xy): move the cycle start back while the digits agree
    while repeat > 0 and digits[repeat - 1] == digits[-1]:
        digits.pop()
        repeat -= 1
    return digits, repeat


def _normalize(digits: Sequence[int], point: int, repeat: Optional[int],
               approximate: bool) -> Tuple[Tuple[int, ...], int, Optional[int]]:
    digits = list(digits)
    if repeat is not None and not any(digits[repeat:]):
        digits = digits[:repeat]
        repeat = None
    while digits and digits[0] == 0:
        if repeat is None or repeat > 0:
            digits.pop(0)
            if repeat is not None:
                repeat -= 1
        else:
            # 0.(0ab) == 0.0(ab0)
            digits = digits[1:] + digits[:1]
        point -= 1
    if not approximate:
        if repeat is None:
            while digits and digits[-1] == 0:
                digits.pop()
            if not digits:
                point = 0
        else:
            digits, repeat = _minimal_cycle(digits, repeat)
    return tuple(digits), point, repeat


# ----------------------------
# Numeral
# ----------------------------

@dataclass(frozen=True)
class Numeral:
    """Digit representation of a number in a given base (immutable).

    Direct construction validates but does not normalise; use the `from_*`
    constructors to obtain canonical numerals.
    """

    digits: Tuple[int, ...] = ()
    point: int = 0
    sign: int = 1
    base: int = DEFAULT_BASE
    repeat: Optional[int] = None
    approximate: bool = False
    special: Optional[str] = None

    def __post_init__(self):
        digits = tuple(self.digits)
        object.__setattr__(self, "digits", digits)
        _validate(digits, self.point, self.sign, self.base, self.repeat, self.special)

    # ------------- constructors -------------

    @classmethod
    def from_digits(
        cls,
        digits: Sequence[int],
        *,
        sign: int = 1,
        point: Optional[int] = None,
        base: int = DEFAULT_BASE,
        repeat: Optional[int] = None,
        approximate: bool = False,
    ) -> "Numeral":
        """Validated and normalised construction; `point` defaults to len(digits)."""
        digits = tuple(digits)
        if point is None:
            point = len(digits)
        _validate(digits, point, sign, base, repeat, None)
        digits, point, repeat = _normalize(digits, point, repeat, approximate)
        return cls(digits, point, sign, base, repeat, approximate)

    @classmethod
    def from_coefficient_scale(
        cls,
        coefficient: int,
        scale: int,
        *,
        sign: Optional[int] = None,
        base: int = DEFAULT_BASE,
        approximate: bool = False,
    ) -> "Numeral":
        """Numeral for coefficient * base**scale (sign from the coefficient
        unless given, which allows a negative zero)."""
        if sign is None:
            sign = -1 if coefficient < 0 else 1
        digits = int_to_digits(abs(coefficient), base)
        return cls.from_digits(digits, sign=sign, point=len(digits) + scale,
                               base=base, approximate=approximate)

    @classmethod
    def from_quotient(
        cls,
        numerator: Union[int, Fraction],
        denominator: int = 1,
        *,
        base: int = DEFAULT_BASE,
        max_digits: Optional[int] = None,
    ) -> "Numeral":
        """Exact base-`base` expansion of numerator/denominator.

        Long division; the first remainder seen twice marks the start of the
        repeating cycle. `max_digits` bounds the digits produced.
        """
        if denominator == 0:
            raise InvalidNumeral("zero denominator")
        if not isinstance(base, int) or base < MIN_BASE:
            raise InvalidNumeral(f"base must be an integer >= {MIN_BASE}, got {base!r}")
        q = Fraction(numerator, denominator)
        sign = -1 if q < 0 else 1
        n, d = abs(q.numerator), q.denominator
        int_part, rem = divmod(n, d)
        digits = list(int_to_digits(int_part, base))
        point = len(digits)
        seen = {}
        repeat = None
        while rem:
            if rem in seen:
                repeat = seen[rem]
                break
            if max_digits is not None and len(digits) >= max_digits:
                raise InvalidNumeral(f"expansion of {q} in base {base} exceeds {max_digits} digits")
            seen[rem] = len(digits)
            d_i, rem = divmod(rem * base, d)
            digits.append(d_i)
        return cls.from_digits(digits, sign=sign, point=point, base=base, repeat=repeat)

    @classmethod
    def zero(cls, *, sign: int = 1, base: int = DEFAULT_BASE,
             approximate: bool = False, scale: int = 0) -> "Numeral":
        """Zero; an approximate zero keeps `scale` as the weight of its last digit."""
        return cls((), scale if approximate else 0, sign, base, None, approximate)

    @classmethod
    def nan(cls, base: int = DEFAULT_BASE) -> "Numeral":
        return cls(base=base, special=SPECIAL_NAN)

    @classmethod
    def infinity(cls, sign: int = 1, base: int = DEFAULT_BASE) -> "Numeral":
        return cls(sign=sign, base=base, special=SPECIAL_INF)

    # ------------- predicates -------------

    @property
    def is_exact(self) -> bool:
        return not self.approximate

    @property
    def is_approximate(self) -> bool:
        return self.approximate

    @property
    def is_repeating(self) -> bool:
        return self.repeat is not None

    @property
    def is_special(self) -> bool:
        return self.special is not None

    @property
    def is_nan(self) -> bool:
        return self.special == SPECIAL_NAN

    @property
    def is_infinite(self) -> bool:
        return self.special == SPECIAL_INF

    @property
    def is_negative(self) -> bool:
        return self.sign < 0

    def is_zero(self) -> bool:
        return self.special is None and not any(self.digits)

    # ------------- digit access -------------

    @property
    def sequence(self) -> DigitSequence:
        return DigitSequence(self.digits, self.repeat)

    @property
    def scale(self) -> int:
        """Exponent (power of the base) of the last stored digit."""
        return self.point - len(self.digits)

    def digit_value_at(self, i: int) -> int:
        """Digit at position i, extended by the cycle or implicit zeros."""
        return self.sequence.value_at(i)

    def split(self) -> Tuple[int, int, int]:
        """Return (sign, coefficient, scale) with value == sign * coefficient * base**scale."""
        if self.special is not None or self.repeat is not None:
            raise InvalidNumeral("only finite, non-repeating numerals can be split")
        return self.sign, digits_to_int(self.digits, self.base), self.scale

    # ------------- conversions -------------

    def to_fraction(self) -> Fraction:
        """Exact rational value of the digits (approximate numerals included)."""
        if self.special is not None:
            raise InvalidNumeral(f"special numeral {self.special!r} has no rational value")
        b = self.base
        if self.repeat is None:
            q = Fraction(digits_to_int(self.digits, b))
            return self.sign * q * base_power(b, self.scale)
        r = self.repeat
        period = len(self.digits) - r
        prefix = digits_to_int(self.digits[:r], b)
        cycle = digits_to_int(self.digits[r:], b)
        # 0.P(C) == (P + C / (b**L - 1)) / b**r
        den = (b ** period - 1) * b ** r
        q = Fraction(prefix * (b ** period - 1) + cycle, den)
        return self.sign * q * base_power(b, self.point)

    def to_quotient(self) -> Tuple[int, int]:
        """Return (numerator, denominator) in lowest terms, denominator > 0."""
        q = self.to_fraction()
        return q.numerator, q.denominator

    def to_base(self, base: int) -> "Numeral":
        """Re-express the numeral in another base.

        Exact numerals go through their quotient. Approximate numerals are
        regenerated at the finest digit weight not exceeding the current one,
        rounding half-even.
        """
        if base == self.base:
            return self
        if self.special is not None:
            return replace(self, base=base)
        if not self.approximate:
            return Numeral.from_quotient(*self.to_quotient(), base=base)
        q = abs(self.to_fraction())
        s = resolution_scale(base_power(self.base, self.scale), base)
        if q == 0:
            return Numeral.zero(sign=self.sign, base=base, approximate=True, scale=s)
        k = fraction_magnitude(q, base)
        c, s, round_up = fixed_digits(q, base, k, k - s)
        if rounds_away(RoundingMode.HALF_EVEN, round_up, c % base, self.is_negative, base):
            c += 1
        return Numeral.from_coefficient_scale(c, s, sign=self.sign, base=base, approximate=True)

    # ------------- derived numerals -------------

    def as_exact(self) -> "Numeral":
        if not self.approximate or self.special is not None:
            return self
        return Numeral.from_digits(self.digits, sign=self.sign, point=self.point,
                                   base=self.base, repeat=self.repeat)

    def as_approximate(self) -> "Numeral":
        if self.approximate or self.special is not None:
            return self
        return replace(self, approximate=True)

    def negated(self) -> "Numeral":
        return replace(self, sign=-self.sign)


__all__ = [
    "Numeral",
]
