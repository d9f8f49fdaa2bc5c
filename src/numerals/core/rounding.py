"""
Rounding of Numerals.

A `Rounding` is an immutable policy: a rounding mode, the base of the
numerals it applies to, and a precision which is either

- fixed: relative (significant digits) or absolute (fractional places), or
- free: the value itself decides. For exact input nothing is rounded; for
  approximate input PRESERVE keeps every original digit (approximate result)
  and SIMPLIFY drops unneeded digits (exact result).

Rounding runs in two phases:
1. truncate: keep the precision window and summarise the discarded digits as
   a `RoundUp` class (None when nothing nonzero was discarded);
2. adjust: carry-propagate the kept digits according to mode, sign and class
   (SIMPLIFY takes the digits as they stand and only renormalizes them).

Alignment notes:
- A numeral that was already truncated elsewhere (e.g. by a digit generator)
  passes its summary as `round_up`; approximate numerals that already fit the
  window keep it untouched.
- Ties exist only in even bases; in odd bases a discarded digit of base // 2
  counts as below half.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .constants import DEFAULT_BASE, MIN_BASE, ZERO_DIGITS
from .datatypes import DEFAULT_ROUNDING_MODE, PrecisionKind, RoundingMode, RoundUp
from .digits import increment_digits, rounds_away
from .exc import BaseMismatch, InvalidRounding
from .numeral import Numeral

# Debug printing control
DEBUG_ROUNDING = False

def _dbg(msg: str) -> None:
    if DEBUG_ROUNDING:
        print(msg)


@dataclass(frozen=True)
class Rounding:
    """Rounding mode + base + precision policy (immutable).

    Fields:
    - mode: RoundingMode (decimal rounding constants are accepted).
    - base: base of the numerals this policy rounds.
    - kind: PrecisionKind (SIMPLIFY, PRESERVE, RELATIVE, ABSOLUTE).
    - value: significant digits (RELATIVE) or fractional places (ABSOLUTE);
      None for free kinds.
    """

    mode: RoundingMode = DEFAULT_ROUNDING_MODE
    base: int = DEFAULT_BASE
    kind: PrecisionKind = PrecisionKind.SIMPLIFY
    value: Optional[int] = None

    def __post_init__(self):
        try:
            object.__setattr__(self, "mode", RoundingMode(self.mode))
            object.__setattr__(self, "kind", PrecisionKind(self.kind))
        except ValueError as e:
            raise InvalidRounding(str(e)) from None
        if not isinstance(self.base, int) or self.base < MIN_BASE:
            raise InvalidRounding(f"base must be an integer >= {MIN_BASE}, got {self.base!r}")
        if self.kind.is_free:
            if self.value is not None:
                raise InvalidRounding(f"{self.kind.value} rounding takes no precision value")
        elif not isinstance(self.value, int) or isinstance(self.value, bool):
            raise InvalidRounding(f"{self.kind.value} rounding requires an integer value, got {self.value!r}")
        elif self.kind is PrecisionKind.RELATIVE and self.value < 1:
            raise InvalidRounding(f"relative precision must be >= 1, got {self.value}")

    # ------------- constructors -------------

    @classmethod
    def simplify(cls, mode: RoundingMode = DEFAULT_ROUNDING_MODE, base: int = DEFAULT_BASE) -> "Rounding":
        return cls(mode, base, PrecisionKind.SIMPLIFY)

    @classmethod
    def preserve(cls, mode: RoundingMode = DEFAULT_ROUNDING_MODE, base: int = DEFAULT_BASE) -> "Rounding":
        return cls(mode, base, PrecisionKind.PRESERVE)

    @classmethod
    def relative(cls, precision: int, mode: RoundingMode = DEFAULT_ROUNDING_MODE,
                 base: int = DEFAULT_BASE) -> "Rounding":
        """Fixed number of significant digits; a precision of 0 means SIMPLIFY."""
        if precision == 0:
            return cls.simplify(mode, base)
        return cls(mode, base, PrecisionKind.RELATIVE, precision)

    @classmethod
    def absolute(cls, places: int, mode: RoundingMode = DEFAULT_ROUNDING_MODE,
                 base: int = DEFAULT_BASE) -> "Rounding":
        """Fixed number of digits after the point (negative rounds left of it)."""
        return cls(mode, base, PrecisionKind.ABSOLUTE, places)

    def with_mode(self, mode: RoundingMode) -> "Rounding":
        return replace(self, mode=mode)

    def with_base(self, base: int) -> "Rounding":
        return replace(self, base=base)

    def with_precision(self, precision: int) -> "Rounding":
        return Rounding.relative(precision, self.mode, self.base)

    def with_places(self, places: int) -> "Rounding":
        return Rounding.absolute(places, self.mode, self.base)

    # ------------- predicates -------------

    @property
    def is_free(self) -> bool:
        return self.kind.is_free

    @property
    def is_fixed(self) -> bool:
        return not self.kind.is_free

    @property
    def is_relative(self) -> bool:
        return self.kind is PrecisionKind.RELATIVE

    @property
    def is_absolute(self) -> bool:
        return self.kind is PrecisionKind.ABSOLUTE

    @property
    def is_simplifying(self) -> bool:
        return self.kind is PrecisionKind.SIMPLIFY

    @property
    def is_preserving(self) -> bool:
        return self.kind is PrecisionKind.PRESERVE

    @property
    def precision(self) -> Optional[int]:
        return self.value if self.is_relative else None

    @property
    def places(self) -> Optional[int]:
        return self.value if self.is_absolute else None

    # ------------- precision of a given numeral -------------

    def precision_for(self, numeral: Numeral) -> int:
        """Number of significant digits this policy keeps for `numeral`.

        0 stands for "unbounded" (free policy over an exact or repeating numeral).
        """
        if self.is_free:
            return 0 if numeral.is_exact else self._num_digits(numeral)
        if self.is_absolute:
            return self.value + self._num_integral_digits(numeral)
        return self.value

    def places_for(self, numeral: Numeral) -> int:
        """Number of fractional digits this policy keeps for `numeral`."""
        if numeral.is_exact:
            return self.places or 0
        if self.is_free:
            return self._num_digits(numeral) - self._num_integral_digits(numeral)
        if self.is_absolute:
            return self.value
        return self.value - self._num_integral_digits(numeral)

    def _in_base(self, numeral: Numeral) -> Numeral:
        return numeral if numeral.base == self.base else numeral.to_base(self.base)

    def _num_integral_digits(self, numeral: Numeral) -> int:
        if numeral.is_zero():
            return ZERO_DIGITS
        return self._in_base(numeral).point

    def _num_digits(self, numeral: Numeral) -> int:
        if numeral.is_zero():
            return ZERO_DIGITS
        numeral = self._in_base(numeral)
        return 0 if numeral.is_repeating else len(numeral.digits)

    # ------------- rounding -------------

    def _check_base(self, numeral: Numeral) -> None:
        if numeral.base != self.base:
            raise BaseMismatch(numeral.base, self.base)

    def round(self, numeral: Numeral, round_up: Optional[RoundUp] = None) -> Numeral:
        """Round a numeral to this policy.

        If the numeral has already been truncated, `round_up` must describe the
        digits that were discarded:
        - None if all discarded digits were 0 (the truncated value is exact);
        - LO if something nonzero was discarded but less than half a unit;
        - TIE if exactly half a unit was discarded;
        - HI if more than half a unit was discarded.
        """
        truncated, round_up = self.truncate(numeral, round_up)
        return self.adjust(truncated, round_up)

    def truncate(self, numeral: Numeral,
                 round_up: Optional[RoundUp] = None) -> Tuple[Numeral, Optional[RoundUp]]:
        """Keep the precision window of `numeral` and classify what is discarded."""
        self._check_base(numeral)
        if self.is_free or numeral.is_special:
            return numeral, round_up
        n = self.precision_for(numeral)
        if numeral.approximate and n >= len(numeral.digits):
            return numeral, round_up

        seq = numeral.sequence
        kept = seq.window(0, max(n, 0))
        next_digit = seq.value_at(n)
        rest_nonzero = seq.any_nonzero_from(n + 1)

        base = numeral.base
        if base % 2 == 0:
            tie_digit = base // 2
            max_lo = tie_digit - 1
        else:
            tie_digit = None
            max_lo = base // 2

        if next_digit == 0:
            if round_up is not None or rest_nonzero:
                round_up = RoundUp.LO
        elif next_digit <= max_lo:
            round_up = RoundUp.LO
        elif next_digit == tie_digit:
            if round_up is not None or rest_nonzero:
                round_up = RoundUp.HI
            else:
                round_up = RoundUp.TIE
        else:
            round_up = RoundUp.HI

        _dbg(f"truncate: n={n}, kept={kept}, next={next_digit}, rest_nonzero={rest_nonzero} -> {round_up}")
        truncated = Numeral.from_digits(kept, sign=numeral.sign, point=numeral.point + max(-n, 0),
                                        base=base, approximate=True)
        return truncated, round_up

    def adjust(self, numeral: Numeral, round_up: Optional[RoundUp] = None) -> Numeral:
        """Apply the carry implied by `round_up` to a truncated numeral."""
        self._check_base(numeral)
        if numeral.is_special:
            return numeral
        if numeral.is_exact:
            return Numeral.from_digits(numeral.digits, sign=numeral.sign, point=numeral.point,
                                       base=numeral.base, repeat=numeral.repeat)
        if self.is_simplifying:
            # no carry: the digits are taken as they stand
            return numeral.as_exact()
        if numeral.is_repeating:
            # only free policies leave a cycle in place; there is nothing to carry into
            return numeral

        digits, point = numeral.digits, numeral.point
        last_digit = digits[-1] if digits else 0
        if rounds_away(self.mode, round_up, last_digit, numeral.is_negative, numeral.base):
            digits, carried = increment_digits(digits, numeral.base)
            if carried:
                point += 1
        _dbg(f"adjust: mode={self.mode.name}, round_up={round_up}, digits={digits}, point={point}")
        return Numeral.from_digits(digits, sign=numeral.sign, point=point, base=numeral.base,
                                   approximate=True)


__all__ = [
    "Rounding",
]
