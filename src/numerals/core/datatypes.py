"""
Core enumerations shared by the numeral model, rounding and conversions.

Notes:
- `RoundingMode` values are the `decimal` module's rounding constants, so a
  mode can be handed to a `decimal.Context` unchanged and read back from one.
- `RoundUp` summarises the digits discarded by a truncation; `None` (no
  member) stands for an exact truncation.
"""

from __future__ import annotations

import decimal
from enum import Enum


# ---------------------------------------------------------------------------
# Rounding modes
# ---------------------------------------------------------------------------

class RoundingMode(str, Enum):
    """Rule used to limit the precision of a numeral."""

    HALF_EVEN = decimal.ROUND_HALF_EVEN
    HALF_UP = decimal.ROUND_HALF_UP
    HALF_DOWN = decimal.ROUND_HALF_DOWN
    CEILING = decimal.ROUND_CEILING
    FLOOR = decimal.ROUND_FLOOR
    DOWN = decimal.ROUND_DOWN   # truncate toward zero
    UP = decimal.ROUND_UP       # away from zero
    UP05 = decimal.ROUND_05UP

    def magnitude_mode(self, negative: bool) -> "RoundingMode":
        """Return the equivalent mode acting on the absolute value.

        Ceiling and floor depend on the sign; every other mode is already
        symmetric around zero.
        """
        if self is RoundingMode.CEILING:
            return RoundingMode.DOWN if negative else RoundingMode.UP
        if self is RoundingMode.FLOOR:
            return RoundingMode.UP if negative else RoundingMode.DOWN
        return self


DEFAULT_ROUNDING_MODE = RoundingMode.HALF_EVEN


# ---------------------------------------------------------------------------
# Precision kinds
# ---------------------------------------------------------------------------

class PrecisionKind(str, Enum):
    """How a rounding policy determines the precision of its result."""

    SIMPLIFY = "simplify"   # free: shortest exact digits that restore the value
    PRESERVE = "preserve"   # free: keep every original digit, stay approximate
    RELATIVE = "relative"   # fixed: number of significant digits
    ABSOLUTE = "absolute"   # fixed: number of fractional places

    @property
    def is_free(self) -> bool:
        return self in (PrecisionKind.SIMPLIFY, PrecisionKind.PRESERVE)


# ---------------------------------------------------------------------------
# Truncation summary
# ---------------------------------------------------------------------------

class RoundUp(str, Enum):
    """Classification of the digits discarded by a truncation.

    - LO: something nonzero was discarded, below half a unit of the last kept digit.
    - TIE: exactly half a unit was discarded.
    - HI: more than half a unit was discarded.
    """

    LO = "lo"
    TIE = "tie"
    HI = "hi"


# ---------------------------------------------------------------------------
# Conversion modes
# ---------------------------------------------------------------------------

class WriteMode(str, Enum):
    """Interpretation of a number being converted to a numeral."""

    EXACT = "exact"
    APPROXIMATE = "approximate"


class ReadMode(str, Enum):
    """Interpretation of a numeral being converted to a number.

    - FIXED: correctly rounded to the precision of the target context.
    - FREE: precision taken from the numeral itself.
    - SHORT: the value with fewest native digits within the numeral's precision.
    """

    FIXED = "fixed"
    FREE = "free"
    SHORT = "short"


__all__ = [
    "RoundingMode",
    "DEFAULT_ROUNDING_MODE",
    "PrecisionKind",
    "RoundUp",
    "WriteMode",
    "ReadMode",
]
