"""
Numerals Core
=============

Unified exports for the digit-level numeral model and its rounding.
All arithmetic is exact: integers and `fractions.Fraction` only. Host numeric
kinds (float, Decimal) are handled outside the core, through contexts.

Core exposes Numeral (digits + point + optional repeating cycle + exactness)
and Rounding (mode + base + precision policy) as public API.
"""

# NOTE:
#   A numeral never changes base or exactness in place. Rounding produces new
#   numerals; approximate results keep their trailing zeros as precision.

# Defaults and limits
from .constants import (
    DEFAULT_BASE,
    MIN_BASE,
    ZERO_DIGITS,
    SPECIAL_NAN,
    SPECIAL_INF,
    MAX_EXACT_DIGITS,
    BINARY64_PRECISION,
    BINARY64_ETINY,
    BINARY64_EMAX,
)

# Enumerations
from .datatypes import (
    RoundingMode,
    DEFAULT_ROUNDING_MODE,
    PrecisionKind,
    RoundUp,
    WriteMode,
    ReadMode,
)

# Digit sequences and the round-away decision
from .digits import (
    DigitSequence,
    int_to_digits,
    digits_to_int,
    count_digits,
    rounds_away,
    increment_digits,
)

# Exact magnitudes and digit windows
from .magnitude import (
    base_power,
    fraction_magnitude,
    classify_remainder,
    fixed_digits,
    resolution_scale,
)

# Value type and policy
from .numeral import Numeral
from .rounding import Rounding

# Debug rendering (non-core)
from .fmt import fmt_numeral

# Core exceptions
from .exc import InvalidNumeral, BaseMismatch, InvalidConversion, InvalidRounding

__all__ = [
    # constants
    "DEFAULT_BASE",
    "MIN_BASE",
    "ZERO_DIGITS",
    "SPECIAL_NAN",
    "SPECIAL_INF",
    "MAX_EXACT_DIGITS",
    "BINARY64_PRECISION",
    "BINARY64_ETINY",
    "BINARY64_EMAX",
    # datatypes
    "RoundingMode",
    "DEFAULT_ROUNDING_MODE",
    "PrecisionKind",
    "RoundUp",
    "WriteMode",
    "ReadMode",
    # digits
    "DigitSequence",
    "int_to_digits",
    "digits_to_int",
    "count_digits",
    "rounds_away",
    "increment_digits",
    # magnitude
    "base_power",
    "fraction_magnitude",
    "classify_remainder",
    "fixed_digits",
    "resolution_scale",
    # numeral & rounding
    "Numeral",
    "Rounding",
    # fmt
    "fmt_numeral",
    # exceptions
    "InvalidNumeral",
    "BaseMismatch",
    "InvalidConversion",
    "InvalidRounding",
]
