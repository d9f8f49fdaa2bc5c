"""
numerals
========

Exact and approximate conversion of numbers (int, Fraction, float, Decimal)
to and from digit-level numerals in any base >= 2, under explicit rounding
and precision policies.

Approximate values (floats, Decimals) stand for every real that rounds to
them; writing one picks digits inside that interval, and reading a numeral
back restores the same value. Exact values never lose precision silently.
"""

from .core import (
    Numeral,
    Rounding,
    RoundingMode,
    DEFAULT_ROUNDING_MODE,
    PrecisionKind,
    RoundUp,
    WriteMode,
    ReadMode,
    fmt_numeral,
    InvalidNumeral,
    BaseMismatch,
    InvalidConversion,
    InvalidRounding,
)
from .contexts import NumericContext, FloatContext, DecimalContext
from .conversions import (
    Conversion,
    IntegerConversion,
    RationalConversion,
    FloatConversion,
    conversion_for,
    order_of_magnitude,
    number_of_digits,
)

__all__ = [
    # model
    "Numeral",
    "Rounding",
    "RoundingMode",
    "DEFAULT_ROUNDING_MODE",
    "PrecisionKind",
    "RoundUp",
    "WriteMode",
    "ReadMode",
    "fmt_numeral",
    # contexts
    "NumericContext",
    "FloatContext",
    "DecimalContext",
    # conversions
    "Conversion",
    "IntegerConversion",
    "RationalConversion",
    "FloatConversion",
    "conversion_for",
    "order_of_magnitude",
    "number_of_digits",
    # exceptions
    "InvalidNumeral",
    "BaseMismatch",
    "InvalidConversion",
    "InvalidRounding",
]
