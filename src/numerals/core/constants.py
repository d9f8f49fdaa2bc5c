"""
Numerals Core Constants
=======================

Defaults and limits shared by the numeral model, the rounding engine and the
conversion strategies. Run-time configuration is always carried by value
objects (`Rounding`, numeric contexts); nothing here is mutated at run time.
"""

# NOTE: DEFAULT_ROUNDING_MODE lives in `datatypes.py` next to the enum it uses.

# ---------------------------------------------------------------------------
# Numeral defaults
# ---------------------------------------------------------------------------

#: Base used when a numeral or rounding policy does not name one.
DEFAULT_BASE: int = 10

#: Smallest admissible base.
MIN_BASE: int = 2

#: Number of integral digits attributed to zero.
ZERO_DIGITS: int = 0

#: Tags for special (non-finite) numerals.
SPECIAL_NAN: str = "nan"
SPECIAL_INF: str = "inf"
SPECIALS = (SPECIAL_NAN, SPECIAL_INF)

#: Cap on the digits materialised by an exact expansion of a floating value.
#: Binary fractions have astronomically long periods in bases coprime to 2.
MAX_EXACT_DIGITS: int = 10_000


# ---------------------------------------------------------------------------
# IEEE 754 binary64 (Python float)
# ---------------------------------------------------------------------------

#: Significant bits of a binary64 coefficient (including the hidden bit).
BINARY64_PRECISION: int = 53

#: Exponent of the least significant bit of the smallest subnormal (2**-1074).
BINARY64_ETINY: int = -1074

#: Largest adjusted exponent: every finite float is below 2**(BINARY64_EMAX + 1).
BINARY64_EMAX: int = 1023


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------

__all__ = [
    "DEFAULT_BASE",
    "MIN_BASE",
    "ZERO_DIGITS",
    "SPECIAL_NAN",
    "SPECIAL_INF",
    "SPECIALS",
    "MAX_EXACT_DIGITS",
    "BINARY64_PRECISION",
    "BINARY64_ETINY",
    "BINARY64_EMAX",
]
