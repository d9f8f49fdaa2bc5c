"""
Core exception types for numerals.core.

These are dependency-free and may be imported by all core modules.
"""

__all__ = [
    "InvalidNumeral",
    "BaseMismatch",
    "InvalidConversion",
    "InvalidRounding",
]


class InvalidNumeral(Exception):
    """Raised when digits, base, point, repeat index or special tag are malformed."""
    pass


class BaseMismatch(Exception):
    """Raised when a rounding policy is applied to a numeral of another base.

    Attributes
    ----------
    numeral_base : int
        Base of the numeral that was passed in.
    rounding_base : int
        Base the rounding policy was built for.
    """

    def __init__(self, numeral_base, rounding_base):
        super().__init__(
            f"Invalid Numeral (base {numeral_base}) for a base {rounding_base} Rounding"
        )
        self.numeral_base = numeral_base
        self.rounding_base = rounding_base


class InvalidConversion(Exception):
    """Raised when a value is not representable in the target numeric kind."""
    pass


class InvalidRounding(Exception):
    """Raised when a rounding policy is built from an invalid configuration."""
    pass
