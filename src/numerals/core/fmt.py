"""
Debug rendering of numerals (non-core; logs and tests only).

This is not a notation layer: no exponents, grouping or locale. It renders
the digit model as-is so that traces and assertion messages stay readable.
"""

from __future__ import annotations

from typing import Iterable

from .constants import SPECIAL_NAN
from .numeral import Numeral

_DIGIT_CHARS = "0123456789abcdefghijklmnopqrstuvwxyz"


def _digit_text(digits: Iterable[int], base: int) -> str:
    if base <= len(_DIGIT_CHARS):
        return "".join(_DIGIT_CHARS[d] for d in digits)
    return "".join(f"[{d}]" for d in digits)


def fmt_numeral(numeral: Numeral) -> str:
    """Render a numeral in positional notation.

    Examples (base 10):
      from_digits((1, 2, 3), point=2)                 -> '12.3'
      from_quotient(1, 3)                             -> '0.<3>'
      from_quotient(1, 6)                             -> '0.1<6>'
      from_digits((1, 2, 0), point=1, approximate=True) -> '1.20~'
      from_digits((5,), point=-2)                     -> '0.005'
      infinity(-1)                                    -> '-inf'

    The repeating cycle is shown in angle brackets, starting no earlier than
    the radix point. Digits above 9 use letters up to base 36; larger bases
    use bracketed decimal values, e.g. '[41][7]'.
    """
    if numeral.is_special:
        if numeral.special == SPECIAL_NAN:
            return "nan"
        return ("-" if numeral.is_negative else "+") + "inf"

    seq = numeral.sequence
    base = numeral.base
    point = numeral.point
    n = len(seq)

    int_part = _digit_text(seq.window(0, point), base).lstrip("0") or "0"
    lead = [0] * max(-point, 0)
    if numeral.repeat is None:
        frac = lead + list(seq.window(max(point, 0), n))
        text = int_part + ("." + _digit_text(frac, base) if frac else "")
    else:
        period = n - numeral.repeat
        start = max(numeral.repeat, point)
        fixed = lead + list(seq.window(max(point, 0), start))
        cycle = seq.window(start, start + period)
        text = f"{int_part}.{_digit_text(fixed, base)}<{_digit_text(cycle, base)}>"

    if numeral.is_negative:
        text = "-" + text
    if numeral.approximate:
        text += "~"
    return text


__all__ = [
    "fmt_numeral",
]
