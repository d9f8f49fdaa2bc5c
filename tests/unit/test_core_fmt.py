import pytest

from numerals.core.fmt import fmt_numeral
from numerals.core.numeral import Numeral


def _num(digits, point=None, **kw) -> Numeral:
    return Numeral.from_digits(digits, point=point, **kw)


# -----------------------------
# fmt_numeral
# -----------------------------

@pytest.mark.parametrize(
    "numeral,text",
    [
        (_num([1, 2, 3], point=2), "12.3"),
        (_num([1, 2], point=4), "1200"),
        (_num([5], point=-2), "0.005"),
        (_num([1, 2, 3], point=2, sign=-1), "-12.3"),
        (_num([1, 2, 0], point=1, approximate=True), "1.20~"),
        (Numeral.zero(), "0"),
        (Numeral.zero(approximate=True, scale=-2), "0.00~"),
        (Numeral.from_quotient(1, 3), "0.<3>"),
        (Numeral.from_quotient(1, 6), "0.1<6>"),
        (Numeral.from_quotient(1, 11), "0.0<90>"),
        (Numeral.from_quotient(100, 3), "33.<3>"),
        (Numeral.from_quotient(-22, 7), "-3.<142857>"),
    ],
)
def test_fmt_numeral_positional(numeral, text):
    print(f"[fmt_numeral] -> {fmt_numeral(numeral)!r}, expect {text!r}")
    assert fmt_numeral(numeral) == text


def test_fmt_numeral_specials():
    assert fmt_numeral(Numeral.nan()) == "nan"
    assert fmt_numeral(Numeral.infinity()) == "+inf"
    assert fmt_numeral(Numeral.infinity(-1)) == "-inf"


def test_fmt_numeral_large_bases():
    assert fmt_numeral(_num([15, 15], base=16)) == "ff"
    assert fmt_numeral(_num([35, 1], point=1, base=36)) == "z.1"
    assert fmt_numeral(_num([41, 7], base=60)) == "[41][7]"
