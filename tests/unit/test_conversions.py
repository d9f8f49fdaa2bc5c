import decimal
import math
import sys
import pytest
from decimal import Decimal
from fractions import Fraction

from numerals import (
    DecimalContext,
    FloatContext,
    FloatConversion,
    IntegerConversion,
    InvalidConversion,
    InvalidNumeral,
    Numeral,
    RationalConversion,
    Rounding,
    RoundingMode,
    WriteMode,
    conversion_for,
    fmt_numeral,
    number_of_digits,
    order_of_magnitude,
)


def _dec(n: Numeral) -> Decimal:
    sign, coefficient, scale = n.split()
    return Decimal(sign * coefficient).scaleb(scale, decimal.Context(prec=200))


FLOATS = [0.1, 0.3, 1 / 3, -2.5, 123.456, 1e23, 5e-324, 2.0 ** -1022, sys.float_info.max, 1.0, 7e-10]


# -----------------------------
# Dispatch & magnitudes
# -----------------------------

def test_conversion_for_dispatch():
    assert isinstance(conversion_for(3), IntegerConversion)
    assert isinstance(conversion_for(Fraction(1, 3)), RationalConversion)
    f = conversion_for(1.0)
    assert isinstance(f, FloatConversion) and f.context == FloatContext()
    d = conversion_for(Decimal("1.5"), decimal.Context(prec=5))
    assert isinstance(d.context, DecimalContext) and d.context.precision == 5
    ctx = DecimalContext(decimal.Context(prec=7))
    assert conversion_for(Decimal("1"), ctx).context is ctx
    assert not conversion_for(1.0).is_exact and conversion_for(1).is_exact


@pytest.mark.parametrize("value", [True, "1", None, 1 + 2j])
def test_conversion_for_rejects_other_kinds(value):
    with pytest.raises(InvalidConversion):
        conversion_for(value)


@pytest.mark.parametrize(
    "value,base,k",
    [
        (1000, 10, 4),
        (999, 10, 3),
        (-1000, 10, 4),
        (0, 10, 0),
        (8, 2, 4),
        (Fraction(1, 1000), 10, -2),
        (Fraction(999, 1000), 10, 0),
        (1000.0, 10, 4),
        (999.0, 10, 3),
        (0.5, 2, 0),
        (0.1, 10, 0),
        (1e23, 10, 23),
        (0.0, 10, 0),
        (Decimal("1000"), 10, 4),
        (Decimal("1E+3"), 10, 4),
        (Decimal("0.001"), 10, -2),
        (Decimal("8"), 2, 4),
    ],
)
def test_order_of_magnitude(value, base, k):
    print(f"[order_of_magnitude] {value!r} base {base} -> {order_of_magnitude(value, base)}")
    assert order_of_magnitude(value, base) == k


@pytest.mark.parametrize(
    "value,base,n",
    [
        (1200, 10, 2),
        (0, 10, 0),
        (255, 16, 2),
        (Fraction(1, 3), 10, 0),
        (Fraction(5, 4), 10, 3),
        (Fraction(1, 8), 10, 3),
        (Fraction(1, 3), 3, 1),
        (1.0, 2, 53),
        (1.0, 10, 17),
        (Decimal("1.250"), 10, 4),
    ],
)
def test_number_of_digits(value, base, n):
    assert number_of_digits(value, base) == n


def test_float_magnitudes_reject_specials():
    with pytest.raises(InvalidConversion):
        order_of_magnitude(math.inf)
    with pytest.raises(InvalidConversion):
        number_of_digits(math.nan)


# -----------------------------
# Integers & rationals
# -----------------------------

def test_integer_write_and_read():
    conv = IntegerConversion()
    n = conv.write(-45)
    assert (n.sign, n.digits, n.point, n.approximate) == (-1, (4, 5), 2, False)
    assert conv.read(n) == -45
    hexa = conv.number_to_numeral(255, WriteMode.EXACT, Rounding(base=16))
    assert hexa.digits == (15, 15)
    r = conv.write(1234, rounding=Rounding.relative(2))
    assert (r.digits, r.point, r.approximate) == ((1, 2), 4, True)
    assert conv.read(r) == 1200


def test_integer_read_rejects_non_integers():
    conv = IntegerConversion()
    with pytest.raises(InvalidConversion):
        conv.read(Numeral.from_quotient(1, 3))
    with pytest.raises(InvalidConversion):
        conv.read(Numeral.from_digits([5], point=0))
    with pytest.raises(InvalidConversion):
        conv.read(Numeral.infinity())
    with pytest.raises(InvalidConversion):
        conv.write(True)


def test_rational_write_and_read():
    conv = RationalConversion()
    third = conv.write(Fraction(1, 3))
    assert (third.digits, third.repeat) == ((3,), 0)
    assert conv.read(third) == Fraction(1, 3)
    n = conv.write(Fraction(2, 3), rounding=Rounding.relative(3))
    assert (n.digits, n.point, n.approximate) == ((6, 6, 7), 0, True)
    m = conv.write(Fraction(1, 3), rounding=Rounding.absolute(2))
    assert (m.digits, m.point) == ((3, 3), 0)
    b3 = conv.write(Fraction(1, 3), rounding=Rounding(base=3))
    assert (b3.digits, b3.point, b3.repeat) == ((1,), 0, None)
    with pytest.raises(InvalidConversion):
        conv.read(Numeral.nan())


@pytest.mark.parametrize("q", [Fraction(22, 7), Fraction(-5, 4), Fraction(1, 12), Fraction(0), Fraction(10 ** 30, 7)])
@pytest.mark.parametrize("base", [10, 2, 7])
def test_rational_round_trip(q, base):
    conv = RationalConversion()
    assert conv.read(conv.write(q, rounding=Rounding(base=base))) == q


@pytest.mark.parametrize("q", [Fraction(1, 2), Fraction(3, 2), Fraction(-7, 2), Fraction(5, 18), Fraction(22, 7)])
@pytest.mark.parametrize("mode", [RoundingMode.HALF_EVEN, RoundingMode.HALF_UP, RoundingMode.UP05])
def test_odd_base_exact_write_matches_numeral_rounding(q, mode):
    rounding = Rounding.relative(1, mode=mode, base=3)
    direct = RationalConversion().write(q, rounding=rounding)
    expanded = rounding.round(Numeral.from_quotient(q.numerator, q.denominator, base=3))
    print(f"[base 3] {q} {mode.name}: {fmt_numeral(direct)} vs {fmt_numeral(expanded)}")
    assert direct == expanded
    if q == Fraction(1, 2):
        # 0.111... in base 3 is not a tie
        assert direct.digits == (1,)


# -----------------------------
# Floats: approximate writes
# -----------------------------

@pytest.mark.parametrize("x", FLOATS)
def test_shortest_write_matches_repr(float_conv, x):
    n = float_conv.write(x)
    print(f"[write] {x!r} -> {fmt_numeral(n)}")
    assert n.is_exact
    assert _dec(n) == Decimal(repr(x))


@pytest.mark.parametrize("x", FLOATS)
def test_write_read_round_trip(float_conv, x):
    assert float_conv.read(float_conv.write(x)) == x
    preserved = float_conv.write(x, rounding=Rounding.preserve())
    assert preserved.is_approximate
    assert float_conv.read(preserved) == x
    assert float_conv.read(preserved, approximate_simplified=True) == x


def test_fixed_write_pads_insignificant_digits(float_conv):
    approx = float_conv.write(0.1, rounding=Rounding.relative(20))
    exact = float_conv.write(0.1, exact_input=True, rounding=Rounding.relative(20))
    print("[0.1 @ 20 digits] approximate:", fmt_numeral(approx), "| exact:", fmt_numeral(exact))
    assert fmt_numeral(approx) == "0.10000000000000000000~"
    assert fmt_numeral(exact) == "0.10000000000000000555~"
    assert float_conv.read(approx) == 0.1


def test_fixed_write_rounds_exact_value_when_shortest_does_not_fit(float_conv):
    # 0.15 is stored as 0.1499999999999999944...
    n = float_conv.write(0.15, rounding=Rounding.relative(1))
    assert (n.digits, n.point) == ((1,), 0)
    assert fmt_numeral(float_conv.write(2.5, rounding=Rounding.absolute(3))) == "2.500~"
    hundreds = float_conv.write(1234.5, rounding=Rounding.absolute(-2))
    assert (hundreds.digits, hundreds.point) == ((1, 2), 4)
    assert float_conv.write(1200.0, rounding=Rounding.absolute(-2)) == hundreds


def test_preserve_write(float_conv):
    binary = float_conv.write(0.1, rounding=Rounding.preserve(base=2))
    assert binary.base == 2 and len(binary.digits) == 53 and binary.is_approximate
    assert fmt_numeral(float_conv.write(0.1, rounding=Rounding.preserve())) == "0.10000000000000001~"


def test_zero_and_special_writes(float_conv):
    z = float_conv.write(0.0)
    assert z.is_zero() and z.is_exact
    assert float_conv.write(-0.0).is_negative
    assert fmt_numeral(float_conv.write(0.0, rounding=Rounding.relative(3))) == "0.000~"
    assert float_conv.write(math.nan).is_nan
    inf = float_conv.write(-math.inf, rounding=Rounding(base=2))
    assert inf.is_infinite and inf.is_negative and inf.base == 2


def test_write_rejects_foreign_values(float_conv):
    with pytest.raises(InvalidConversion):
        float_conv.write(Decimal("1"))


# -----------------------------
# Floats: exact writes
# -----------------------------

def test_exact_writes(float_conv):
    half = float_conv.write(0.5, exact_input=True, rounding=Rounding(base=2))
    assert (half.base, half.digits, half.point, half.approximate) == (2, (1,), 0, False)
    tenth = float_conv.write(0.1, exact_input=True)
    assert tenth.to_fraction() == Fraction(0.1)
    assert len(tenth.digits) == 55
    b3 = float_conv.write(0.1, exact_input=True, rounding=Rounding.relative(5, base=3))
    assert b3.base == 3 and len(b3.digits) == 5 and b3.is_approximate


def test_exact_write_refuses_endless_expansions(float_conv):
    # 0.1 as a binary64 has a 2**53-digit period in base 3
    with pytest.raises(InvalidNumeral):
        float_conv.write(0.1, exact_input=True, rounding=Rounding(base=3))


# -----------------------------
# Floats: reads
# -----------------------------

def test_reads_with_input_rounding():
    down = FloatConversion(input_rounding=RoundingMode.DOWN)
    expected = FloatContext().round_fraction(Fraction(1, 3), mode=RoundingMode.DOWN)
    assert down.read(Numeral.from_quotient(1, 3)) == expected
    for x in (0.1, 1 / 3, 123.456):
        assert down.read(down.write(x)) == x


SWEEP = [0.1, -0.1, 1 / 3, -2.5, 123.456, -7312715117.751976, 1e23, 1024.0, -0.75,
         2.0 ** -1022, 5e-324, 7e-10, sys.float_info.max]


@pytest.mark.parametrize(
    "mode",
    [RoundingMode.DOWN, RoundingMode.UP, RoundingMode.CEILING, RoundingMode.FLOOR, RoundingMode.HALF_UP],
)
@pytest.mark.parametrize("base", [3, 10])
def test_round_trip_under_input_rounding(mode, base):
    conv = FloatConversion(input_rounding=mode)
    for x in SWEEP:
        for rounding in (Rounding.preserve(base=base), Rounding.relative(40, base=base)):
            n = conv.write(x, rounding=rounding)
            print(f"[{mode.name} base {base}] {x!r} -> {fmt_numeral(n)}")
            assert n.is_approximate
            assert conv.read(n) == x


def test_preserve_write_stays_inside_directed_envelope():
    x = -7312715117.751976
    down = FloatConversion(input_rounding=RoundingMode.DOWN)
    n = down.write(x, rounding=Rounding.preserve())
    assert n.is_negative and abs(n.to_fraction()) >= abs(Fraction(x))
    assert down.read(n) == x


def test_read_modes(float_conv):
    assert float_conv.read(Numeral.from_digits([1], point=0)) == 0.1
    assert float_conv.read(Numeral.from_quotient(1, 3, base=2)) == 1 / 3
    tenth = Numeral.from_digits([1], point=0, approximate=True)
    assert float_conv.read(tenth) == 0.1
    assert float_conv.read(tenth, approximate_simplified=True) == 0.125
    assert float_conv.read(tenth, exact_input=True) == 0.1
    assert math.isnan(float_conv.read(Numeral.nan()))
    assert float_conv.read(Numeral.infinity(-1)) == -math.inf


def test_same_base_reads(float_conv):
    bits = Numeral.from_digits([1] * 60, point=1, base=2)       # more bits than binary64 holds
    assert float_conv.read(bits) == float_conv.context.round_fraction(bits.to_fraction())
    tiny = Numeral.from_coefficient_scale(3, -1075, base=2)     # below the subnormal grid
    assert float_conv.read(tiny) == 2 * 5e-324
    assert float_conv.read(Numeral.from_coefficient_scale(1, 1024, base=2)) == math.inf


def test_same_base_fixed_read_rounds_subnormals_once(float_conv):
    ctx = decimal.Context(prec=3, Emin=-5, Emax=5)
    conv = FloatConversion(DecimalContext(ctx))
    n = Numeral.from_digits([1, 4, 9, 5, 1], point=-6)          # 1.4951E-7, below Emin
    got = conv.read(n)
    print("[subnormal] 1.4951E-7 ->", got)
    assert got == ctx.plus(Decimal("1.4951E-7"))
    assert str(got) == "1E-7"
    # 1.0111...1 (55 ones) units of 5e-324: rounding to 53 bits first would make it a tie
    bits = Numeral.from_digits([1, 0] + [1] * 55, point=-1073, base=2)
    assert float_conv.read(bits) == 5e-324


# -----------------------------
# Decimals
# -----------------------------

def test_decimal_writes(decimal_conv):
    assert fmt_numeral(decimal_conv.write(Decimal("1.250"))) == "1.25"
    preserved = decimal_conv.write(Decimal("1.250"), rounding=Rounding.preserve())
    assert fmt_numeral(preserved) == "1.250~"
    assert str(decimal_conv.read(preserved)) == "1.250"
    assert fmt_numeral(decimal_conv.write(Decimal("1.25"), rounding=Rounding.relative(5))) == "1.2500~"
    exact = decimal_conv.write(Decimal("1.250"), exact_input=True)
    assert exact.is_exact and exact.digits == (1, 2, 5)
    binary = decimal_conv.write(Decimal("0.5"), rounding=Rounding(base=2))
    assert (binary.base, binary.digits, binary.point) == (2, (1,), 0)


def test_decimal_reads(decimal_conv):
    assert str(decimal_conv.read(Numeral.from_digits([1], point=0))) == "0.1"
    third = decimal_conv.read(Numeral.from_quotient(1, 3, base=2))
    assert third == decimal.Context(prec=28).divide(Decimal(1), Decimal(3))
    for text in ("0.1", "-123.4500", "1E+30", "0.000001"):
        d = Decimal(text)
        assert decimal_conv.read(decimal_conv.write(d)) == d
        preserved = decimal_conv.write(d, rounding=Rounding.preserve())
        assert str(decimal_conv.read(preserved)) == str(d)
