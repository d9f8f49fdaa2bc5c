from __future__ import annotations

import decimal

import pytest

from numerals import (
    DecimalContext,
    FloatContext,
    FloatConversion,
)


# -----------------------------
# Pytest fixtures
# -----------------------------

@pytest.fixture()
def float_conv() -> FloatConversion:
    return FloatConversion(FloatContext())


@pytest.fixture()
def decimal_ctx() -> DecimalContext:
    return DecimalContext(decimal.Context(prec=28, rounding=decimal.ROUND_HALF_EVEN))


@pytest.fixture()
def decimal_conv(decimal_ctx) -> FloatConversion:
    return FloatConversion(decimal_ctx)
