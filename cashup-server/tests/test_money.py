from decimal import Decimal

import pytest

from cashup.core.money import ZERO, parse_amount, round_local, round_reference


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1,250.50", Decimal("1250.50")),
        ("  42 ", Decimal("42")),
        (12, Decimal("12")),
        (0.1, Decimal("0.1")),
        (Decimal("7.25"), Decimal("7.25")),
        ("-3", Decimal("-3")),
    ],
)
def test_parse_amount_accepts_operator_input(raw, expected):
    assert parse_amount(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "   ", "abc", "12abc", "NaN", "inf", float("nan"), True])
def test_parse_amount_turns_garbage_into_zero(raw):
    assert parse_amount(raw) == ZERO


def test_parse_amount_uses_given_default():
    assert parse_amount("n/a", default=Decimal("36000")) == Decimal("36000")


def test_rounding_is_half_up_per_currency():
    assert round_reference(Decimal("0.005")) == Decimal("0.01")
    assert round_reference(Decimal("-12.345")) == Decimal("-12.35")
    assert str(round_reference(Decimal("20"))) == "20.00"
    assert round_local(Decimal("1000.5")) == Decimal("1001")
    assert round_local(Decimal("1000.4")) == Decimal("1000")


def test_rounding_survives_values_beyond_default_precision():
    assert round_reference(Decimal("1e30")) == Decimal("1e30")
    assert str(round_reference(Decimal("123456789012345678901234567890.125"))) == "123456789012345678901234567890.13"
    assert round_local(Decimal("1e40")) == Decimal("1e40")
