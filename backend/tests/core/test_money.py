"""Tests for money helpers — cent rounding and one-cent tolerance."""

from decimal import Decimal

import pytest

from faktur.core.errors import ValidationError
from faktur.core.money import (
    as_decimal, money_add, money_equals, money_gte, money_lt,
    money_multiply, money_subtract, round_money,
)


@pytest.mark.parametrize("raw, expected", [
    ("25.005", "25.01"),
    (25.005, "25.01"),
    ("0.125", "0.13"),
    ("-0.125", "-0.13"),
    ("10", "10.00"),
    (Decimal("1.004"), "1.00"),
])
def test_round_money_half_away_from_zero(raw, expected):
    assert round_money(raw) == Decimal(expected)


def test_float_enters_through_shortest_repr():
    # binary 1.005 is 1.00499999...; str() keeps the decimal the user typed
    assert round_money(1.005) == Decimal("1.01")


@pytest.mark.parametrize("bad", ["abc", None, True, float("nan"), float("inf"), "Infinity"])
def test_as_decimal_rejects_non_numbers(bad):
    with pytest.raises(ValidationError) as exc_info:
        as_decimal(bad, "rate")
    assert exc_info.value.field == "rate"


def test_money_equals_within_one_cent():
    assert money_equals("10.00", "10.004")
    assert not money_equals("10.00", "10.01")


def test_money_gte_tolerates_sub_cent_shortfall():
    assert money_gte("99.995", "100.00")
    assert money_gte("100.01", "100.00")
    assert not money_gte("99.98", "100.00")


def test_money_lt_needs_a_full_cent():
    assert money_lt("99.99", "100.00")
    assert not money_lt("100.00", "100.00")
    assert not money_lt("100.001", "100.00")


def test_arithmetic_helpers_round_each_step():
    assert money_add("0.1", "0.2") == Decimal("0.30")
    assert money_subtract("10", "0.005") == Decimal("10.00")
    assert money_multiply("3", "33.333") == Decimal("100.00")
