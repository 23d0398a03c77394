"""Tests for amount parsing."""

from decimal import Decimal

import pytest

from ledgerstat.utils.amount_parser import parse_amount


@pytest.mark.parametrize(
    "value,expected",
    [
        ("123.45", Decimal("123.45")),
        ("$1,234.56", Decimal("1234.56")),
        ("-50", Decimal("-50")),
        ("(700.00)", Decimal("-700.00")),
        (-10, Decimal("-10")),
        (0.1, Decimal("0.1")),
        (Decimal("5.00"), Decimal("5.00")),
    ],
)
def test_parse_amount(value, expected):
    assert parse_amount(value) == expected


@pytest.mark.parametrize("value", ["", "   ", "abc", "NaN", float("inf"), True])
def test_parse_amount_invalid(value):
    with pytest.raises(ValueError):
        parse_amount(value)


@pytest.mark.parametrize("value", [None, [1], {"value": 1}, (1,)])
def test_parse_amount_rejects_non_text(value):
    with pytest.raises(ValueError, match="Could not parse amount"):
        parse_amount(value)
