"""Tests for amount parsing."""

from decimal import Decimal

import pytest

from ledgerview.utils.amount_parser import parse_amount


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("123.45", Decimal("123.45")),
        ("123,45", Decimal("123.45")),
        ("1 234,56", Decimal("1234.56")),
        ("1 234,5", Decimal("1234.5")),
        ("1,234.56", Decimal("1234.56")),
        ("1,234", Decimal("1234")),
        ("350 ₽", Decimal("350")),
        ("350 руб.", Decimal("350")),
        ("$99.99", Decimal("99.99")),
        ("-123.45", Decimal("-123.45")),
        ("(123.45)", Decimal("-123.45")),
    ],
)
def test_parse_amount_formats(raw, expected):
    assert parse_amount(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", "abc", "12..5", "NaN", "Infinity"])
def test_parse_amount_invalid(raw):
    with pytest.raises(ValueError):
        parse_amount(raw)
