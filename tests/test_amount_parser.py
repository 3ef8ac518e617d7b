"""Tests for amount parsing."""

from decimal import Decimal

import pytest

from gaurakshak.utils.amount_parser import parse_amount


def test_parse_plain_amount():
    assert parse_amount("123.45") == Decimal("123.45")


def test_parse_rupee_prefixes():
    assert parse_amount("₹500") == Decimal("500")
    assert parse_amount("Rs. 1,234.56") == Decimal("1234.56")
    assert parse_amount("INR 75") == Decimal("75")


def test_parse_indian_grouping():
    assert parse_amount("1,00,000") == Decimal("100000")


@pytest.mark.parametrize("value", ["0", "-5", "abc", "", "   ", "NaN", "Infinity"])
def test_parse_rejects_invalid_or_non_positive(value):
    with pytest.raises(ValueError):
        parse_amount(value)
