"""Tests for amount and date parsing."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from budgetbook.utils.amount_parser import parse_amount
from budgetbook.utils.date_parser import parse_date


@pytest.mark.parametrize(
    "value,expected",
    [
        ("123.45", Decimal("123.45")),
        ("$123.45", Decimal("123.45")),
        ("1,234.56", Decimal("1234.56")),
        (" 7 ", Decimal("7")),
    ],
)
def test_parse_amount(value, expected):
    assert parse_amount(value) == expected


@pytest.mark.parametrize(
    "value,expected",
    [
        ("12.345", Decimal("12.35")),
        ("0.005", Decimal("0.01")),
        ("1,000.999", Decimal("1001.00")),
    ],
)
def test_parse_amount_rounds_to_cents(value, expected):
    amount = parse_amount(value)
    assert amount == expected
    assert amount.as_tuple().exponent == -2


@pytest.mark.parametrize("value", ["", "  ", "abc", "0", "-5", "0.00", "NaN", "0.004", "-0.001"])
def test_parse_amount_rejects_invalid_or_non_positive(value):
    with pytest.raises(ValueError):
        parse_amount(value)


def test_parse_date_absolute():
    assert parse_date("2024-01-15") == date(2024, 1, 15)
    assert parse_date("January 15, 2024") == date(2024, 1, 15)


def test_parse_date_relative():
    today = date.today()
    assert parse_date("today") == today
    assert parse_date("Yesterday") == today - timedelta(days=1)


@pytest.mark.parametrize("value", ["", "not a date"])
def test_parse_date_invalid(value):
    with pytest.raises(ValueError):
        parse_date(value)
