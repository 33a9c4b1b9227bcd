"""Tests for amount parsing."""

import pytest

from tallybook.utils.amount_parser import parse_amount


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("123.45", 123.45),
        ("$123.45", 123.45),
        ("1,234.56", 1234.56),
        ("€ 12", 12.0),
        ("  7 ", 7.0),
        ("£1,000", 1000.0),
    ],
)
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", "abc", "12.3.4", "0", "-5", "NaN", "Infinity"])
def test_parse_amount_rejects(raw):
    with pytest.raises(ValueError):
        parse_amount(raw)
