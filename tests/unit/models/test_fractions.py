"""Tests for CurrencyAmount and Price."""

from decimal import Decimal
from fractions import Fraction

import pytest

from muffin.errors import InvalidPrice
from muffin.models import CurrencyAmount, Price, to_fraction
from muffin.models.fractions import format_fixed, format_significant
from tests.helpers import make_amount, make_token


class TestToFraction:
    def test_accepts_exact_types(self):
        assert to_fraction(1) == 1
        assert to_fraction("0.25") == Fraction(1, 4)
        assert to_fraction(Decimal("0.5")) == Fraction(1, 2)
        assert to_fraction(Fraction(2, 3)) == Fraction(2, 3)

    def test_rejects_float(self):
        with pytest.raises(TypeError):
            to_fraction(0.1)


class TestFormatting:
    """Tests for significant-digit and fixed-point formatting."""

    @pytest.mark.parametrize(
        "value,digits,expected",
        [
            (Fraction(1800), 5, "1800"),
            (Fraction(1, 1800), 5, "0.00055556"),
            (Fraction(12345678), 4, "12350000"),
            (Fraction(5, 2), 1, "3"),
            (Fraction(0), 5, "0"),
            (Fraction(-1, 3), 3, "-0.333"),
        ],
    )
    def test_format_significant(self, value, digits, expected):
        assert format_significant(value, digits) == expected

    @pytest.mark.parametrize(
        "value,places,expected",
        [
            (Fraction(1, 3), 4, "0.3333"),
            (Fraction(2, 3), 2, "0.67"),
            (Fraction(1499, 1000000) * 100, 4, "0.1499"),
            (Fraction(5, 2), 0, "3"),
            (Fraction(-5, 4), 1, "-1.3"),
            (Fraction(7), 2, "7.00"),
        ],
    )
    def test_format_fixed(self, value, places, expected):
        assert format_fixed(value, places) == expected


class TestCurrencyAmount:
    """Tests for CurrencyAmount."""

    def test_quotient_floors(self, token0):
        amount = CurrencyAmount.from_fractional_amount(token0, 7, 2)
        assert amount.quotient == 3

    def test_add_and_subtract(self, token0):
        a = make_amount(token0, 100)
        b = make_amount(token0, 30)
        assert a.add(b).quotient == 130
        assert a.subtract(b).quotient == 70

    def test_currency_mismatch(self, token0, token1):
        with pytest.raises(InvalidPrice):
            make_amount(token0, 1).add(make_amount(token1, 1))

    def test_multiply_and_divide(self, token0):
        a = make_amount(token0, 100)
        assert a.multiply(Fraction(1, 4)).quotient == 25
        assert a.divide(make_amount(token0, 400)) == Fraction(1, 4)

    def test_to_significant_applies_decimals(self):
        token = make_token(4, decimals=6)
        assert make_amount(token, 1_500_000).to_significant(4) == "1.5"
        assert make_amount(token, 1_500_000).to_fixed(2) == "1.50"


class TestPrice:
    """Tests for Price."""

    def test_from_amounts(self, token0, token1):
        price = Price.from_amounts(token0, token1, 4, 10)
        assert price.value == Fraction(5, 2)

    def test_invert(self, token0, token1):
        price = Price.from_amounts(token0, token1, 4, 10).invert()
        assert price.base == token1
        assert price.quote_currency == token0
        assert price.value == Fraction(2, 5)

    def test_multiply_chains_prices(self, token0, token1, token2):
        a = Price.from_amounts(token0, token1, 1, 2)
        b = Price.from_amounts(token1, token2, 1, 3)
        chained = a.multiply(b)
        assert chained.base == token0
        assert chained.quote_currency == token2
        assert chained.value == 6

    def test_multiply_mismatched_units(self, token0, token1, token2):
        with pytest.raises(InvalidPrice):
            Price.from_amounts(token0, token1, 1, 2).multiply(Price.from_amounts(token2, token0, 1, 1))

    def test_quote(self, token0, token1):
        price = Price.from_amounts(token0, token1, 1, 3)
        assert price.quote(make_amount(token0, 10)) == make_amount(token1, 30)

    def test_quote_wrong_currency(self, token0, token1):
        with pytest.raises(InvalidPrice):
            Price.from_amounts(token0, token1, 1, 3).quote(make_amount(token1, 10))

    def test_adjusted_for_decimals(self, token0):
        """Raw 1e-12 between an 18 and a 6 decimals token is 1 whole unit."""
        usdc = make_token(5, decimals=6)
        price = Price.from_amounts(token0, usdc, 10**18, 10**6)
        assert price.adjusted == 1
        assert price.to_significant(3) == "1"
        assert price.to_fixed(2) == "1.00"
