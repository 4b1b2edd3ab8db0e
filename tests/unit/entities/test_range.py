"""Tests for Range."""

import pytest

from muffin.constants import MAX_TICK, MIN_TICK
from muffin.entities import Range
from muffin.entities.range import AtTickLimits, TickLimits
from muffin.errors import InvalidPrice, InvalidTick, InvalidTickRange, InvalidToken
from muffin.models import Price


def one(token0, token1) -> Price:
    return Price.from_amounts(token0, token1, 1, 1)


class TestFromTickInput:
    """Tests for Range.from_tick_input."""

    def test_rounds_ticks_and_orders_tokens(self, token0, token1):
        range_ = Range.from_tick_input(token1, token0, 1, 9999, 10)

        assert range_.token0 == token0
        assert range_.token1 == token1
        assert range_.inverted is True

        assert range_.tick_lower == 0
        assert range_.tick_upper == 10000

    def test_prices(self, token0, token1):
        range_ = Range.from_tick_input(token1, token0, 1, 9999, 10)

        assert range_.price_lower.to_significant(7) == "1"
        assert range_.price_upper.to_significant(7) == "2.718146"
        assert range_.quote_price_lower.to_significant(7) == "0.3678978"
        assert range_.quote_price_upper.to_significant(7) == "1"

    def test_price_units(self, token0, token1):
        range_ = Range.from_tick_input(token1, token0, 1, 9999, 10)

        for price in (range_.price_lower, range_.price_upper):
            assert price.base == token0
            assert price.quote_currency == token1
        for price in (range_.quote_price_lower, range_.quote_price_upper):
            assert price.base == token1
            assert price.quote_currency == token0

    def test_not_inverted(self, token0, token1):
        range_ = Range.from_tick_input(token0, token1, -100, 100, 1)
        assert range_.inverted is False
        assert range_.quote_price_lower == range_.price_lower
        assert range_.quote_price_upper == range_.price_upper

    def test_clamps_out_of_bound_ticks(self, token0, token1):
        range_ = Range.from_tick_input(token0, token1, MIN_TICK - 100, MAX_TICK + 100, 10)
        assert range_.tick_lower == -776360
        assert range_.tick_upper == 776360


class TestFromPriceInput:
    """Tests for Range.from_price_input."""

    def test_works(self, token0, token1):
        price_lower = Price.from_amounts(token1, token0, 10000000, 3678978)
        price_upper = Price.from_amounts(token1, token0, 1, 1)
        range_ = Range.from_price_input(price_lower, price_upper, 10)

        assert range_.token0 == token0
        assert range_.token1 == token1
        assert range_.inverted is True
        assert range_.tick_lower == 0
        assert range_.tick_upper == 10000
        assert range_.quote_price_lower.to_significant(7) == "0.3678978"
        assert range_.quote_price_upper.to_significant(7) == "1"

    def test_rounding_down_prices(self, token0, token1):
        """Prices round down to ticks, so 1.00009 collapses onto tick 0."""
        with pytest.raises(InvalidTickRange):
            Range.from_price_input(one(token0, token1), Price.from_amounts(token0, token1, 100000, 100009), 1)

        range_ = Range.from_price_input(one(token0, token1), Price.from_amounts(token0, token1, 100000, 100019), 1)
        assert range_.tick_lower == 0
        assert range_.tick_upper == 1

    def test_rounding_off_ticks(self, token0, token1):
        """Tick 1 rounds to 0 with spacing 3 but to 2 with spacing 2."""
        with pytest.raises(InvalidTickRange):
            Range.from_price_input(one(token0, token1), Price.from_amounts(token0, token1, 10000, 10001), 3)

        range_ = Range.from_price_input(one(token0, token1), Price.from_amounts(token0, token1, 10000, 10001), 2)
        assert range_.tick_lower == 0
        assert range_.tick_upper == 2

    def test_accepts_prices_in_either_order(self, token0, token1):
        upper = Price.from_amounts(token0, token1, 10000, 10001)
        range_ = Range.from_price_input(upper, one(token0, token1), 1)
        assert (range_.tick_lower, range_.tick_upper) == (0, 1)

    def test_mismatched_units(self, token0, token1):
        with pytest.raises(InvalidPrice):
            Range.from_price_input(one(token0, token1), one(token1, token0), 1)


class TestFromPriceStringInput:
    """Tests for Range.from_price_string_input."""

    def test_works(self, token0, token1):
        range_ = Range.from_price_string_input(token1, token0, "0.3678978", "1", 10)
        assert range_.token0 == token0
        assert range_.token1 == token1
        assert range_.inverted is True
        assert range_.tick_lower == 0
        assert range_.tick_upper == 10000

    def test_invalid_string(self, token0, token1):
        with pytest.raises(InvalidPrice):
            Range.from_price_string_input(token0, token1, "abc", "1", 10)


class TestRangeValidation:
    def test_same_tokens(self, token0):
        with pytest.raises(InvalidToken):
            Range(token0, token0, 0, 10)

    def test_tick_order(self, token0, token1):
        with pytest.raises(InvalidTickRange):
            Range(token0, token1, 10, 10)

    def test_tick_bounds(self, token0, token1):
        with pytest.raises(InvalidTick):
            Range(token0, token1, MIN_TICK - 1, 0)
        with pytest.raises(InvalidTick):
            Range(token0, token1, 0, MAX_TICK + 1)


class TestTickLimits:
    """Tests for tick_limits and at_tick_limits."""

    def test_tick_limits(self, token0, token1):
        range_ = Range(token0, token1, 0, 10, tick_spacing=10)
        assert range_.tick_limits == TickLimits(lower=-776360, upper=776360)

    def test_at_tick_limits(self, token0, token1):
        full = Range.from_tick_input(token0, token1, MIN_TICK, MAX_TICK, 10)
        assert full.at_tick_limits == AtTickLimits(lower=True, upper=True)

        partial = Range(token0, token1, -776360, 0, tick_spacing=10)
        assert partial.at_tick_limits == AtTickLimits(lower=True, upper=False)

    def test_tick_limits_need_spacing(self, token0, token1):
        with pytest.raises(InvalidTickRange):
            _ = Range(token0, token1, 0, 10).tick_limits
