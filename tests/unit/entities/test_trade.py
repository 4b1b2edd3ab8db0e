"""Tests for Trade."""

from fractions import Fraction

import pytest

from muffin.entities import Route, Swap, Trade, TradeType
from muffin.errors import DuplicatedPools, InvalidSlippage, MismatchedCurrencies
from tests.helpers import make_amount, make_native, make_route, make_single_route_trade


@pytest.fixture
def route012(pool01, pool12, token0, token2):
    return make_route([pool01, pool12], token0, token2)


@pytest.fixture
def route02(pool02, token0, token2):
    return make_route([pool02], token0, token2)


def swap(route: Route, amount_in: int, amount_out: int) -> Swap:
    return Swap(route, make_amount(route.input, amount_in), make_amount(route.output, amount_out))


class TestTradeConstruction:
    """Tests for Trade validation."""

    def test_multiple_routes(self, route012, route02, token0, token2):
        trade = Trade.create_unchecked_trade_with_multiple_routes(
            [swap(route012, 100, 90), swap(route02, 50, 45)], TradeType.EXACT_INPUT
        )
        assert trade.input_currency == token0
        assert trade.output_currency == token2
        assert trade.input_amount == make_amount(token0, 150)
        assert trade.output_amount == make_amount(token2, 135)

    def test_unmatched_inputs(self, pool01, pool12, route02, token1, token2):
        route12 = make_route([pool12], token1, token2)
        with pytest.raises(MismatchedCurrencies):
            Trade.create_unchecked_trade_with_multiple_routes(
                [swap(route12, 100, 90), swap(route02, 50, 45)], TradeType.EXACT_INPUT
            )

    def test_unmatched_outputs(self, pool01, route02, token0, token1):
        route01 = make_route([pool01], token0, token1)
        with pytest.raises(MismatchedCurrencies):
            Trade.create_unchecked_trade_with_multiple_routes(
                [swap(route01, 100, 90), swap(route02, 50, 45)], TradeType.EXACT_INPUT
            )

    def test_duplicated_pools(self, route02):
        with pytest.raises(DuplicatedPools):
            Trade.create_unchecked_trade_with_multiple_routes(
                [swap(route02, 100, 90), swap(route02, 50, 45)], TradeType.EXACT_INPUT
            )

    def test_no_swaps(self):
        with pytest.raises(MismatchedCurrencies):
            Trade.create_unchecked_trade_with_multiple_routes([], TradeType.EXACT_INPUT)

    def test_native_and_wrapped_input_mix(self, pool01, pool12, pool02, token0, token2):
        """A native input and its wrapped token count as the same currency."""
        native = make_native(token0)
        native_route = make_route([pool01, pool12], native, token2)
        wrapped_route = make_route([pool02], token0, token2)
        trade = Trade.create_unchecked_trade_with_multiple_routes(
            [swap(native_route, 100, 90), swap(wrapped_route, 50, 45)], TradeType.EXACT_INPUT
        )
        assert trade.input_currency == native

    def test_amount_currency_must_match_route(self, route02, token1):
        with pytest.raises(MismatchedCurrencies):
            Trade.create_unchecked_trade(
                route02, make_amount(token1, 100), make_amount(route02.output, 90), TradeType.EXACT_INPUT
            )


class TestTradeAmounts:
    """Tests for slippage bounds and prices."""

    def test_execution_price(self, route02, token0, token2):
        trade = make_single_route_trade(route02, 100, 250)
        price = trade.execution_price
        assert price.base == token0
        assert price.quote_currency == token2
        assert price.value == Fraction(5, 2)

    def test_exact_input_minimum_amount_out(self, route02):
        trade = make_single_route_trade(route02, 100, 1000, TradeType.EXACT_INPUT)
        assert trade.minimum_amount_out(Fraction(0)).quotient == 1000
        assert trade.minimum_amount_out(Fraction(1, 100)).quotient == 990
        assert trade.maximum_amount_in(Fraction(1, 100)).quotient == 100

    def test_exact_output_maximum_amount_in(self, route02):
        trade = make_single_route_trade(route02, 1000, 100, TradeType.EXACT_OUTPUT)
        assert trade.maximum_amount_in(Fraction(0)).quotient == 1000
        assert trade.maximum_amount_in(Fraction(1, 100)).quotient == 1010
        assert trade.minimum_amount_out(Fraction(1, 100)).quotient == 100

    def test_explicit_amounts(self, route02, token0, token2):
        trade = make_single_route_trade(route02, 1000, 1000)
        assert trade.minimum_amount_out(Fraction(1, 4), make_amount(token2, 500)).quotient == 400
        assert trade.maximum_amount_in(Fraction(1, 4), make_amount(token0, 500)).quotient == 500

    def test_worst_execution_price(self, route02):
        trade = make_single_route_trade(route02, 100, 1000)
        assert trade.worst_execution_price(Fraction(1, 100)).value == Fraction(990, 100)

    def test_negative_slippage(self, route02):
        trade = make_single_route_trade(route02, 100, 1000)
        with pytest.raises(InvalidSlippage):
            trade.minimum_amount_out(Fraction(-1, 100))
        with pytest.raises(InvalidSlippage):
            trade.maximum_amount_in(Fraction(-1, 100))
