"""Tests for route and trade marginal prices."""

from fractions import Fraction

import pytest

from muffin.constants import Q72
from muffin.entities import Swap, Trade, TradeType
from muffin.errors import InvalidPrice
from muffin.models import Price
from muffin.swap import (
    compute_average_price,
    get_route_marginal_price,
    get_trade_marginal_output_amount,
    get_trade_marginal_price,
)
from tests.helpers import make_amount, make_pool, make_route, make_tier


@pytest.fixture
def routes(token0, token1, token2):
    """0 -> 1 -> 2 through tiers at prices (4, 1) and (1/4, 1), and 0 -> 2 at price 1."""
    pool01 = make_pool(
        token0,
        token1,
        tiers=[make_tier(token0, token1, sqrt_price=2 * Q72), make_tier(token0, token1, sqrt_price=Q72)],
    )
    pool12 = make_pool(
        token1,
        token2,
        tiers=[make_tier(token1, token2, sqrt_price=Q72 // 2), make_tier(token1, token2, sqrt_price=Q72)],
    )
    pool02 = make_pool(token0, token2)
    return (
        make_route([pool01, pool12], token0, token2),
        make_route([pool02], token0, token2),
    )


def make_trade(routes, trade_type: TradeType) -> Trade:
    route012, route02 = routes
    return Trade.create_unchecked_trade_with_multiple_routes(
        [
            Swap(route012, make_amount(route012.input, 100000), make_amount(route012.output, 100000)),
            Swap(route02, make_amount(route02.input, 50000), make_amount(route02.output, 50000)),
        ],
        trade_type,
    )


class TestComputeAveragePrice:
    def test_weighted(self, token0, token1):
        prices = [
            (Price.from_amounts(token0, token1, 1, 4), Fraction(1, 2)),
            (Price.from_amounts(token0, token1, 1, 1), Fraction(1, 2)),
        ]
        assert compute_average_price(prices).value == Fraction(5, 2)

    def test_mismatched_units(self, token0, token1):
        prices = [
            (Price.from_amounts(token0, token1, 1, 4), Fraction(1, 2)),
            (Price.from_amounts(token1, token0, 1, 1), Fraction(1, 2)),
        ]
        with pytest.raises(InvalidPrice):
            compute_average_price(prices)


class TestGetRouteMarginalPrice:
    def test_chains_hop_prices(self, routes, token0, token2):
        """(4 + 1) / 2 for the first hop, 3/4 * 1/4 + 1/4 * 1 for the second."""
        route012, _ = routes
        hops = [{"tierAmountsIn": [1, 1]}, {"tierAmountsIn": [75000, 25000]}]
        price = get_route_marginal_price(route012, hops)
        assert price.base == token0
        assert price.quote_currency == token2
        assert price.value == Fraction(35, 32)

    def test_reverse_direction_uses_token1_price(self, routes, token0, token2):
        route012, _ = routes
        reverse = make_route(list(reversed(route012.pools)), token2, token0)
        hops = [{"tierAmountsIn": [1, 0]}, {"tierAmountsIn": [1, 0]}]
        assert get_route_marginal_price(reverse, hops).value == Fraction(4, 1) * Fraction(1, 4)

    def test_single_hop_is_tier_average(self, routes, token0, token1):
        """Tiers at prices 4 and 1 taking a quarter and three quarters of the input."""
        route012, _ = routes
        route01 = make_route(route012.pools[:1], token0, token1)
        price = get_route_marginal_price(route01, [{"tierAmountsIn": [1, 3]}])
        assert (price.base, price.quote_currency) == (token0, token1)
        assert price.value == Fraction(7, 4)


class TestGetTradeMarginalPrice:
    """Tests for get_trade_marginal_price."""

    def test_exact_input(self, routes, token0, token2):
        trade = make_trade(routes, TradeType.EXACT_INPUT)
        hops_list = [
            [{"tierAmountsIn": [1, 1]}, {"tierAmountsIn": [75000, 25000]}],
            [{"tierAmountsIn": [30000, 20000]}],
        ]
        price = get_trade_marginal_price(trade, hops_list)
        assert price.base == token0
        assert price.quote_currency == token2
        assert price.value == Fraction(17, 16)

    def test_exact_output_matches_exact_input(self, routes):
        """Exact-output hops are reported in reverse and give the same price."""
        exact_input = get_trade_marginal_price(
            make_trade(routes, TradeType.EXACT_INPUT),
            [
                [{"tierAmountsIn": [1, 1]}, {"tierAmountsIn": [75000, 25000]}],
                [{"tierAmountsIn": [30000, 20000]}],
            ],
        )
        exact_output = get_trade_marginal_price(
            make_trade(routes, TradeType.EXACT_OUTPUT),
            [
                [{"tierAmountsIn": [75000, 25000]}, {"tierAmountsIn": [1, 1]}],
                [{"tierAmountsIn": [30000, 20000]}],
            ],
        )
        assert exact_output == exact_input

    def test_consistent_with_marginal_output(self, routes):
        """Marginal output divided by input equals the marginal price."""
        trade = make_trade(routes, TradeType.EXACT_INPUT)
        hops_list = [
            [{"tierAmountsIn": [1, 1]}, {"tierAmountsIn": [75000, 25000]}],
            [{"tierAmountsIn": [30000, 20000]}],
        ]
        marginal_output = get_trade_marginal_output_amount(trade, hops_list)
        price = get_trade_marginal_price(trade, hops_list)
        assert marginal_output.value / trade.input_amount.value == price.value
