"""Marginal (spot, fee-excluded) price of a route or a trade.

Each hop's price is the average of its tiers' spot prices weighted by the
simulated input share of every tier. Hop prices are chained along a
route, and route prices are averaged by each route's share of the trade
input.
"""

from __future__ import annotations

from collections.abc import Sequence
from fractions import Fraction

import structlog

from muffin.entities.route import Route
from muffin.entities.trade import Trade
from muffin.errors import InvalidPrice
from muffin.models.fractions import Price
from muffin.swap.distribution import (
    HopLike,
    check_hops_for_pools,
    get_input_amount_distribution,
    hops_in_input_order,
)

logger = structlog.get_logger()


def compute_average_price(prices_and_weights: Sequence[tuple[Price, Fraction]]) -> Price:
    """Weighted sum of prices sharing the same base and quote.

    Weights are used as given; callers pass shares that sum to one.
    """
    if not prices_and_weights:
        raise InvalidPrice("Cannot average an empty list of prices")
    base = prices_and_weights[0][0].base
    quote = prices_and_weights[0][0].quote_currency

    total = Fraction(0)
    for price, weight in prices_and_weights:
        if price.base.wrapped != base.wrapped or price.quote_currency.wrapped != quote.wrapped:
            raise InvalidPrice("Averaged prices must share the same base and quote")
        total += price.value * weight
    return Price(base, quote, total)


def get_route_marginal_price(route: Route, hops: Sequence[HopLike]) -> Price:
    """Marginal price of a route, in output per input."""
    validated = check_hops_for_pools(hops, route.pools)

    token = route.input.wrapped
    value = Fraction(1)
    for pool, hop in zip(route.pools, validated):
        token0_in = token == pool.token0
        prices_and_weights = [
            (pool.tiers[tier_id].token0_price if token0_in else pool.tiers[tier_id].token1_price, share)
            for tier_id, share in enumerate(get_input_amount_distribution(hop))
        ]
        value *= compute_average_price(prices_and_weights).value
        token = pool.token1 if token0_in else pool.token0

    return Price(route.input, route.output, value)


def get_trade_marginal_price(trade: Trade, hops_list: Sequence[Sequence[HopLike]]) -> Price:
    """Marginal price of a trade, weighting routes by their input share.

    Args:
        trade: Trade to price
        hops_list: One list of simulated hops per swap, as reported by the quoter
    """
    ordered = hops_in_input_order(trade, hops_list)
    total_in = trade.input_amount.value
    prices_and_weights = [
        (get_route_marginal_price(swap.route, hops), swap.input_amount.value / total_in)
        for swap, hops in zip(trade.swaps, ordered)
    ]
    price = compute_average_price(prices_and_weights)
    logger.debug("trade_marginal_price", trade_type=trade.trade_type.value, price=str(price.value))
    return Price(trade.input_currency, trade.output_currency, price.value)


__all__ = ["compute_average_price", "get_route_marginal_price", "get_trade_marginal_price"]
