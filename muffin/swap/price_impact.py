"""Price impact: how far a trade's output falls short of its marginal output."""

from __future__ import annotations

from collections.abc import Sequence
from fractions import Fraction

import structlog

from muffin.entities.route import Route
from muffin.entities.trade import Trade
from muffin.errors import InvalidHops, InvalidPath
from muffin.models.fractions import CurrencyAmount
from muffin.swap.distribution import (
    HopLike,
    check_hops_for_pools,
    get_input_amount_distribution,
    hops_in_input_order,
)

logger = structlog.get_logger()


def get_route_marginal_output_amount(route: Route, amount_in: CurrencyAmount, hops: Sequence[HopLike]) -> CurrencyAmount:
    """Output of a route if every tier filled its share at its spot price, fees excluded."""
    validated = check_hops_for_pools(hops, route.pools)
    if not route.pools[0].involves_token(amount_in.currency.wrapped):
        raise InvalidPath("Input amount is not in the route's first pool")

    amount = amount_in.wrapped
    for pool, hop in zip(route.pools, validated):
        token = amount.currency
        token0_in = token == pool.token0
        output_token = pool.token1 if token0_in else pool.token0

        output_value = Fraction(0)
        for tier_id, share in enumerate(get_input_amount_distribution(hop)):
            tier = pool.tiers[tier_id]
            price = tier.token0_price if token0_in else tier.token1_price
            output_value += price.quote(CurrencyAmount(token, amount.value * share)).value
        amount = CurrencyAmount(output_token, output_value)

    return CurrencyAmount(route.output, amount.value)


def get_trade_marginal_output_amount(trade: Trade, hops_list: Sequence[Sequence[HopLike]]) -> CurrencyAmount:
    """Sum of the marginal output amounts of every route of the trade."""
    ordered = hops_in_input_order(trade, hops_list)
    total = Fraction(0)
    for swap, hops in zip(trade.swaps, ordered):
        total += get_route_marginal_output_amount(swap.route, swap.input_amount, hops).value
    return CurrencyAmount(trade.output_currency, total)


def get_price_impact(trade: Trade, hops_list: Sequence[Sequence[HopLike]]) -> Fraction:
    """Relative shortfall (marginal - actual) / marginal, as a fraction in [0, 1] for sane trades."""
    marginal = get_trade_marginal_output_amount(trade, hops_list)
    if marginal.value == 0:
        raise InvalidHops("Marginal output amount is zero; price impact is undefined")
    impact = (marginal.value - trade.output_amount.value) / marginal.value
    logger.debug("trade_price_impact", impact=str(impact), marginal_output=str(marginal.value))
    return impact


__all__ = ["get_route_marginal_output_amount", "get_trade_marginal_output_amount", "get_price_impact"]
