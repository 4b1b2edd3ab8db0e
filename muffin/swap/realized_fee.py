"""Blended swap fee actually paid by a trade."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from fractions import Fraction
from math import floor

import structlog

from muffin.constants import E10
from muffin.entities.trade import Trade
from muffin.models.fractions import CurrencyAmount
from muffin.swap.distribution import (
    HopLike,
    check_hops_for_pools,
    get_input_amount_distribution,
    hops_in_input_order,
)

logger = structlog.get_logger()


@dataclass(frozen=True)
class RealizedFee:
    """Fee rate of a trade and the input amount it costs.

    Attributes:
        fee: Fee rate in [0, 1]
        amount: floor(trade input * fee), in the input currency
    """

    fee: Fraction
    amount: CurrencyAmount

    @property
    def percent(self) -> Fraction:
        return self.fee * 100


def get_realized_fee(trade: Trade, hops_list: Sequence[Sequence[HopLike]]) -> RealizedFee:
    """Overall fee rate from the tier fees weighted by where input was routed.

    A tier keeps sqrt_gamma^2 / 1e10 of what passes through it. Per pool
    the kept fraction is averaged by tier input share, per route it is the
    product over its pools, and per trade it is averaged by route input
    share. The fee is one minus that.
    """
    ordered = hops_in_input_order(trade, hops_list)
    total_in = trade.input_amount.value

    overall_gamma = Fraction(0)
    for swap, hops in zip(trade.swaps, ordered):
        validated = check_hops_for_pools(hops, swap.route.pools)
        route_gamma = Fraction(1)
        for pool, hop in zip(swap.route.pools, validated):
            pool_gamma = Fraction(0)
            for tier_id, share in enumerate(get_input_amount_distribution(hop)):
                sqrt_gamma = pool.tiers[tier_id].sqrt_gamma
                pool_gamma += Fraction(sqrt_gamma * sqrt_gamma, E10) * share
            route_gamma *= pool_gamma
        overall_gamma += route_gamma * (swap.input_amount.value / total_in)

    fee = 1 - overall_gamma
    amount = CurrencyAmount.from_raw_amount(trade.input_currency, floor(trade.input_amount.value * fee))
    logger.debug("trade_realized_fee", fee=str(fee), amount=amount.quotient)
    return RealizedFee(fee=fee, amount=amount)


__all__ = ["RealizedFee", "get_realized_fee"]
