"""Per-tier input shares of a simulated hop."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from fractions import Fraction
from typing import Any

from muffin.entities.pool import Pool
from muffin.entities.trade import Trade, TradeType
from muffin.errors import InvalidHops
from muffin.models.chain_data import Hop

HopLike = Hop | Mapping[str, Any]


def as_hop(hop: HopLike) -> Hop:
    """Accept either a Hop or its raw mapping form (e.g. decoded quoter JSON)."""
    return hop if isinstance(hop, Hop) else Hop.model_validate(hop)


def get_input_amount_distribution(hop: HopLike) -> list[Fraction]:
    """Share of the hop's input routed to each tier.

    An all-zero hop is split evenly across its tiers.
    """
    amounts = as_hop(hop).tier_amounts_in
    if not amounts:
        raise InvalidHops("A hop must list at least one tier amount")
    total = sum(amounts)
    if total == 0:
        return [Fraction(1, len(amounts)) for _ in amounts]
    return [Fraction(amount, total) for amount in amounts]


def check_hops_for_pools(hops: Sequence[HopLike], pools: Sequence[Pool]) -> list[Hop]:
    """Validate that a route's hops line up with its pools.

    Raises:
        InvalidHops: If the counts differ, or a hop lists more tiers than its pool has
    """
    if len(hops) != len(pools):
        raise InvalidHops(f"Got {len(hops)} hops for {len(pools)} pools")
    validated = [as_hop(hop) for hop in hops]
    for i, (hop, pool) in enumerate(zip(validated, pools)):
        if len(hop.tier_amounts_in) > len(pool.tiers):
            raise InvalidHops(
                f"Hop {i} lists {len(hop.tier_amounts_in)} tier amounts but its pool has {len(pool.tiers)} tiers"
            )
    return validated


def hops_in_input_order(trade: Trade, hops_list: Sequence[Sequence[HopLike]]) -> list[list[HopLike]]:
    """Per-swap hop lists ordered from the input token to the output token.

    Exact-output simulations report hops in execution order, which runs
    from the output back to the input, so they are reversed.
    """
    if len(hops_list) != len(trade.swaps):
        raise InvalidHops(f"Got {len(hops_list)} hop lists for {len(trade.swaps)} swaps")
    if trade.trade_type == TradeType.EXACT_OUTPUT:
        return [list(reversed(hops)) for hops in hops_list]
    return [list(hops) for hops in hops_list]


__all__ = [
    "HopLike",
    "as_hop",
    "get_input_amount_distribution",
    "check_hops_for_pools",
    "hops_in_input_order",
]
