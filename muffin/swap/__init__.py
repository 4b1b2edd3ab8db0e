"""Swap analytics derived from externally simulated hops."""

from muffin.swap.distribution import as_hop, get_input_amount_distribution
from muffin.swap.marginal_price import compute_average_price, get_route_marginal_price, get_trade_marginal_price
from muffin.swap.price_impact import (
    get_price_impact,
    get_route_marginal_output_amount,
    get_trade_marginal_output_amount,
)
from muffin.swap.realized_fee import RealizedFee, get_realized_fee

__all__ = [
    "as_hop",
    "get_input_amount_distribution",
    "compute_average_price",
    "get_route_marginal_price",
    "get_trade_marginal_price",
    "get_route_marginal_output_amount",
    "get_trade_marginal_output_amount",
    "get_price_impact",
    "RealizedFee",
    "get_realized_fee",
]
