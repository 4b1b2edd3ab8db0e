"""Immutable pool, position, route and trade entities."""

from muffin.entities.pool import Pool
from muffin.entities.position import LimitOrderState, Position
from muffin.entities.range import Range
from muffin.entities.route import Route, is_valid_tier_mask
from muffin.entities.tick import Tick
from muffin.entities.tier import Tier
from muffin.entities.trade import Swap, Trade, TradeType

__all__ = [
    "Tier",
    "Pool",
    "Tick",
    "LimitOrderState",
    "Position",
    "Range",
    "Route",
    "is_valid_tier_mask",
    "Swap",
    "Trade",
    "TradeType",
]
