"""Muffin SDK - off-chain math for the Muffin multi-tier concentrated-liquidity AMM."""

from muffin.config import LoggingConfig, configure_logging
from muffin.entities import LimitOrderState, Pool, Position, Range, Route, Swap, Tick, Tier, Trade, TradeType
from muffin.errors import MuffinError
from muffin.models import CurrencyAmount, Hop, NativeCurrency, Price, Token
from muffin.planning import plan_add_liquidity, plan_remove_liquidity, plan_swap

__version__ = "0.1.0"
__all__ = [
    "Token",
    "NativeCurrency",
    "CurrencyAmount",
    "Price",
    "Hop",
    "Tier",
    "Pool",
    "Tick",
    "LimitOrderState",
    "Position",
    "Range",
    "Route",
    "Swap",
    "Trade",
    "TradeType",
    "MuffinError",
    "LoggingConfig",
    "configure_logging",
    "plan_add_liquidity",
    "plan_remove_liquidity",
    "plan_swap",
    "__version__",
]
