"""Protocol constants for the Muffin AMM.

Values mirror the on-chain contracts exactly. Sqrt prices are Q56.72
fixed-point numbers (72 fractional bits).
"""

from enum import IntEnum

# Tick bounds supported by the protocol
MIN_TICK = -776363
MAX_TICK = 776363

# tick_to_sqrt_price(MIN_TICK) and tick_to_sqrt_price(MAX_TICK)
MIN_SQRT_PRICE = 65539
MAX_SQRT_PRICE = 340271175397327323250730767849398346765

# Tier's base liquidity, scaled down 2^8 times
BASE_LIQUIDITY_D8 = 100

# Tolerable difference between desired and actual swap amounts
SWAP_AMOUNT_TOLERANCE = 100

# Maximum number of tiers per pool
MAX_TIERS = 6

# Tier mask choosing every tier of a pool
MAX_TIER_CHOICES = (1 << MAX_TIERS) - 1
ALL_TIERS = MAX_TIER_CHOICES

Q72 = 1 << 72
Q144 = 1 << 144
MAX_UINT256 = (1 << 256) - 1

E5 = 10**5
E10 = 10**10


class LimitOrderType(IntEnum):
    """Position's limit order type, as stored on-chain."""

    NOT_LIMIT_ORDER = 0
    ZERO_FOR_ONE = 1
    ONE_FOR_ZERO = 2


__all__ = [
    "MIN_TICK",
    "MAX_TICK",
    "MIN_SQRT_PRICE",
    "MAX_SQRT_PRICE",
    "BASE_LIQUIDITY_D8",
    "SWAP_AMOUNT_TOLERANCE",
    "MAX_TIERS",
    "MAX_TIER_CHOICES",
    "ALL_TIERS",
    "Q72",
    "Q144",
    "MAX_UINT256",
    "E5",
    "E10",
    "LimitOrderType",
]
