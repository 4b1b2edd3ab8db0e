"""Test helpers module for shared test utilities.

- constants: common amounts and raw tier snapshots
- factories: token, tier, pool, route and trade factory functions
"""

from tests.helpers.constants import DEFAULT_TIER_DATA, E18, SQRT_GAMMA_30_BPS, SQRT_GAMMA_NO_FEE
from tests.helpers.factories import (
    make_amount,
    make_native,
    make_pool,
    make_route,
    make_single_route_trade,
    make_tier,
    make_tier_data,
    make_token,
)

__all__ = [
    # Constants
    "E18",
    "SQRT_GAMMA_NO_FEE",
    "SQRT_GAMMA_30_BPS",
    "DEFAULT_TIER_DATA",
    # Factories
    "make_token",
    "make_native",
    "make_tier",
    "make_tier_data",
    "make_pool",
    "make_route",
    "make_amount",
    "make_single_route_trade",
]
