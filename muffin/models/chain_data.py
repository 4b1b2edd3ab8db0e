"""Pydantic models for already-fetched on-chain snapshots.

Field names follow the contracts' camelCase struct members; snake_case
names are accepted too. Integer fields, signed ticks included, take ints or numeric strings so
that large values survive JSON transport.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from muffin.constants import E5, MAX_TICK, MIN_TICK
from muffin.models.types import Int256, Uint256


class TierChainData(BaseModel):
    """State of one tier as returned by the pool contract."""

    liquidity: Uint256
    sqrt_price: Uint256 = Field(alias="sqrtPrice")
    sqrt_gamma: int = Field(alias="sqrtGamma", gt=0, le=E5)
    tick: Int256 = Field(ge=MIN_TICK, le=MAX_TICK)
    next_tick_below: Int256 = Field(alias="nextTickBelow", ge=MIN_TICK, le=MAX_TICK)
    next_tick_above: Int256 = Field(alias="nextTickAbove", ge=MIN_TICK, le=MAX_TICK)
    fee_growth_global0: Uint256 = Field(default=0, alias="feeGrowthGlobal0")
    fee_growth_global1: Uint256 = Field(default=0, alias="feeGrowthGlobal1")

    model_config = {"populate_by_name": True}


class TickChainData(BaseModel):
    """State of one initialized tick of a tier."""

    index: Int256 = Field(ge=MIN_TICK, le=MAX_TICK)
    liquidity_lower_d8: Uint256 = Field(alias="liquidityLowerD8")
    liquidity_upper_d8: Uint256 = Field(alias="liquidityUpperD8")
    next_below: Int256 = Field(alias="nextBelow", ge=MIN_TICK, le=MAX_TICK)
    next_above: Int256 = Field(alias="nextAbove", ge=MIN_TICK, le=MAX_TICK)
    need_settle0: bool = Field(default=False, alias="needSettle0")
    need_settle1: bool = Field(default=False, alias="needSettle1")
    fee_growth_outside0: Uint256 = Field(default=0, alias="feeGrowthOutside0")
    fee_growth_outside1: Uint256 = Field(default=0, alias="feeGrowthOutside1")

    model_config = {"populate_by_name": True}


class Hop(BaseModel):
    """Simulated input amount per tier for one hop of a swap.

    Produced by an off-chain quoter; one entry per tier of the hop's pool,
    in tier order.
    """

    tier_amounts_in: list[Uint256] = Field(alias="tierAmountsIn")

    model_config = {"populate_by_name": True}


__all__ = ["TierChainData", "TickChainData", "Hop"]
