"""Liquidity and swap planning.

Turns positions and trades into the amounts a transaction needs (desired
deposits, slippage caps, minimum outputs, native value to attach). No
calldata is produced here; encoding belongs to the caller.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from fractions import Fraction
from math import floor

import structlog

from muffin.constants import BASE_LIQUIDITY_D8, SWAP_AMOUNT_TOLERANCE
from muffin.entities.position import LimitOrderState, Position
from muffin.entities.route import Route
from muffin.entities.trade import Trade, TradeType
from muffin.errors import InvalidLiquidity, InvalidToken, MismatchedCurrencies
from muffin.models.currency import NativeCurrency
from muffin.models.fractions import CurrencyAmount

logger = structlog.get_logger()


@dataclass(frozen=True)
class AddLiquidityPlan:
    """Amounts for minting a position or adding to one.

    Attributes:
        position: Position actually minted (net of the bootstrap charge when creating a pool)
        amount0_desired: token0 needed at the current price
        amount1_desired: token1 needed at the current price
        amount0_max: token0 needed in the worst case within the slippage band
        amount1_max: token1 needed in the worst case within the slippage band
        native_value: Native currency to attach when one side is paid natively
    """

    position: Position
    amount0_desired: int
    amount1_desired: int
    amount0_max: int
    amount1_max: int
    native_value: int = 0


@dataclass(frozen=True)
class RemoveLiquidityPlan:
    liquidity_d8: int
    amount0_min: int
    amount1_min: int


@dataclass(frozen=True)
class SwapLeg:
    """Bounds for one route of a trade."""

    route: Route
    trade_type: TradeType
    amount_in_max: int
    amount_out_min: int


@dataclass(frozen=True)
class SwapPlan:
    """Bounds for executing one or more trades together.

    Attributes:
        legs: One entry per route across all trades
        total_amount_out_min: Sum of the trades' minimum outputs
        unwrap_amount: Wrapped native to unwrap for the recipient, or None if the output is a token
        native_value: Native currency to attach when the input is native
    """

    legs: tuple[SwapLeg, ...]
    total_amount_out_min: CurrencyAmount
    unwrap_amount: int | None
    native_value: int


def plan_add_liquidity(
    position: Position,
    slippage: Fraction,
    create_pool: bool = False,
    use_native: NativeCurrency | None = None,
) -> AddLiquidityPlan:
    """Plan a mint or add-liquidity call.

    When the pool is created in the same call, the base liquidity locked by
    pool creation is taken out of the position first. That charge is
    estimated with a plain x*y=k rule and can exceed what the tier's real
    price needs.

    Raises:
        InvalidLiquidity: If the position (after the bootstrap charge) has no liquidity
        InvalidToken: If use_native does not wrap one of the pool's tokens
    """
    if position.liquidity_d8 <= 0:
        raise InvalidLiquidity("Cannot add a position with zero liquidity")

    if create_pool:
        liquidity_d8 = position.liquidity_d8 - BASE_LIQUIDITY_D8
        if liquidity_d8 <= 0:
            raise InvalidLiquidity(
                f"Position liquidity {position.liquidity_d8} does not cover the base liquidity {BASE_LIQUIDITY_D8}"
            )
        position = position.with_liquidity_d8(liquidity_d8)

    amount0_desired, amount1_desired = position.mint_amounts
    amount0_max, amount1_max = position.mint_amounts_with_slippage(slippage)

    native_value = 0
    if use_native is not None:
        wrapped = use_native.wrapped
        if not position.pool.involves_token(wrapped):
            raise InvalidToken(f"Pool does not trade the wrapped native token {wrapped.address}")
        native_value = amount0_desired if wrapped == position.pool.token0 else amount1_desired

    logger.debug(
        "plan_add_liquidity",
        create_pool=create_pool,
        liquidity_d8=position.liquidity_d8,
        amount0_desired=amount0_desired,
        amount1_desired=amount1_desired,
    )
    return AddLiquidityPlan(
        position=position,
        amount0_desired=amount0_desired,
        amount1_desired=amount1_desired,
        amount0_max=amount0_max,
        amount1_max=amount1_max,
        native_value=native_value,
    )


def plan_remove_liquidity(position: Position, liquidity_fraction: Fraction, slippage: Fraction) -> RemoveLiquidityPlan:
    """Plan removing a fraction of a position's liquidity.

    Raises:
        InvalidLiquidity: If the fraction is outside (0, 1] or rounds down to no liquidity
    """
    liquidity_fraction = Fraction(liquidity_fraction)
    if not 0 < liquidity_fraction <= 1:
        raise InvalidLiquidity(f"Liquidity fraction must be in (0, 1], got {liquidity_fraction}")

    partial = Position(
        pool=position.pool,
        tier_id=position.tier_id,
        tick_lower=position.tick_lower,
        tick_upper=position.tick_upper,
        liquidity_d8=floor(liquidity_fraction * position.liquidity_d8),
        limit_order_state=LimitOrderState.NOT_LIMIT_ORDER,
    )
    if partial.liquidity_d8 <= 0:
        raise InvalidLiquidity("Nothing to remove: liquidity rounds down to zero")

    amount0_min, amount1_min = partial.burn_amounts_with_slippage(slippage)
    return RemoveLiquidityPlan(liquidity_d8=partial.liquidity_d8, amount0_min=amount0_min, amount1_min=amount1_min)


def plan_swap(trades: Sequence[Trade], slippage: Fraction) -> SwapPlan:
    """Plan executing trades that share one input and one output currency.

    Raises:
        MismatchedCurrencies: If there are no trades or they disagree on currencies
    """
    if not trades:
        raise MismatchedCurrencies("Need at least one trade")
    sample = trades[0]
    token_in = sample.input_currency.wrapped
    token_out = sample.output_currency.wrapped
    for trade in trades:
        if trade.input_currency.wrapped != token_in or trade.output_currency.wrapped != token_out:
            raise MismatchedCurrencies("All trades must share the same input and output tokens")

    total_out = sum((trade.minimum_amount_out(slippage).value for trade in trades), Fraction(0))
    total_amount_out_min = CurrencyAmount(sample.output_currency, total_out)

    native_value = 0
    if sample.input_currency.is_native:
        native_value = sum(trade.maximum_amount_in(slippage).quotient for trade in trades)

    legs = tuple(
        SwapLeg(
            route=swap.route,
            trade_type=trade.trade_type,
            amount_in_max=trade.maximum_amount_in(slippage, swap.input_amount).quotient,
            amount_out_min=trade.minimum_amount_out(slippage, swap.output_amount).quotient,
        )
        for trade in trades
        for swap in trade.swaps
    )

    unwrap_amount = None
    if sample.output_currency.is_native:
        unwrap_amount = max(total_amount_out_min.quotient - SWAP_AMOUNT_TOLERANCE, 0)

    logger.debug("plan_swap", legs=len(legs), native_value=native_value, unwrap_amount=unwrap_amount)
    return SwapPlan(
        legs=legs,
        total_amount_out_min=total_amount_out_min,
        unwrap_amount=unwrap_amount,
        native_value=native_value,
    )


__all__ = [
    "AddLiquidityPlan",
    "RemoveLiquidityPlan",
    "SwapLeg",
    "SwapPlan",
    "plan_add_liquidity",
    "plan_remove_liquidity",
    "plan_swap",
]
