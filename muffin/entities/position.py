"""Position: liquidity in one tier over a tick range, optionally a limit order.

Amounts come in two flavours. Holding amounts (``amount0``/``amount1``,
``amounts_at_price``) are what burning the whole position would pay out
and round down. Mint amounts are what creating the same liquidity costs
and round up. The two differ by at most one unit per token at the same
price.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from fractions import Fraction
from functools import cached_property

import structlog

from muffin.constants import MAX_TICK, MAX_UINT256, MIN_TICK, LimitOrderType
from muffin.entities.pool import Pool
from muffin.entities.tier import Tier
from muffin.errors import InvalidLimitOrderState, InvalidLiquidity, InvalidTick, InvalidTickRange, InvalidTier
from muffin.math.pool_math import (
    TokenAmounts,
    amounts_for_liquidity_delta_d8,
    max_output_liquidity_d8_for_amounts,
    min_input_amounts_for_liquidity_d8,
    min_output_amounts_for_liquidity_d8,
)
from muffin.math.price import tick_to_price
from muffin.math.tick_math import tick_to_sqrt_price
from muffin.models.fractions import CurrencyAmount, Price

logger = structlog.get_logger()


def _check_tick_order(tick_lower: int, tick_upper: int) -> None:
    if not tick_lower < tick_upper:
        raise InvalidTickRange(f"tick_lower ({tick_lower}) must be below tick_upper ({tick_upper})")


class LimitOrderState(Enum):
    """Limit-order status of a position.

    On-chain this is a direction flag plus a separate ``settled`` bit; the
    combination "settled without a direction" has no member here.
    """

    NOT_LIMIT_ORDER = "not_limit_order"
    ZERO_FOR_ONE = "zero_for_one"
    ONE_FOR_ZERO = "one_for_zero"
    SETTLED_ZERO_FOR_ONE = "settled_zero_for_one"
    SETTLED_ONE_FOR_ZERO = "settled_one_for_zero"

    @classmethod
    def from_flags(cls, limit_order_type: int, settled: bool = False) -> LimitOrderState:
        """Combine the on-chain direction flag and settled bit.

        Raises:
            InvalidLimitOrderState: If the type is unknown, or settled is set
                on a position that is not a limit order
        """
        try:
            order_type = LimitOrderType(limit_order_type)
        except ValueError as err:
            raise InvalidLimitOrderState(f"Unknown limit order type: {limit_order_type!r}") from err

        if order_type == LimitOrderType.NOT_LIMIT_ORDER:
            if settled:
                raise InvalidLimitOrderState("A settled position must be a limit order")
            return cls.NOT_LIMIT_ORDER
        if order_type == LimitOrderType.ZERO_FOR_ONE:
            return cls.SETTLED_ZERO_FOR_ONE if settled else cls.ZERO_FOR_ONE
        return cls.SETTLED_ONE_FOR_ZERO if settled else cls.ONE_FOR_ZERO

    @property
    def limit_order_type(self) -> LimitOrderType:
        if self in (LimitOrderState.ZERO_FOR_ONE, LimitOrderState.SETTLED_ZERO_FOR_ONE):
            return LimitOrderType.ZERO_FOR_ONE
        if self in (LimitOrderState.ONE_FOR_ZERO, LimitOrderState.SETTLED_ONE_FOR_ZERO):
            return LimitOrderType.ONE_FOR_ZERO
        return LimitOrderType.NOT_LIMIT_ORDER

    @property
    def settled(self) -> bool:
        return self in (LimitOrderState.SETTLED_ZERO_FOR_ONE, LimitOrderState.SETTLED_ONE_FOR_ZERO)

    @property
    def is_limit_order(self) -> bool:
        return self != LimitOrderState.NOT_LIMIT_ORDER


@dataclass(frozen=True)
class Position:
    """A liquidity position.

    Attributes:
        pool: Pool snapshot the position lives in
        tier_id: Index of the tier in ``pool.tiers``
        tick_lower: Lower tick, a multiple of the pool's tick spacing
        tick_upper: Upper tick, a multiple of the pool's tick spacing
        liquidity_d8: Scaled liquidity (actual liquidity / 256)
        limit_order_state: Limit-order status
        settlement_snapshot_id: Settlement the limit order belongs to, if any
    """

    pool: Pool
    tier_id: int
    tick_lower: int
    tick_upper: int
    liquidity_d8: int
    limit_order_state: LimitOrderState = LimitOrderState.NOT_LIMIT_ORDER
    settlement_snapshot_id: int = 0

    def __post_init__(self) -> None:
        _check_tick_order(self.tick_lower, self.tick_upper)
        if self.tick_lower < MIN_TICK or self.tick_upper > MAX_TICK:
            raise InvalidTick(f"Ticks [{self.tick_lower}, {self.tick_upper}] outside [{MIN_TICK}, {MAX_TICK}]")
        spacing = self.pool.tick_spacing
        if self.tick_lower % spacing != 0 or self.tick_upper % spacing != 0:
            raise InvalidTickRange(f"Ticks [{self.tick_lower}, {self.tick_upper}] not aligned to spacing {spacing}")
        if not 0 <= self.tier_id < len(self.pool.tiers):
            raise InvalidTier(f"Tier id {self.tier_id} out of range for {len(self.pool.tiers)} tiers")
        if self.liquidity_d8 < 0:
            raise InvalidLiquidity(f"Liquidity must be non-negative, got {self.liquidity_d8}")
        if not isinstance(self.limit_order_state, LimitOrderState):
            raise InvalidLimitOrderState(f"Expected a LimitOrderState, got {self.limit_order_state!r}")

    # -----------------------------------------------------------------------
    # Construction from amounts
    # -----------------------------------------------------------------------

    @classmethod
    def from_amounts(
        cls,
        pool: Pool,
        tier_id: int,
        tick_lower: int,
        tick_upper: int,
        amount0: int,
        amount1: int,
        limit_order_state: LimitOrderState = LimitOrderState.NOT_LIMIT_ORDER,
        settlement_snapshot_id: int = 0,
    ) -> Position:
        """Largest position that the given token budget can mint at the tier's current price."""
        if not 0 <= tier_id < len(pool.tiers):
            raise InvalidTier(f"Tier id {tier_id} out of range for {len(pool.tiers)} tiers")
        _check_tick_order(tick_lower, tick_upper)
        liquidity_d8 = max_output_liquidity_d8_for_amounts(
            pool.tiers[tier_id].sqrt_price,
            tick_to_sqrt_price(tick_lower),
            tick_to_sqrt_price(tick_upper),
            amount0,
            amount1,
        )
        logger.debug(
            "position_from_amounts",
            tier_id=tier_id,
            tick_lower=tick_lower,
            tick_upper=tick_upper,
            liquidity_d8=liquidity_d8,
        )
        return cls(pool, tier_id, tick_lower, tick_upper, liquidity_d8, limit_order_state, settlement_snapshot_id)

    @classmethod
    def from_amount0(
        cls,
        pool: Pool,
        tier_id: int,
        tick_lower: int,
        tick_upper: int,
        amount0: int,
        limit_order_state: LimitOrderState = LimitOrderState.NOT_LIMIT_ORDER,
        settlement_snapshot_id: int = 0,
    ) -> Position:
        """Size the position by its token0 budget alone."""
        return cls.from_amounts(
            pool, tier_id, tick_lower, tick_upper, amount0, MAX_UINT256, limit_order_state, settlement_snapshot_id
        )

    @classmethod
    def from_amount1(
        cls,
        pool: Pool,
        tier_id: int,
        tick_lower: int,
        tick_upper: int,
        amount1: int,
        limit_order_state: LimitOrderState = LimitOrderState.NOT_LIMIT_ORDER,
        settlement_snapshot_id: int = 0,
    ) -> Position:
        """Size the position by its token1 budget alone."""
        return cls.from_amounts(
            pool, tier_id, tick_lower, tick_upper, MAX_UINT256, amount1, limit_order_state, settlement_snapshot_id
        )

    @classmethod
    def from_limit_order_exact_output(
        cls,
        pool: Pool,
        tier_id: int,
        tick_lower: int,
        tick_upper: int,
        amount0: int,
        amount1: int,
        limit_order_type: LimitOrderType,
        settlement_snapshot_id: int = 0,
    ) -> Position:
        """Limit order whose settlement pays out at most the given amounts.

        Liquidity is sized at the price the order settles at: the upper tick
        for a zero-for-one order, the lower tick for one-for-zero.
        """
        if limit_order_type == LimitOrderType.NOT_LIMIT_ORDER:
            raise InvalidLimitOrderState("Exact-output sizing needs a limit order direction")
        limit_order_state = LimitOrderState.from_flags(limit_order_type)
        _check_tick_order(tick_lower, tick_upper)

        sqrt_price_lower = tick_to_sqrt_price(tick_lower)
        sqrt_price_upper = tick_to_sqrt_price(tick_upper)
        sqrt_price = sqrt_price_upper if limit_order_type == LimitOrderType.ZERO_FOR_ONE else sqrt_price_lower
        liquidity_d8 = max_output_liquidity_d8_for_amounts(
            sqrt_price, sqrt_price_lower, sqrt_price_upper, amount0, amount1
        )
        return cls(pool, tier_id, tick_lower, tick_upper, liquidity_d8, limit_order_state, settlement_snapshot_id)

    def with_liquidity_d8(self, liquidity_d8: int) -> Position:
        """Copy of this position holding a different amount of liquidity."""
        return replace(self, liquidity_d8=liquidity_d8)

    # -----------------------------------------------------------------------
    # Basic accessors
    # -----------------------------------------------------------------------

    @property
    def pool_tier(self) -> Tier:
        return self.pool.tiers[self.tier_id]

    @property
    def liquidity(self) -> int:
        """Actual (unscaled) liquidity."""
        return self.liquidity_d8 * 256

    @property
    def settled(self) -> bool:
        return self.limit_order_state.settled

    @property
    def limit_order_type(self) -> LimitOrderType:
        return self.limit_order_state.limit_order_type

    @cached_property
    def sqrt_price_lower(self) -> int:
        return tick_to_sqrt_price(self.tick_lower)

    @cached_property
    def sqrt_price_upper(self) -> int:
        return tick_to_sqrt_price(self.tick_upper)

    @property
    def token0_price_lower(self) -> Price:
        """Price of token0 in token1 at the lower tick."""
        return tick_to_price(self.pool.token0, self.pool.token1, self.tick_lower)

    @property
    def token0_price_upper(self) -> Price:
        """Price of token0 in token1 at the upper tick."""
        return tick_to_price(self.pool.token0, self.pool.token1, self.tick_upper)

    # -----------------------------------------------------------------------
    # Holding amounts
    # -----------------------------------------------------------------------

    def _settlement_sqrt_price(self) -> int:
        if self.limit_order_type == LimitOrderType.ZERO_FOR_ONE:
            return self.sqrt_price_upper
        return self.sqrt_price_lower

    def _exit_sqrt_price(self) -> int:
        if self.settled:
            return self._settlement_sqrt_price()
        return self.pool_tier.sqrt_price

    def amounts_at_price(self, sqrt_price: int) -> TokenAmounts:
        """Amounts paid out by burning all liquidity at the given sqrt price."""
        return amounts_for_liquidity_delta_d8(
            sqrt_price, self.sqrt_price_lower, self.sqrt_price_upper, -self.liquidity_d8
        )

    def mint_amounts_at_price(self, sqrt_price: int) -> TokenAmounts:
        """Amounts required to mint this position's liquidity at the given sqrt price."""
        return amounts_for_liquidity_delta_d8(
            sqrt_price, self.sqrt_price_lower, self.sqrt_price_upper, self.liquidity_d8
        )

    @cached_property
    def holding_amounts(self) -> TokenAmounts:
        """Underlying token amounts of the position.

        Settled limit orders are valued at their settlement price, not at
        the tier's current price.
        """
        return self.amounts_at_price(self._exit_sqrt_price())

    @property
    def amount0(self) -> CurrencyAmount:
        return CurrencyAmount.from_raw_amount(self.pool.token0, self.holding_amounts.amount0)

    @property
    def amount1(self) -> CurrencyAmount:
        return CurrencyAmount.from_raw_amount(self.pool.token1, self.holding_amounts.amount1)

    @cached_property
    def mint_amounts(self) -> TokenAmounts:
        """Minimum amounts required to mint this liquidity at the tier's current price."""
        return self.mint_amounts_at_price(self.pool_tier.sqrt_price)

    @cached_property
    def settle_amounts(self) -> TokenAmounts | None:
        """Single-sided payout once the limit order settles, or None if not a limit order."""
        if not self.limit_order_state.is_limit_order:
            return None
        return self.amounts_at_price(self._settlement_sqrt_price())

    # -----------------------------------------------------------------------
    # Slippage bounds
    # -----------------------------------------------------------------------

    def mint_amounts_with_slippage(self, slippage: Fraction) -> TokenAmounts:
        """Maximum amounts to approve for minting if the price moves by up to ``slippage``.

        token0 cost grows as the price falls and token1 cost as it rises, so
        each amount is evaluated at the unfavourable end of the band.
        """
        sqrt_price_slippage_lower, sqrt_price_slippage_upper = self.pool_tier.sqrt_price_after_slippage(slippage)
        amount0 = min_input_amounts_for_liquidity_d8(
            sqrt_price_slippage_lower, self.sqrt_price_lower, self.sqrt_price_upper, self.liquidity_d8
        ).amount0
        amount1 = min_input_amounts_for_liquidity_d8(
            sqrt_price_slippage_upper, self.sqrt_price_lower, self.sqrt_price_upper, self.liquidity_d8
        ).amount1
        return TokenAmounts(amount0, amount1)

    def burn_amounts_with_slippage(self, slippage: Fraction) -> TokenAmounts:
        """Minimum amounts to accept for burning if the price moves by up to ``slippage``.

        A settled limit order pays out its settlement amounts whatever the
        tier price, so those are returned as is.
        """
        if self.settled:
            return self.holding_amounts
        sqrt_price_slippage_lower, sqrt_price_slippage_upper = self.pool_tier.sqrt_price_after_slippage(slippage)
        amount0 = min_output_amounts_for_liquidity_d8(
            sqrt_price_slippage_upper, self.sqrt_price_lower, self.sqrt_price_upper, self.liquidity_d8
        ).amount0
        amount1 = min_output_amounts_for_liquidity_d8(
            sqrt_price_slippage_lower, self.sqrt_price_lower, self.sqrt_price_upper, self.liquidity_d8
        ).amount1
        return TokenAmounts(amount0, amount1)


__all__ = ["LimitOrderState", "Position"]
