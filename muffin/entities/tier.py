"""Tier: one fee bucket of a Muffin pool."""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from functools import cached_property

import structlog

from muffin.constants import MAX_SQRT_PRICE, MIN_SQRT_PRICE, Q144
from muffin.errors import InvalidSlippage, InvalidSqrtPrice, InvalidTickRange, InvalidTier, InvalidToken
from muffin.math.price import encode_sqrt_price, is_sqrt_price_supported, is_valid_sqrt_gamma, sqrt_gamma_to_fee
from muffin.math.tick_math import sqrt_price_to_tick
from muffin.models.chain_data import TierChainData
from muffin.models.currency import Token, sort_tokens
from muffin.models.fractions import Price

logger = structlog.get_logger()


@dataclass(frozen=True)
class Tier:
    """Immutable snapshot of one tier.

    The token pair is stored in canonical order whatever order it was
    given in. ``next_tick_below``/``next_tick_above`` bound the tier's
    active tick window.

    Attributes:
        token0: Token with the lower address
        token1: Token with the higher address
        liquidity: Active liquidity (not scaled)
        sqrt_price: Current Q56.72 sqrt price of token0 in token1
        sqrt_gamma: Fee parameter in (0, 100000]
        next_tick_below: Next initialized tick at or below the current tick
        next_tick_above: Next initialized tick above the current tick
    """

    token0: Token
    token1: Token
    liquidity: int
    sqrt_price: int
    sqrt_gamma: int
    next_tick_below: int
    next_tick_above: int

    def __post_init__(self) -> None:
        if not self.next_tick_below < self.next_tick_above:
            raise InvalidTickRange(
                f"next_tick_below ({self.next_tick_below}) must be below next_tick_above ({self.next_tick_above})"
            )
        if not is_valid_sqrt_gamma(self.sqrt_gamma):
            raise InvalidTier(f"sqrt_gamma must be an integer in (0, 100000], got {self.sqrt_gamma!r}")
        if not is_sqrt_price_supported(self.sqrt_price):
            raise InvalidSqrtPrice(f"Unsupported sqrt price: {self.sqrt_price}")
        if self.liquidity < 0:
            raise InvalidTier(f"Liquidity must be non-negative, got {self.liquidity}")

        token0, token1 = sort_tokens(self.token0, self.token1)
        object.__setattr__(self, "token0", token0)
        object.__setattr__(self, "token1", token1)

    @classmethod
    def from_chain_data(cls, token_a: Token, token_b: Token, data: TierChainData) -> Tier:
        """Build a tier from a validated on-chain snapshot."""
        return cls(
            token0=token_a,
            token1=token_b,
            liquidity=data.liquidity,
            sqrt_price=data.sqrt_price,
            sqrt_gamma=data.sqrt_gamma,
            next_tick_below=data.next_tick_below,
            next_tick_above=data.next_tick_above,
        )

    def involves_token(self, token: Token) -> bool:
        return token == self.token0 or token == self.token1

    @cached_property
    def token0_price(self) -> Price:
        """Spot price of token0 in token1."""
        return Price(self.token0, self.token1, Fraction(self.sqrt_price * self.sqrt_price, Q144))

    @cached_property
    def token1_price(self) -> Price:
        """Spot price of token1 in token0."""
        return Price(self.token1, self.token0, Fraction(Q144, self.sqrt_price * self.sqrt_price))

    def price_of(self, token: Token) -> Price:
        """Price of the given token in terms of the other token of the tier."""
        if not self.involves_token(token):
            raise InvalidToken(f"Token {token.address} is not in this tier")
        return self.token0_price if token == self.token0 else self.token1_price

    @cached_property
    def tick_current(self) -> int:
        """Tick the tier is currently in.

        A price sitting exactly on ``next_tick_above`` still belongs to the
        tick below it, matching how the contract tracks the active window.
        """
        tick = sqrt_price_to_tick(self.sqrt_price)
        if tick == self.next_tick_above:
            tick -= 1
        return tick

    @property
    def fee(self) -> Fraction:
        """Swap fee rate in [0, 1]."""
        return sqrt_gamma_to_fee(self.sqrt_gamma)

    @property
    def fee_percent(self) -> Fraction:
        return self.fee * 100

    def sqrt_price_after_slippage(self, slippage: Fraction) -> tuple[int, int]:
        """Sqrt prices after token0's price moves down and up by ``slippage``.

        Args:
            slippage: Relative price move, e.g. Fraction(1, 100) for 1%

        Returns:
            (lower, upper) sqrt prices, clamped to the supported range
        """
        slippage = Fraction(slippage)
        if slippage < 0:
            raise InvalidSlippage(f"Slippage must be non-negative, got {slippage}")

        price = self.token0_price.value
        price_lower = max(price * (1 - slippage), Fraction(0))
        price_upper = price * (1 + slippage)

        sqrt_price_lower = max(encode_sqrt_price(price_lower.numerator, price_lower.denominator), MIN_SQRT_PRICE)
        sqrt_price_upper = min(encode_sqrt_price(price_upper.numerator, price_upper.denominator), MAX_SQRT_PRICE)
        logger.debug(
            "tier_sqrt_price_after_slippage",
            sqrt_gamma=self.sqrt_gamma,
            slippage=str(slippage),
            lower=sqrt_price_lower,
            upper=sqrt_price_upper,
        )
        return sqrt_price_lower, sqrt_price_upper


__all__ = ["Tier"]
