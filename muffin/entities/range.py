"""Range: a tick interval seen from a chosen base/quote token pair.

Helps turn user input (ticks, prices or price strings) into a valid
``[tick_lower, tick_upper]`` for a position.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from typing import NamedTuple

from muffin.constants import MAX_TICK, MIN_TICK
from muffin.errors import InvalidPrice, InvalidTick, InvalidTickRange, InvalidToken
from muffin.math.price import nearest_usable_tick, parse_price_string, price_to_closest_tick, tick_to_price
from muffin.models.currency import Token
from muffin.models.fractions import Price


class TickLimits(NamedTuple):
    lower: int
    upper: int


class AtTickLimits(NamedTuple):
    lower: bool
    upper: bool


@dataclass(frozen=True)
class Range:
    """A validated tick range.

    ``tick_lower``/``tick_upper`` are always in token0/token1 terms; the
    ``quote_price_*`` accessors present them in base/quote terms, which
    swaps and inverts them when the base token sorts after the quote.
    """

    base_token: Token
    quote_token: Token
    tick_lower: int
    tick_upper: int
    tick_spacing: int | None = None
    token0: Token = field(init=False)
    token1: Token = field(init=False)
    inverted: bool = field(init=False)

    def __post_init__(self) -> None:
        if self.base_token == self.quote_token:
            raise InvalidToken("Base and quote tokens must differ")
        if isinstance(self.tick_lower, bool) or not isinstance(self.tick_lower, int) or self.tick_lower < MIN_TICK:
            raise InvalidTick(f"Invalid lower tick: {self.tick_lower!r}")
        if isinstance(self.tick_upper, bool) or not isinstance(self.tick_upper, int) or self.tick_upper > MAX_TICK:
            raise InvalidTick(f"Invalid upper tick: {self.tick_upper!r}")
        if not self.tick_lower < self.tick_upper:
            raise InvalidTickRange(f"tick_lower ({self.tick_lower}) must be below tick_upper ({self.tick_upper})")
        if self.tick_spacing is not None and (not isinstance(self.tick_spacing, int) or self.tick_spacing <= 0):
            raise InvalidTickRange(f"Tick spacing must be a positive integer, got {self.tick_spacing!r}")

        is_sorted = self.base_token.sorts_before(self.quote_token)
        object.__setattr__(self, "token0", self.base_token if is_sorted else self.quote_token)
        object.__setattr__(self, "token1", self.quote_token if is_sorted else self.base_token)
        object.__setattr__(self, "inverted", not is_sorted)

    @classmethod
    def from_tick_input(
        cls,
        base_token: Token,
        quote_token: Token,
        tick_lower: int,
        tick_upper: int,
        tick_spacing: int,
    ) -> Range:
        """Round the given ticks to usable multiples of tick_spacing."""
        lower = nearest_usable_tick(max(tick_lower, MIN_TICK), tick_spacing)
        upper = nearest_usable_tick(min(tick_upper, MAX_TICK), tick_spacing)
        return cls(base_token, quote_token, lower, upper, tick_spacing)

    @classmethod
    def from_price_input(cls, price_lower: Price, price_upper: Price, tick_spacing: int) -> Range:
        """Round prices down to ticks, then to usable ticks.

        The two prices may come in either order but must share units.
        """
        base_token = price_lower.base
        quote_token = price_lower.quote_currency
        if price_upper.base != base_token or price_upper.quote_currency != quote_token:
            raise InvalidPrice("Range prices must share the same base and quote tokens")

        tick_a = nearest_usable_tick(price_to_closest_tick(price_lower), tick_spacing)
        tick_b = nearest_usable_tick(price_to_closest_tick(price_upper), tick_spacing)
        tick_lower, tick_upper = (tick_a, tick_b) if tick_a < tick_b else (tick_b, tick_a)
        return cls(base_token, quote_token, tick_lower, tick_upper, tick_spacing)

    @classmethod
    def from_price_string_input(
        cls,
        base_token: Token,
        quote_token: Token,
        price_lower: str,
        price_upper: str,
        tick_spacing: int,
    ) -> Range:
        """Parse human-readable prices and build the range from them."""
        lower = parse_price_string(base_token, quote_token, price_lower)
        upper = parse_price_string(base_token, quote_token, price_upper)
        if lower is None or upper is None:
            raise InvalidPrice(f"Invalid price strings: {price_lower!r}, {price_upper!r}")
        return cls.from_price_input(lower, upper, tick_spacing)

    @cached_property
    def price_lower(self) -> Price:
        """Price of token0 in token1 at the lower tick."""
        return tick_to_price(self.token0, self.token1, self.tick_lower)

    @cached_property
    def price_upper(self) -> Price:
        return tick_to_price(self.token0, self.token1, self.tick_upper)

    @property
    def quote_price_lower(self) -> Price:
        """Lower bound of the range as a price of base_token in quote_token."""
        return self.price_upper.invert() if self.inverted else self.price_lower

    @property
    def quote_price_upper(self) -> Price:
        return self.price_lower.invert() if self.inverted else self.price_upper

    @property
    def tick_limits(self) -> TickLimits:
        """Outermost usable ticks for this range's tick spacing."""
        if self.tick_spacing is None:
            raise InvalidTickRange("Range has no tick spacing")
        return TickLimits(
            lower=nearest_usable_tick(MIN_TICK, self.tick_spacing),
            upper=nearest_usable_tick(MAX_TICK, self.tick_spacing),
        )

    @property
    def at_tick_limits(self) -> AtTickLimits:
        limits = self.tick_limits
        return AtTickLimits(lower=self.tick_lower <= limits.lower, upper=self.tick_upper >= limits.upper)


__all__ = ["Range", "TickLimits", "AtTickLimits"]
