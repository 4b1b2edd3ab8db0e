"""Route: an ordered chain of pools from an input to an output currency."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from muffin.entities.pool import Pool
from muffin.errors import InvalidPath, InvalidTierMask
from muffin.models.currency import Currency, Token


def is_valid_tier_mask(tier_mask: int, tier_count: int) -> bool:
    """True if the mask selects at least one tier and only tiers the pool has."""
    if isinstance(tier_mask, bool) or not isinstance(tier_mask, int):
        return False
    return 0 < tier_mask < (1 << tier_count)


@dataclass(frozen=True)
class Route:
    """Pools a swap passes through, each with the tiers it may use.

    Attributes:
        pools: Pools in swap order
        tier_masks: Bitmask of allowed tiers, one per pool
        input: Currency going in (native currencies enter as their wrapped token)
        output: Currency coming out
        token_path: Tokens visited, from the wrapped input to the wrapped output
    """

    pools: tuple[Pool, ...]
    tier_masks: tuple[int, ...]
    input: Currency
    output: Currency
    token_path: tuple[Token, ...] = field(init=False)

    def __post_init__(self) -> None:
        pools = tuple(self.pools)
        tier_masks = tuple(self.tier_masks)
        object.__setattr__(self, "pools", pools)
        object.__setattr__(self, "tier_masks", tier_masks)

        if not pools:
            raise InvalidPath("A route needs at least one pool")
        chain_id = pools[0].chain_id
        if any(pool.chain_id != chain_id for pool in pools):
            raise InvalidPath("All pools of a route must be on the same chain")

        wrapped_input = self.input.wrapped
        if not pools[0].involves_token(wrapped_input):
            raise InvalidPath(f"First pool does not trade the input token {wrapped_input.address}")
        if not pools[-1].involves_token(self.output.wrapped):
            raise InvalidPath(f"Last pool does not trade the output token {self.output.wrapped.address}")

        if len(tier_masks) != len(pools):
            raise InvalidTierMask(f"Got {len(tier_masks)} tier masks for {len(pools)} pools")
        for i, (pool, tier_mask) in enumerate(zip(pools, tier_masks)):
            if not is_valid_tier_mask(tier_mask, len(pool.tiers)):
                raise InvalidTierMask(f"Tier mask {tier_mask!r} of pool {i} exceeds its {len(pool.tiers)} tiers")

        token = wrapped_input
        path = [token]
        for i, pool in enumerate(pools):
            if token == pool.token0:
                token = pool.token1
            elif token == pool.token1:
                token = pool.token0
            else:
                raise InvalidPath(f"Pool {i} does not trade {token.address}")
            path.append(token)
        if token != self.output.wrapped:
            raise InvalidPath(f"Route ends at {token.address}, not at the output token")
        object.__setattr__(self, "token_path", tuple(path))

    @classmethod
    def create(
        cls,
        pools: Sequence[Pool],
        tier_masks: Sequence[int],
        input: Currency,
        output: Currency,
    ) -> Route:
        return cls(tuple(pools), tuple(tier_masks), input, output)

    @property
    def chain_id(self) -> int:
        return self.pools[0].chain_id

    def equals(self, other: Route) -> bool:
        """Same pools, same tier masks, same input and output."""
        return self == other


__all__ = ["Route", "is_valid_tier_mask"]
