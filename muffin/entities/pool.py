"""Pool: a canonical token pair with its list of tiers."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from functools import cached_property

import structlog
from eth_abi import encode  # type: ignore[attr-defined]
from eth_utils.conversions import to_hex
from eth_utils.crypto import keccak

from muffin.constants import ALL_TIERS, MAX_TIERS
from muffin.entities.tier import Tier
from muffin.errors import InvalidTickRange, InvalidTier
from muffin.models.chain_data import TierChainData
from muffin.models.currency import Token, sort_tokens

logger = structlog.get_logger()


@dataclass(frozen=True)
class Pool:
    """A Muffin pool snapshot.

    Tokens are stored in canonical order. ``tiers`` is kept as a tuple in
    tier-id order; every tier must trade the same pair.
    """

    token0: Token
    token1: Token
    tick_spacing: int
    tiers: tuple[Tier, ...]

    def __post_init__(self) -> None:
        token0, token1 = sort_tokens(self.token0, self.token1)
        object.__setattr__(self, "token0", token0)
        object.__setattr__(self, "token1", token1)
        object.__setattr__(self, "tiers", tuple(self.tiers))

        if isinstance(self.tick_spacing, bool) or not isinstance(self.tick_spacing, int) or self.tick_spacing <= 0:
            raise InvalidTickRange(f"Tick spacing must be a positive integer, got {self.tick_spacing!r}")
        if not 0 < len(self.tiers) <= MAX_TIERS:
            raise InvalidTier(f"A pool has between 1 and {MAX_TIERS} tiers, got {len(self.tiers)}")
        for tier_id, tier in enumerate(self.tiers):
            if tier.token0 != token0 or tier.token1 != token1:
                raise InvalidTier(f"Tier {tier_id} trades a different token pair")

    @classmethod
    def from_chain_data(
        cls,
        token_a: Token,
        token_b: Token,
        tick_spacing: int,
        tier_data: Iterable[TierChainData],
    ) -> Pool:
        """Build a pool from validated on-chain tier snapshots."""
        tiers = tuple(Tier.from_chain_data(token_a, token_b, data) for data in tier_data)
        logger.debug("pool_from_chain_data", tick_spacing=tick_spacing, tier_count=len(tiers))
        return cls(token_a, token_b, tick_spacing, tiers)

    @cached_property
    def pool_id(self) -> str:
        """keccak256 of the ABI-encoded (token0, token1) pair, as on-chain."""
        return to_hex(keccak(encode(["address", "address"], [self.token0.address, self.token1.address])))

    @property
    def chain_id(self) -> int:
        return self.token0.chain_id

    def involves_token(self, token: Token) -> bool:
        return token == self.token0 or token == self.token1

    def get_tier_by_sqrt_gamma(self, sqrt_gamma: int | None) -> tuple[int, Tier | None]:
        """Find the first tier with the given fee parameter.

        Returns:
            (tier_id, tier), or (-1, None) if no tier matches
        """
        if sqrt_gamma is None:
            return -1, None
        for tier_id, tier in enumerate(self.tiers):
            if tier.sqrt_gamma == sqrt_gamma:
                return tier_id, tier
        return -1, None

    @property
    def all_tiers_mask(self) -> int:
        """Tier mask selecting every tier of this pool."""
        return ALL_TIERS >> (MAX_TIERS - len(self.tiers))

    def with_tiers(self, tiers: Sequence[Tier]) -> Pool:
        """Copy of this pool with another tier list, e.g. from a newer snapshot."""
        return Pool(self.token0, self.token1, self.tick_spacing, tuple(tiers))


__all__ = ["Pool"]
