"""Tick: snapshot of one initialized tick of a tier."""

from __future__ import annotations

from dataclasses import dataclass

from muffin.constants import MAX_TICK, MIN_TICK
from muffin.errors import InvalidTick, InvalidTickRange
from muffin.models.chain_data import TickChainData


@dataclass(frozen=True)
class Tick:
    """Liquidity boundaries and linked-list neighbours of an initialized tick."""

    index: int
    liquidity_lower_d8: int
    liquidity_upper_d8: int
    next_below: int
    next_above: int

    def __post_init__(self) -> None:
        if not MIN_TICK <= self.index <= MAX_TICK:
            raise InvalidTick(f"Tick {self.index} outside [{MIN_TICK}, {MAX_TICK}]")
        if not self.next_below < self.next_above:
            raise InvalidTickRange(f"next_below ({self.next_below}) must be below next_above ({self.next_above})")

    @classmethod
    def from_chain_data(cls, data: TickChainData) -> Tick:
        return cls(
            index=data.index,
            liquidity_lower_d8=data.liquidity_lower_d8,
            liquidity_upper_d8=data.liquidity_upper_d8,
            next_below=data.next_below,
            next_above=data.next_above,
        )


__all__ = ["Tick"]
