"""Currency types: ERC-20 tokens and the chain's native currency."""

from __future__ import annotations

from dataclasses import dataclass, field

from muffin.errors import InvalidToken
from muffin.models.types import is_valid_address, normalize_address


@dataclass(frozen=True)
class Token:
    """An ERC-20 token on a given chain.

    Equality and hashing only consider the chain id and the (lowercased)
    address; metadata is informational.
    """

    chain_id: int
    address: str
    decimals: int = field(default=18, compare=False)
    symbol: str | None = field(default=None, compare=False)
    name: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        address = normalize_address(self.address)
        if not is_valid_address(address):
            raise InvalidToken(f"Invalid token address: {self.address}")
        if not 0 <= self.decimals < 255:
            raise InvalidToken(f"Invalid token decimals: {self.decimals}")
        object.__setattr__(self, "address", address)

    @property
    def is_native(self) -> bool:
        return False

    @property
    def is_token(self) -> bool:
        return True

    @property
    def wrapped(self) -> Token:
        return self

    def sorts_before(self, other: Token) -> bool:
        """True if this token's address sorts before the other's.

        Raises:
            InvalidToken: If the tokens are on different chains or identical
        """
        if self.chain_id != other.chain_id:
            raise InvalidToken(f"Tokens on different chains: {self.chain_id} != {other.chain_id}")
        if self.address == other.address:
            raise InvalidToken(f"Cannot sort identical tokens: {self.address}")
        return self.address < other.address


@dataclass(frozen=True)
class NativeCurrency:
    """The chain's native currency, swapped through its wrapped token."""

    chain_id: int
    wrapped: Token
    decimals: int = field(default=18, compare=False)
    symbol: str | None = field(default=None, compare=False)
    name: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.wrapped.chain_id != self.chain_id:
            raise InvalidToken("Wrapped token must live on the same chain as the native currency")

    @property
    def is_native(self) -> bool:
        return True

    @property
    def is_token(self) -> bool:
        return False


Currency = Token | NativeCurrency


def sort_tokens(token_a: Token, token_b: Token) -> tuple[Token, Token]:
    """Return the pair in canonical (token0, token1) order."""
    return (token_a, token_b) if token_a.sorts_before(token_b) else (token_b, token_a)


__all__ = ["Token", "NativeCurrency", "Currency", "sort_tokens"]
