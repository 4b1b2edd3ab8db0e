"""Value types and input models for Muffin data."""

from muffin.models.chain_data import Hop, TickChainData, TierChainData
from muffin.models.currency import Currency, NativeCurrency, Token, sort_tokens
from muffin.models.fractions import CurrencyAmount, Price, to_fraction
from muffin.models.types import Address, Int256, Uint256, normalize_address

__all__ = [
    # Types
    "Address",
    "Int256",
    "Uint256",
    "normalize_address",
    # Currencies
    "Currency",
    "NativeCurrency",
    "Token",
    "sort_tokens",
    # Amounts and prices
    "CurrencyAmount",
    "Price",
    "to_fraction",
    # Chain snapshots
    "Hop",
    "TickChainData",
    "TierChainData",
]
