"""Shared type definitions for Muffin models.

These types are used by the chain-data models and the currency types.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from muffin.constants import MAX_UINT256

# Python ints are unbounded; signed on-chain values fit in int256
INT256_MIN = -(1 << 255)
INT256_MAX = (1 << 255) - 1


def _parse_int(value: Any) -> int:
    # bool is an int subclass but never a valid on-chain integer
    if isinstance(value, bool):
        raise ValueError(f"Expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text, 16) if text.lower().startswith(("0x", "-0x")) else int(text)
        except ValueError as err:
            raise ValueError(f"Expected a decimal or hex integer string, got '{value}'") from err
    raise ValueError(f"Expected int or string, got {type(value).__name__}")


def validate_uint256(value: Any) -> int:
    """Validate that a value is a uint256 given as int, decimal string or hex string.

    Raises:
        ValueError: If value is not a non-negative integer within uint256 range
    """
    int_value = _parse_int(value)
    if int_value < 0:
        raise ValueError(f"Uint256 cannot be negative: {value}")
    if int_value > MAX_UINT256:
        raise ValueError(f"Uint256 overflow: {value} > 2^256-1")
    return int_value


def validate_int256(value: Any) -> int:
    """Validate that a value is an int256 given as int, decimal string or hex string."""
    int_value = _parse_int(value)
    if not INT256_MIN <= int_value <= INT256_MAX:
        raise ValueError(f"Int256 out of range: {value}")
    return int_value


# 256-bit unsigned integer, accepted as int or numeric string
Uint256 = Annotated[
    int,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer"),
]

# 256-bit signed integer, accepted as int or numeric string
Int256 = Annotated[
    int,
    BeforeValidator(validate_int256),
    Field(description="256-bit signed integer"),
]

# Ethereum address (40 hex chars after 0x prefix)
Address = Annotated[str, Field(pattern=r"^0x[a-fA-F0-9]{40}$")]


def normalize_address(address: str, *, validate: bool = False) -> str:
    """Normalize an Ethereum address to lowercase with 0x prefix.

    Raises:
        ValueError: If validate=True and address is not a valid Ethereum address
    """
    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr

    if validate and not is_valid_address(addr):
        raise ValueError(f"Invalid address: {address}")

    return addr


def is_valid_address(address: str) -> bool:
    """Check if a string is a valid Ethereum address."""
    if not isinstance(address, str):
        return False
    if not address.startswith("0x"):
        return False
    if len(address) != 42:
        return False
    try:
        int(address, 16)
        return True
    except ValueError:
        return False


__all__ = [
    "Uint256",
    "Int256",
    "Address",
    "validate_uint256",
    "validate_int256",
    "normalize_address",
    "is_valid_address",
]
