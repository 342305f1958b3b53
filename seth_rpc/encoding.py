"""
Hex encoding helpers for Ethereum JSON-RPC values.

QUANTITY values are `0x`-prefixed, minimal-width, lowercase hex integers.
DATA values are `0x`-prefixed hex byte strings. Results are built by
composing `hex_prefix(bytes_to_hex_str(b))`.
"""

from typing import Union

from .constants import HEX_PREFIX


def num_to_hex(n: int) -> str:
    """
    Encode a non-negative integer as a QUANTITY.

    Args:
        n: Integer to encode

    Returns:
        `0x`-prefixed hex with no leading zeros (`0` → `"0x0"`)
    """
    if n < 0:
        raise ValueError(f"Cannot encode negative quantity: {n}")
    return hex_prefix(format(n, "x"))


def bytes_to_hex_str(data: Union[bytes, bytearray, memoryview]) -> str:
    """Lowercase hex of *data*, without prefix."""
    return bytes(data).hex()


def hex_prefix(hex_str: str) -> str:
    return HEX_PREFIX + hex_str


def strip_0x(hex_str: str) -> str:
    """Remove 0x prefix if present."""
    return hex_str[2:] if hex_str.startswith(("0x", "0X")) else hex_str


def hex_str_to_bytes(hex_str: str) -> bytes:
    """
    Decode a bare or `0x`-prefixed hex string.

    Raises:
        ValueError: odd length or non-hex characters
    """
    return bytes.fromhex(strip_0x(hex_str))
