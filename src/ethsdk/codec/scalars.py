"""
Scalar literal decoders for the argument notation.

ScalarDecoder turns one literal string into the native value the ABI codec
expects. The notation parser takes a decoder instance, so callers may
subclass it to change how literals are read.
"""

from __future__ import annotations

import re

from eth_utils import to_checksum_address

from ethsdk.constants import ADDRESS_LENGTH, BYTES32_HEX_LENGTH, BYTES32_LENGTH, MAX_UINT256_LITERAL
from ethsdk.errors import HexFormatError, NumericFormatError

_DECIMAL_RE = re.compile(r"^[0-9]+$")
_HEX_RE = re.compile(r"^[0-9a-fA-F]*$")


def strip_hex_prefix(value: str) -> str:
    """Remove a leading ``0x`` if present."""
    return value[2:] if value.startswith("0x") else value


def decode_hex_string(value: str) -> bytes:
    """
    Decode a hex string with or without ``0x``.

    Args:
        value: Hex literal, digits in either case

    Returns:
        Decoded bytes (empty for an empty body)

    Raises:
        HexFormatError: If the body has odd length or non-hex characters
    """
    body = strip_hex_prefix(value)
    if len(body) % 2 != 0:
        raise HexFormatError(value, reason="input length is not even")
    if not _HEX_RE.match(body):
        raise HexFormatError(value, reason="invalid hex")
    return bytes.fromhex(body)


class ScalarDecoder:
    """
    Decoders for the five scalar notation types.

    Example:
        >>> ScalarDecoder().bytes32("0x01")[-1]
        1
    """

    def uint256(self, literal: str) -> int:
        """Decimal digits only; values must fit a signed 64-bit integer."""
        if not _DECIMAL_RE.match(literal):
            raise NumericFormatError(literal)
        value = int(literal)
        if value > MAX_UINT256_LITERAL:
            raise NumericFormatError(literal, reason="uint256 value out of 64-bit range")
        return value

    def bytes(self, literal: str) -> bytes:
        return decode_hex_string(literal)

    def bytes32(self, literal: str) -> bytes:
        """Hex up to 32 bytes, left-padded with zeros to exactly 32."""
        if len(strip_hex_prefix(literal)) > BYTES32_HEX_LENGTH:
            raise HexFormatError(literal, reason="bytes32 value greater than 32 bytes")
        return decode_hex_string(literal).rjust(BYTES32_LENGTH, b"\x00")

    def string(self, literal: str) -> str:
        return literal.strip('"')

    def address(self, literal: str) -> str:
        """
        Hex address, not length-checked.

        Longer input keeps the trailing 20 bytes and shorter input is
        left-padded, so ``0x01`` is a valid address.
        """
        raw = decode_hex_string(literal)[-ADDRESS_LENGTH:]
        return to_checksum_address(raw.rjust(ADDRESS_LENGTH, b"\x00"))


DEFAULT_DECODER = ScalarDecoder()
