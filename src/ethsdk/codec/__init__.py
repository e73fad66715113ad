"""
Typed argument codec.

Converts ``<type>:<value>;...`` notation strings into typed values for the
ABI codec, and pairs decoded return values with their declared types.
"""

from ethsdk.codec.notation import (
    Argument,
    ArgumentSpec,
    ArgType,
    TypedValue,
    decode_value,
    format_notation,
    parse,
)
from ethsdk.codec.returns import ReturnValue, serialize_return
from ethsdk.codec.scalars import ScalarDecoder, decode_hex_string, strip_hex_prefix

__all__ = [
    # Notation
    "ArgType",
    "Argument",
    "ArgumentSpec",
    "TypedValue",
    "parse",
    "decode_value",
    "format_notation",
    # Scalars
    "ScalarDecoder",
    "decode_hex_string",
    "strip_hex_prefix",
    # Returns
    "ReturnValue",
    "serialize_return",
]
