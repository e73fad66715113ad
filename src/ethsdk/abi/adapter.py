"""
ABI adapter.

Bridges the argument notation to the ABI binary codec. Packing and unpacking
are delegated to ``eth_abi``; this module only selects the function, checks
the parsed arguments against its declaration and wraps collaborator errors.
"""

from __future__ import annotations

from typing import Any, List, Optional, Union

import eth_abi
from eth_abi.exceptions import DecodingError, EncodingError
from eth_abi.exceptions import ParseError as ABITypeParseError

from ethsdk.abi.interface import FunctionSpec, InterfaceDescription, load_interface
from ethsdk.codec.notation import ArgType, ArgumentSpec, parse
from ethsdk.codec.returns import ReturnValue, serialize_return
from ethsdk.codec.scalars import ScalarDecoder, decode_hex_string
from ethsdk.errors import DecodeError, EncodeError, HexFormatError, UnsupportedTypeError
from ethsdk.utils.logging import get_logger

_logger = get_logger(__name__)

_SUPPORTED_TYPES = frozenset(t.value for t in ArgType)


def _check_supported(fn: FunctionSpec) -> None:
    for declared in fn.inputs:
        if declared not in _SUPPORTED_TYPES:
            raise UnsupportedTypeError(declared, function_name=fn.signature)


def _resolve_for_encode(description: InterfaceDescription, function_name: str, spec: ArgumentSpec) -> FunctionSpec:
    """Pick the overload to encode: by arity first, then by exact types."""
    candidates = load_interface(description).overloads(function_name)
    if not candidates:
        raise EncodeError(function_name, "method not found")

    by_arity = [fn for fn in candidates if len(fn.inputs) == len(spec)]
    if not by_arity:
        for fn in candidates:
            _check_supported(fn)
        expected = " or ".join(sorted({str(len(fn.inputs)) for fn in candidates}))
        raise EncodeError(function_name, f"argument count mismatch: expected {expected}, got {len(spec)}")

    exact = [fn for fn in by_arity if list(fn.inputs) == spec.types]
    return exact[0] if exact else by_arity[0]


def _resolve_for_decode(description: InterfaceDescription, function_name: str) -> FunctionSpec:
    candidates = load_interface(description).overloads(function_name)
    if not candidates or function_name == "":
        raise DecodeError(function_name, "method not found")
    if len({fn.outputs for fn in candidates}) > 1:
        raise DecodeError(function_name, "ambiguous overload, pass the full signature")
    return candidates[0]


def encode(description: InterfaceDescription, function_name: str, spec: ArgumentSpec) -> bytes:
    """
    Encode a call to ``function_name`` with parsed arguments.

    An empty ``function_name`` encodes constructor arguments, which carry no
    selector. For a function the result is the 4-byte selector followed by
    the ABI-encoded arguments.

    Args:
        description: Contract interface (JSON text, entry list or artifact)
        function_name: Function name, full signature, or "" for the constructor
        spec: Parsed arguments

    Returns:
        Call data

    Raises:
        InterfaceError: If the description cannot be parsed
        UnsupportedTypeError: If the function declares an unsupported input type
        EncodeError: On unknown function, arity or type mismatch, or codec failure
    """
    fn = _resolve_for_encode(description, function_name, spec)
    _check_supported(fn)

    for index, (declared, given) in enumerate(zip(fn.inputs, spec.types)):
        if declared != given:
            raise EncodeError(
                function_name,
                f"argument {index} has type {given}, expected {declared}",
            )

    try:
        encoded = eth_abi.encode(list(fn.inputs), spec.values)
    except (EncodingError, TypeError, ValueError) as e:
        raise EncodeError(function_name, str(e)) from e

    data = fn.selector + encoded
    _logger.debug(
        "Encoded call",
        extra={"function": fn.signature, "arg_count": len(spec), "data_length": len(data)},
    )
    return data


def pack(
    description: InterfaceDescription,
    function_name: str,
    notation: str,
    decoder: Optional[ScalarDecoder] = None,
) -> bytes:
    """
    Parse ``notation`` and encode a call to ``function_name``.

    Example:
        >>> pack(erc20_abi, "transfer", "address:0x01;uint256:3")[:4].hex()
        'a9059cbb'
    """
    return encode(description, function_name, parse(notation, decoder))


def decode(description: InterfaceDescription, function_name: str, data: Union[bytes, str]) -> List[Any]:
    """
    Decode return data of ``function_name`` against its declared outputs.

    Args:
        description: Contract interface
        function_name: Function name, or full signature for overloads
        data: Return data as bytes or hex string (with or without 0x)

    Returns:
        Decoded values in declaration order

    Raises:
        DecodeError: On unknown function, malformed data or codec failure
    """
    fn = _resolve_for_decode(description, function_name)

    if isinstance(data, str):
        try:
            data = decode_hex_string(data)
        except HexFormatError as e:
            raise DecodeError(function_name, e.message) from e

    try:
        values = eth_abi.decode(list(fn.outputs), bytes(data))
    except (DecodingError, ABITypeParseError, TypeError, ValueError) as e:
        raise DecodeError(function_name, str(e)) from e

    return list(values)


def unpack(description: InterfaceDescription, function_name: str, data: Union[bytes, str]) -> List[ReturnValue]:
    """Decode return data and pair each value with its declared type."""
    fn = _resolve_for_decode(description, function_name)
    return serialize_return(fn.outputs, decode(description, function_name, data))
