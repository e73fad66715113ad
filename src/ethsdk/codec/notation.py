"""
Argument notation parser.

The notation is a compact, human-typeable encoding of contract call
arguments::

    uint256:123;bytes:0x1234;string:"hello";address:0xd69c...;uint256[]:1,2,3;

Each ``;``-separated segment is ``<type>:<value>``. Array values are
``,``-separated with the same per-element syntax as the scalar form. Strings
are double-quote delimited, and no literal may contain ``:`` or ``;``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from ethsdk.codec.scalars import DEFAULT_DECODER, ScalarDecoder
from ethsdk.errors import MalformedEntryError, ParseError, UnsupportedTypeError
from ethsdk.utils.logging import get_logger

_logger = get_logger(__name__)


class ArgType(str, Enum):
    """Closed set of notation type tags."""

    UINT256 = "uint256"
    BYTES = "bytes"
    BYTES32 = "bytes32"
    STRING = "string"
    ADDRESS = "address"
    UINT256_ARRAY = "uint256[]"
    BYTES_ARRAY = "bytes[]"
    BYTES32_ARRAY = "bytes32[]"
    ADDRESS_ARRAY = "address[]"

    @property
    def is_array(self) -> bool:
        return self.value.endswith("[]")

    @property
    def element(self) -> "ArgType":
        """Scalar element type (the type itself for scalars)."""
        if self.is_array:
            return ArgType(self.value[:-2])
        return self

    @classmethod
    def from_tag(cls, tag: str) -> "ArgType":
        """
        Map a notation tag to its ArgType.

        Raises:
            UnsupportedTypeError: For tags outside the closed set
        """
        try:
            return cls(tag)
        except ValueError:
            raise UnsupportedTypeError(tag) from None


TypedValue = Union[int, bytes, str, List[int], List[bytes], List[str]]

# ScalarDecoder method used for each element type
_SCALAR_DECODERS: Dict[ArgType, str] = {
    ArgType.UINT256: "uint256",
    ArgType.BYTES: "bytes",
    ArgType.BYTES32: "bytes32",
    ArgType.STRING: "string",
    ArgType.ADDRESS: "address",
}


@dataclass(frozen=True)
class Argument:
    """One parsed ``<type>:<value>`` entry."""

    type: ArgType
    value: TypedValue


@dataclass(frozen=True)
class ArgumentSpec:
    """
    Ordered arguments parsed from a single notation string.

    Example:
        >>> spec = parse('uint256:5;string:"hi"')
        >>> spec.values
        [5, 'hi']
    """

    arguments: Tuple[Argument, ...] = ()

    def __len__(self) -> int:
        return len(self.arguments)

    def __iter__(self) -> Iterator[Argument]:
        return iter(self.arguments)

    def __getitem__(self, index: int) -> Argument:
        return self.arguments[index]

    @property
    def types(self) -> List[str]:
        """ABI type names, in order."""
        return [arg.type.value for arg in self.arguments]

    @property
    def values(self) -> List[TypedValue]:
        """Native values, in order."""
        return [arg.value for arg in self.arguments]


def decode_value(arg_type: ArgType, literal: str, decoder: Optional[ScalarDecoder] = None) -> TypedValue:
    """
    Decode one literal for ``arg_type``.

    Array literals have a single trailing ``,`` stripped before splitting, so
    an empty or comma-only literal decodes as one element read from ``""``.
    """
    decoder = decoder or DEFAULT_DECODER
    decode_scalar: Callable[[str], Any] = getattr(decoder, _SCALAR_DECODERS[arg_type.element])

    if not arg_type.is_array:
        return decode_scalar(literal)

    if literal.endswith(","):
        literal = literal[:-1]
    return [decode_scalar(item) for item in literal.split(",")]


def parse(notation: str, decoder: Optional[ScalarDecoder] = None) -> ArgumentSpec:
    """
    Parse argument notation into an ArgumentSpec.

    Args:
        notation: ``<type>:<value>;...`` string; empty for no arguments
        decoder: Scalar decoder to use (default: ScalarDecoder())

    Returns:
        Parsed arguments; nothing is returned unless every entry decodes

    Raises:
        MalformedEntryError: If a segment is not exactly ``<type>:<value>``
        UnsupportedTypeError: For an unknown type tag
        NumericFormatError: For a bad uint256 literal
        HexFormatError: For a bad hex, bytes32 or address literal
    """
    if not isinstance(notation, str):
        raise ParseError(f"notation must be a string, got {type(notation).__name__}")

    if notation.endswith(";"):
        notation = notation[:-1]
    if not notation:
        return ArgumentSpec()

    arguments: List[Argument] = []
    for segment in notation.split(";"):
        if not segment:
            continue

        parts = segment.split(":")
        if len(parts) != 2:
            raise MalformedEntryError(segment)
        tag, literal = parts

        arg_type = ArgType.from_tag(tag)
        value = decode_value(arg_type, literal, decoder)
        _logger.debug("Parsed argument", extra={"arg_type": arg_type.value, "index": len(arguments)})
        arguments.append(Argument(arg_type, value))

    return ArgumentSpec(tuple(arguments))


def _format_scalar(arg_type: ArgType, value: Any) -> str:
    if arg_type is ArgType.UINT256:
        return str(int(value))
    if arg_type is ArgType.STRING:
        return f'"{value}"'
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    return str(value)


def format_notation(pairs: Iterable[Tuple[Union[str, ArgType], Any]]) -> str:
    """
    Build a notation string from ``(type, value)`` pairs.

    Example:
        >>> format_notation([("address", "0x00000000000000000000000000000000000000ff"), ("uint256", 3)])
        'address:0x00000000000000000000000000000000000000ff;uint256:3'

    Raises:
        UnsupportedTypeError: For an unknown type tag
        ParseError: If a value contains a notation delimiter
    """
    segments = []
    for tag, value in pairs:
        arg_type = tag if isinstance(tag, ArgType) else ArgType.from_tag(tag)
        if arg_type.is_array:
            items: Sequence[Any] = value
            literal = ",".join(_format_scalar(arg_type.element, item) for item in items)
        else:
            literal = _format_scalar(arg_type, value)

        if ";" in literal or ":" in literal:
            raise ParseError(f"{arg_type.value} value contains a notation delimiter", segment=literal)
        segments.append(f"{arg_type.value}:{literal}")
    return ";".join(segments)
