"""
Tests for the argument notation parser.

Tests cover:
- Segment splitting and malformed entries
- Type tag mapping
- Array literals
- All-or-nothing parsing
- Custom scalar decoders
- format_notation
"""

import pytest

from ethsdk.codec import ArgType, ArgumentSpec, ScalarDecoder, format_notation, parse
from ethsdk.codec.notation import _SCALAR_DECODERS
from ethsdk.errors import (
    HexFormatError,
    MalformedEntryError,
    NumericFormatError,
    ParseError,
    UnsupportedTypeError,
)


# =============================================================================
# ArgType Tests
# =============================================================================


class TestArgType:
    """Tests for the closed set of type tags."""

    def test_from_tag_known(self) -> None:
        assert ArgType.from_tag("uint256") is ArgType.UINT256
        assert ArgType.from_tag("address[]") is ArgType.ADDRESS_ARRAY

    @pytest.mark.parametrize("tag", ["uint8", "uint256[2]", "string[]", "bool", "", "UINT256"])
    def test_from_tag_unknown(self, tag: str) -> None:
        with pytest.raises(UnsupportedTypeError) as exc_info:
            ArgType.from_tag(tag)

        assert exc_info.value.type_tag == tag
        assert exc_info.value.code == "UNSUPPORTED_TYPE"

    def test_array_element(self) -> None:
        assert ArgType.BYTES32_ARRAY.is_array is True
        assert ArgType.BYTES32_ARRAY.element is ArgType.BYTES32
        assert ArgType.STRING.is_array is False
        assert ArgType.STRING.element is ArgType.STRING

    @pytest.mark.parametrize("arg_type", list(ArgType))
    def test_every_type_has_a_decoder(self, arg_type: ArgType) -> None:
        method = _SCALAR_DECODERS[arg_type.element]
        assert callable(getattr(ScalarDecoder(), method))


# =============================================================================
# Parse Tests
# =============================================================================


class TestParse:
    """Tests for parse()."""

    def test_mixed_arguments(self) -> None:
        """Test parsing every scalar tag in one notation string."""
        spec = parse(
            'uint256:123;bytes:0x1234;string:"hello world";'
            "bytes32:0x01;address:0x0000000000000000000000000000000000000001;"
        )

        assert spec.types == ["uint256", "bytes", "string", "bytes32", "address"]
        assert spec.values == [
            123,
            b"\x12\x34",
            "hello world",
            b"\x00" * 31 + b"\x01",
            "0x0000000000000000000000000000000000000001",
        ]

    def test_empty_notation(self) -> None:
        assert len(parse("")) == 0
        assert parse(";") == ArgumentSpec()

    def test_empty_segments_skipped(self) -> None:
        spec = parse(";;uint256:1;;uint256:2")
        assert spec.values == [1, 2]

    def test_trailing_semicolon_optional(self) -> None:
        assert parse("uint256:7;") == parse("uint256:7")

    def test_argument_access(self) -> None:
        spec = parse("uint256:1;string:x")

        assert spec[1].type is ArgType.STRING
        assert [arg.value for arg in spec] == [1, "x"]

    @pytest.mark.parametrize("segment", ["uint256", "string:a:b", "a:b:c"])
    def test_malformed_segment(self, segment: str) -> None:
        """Test segments that do not split into exactly two parts."""
        with pytest.raises(MalformedEntryError) as exc_info:
            parse(segment)

        assert exc_info.value.segment == segment
        assert exc_info.value.code == "MALFORMED_ENTRY"

    def test_empty_value(self) -> None:
        with pytest.raises(NumericFormatError):
            parse("uint256:")

    def test_empty_tag(self) -> None:
        with pytest.raises(UnsupportedTypeError):
            parse(":")

    def test_colon_in_string_rejected(self) -> None:
        with pytest.raises(MalformedEntryError):
            parse('string:"a:b"')

    @pytest.mark.parametrize("notation", ["uint8:1", "uint256[2]:1,2", "string[]:a,b"])
    def test_unsupported_tag(self, notation: str) -> None:
        with pytest.raises(UnsupportedTypeError):
            parse(notation)

    def test_all_or_nothing(self) -> None:
        """A single bad entry rejects the whole notation."""
        with pytest.raises(NumericFormatError):
            parse("uint256:1;bytes:0x12;uint256:x")

    def test_non_string_rejected(self) -> None:
        with pytest.raises(ParseError):
            parse(b"uint256:1")  # type: ignore[arg-type]


# =============================================================================
# Array Tests
# =============================================================================


class TestArrays:
    """Tests for array tags."""

    def test_uint256_array(self) -> None:
        assert parse("uint256[]:1,2,3").values == [[1, 2, 3]]

    def test_single_trailing_comma_stripped(self) -> None:
        assert parse("uint256[]:1,2,3,").values == [[1, 2, 3]]

    def test_comma_only_bytes_array(self) -> None:
        """Comma-only literal decodes as one element read from an empty string."""
        assert parse("bytes[]:,").values == [[b""]]

    def test_comma_only_uint256_array(self) -> None:
        with pytest.raises(NumericFormatError):
            parse("uint256[]:,")

    def test_bytes32_array_padded(self) -> None:
        values = parse("bytes32[]:0x01,0xff").values[0]
        assert values == [b"\x00" * 31 + b"\x01", b"\x00" * 31 + b"\xff"]

    def test_address_array(self) -> None:
        values = parse("address[]:0x01,0x02").values[0]
        assert values == [
            "0x0000000000000000000000000000000000000001",
            "0x0000000000000000000000000000000000000002",
        ]

    def test_bad_element_rejects_array(self) -> None:
        with pytest.raises(HexFormatError):
            parse("bytes[]:0x12,0x123")


# =============================================================================
# Custom Decoder Tests
# =============================================================================


class TestCustomDecoder:
    """Tests for replacing scalar decoders."""

    def test_subclass_override(self) -> None:
        class UpperStrings(ScalarDecoder):
            def string(self, literal: str) -> str:
                return super().string(literal).upper()

        spec = parse('string:"abc";uint256:1', UpperStrings())
        assert spec.values == ["ABC", 1]

    def test_override_applies_to_arrays(self) -> None:
        class DoubledInts(ScalarDecoder):
            def uint256(self, literal: str) -> int:
                return 2 * super().uint256(literal)

        assert parse("uint256[]:1,2", DoubledInts()).values == [[2, 4]]


# =============================================================================
# format_notation Tests
# =============================================================================


class TestFormatNotation:
    """Tests for building notation strings."""

    @pytest.mark.parametrize("n", [0, 1, 255, 10**18, 2**63 - 1])
    def test_integer_round_trip(self, n: int) -> None:
        assert parse(format_notation([("uint256", n)])).values == [n]

    def test_mixed(self) -> None:
        notation = format_notation([
            ("string", "hi"),
            ("bytes", b"\xab\xcd"),
            (ArgType.UINT256_ARRAY, [1, 2]),
            ("address", "0x0000000000000000000000000000000000000001"),
        ])

        assert notation == (
            'string:"hi";bytes:0xabcd;uint256[]:1,2;'
            "address:0x0000000000000000000000000000000000000001"
        )

    def test_delimiter_in_value_rejected(self) -> None:
        with pytest.raises(ParseError):
            format_notation([("string", "a;b")])

        with pytest.raises(ParseError):
            format_notation([("string", "a:b")])

    def test_unknown_tag(self) -> None:
        with pytest.raises(UnsupportedTypeError):
            format_notation([("bool", True)])
