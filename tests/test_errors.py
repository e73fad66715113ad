"""
Tests for the exception hierarchy.
"""

import pytest

from ethsdk.errors import (
    ChainIdError,
    ConfirmationTimeoutError,
    DecodeError,
    EncodeError,
    HexFormatError,
    InvalidAddressError,
    MalformedEntryError,
    NetworkError,
    NumericFormatError,
    ParseError,
    SDKError,
    UnsupportedTypeError,
)


class TestSDKError:
    """Tests for the base exception."""

    def test_str_includes_code_and_full_hash(self) -> None:
        tx_hash = "0x" + "ab" * 32
        error = SDKError("boom", code="X", tx_hash=tx_hash)

        assert str(error) == f"[X] boom (tx: {tx_hash})"

    def test_str_shows_context_missing_from_message(self) -> None:
        error = NetworkError("Transaction manager is closed", operation="submit")
        assert str(error) == "[NETWORK_ERROR] Transaction manager is closed (operation: submit)"

    def test_str_does_not_repeat_context(self) -> None:
        error = EncodeError("transfer", "argument count mismatch")
        assert str(error) == "[ENCODE_ERROR] encode transfer: argument count mismatch"

    def test_to_dict(self) -> None:
        error = SDKError("boom", details={"a": 1})

        assert error.to_dict() == {
            "error": "SDKError",
            "code": "SDK_ERROR",
            "message": "boom",
            "tx_hash": None,
            "details": {"a": 1},
        }


class TestCodecErrors:
    """Tests for notation and ABI errors."""

    @pytest.mark.parametrize(
        "error,code",
        [
            (MalformedEntryError("x"), "MALFORMED_ENTRY"),
            (NumericFormatError("x"), "NUMERIC_FORMAT"),
            (HexFormatError("x"), "HEX_FORMAT"),
            (UnsupportedTypeError("x"), "UNSUPPORTED_TYPE"),
        ],
    )
    def test_parse_error_subclasses(self, error: ParseError, code: str) -> None:
        assert isinstance(error, ParseError)
        assert error.code == code

    def test_unsupported_type_names_function(self) -> None:
        error = UnsupportedTypeError("uint256[2]", function_name="setPair(uint256[2])")

        assert error.message == "Not supported type: uint256[2] (in setPair(uint256[2]))"
        assert error.details == {"type": "uint256[2]", "function": "setPair(uint256[2])"}

    def test_encode_error_names_constructor(self) -> None:
        assert EncodeError("", "argument count mismatch").message == "encode constructor: argument count mismatch"

    def test_decode_error(self) -> None:
        error = DecodeError("balanceOf", "insufficient data")

        assert error.code == "DECODE_ERROR"
        assert error.details["function"] == "balanceOf"


class TestTransactionErrors:
    """Tests for transaction lifecycle errors."""

    def test_chain_id_error_is_network_error(self) -> None:
        error = ChainIdError()

        assert isinstance(error, NetworkError)
        assert error.operation == "chain_id"
        assert error.code == "CHAIN_ID_ERROR"

    def test_confirmation_timeout(self) -> None:
        error = ConfirmationTimeoutError("0xabc", 120)

        assert error.tx_hash == "0xabc"
        assert error.timeout == 120
        assert error.details["timeout_seconds"] == 120
        assert not isinstance(error, NetworkError)

    def test_invalid_address(self) -> None:
        error = InvalidAddressError("0x1234", field="to")

        assert error.code == "INVALID_ADDRESS"
        assert error.details == {"address": "0x1234", "field": "to"}
        assert str(error) == "[INVALID_ADDRESS] Invalid address for to: '0x1234'"
