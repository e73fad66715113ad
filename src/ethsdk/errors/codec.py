"""
Notation and ABI codec exceptions.

ParseError and its subclasses are raised by the argument notation parser;
they are local, non-retryable rejections. InterfaceError, EncodeError and
DecodeError are raised by the ABI adapter.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ethsdk.errors.base import SDKError


class ParseError(SDKError):
    """
    Base exception for malformed argument notation.

    Example:
        >>> raise ParseError("notation is not a string")
    """

    def __init__(
        self,
        message: str,
        *,
        segment: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if segment is not None:
            details["segment"] = segment

        super().__init__(message, code="PARSE_ERROR", details=details)
        self.segment = segment


class MalformedEntryError(ParseError):
    """
    Raised when a notation segment is not exactly ``<type>:<value>``.

    Example:
        >>> raise MalformedEntryError("uint256")
    """

    def __init__(
        self,
        segment: str,
        *,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            f"Malformed argument entry {segment!r}: expected <type>:<value>",
            segment=segment,
            details=details,
        )
        self.code = "MALFORMED_ENTRY"


class NumericFormatError(ParseError):
    """Raised when a uint256 literal is not a supported decimal number."""

    def __init__(
        self,
        literal: str,
        *,
        reason: str = "uint256 value format error",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        details["literal"] = literal
        details["reason"] = reason

        super().__init__(f"{reason}: {literal!r}", details=details)
        self.code = "NUMERIC_FORMAT"
        self.literal = literal
        self.reason = reason


class HexFormatError(ParseError):
    """Raised when a hex literal is odd-length, non-hex or oversized."""

    def __init__(
        self,
        literal: str,
        *,
        reason: str = "invalid hex",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        details["literal"] = literal
        details["reason"] = reason

        super().__init__(f"{reason}: {literal!r}", details=details)
        self.code = "HEX_FORMAT"
        self.literal = literal
        self.reason = reason


class UnsupportedTypeError(ParseError):
    """
    Raised for a type tag outside the supported set.

    Raised by the notation parser for unknown tags and by the ABI adapter
    for functions that declare unsupported parameter types.

    Example:
        >>> raise UnsupportedTypeError("uint256[2]")
    """

    def __init__(
        self,
        type_tag: str,
        *,
        function_name: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        details["type"] = type_tag
        if function_name is not None:
            details["function"] = function_name

        message = f"Not supported type: {type_tag}"
        if function_name:
            message += f" (in {function_name})"

        super().__init__(message, details=details)
        self.code = "UNSUPPORTED_TYPE"
        self.type_tag = type_tag
        self.function_name = function_name


class InterfaceError(SDKError):
    """Raised when a contract interface description cannot be parsed."""

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code="INTERFACE_ERROR", details=details)


class EncodeError(SDKError):
    """
    Raised when arguments cannot be packed for a function.

    Wraps arity/type mismatches and collaborator encoding failures, always
    naming the attempted function.
    """

    def __init__(
        self,
        function_name: str,
        reason: str,
        *,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        details["function"] = function_name

        label = function_name or "constructor"
        super().__init__(f"encode {label}: {reason}", code="ENCODE_ERROR", details=details)
        self.function_name = function_name
        self.reason = reason


class DecodeError(SDKError):
    """Raised when return data cannot be unpacked for a function."""

    def __init__(
        self,
        function_name: str,
        reason: str,
        *,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        details["function"] = function_name

        super().__init__(
            f"decode {function_name}: {reason}", code="DECODE_ERROR", details=details
        )
        self.function_name = function_name
        self.reason = reason
