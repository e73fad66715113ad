"""
Exception hierarchy for ethsdk.

All exceptions derive from SDKError and carry a machine-readable code.
"""

from ethsdk.errors.base import SDKError
from ethsdk.errors.codec import (
    DecodeError,
    EncodeError,
    HexFormatError,
    InterfaceError,
    MalformedEntryError,
    NumericFormatError,
    ParseError,
    UnsupportedTypeError,
)
from ethsdk.errors.transaction import (
    ChainIdError,
    ConfigurationError,
    ConfirmationTimeoutError,
    InvalidAddressError,
    InvalidKeyError,
    KeystoreError,
    NetworkError,
)

__all__ = [
    "SDKError",
    # Notation / ABI
    "ParseError",
    "MalformedEntryError",
    "NumericFormatError",
    "HexFormatError",
    "UnsupportedTypeError",
    "InterfaceError",
    "EncodeError",
    "DecodeError",
    # Transactions
    "InvalidKeyError",
    "InvalidAddressError",
    "KeystoreError",
    "ConfigurationError",
    "NetworkError",
    "ChainIdError",
    "ConfirmationTimeoutError",
]
