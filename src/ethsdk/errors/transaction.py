"""
Transaction lifecycle exceptions.

None of these are retried automatically. ConfirmationTimeoutError is kept
apart from NetworkError because a timed-out transaction may still be pending.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ethsdk.errors.base import SDKError


class InvalidKeyError(SDKError):
    """
    Raised when a private key cannot be converted to an account.

    The key itself is never included in the message.
    """

    def __init__(
        self,
        message: str = "Invalid private key format (key not shown for security)",
        *,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code="INVALID_KEY", details=details)


class KeystoreError(SDKError):
    """Raised when an encrypted key file cannot be read or decrypted."""

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if path:
            details["path"] = path

        super().__init__(message, code="KEYSTORE_ERROR", details=details)
        self.path = path


class InvalidAddressError(SDKError):
    """
    Raised when a recipient, contract or account address is malformed.

    Example:
        >>> raise InvalidAddressError("0x1234", field="to")
    """

    def __init__(
        self,
        address: object,
        *,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        details["address"] = str(address)
        if field:
            details["field"] = field

        label = f" for {field}" if field else ""
        super().__init__(f"Invalid address{label}: {address!r}", code="INVALID_ADDRESS", details=details)
        self.address = address
        self.field = field


class ConfigurationError(SDKError):
    """Raised for invalid manager configuration or a late configuration change."""

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field

        super().__init__(message, code="CONFIGURATION_ERROR", details=details)
        self.field = field


class NetworkError(SDKError):
    """
    Raised when a chain client request fails.

    Covers dialing, nonce and gas price queries, submission, simulated calls
    and receipt lookups other than "not yet mined".

    Example:
        >>> raise NetworkError("eth_sendRawTransaction failed", operation="submit")
    """

    def __init__(
        self,
        message: str,
        *,
        operation: Optional[str] = None,
        tx_hash: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if operation:
            details["operation"] = operation

        super().__init__(message, code="NETWORK_ERROR", tx_hash=tx_hash, details=details)
        self.operation = operation


class ChainIdError(NetworkError):
    """Raised when the chain id cannot be resolved while connecting."""

    def __init__(
        self,
        message: str = "Failed to resolve chain id",
        *,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, operation="chain_id", details=details)
        self.code = "CHAIN_ID_ERROR"


class ConfirmationTimeoutError(SDKError):
    """
    Raised when a transaction receipt does not appear before the deadline.

    The transaction is not known to have failed; it may still be mined later.

    Example:
        >>> raise ConfirmationTimeoutError("0xabc...", 120)
    """

    def __init__(
        self,
        tx_hash: str,
        timeout: float,
        *,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        details["timeout_seconds"] = timeout

        super().__init__(
            f"Transaction {tx_hash} not confirmed within {timeout}s",
            code="CONFIRMATION_TIMEOUT",
            tx_hash=tx_hash,
            details=details,
        )
        self.timeout = timeout
