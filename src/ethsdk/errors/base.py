"""
Base exception class for ethsdk.

Every error raised by a public operation is an SDKError. The code is stable
and meant for programmatic handling; the message is for people. Context such
as the function being encoded or the failing client request is kept in
``details``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

# details keys shown by str() when the message does not already name them
_CONTEXT_KEYS = ("function", "operation", "field")


class SDKError(Exception):
    """
    Base exception for all ethsdk errors.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code (e.g., "HEX_FORMAT").
        tx_hash: Transaction the error refers to, if any. Shown in full so a
            timed-out transaction can still be looked up.
        details: Additional context (function, operation, literal, ...).

    Example:
        >>> str(SDKError("node unreachable", code="NETWORK_ERROR", details={"operation": "dial"}))
        '[NETWORK_ERROR] node unreachable (operation: dial)'
    """

    def __init__(
        self,
        message: str,
        *,
        code: str = "SDK_ERROR",
        tx_hash: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.tx_hash = tx_hash
        self.details = details or {}

    def __str__(self) -> str:
        parts = [f"[{self.code}] {self.message}"]
        for key in _CONTEXT_KEYS:
            value = self.details.get(key)
            if value and str(value) not in self.message:
                parts.append(f"({key}: {value})")
        if self.tx_hash:
            parts.append(f"(tx: {self.tx_hash})")
        return " ".join(parts)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"code={self.code!r}, "
            f"message={self.message!r}, "
            f"tx_hash={self.tx_hash!r}, "
            f"details={self.details!r})"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form, e.g. for structured logs."""
        return {
            "error": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "tx_hash": self.tx_hash,
            "details": self.details,
        }
