"""Constants for ethsdk.

This module defines the defaults used across the SDK: ABI layout sizes,
gas limits, confirmation polling policy and provider timeouts.
"""

# ABI Encoding Constants
ABI_SELECTOR_LENGTH = 4
ABI_WORD_LENGTH = 32
REVERT_SELECTOR = "0x08c379a0"

# Ethereum Constants
ADDRESS_LENGTH = 20
BYTES32_HEX_LENGTH = 64
BYTES32_LENGTH = 32

# uint256 literals must fit a signed 64-bit integer
MAX_UINT256_LITERAL = 2**63 - 1

# Gas Constants
DEFAULT_GAS_LIMIT = 450_000
TRANSFER_GAS_LIMIT = 21_000

# Confirmation Polling
DEFAULT_TIMEOUT_SECONDS = 120
DEFAULT_INTERVAL_SECONDS = 2

# Network Constants
DIAL_TIMEOUT_SECONDS = 5

__all__ = [
    "ABI_SELECTOR_LENGTH",
    "ABI_WORD_LENGTH",
    "REVERT_SELECTOR",
    "ADDRESS_LENGTH",
    "BYTES32_HEX_LENGTH",
    "BYTES32_LENGTH",
    "MAX_UINT256_LITERAL",
    "DEFAULT_GAS_LIMIT",
    "TRANSFER_GAS_LIMIT",
    "DEFAULT_TIMEOUT_SECONDS",
    "DEFAULT_INTERVAL_SECONDS",
    "DIAL_TIMEOUT_SECONDS",
]
