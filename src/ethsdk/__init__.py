"""
ethsdk - EVM contract calls from a compact argument notation.

Quick Start:
    >>> from ethsdk import TransactionManager, TxManagerConfig
    >>> tm = TransactionManager.connect(TxManagerConfig(rpc_url="http://localhost:8545"))
    >>> receipt = tm.write_contract_sync(
    ...     private_key="0x...",
    ...     contract_address="0x...",
    ...     interface=erc20_abi,
    ...     method="transfer",
    ...     args="address:0x...;uint256:1000",
    ... )
    >>> print(receipt.gas_used)

Modules:
- `codec`: Argument notation parser and return value pairing
- `abi`: Contract interfaces and the notation-to-calldata adapter
- `transactions`: TransactionManager, requests and receipts
- `accounts`: Key generation, conversion and keystore export
- `config`: TxManagerConfig and environment loading
- `errors`: Exception hierarchy
- `utils`: Logging and polling helpers
"""

from ethsdk.version import __version__, __version_info__

# Codec
from ethsdk.codec import (
    Argument,
    ArgumentSpec,
    ArgType,
    ReturnValue,
    ScalarDecoder,
    format_notation,
    parse,
    serialize_return,
)

# ABI
from ethsdk.abi import (
    ContractInterface,
    FunctionSpec,
    decode,
    encode,
    load_interface,
    pack,
    unpack,
)

# Transactions
from ethsdk.transactions import (
    Receipt,
    TransactionManager,
    TransactionRequest,
    TxState,
)

# Accounts
from ethsdk.accounts import (
    AccountKeys,
    ExportedAccount,
    export_account,
    export_account_object,
    generate_account,
    hex_to_account,
)

# Config
from ethsdk.config import TxManagerConfig, load_config_from_env

# Errors
from ethsdk.errors import (
    ChainIdError,
    ConfigurationError,
    ConfirmationTimeoutError,
    DecodeError,
    EncodeError,
    HexFormatError,
    InterfaceError,
    InvalidAddressError,
    InvalidKeyError,
    KeystoreError,
    MalformedEntryError,
    NetworkError,
    NumericFormatError,
    ParseError,
    SDKError,
    UnsupportedTypeError,
)

# Utils
from ethsdk.utils import (
    configure_logging,
    disable_logging,
    enable_debug,
    get_logger,
    set_level,
)

__all__ = [
    # Version
    "__version__",
    "__version_info__",
    # Codec
    "ArgType",
    "Argument",
    "ArgumentSpec",
    "ScalarDecoder",
    "ReturnValue",
    "parse",
    "format_notation",
    "serialize_return",
    # ABI
    "ContractInterface",
    "FunctionSpec",
    "load_interface",
    "encode",
    "decode",
    "pack",
    "unpack",
    # Transactions
    "TransactionManager",
    "TransactionRequest",
    "Receipt",
    "TxState",
    # Accounts
    "AccountKeys",
    "ExportedAccount",
    "generate_account",
    "hex_to_account",
    "export_account",
    "export_account_object",
    # Config
    "TxManagerConfig",
    "load_config_from_env",
    # Errors
    "SDKError",
    "ParseError",
    "MalformedEntryError",
    "NumericFormatError",
    "HexFormatError",
    "UnsupportedTypeError",
    "InterfaceError",
    "EncodeError",
    "DecodeError",
    "InvalidKeyError",
    "InvalidAddressError",
    "KeystoreError",
    "ConfigurationError",
    "NetworkError",
    "ChainIdError",
    "ConfirmationTimeoutError",
    # Utils
    "get_logger",
    "configure_logging",
    "set_level",
    "enable_debug",
    "disable_logging",
]
