"""Account helpers: key generation, key conversion and keystore export."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_keys import keys

from ethsdk.errors import InvalidKeyError, KeystoreError
from ethsdk.utils.logging import get_logger

__all__ = [
    "AccountKeys",
    "ExportedAccount",
    "account_from_key",
    "hex_to_account",
    "generate_account",
    "export_account",
    "export_account_object",
]

_logger = get_logger(__name__)

# SEC1 prefix of an uncompressed public key
_UNCOMPRESSED_PREFIX = b"\x04"


@dataclass(frozen=True)
class AccountKeys:
    """Key material of one account.

    Attributes:
        private_key: 32-byte secp256k1 private key (never shown in repr)
        public_key: 65-byte uncompressed public key (0x04 || X || Y)
        address: Checksummed address
    """
    private_key: bytes = field(repr=False)
    public_key: bytes
    address: str


@dataclass(frozen=True)
class ExportedAccount:
    """Decrypted keystore entry."""
    address: str
    private_key: str = field(repr=False)
    id: str = ""


def account_from_key(private_key: Union[str, bytes]) -> LocalAccount:
    """Load a signing account, hiding the key from any error raised."""
    try:
        return Account.from_key(private_key)
    except Exception:
        raise InvalidKeyError() from None


def _keys_of(account: LocalAccount) -> AccountKeys:
    private_key = bytes(account.key)
    public_key = keys.PrivateKey(private_key).public_key.to_bytes()
    return AccountKeys(
        private_key=private_key,
        public_key=_UNCOMPRESSED_PREFIX + public_key,
        address=account.address,
    )


def hex_to_account(private_key: str) -> AccountKeys:
    """
    Derive public key and address from a hex private key.

    Raises:
        InvalidKeyError: If the key is not a valid secp256k1 private key
    """
    return _keys_of(account_from_key(private_key))


def generate_account() -> AccountKeys:
    """Create a new random account."""
    account = Account.create()
    _logger.debug("Generated account", extra={"address": account.address})
    return _keys_of(account)


def export_account(keyfile: Union[str, Path], passphrase: str) -> bytes:
    """
    Decrypt an encrypted key file (Web3 Secret Storage).

    Args:
        keyfile: Path to the JSON key file
        passphrase: Key file password

    Returns:
        JSON document with ``address``, ``privatekey``, ``id`` and
        ``version``; address and key are lowercase hex without ``0x``

    Raises:
        KeystoreError: If the file cannot be read, parsed or decrypted
    """
    path = str(keyfile)
    try:
        keyfile_json = json.loads(Path(keyfile).read_text())
    except OSError as e:
        raise KeystoreError(f"Cannot read key file: {e.strerror}", path=path) from e
    except ValueError as e:
        raise KeystoreError(f"Key file is not valid JSON: {e}", path=path) from e

    try:
        private_key = bytes(Account.decrypt(keyfile_json, passphrase))
    except Exception:
        # wrong passphrase and malformed crypto parameters both land here
        raise KeystoreError("Failed to decrypt key file", path=path) from None

    address = Account.from_key(private_key).address
    exported = {
        "address": address[2:].lower(),
        "privatekey": private_key.hex(),
        "id": keyfile_json.get("id", ""),
        "version": 3,
    }
    return json.dumps(exported).encode()


def export_account_object(keyfile: Union[str, Path], passphrase: str) -> ExportedAccount:
    """Decrypt a key file into an ExportedAccount."""
    exported = json.loads(export_account(keyfile, passphrase))
    return ExportedAccount(
        address=exported["address"],
        private_key=exported["privatekey"],
        id=exported["id"],
    )
