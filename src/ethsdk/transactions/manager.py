"""Transaction lifecycle manager.

This module provides the TransactionManager class, which signs and submits
transactions through a web3 client and waits for their receipts.

The manager supports:
- Value transfers, with or without call data
- Contract creation and contract writes from argument notation
- Read-only contract calls, optionally pinned to a block
- Blocking confirmation with a timeout

Example:
    >>> from ethsdk import TransactionManager, TxManagerConfig
    >>> with TransactionManager.connect(TxManagerConfig(rpc_url="http://localhost:8545")) as tm:
    ...     receipt = tm.write_contract_sync(
    ...         private_key="0x...",
    ...         contract_address="0x...",
    ...         interface=erc20_abi,
    ...         method="transfer",
    ...         args="address:0x...;uint256:1000",
    ...     )
"""

from __future__ import annotations

import threading
import time
from typing import Any, Callable, List, Optional, Tuple, Type, TypeVar, Union

from web3 import Web3
from web3.exceptions import TransactionNotFound

from ethsdk.abi import adapter
from ethsdk.abi.interface import InterfaceDescription
from ethsdk.accounts import account_from_key
from ethsdk.codec.notation import ArgumentSpec
from ethsdk.codec.returns import ReturnValue
from ethsdk.codec.scalars import decode_hex_string
from ethsdk.config import TxManagerConfig
from ethsdk.constants import ABI_SELECTOR_LENGTH, ABI_WORD_LENGTH, REVERT_SELECTOR, TRANSFER_GAS_LIMIT
from ethsdk.errors import (
    ChainIdError,
    ConfigurationError,
    ConfirmationTimeoutError,
    InvalidAddressError,
    NetworkError,
    SDKError,
)
from ethsdk.transactions.types import Receipt, TransactionRequest, TxState
from ethsdk.utils.logging import get_logger
from ethsdk.utils.polling import PollConfig, PollTimeoutError, poll_until

_logger = get_logger(__name__)

T = TypeVar("T")

CallArgs = Union[str, ArgumentSpec]
BlockNumber = Optional[int]


# ------------------------------------------------------------------
# Helper Functions
# ------------------------------------------------------------------

def _decode_revert_reason(raw: str) -> Optional[str]:
    """Decode a Solidity ``Error(string)`` revert payload.

    Args:
        raw: Hex-encoded error data string

    Returns:
        Decoded revert reason string, or None if decoding fails
    """
    if raw.startswith(REVERT_SELECTOR) and len(raw) >= 10:
        try:
            data = bytes.fromhex(raw[2:])
            # 4 bytes selector + 32 bytes offset + 32 bytes length
            if len(data) >= ABI_SELECTOR_LENGTH + ABI_WORD_LENGTH + ABI_WORD_LENGTH:
                offset = ABI_SELECTOR_LENGTH + ABI_WORD_LENGTH
                strlen = int.from_bytes(data[offset : offset + ABI_WORD_LENGTH], "big")
                reason_start = offset + ABI_WORD_LENGTH
                return data[reason_start : reason_start + strlen].decode(errors="ignore")
        except ValueError:
            return None
    return None


def _error_reason(error: Exception) -> str:
    """Best human-readable reason carried by a web3 exception."""
    reason = None
    data = getattr(error, "data", None)
    if error.args and isinstance(error.args[0], dict):
        reason = error.args[0].get("message") or error.args[0].get("reason")
        data = error.args[0].get("data", data)
    if isinstance(data, str):
        decoded = _decode_revert_reason(data)
        if decoded:
            reason = decoded
    return reason or str(error) or type(error).__name__


def _checksum(address: Optional[str], field: str) -> str:
    try:
        return Web3.to_checksum_address(address)
    except (TypeError, ValueError):
        raise InvalidAddressError(address, field=field) from None


def _to_bytes(data: Union[bytes, str, None]) -> bytes:
    if data is None:
        return b""
    if isinstance(data, str):
        return decode_hex_string(data)
    return bytes(data)


def _to_receipt(tx_hash: str, raw: Any) -> Receipt:
    return Receipt(
        tx_hash=tx_hash,
        contract_address=raw.get("contractAddress") or "",
        gas_used=int(raw.get("gasUsed", 0)),
        mined=True,
        status=int(raw.get("status", 1)),
        block_number=raw.get("blockNumber"),
    )


class TransactionManager:
    """Signs, submits and confirms transactions on one chain.

    A manager owns one web3 client, shared by every call. Configuration is
    immutable; ``set_chain_id`` and ``disable_eip155`` may only be used before
    the first submission.

    Args:
        config: Manager configuration (default: TxManagerConfig())
        web3: Preconfigured client (default: HTTP client for ``config.rpc_url``)
        clock: Monotonic time source used for confirmation deadlines
        sleep: Blocking sleep used between receipt polls

    Raises:
        NetworkError: If the node is unreachable or the gas price query fails
        ChainIdError: If the chain id cannot be resolved
    """

    def __init__(
        self,
        config: Optional[TxManagerConfig] = None,
        web3: Optional[Web3] = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        config = config or TxManagerConfig()
        self.w3 = web3 or self._dial_client(config)
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._used = False
        self._closed = False

        try:
            self._config = self._resolve(config)
        except SDKError:
            # A client given by the caller stays open
            if web3 is None:
                self.close()
            raise

        _logger.debug(
            "Transaction manager connected",
            extra={"chain_id": self._config.chain_id, "gas_price": self._config.gas_price},
        )

    @staticmethod
    def _dial_client(config: TxManagerConfig) -> Web3:
        # Configure HTTPProvider with a request timeout so a dead node cannot hang dialing
        return Web3(Web3.HTTPProvider(
            config.rpc_url,
            request_kwargs={"timeout": config.dial_timeout},
        ))

    def _resolve(self, config: TxManagerConfig) -> TxManagerConfig:
        """Check the node and fill in the gas price and chain id it reports."""
        if not self._rpc("dial", self.w3.is_connected):
            raise NetworkError(f"Cannot connect to {config.rpc_url}", operation="dial")

        if config.gas_price == 0:
            config = config.with_gas_price(int(self._rpc("gas_price", lambda: self.w3.eth.gas_price)))

        if config.chain_id is None:
            try:
                config = config.with_chain_id(int(self.w3.eth.chain_id))
            except Exception as e:
                raise ChainIdError(f"Failed to resolve chain id: {_error_reason(e)}") from e

        return config

    @classmethod
    def connect(
        cls,
        config: Optional[Union[TxManagerConfig, str]] = None,
        web3: Optional[Web3] = None,
        **kwargs: Any,
    ) -> "TransactionManager":
        """Connect to a node; ``config`` may also be a bare RPC URL."""
        if isinstance(config, str):
            config = TxManagerConfig(rpc_url=config)
        return cls(config, web3, **kwargs)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    @property
    def config(self) -> TxManagerConfig:
        return self._config

    @property
    def gas_price(self) -> int:
        return self._config.gas_price

    @property
    def chain_id(self) -> int:
        return self._config.chain_id

    @property
    def gas_limit(self) -> int:
        return self._config.effective_gas_limit

    @property
    def timeout(self) -> float:
        return self._config.effective_timeout

    @property
    def interval(self) -> float:
        return self._config.effective_interval

    def set_chain_id(self, chain_id: int) -> None:
        """Sign subsequent transactions for ``chain_id``.

        Raises:
            ConfigurationError: After the first submission, or for an invalid id
        """
        with self._lock:
            self._check_configurable("chain_id")
            self._config = self._config.with_chain_id(chain_id)

    def disable_eip155(self) -> None:
        """Sign subsequent transactions without replay protection.

        Raises:
            ConfigurationError: After the first submission
        """
        with self._lock:
            self._check_configurable("replay_protection")
            self._config = self._config.without_replay_protection()

    def _check_configurable(self, field: str) -> None:
        if self._used:
            raise ConfigurationError(
                f"{field} can only be changed before the first submission", field=field
            )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def close(self) -> None:
        """Release the client. Any later call raises NetworkError."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        disconnect = getattr(getattr(self.w3, "provider", None), "disconnect", None)
        if callable(disconnect):
            disconnect()

    def __enter__(self) -> "TransactionManager":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _ensure_open(self, operation: str) -> None:
        if self._closed:
            raise NetworkError("Transaction manager is closed", operation=operation)

    def _rpc(
        self,
        operation: str,
        fn: Callable[[], T],
        tx_hash: Optional[str] = None,
        passthrough: Tuple[Type[BaseException], ...] = (),
    ) -> T:
        """Run one client request, wrapping its failures in NetworkError."""
        try:
            return fn()
        except passthrough:
            raise
        except SDKError:
            raise
        except Exception as e:
            raise NetworkError(
                f"{operation} failed: {_error_reason(e)}", operation=operation, tx_hash=tx_hash
            ) from e

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------
    def submit(self, request: TransactionRequest) -> str:
        """Sign and send a transaction without waiting for it.

        Args:
            request: Transaction to send

        Returns:
            0x-prefixed transaction hash

        Raises:
            InvalidKeyError: If the private key is invalid
            InvalidAddressError: If the recipient address is malformed
            NetworkError: If the nonce query or the submission fails
        """
        self._ensure_open("submit")
        account = account_from_key(request.private_key)
        to = None if request.is_creation else _checksum(request.to, "to")
        with self._lock:
            self._used = True
            config = self._config

        nonce = request.nonce or self._rpc(
            "get_transaction_count",
            lambda: self.w3.eth.get_transaction_count(account.address, "pending"),
        )
        tx = {
            "nonce": nonce,
            "gasPrice": request.gas_price or config.gas_price,
            "gas": request.gas_limit or config.effective_gas_limit,
            "value": request.value or 0,
            "data": request.data,
        }
        if to is not None:
            tx["to"] = to
        if config.replay_protection:
            tx["chainId"] = config.chain_id
        log_context = {"sender": account.address, "to": request.to, "nonce": nonce}
        _logger.debug("Transaction built", extra={**log_context, "state": TxState.BUILT.value})

        try:
            signed = account.sign_transaction(tx)
        except (TypeError, ValueError) as e:
            raise SDKError(f"Failed to sign transaction: {e}", code="SIGNING_ERROR") from None
        _logger.debug("Transaction signed", extra={**log_context, "state": TxState.SIGNED.value})

        raw_hash = self._rpc("send_raw_transaction", lambda: self.w3.eth.send_raw_transaction(signed.raw_transaction))
        tx_hash = Web3.to_hex(raw_hash)
        _logger.info(
            "Transaction submitted",
            extra={**log_context, "tx_hash": tx_hash, "state": TxState.SUBMITTED.value},
        )
        return tx_hash

    def wait_for_receipt(self, tx_hash: str) -> Receipt:
        """Block until ``tx_hash`` is mined.

        The receipt is polled every ``interval`` seconds; the first poll
        happens one interval after the call.

        Raises:
            ConfirmationTimeoutError: If no receipt appears within ``timeout``
            NetworkError: If a receipt lookup fails for another reason
        """
        self._ensure_open("wait_for_receipt")
        poll_config = PollConfig(timeout=self.timeout, interval=self.interval)
        _logger.debug("Waiting for receipt", extra={"tx_hash": tx_hash, "state": TxState.PENDING.value})

        def check():
            return self._rpc(
                "get_transaction_receipt",
                lambda: self.w3.eth.get_transaction_receipt(tx_hash),
                tx_hash=tx_hash,
                passthrough=(TransactionNotFound,),
            )

        try:
            raw = poll_until(
                check,
                lambda e: isinstance(e, TransactionNotFound),
                poll_config,
                clock=self._clock,
                sleep=self._sleep,
            )
        except PollTimeoutError as e:
            _logger.warning(
                "Transaction not confirmed",
                extra={"tx_hash": tx_hash, "attempts": e.attempts, "state": TxState.TIMED_OUT.value},
            )
            raise ConfirmationTimeoutError(tx_hash, poll_config.timeout) from e

        receipt = _to_receipt(tx_hash, raw)
        _logger.info(
            "Transaction confirmed",
            extra={
                "tx_hash": tx_hash,
                "gas_used": receipt.gas_used,
                "status": receipt.status,
                "state": TxState.CONFIRMED.value,
            },
        )
        return receipt

    def submit_and_wait(self, request: TransactionRequest) -> Receipt:
        return self.wait_for_receipt(self.submit(request))

    # ------------------------------------------------------------------
    # Contracts
    # ------------------------------------------------------------------
    @staticmethod
    def _calldata(interface: InterfaceDescription, method: str, args: CallArgs) -> bytes:
        if isinstance(args, ArgumentSpec):
            return adapter.encode(interface, method, args)
        return adapter.pack(interface, method, args)

    def create_contract(
        self,
        private_key: str,
        bytecode: Union[bytes, str],
        interface: Optional[InterfaceDescription] = None,
        args: CallArgs = "",
        value: Optional[int] = None,
        gas_price: int = 0,
        nonce: int = 0,
        gas_limit: int = 0,
    ) -> str:
        """Deploy a contract; returns the creation transaction hash.

        Constructor arguments are appended to ``bytecode`` when an
        ``interface`` is given.
        """
        data = _to_bytes(bytecode)
        if interface is not None:
            data += self._calldata(interface, "", args)
        return self.submit(TransactionRequest(
            private_key=private_key,
            to=None,
            value=value,
            data=data,
            gas_price=gas_price,
            nonce=nonce,
            gas_limit=gas_limit,
        ))

    def create_contract_sync(self, private_key: str, bytecode: Union[bytes, str], **kwargs: Any) -> Receipt:
        """Deploy a contract and wait; the receipt carries the new address."""
        return self.wait_for_receipt(self.create_contract(private_key, bytecode, **kwargs))

    def write_contract(
        self,
        private_key: str,
        contract_address: str,
        interface: InterfaceDescription,
        method: str,
        args: CallArgs = "",
        value: Optional[int] = None,
        gas_price: int = 0,
        nonce: int = 0,
        gas_limit: int = 0,
    ) -> str:
        """Send a state-changing call to ``method``; returns the transaction hash."""
        return self.submit(TransactionRequest(
            private_key=private_key,
            to=contract_address,
            value=value,
            data=self._calldata(interface, method, args),
            gas_price=gas_price,
            nonce=nonce,
            gas_limit=gas_limit,
        ))

    def write_contract_sync(
        self,
        private_key: str,
        contract_address: str,
        interface: InterfaceDescription,
        method: str,
        args: CallArgs = "",
        **kwargs: Any,
    ) -> Receipt:
        return self.wait_for_receipt(
            self.write_contract(private_key, contract_address, interface, method, args, **kwargs)
        )

    def read_contract(
        self,
        contract_address: str,
        interface: InterfaceDescription,
        method: str,
        args: CallArgs = "",
        block_number: BlockNumber = None,
    ) -> bytes:
        """Simulate a call to ``method`` and return the raw output. Nothing is signed."""
        return self.call(contract_address, self._calldata(interface, method, args), block_number)

    def read_contract_decoded(
        self,
        contract_address: str,
        interface: InterfaceDescription,
        method: str,
        args: CallArgs = "",
        block_number: BlockNumber = None,
    ) -> List[ReturnValue]:
        output = self.read_contract(contract_address, interface, method, args, block_number)
        return adapter.unpack(interface, method, output)

    def call(
        self,
        to: str,
        data: Union[bytes, str],
        block_number: BlockNumber = None,
        from_address: Optional[str] = None,
    ) -> bytes:
        """Run ``eth_call`` at ``"latest"`` or at ``block_number``.

        Raises:
            NetworkError: If the call fails or reverts
        """
        self._ensure_open("call")
        call_tx = {"to": _checksum(to, "to"), "data": _to_bytes(data)}
        if from_address:
            call_tx["from"] = _checksum(from_address, "from_address")
        block = "latest" if block_number is None else block_number
        return bytes(self._rpc("call", lambda: self.w3.eth.call(call_tx, block)))

    # ------------------------------------------------------------------
    # Transfers
    # ------------------------------------------------------------------
    def transfer_eth(self, private_key: str, to: str, value: int, gas_price: int = 0, nonce: int = 0) -> str:
        """Send ``value`` wei with the fixed transfer gas limit."""
        return self.submit(TransactionRequest(
            private_key=private_key,
            to=to,
            value=value,
            gas_price=gas_price,
            nonce=nonce,
            gas_limit=TRANSFER_GAS_LIMIT,
        ))

    def transfer_eth_sync(self, private_key: str, to: str, value: int, **kwargs: Any) -> Receipt:
        return self.wait_for_receipt(self.transfer_eth(private_key, to, value, **kwargs))

    def transfer_eth_with_data(
        self,
        private_key: str,
        to: str,
        value: int,
        data: Union[bytes, str],
        gas_price: int = 0,
        nonce: int = 0,
        gas_limit: int = 0,
    ) -> str:
        """Send ``value`` wei with call data.

        The gas limit defaults to the plain transfer limit, which only
        suffices for recipients that ignore the data.
        """
        return self.submit(TransactionRequest(
            private_key=private_key,
            to=to,
            value=value,
            data=_to_bytes(data),
            gas_price=gas_price,
            nonce=nonce,
            gas_limit=gas_limit or TRANSFER_GAS_LIMIT,
        ))

    def transfer_eth_with_data_sync(
        self, private_key: str, to: str, value: int, data: Union[bytes, str], **kwargs: Any
    ) -> Receipt:
        return self.wait_for_receipt(self.transfer_eth_with_data(private_key, to, value, data, **kwargs))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get_balance(self, address: str, block_number: BlockNumber = None) -> int:
        """Balance of ``address`` in wei."""
        self._ensure_open("get_balance")
        block = "latest" if block_number is None else block_number
        checksum = _checksum(address, "address")
        return int(self._rpc("get_balance", lambda: self.w3.eth.get_balance(checksum, block)))

    def _receipt_now(self, tx_hash: str) -> Receipt:
        self._ensure_open("get_transaction_receipt")
        raw = self._rpc(
            "get_transaction_receipt",
            lambda: self.w3.eth.get_transaction_receipt(tx_hash),
            tx_hash=tx_hash,
        )
        return _to_receipt(tx_hash, raw)

    def get_contract_address(self, tx_hash: str) -> str:
        """Address created by a mined transaction ("" if it created none).

        Raises:
            NetworkError: If the transaction is not mined yet or the lookup fails
        """
        return self._receipt_now(tx_hash).contract_address

    def get_contract_address_sync(self, tx_hash: str) -> str:
        """Wait for ``tx_hash`` and return the address it created."""
        return self.wait_for_receipt(tx_hash).contract_address

    def get_transaction_used_gas(self, tx_hash: str) -> int:
        return self._receipt_now(tx_hash).gas_used
