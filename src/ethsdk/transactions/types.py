from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

__all__ = ["TxState", "TransactionRequest", "Receipt"]


class TxState(str, Enum):
    BUILT = "built"
    SIGNED = "signed"
    SUBMITTED = "submitted"
    PENDING = "pending"
    CONFIRMED = "confirmed"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class TransactionRequest:
    """A transaction to sign and submit.

    ``to`` of None creates a contract from ``data``. Zero ``gas_price``,
    ``nonce`` and ``gas_limit`` are replaced by the manager defaults (the
    manager gas price, the account's pending nonce and the manager gas
    limit).

    Attributes:
        private_key: Hex signing key (never shown in repr)
        to: Recipient or contract address
        value: Amount in wei (None = 0)
        data: Call data or creation bytecode
        gas_price: Gas price in wei
        nonce: Account nonce
        gas_limit: Gas limit
    """
    private_key: str = field(repr=False)
    to: Optional[str] = None
    value: Optional[int] = None
    data: bytes = b""
    gas_price: int = 0
    nonce: int = 0
    gas_limit: int = 0

    @property
    def is_creation(self) -> bool:
        return self.to is None


@dataclass(frozen=True)
class Receipt:
    """Confirmation of a mined transaction.

    Attributes:
        tx_hash: 0x-prefixed transaction hash
        contract_address: Created contract, "" unless the transaction deployed one
        gas_used: Gas consumed
        mined: Always True for receipts produced by the manager
        status: 1 on success, 0 if execution reverted
        block_number: Block that includes the transaction
    """
    tx_hash: str
    contract_address: str = ""
    gas_used: int = 0
    mined: bool = True
    status: int = 1
    block_number: Optional[int] = None

    @property
    def succeeded(self) -> bool:
        return self.status == 1
