"""Transaction submission and confirmation."""

from ethsdk.transactions.manager import TransactionManager
from ethsdk.transactions.types import Receipt, TransactionRequest, TxState

__all__ = [
    "TransactionManager",
    "TransactionRequest",
    "Receipt",
    "TxState",
]
