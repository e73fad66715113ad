#!/usr/bin/env python3
"""
Contract Call Example

Reads a token balance, sends a transfer written in argument notation and
waits for it to be mined.

Usage:
    python examples/contract_call.py

Environment Variables:
    ETHSDK_RPC_URL: Node JSON-RPC URL (default: http://localhost:8545)
    SENDER_PRIVATE_KEY: Private key of the sending wallet
    TOKEN_ADDRESS: Token contract address
    RECIPIENT_ADDRESS: Transfer recipient
"""

import os
import sys

from dotenv import load_dotenv

from ethsdk import (
    ConfirmationTimeoutError,
    SDKError,
    TransactionManager,
    configure_logging,
    format_notation,
    hex_to_account,
    load_config_from_env,
)

# Load .env file
load_dotenv()

TOKEN_ABI = [
    {
        "inputs": [{"name": "owner", "type": "address"}],
        "name": "balanceOf",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "to", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "name": "transfer",
        "outputs": [{"name": "", "type": "bool"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]


def main() -> int:
    configure_logging("INFO")

    private_key = os.getenv("SENDER_PRIVATE_KEY", "")
    token = os.getenv("TOKEN_ADDRESS", "")
    recipient = os.getenv("RECIPIENT_ADDRESS", "")
    if not (private_key and token and recipient):
        print("Set SENDER_PRIVATE_KEY, TOKEN_ADDRESS and RECIPIENT_ADDRESS")
        return 1

    sender = hex_to_account(private_key).address

    with TransactionManager.connect(load_config_from_env()) as tm:
        print(f"Chain {tm.chain_id}, gas price {tm.gas_price} wei")

        balance = tm.read_contract_decoded(token, TOKEN_ABI, "balanceOf", f"address:{sender}")
        print(f"Sender balance: {balance[0].value}")

        args = format_notation([("address", recipient), ("uint256", 1)])
        try:
            receipt = tm.write_contract_sync(private_key, token, TOKEN_ABI, "transfer", args, gas_limit=100_000)
        except ConfirmationTimeoutError as e:
            print(f"Not mined yet: {e.tx_hash}")
            return 2
        except SDKError as e:
            print(f"Transfer failed: {e}")
            return 1

        print(f"Mined in block {receipt.block_number}, gas used {receipt.gas_used}, status {receipt.status}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
