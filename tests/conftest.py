"""
Shared fixtures for ethsdk tests.
"""

import json

import pytest


# =============================================================================
# Test Constants
# =============================================================================

# Private key for tests (DO NOT USE IN PRODUCTION)
TEST_PRIVATE_KEY = "0x" + "11" * 32

TOKEN_ABI = [
    {
        "type": "constructor",
        "inputs": [
            {"name": "name", "type": "string"},
            {"name": "supply", "type": "uint256"},
        ],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "transfer",
        "inputs": [
            {"name": "to", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "outputs": [{"name": "", "type": "bool"}],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "totalSupply",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "balanceOf",
        "inputs": [{"name": "owner", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "mint",
        "inputs": [{"name": "amount", "type": "uint256"}],
        "outputs": [],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "mint",
        "inputs": [
            {"name": "to", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "outputs": [],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "setPair",
        "inputs": [{"name": "pair", "type": "uint256[2]"}],
        "outputs": [],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "info",
        "inputs": [],
        "outputs": [
            {"name": "decimals", "type": "uint8"},
            {"name": "paused", "type": "bool"},
            {"name": "owner", "type": "address"},
        ],
        "stateMutability": "view",
    },
    {
        "type": "event",
        "name": "Transfer",
        "inputs": [
            {"name": "from", "type": "address", "indexed": True},
            {"name": "to", "type": "address", "indexed": True},
            {"name": "value", "type": "uint256", "indexed": False},
        ],
        "anonymous": False,
    },
]


@pytest.fixture()
def token_abi():
    """Token contract interface as a list of entries."""
    return [dict(entry) for entry in TOKEN_ABI]


@pytest.fixture()
def token_abi_json():
    """Token contract interface as JSON text."""
    return json.dumps(TOKEN_ABI)


@pytest.fixture()
def private_key():
    return TEST_PRIVATE_KEY
