"""Contract interfaces and the notation-to-calldata adapter."""

from ethsdk.abi.adapter import decode, encode, pack, unpack
from ethsdk.abi.interface import ContractInterface, FunctionSpec, load_interface

__all__ = [
    "ContractInterface",
    "FunctionSpec",
    "load_interface",
    "encode",
    "decode",
    "pack",
    "unpack",
]
