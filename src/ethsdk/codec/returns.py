"""Pairing of decoded return values with their declared ABI types."""

from __future__ import annotations

from typing import Any, List, NamedTuple, Sequence


class ReturnValue(NamedTuple):
    """One decoded output: its declared ABI type name and native value."""

    abi_type: str
    value: Any


def serialize_return(expected_types: Sequence[str], raw_values: Sequence[Any]) -> List[ReturnValue]:
    """
    Pair each decoded value with its declared type, in order.

    Values are passed through unmodified. When the two sequences differ in
    length the extra items on the longer side are dropped.

    Example:
        >>> serialize_return(["uint256", "address"], [7])
        [ReturnValue(abi_type='uint256', value=7)]
    """
    return [ReturnValue(abi_type, value) for abi_type, value in zip(expected_types, raw_values)]
