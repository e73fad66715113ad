"""
Contract interface descriptions.

Parses the JSON ABI emitted by Solidity toolchains into FunctionSpec values.
Only constructor and function entries are kept; events, errors, fallback and
receive entries are ignored.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from eth_utils import function_signature_to_4byte_selector

from ethsdk.errors import InterfaceError

InterfaceDescription = Union[str, Sequence[Mapping[str, Any]], Mapping[str, Any], "ContractInterface"]


def _canonical_type(param: Mapping[str, Any]) -> str:
    """Canonical ABI type of a parameter, expanding tuple components."""
    if not isinstance(param, Mapping):
        raise InterfaceError(f"ABI parameter must be an object, got {type(param).__name__}")
    typ = param.get("type")
    if not isinstance(typ, str) or not typ:
        raise InterfaceError(f"Parameter without a type: {dict(param)!r}")
    if typ.startswith("tuple"):
        components = param.get("components") or []
        if not isinstance(components, list):
            raise InterfaceError(f"'components' must be a list in tuple parameter {param.get('name', '')!r}")
        inner = ",".join(_canonical_type(c) for c in components)
        return f"({inner}){typ[len('tuple'):]}"
    return typ


def _param_types(entry: Mapping[str, Any], key: str) -> Tuple[str, ...]:
    params = entry.get(key) or []
    if not isinstance(params, list):
        raise InterfaceError(f"'{key}' must be a list in ABI entry {entry.get('name', '')!r}")
    return tuple(_canonical_type(p) for p in params)


@dataclass(frozen=True)
class FunctionSpec:
    """
    One callable entry of a contract interface.

    ``name`` is empty for the constructor, which has no selector.
    """

    name: str
    inputs: Tuple[str, ...] = ()
    outputs: Tuple[str, ...] = ()
    state_mutability: str = "nonpayable"

    @property
    def is_constructor(self) -> bool:
        return self.name == ""

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.inputs)})"

    @property
    def selector(self) -> bytes:
        """4-byte function selector (empty for the constructor)."""
        if self.is_constructor:
            return b""
        return function_signature_to_4byte_selector(self.signature)


@dataclass(frozen=True)
class ContractInterface:
    """Parsed contract interface, functions grouped by name."""

    functions: Dict[str, List[FunctionSpec]] = field(default_factory=dict)
    constructor: Optional[FunctionSpec] = None

    def overloads(self, name: str) -> List[FunctionSpec]:
        """
        Functions matching ``name``.

        ``name`` may be a bare name, returning every overload, or a full
        signature such as ``transfer(address,uint256)`` selecting one.
        An empty name selects the constructor (an implicit one with no
        inputs if the interface declares none).
        """
        if name == "":
            return [self.constructor or FunctionSpec("")]
        if "(" in name:
            bare = name.split("(", 1)[0]
            return [fn for fn in self.functions.get(bare, []) if fn.signature == name]
        return list(self.functions.get(name, []))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and bool(self.overloads(name))


def load_interface(description: InterfaceDescription) -> ContractInterface:
    """
    Parse a contract interface description.

    Accepts the JSON ABI text, the already-decoded list of entries, or a
    compiler artifact object holding it under ``"abi"``. A ContractInterface
    is returned as is. Nothing is cached between calls.

    Raises:
        InterfaceError: If the description cannot be parsed
    """
    if isinstance(description, ContractInterface):
        return description

    if isinstance(description, (str, bytes)):
        try:
            description = json.loads(description)
        except ValueError as e:
            raise InterfaceError(f"Invalid ABI JSON: {e}") from e

    if isinstance(description, Mapping):
        if "abi" not in description:
            raise InterfaceError("ABI object has no 'abi' field")
        description = description["abi"]

    if not isinstance(description, list):
        raise InterfaceError(f"ABI must be a list of entries, got {type(description).__name__}")

    functions: Dict[str, List[FunctionSpec]] = {}
    constructor: Optional[FunctionSpec] = None

    for entry in description:
        if not isinstance(entry, Mapping):
            raise InterfaceError(f"ABI entry must be an object, got {type(entry).__name__}")

        kind = entry.get("type", "function")
        mutability = entry.get("stateMutability", "nonpayable")
        if kind == "constructor":
            constructor = FunctionSpec("", _param_types(entry, "inputs"), (), mutability)
        elif kind == "function":
            name = entry.get("name")
            if not isinstance(name, str) or not name:
                raise InterfaceError("Function entry without a name")
            spec = FunctionSpec(name, _param_types(entry, "inputs"), _param_types(entry, "outputs"), mutability)
            functions.setdefault(name, []).append(spec)

    return ContractInterface(functions=functions, constructor=constructor)
