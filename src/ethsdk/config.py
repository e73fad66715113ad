"""Configuration for the transaction manager.

TxManagerConfig is an immutable value: the manager reads it concurrently and
only ever replaces it wholesale, never mutates it.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError

from .constants import DEFAULT_GAS_LIMIT, DEFAULT_INTERVAL_SECONDS, DEFAULT_TIMEOUT_SECONDS, DIAL_TIMEOUT_SECONDS
from .errors import ConfigurationError

__all__ = ["TxManagerConfig", "load_config_from_env"]

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class TxManagerConfig(BaseModel):
    """
    Transaction manager configuration.

    Zero values mean "resolve a default": gas price is queried from the node
    at connect time, gas limit / timeout / interval fall back to the SDK
    constants.

    Example:
        >>> cfg = TxManagerConfig(rpc_url="http://localhost:8545", timeout=60)
        >>> cfg.effective_timeout
        60.0
    """

    model_config = ConfigDict(frozen=True)

    rpc_url: str = Field(
        default="http://localhost:8545",
        min_length=1,
        description="JSON-RPC endpoint of the chain node",
    )
    gas_price: int = Field(
        default=0,
        ge=0,
        description="Default gas price in wei (0 = node suggested price)",
    )
    gas_limit: int = Field(
        default=0,
        ge=0,
        description="Default gas limit (0 = DEFAULT_GAS_LIMIT)",
    )
    timeout: float = Field(
        default=0,
        ge=0,
        description="Confirmation timeout in seconds (0 = DEFAULT_TIMEOUT_SECONDS)",
    )
    interval: float = Field(
        default=0,
        ge=0,
        description="Receipt poll interval in seconds (0 = DEFAULT_INTERVAL_SECONDS)",
    )
    chain_id: Optional[int] = Field(
        default=None,
        gt=0,
        description="Chain id for replay-protected signing (None = query the node)",
    )
    replay_protection: bool = Field(
        default=True,
        description="Sign with EIP-155 replay protection",
    )
    dial_timeout: float = Field(
        default=DIAL_TIMEOUT_SECONDS,
        gt=0,
        description="HTTP request timeout in seconds",
    )

    @property
    def effective_gas_limit(self) -> int:
        return self.gas_limit or DEFAULT_GAS_LIMIT

    @property
    def effective_timeout(self) -> float:
        return self.timeout or DEFAULT_TIMEOUT_SECONDS

    @property
    def effective_interval(self) -> float:
        return self.interval or DEFAULT_INTERVAL_SECONDS

    def with_chain_id(self, chain_id: int) -> "TxManagerConfig":
        """Return a copy bound to ``chain_id``."""
        return self._replace(chain_id=chain_id)

    def with_gas_price(self, gas_price: int) -> "TxManagerConfig":
        """Return a copy with a fixed default gas price."""
        return self._replace(gas_price=gas_price)

    def without_replay_protection(self) -> "TxManagerConfig":
        """Return a copy that signs legacy (pre-EIP-155) transactions."""
        return self._replace(replay_protection=False)

    def _replace(self, **changes) -> "TxManagerConfig":
        # model_copy skips validation, so rebuild through the constructor
        try:
            return TxManagerConfig(**{**self.model_dump(), **changes})
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from None


def _parse_bool(raw: str, field: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{field} must be a boolean, got {raw!r}", field=field)


def load_config_from_env(
    prefix: str = "ETHSDK_",
    env_file: Optional[Union[str, Path]] = None,
) -> TxManagerConfig:
    """Build a TxManagerConfig from environment variables.

    Reads ``<prefix>RPC_URL``, ``GAS_PRICE``, ``GAS_LIMIT``, ``TIMEOUT``,
    ``INTERVAL``, ``CHAIN_ID``, ``REPLAY_PROTECTION`` and ``DIAL_TIMEOUT``.
    Unset variables keep their defaults.

    Args:
        prefix: Variable name prefix
        env_file: Optional .env file loaded first (does not override the
            process environment)

    Returns:
        Validated configuration

    Raises:
        ConfigurationError: If a variable has an invalid value
    """
    if env_file is not None:
        load_dotenv(env_file, override=False)

    fields = {
        "rpc_url": "RPC_URL",
        "gas_price": "GAS_PRICE",
        "gas_limit": "GAS_LIMIT",
        "timeout": "TIMEOUT",
        "interval": "INTERVAL",
        "chain_id": "CHAIN_ID",
        "dial_timeout": "DIAL_TIMEOUT",
    }
    values: dict = {}
    for field, suffix in fields.items():
        raw = os.environ.get(prefix + suffix)
        if raw is not None and raw.strip():
            values[field] = raw.strip()

    raw_replay = os.environ.get(prefix + "REPLAY_PROTECTION")
    if raw_replay is not None and raw_replay.strip():
        values["replay_protection"] = _parse_bool(raw_replay, prefix + "REPLAY_PROTECTION")

    try:
        return TxManagerConfig(**values)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid configuration from environment: {e}") from None
