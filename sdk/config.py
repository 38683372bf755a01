import os
from dataclasses import dataclass
from typing import Optional, List

from .common import SDKError


DEFAULT_RECEIPT_TIMEOUT = 120  # seconds
DEFAULT_POLL_LATENCY = 0.5  # seconds
DEFAULT_MAX_CONCURRENCY = 8

ENV_PREFIX = "PLATON_"


## [Base Config Class]

@dataclass
class Config:
    """Configuration for dialing a PlatON node and transacting with contracts."""
    dial_uri: str
    private_key: str
    chain_id: Optional[int] = None
    gas_price: Optional[int] = None
    gas_limit: Optional[int] = None
    receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT
    poll_latency: float = DEFAULT_POLL_LATENCY
    poa: bool = False
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY

    @staticmethod
    def default():
        return Config(dial_uri="", private_key="")

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX) -> 'Config':
        """Builds a configuration from environment variables.

        Recognised variables (with the default ``PLATON_`` prefix):
        NODE_URL, PRIVATE_KEY, CHAIN_ID, GAS_PRICE, GAS_LIMIT,
        RECEIPT_TIMEOUT, POLL_LATENCY, POA, MAX_CONCURRENCY.
        """
        def env(name: str, default=None):
            return os.getenv(f"{prefix}{name}", default)

        try:
            return cls(
                dial_uri=env("NODE_URL", ""),
                private_key=env("PRIVATE_KEY", ""),
                chain_id=_optional_int(env("CHAIN_ID")),
                gas_price=_optional_int(env("GAS_PRICE")),
                gas_limit=_optional_int(env("GAS_LIMIT")),
                receipt_timeout=float(env("RECEIPT_TIMEOUT", DEFAULT_RECEIPT_TIMEOUT)),
                poll_latency=float(env("POLL_LATENCY", DEFAULT_POLL_LATENCY)),
                poa=env("POA", "false").lower() in ("1", "true", "yes"),
                max_concurrency=int(env("MAX_CONCURRENCY", DEFAULT_MAX_CONCURRENCY)),
            )
        except ValueError as e:
            raise SDKError(f"invalid configuration in environment: {e}") from e

    def validate(self) -> None:
        if not self.dial_uri:
            raise SDKError("dial uri is required")
        if not self.private_key:
            raise SDKError("private key is required")
        if self.max_concurrency < 1:
            raise SDKError("max concurrency must be positive")

    def gas_provider(self, web3):
        """Returns the gas policy described by this configuration.

        Constant price and limit when both are configured. Otherwise the
        limit is estimated per transaction, capped by a configured limit,
        and a configured price is used as is.
        """
        from private.ipc.gas import StaticGasProvider, NetworkGasProvider

        if self.gas_price is not None and self.gas_limit is not None:
            return StaticGasProvider(self.gas_price, self.gas_limit)
        return NetworkGasProvider(web3, max_gas_limit=self.gas_limit, gas_price=self.gas_price)


def _optional_int(value: Optional[str]) -> Optional[int]:
    if value is None or value == "":
        return None
    if value.lower().startswith("0x"):
        return int(value, 16)
    return int(value, 10)


## [Validation Functions]

# Basic validation: expect hex string like '0x' + 8 hex chars (4 bytes) minimum
def validate_hex_string(hex_string: str) -> bool:
    if not hex_string.startswith("0x"):
        return False
    if len(hex_string) < 10:
        return False
    return True


## [Error Handling]

# Solidity error signatures every binding understands out of the box.
# Custom errors declared by other contracts can be registered at runtime.
KNOWN_ERROR_SIGNATURES: List[str] = [
    "Error(string)",
    "Panic(uint256)",
]
