import logging
from typing import Any, Dict, Optional

from web3 import Web3

GAS_PRICE = 4_100_000_000
GAS_LIMIT = 9_000_000


class GasProvider:
    """Strategy deciding the gas price and gas limit of each transaction.

    ``function_name`` is the contract function being invoked ("deploy" for
    contract creation); ``transaction`` is the draft transaction, which
    dynamic providers may use to estimate.
    """

    def get_gas_price(self, function_name: str) -> int:
        raise NotImplementedError

    def get_gas_limit(self, function_name: str, transaction: Optional[Dict[str, Any]] = None) -> int:
        raise NotImplementedError


class StaticGasProvider(GasProvider):
    """Constant gas price and limit, with optional per-function limits."""

    def __init__(self, gas_price: int, gas_limit: int, function_gas_limits: Optional[Dict[str, int]] = None):
        if gas_price < 0 or gas_limit <= 0:
            raise ValueError(f"invalid gas settings: price={gas_price}, limit={gas_limit}")
        self.gas_price = gas_price
        self.gas_limit = gas_limit
        self.function_gas_limits = dict(function_gas_limits or {})

    def get_gas_price(self, function_name: str) -> int:
        return self.gas_price

    def get_gas_limit(self, function_name: str, transaction: Optional[Dict[str, Any]] = None) -> int:
        return self.function_gas_limits.get(function_name, self.gas_limit)


class DefaultGasProvider(StaticGasProvider):

    def __init__(self):
        super().__init__(GAS_PRICE, GAS_LIMIT)


class NetworkGasProvider(GasProvider):
    """Asks the node: ``eth_gasPrice`` for the price, ``eth_estimateGas`` for the limit.

    The estimate is scaled by ``gas_limit_multiplier`` and capped at
    ``max_gas_limit`` when one is given. A fixed ``gas_price`` replaces the
    node's price.
    """

    def __init__(self, web3: Web3, gas_limit_multiplier: float = 1.2, max_gas_limit: Optional[int] = None,
                 gas_price: Optional[int] = None):
        if gas_limit_multiplier < 1:
            raise ValueError("gas limit multiplier must be at least 1")
        self.web3 = web3
        self.gas_limit_multiplier = gas_limit_multiplier
        self.max_gas_limit = max_gas_limit
        self.gas_price = gas_price

    def get_gas_price(self, function_name: str) -> int:
        if self.gas_price is not None:
            return self.gas_price
        return self.web3.eth.gas_price

    def get_gas_limit(self, function_name: str, transaction: Optional[Dict[str, Any]] = None) -> int:
        if transaction is None:
            raise ValueError(f"{function_name}: gas estimation needs the draft transaction")
        estimate = self.web3.eth.estimate_gas(transaction)
        gas_limit = int(estimate * self.gas_limit_multiplier)
        if self.max_gas_limit is not None:
            gas_limit = min(gas_limit, self.max_gas_limit)
        logging.debug(f"Estimated gas for {function_name}: {estimate}, using limit {gas_limit}")
        return gas_limit
