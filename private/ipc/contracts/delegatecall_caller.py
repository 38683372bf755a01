"""
DelegatecallCaller contract bindings for Python.
This file is auto-generated - DO NOT EDIT manually.
"""

from __future__ import annotations

from typing import Union

from eth_account.signers.local import LocalAccount
from eth_typing import HexAddress
from web3 import Web3
from web3.types import TxReceipt

from ..abi import Function
from ..client import TransactionManager
from ..gas import GasProvider
from ..remote_call import RemoteCall, RemoteFunctionCall
from .base import Contract


class DelegatecallCallerMetaData:
    """Metadata for the DelegatecallCaller contract."""

    ABI = [
        {
            "inputs": [],
            "name": "getCallerX",
            "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
            "stateMutability": "view",
            "type": "function"
        },
        {
            "inputs": [{"internalType": "address", "name": "_contractAddress", "type": "address"}],
            "name": "inc_delegatecall",
            "outputs": [],
            "stateMutability": "nonpayable",
            "type": "function"
        },
        {
            "inputs": [],
            "name": "x",
            "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
            "stateMutability": "view",
            "type": "function"
        }
    ]

    BIN = "0x608060405234801561001057600080fd5b50610214806100206000396000f3fe608060405234801561001057600080fd5b50600436106100415760003560e01c80630c55699c146100465780637b8ed01814610064578063a7126c2d14610082575b600080fd5b61004e6100c6565b6040518082815260200191505060405180910390f35b61006c6100cc565b6040518082815260200191505060405180910390f35b6100c46004803603602081101561009857600080fd5b81019080803573ffffffffffffffffffffffffffffffffffffffff1690602001909291905050506100d5565b005b60005481565b60008054905090565b8073ffffffffffffffffffffffffffffffffffffffff1660405180807f696e63282900000000000000000000000000000000000000000000000000000081525060050190506040518091039020604051602001808281526020019150506040516020818303038152906040526040518082805190602001908083835b602083106101745780518252602082019150602081019050602083039250610151565b6001836020036101000a038019825116818451168082178552505050505050905001915050600060405180830381855af49150503d80600081146101d4576040519150601f19603f3d011682016040523d82523d6000602084013e6101d9565b606091505b5050505056fea265627a7a723158209cc4481ac8884eeb81dc9f94a48073581c1c7500c490bb0d39d68ce5ffa6e17364736f6c634300050d0032"


class DelegatecallCaller(Contract):
    """Binding for the DelegatecallCaller contract."""

    BINARY = DelegatecallCallerMetaData.BIN
    ABI = DelegatecallCallerMetaData.ABI

    FUNC_GETCALLERX = "getCallerX"
    FUNC_INC_DELEGATECALL = "inc_delegatecall"
    FUNC_X = "x"

    def get_caller_x(self) -> RemoteFunctionCall[int]:
        function = Function(self.FUNC_GETCALLERX, (), (), ("uint256",))
        return self._execute_call_single_value_return(function)

    def inc_delegatecall(self, contract_address: HexAddress) -> RemoteFunctionCall[TxReceipt]:
        function = Function(self.FUNC_INC_DELEGATECALL, ("address",), (contract_address,))
        return self._execute_transaction(function)

    def x(self) -> RemoteFunctionCall[int]:
        function = Function(self.FUNC_X, (), (), ("uint256",))
        return self._execute_call_single_value_return(function)


def new_delegatecall_caller(w3: Web3, address: HexAddress,
                            transaction_manager: Union[TransactionManager, LocalAccount],
                            gas_provider: GasProvider) -> DelegatecallCaller:
    """Bind to an existing DelegatecallCaller deployment."""
    return DelegatecallCaller.load(address, w3, transaction_manager, gas_provider)


def deploy_delegatecall_caller(w3: Web3, transaction_manager: Union[TransactionManager, LocalAccount],
                               gas_provider: GasProvider) -> RemoteCall[DelegatecallCaller]:
    """Deploy a new DelegatecallCaller contract."""
    return DelegatecallCaller.deploy(w3, transaction_manager, gas_provider)
