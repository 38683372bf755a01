"""
MathAndCryptographicFunctions contract bindings for Python.
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


class MathAndCryptographicFunctionsMetaData:
    """Metadata for the MathAndCryptographicFunctions contract."""

    ABI = [
        {
            "inputs": [],
            "name": "callAddMod",
            "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
            "stateMutability": "pure",
            "type": "function"
        },
        {
            "inputs": [
                {"internalType": "bytes32", "name": "hash", "type": "bytes32"},
                {"internalType": "uint8", "name": "v", "type": "uint8"},
                {"internalType": "bytes32", "name": "r", "type": "bytes32"},
                {"internalType": "bytes32", "name": "s", "type": "bytes32"}
            ],
            "name": "callEcrecover",
            "outputs": [],
            "stateMutability": "nonpayable",
            "type": "function"
        },
        {
            "inputs": [],
            "name": "callKeccak256",
            "outputs": [{"internalType": "bytes32", "name": "", "type": "bytes32"}],
            "stateMutability": "pure",
            "type": "function"
        },
        {
            "inputs": [],
            "name": "callMulMod",
            "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
            "stateMutability": "pure",
            "type": "function"
        },
        {
            "inputs": [],
            "name": "callRipemd160",
            "outputs": [{"internalType": "bytes32", "name": "", "type": "bytes32"}],
            "stateMutability": "pure",
            "type": "function"
        },
        {
            "inputs": [],
            "name": "callSha256",
            "outputs": [{"internalType": "bytes32", "name": "", "type": "bytes32"}],
            "stateMutability": "pure",
            "type": "function"
        }
    ]

    BIN = "0x608060405234801561001057600080fd5b50610387806100206000396000f3fe608060405234801561001057600080fd5b50600436106100625760003560e01c806301c740441461006757806301f56b78146100855780635b4aa3ee14610114578063aa4e874414610132578063cc98f30e14610150578063f9b416911461016e575b600080fd5b61006f61018c565b6040518082815260200191505060405180910390f35b6100d26004803603608081101561009b57600080fd5b8101908080359060200190929190803560ff1690602001909291908035906020019092919080359060200190929190505050610206565b604051808273ffffffffffffffffffffffffffffffffffffffff1673ffffffffffffffffffffffffffffffffffffffff16815260200191505060405180910390f35b61011c61027e565b6040518082815260200191505060405180910390f35b61013a6102bb565b6040518082815260200191505060405180910390f35b6101586102d0565b6040518082815260200191505060405180910390f35b61017661033d565b6040518082815260200191505060405180910390f35b6000600260405180807f41424300000000000000000000000000000000000000000000000000000000008152506003019050602060405180830381855afa1580156101db573d6000803e3d6000fd5b5050506040513d60208110156101f057600080fd5b8101908080519060200190929190505050905090565b60008060018686868660405160008152602001604052604051808581526020018460ff1660ff1681526020018381526020018281526020019450505050506020604051602081039080840390855afa158015610266573d6000803e3d6000fd5b50505060206040510351905080915050949350505050565b600060405180807f414243000000000000000000000000000000000000000000000000000000000081525060030190506040518091039020905090565b60006003806102c657fe5b6003600209905090565b6000600360405180807f41424300000000000000000000000000000000000000000000000000000000008152506003019050602060405180830381855afa15801561031f573d6000803e3d6000fd5b5050506040515160601b6bffffffffffffffffffffffff1916905090565b600060038061034857fe5b600360020890509056fea265627a7a723158206ea67213d8c4d3e509ba8b370cb5174b2553dd6e1d754956d74a998434ae337d64736f6c634300050d0032"


class MathAndCryptographicFunctions(Contract):
    """Binding for the MathAndCryptographicFunctions contract."""

    BINARY = MathAndCryptographicFunctionsMetaData.BIN
    ABI = MathAndCryptographicFunctionsMetaData.ABI

    FUNC_CALLADDMOD = "callAddMod"
    FUNC_CALLECRECOVER = "callEcrecover"
    FUNC_CALLKECCAK256 = "callKeccak256"
    FUNC_CALLMULMOD = "callMulMod"
    FUNC_CALLRIPEMD160 = "callRipemd160"
    FUNC_CALLSHA256 = "callSha256"

    def call_add_mod(self) -> RemoteFunctionCall[int]:
        function = Function(self.FUNC_CALLADDMOD, (), (), ("uint256",))
        return self._execute_call_single_value_return(function)

    def call_ecrecover(self, hash: bytes, v: int, r: bytes, s: bytes) -> RemoteFunctionCall[TxReceipt]:
        function = Function(
            self.FUNC_CALLECRECOVER,
            ("bytes32", "uint8", "bytes32", "bytes32"),
            (hash, v, r, s),
        )
        return self._execute_transaction(function)

    def call_keccak256(self) -> RemoteFunctionCall[bytes]:
        function = Function(self.FUNC_CALLKECCAK256, (), (), ("bytes32",))
        return self._execute_call_single_value_return(function)

    def call_mul_mod(self) -> RemoteFunctionCall[int]:
        function = Function(self.FUNC_CALLMULMOD, (), (), ("uint256",))
        return self._execute_call_single_value_return(function)

    def call_ripemd160(self) -> RemoteFunctionCall[bytes]:
        function = Function(self.FUNC_CALLRIPEMD160, (), (), ("bytes32",))
        return self._execute_call_single_value_return(function)

    def call_sha256(self) -> RemoteFunctionCall[bytes]:
        function = Function(self.FUNC_CALLSHA256, (), (), ("bytes32",))
        return self._execute_call_single_value_return(function)


def new_math_and_cryptographic_functions(w3: Web3, address: HexAddress,
                                         transaction_manager: Union[TransactionManager, LocalAccount],
                                         gas_provider: GasProvider) -> MathAndCryptographicFunctions:
    """Bind to an existing MathAndCryptographicFunctions deployment."""
    return MathAndCryptographicFunctions.load(address, w3, transaction_manager, gas_provider)


def deploy_math_and_cryptographic_functions(w3: Web3, transaction_manager: Union[TransactionManager, LocalAccount],
                                            gas_provider: GasProvider) -> RemoteCall[MathAndCryptographicFunctions]:
    """Deploy a new MathAndCryptographicFunctions contract."""
    return MathAndCryptographicFunctions.deploy(w3, transaction_manager, gas_provider)
