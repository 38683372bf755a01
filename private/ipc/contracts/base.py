"""
Base class shared by the generated contract bindings.

A binding pairs a contract's creation bytecode with the address of a
deployed instance and exposes one typed method per contract function.
Every method builds a Function descriptor and hands it to one of the
execution paths below, which encode the call, dispatch it through the
transaction manager and decode the result.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar, Union

from eth_account.signers.local import LocalAccount
from eth_typing import HexAddress, HexStr
from web3 import Web3
from web3.exceptions import ContractLogicError
from web3.types import TxReceipt

from sdk.common import SDKError, FUNC_DEPLOY, EMPTY_RESULT
from ..abi import Function, encode_arguments, normalize_argument
from ..client import TransactionManager, as_transaction_manager, tx_hash_hex
from ..errors import ContractCallError, TransactionFailedError, revert_error_from
from ..gas import GasProvider
from ..remote_call import RemoteCall, RemoteFunctionCall

# Markers that start the CBOR metadata appended by solc to runtime code
METADATA_HASH_INDICATORS = (
    "a165627a7a72305820",
    "a265627a7a72305820",
    "a265627a7a72315820",
    "a2646970667358221220",
    "a264697066735822",
)

C = TypeVar("C", bound="Contract")


@dataclass(frozen=True)
class ContractDescriptor:
    """Creation bytecode (hex, no prefix) and the address it lives at."""
    binary: str
    address: HexAddress


def _strip_0x(value: str) -> str:
    return value[2:] if value.startswith("0x") else value


def _replay_revert_reason(web3: Web3, tx: Dict[str, Any], block_number) -> Optional[str]:
    """Re-runs a failed transaction as a call to recover its revert reason."""
    try:
        web3.eth.call(tx, block_number)
    except ContractLogicError as e:
        return revert_error_from(e).reason
    except Exception as e:
        # best effort only; the mined failure is reported either way
        logging.debug(f"Could not replay failed transaction at block {block_number}: {e}")
    return None


def execute_transaction(web3: Web3, transaction_manager: TransactionManager, gas_provider: GasProvider,
                        function_name: str, to: Optional[HexAddress], data: HexStr,
                        value: int = 0) -> TxReceipt:
    """Prices, submits and confirms one transaction.

    Raises:
        ContractRevertError: If the node rejects the transaction as reverting.
        TransactionFailedError: If the transaction is mined with status 0.
        TransactionTimeoutError: If no receipt appears in time.
    """
    tx = {'from': transaction_manager.from_address, 'data': data, 'value': value}
    if to is not None:
        tx['to'] = to

    try:
        gas_price = gas_provider.get_gas_price(function_name)
        gas_limit = gas_provider.get_gas_limit(function_name, tx)
        logging.debug(f"Transacting {function_name} to {to or '<create>'}: gasPrice={gas_price}, gas={gas_limit}")
        receipt = transaction_manager.execute_transaction(gas_price, gas_limit, to, data, value)
    except ContractLogicError as e:
        error = revert_error_from(e)
        logging.error(f"{function_name} reverted: {error}")
        raise error from e

    if receipt.get('status') == 0:
        tx_hash = tx_hash_hex(receipt.get('transactionHash', b''))
        reason = _replay_revert_reason(web3, dict(tx, gas=gas_limit), receipt.get('blockNumber'))
        message = (
            f"Transaction {tx_hash} has failed with status: {receipt.get('status')}. "
            f"Gas used: {receipt.get('gasUsed')}. Revert reason: '{reason}'."
        )
        logging.error(message)
        raise TransactionFailedError(message, tx_hash=tx_hash, receipt=receipt, revert_reason=reason)

    return receipt


class Contract:
    """Typed facade over one deployed contract.

    Subclasses set ``BINARY``, ``ABI`` and, when the constructor takes
    arguments, ``CONSTRUCTOR_TYPES``. Instances never change address or
    execution context after construction.
    """

    BINARY: str = ""
    ABI: List[Dict[str, Any]] = []
    CONSTRUCTOR_TYPES: Tuple[str, ...] = ()

    def __init__(self, contract_address: HexAddress, web3: Web3,
                 transaction_manager: Union[TransactionManager, LocalAccount],
                 gas_provider: GasProvider, transaction_receipt: Optional[TxReceipt] = None):
        if gas_provider is None:
            raise ValueError("a gas provider is required")
        self.web3 = web3
        self.transaction_manager = as_transaction_manager(web3, transaction_manager)
        self.gas_provider = gas_provider
        self._descriptor = ContractDescriptor(
            binary=_strip_0x(self.BINARY),
            address=normalize_argument("address", contract_address),
        )
        self._transaction_receipt = transaction_receipt

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.contract_address})"

    @property
    def descriptor(self) -> ContractDescriptor:
        return self._descriptor

    @property
    def contract_address(self) -> HexAddress:
        return self._descriptor.address

    @property
    def transaction_receipt(self) -> Optional[TxReceipt]:
        """The creation receipt when this instance came from ``deploy``, otherwise None."""
        return self._transaction_receipt

    @classmethod
    def load(cls: Type[C], contract_address: HexAddress, web3: Web3,
             transaction_manager: Union[TransactionManager, LocalAccount],
             gas_provider: GasProvider) -> C:
        """Binds to an existing deployment.

        No network call is made and the code at ``contract_address`` is not
        checked; use ``is_valid`` for that.
        """
        return cls(contract_address, web3, transaction_manager, gas_provider)

    @classmethod
    def deploy(cls: Type[C], web3: Web3, transaction_manager: Union[TransactionManager, LocalAccount],
               gas_provider: GasProvider, *constructor_args) -> RemoteCall[C]:
        """Returns a RemoteCall that deploys a new instance.

        Constructor arguments are validated immediately. The call resolves
        to an instance bound to the receipt's contract address once the
        creation transaction is mined.
        """
        if not cls.BINARY:
            raise SDKError(f"{cls.__name__} has no binary to deploy")

        encoded_args = encode_arguments(cls.CONSTRUCTOR_TYPES, constructor_args)
        data = HexStr("0x" + _strip_0x(cls.BINARY) + encoded_args.hex())
        manager = as_transaction_manager(web3, transaction_manager)

        def _deploy() -> C:
            logging.info(f"Deploying {cls.__name__} from {manager.from_address}")
            receipt = execute_transaction(web3, manager, gas_provider, FUNC_DEPLOY, None, data)
            contract_address = receipt.get('contractAddress')
            if not contract_address:
                raise ContractCallError(
                    f"Empty contract address returned for {cls.__name__} deployment "
                    f"{tx_hash_hex(receipt.get('transactionHash', b''))}"
                )
            logging.info(f"{cls.__name__} deployed at {contract_address}")
            return cls(contract_address, web3, manager, gas_provider, transaction_receipt=receipt)

        return RemoteCall(_deploy)

    def is_valid(self) -> bool:
        """Checks that the code at this address matches this binding's binary.

        The solc metadata trailer is ignored; the remaining runtime code must
        appear inside the creation bytecode.
        """
        if not self._descriptor.binary:
            raise SDKError(f"{type(self).__name__} has no binary to compare against")

        code = bytes(self.transaction_manager.get_code(self.contract_address)).hex()
        for indicator in METADATA_HASH_INDICATORS:
            index = code.find(indicator)
            if index != -1:
                code = code[:index]
                break

        return bool(code) and code in self._descriptor.binary.lower()

    def _call(self, function: Function) -> Tuple[Any, ...]:
        logging.debug(f"Calling {function.signature} on {self.contract_address}")
        try:
            raw = self.transaction_manager.send_call(self.contract_address, function.encode())
        except ContractLogicError as e:
            error = revert_error_from(e)
            logging.error(f"{function.signature} reverted on {self.contract_address}: {error}")
            raise error from e

        if not raw:
            raise ContractCallError(
                f"Empty value ({EMPTY_RESULT}) returned from contract {self.contract_address} for {function.signature}"
            )
        return function.decode_output(raw)

    def _execute_call_single_value_return(self, function: Function) -> RemoteFunctionCall:
        return RemoteFunctionCall(function, lambda: self._call(function)[0])

    def _execute_call_multiple_value_return(self, function: Function) -> RemoteFunctionCall:
        return RemoteFunctionCall(function, lambda: tuple(self._call(function)))

    def _execute_transaction(self, function: Function, value: int = 0) -> RemoteFunctionCall:
        return RemoteFunctionCall(
            function,
            lambda: execute_transaction(
                self.web3, self.transaction_manager, self.gas_provider,
                function.name, self.contract_address, function.encode(), value,
            ),
        )
