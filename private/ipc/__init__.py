from .client import (
    Client, NonceManager, TransactionManager, RawTransactionManager,
    ClientTransactionManager, ReadonlyTransactionManager,
)
from .errors import (
    ContractError, AbiTypeMismatchError, ContractCallError, ContractRevertError,
    TransactionFailedError, TransactionTimeoutError,
    error_hash_to_error, parse_errors_to_hashes, decode_revert_reason,
)
from .gas import GasProvider, StaticGasProvider, DefaultGasProvider, NetworkGasProvider
from .abi import Function
from .remote_call import RemoteCall, RemoteFunctionCall

__all__ = [
    'Client',
    'NonceManager',
    'TransactionManager',
    'RawTransactionManager',
    'ClientTransactionManager',
    'ReadonlyTransactionManager',
    'ContractError',
    'AbiTypeMismatchError',
    'ContractCallError',
    'ContractRevertError',
    'TransactionFailedError',
    'TransactionTimeoutError',
    'error_hash_to_error',
    'parse_errors_to_hashes',
    'decode_revert_reason',
    'GasProvider',
    'StaticGasProvider',
    'DefaultGasProvider',
    'NetworkGasProvider',
    'Function',
    'RemoteCall',
    'RemoteFunctionCall',
]
