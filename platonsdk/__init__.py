# Import and expose the public binding classes
from sdk.common import SDKError
from sdk.config import Config
from private.ipc.client import (
    Client, NonceManager, TransactionManager, RawTransactionManager,
    ClientTransactionManager, ReadonlyTransactionManager,
)
from private.ipc.errors import (
    ContractError, AbiTypeMismatchError, ContractCallError, ContractRevertError,
    TransactionFailedError, TransactionTimeoutError,
)
from private.ipc.gas import GasProvider, StaticGasProvider, DefaultGasProvider, NetworkGasProvider
from private.ipc.abi import Function
from private.ipc.remote_call import RemoteCall, RemoteFunctionCall
from private.ipc.contracts import Contract, ContractDescriptor, DelegatecallCaller, MathAndCryptographicFunctions


# Make SDKError appear under platonsdk in tracebacks
SDKError.__module__ = "platonsdk"

# Define what gets imported with "from platonsdk import *"
__all__ = ["SDKError", "Config", "Client", "NonceManager", "TransactionManager",
           "RawTransactionManager", "ClientTransactionManager", "ReadonlyTransactionManager",
           "ContractError", "AbiTypeMismatchError", "ContractCallError", "ContractRevertError",
           "TransactionFailedError", "TransactionTimeoutError",
           "GasProvider", "StaticGasProvider", "DefaultGasProvider", "NetworkGasProvider",
           "Function", "RemoteCall", "RemoteFunctionCall",
           "Contract", "ContractDescriptor", "DelegatecallCaller", "MathAndCryptographicFunctions"]
