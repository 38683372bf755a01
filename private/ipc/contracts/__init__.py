from .base import Contract, ContractDescriptor
from .delegatecall_caller import (
    DelegatecallCaller, DelegatecallCallerMetaData, new_delegatecall_caller, deploy_delegatecall_caller
)
from .math_and_cryptographic_functions import (
    MathAndCryptographicFunctions, MathAndCryptographicFunctionsMetaData,
    new_math_and_cryptographic_functions, deploy_math_and_cryptographic_functions
)

__all__ = [
    'Contract',
    'ContractDescriptor',
    'DelegatecallCaller',
    'DelegatecallCallerMetaData',
    'new_delegatecall_caller',
    'deploy_delegatecall_caller',
    'MathAndCryptographicFunctions',
    'MathAndCryptographicFunctionsMetaData',
    'new_math_and_cryptographic_functions',
    'deploy_math_and_cryptographic_functions',
]
