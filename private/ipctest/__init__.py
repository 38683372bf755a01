from .ipctest import (
    IPCTestError,
    TransactionFailedError,
    NonceTooLowError,
    ReplaceUnderpricedError,
    new_funded_account,
    deposit,
    to_von,
    wait_for_tx,
)

__all__ = [
    "IPCTestError",
    "TransactionFailedError",
    "NonceTooLowError",
    "ReplaceUnderpricedError",
    "new_funded_account",
    "deposit",
    "to_von",
    "wait_for_tx",
]
