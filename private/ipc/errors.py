import logging
from typing import Dict, Iterable, Optional, Union

from eth_abi import decode
from eth_abi.exceptions import DecodingError
from web3 import Web3
from web3.exceptions import ContractLogicError

from sdk.common import SDKError
from sdk.config import KNOWN_ERROR_SIGNATURES, validate_hex_string


class ContractError(SDKError):
    """Base class for failures raised by contract bindings."""
    pass


class AbiTypeMismatchError(ContractError, ValueError):
    """Raised before dispatch when an argument does not fit its ABI type."""
    pass


class ContractCallError(ContractError):
    """Raised when a call returns no data or data that cannot be decoded."""
    pass


class ContractRevertError(ContractError):
    """Raised when the remote execution reverts."""

    def __init__(self, message: str, reason: Optional[str] = None, data: Optional[str] = None):
        super().__init__(message)
        self.reason = reason
        self.data = data


class TransactionFailedError(ContractError):
    """Raised when a transaction is mined with receipt status 0."""

    def __init__(self, message: str, tx_hash: Optional[str] = None, receipt=None,
                 revert_reason: Optional[str] = None):
        super().__init__(message)
        self.tx_hash = tx_hash
        self.receipt = receipt
        self.revert_reason = revert_reason


class TransactionTimeoutError(ContractError, TimeoutError):
    """Raised when no receipt shows up within the configured timeout."""
    pass


ERROR_STRING_SIGNATURE = "Error(string)"
PANIC_SIGNATURE = "Panic(uint256)"

PANIC_CODES: Dict[int, str] = {
    0x00: "generic compiler inserted panic",
    0x01: "assertion failed",
    0x11: "arithmetic overflow or underflow",
    0x12: "division or modulo by zero",
    0x21: "invalid enum conversion",
    0x22: "incorrectly encoded storage byte array",
    0x31: "pop on empty array",
    0x32: "array index out of bounds",
    0x41: "out of memory",
    0x51: "call to zero-initialized internal function",
}

# Dictionary to store the mapping from error selector to error signature
_error_hash_to_error_map: Dict[str, str] = {}


def error_selector(signature: str) -> str:
    """Returns the 0x-prefixed 4-byte selector of an error signature."""
    return "0x" + bytes(Web3.keccak(text=signature)[:4]).hex()


def parse_errors_to_hashes(signatures: Optional[Iterable[str]] = None) -> None:
    """
    Computes the selector of every error signature and stores it in the
    selector map. Called once at import with the built-in Solidity errors;
    call again with a contract's custom error signatures to register them.
    """
    if signatures is None:
        signatures = KNOWN_ERROR_SIGNATURES

    added = 0
    for signature in signatures:
        selector = error_selector(signature)
        if selector not in _error_hash_to_error_map:
            added += 1
        _error_hash_to_error_map[selector] = signature

    logging.debug(f"Registered {added} error signatures ({len(_error_hash_to_error_map)} total)")


def error_hash_to_error(error_data: str) -> Optional[str]:
    """
    Maps revert data (or a bare selector) to the registered error signature.

    Args:
        error_data: Hex revert data, starting with '0x' followed by the
                    4-byte selector (e.g., "0x08c379a0...").

    Returns:
        The error signature if the selector is known, otherwise None.
    """
    if not isinstance(error_data, str) or not validate_hex_string(error_data):
        return None

    return _error_hash_to_error_map.get(error_data[:10].lower())


def decode_revert_reason(error_data: Union[str, bytes, None]) -> Optional[str]:
    """Turns raw revert data into a human readable reason.

    ``Error(string)`` yields the string, ``Panic(uint256)`` yields the panic
    code and its meaning, a registered custom error yields its signature.
    Anything else yields None.
    """
    if error_data is None:
        return None
    if isinstance(error_data, (bytes, bytearray)):
        error_data = "0x" + bytes(error_data).hex()

    signature = error_hash_to_error(error_data)
    if signature is None:
        return None

    try:
        payload = bytes.fromhex(error_data[10:])
        if signature == ERROR_STRING_SIGNATURE:
            return decode(["string"], payload)[0]
        if signature == PANIC_SIGNATURE:
            code = decode(["uint256"], payload)[0]
            return f"Panic(0x{code:02x}): {PANIC_CODES.get(code, 'unknown panic code')}"
    except (DecodingError, ValueError) as e:
        logging.warning(f"Malformed {signature} revert payload: {e}")
        return None
    return signature


def revert_error_from(error: ContractLogicError) -> ContractRevertError:
    """Converts a web3 revert into a ContractRevertError."""
    data = getattr(error, "data", None)
    if not isinstance(data, str):
        data = None
    reason = decode_revert_reason(data) if data else None
    if reason is None:
        reason = _reason_from_message(getattr(error, "message", None) or str(error))
    message = f"execution reverted: {reason}" if reason else "execution reverted"
    return ContractRevertError(message, reason=reason, data=data)


def _reason_from_message(message: str) -> Optional[str]:
    prefix = "execution reverted"
    if not message.startswith(prefix):
        return message or None
    reason = message[len(prefix):].lstrip(": ").strip()
    return reason or None


# Automatically parse errors when the module is imported
parse_errors_to_hashes()
