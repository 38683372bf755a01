import re
from dataclasses import dataclass
from typing import Any, Sequence, Tuple

from eth_abi import decode, encode, is_encodable
from eth_abi.exceptions import DecodingError
from eth_typing import HexStr
from web3 import Web3

from .errors import AbiTypeMismatchError, ContractCallError

_FIXED_BYTES = re.compile(r"^bytes([1-9]|[12][0-9]|3[0-2])$")


def normalize_argument(abi_type: str, value: Any) -> Any:
    """Checks a single argument against its ABI type.

    Addresses come back checksummed and fixed-size byte arrays must have
    exactly the declared length (hex strings are accepted for them).

    Raises:
        AbiTypeMismatchError: if the value cannot be encoded as ``abi_type``.
    """
    if abi_type == "address":
        try:
            return Web3.to_checksum_address(value)
        except (TypeError, ValueError) as e:
            raise AbiTypeMismatchError(f"{value!r} is not a valid address") from e

    match = _FIXED_BYTES.match(abi_type)
    if match:
        size = int(match.group(1))
        if isinstance(value, str):
            try:
                value = bytes.fromhex(value[2:] if value.startswith("0x") else value)
            except ValueError as e:
                raise AbiTypeMismatchError(f"{value!r} is not valid hex for {abi_type}") from e
        if not isinstance(value, (bytes, bytearray)) or len(value) != size:
            raise AbiTypeMismatchError(f"{abi_type} expects exactly {size} bytes, got {value!r}")
        return bytes(value)

    if not is_encodable(abi_type, value):
        raise AbiTypeMismatchError(f"{value!r} cannot be encoded as {abi_type}")
    return value


def encode_arguments(input_types: Sequence[str], args: Sequence[Any]) -> bytes:
    """Validates and ABI-encodes a list of arguments."""
    if len(input_types) != len(args):
        raise AbiTypeMismatchError(f"expected {len(input_types)} arguments, got {len(args)}")
    if not input_types:
        return b""
    values = [normalize_argument(t, v) for t, v in zip(input_types, args)]
    return encode(list(input_types), values)


@dataclass(frozen=True)
class Function:
    """A contract function call: name, typed arguments and expected outputs.

    Arguments are validated when the descriptor is built, so a mismatch
    never reaches the transport.
    """
    name: str
    input_types: Tuple[str, ...] = ()
    args: Tuple[Any, ...] = ()
    output_types: Tuple[str, ...] = ()

    def __post_init__(self):
        input_types = tuple(self.input_types)
        args = tuple(self.args)
        if len(input_types) != len(args):
            raise AbiTypeMismatchError(
                f"{self.name}: expected {len(input_types)} arguments, got {len(args)}"
            )
        try:
            args = tuple(normalize_argument(t, v) for t, v in zip(input_types, args))
        except AbiTypeMismatchError as e:
            raise AbiTypeMismatchError(f"{self.name}: {e}") from e

        object.__setattr__(self, "input_types", input_types)
        object.__setattr__(self, "args", args)
        object.__setattr__(self, "output_types", tuple(self.output_types))

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.input_types)})"

    @property
    def selector(self) -> bytes:
        return bytes(Web3.keccak(text=self.signature)[:4])

    def encode(self) -> HexStr:
        """Returns the 0x-prefixed calldata for this call."""
        encoded_args = encode(list(self.input_types), list(self.args)) if self.input_types else b""
        return HexStr("0x" + self.selector.hex() + encoded_args.hex())

    def decode_output(self, raw: bytes) -> Tuple[Any, ...]:
        if not self.output_types:
            return ()
        try:
            return decode(list(self.output_types), bytes(raw))
        except DecodingError as e:
            raise ContractCallError(f"{self.name}: cannot decode return data: {e}") from e
