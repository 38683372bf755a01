import concurrent.futures
import logging
import threading
from typing import Optional, Union

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_typing import HexAddress, HexStr
from hexbytes import HexBytes
from web3 import Web3
from web3.exceptions import TimeExhausted
from web3.middleware import ExtraDataToPOAMiddleware
from web3.types import TxReceipt

from sdk.common import SDKError, DEFAULT_BLOCK
from sdk.config import Config, DEFAULT_RECEIPT_TIMEOUT, DEFAULT_POLL_LATENCY
from .errors import TransactionFailedError, TransactionTimeoutError
from .gas import GasProvider


def tx_hash_hex(tx_hash: Union[str, bytes]) -> str:
    if isinstance(tx_hash, str):
        return tx_hash if tx_hash.startswith("0x") else "0x" + tx_hash
    return "0x" + bytes(tx_hash).hex()


class NonceManager:
    """Hands out consecutive nonces for one account.

    Seeded from the node's pending transaction count; ``reset_nonce``
    drops the local counter so the next nonce is fetched again.
    """

    def __init__(self, web3: Web3, address: HexAddress):
        self.web3 = web3
        self.address = address
        self._lock = threading.Lock()
        self._next_nonce: Optional[int] = None

    def get_nonce(self) -> int:
        with self._lock:
            if self._next_nonce is None:
                self._next_nonce = self.web3.eth.get_transaction_count(self.address, 'pending')
            nonce = self._next_nonce
            self._next_nonce += 1
            return nonce

    def reset_nonce(self) -> None:
        with self._lock:
            self._next_nonce = None


class TransactionManager:
    """Execution context shared by contract bindings.

    Owns the sender address, submits transactions and waits for their
    receipts, and issues read-only calls.
    """

    def __init__(self, web3: Web3, from_address: HexAddress,
                 receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT,
                 poll_latency: float = DEFAULT_POLL_LATENCY):
        self.web3 = web3
        self._from_address = Web3.to_checksum_address(from_address)
        self.receipt_timeout = receipt_timeout
        self.poll_latency = poll_latency

    @property
    def from_address(self) -> HexAddress:
        return self._from_address

    def send_transaction(self, gas_price: int, gas_limit: int, to: Optional[HexAddress],
                         data: HexStr, value: int = 0) -> HexBytes:
        """Submits a transaction and returns its hash. ``to`` is None for contract creation."""
        raise NotImplementedError

    def execute_transaction(self, gas_price: int, gas_limit: int, to: Optional[HexAddress],
                            data: HexStr, value: int = 0) -> TxReceipt:
        tx_hash = self.send_transaction(gas_price, gas_limit, to, data, value)
        return self.wait_for_receipt(tx_hash)

    def send_call(self, to: HexAddress, data: HexStr, block=DEFAULT_BLOCK) -> bytes:
        return self.web3.eth.call({'from': self.from_address, 'to': to, 'data': data}, block)

    def get_code(self, address: HexAddress, block=DEFAULT_BLOCK) -> bytes:
        return self.web3.eth.get_code(address, block)

    def wait_for_receipt(self, tx_hash: Union[str, bytes]) -> TxReceipt:
        """Waits for a transaction to be mined and returns its receipt.

        The receipt is returned whatever its status; callers decide what a
        failed status means.

        Raises:
            TransactionTimeoutError: If no receipt appears within ``receipt_timeout``.
        """
        try:
            receipt = self.web3.eth.wait_for_transaction_receipt(
                tx_hash, timeout=self.receipt_timeout, poll_latency=self.poll_latency
            )
        except TimeExhausted as e:
            logging.error(f"Timeout waiting for transaction {tx_hash_hex(tx_hash)}")
            raise TransactionTimeoutError(f"Timeout waiting for transaction {tx_hash_hex(tx_hash)}") from e

        logging.info(f"Transaction {tx_hash_hex(tx_hash)} mined in block {receipt.get('blockNumber')}, status {receipt.get('status')}")
        return receipt


class RawTransactionManager(TransactionManager):
    """Signs transactions locally with an eth-account key."""

    def __init__(self, web3: Web3, account: LocalAccount, chain_id: Optional[int] = None,
                 nonce_manager: Optional[NonceManager] = None, **kwargs):
        super().__init__(web3, account.address, **kwargs)
        self.account = account
        self._chain_id = chain_id
        self.nonce_manager = nonce_manager or NonceManager(web3, self.from_address)

    @property
    def chain_id(self) -> int:
        if self._chain_id is None:
            self._chain_id = self.web3.eth.chain_id
        return self._chain_id

    def send_transaction(self, gas_price: int, gas_limit: int, to: Optional[HexAddress],
                         data: HexStr, value: int = 0) -> HexBytes:
        tx = {
            'chainId': self.chain_id,
            'nonce': self.nonce_manager.get_nonce(),
            'gasPrice': gas_price,
            'gas': gas_limit,
            'value': value,
            'data': data,
        }
        if to is not None:
            tx['to'] = to

        try:
            signed_tx = self.account.sign_transaction(tx)
            tx_hash = self.web3.eth.send_raw_transaction(signed_tx.raw_transaction)
        except Exception as e:
            # the nonce was taken but never reached the node
            self.nonce_manager.reset_nonce()
            if "nonce too low" in str(e).lower():
                logging.warning(f"Nonce {tx['nonce']} too low for {self.from_address}, resynchronising")
            raise

        logging.debug(f"Sent transaction {tx_hash_hex(tx_hash)} from {self.from_address} (nonce {tx['nonce']})")
        return tx_hash


class ClientTransactionManager(TransactionManager):
    """Lets the node sign through ``eth_sendTransaction`` (unlocked node accounts)."""

    def send_transaction(self, gas_price: int, gas_limit: int, to: Optional[HexAddress],
                         data: HexStr, value: int = 0) -> HexBytes:
        tx = {
            'from': self.from_address,
            'gasPrice': gas_price,
            'gas': gas_limit,
            'value': value,
            'data': data,
        }
        if to is not None:
            tx['to'] = to

        tx_hash = self.web3.eth.send_transaction(tx)
        logging.debug(f"Sent transaction {tx_hash_hex(tx_hash)} through node account {self.from_address}")
        return tx_hash


class ReadonlyTransactionManager(TransactionManager):
    """Supports calls only."""

    def send_transaction(self, gas_price: int, gas_limit: int, to: Optional[HexAddress],
                         data: HexStr, value: int = 0) -> HexBytes:
        raise SDKError("read-only transaction manager cannot send transactions")


def as_transaction_manager(web3: Web3, context: Union[TransactionManager, LocalAccount]) -> TransactionManager:
    """Accepts either a transaction manager or bare credentials."""
    if isinstance(context, TransactionManager):
        return context
    if isinstance(context, LocalAccount):
        return RawTransactionManager(web3, context)
    raise TypeError(f"expected a TransactionManager or LocalAccount, got {type(context).__name__}")


class Client:
    """Represents a connection to a PlatON node with a signing account."""
    def __init__(self, web3: Web3, auth: LocalAccount, transaction_manager: TransactionManager,
                 gas_provider: GasProvider, max_concurrency: int = 8):
        self.web3 = web3
        self.auth = auth
        self.transaction_manager = transaction_manager
        self.gas_provider = gas_provider
        self.executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=max_concurrency, thread_name_prefix="platon-client"
        )

    @classmethod
    def dial(cls, config: Config) -> 'Client':
        """Creates a new client with the given configuration.

        Args:
            config: Client configuration

        Returns:
            A new client instance
        """
        config.validate()

        web3 = Web3(Web3.HTTPProvider(config.dial_uri))
        if not web3.is_connected():
            raise ConnectionError(f"Failed to connect to PlatON node at {config.dial_uri}")

        if config.poa:
            web3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)

        try:
            account = Account.from_key(config.private_key)
        except ValueError as e:
            raise ValueError(f"Invalid private key: {e}") from e

        transaction_manager = RawTransactionManager(
            web3, account, chain_id=config.chain_id,
            receipt_timeout=config.receipt_timeout, poll_latency=config.poll_latency,
        )
        logging.info(f"Dialed {config.dial_uri} as {account.address}")
        return cls(web3, account, transaction_manager, config.gas_provider(web3), config.max_concurrency)

    def load(self, contract_cls, contract_address: HexAddress):
        """Binds ``contract_cls`` to an existing address. No network call is made."""
        return contract_cls.load(contract_address, self.web3, self.transaction_manager, self.gas_provider)

    def deploy(self, contract_cls, *constructor_args):
        """Returns a RemoteCall deploying ``contract_cls`` with this client's context."""
        return contract_cls.deploy(self.web3, self.transaction_manager, self.gas_provider, *constructor_args)

    def wait_for_tx(self, tx_hash: Union[str, bytes]) -> TxReceipt:
        """Waits for a transaction initiated by this client to be mined.

        Raises:
            TransactionFailedError: If the transaction receipt indicates failure.
            TransactionTimeoutError: If the transaction is not mined within the timeout.
        """
        receipt = self.transaction_manager.wait_for_receipt(tx_hash)
        if receipt.get('status') == 0:
            raise TransactionFailedError(
                f"Transaction {tx_hash_hex(tx_hash)} failed.", tx_hash=tx_hash_hex(tx_hash), receipt=receipt
            )
        return receipt

    def close(self) -> None:
        self.executor.shutdown(wait=True)
