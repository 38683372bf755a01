import time
import threading
import logging
from typing import Optional, Union
from web3 import Web3
from web3.exceptions import TransactionNotFound, Web3RPCError
from eth_account import Account
from eth_account.signers.local import LocalAccount

from private.ipc.client import tx_hash_hex

_nonce_lock = threading.Lock()

VON_PER_LAT = 10**18
TRANSFER_GAS_LIMIT = 21000


class IPCTestError(Exception):
    pass

class TransactionFailedError(IPCTestError):
    pass

class NonceTooLowError(IPCTestError):
    pass

class ReplaceUnderpricedError(IPCTestError):
    pass

def new_funded_account(
    source_private_key: str,
    dial_uri: str,
    amount_von: int,
    max_retries: int = 10,
    retry_delay: float = 0.01
) -> LocalAccount:
    """Creates a fresh account and transfers ``amount_von`` to it from the source key."""
    try:
        source_account = Account.from_key(source_private_key)
    except ValueError as e:
        raise IPCTestError(f"Failed to load private key: {e}") from e

    dest_account = Account.create()

    web3 = Web3(Web3.HTTPProvider(dial_uri))
    if not web3.is_connected():
        raise IPCTestError(f"Failed to connect to {dial_uri}")

    chain_id = web3.eth.chain_id

    for attempt in range(max_retries):
        try:
            deposit(
                web3=web3,
                dest_address=dest_account.address,
                source_account=source_account,
                amount_von=amount_von,
                chain_id=chain_id
            )
            logging.info(f"Funded {dest_account.address} with {amount_von} von")
            return dest_account
        except (NonceTooLowError, ReplaceUnderpricedError) as e:
            if attempt < max_retries - 1:
                logging.warning(f"Deposit attempt {attempt + 1} failed, retrying: {e}")
                time.sleep(retry_delay)
                continue
            raise IPCTestError(f"Failed to deposit after {max_retries} attempts: {e}") from e

    raise IPCTestError(f"Failed to deposit account {max_retries} times")

def deposit(
    web3: Web3,
    dest_address: str,
    source_account: LocalAccount,
    amount_von: int,
    chain_id: int,
    gas_price: Optional[int] = None
) -> None:
    """Transfers ``amount_von`` from ``source_account`` and waits for the transfer to be mined."""
    with _nonce_lock:
        nonce = web3.eth.get_transaction_count(source_account.address, 'pending')

    transaction = {
        'chainId': chain_id,
        'nonce': nonce,
        'gasPrice': gas_price if gas_price is not None else web3.eth.gas_price,
        'gas': TRANSFER_GAS_LIMIT,
        'to': Web3.to_checksum_address(dest_address),
        'value': amount_von,
        'data': b'',
    }
    signed_txn = source_account.sign_transaction(transaction)

    try:
        tx_hash = web3.eth.send_raw_transaction(signed_txn.raw_transaction)
    except Web3RPCError as e:
        error_msg = str(e).lower()
        if 'nonce too low' in error_msg:
            raise NonceTooLowError(f"Nonce too low: {e}") from e
        elif 'replacement transaction underpriced' in error_msg:
            raise ReplaceUnderpricedError(f"Replacement transaction underpriced: {e}") from e
        raise IPCTestError(f"Transaction failed: {e}") from e

    wait_for_tx(web3, tx_hash)

def to_von(amount_lat: Union[int, float]) -> int:
    return int(amount_lat * VON_PER_LAT)

def wait_for_tx(
    web3: Web3,
    tx_hash: Union[str, bytes],
    timeout: float = 120.0,
    poll_interval: float = 0.2
) -> None:
    """Polls for a receipt until it shows up or ``timeout`` elapses.

    Raises:
        TransactionFailedError: If the receipt status is not 1.
        IPCTestError: On timeout.
    """
    if isinstance(tx_hash, str):
        tx_hash = bytes.fromhex(tx_hash[2:] if tx_hash.startswith('0x') else tx_hash)

    deadline = time.monotonic() + timeout
    while True:
        try:
            receipt = web3.eth.get_transaction_receipt(tx_hash)
        except TransactionNotFound:
            receipt = None

        if receipt is not None:
            if receipt['status'] == 1:
                return
            raise TransactionFailedError(f"Transaction {tx_hash_hex(tx_hash)} failed")

        if time.monotonic() > deadline:
            raise IPCTestError(f"Timeout waiting for transaction {tx_hash_hex(tx_hash)}")
        time.sleep(poll_interval)
