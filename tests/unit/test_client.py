import unittest
import threading
import sys
import os
from unittest.mock import MagicMock, PropertyMock, patch

# Add the project root to the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from eth_account import Account
from web3.exceptions import TimeExhausted

from sdk.common import SDKError
from sdk.config import Config
from private.ipc.client import (
    Client, NonceManager, RawTransactionManager, ClientTransactionManager,
    ReadonlyTransactionManager, as_transaction_manager, tx_hash_hex,
)
from private.ipc.errors import TransactionFailedError, TransactionTimeoutError
from private.ipc.gas import StaticGasProvider, NetworkGasProvider
from tests.mocks.mock_ipc import (
    MockWeb3, make_receipt, TEST_PRIVATE_KEY, CONTRACT_ADDRESS, TX_HASH, CHAIN_ID
)


class TestNonceManager(unittest.TestCase):

    def setUp(self):
        self.web3 = MockWeb3()
        self.web3.eth.get_transaction_count.return_value = 5
        self.manager = NonceManager(self.web3, CONTRACT_ADDRESS)

    def test_seeded_from_pending_count(self):
        self.assertEqual(self.manager.get_nonce(), 5)
        self.web3.eth.get_transaction_count.assert_called_once_with(CONTRACT_ADDRESS, 'pending')

    def test_increments_locally(self):
        self.assertEqual([self.manager.get_nonce() for _ in range(3)], [5, 6, 7])
        self.assertEqual(self.web3.eth.get_transaction_count.call_count, 1)

    def test_reset_refetches(self):
        self.manager.get_nonce()
        self.web3.eth.get_transaction_count.return_value = 9
        self.manager.reset_nonce()
        self.assertEqual(self.manager.get_nonce(), 9)

    def test_concurrent_nonces_are_unique(self):
        nonces = []
        lock = threading.Lock()

        def take():
            nonce = self.manager.get_nonce()
            with lock:
                nonces.append(nonce)

        threads = [threading.Thread(target=take) for _ in range(50)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(sorted(nonces), list(range(5, 55)))


class TestRawTransactionManager(unittest.TestCase):

    def setUp(self):
        self.web3 = MockWeb3()
        self.account = Account.from_key(TEST_PRIVATE_KEY)
        self.manager = RawTransactionManager(self.web3, self.account, chain_id=CHAIN_ID)

    def test_from_address(self):
        self.assertEqual(self.manager.from_address, self.account.address)

    def test_send_signs_locally(self):
        tx_hash = self.manager.send_transaction(10, 100_000, CONTRACT_ADDRESS, "0x0c55699c")
        self.assertEqual(tx_hash, TX_HASH)

        raw = self.web3.eth.send_raw_transaction.call_args[0][0]
        self.assertEqual(Account.recover_transaction(raw), self.account.address)

    def test_consecutive_sends_use_consecutive_nonces(self):
        self.manager.send_transaction(10, 100_000, CONTRACT_ADDRESS, "0x")
        self.manager.send_transaction(10, 100_000, CONTRACT_ADDRESS, "0x")
        self.assertEqual(self.web3.eth.get_transaction_count.call_count, 1)
        self.assertEqual(self.manager.nonce_manager.get_nonce(), 2)

    def test_chain_id_fetched_once_when_not_configured(self):
        web3 = MockWeb3()
        chain_id = PropertyMock(return_value=CHAIN_ID)
        type(web3.eth).chain_id = chain_id
        manager = RawTransactionManager(web3, self.account)

        manager.send_transaction(10, 100_000, CONTRACT_ADDRESS, "0x")
        manager.send_transaction(10, 100_000, CONTRACT_ADDRESS, "0x")
        self.assertEqual(chain_id.call_count, 1)

    def test_send_failure_resets_nonce_and_propagates(self):
        self.web3.eth.send_raw_transaction.side_effect = ValueError("nonce too low")
        with self.assertRaises(ValueError):
            self.manager.send_transaction(10, 100_000, CONTRACT_ADDRESS, "0x")

        self.web3.eth.send_raw_transaction.side_effect = None
        self.manager.send_transaction(10, 100_000, CONTRACT_ADDRESS, "0x")
        self.assertEqual(self.web3.eth.get_transaction_count.call_count, 2)

    def test_signing_failure_does_not_consume_nonce(self):
        sign = self.account.sign_transaction
        nonces = []

        def flaky_sign(tx):
            nonces.append(tx['nonce'])
            if len(nonces) == 1:
                raise TypeError("unsupported transaction field")
            return sign(tx)

        with patch.object(self.account, 'sign_transaction', side_effect=flaky_sign):
            with self.assertRaises(TypeError):
                self.manager.send_transaction(10, 100_000, CONTRACT_ADDRESS, "0x")
            self.manager.send_transaction(10, 100_000, CONTRACT_ADDRESS, "0x")

        self.assertEqual(nonces, [0, 0])
        self.web3.eth.send_raw_transaction.assert_called_once()
        raw = self.web3.eth.send_raw_transaction.call_args[0][0]
        self.assertEqual(Account.recover_transaction(raw), self.account.address)

    def test_execute_transaction_waits_for_receipt(self):
        receipt = self.manager.execute_transaction(10, 100_000, CONTRACT_ADDRESS, "0x")
        self.assertEqual(receipt.status, 1)
        self.web3.eth.wait_for_transaction_receipt.assert_called_once_with(
            TX_HASH, timeout=self.manager.receipt_timeout, poll_latency=self.manager.poll_latency
        )

    def test_receipt_timeout(self):
        self.web3.eth.wait_for_transaction_receipt.side_effect = TimeExhausted("too slow")
        with self.assertRaises(TransactionTimeoutError) as context:
            self.manager.wait_for_receipt(TX_HASH)
        self.assertIsInstance(context.exception, TimeoutError)
        self.assertIn(tx_hash_hex(TX_HASH), str(context.exception))

    def test_send_call(self):
        self.manager.send_call(CONTRACT_ADDRESS, "0x0c55699c")
        self.web3.eth.call.assert_called_once_with(
            {'from': self.account.address, 'to': CONTRACT_ADDRESS, 'data': "0x0c55699c"}, 'latest'
        )


class TestOtherTransactionManagers(unittest.TestCase):

    def setUp(self):
        self.web3 = MockWeb3()
        self.sender = "0x" + "44" * 20

    def test_client_manager_uses_node_signing(self):
        manager = ClientTransactionManager(self.web3, self.sender)
        manager.send_transaction(10, 100_000, CONTRACT_ADDRESS, "0xabcdef", value=3)

        tx = self.web3.eth.send_transaction.call_args[0][0]
        self.assertEqual(tx['from'], manager.from_address)
        self.assertEqual(tx['to'], CONTRACT_ADDRESS)
        self.assertEqual(tx['gasPrice'], 10)
        self.assertEqual(tx['gas'], 100_000)
        self.assertEqual(tx['value'], 3)
        self.web3.eth.send_raw_transaction.assert_not_called()

    def test_client_manager_contract_creation_has_no_recipient(self):
        manager = ClientTransactionManager(self.web3, self.sender)
        manager.send_transaction(10, 100_000, None, "0x6080")
        self.assertNotIn('to', self.web3.eth.send_transaction.call_args[0][0])

    def test_readonly_manager_refuses_to_send(self):
        manager = ReadonlyTransactionManager(self.web3, self.sender)
        with self.assertRaises(SDKError):
            manager.send_transaction(10, 100_000, CONTRACT_ADDRESS, "0x")

    def test_as_transaction_manager(self):
        account = Account.from_key(TEST_PRIVATE_KEY)
        manager = as_transaction_manager(self.web3, account)
        self.assertIsInstance(manager, RawTransactionManager)

        readonly = ReadonlyTransactionManager(self.web3, self.sender)
        self.assertIs(as_transaction_manager(self.web3, readonly), readonly)

        with self.assertRaises(TypeError):
            as_transaction_manager(self.web3, "not a manager")


class TestClient(unittest.TestCase):

    def setUp(self):
        self.web3 = MockWeb3()
        self.account = Account.from_key(TEST_PRIVATE_KEY)
        self.client = Client(
            self.web3, self.account,
            RawTransactionManager(self.web3, self.account, chain_id=CHAIN_ID),
            StaticGasProvider(10, 100_000),
        )

    def tearDown(self):
        self.client.close()

    def test_wait_for_tx_success(self):
        self.assertEqual(self.client.wait_for_tx(TX_HASH).status, 1)

    def test_wait_for_tx_failure(self):
        self.web3.eth.wait_for_transaction_receipt.return_value = make_receipt(status=0)
        with self.assertRaises(TransactionFailedError) as context:
            self.client.wait_for_tx(TX_HASH)
        self.assertEqual(context.exception.receipt.status, 0)

    def test_dial_validates_config(self):
        with self.assertRaises(SDKError):
            Client.dial(Config.default())

    @patch('private.ipc.client.Web3')
    def test_dial_connection_failure(self, mock_web3_cls):
        mock_web3_cls.return_value.is_connected.return_value = False
        config = Config(dial_uri="http://127.0.0.1:6789", private_key=TEST_PRIVATE_KEY)
        with self.assertRaises(ConnectionError):
            Client.dial(config)

    @patch('private.ipc.client.Web3')
    def test_dial_invalid_key(self, mock_web3_cls):
        mock_web3_cls.return_value.is_connected.return_value = True
        config = Config(dial_uri="http://127.0.0.1:6789", private_key="0x1234")
        with self.assertRaises(ValueError):
            Client.dial(config)

    @patch('private.ipc.client.Web3')
    def test_dial_success(self, mock_web3_cls):
        web3 = MagicMock()
        web3.is_connected.return_value = True
        mock_web3_cls.return_value = web3
        mock_web3_cls.to_checksum_address.side_effect = lambda address: address

        config = Config(
            dial_uri="http://127.0.0.1:6789", private_key=TEST_PRIVATE_KEY,
            chain_id=CHAIN_ID, gas_price=10, gas_limit=100_000, poa=True,
        )
        client = Client.dial(config)
        try:
            self.assertIs(client.web3, web3)
            self.assertEqual(client.auth.address, self.account.address)
            self.assertEqual(client.transaction_manager.chain_id, CHAIN_ID)
            self.assertIsInstance(client.gas_provider, StaticGasProvider)
            web3.middleware_onion.inject.assert_called_once()
        finally:
            client.close()

    @patch('private.ipc.client.Web3')
    def test_dial_without_gas_settings_uses_network_provider(self, mock_web3_cls):
        mock_web3_cls.return_value.is_connected.return_value = True
        mock_web3_cls.to_checksum_address.side_effect = lambda address: address

        client = Client.dial(Config(dial_uri="http://127.0.0.1:6789", private_key=TEST_PRIVATE_KEY))
        try:
            self.assertIsInstance(client.gas_provider, NetworkGasProvider)
            mock_web3_cls.return_value.middleware_onion.inject.assert_not_called()
        finally:
            client.close()


if __name__ == '__main__':
    unittest.main()
