import unittest
import sys
import os

# Add the project root to the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from private.ipc.gas import (
    GasProvider, StaticGasProvider, DefaultGasProvider, NetworkGasProvider, GAS_PRICE, GAS_LIMIT
)
from tests.mocks.mock_ipc import MockWeb3, GAS_PRICE as NODE_GAS_PRICE


class TestStaticGasProvider(unittest.TestCase):

    def test_constant_values(self):
        provider = StaticGasProvider(gas_price=10, gas_limit=100_000)
        self.assertEqual(provider.get_gas_price("anything"), 10)
        self.assertEqual(provider.get_gas_limit("anything"), 100_000)

    def test_per_function_limit(self):
        provider = StaticGasProvider(10, 100_000, function_gas_limits={"deploy": 3_000_000})
        self.assertEqual(provider.get_gas_limit("deploy"), 3_000_000)
        self.assertEqual(provider.get_gas_limit("x"), 100_000)

    def test_invalid_settings(self):
        with self.assertRaises(ValueError):
            StaticGasProvider(10, 0)
        with self.assertRaises(ValueError):
            StaticGasProvider(-1, 21000)

    def test_default_provider(self):
        provider = DefaultGasProvider()
        self.assertEqual(provider.get_gas_price("x"), GAS_PRICE)
        self.assertEqual(provider.get_gas_limit("x"), GAS_LIMIT)
        self.assertEqual(GAS_PRICE, 4_100_000_000)
        self.assertEqual(GAS_LIMIT, 9_000_000)

    def test_interface_is_abstract(self):
        with self.assertRaises(NotImplementedError):
            GasProvider().get_gas_price("x")


class TestNetworkGasProvider(unittest.TestCase):

    def setUp(self):
        self.web3 = MockWeb3()
        self.tx = {'from': "0x" + "11" * 20, 'data': "0x0c55699c", 'value': 0}

    def test_price_from_node(self):
        provider = NetworkGasProvider(self.web3)
        self.assertEqual(provider.get_gas_price("x"), NODE_GAS_PRICE)

    def test_fixed_price_with_estimated_limit(self):
        provider = NetworkGasProvider(self.web3, gas_limit_multiplier=1.5, gas_price=7)
        self.assertEqual(provider.get_gas_price("x"), 7)
        self.assertEqual(provider.get_gas_limit("x", self.tx), 75_000)

    def test_limit_from_estimate_with_margin(self):
        provider = NetworkGasProvider(self.web3, gas_limit_multiplier=1.5)
        self.assertEqual(provider.get_gas_limit("x", self.tx), 75_000)
        self.web3.eth.estimate_gas.assert_called_once_with(self.tx)

    def test_limit_capped(self):
        provider = NetworkGasProvider(self.web3, gas_limit_multiplier=2, max_gas_limit=80_000)
        self.assertEqual(provider.get_gas_limit("x", self.tx), 80_000)

    def test_limit_needs_transaction(self):
        with self.assertRaises(ValueError):
            NetworkGasProvider(self.web3).get_gas_limit("x")

    def test_multiplier_below_one_rejected(self):
        with self.assertRaises(ValueError):
            NetworkGasProvider(self.web3, gas_limit_multiplier=0.5)


if __name__ == '__main__':
    unittest.main()
