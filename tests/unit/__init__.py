"""
Unit tests for the PlatON contract bindings.

Every test runs against a mocked Web3 instance; nothing touches the network.

To run all unit tests:
    python -m pytest tests/unit/ -v
"""
