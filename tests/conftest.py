import os
import sys
import pytest
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

@pytest.fixture(scope="session")
def test_config():
    """Global test configuration."""
    return {
        "test_private_key": "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318",
        "test_node_url": "http://127.0.0.1:6789",
        "test_receipt_timeout": 30,
        "funding_lat": 1,
    }

@pytest.fixture(scope="session")
def project_root_path():
    return project_root

@pytest.fixture(autouse=True)
def setup_test_environment():
    os.environ["PYTEST_RUNNING"] = "1"
    yield
    if "PYTEST_RUNNING" in os.environ:
        del os.environ["PYTEST_RUNNING"]

pytest_plugins = []
