"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

from calcdesk.main import app
from calcdesk.reference import load_tax_tables, load_cpi_table


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")


@pytest.fixture(scope="session")
def tax_tables():
    """Tax tables packaged with calcdesk."""
    return load_tax_tables()


@pytest.fixture(scope="session")
def cpi_table():
    """CPI history packaged with calcdesk."""
    return load_cpi_table()


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)
