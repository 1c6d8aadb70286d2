"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

from roi_simulator.main import app
from roi_simulator.calculations.assumptions import Assumptions


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")


@pytest.fixture(scope="session")
def anyio_backend():
    """Backend for async tests."""
    return "asyncio"


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def default_assumptions():
    """Default chain assumptions (100 stores, 600k fee, base improvements)."""
    return Assumptions()


@pytest.fixture
def profitable_assumptions():
    """Assumptions where the platform pays for itself within the first year."""
    return Assumptions(
        fee_per_store_per_year=100_000,
        sales_uplift_pct=0.03,
        gm_improvement_pp=0.01,
        labor_efficiency_pct=0.04,
        shrink_reduction_pct=0.35,
        compliance_savings_per_store=30_000,
    )
