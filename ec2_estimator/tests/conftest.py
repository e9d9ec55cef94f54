"""
Shared pytest fixtures for estimator tests.
"""

import sys
import os
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

# Set minimal environment variables for testing
os.environ.setdefault('ESTIMATE_API_BASE_URL', 'https://pricing.test')

import pytest
from unittest.mock import Mock, AsyncMock
from fastapi.testclient import TestClient
from ec2_estimator.core.config import Config
from ec2_estimator.main import app
from ec2_estimator.services import estimation_orchestrator
from ec2_estimator.services.estimate_client import RawResponse
from ec2_estimator.services.estimation_orchestrator import (
    EstimationOrchestrator,
    get_orchestrator,
)


@pytest.fixture
def test_config():
    """Validated configuration pointing at a fake pricing service."""
    config = Config(api_base_url='https://pricing.test', api_timeout='5')
    config.validate()
    return config


@pytest.fixture
def sample_result_body():
    """Flat result body as returned by the pricing service."""
    return {
        'instanceType': 't3.micro',
        'storageGB': 20,
        'exchangeRate': 150.25,
        'ec2MonthlyUSD': 7.49,
        'storageMonthlyUSD': 1.92,
        'totalMonthlyUSD': 9.41,
        'totalMonthlyJPY': 1414,
    }


def make_raw_response(status_code=200, text='{}', reason_phrase='OK'):
    """Build a RawResponse as returned by EstimateClient."""
    return RawResponse(
        status_code=status_code,
        ok=200 <= status_code < 300,
        reason_phrase=reason_phrase,
        text=text,
    )


@pytest.fixture
def raw_response():
    """Factory for RawResponse objects."""
    return make_raw_response


@pytest.fixture
def mock_estimate_client():
    """Mock pricing service client returning an empty 200 response."""
    mock = Mock()
    mock.post_estimate = AsyncMock(return_value=make_raw_response())
    return mock


@pytest.fixture
def orchestrator(test_config, mock_estimate_client):
    """Orchestrator wired to the mock client."""
    return EstimationOrchestrator(test_config, client=mock_estimate_client)


@pytest.fixture
def client(orchestrator):
    """FastAPI test client using the mock-backed orchestrator."""
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def reset_orchestrator_singleton():
    """Drop the global orchestrator between tests."""
    yield
    estimation_orchestrator._orchestrator = None
