"""
Pytest configuration shared across CorpSocial tests

Provides an in-memory backend and a signed-in user
"""

import pytest

from corpsocial.backend.memory import create_memory_backend
from corpsocial.observability.telemetry import reset_telemetry
from corpsocial.services.auth import AuthService

TEST_EMAIL = "ana@example.com"
TEST_PASSWORD = "secret123"


@pytest.fixture
def backend():
    """Fresh in-memory backend per test"""
    return create_memory_backend(base_url="https://backend.test", bucket="media")


@pytest.fixture
def signed_in(backend):
    """Register and sign in a user; returns the Session"""
    auth = AuthService(backend)
    auth.register("Ana Pop", TEST_EMAIL, TEST_PASSWORD)
    return auth.login(TEST_EMAIL, TEST_PASSWORD)


@pytest.fixture(autouse=True)
def _clean_telemetry():
    reset_telemetry()
    yield
    reset_telemetry()
