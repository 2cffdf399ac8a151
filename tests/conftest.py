"""
Global pytest fixtures for the Lambda Gateway test suite.

Responsibilities:
    - Provide a fresh FastAPI TestClient via the app factory for integration tests
    - Provide isolated UserDirectory, RequestMetrics and QuoteCatalog fixtures
    - Provide a static secret provider so no test touches env or network secrets

Using `create_app()` ensures each test gets fresh in-memory state, so request
counters and users never leak between tests.
"""

import random

import pytest
from fastapi.testclient import TestClient

from main import create_app
from lambda_gateway.auth.authenticator import HashAuthenticator
from lambda_gateway.auth.secret_provider import StaticSecretProvider
from lambda_gateway.config import get_settings
from lambda_gateway.directory.directory import UserDirectory
from lambda_gateway.metrics.metrics import RequestMetrics
from lambda_gateway.quotes.catalog import QuoteCatalog

SECRET_ID = "lambda-gateway-secret"
TEST_KEY = "test-encryption-key"


@pytest.fixture
def secret_provider() -> StaticSecretProvider:
    return StaticSecretProvider({SECRET_ID: {"encryptionKey": TEST_KEY}})


@pytest.fixture
def settings(monkeypatch):
    """Settings with a known secret id and fail-closed policy, independent of the caller's env."""
    monkeypatch.setenv("GATEWAY_SECRET_ID", SECRET_ID)
    monkeypatch.setenv("GATEWAY_MISSING_SECRET_POLICY", "fail-closed")
    monkeypatch.setenv("GATEWAY_ID_STRATEGY", "random")
    return get_settings()


@pytest.fixture
def app(settings, secret_provider):
    return create_app(settings=settings, secret_provider=secret_provider)


@pytest.fixture
def client(app) -> TestClient:
    """Fresh TestClient with a new app instance (and new in-memory state)."""
    return TestClient(app)


@pytest.fixture
def directory() -> UserDirectory:
    return UserDirectory()


@pytest.fixture
def metrics(directory: UserDirectory) -> RequestMetrics:
    return RequestMetrics(directory)


@pytest.fixture
def catalog() -> QuoteCatalog:
    return QuoteCatalog(rng=random.Random(1234))


@pytest.fixture
def authenticator(secret_provider) -> HashAuthenticator:
    return HashAuthenticator(provider=secret_provider, secret_id=SECRET_ID)
