"""
Pytest configuration and fixtures for the feedback service tests.
"""
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from feedback_service.broker.memory import MemoryBroker
from feedback_service.cache.memory import MemoryCache
from feedback_service.core.config import Settings
from feedback_service.main import create_app
from feedback_service.storage.memory import MemoryFeedbackStorage

TEST_SECRET = "test-secret-0123456789abcdef0123456789"


class TickingClock:
    """Returns a strictly increasing datetime on every call."""

    def __init__(self, start=datetime(2024, 1, 1), step=timedelta(seconds=1)):
        self.now = start
        self.step = step

    def __call__(self):
        self.now += self.step
        return self.now


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def settings():
    return Settings(
        SECRET=TEST_SECRET,
        STORAGE_BACKEND="memory",
        CACHE_BACKEND="memory",
        BROKER_BACKEND="memory",
        PAGE_DEFAULT_LIMIT=10,
    )


@pytest.fixture
def storage(clock):
    return MemoryFeedbackStorage(clock=clock)


@pytest.fixture
def broker():
    return MemoryBroker()


@pytest.fixture
def cache():
    return MemoryCache(ttl_seconds=60)


@pytest.fixture
def app(settings, storage, cache, broker):
    return create_app(settings, storage=storage, cache=cache, broker=broker)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def auth(app):
    """Builds an Authorization header for the given role."""

    def _auth(role="unrestricted", minutes=10):
        token = app.state.token_issuer.issue(minutes, role)
        return {"Authorization": f"Bearer {token}"}

    return _auth


@pytest.fixture
def valid_feedback_payload():
    return {
        "customerName": "Jane Doe",
        "email": "jane@example.com",
        "feedbackText": "Checkout was quick, delivery was late.",
        "source": "https://shop.example.com/orders/42",
    }
