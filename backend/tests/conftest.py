"""Shared fixtures for the ingestion and API tests."""
import pytest

from app.core.limiter import limiter
from tests.fakes import FakeGraphStore


@pytest.fixture
def store() -> FakeGraphStore:
    return FakeGraphStore()


@pytest.fixture(autouse=True)
def _no_rate_limit():
    limiter.enabled = False
    yield
    limiter.enabled = True
