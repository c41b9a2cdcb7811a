from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from weatherservice.main import create_app
from weatherservice.store import InMemoryWeatherStore


@pytest.fixture
def store() -> InMemoryWeatherStore:
    return InMemoryWeatherStore()


@pytest.fixture
def client(store):
    # Fresh app per test so state never leaks between cases
    return TestClient(create_app(store))
