import pytest
from fastapi.testclient import TestClient

from energymon.deps import get_reading_store
from energymon.main import app


@pytest.fixture(autouse=True)
def fresh_store():
    """Every test starts from the zero/OFF sample."""
    get_reading_store().reset()
    yield get_reading_store()
    get_reading_store().reset()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)
