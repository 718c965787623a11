import os
import tempfile
from datetime import datetime, timedelta

# Set environment variables BEFORE any imports that might use settings
# Use a temporary directory so a stray save never touches real data files
_test_data_dir = tempfile.mkdtemp()
os.environ["STORAGE_BACKEND"] = "json"
os.environ["PRODUCTS_FILE"] = os.path.join(_test_data_dir, "products.json")
os.environ["SALES_FILE"] = os.path.join(_test_data_dir, "sales.json")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_test_data_dir, 'store.db')}"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient

from cosmetics_store.api.deps import get_service
from cosmetics_store.main import app
from cosmetics_store.repositories.json_storage import JsonStorage
from cosmetics_store.services.inventory import InventoryLedgerService


class FixedClock:
    """Callable clock that only moves when told to."""

    def __init__(self, moment: datetime):
        self.moment = moment

    def __call__(self) -> datetime:
        return self.moment

    def advance(self, **kwargs) -> datetime:
        self.moment += timedelta(**kwargs)
        return self.moment


@pytest.fixture(scope="function")
def clock() -> FixedClock:
    return FixedClock(datetime(2025, 3, 14, 10, 30, 0))


@pytest.fixture(scope="function")
def storage(tmp_path) -> JsonStorage:
    """JSON storage over a fresh temporary directory."""
    return JsonStorage(tmp_path / "products.json", tmp_path / "sales.json")


@pytest.fixture(scope="function")
def service(storage: JsonStorage, clock: FixedClock) -> InventoryLedgerService:
    return InventoryLedgerService(storage, clock=clock)


@pytest.fixture(scope="function")
def client(service: InventoryLedgerService):
    """Create a test client with the service dependency overridden."""
    app.dependency_overrides[get_service] = lambda: service

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def cream(service: InventoryLedgerService):
    """A product with some stock, the usual starting point for sale tests."""
    return service.add_product("Cream", 10.0, 5, "BrandA", "Уход").product
