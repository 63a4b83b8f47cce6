"""
Pytest configuration and fixtures for the inventory engine and API tests
"""
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from lumina.api.deps import get_insights_client, get_store
from lumina.core.config import Settings
from lumina.core.store import ProductStore
from lumina.main import app
from lumina.models.product import Product
from lumina.seed import seed_demo_products
from lumina.services.insights import InsightsClient

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class FrozenClock:
    """Clock that only moves when told to."""

    def __init__(self, start=NOW):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def store(clock):
    return ProductStore(clock=clock)


@pytest.fixture
def demo_store(store):
    seed_demo_products(store)
    return store


@pytest.fixture
def make_product():
    """Build a Product value directly, bypassing the store."""

    def _make(id, **fields):
        data = {
            "name": f"Product {id}",
            "category": "Snacks",
            "price": 10.0,
            "cost": 5.0,
            "stock": 20,
            "min_stock": 5,
            "created_at": NOW,
            "updated_at": NOW,
        }
        data.update(fields)
        return Product(id=id, **data)

    return _make


@pytest.fixture
def client(demo_store):
    """FastAPI test client wired to a fresh seeded store and an offline insights client"""
    offline = InsightsClient(Settings(gemini_api_key=""))

    app.dependency_overrides[get_store] = lambda: demo_store
    app.dependency_overrides[get_insights_client] = lambda: offline
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
