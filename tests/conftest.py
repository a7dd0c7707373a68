"""
Test configuration.

Environment is set before any application import: settings are read at
import time and the rate limiter must stay off for the API tests.
"""
import os

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("DB_NAME", "table_reservation_test")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from mongomock_motor import AsyncMongoMockClient  # noqa: E402

from db.db_operation import MongoConnection, create_indexes  # noqa: E402
from main import app  # noqa: E402
from models.restaurant import RestaurantRegister  # noqa: E402
from models.table import TableCreate  # noqa: E402
from services.restaurant_service import register_restaurant  # noqa: E402
from services.table_service import create_table  # noqa: E402


@pytest_asyncio.fixture
async def mongo() -> MongoConnection:
    """Fresh in-memory store with the production indexes."""
    conn = MongoConnection(client=AsyncMongoMockClient(), db_name="table_reservation_test")
    await create_indexes(conn)
    return conn


@pytest.fixture
def client(mongo):
    app.state.mongo = mongo
    yield TestClient(app)
    del app.state.mongo


@pytest.fixture
def register(mongo):
    """Register a restaurant directly through the service and return its token and id."""

    async def _register(name="Bistro", password="secret1", external_ref=None, auto_confirm=False):
        payload = RestaurantRegister(
            external_ref=external_ref or f"ref-{name}",
            name=name,
            password=password,
            auto_confirm=auto_confirm,
        )
        return await register_restaurant(mongo, payload)

    return _register


@pytest.fixture
def add_table(mongo):
    async def _add_table(restaurant_id, name="T1", **overrides):
        fields = {"shape": "square", "min_people": 2, "max_people": 4}
        fields.update(overrides)
        payload = TableCreate(restaurant_id=str(restaurant_id), name=name, **fields)
        created = await create_table(mongo, restaurant_id, payload)
        return created["id"]

    return _add_table


@pytest.fixture
def auth_headers():
    def _headers(token: str) -> dict:
        return {"Authorization": f"Bearer {token}"}

    return _headers
