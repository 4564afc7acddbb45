import pytest
from mongomock_motor import AsyncMongoMockClient
from fastapi.testclient import TestClient

from database import create_indexes
from models.catalog import default_catalog
from server import create_app

SHOP = "jersey-shop.myshopify.com"


@pytest.fixture
def db():
    """Fresh in-memory database per test"""
    client = AsyncMongoMockClient()
    return client["personalizer_test"]


@pytest.fixture
async def indexed_db(db):
    await create_indexes(db)
    return db


@pytest.fixture
def catalog():
    return default_catalog(SHOP)


@pytest.fixture
def api_client(db):
    """API client backed by the in-memory database"""
    app = create_app(database=db)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def make_order():
    """Build a Shopify orders/create payload"""
    def _make_order(line_items=None, **overrides):
        order = {
            "id": 5512345678901,
            "name": "#1001",
            "email": "fan@example.com",
            "customer": {"first_name": "Jamie", "last_name": "Rivera"},
            "created_at": "2026-03-01T10:15:00-05:00",
            "line_items": line_items if line_items is not None else [
                {
                    "id": 13800000001,
                    "product_id": 7400000001,
                    "variant_id": 4200000001,
                    "sku": "JERSEY-RED-L",
                    "title": "Home Jersey",
                    "quantity": 1,
                    "properties": [
                        {"name": "Player Name", "value": "Smith"},
                        {"name": "Placement", "value": "Chest, Back"},
                        {"name": "Font Style", "value": "Varsity Style (+$3)"},
                    ],
                },
                {
                    "id": 13800000002,
                    "product_id": 7400000002,
                    "variant_id": 4200000002,
                    "sku": "CAP-BLK",
                    "title": "Team Cap",
                    "quantity": 2,
                    "properties": [],
                },
            ],
        }
        order.update(overrides)
        return order
    return _make_order
