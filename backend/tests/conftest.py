"""Shared fixtures.

Settings are read once at import time, so the environment is prepared
before anything from ``storefront`` is imported.
"""

import os

os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("ADMIN_USER_IDS", "admin_001")
os.environ.setdefault("MONGODB_DATABASE", "storefront_test")

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from storefront.database.mongodb import mongodb
from storefront.main import app
from storefront.models.order import ShippingAddress
from storefront.models.product import ProductCategory, ProductCreate, ProductImage
from storefront.services.catalog_service import catalog_service


@pytest.fixture
async def db():
    """Point the global MongoDB handle at a fresh in-memory database."""
    mongodb.client = AsyncMongoMockClient()
    mongodb.db = mongodb.client["storefront_test"]
    await mongodb.create_indexes()
    yield mongodb.db
    mongodb.client = None
    mongodb.db = None


@pytest.fixture
def make_product(db):
    """Factory creating products through the catalog service."""

    async def _make(name="Test Product", price=100.0, stock=10, **overrides):
        data = ProductCreate(
            name=name,
            description=overrides.pop("description", f"{name} description"),
            price=price,
            category=overrides.pop("category", ProductCategory.ELECTRONICS),
            stock=stock,
            images=overrides.pop(
                "images", [ProductImage(url=f"https://img.example.com/{name}.jpg", alt=name)]
            ),
            **overrides,
        )
        return await catalog_service.create_product(data)

    return _make


@pytest.fixture
def address():
    return ShippingAddress(
        name="Asha Rao",
        email="asha.rao@example.com",
        phone="+919876543210",
        street="12 MG Road",
        city="Bengaluru",
        state="Karnataka",
        zipCode="560001",
    )


@pytest.fixture
def address_payload(address):
    return address.model_dump()


@pytest.fixture
def client(db):
    """Test client without the lifespan, so no real MongoDB connection is made."""
    return TestClient(app)
