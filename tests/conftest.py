"""Pytest configuration and fixtures"""
import os
import pytest
from decimal import Decimal
from unittest.mock import Mock, AsyncMock

# Set test environment variables
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from rocketshoes.cart import CartItem, CartManager, MemoryCartStore, serialize_cart  # noqa: E402
from rocketshoes.models import Product, Stock  # noqa: E402


@pytest.fixture
def sample_product():
    """Sample product payload as served by the inventory API"""
    return {
        "id": 1,
        "title": "Tênis de Caminhada Leve Confortável",
        "price": 179.9,
        "image": "https://rocketseat-cdn.s3-sa-east-1.amazonaws.com/modulo-redux/tenis1.jpg",
    }


@pytest.fixture
def sample_item():
    """Cart line for product 1"""
    return CartItem(
        id=1,
        title="Tênis de Caminhada Leve Confortável",
        price=Decimal("179.9"),
        image_url="https://rocketseat-cdn.s3-sa-east-1.amazonaws.com/modulo-redux/tenis1.jpg",
        amount=1,
    )


@pytest.fixture
def mock_inventory(sample_product):
    """Inventory client returning 5 units of product 1"""
    inventory = Mock()
    inventory.get_stock = AsyncMock(return_value=Stock(id=1, amount=5))
    inventory.get_product = AsyncMock(return_value=Product.model_validate(sample_product))
    return inventory


@pytest.fixture
def store():
    """Empty in-memory cart slot"""
    return MemoryCartStore()


@pytest.fixture
def notifier():
    """Notifier recording error() calls"""
    return Mock()


@pytest.fixture
def make_manager(mock_inventory, store, notifier):
    """Build a CartManager, optionally seeded with cart lines"""
    def _make(*items, language="en"):
        if items:
            store.write(serialize_cart(items))
        return CartManager(
            inventory=mock_inventory,
            store=store,
            notifier=notifier,
            language=language,
        )
    return _make
