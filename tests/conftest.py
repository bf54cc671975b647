"""Pytest configuration and fixtures"""
import os
import pytest
from typing import Any, Dict, List, Optional

# Set test environment variables
os.environ.setdefault("UPSTASH_REDIS_REST_URL", "https://test.upstash.io")
os.environ.setdefault("UPSTASH_REDIS_REST_TOKEN", "test_token")

from storefront.cart import CartStorage, CartStore, NotificationBus


class FakeRedis:
    """Key-value client with the get/set surface CartStorage uses."""

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self.data: Dict[str, Any] = dict(data or {})
        self.set_calls: List[tuple] = []
        self.fail_reads = False
        self.fail_writes = False

    def get(self, key: str):
        if self.fail_reads:
            raise ConnectionError("store unreachable")
        return self.data.get(key)

    def set(self, key: str, value: str, ex: Optional[int] = None):
        if self.fail_writes:
            raise RuntimeError("quota exceeded")
        self.set_calls.append((key, value, ex))
        self.data[key] = value
        return True


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def storage(fake_redis):
    return CartStorage(client=fake_redis, key="test_cart", ttl=0)


@pytest.fixture
def store(storage):
    return CartStore(storage=storage, bus=NotificationBus())


@pytest.fixture
def sample_product():
    """Sample catalog product (catalog-only fields included)"""
    return {
        "id": "taco-pastor",
        "name": "Taco al Pastor",
        "price": 8.00,
        "image": "img/taco-pastor.webp",
        "category": "tacos",
        "description": "Cerdo adobado con piña",
        "discount": 0,
        "featured": True,
    }


@pytest.fixture
def second_product():
    return {
        "id": "quesadilla",
        "name": "Quesadilla",
        "price": "5.00",
        "image": "img/quesadilla.webp",
    }


@pytest.fixture
def sample_catalog_data():
    """Document shaped like the storefront's products.json"""
    return {
        "products": [
            {
                "id": "taco-pastor",
                "slug": "taco-al-pastor",
                "name": "Taco al Pastor",
                "description": "Cerdo adobado con piña",
                "price": 8.0,
                "originalPrice": 9.5,
                "discount": 15,
                "image": "img/taco-pastor.webp",
                "category": "tacos",
                "badges": ["spicy"],
                "featured": True,
            },
            {
                "id": "quesadilla",
                "slug": "quesadilla",
                "name": "Quesadilla",
                "description": "Tortilla de maíz con queso fundido",
                "price": 5.0,
                "image": "img/quesadilla.webp",
                "category": "antojitos",
            },
            {
                "id": "horchata",
                "slug": "agua-de-horchata",
                "name": "Agua de Horchata",
                "description": "Bebida de arroz y canela",
                "price": 2.5,
                "image": "img/horchata.webp",
                "category": "bebidas",
            },
        ],
        "categories": [
            {"id": "all", "name": "Todos", "icon": "🍽️"},
            {"id": "tacos", "name": "Tacos", "icon": "🌮"},
            {"id": "bebidas", "name": "Bebidas", "icon": "🥤"},
        ],
        "badges": {
            "spicy": {"label": "Picante", "icon": "🌶️", "color": "#c0392b", "textColor": "#fff"},
        },
        "shipping": {"freeThreshold": 25, "standardPrice": 3.5},
    }
