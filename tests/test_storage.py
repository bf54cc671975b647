"""Tests for cart persistence"""
import json
import pytest
from decimal import Decimal

from storefront.cart import Cart, CartItem, CartStorage, LoadStatus
from storefront.db import RedisKeys


def _cart():
    return Cart(items=[
        CartItem(id="a", name="A", unit_price="8.00", image="a.png", quantity=3),
        CartItem(id="b", name="B", unit_price="2.50", image="b.png", quantity=1),
    ])


def test_key_uses_cart_prefix(fake_redis):
    storage = CartStorage(client=fake_redis, key="shop")

    assert storage.key == RedisKeys.cart_key("shop") == "cart:shop"


def test_save_then_load_round_trip(storage):
    assert storage.save(_cart()) is True

    result = storage.load()

    assert result.status == LoadStatus.LOADED
    assert result.ok
    assert [(i.id, i.quantity) for i in result.items] == [("a", 3), ("b", 1)]
    assert result.items[0].unit_price == Decimal("8.00")
    assert result.items[1].image == "b.png"


def test_load_missing_key_is_empty_by_choice(storage):
    result = storage.load()

    assert result.status == LoadStatus.MISSING
    assert result.items == []
    assert result.data_lost is False


def test_load_corrupted_json(storage, fake_redis):
    fake_redis.data[storage.key] = "{not json"

    result = storage.load()

    assert result.status == LoadStatus.CORRUPTED
    assert result.items == []
    assert result.data_lost is True


@pytest.mark.parametrize(
    "payload",
    [
        json.dumps({"id": "a"}),
        json.dumps([{"id": "a", "name": "A", "price": "x", "quantity": 1}]),
        json.dumps([{"id": "a", "name": "A", "price": "1", "quantity": -1}]),
        json.dumps([{"name": "A", "price": "1", "quantity": 1}]),
        json.dumps(["a", "b"]),
    ],
)
def test_load_invalid_records(storage, fake_redis, payload):
    fake_redis.data[storage.key] = payload

    result = storage.load()

    assert result.status == LoadStatus.CORRUPTED
    assert result.items == []


def test_load_bytes_payload(storage, fake_redis):
    fake_redis.data[storage.key] = json.dumps(_cart().to_records()).encode("utf-8")

    assert storage.load().status == LoadStatus.LOADED


def test_load_store_unavailable(storage, fake_redis):
    fake_redis.fail_reads = True

    result = storage.load()

    assert result.status == LoadStatus.UNAVAILABLE
    assert result.items == []
    assert "unreachable" in result.error


def test_load_logs_corruption(storage, fake_redis, caplog):
    fake_redis.data[storage.key] = "[[["

    with caplog.at_level("WARNING"):
        storage.load()

    assert "Corrupted cart data" in caplog.text


def test_save_failure_returns_false(storage, fake_redis, caplog):
    fake_redis.fail_writes = True

    with caplog.at_level("ERROR"):
        assert storage.save(_cart()) is False

    assert "Failed to save cart" in caplog.text
    assert storage.key not in fake_redis.data


def test_save_with_ttl(fake_redis):
    storage = CartStorage(client=fake_redis, key="shop", ttl=3600)

    storage.save(_cart())

    assert fake_redis.set_calls[-1][2] == 3600


def test_saved_payload_shape(storage, fake_redis):
    storage.save(_cart())

    records = json.loads(fake_redis.data[storage.key])

    assert records[0] == {"id": "a", "name": "A", "price": "8.00", "image": "a.png", "quantity": 3}


def test_load_deeply_nested_payload_is_corrupted(storage, fake_redis):
    fake_redis.data[storage.key] = "[" * 100000 + "]" * 100000

    result = storage.load()

    assert result.status == LoadStatus.CORRUPTED
    assert result.items == []


def test_store_survives_deeply_nested_payload(fake_redis):
    from storefront.cart import CartStore

    storage = CartStorage(client=fake_redis, key="session")
    fake_redis.data[storage.key] = "[" * 100000 + "]" * 100000

    store = CartStore(storage=storage)

    assert store.is_empty()
    assert store.load_result.data_lost is True
