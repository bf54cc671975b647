"""Tests for the product catalog"""
import json
import pytest
from decimal import Decimal

from storefront.catalog import ALL_CATEGORIES, ProductCatalog


@pytest.fixture
def catalog(sample_catalog_data):
    return ProductCatalog.from_dict(sample_catalog_data)


def test_load_from_file(tmp_path, sample_catalog_data):
    path = tmp_path / "products.json"
    path.write_text(json.dumps(sample_catalog_data), encoding="utf-8")

    catalog = ProductCatalog()

    assert catalog.load(path) is True
    assert catalog.loaded
    assert len(catalog.get_all()) == 3
    assert [c.id for c in catalog.categories] == ["all", "tacos", "bebidas"]
    assert "spicy" in catalog.badges


def test_load_missing_file(tmp_path, caplog):
    catalog = ProductCatalog()

    with caplog.at_level("ERROR"):
        assert catalog.load(tmp_path / "missing.json") is False

    assert catalog.loaded is False
    assert "Failed to load catalog" in caplog.text


def test_load_invalid_document(tmp_path):
    path = tmp_path / "products.json"
    path.write_text(json.dumps({"products": [{"id": "x"}]}), encoding="utf-8")

    assert ProductCatalog().load(path) is False


def test_product_fields(catalog):
    product = catalog.get_by_id("taco-pastor")

    assert product.price == Decimal("8.0")
    assert product.original_price == Decimal("9.5")
    assert product.discount == 15
    assert product.badges == ["spicy"]
    assert product.featured is True


def test_get_by_category(catalog):
    assert [p.id for p in catalog.get_by_category("bebidas")] == ["horchata"]
    assert len(catalog.get_by_category(ALL_CATEGORIES)) == 3
    assert catalog.get_by_category("postres") == []


def test_get_featured(catalog):
    assert [p.id for p in catalog.get_featured()] == ["taco-pastor"]


def test_get_by_slug(catalog):
    assert catalog.get_by_slug("agua-de-horchata").id == "horchata"
    assert catalog.get_by_slug("nope") is None


def test_get_by_id_missing(catalog):
    assert catalog.get_by_id("nope") is None


def test_search_name_and_description(catalog):
    assert [p.id for p in catalog.search("TACO")] == ["taco-pastor"]
    assert [p.id for p in catalog.search("canela")] == ["horchata"]
    assert catalog.search("pizza") == []


def test_shipping_policy_from_document(catalog):
    assert catalog.shipping_policy.free_threshold == Decimal("25")
    assert catalog.shipping_policy.standard_price == Decimal("3.5")


def test_default_shipping_policy_without_block(sample_catalog_data):
    del sample_catalog_data["shipping"]

    catalog = ProductCatalog.from_dict(sample_catalog_data)

    assert catalog.shipping_policy.free_threshold == Decimal("20.00")


def test_catalog_product_added_to_cart(catalog, store):
    store.add(catalog.get_by_id("quesadilla"), 2)
    store.add(catalog.get_by_id("horchata"))

    items = store.get_items()
    assert [item.id for item in items] == ["quesadilla", "horchata"]
    assert items[0].image == "img/quesadilla.webp"
    assert store.get_subtotal() == Decimal("12.5")
