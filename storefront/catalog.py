"""
Product Catalog - read-only lookup over the storefront's product document.

The document has the shape of the shop's ``products.json``:
``products``, ``categories``, ``badges`` and a ``shipping`` block.
Rendering is left to the page; this module only answers lookups.
"""

import json
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from storefront.cart.models import ShippingPolicy, default_shipping_policy
from storefront.errors import ERROR_CATALOG_LOAD_FAILED
from storefront.logging import get_logger
from storefront.models import ProductRecord

logger = get_logger(__name__)

ALL_CATEGORIES = "all"


class Product(ProductRecord):
    """Catalog product; the cart only reads the ProductRecord fields."""
    category: Optional[str] = None
    slug: Optional[str] = None
    description: str = ""
    discount: int = 0
    original_price: Optional[Decimal] = Field(default=None, alias="originalPrice")
    badges: List[str] = Field(default_factory=list)
    featured: bool = False

    class Config:
        extra = "ignore"
        populate_by_name = True


class Category(BaseModel):
    id: str
    name: str
    icon: str = ""


class ProductCatalog:
    """
    In-memory catalog.

    Usage:
        catalog = ProductCatalog()
        if catalog.load("data/products.json"):
            store.add(catalog.get_by_id("taco-pastor"))
    """

    def __init__(self):
        self.products: List[Product] = []
        self.categories: List[Category] = []
        self.badges: Dict[str, Dict[str, Any]] = {}
        self.shipping_policy: ShippingPolicy = default_shipping_policy()
        self.loaded = False

    def load(self, path: Union[str, Path]) -> bool:
        """Load the catalog document from disk. Returns False on failure."""
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
            self._populate(data)
        except (OSError, ValueError, TypeError, KeyError, AttributeError, InvalidOperation) as e:
            # ValidationError and JSONDecodeError are ValueErrors
            logger.error(f"{ERROR_CATALOG_LOAD_FAILED} from {path}: {e}")
            return False
        return True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProductCatalog":
        """Build a catalog from an already-parsed document. Raises on invalid data."""
        catalog = cls()
        catalog._populate(data)
        return catalog

    def _populate(self, data: Dict[str, Any]) -> None:
        products = [Product.model_validate(p) for p in data.get("products", [])]
        categories = [Category.model_validate(c) for c in data.get("categories", [])]
        shipping = data.get("shipping")

        self.products = products
        self.categories = categories
        self.badges = dict(data.get("badges") or {})
        self.shipping_policy = ShippingPolicy.from_dict(shipping) if shipping else default_shipping_policy()
        self.loaded = True

    def get_all(self) -> List[Product]:
        return list(self.products)

    def get_by_category(self, category_id: str) -> List[Product]:
        if category_id == ALL_CATEGORIES:
            return self.get_all()
        return [p for p in self.products if p.category == category_id]

    def get_featured(self) -> List[Product]:
        return [p for p in self.products if p.featured]

    def get_by_id(self, product_id: str) -> Optional[Product]:
        return next((p for p in self.products if p.id == str(product_id)), None)

    def get_by_slug(self, slug: str) -> Optional[Product]:
        return next((p for p in self.products if p.slug == slug), None)

    def search(self, query: str) -> List[Product]:
        """Case-insensitive match on name or description."""
        q = query.lower()
        return [
            p for p in self.products
            if q in p.name.lower() or q in p.description.lower()
        ]


__all__ = ["ALL_CATEGORIES", "Category", "Product", "ProductCatalog"]
