"""Cart models with Decimal-based pricing."""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, List, Optional, Union

from storefront import config
from storefront.services.money import add, multiply, parse_decimal, to_decimal


@dataclass
class CartItem:
    """Single line in the cart. Name, price and image are captured at add time."""
    id: str
    name: str
    unit_price: Decimal
    image: str = ""
    quantity: int = 1

    def __post_init__(self):
        self.unit_price = to_decimal(self.unit_price)

    @property
    def total_price(self) -> Decimal:
        """Unrounded total for all units."""
        return multiply(self.unit_price, self.quantity)

    def to_dict(self) -> dict:
        """Convert to the persisted record shape."""
        return {
            "id": self.id,
            "name": self.name,
            "price": str(self.unit_price),
            "image": self.image,
            "quantity": self.quantity,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartItem":
        """Create from a persisted record. Raises on malformed data."""
        item_id = data["id"]
        if not isinstance(item_id, (str, int)) or isinstance(item_id, bool):
            raise TypeError(f"invalid item id: {item_id!r}")

        quantity = data["quantity"]
        if not isinstance(quantity, int) or isinstance(quantity, bool):
            raise TypeError(f"invalid quantity: {quantity!r}")

        return cls(
            id=str(item_id),
            name=str(data["name"]),
            unit_price=parse_decimal(data["price"]),
            image=data.get("image") or "",
            quantity=quantity,
        )


@dataclass(frozen=True)
class ShippingPolicy:
    """Free-shipping threshold and flat standard price."""
    free_threshold: Decimal
    standard_price: Decimal

    def shipping_for(self, subtotal: Decimal) -> Decimal:
        if to_decimal(subtotal) >= self.free_threshold:
            return Decimal("0")
        return self.standard_price

    @classmethod
    def from_dict(cls, data: dict) -> "ShippingPolicy":
        """Accepts the catalog's camelCase keys or snake_case."""
        threshold = data.get("freeThreshold", data.get("free_threshold"))
        price = data.get("standardPrice", data.get("standard_price"))
        default = default_shipping_policy()
        return cls(
            free_threshold=default.free_threshold if threshold is None else parse_decimal(threshold),
            standard_price=default.standard_price if price is None else parse_decimal(price),
        )


def default_shipping_policy() -> ShippingPolicy:
    """Policy from configuration: free at 20.00, otherwise 4.90 flat."""
    return ShippingPolicy(
        free_threshold=parse_decimal(config.SHIPPING_FREE_THRESHOLD),
        standard_price=parse_decimal(config.SHIPPING_STANDARD_PRICE),
    )


@dataclass
class Cart:
    """Ordered cart lines, insertion order of first add. Ids are unique."""
    items: List[CartItem] = field(default_factory=list)

    def find(self, item_id: Union[str, int]) -> Optional[CartItem]:
        # Ids are stored as strings; catalogs may hand out numeric ones
        item_id = str(item_id)
        return next((item for item in self.items if item.id == item_id), None)

    @property
    def total_items(self) -> int:
        """Total number of units in cart."""
        return sum(item.quantity for item in self.items)

    @property
    def subtotal(self) -> Decimal:
        subtotal = Decimal("0")
        for item in self.items:
            subtotal = add(subtotal, item.total_price)
        return subtotal

    @property
    def is_empty(self) -> bool:
        return not self.items

    def shipping(self, policy: Optional[ShippingPolicy] = None) -> Decimal:
        policy = policy or default_shipping_policy()
        return policy.shipping_for(self.subtotal)

    def total(self, policy: Optional[ShippingPolicy] = None) -> Decimal:
        return add(self.subtotal, self.shipping(policy))

    def to_records(self) -> List[dict]:
        """Convert to a JSON-ready list for storage."""
        return [item.to_dict() for item in self.items]

    @classmethod
    def from_records(cls, records: Iterable[dict]) -> "Cart":
        """
        Rebuild a cart from stored records.

        Raises:
            ValueError: duplicate ids, non-positive quantity or negative price
        """
        if not isinstance(records, list):
            raise TypeError("cart records must be a list")

        items: List[CartItem] = []
        seen = set()
        for record in records:
            item = CartItem.from_dict(record)
            if item.id in seen:
                raise ValueError(f"duplicate item id: {item.id}")
            if item.quantity < 1:
                raise ValueError(f"non-positive quantity for {item.id}")
            if item.unit_price < 0:
                raise ValueError(f"negative price for {item.id}")
            seen.add(item.id)
            items.append(item)
        return cls(items=items)
