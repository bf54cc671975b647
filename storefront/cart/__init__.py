"""Cart package: models, storage, notification bus, store, and order summary."""
from .events import CartEvent, CartEventKind, NotificationBus, describe_event
from .models import Cart, CartItem, ShippingPolicy, default_shipping_policy
from .service import CartStore
from .storage import CartStorage, LoadResult, LoadStatus
from .summary import build_order_link, format_order_summary, render_order_summary

__all__ = [
    "Cart",
    "CartEvent",
    "CartEventKind",
    "CartItem",
    "CartStorage",
    "CartStore",
    "LoadResult",
    "LoadStatus",
    "NotificationBus",
    "ShippingPolicy",
    "build_order_link",
    "default_shipping_policy",
    "describe_event",
    "format_order_summary",
    "render_order_summary",
]
