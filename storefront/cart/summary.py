"""
Order summary for the messaging hand-off.

Builds the order text sent to the shop over a chat deep link. The
functions are pure: they read cart lines and never touch storage.
"""
import re
from typing import Iterable, Mapping, Optional, Union
from urllib.parse import quote

from storefront import config
from storefront.models import CustomerInfo
from storefront.services.money import format_money

from .models import Cart, CartItem, ShippingPolicy, default_shipping_policy

# Characters encodeURIComponent leaves untouched besides alphanumerics and "-_."
_URI_COMPONENT_SAFE = "!~*'()"

_LABELS = {
    "en": {
        "header": "New Order",
        "customer": "Customer",
        "phone": "Phone",
        "address": "Address",
        "products": "Products",
        "subtotal": "Subtotal",
        "shipping": "Shipping",
        "free": "FREE",
        "total": "TOTAL",
    },
    "es": {
        "header": "Nuevo Pedido",
        "customer": "Cliente",
        "phone": "Teléfono",
        "address": "Dirección",
        "products": "Productos",
        "subtotal": "Subtotal",
        "shipping": "Envío",
        "free": "GRATIS",
        "total": "TOTAL",
    },
}

CustomerLike = Union[CustomerInfo, Mapping[str, Optional[str]], None]


def _coerce_customer(customer: CustomerLike) -> CustomerInfo:
    if customer is None:
        return CustomerInfo()
    if isinstance(customer, CustomerInfo):
        return customer
    return CustomerInfo.model_validate(dict(customer))


def render_order_summary(
    items: Iterable[CartItem],
    customer: CustomerLike = None,
    policy: Optional[ShippingPolicy] = None,
    lang: Optional[str] = None,
    currency: Optional[str] = None,
) -> str:
    """
    Plain-text order summary.

    Customer lines appear only for the fields that are set. Amounts are
    rounded to two decimals here and nowhere earlier.
    """
    labels = _LABELS.get(lang or config.SUMMARY_LANGUAGE, _LABELS["en"])
    currency = currency or config.STORE_CURRENCY
    policy = policy or default_shipping_policy()
    cart = Cart(items=list(items))
    info = _coerce_customer(customer)

    lines = [f"🌮 *{labels['header']} - {config.STORE_NAME}*", ""]

    if info.name:
        lines.append(f"👤 *{labels['customer']}:* {info.name}")
    if info.phone:
        lines.append(f"📱 *{labels['phone']}:* {info.phone}")
    if info.address:
        lines.append(f"📍 *{labels['address']}:* {info.address}")

    lines.append("")
    lines.append(f"📦 *{labels['products']}:*")
    for item in cart.items:
        lines.append(f"• {item.name} x{item.quantity} - {format_money(item.total_price, currency)}")

    lines.append("")
    lines.append(f"💰 *{labels['subtotal']}:* {format_money(cart.subtotal, currency)}")

    shipping = cart.shipping(policy)
    if shipping > 0:
        lines.append(f"🚚 *{labels['shipping']}:* {format_money(shipping, currency)}")
    else:
        lines.append(f"🚚 *{labels['shipping']}:* {labels['free']}")

    lines.append("")
    lines.append(f"💵 *{labels['total']}:* {format_money(cart.total(policy), currency)}")

    return "\n".join(lines)


def escape_for_query(text: str) -> str:
    """Escape text for a URL query parameter (encodeURIComponent rules)."""
    return quote(text, safe=_URI_COMPONENT_SAFE)


def format_order_summary(
    items: Iterable[CartItem],
    customer: CustomerLike = None,
    policy: Optional[ShippingPolicy] = None,
    lang: Optional[str] = None,
    currency: Optional[str] = None,
) -> str:
    """Order summary escaped for embedding in a deep link."""
    return escape_for_query(render_order_summary(items, customer, policy, lang, currency))


def normalize_destination(destination: Optional[str]) -> str:
    """Digits only; falls back to the configured shop number."""
    digits = re.sub(r"\D", "", destination or "")
    return digits or re.sub(r"\D", "", config.ORDER_DESTINATION_PHONE)


def build_order_link(
    items: Iterable[CartItem],
    destination: Optional[str] = None,
    customer: CustomerLike = None,
    policy: Optional[ShippingPolicy] = None,
    lang: Optional[str] = None,
    currency: Optional[str] = None,
) -> str:
    """Deep link ``<base>/<destination>?text=<escaped summary>``."""
    text = format_order_summary(items, customer, policy, lang, currency)
    base = config.MESSAGING_BASE_URL.rstrip("/")
    return f"{base}/{normalize_destination(destination)}?text={text}"
