"""
Storefront Settings

All tunables are read from the environment once, at import time.
Defaults are the values the shop launched with.
"""

import os

# Upstash Redis - standard env var names per docs
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")

# Cart persistence
CART_STORAGE_KEY = os.environ.get("CART_STORAGE_KEY", "storefront_cart")
CART_TTL_SECONDS = int(os.environ.get("CART_TTL_SECONDS", "0"))  # 0 = keep until evicted

# Shipping policy (decimal strings, parsed by the cart models)
SHIPPING_FREE_THRESHOLD = os.environ.get("SHIPPING_FREE_THRESHOLD", "20.00")
SHIPPING_STANDARD_PRICE = os.environ.get("SHIPPING_STANDARD_PRICE", "4.90")

# Order summary
STORE_NAME = os.environ.get("STORE_NAME", "Cuchitas")
STORE_CURRENCY = os.environ.get("STORE_CURRENCY", "EUR")
SUMMARY_LANGUAGE = os.environ.get("SUMMARY_LANGUAGE", "es")

# Messaging hand-off. The destination phone is a placeholder until the
# shop configures its own number.
MESSAGING_BASE_URL = os.environ.get("MESSAGING_BASE_URL", "https://wa.me")
ORDER_DESTINATION_PHONE = os.environ.get("ORDER_DESTINATION_PHONE", "34600000000")
