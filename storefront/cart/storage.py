"""
Cart persistence on a key-value store.

Reads and writes the serialized cart under one fixed key. Both
directions are fail-soft: a broken or unreachable store never raises
into the caller.
"""
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from storefront import config
from storefront.db import RedisKeys, TTL, get_redis_sync
from storefront.errors import (
    ERROR_CART_CORRUPTED,
    ERROR_CART_LOAD_FAILED,
    ERROR_CART_SAVE_FAILED,
    ERROR_STORAGE_UNAVAILABLE,
)
from storefront.logging import get_logger

from .models import Cart, CartItem

logger = get_logger(__name__)


class LoadStatus(str, Enum):
    """Outcome of reading the persisted cart."""
    LOADED = "loaded"
    MISSING = "missing"  # Nothing stored yet
    CORRUPTED = "corrupted"  # Stored content could not be parsed
    UNAVAILABLE = "unavailable"  # Store raised on read


@dataclass
class LoadResult:
    """Cart contents plus how they were obtained."""
    status: LoadStatus
    items: List[CartItem] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status in (LoadStatus.LOADED, LoadStatus.MISSING)

    @property
    def data_lost(self) -> bool:
        """True when the cart came back empty because of a failure."""
        return not self.ok


class CartStorage:
    """
    Persists the cart under a single key.

    Any client exposing ``get(key)`` and ``set(key, value, ex=None)``
    works; by default the Upstash Redis sync client is created on
    first use.
    """

    def __init__(self, client: Any = None, key: Optional[str] = None, ttl: Optional[int] = None):
        self._client = client
        self.key = RedisKeys.cart_key(key or config.CART_STORAGE_KEY)
        self.ttl = TTL.CART if ttl is None else ttl

    @property
    def client(self):
        """Get key-value client (lazy initialization)."""
        if self._client is None:
            self._client = get_redis_sync()
        return self._client

    def load(self) -> LoadResult:
        """Read the stored cart. Never raises."""
        try:
            data = self.client.get(self.key)
        except Exception as e:
            logger.error(f"{ERROR_CART_LOAD_FAILED}: {ERROR_STORAGE_UNAVAILABLE}: {e}")
            return LoadResult(status=LoadStatus.UNAVAILABLE, error=str(e))

        if not data:
            return LoadResult(status=LoadStatus.MISSING)

        try:
            if isinstance(data, bytes):
                data = data.decode("utf-8")
            cart = Cart.from_records(json.loads(data))
        except Exception as e:
            # Any decode failure (bad JSON, bad records, nesting too deep) means corrupted
            logger.warning(f"{ERROR_CART_CORRUPTED} at {self.key}: {e}")
            return LoadResult(status=LoadStatus.CORRUPTED, error=str(e))

        return LoadResult(status=LoadStatus.LOADED, items=cart.items)

    def save(self, cart: Cart) -> bool:
        """Write the cart. Returns False (and logs) when the store rejects it."""
        try:
            payload = json.dumps(cart.to_records(), ensure_ascii=False)
            if self.ttl and self.ttl > 0:
                self.client.set(self.key, payload, ex=self.ttl)
            else:
                self.client.set(self.key, payload)
            return True
        except Exception as e:
            logger.error(f"{ERROR_CART_SAVE_FAILED} at {self.key}: {e}")
            return False
