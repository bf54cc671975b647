"""Cart store: owns the cart, persists after each mutation, announces changes."""
from collections import deque
from dataclasses import replace
from decimal import Decimal
from typing import Any, Callable, Deque, List, Optional

from pydantic import ValidationError

from storefront.errors import (
    ERROR_INVALID_PRODUCT,
    ERROR_INVALID_QUANTITY,
    ERROR_ITEM_NOT_IN_CART,
    ERROR_PENDING_MUTATIONS_DROPPED,
)
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.models import ProductRecord
from storefront.services import money

from .events import CartEvent, CartEventKind, NotificationBus, Subscriber
from .models import Cart, CartItem, ShippingPolicy, default_shipping_policy
from .storage import CartStorage, LoadResult
from .summary import CustomerLike, build_order_link, format_order_summary

logger = get_logger(__name__)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class CartStore:
    """
    Shopping cart for one browsing session.

    Construct once at application start and pass it to whatever needs
    it. Every mutation runs to completion (update, save, notify) before
    the next begins; mutations issued by subscribers during a notify
    pass are queued and run afterwards.

    Usage:
        store = CartStore()
        store.subscribe(lambda store, event: print(store.get_total_items()))
        store.add(product, quantity=2)
        link = store.order_link(customer={"name": "Ana"})
    """

    def __init__(
        self,
        storage: Optional[CartStorage] = None,
        bus: Optional[NotificationBus] = None,
        shipping_policy: Optional[ShippingPolicy] = None,
    ):
        self.storage = storage or CartStorage()
        self.bus = bus or NotificationBus()
        self.shipping_policy = shipping_policy or default_shipping_policy()

        self.load_result: LoadResult = self.storage.load()
        self._cart = Cart(items=list(self.load_result.items))

        self._dispatching = False
        self._pending: Deque[Callable[[], None]] = deque()

    # ------------------------------------------------------------------
    # Mutation plumbing
    # ------------------------------------------------------------------

    def _run(self, mutation: Callable[[], None]) -> None:
        """Run now, or queue until the current notify pass finishes."""
        if self._dispatching:
            self._pending.append(mutation)
            return

        self._dispatching = True
        try:
            mutation()
            while self._pending:
                self._pending.popleft()()
        finally:
            self._dispatching = False
            if self._pending:
                logger.warning(f"{ERROR_PENDING_MUTATIONS_DROPPED}: {len(self._pending)}")
                self._pending.clear()

    def _commit(self, event: CartEvent) -> None:
        """
        Persist, then announce.

        A failed save (logged by storage) skips change announcements, but
        add and remove confirmations still go out flagged as unpersisted.
        """
        if self.storage.save(self._cart):
            self.bus.notify(self, event)
        elif event.needs_confirmation:
            self.bus.notify(self, replace(event, persisted=False))

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, product: Any, quantity: int = 1) -> bool:
        """Add product, merging into an existing line with the same id."""
        try:
            if isinstance(product, ProductRecord):
                record = product
            else:
                record = ProductRecord.model_validate(product, from_attributes=True)
        except ValidationError as e:
            logger.warning(f"{ERROR_INVALID_PRODUCT}: {e.error_count()} error(s)")
            return False

        if not _is_int(quantity) or quantity < 1:
            logger.debug(f"{ERROR_INVALID_QUANTITY} {quantity!r} on add, using 1")
            quantity = 1

        def mutation() -> None:
            item = self._cart.find(record.id)
            if item is not None:
                item.quantity += quantity
            else:
                item = CartItem(
                    id=record.id,
                    name=record.name,
                    unit_price=record.price,
                    image=record.image,
                    quantity=quantity,
                )
                self._cart.items.append(item)
            self._commit(CartEvent(kind=CartEventKind.ADDED, item=replace(item), quantity=quantity))

        self._run(mutation)
        return True

    def remove(self, item_id: str) -> None:
        """Remove the line; unknown ids are ignored."""
        def mutation() -> None:
            item = self._cart.find(item_id)
            if item is None:
                logger.debug(f"{ERROR_ITEM_NOT_IN_CART}: {sanitize_id_for_logging(item_id)}")
                return
            self._cart.items.remove(item)
            self._commit(CartEvent(kind=CartEventKind.REMOVED, item=replace(item), quantity=0))

        self._run(mutation)

    def set_quantity(self, item_id: str, quantity: int) -> None:
        """Set the line quantity; zero or below removes the line."""
        if not _is_int(quantity):
            logger.debug(f"{ERROR_INVALID_QUANTITY} {quantity!r} for {sanitize_id_for_logging(item_id)}")
            return
        if quantity <= 0:
            self.remove(item_id)
            return

        def mutation() -> None:
            item = self._cart.find(item_id)
            if item is None:
                logger.debug(f"{ERROR_ITEM_NOT_IN_CART}: {sanitize_id_for_logging(item_id)}")
                return
            item.quantity = quantity
            self._commit(CartEvent(kind=CartEventKind.UPDATED, item=replace(item), quantity=quantity))

        self._run(mutation)

    def increment(self, item_id: str) -> None:
        def mutation() -> None:
            item = self._cart.find(item_id)
            if item is None:
                return
            item.quantity += 1
            self._commit(CartEvent(kind=CartEventKind.UPDATED, item=replace(item), quantity=item.quantity))

        self._run(mutation)

    def decrement(self, item_id: str) -> None:
        """Take one unit off; the last unit removes the line."""
        def mutation() -> None:
            item = self._cart.find(item_id)
            if item is None:
                return
            if item.quantity > 1:
                item.quantity -= 1
                self._commit(CartEvent(kind=CartEventKind.UPDATED, item=replace(item), quantity=item.quantity))
            else:
                self._cart.items.remove(item)
                self._commit(CartEvent(kind=CartEventKind.REMOVED, item=replace(item), quantity=0))

        self._run(mutation)

    def clear(self) -> None:
        def mutation() -> None:
            self._cart.items = []
            self._commit(CartEvent(kind=CartEventKind.CLEARED))

        self._run(mutation)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_items(self) -> List[CartItem]:
        """Copies of the cart lines, in order."""
        return [replace(item) for item in self._cart.items]

    def get_total_items(self) -> int:
        return self._cart.total_items

    def get_subtotal(self) -> Decimal:
        return self._cart.subtotal

    def get_shipping(self, policy: Optional[ShippingPolicy] = None) -> Decimal:
        return self._cart.shipping(policy or self.shipping_policy)

    def get_total(self, policy: Optional[ShippingPolicy] = None) -> Decimal:
        return money.add(self.get_subtotal(), self.get_shipping(policy))

    def get_remaining_for_free_shipping(self, threshold: Any = None) -> Decimal:
        """Amount still needed to reach free shipping, never negative."""
        limit = self.shipping_policy.free_threshold if threshold is None else money.to_decimal(threshold)
        return max(Decimal("0"), money.subtract(limit, self.get_subtotal()))

    def is_empty(self) -> bool:
        return self._cart.is_empty

    # ------------------------------------------------------------------
    # Collaborators
    # ------------------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        return self.bus.subscribe(callback)

    def order_summary(self, customer: CustomerLike = None, lang: Optional[str] = None) -> str:
        """Escaped order summary for the messaging hand-off."""
        return format_order_summary(self._cart.items, customer, self.shipping_policy, lang)

    def order_link(
        self,
        destination: Optional[str] = None,
        customer: CustomerLike = None,
        lang: Optional[str] = None,
    ) -> str:
        return build_order_link(self._cart.items, destination, customer, self.shipping_policy, lang)
