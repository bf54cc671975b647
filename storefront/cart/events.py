"""
Cart change notification.

Synchronous publish/subscribe: subscribers are called in
subscription order with the store and a structured event describing
the mutation. Presentation (toasts, counters) lives in subscribers.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional

from storefront import config

from .models import CartItem


class CartEventKind(str, Enum):
    ADDED = "added"
    REMOVED = "removed"
    UPDATED = "updated"
    CLEARED = "cleared"


@dataclass(frozen=True)
class CartEvent:
    """What changed. ``item`` is a snapshot taken after the mutation."""
    kind: CartEventKind
    item: Optional[CartItem] = None
    quantity: int = 0  # units added for ADDED, resulting quantity for UPDATED
    persisted: bool = True  # False when the store rejected the write

    @property
    def needs_confirmation(self) -> bool:
        """Added and removed lines get a shopper-facing confirmation."""
        return self.kind in (CartEventKind.ADDED, CartEventKind.REMOVED)


Subscriber = Callable[[Any, CartEvent], None]


class _Subscription:
    __slots__ = ("callback",)

    def __init__(self, callback: Subscriber):
        self.callback = callback


class NotificationBus:
    """
    Delivers cart changes to observers.

    Subscriber exceptions are not caught: a failing subscriber stops
    the remaining ones in the same pass.
    """

    def __init__(self):
        self._subscriptions: List[_Subscription] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register callback; returns a handle that removes this registration only."""
        subscription = _Subscription(callback)
        self._subscriptions.append(subscription)

        def unsubscribe() -> None:
            # Identity check so a callback registered twice keeps its other slot
            for index, existing in enumerate(self._subscriptions):
                if existing is subscription:
                    del self._subscriptions[index]
                    return

        return unsubscribe

    def notify(self, store: Any, event: CartEvent) -> None:
        """Invoke every subscriber synchronously."""
        for subscription in list(self._subscriptions):
            subscription.callback(store, event)


_MESSAGES = {
    "en": {
        CartEventKind.ADDED: "{name} added to cart",
        CartEventKind.REMOVED: "{name} removed from cart",
        CartEventKind.UPDATED: "{name} quantity updated to {quantity}",
        CartEventKind.CLEARED: "Cart emptied",
    },
    "es": {
        CartEventKind.ADDED: "{name} añadido al carrito",
        CartEventKind.REMOVED: "{name} eliminado del carrito",
        CartEventKind.UPDATED: "{name}: cantidad actualizada a {quantity}",
        CartEventKind.CLEARED: "Carrito vaciado",
    },
}


def describe_event(event: CartEvent, lang: Optional[str] = None) -> str:
    """Confirmation text naming the affected product, for a toast presenter."""
    messages = _MESSAGES.get(lang or config.SUMMARY_LANGUAGE, _MESSAGES["en"])
    name = event.item.name if event.item else ""
    return messages[event.kind].format(name=name, quantity=event.quantity)
