"""In-memory shopping cart."""

import logging
from collections.abc import Callable
from decimal import Context, Decimal, Inexact, Overflow
from typing import Any

from .models import CartLineItem, CartState
from .values import UNNAMED_ITEM, ZERO, coerce_price, coerce_text

logger = logging.getLogger(__name__)

CartListener = Callable[[CartState], None]

# Totals must never be rounded; prices are bounded by coerce_price.
TOTAL_CONTEXT = Context(prec=60, traps=[Inexact, Overflow])


class CartStore:
    """
    Ordered collection of cart line items with a running total.

    Items keep insertion order and are never merged, so adding the same plant
    twice gives two entries. ``add`` and ``remove`` are the only mutations;
    listeners registered with ``subscribe`` receive the new state after each
    one. No method raises: bad prices count as zero and out-of-range
    removals are ignored.
    """

    def __init__(self) -> None:
        self._items: list[CartLineItem] = []
        self._total: Decimal = ZERO
        self._listeners: list[CartListener] = []

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        """
        Register a listener for cart changes.

        Args:
            listener: Called with the new CartState after every mutation

        Returns:
            A callable that unregisters the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def add(self, name: Any, price: Any) -> CartState:
        """
        Append an item to the end of the cart.

        Args:
            name: Display name
            price: Price at time of adding (non-numeric counts as 0)

        Returns:
            The new cart state
        """
        item = CartLineItem(name=coerce_text(name, UNNAMED_ITEM), price=coerce_price(price))
        try:
            total = TOTAL_CONTEXT.add(self._total, item.price)
        except ArithmeticError as e:
            logger.warning(f"Price {item.price} of {item.name} cannot be totalled exactly: {e}")
            item = CartLineItem(name=item.name, price=ZERO)
            total = self._total

        self._items.append(item)
        self._total = total
        logger.info(f"Added {item.name} (${item.price}) to cart, total ${self._total}")
        return self._notify()

    def remove(self, index: Any) -> CartState:
        """
        Remove the item at ``index``.

        Indices are positions in the current cart, so they shift after every
        removal. A stale or invalid index leaves the cart unchanged.

        Returns:
            The (possibly unchanged) cart state
        """
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self._items):
            logger.debug(f"Ignoring removal at index {index!r}, cart has {len(self._items)} items")
            return self.get_state()

        item = self._items.pop(index)
        self._total = TOTAL_CONTEXT.subtract(self._total, item.price)
        logger.info(f"Removed {item.name} (${item.price}) from cart, total ${self._total}")
        return self._notify()

    def get_state(self) -> CartState:
        """Return an immutable snapshot of the cart."""
        return CartState(items=tuple(self._items), total=self._total)

    def __len__(self) -> int:
        return len(self._items)

    def _notify(self) -> CartState:
        state = self.get_state()
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception as e:
                logger.error(f"Cart listener {listener!r} failed: {e}", exc_info=True)
        return state
