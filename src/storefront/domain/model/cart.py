"""Cart aggregate: the shopper's session-lifetime basket.

The cart is a purely local, synchronous state container: every operation
is a total function over the in-memory collection.  Derived values
(``count`` and ``total``) are recomputed on every read so they can never
drift from the line items.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money

logger = logging.getLogger(__name__)

Notifier = Callable[[str], None]


def _log_notice(message: str) -> None:
    logger.info(message)


@dataclass(frozen=True)
class CartLineItem:
    """One line in the cart.

    Identified by ``(product_id, size)``: the same product in two sizes is
    two lines.  ``quantity`` is always > 0 while the line is in a cart.
    """

    product_id: str
    name: str
    unit_price: Money
    quantity: int
    image: str
    size: str | None = None
    category: str | None = None
    original_price: Money | None = None

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity

    @property
    def key(self) -> tuple[str, str | None]:
        return (self.product_id, self.size)

    @staticmethod
    def from_product(product: Product, quantity: int = 1, size: str | None = None) -> CartLineItem:
        if product.id is None:
            raise ValidationError("Cannot add an unsaved product to the cart")
        return CartLineItem(
            product_id=product.id,
            name=product.name,
            unit_price=product.price,
            quantity=quantity,
            image=product.display_image,
            size=size or None,
            category=product.category,
            original_price=product.original_price,
        )


class Cart:
    """Ordered collection of cart line items.

    ``notify`` receives the transient user-facing confirmations ("added",
    "removed"); by default they are only logged.
    """

    def __init__(
        self,
        items: Iterable[CartLineItem] = (),
        *,
        currency: str = DEFAULT_CURRENCY,
        notify: Notifier | None = None,
    ) -> None:
        self._items: list[CartLineItem] = [i for i in items if i.quantity > 0]
        self._currency = currency
        self._notify = notify or _log_notice

    # --- Mutations ------------------------------------------------------------

    def add(self, item: CartLineItem, quantity: int | None = None) -> CartLineItem:
        """Add ``item`` to the cart.

        ``quantity`` overrides the item's own quantity.  An existing line
        with the same product and size has its quantity increased instead
        of a second line being appended.
        """
        qty = item.quantity if quantity is None else quantity
        if isinstance(qty, bool) or not isinstance(qty, int) or qty <= 0:
            raise ValidationError("Quantity must be a positive integer")

        for index, existing in enumerate(self._items):
            if existing.key == item.key:
                merged = replace(existing, quantity=existing.quantity + qty)
                self._items[index] = merged
                break
        else:
            merged = replace(item, quantity=qty)
            self._items.append(merged)

        self._notify(f"{item.name} added to cart")
        return merged

    def update_quantity(self, product_id: str, delta: int, size: str | None = None) -> None:
        """Adjust the quantity of matching lines by ``delta``.

        Without ``size`` every variant of the product is adjusted.  The
        result is clamped at zero and zero-quantity lines are dropped.
        """
        updated: list[CartLineItem] = []
        for item in self._items:
            if self._matches(item, product_id, size):
                item = replace(item, quantity=max(0, item.quantity + delta))
            if item.quantity > 0:
                updated.append(item)
        self._items = updated

    def remove_item(self, product_id: str, size: str | None = None) -> None:
        self._items = [
            item for item in self._items if not self._matches(item, product_id, size)
        ]
        self._notify("Item removed from cart")

    def clear(self) -> None:
        self._items = []

    # --- Computed properties --------------------------------------------------

    @property
    def items(self) -> tuple[CartLineItem, ...]:
        return tuple(self._items)

    @property
    def count(self) -> int:
        return sum(item.quantity for item in self._items)

    @property
    def total(self) -> Money:
        result = Money.zero(self._currency)
        for item in self._items:
            result = result + item.line_total
        return result

    @property
    def is_empty(self) -> bool:
        return not self._items

    @property
    def currency(self) -> str:
        return self._currency

    def __len__(self) -> int:
        return len(self._items)

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _matches(item: CartLineItem, product_id: str, size: str | None) -> bool:
        if item.product_id != product_id:
            return False
        return size is None or item.size == size
