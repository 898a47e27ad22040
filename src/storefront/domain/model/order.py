"""Order aggregate: what checkout produces and the back-office manages.

The Order owns its line items.  Line items are price snapshots taken from
the cart at checkout time, so later catalog price changes never rewrite
order history.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @staticmethod
    def parse(raw: str) -> OrderStatus:
        try:
            return OrderStatus(raw.strip().lower())
        except ValueError:
            allowed = ", ".join(s.value for s in OrderStatus)
            raise ValidationError(
                f"Unknown order status '{raw}' (expected one of: {allowed})"
            ) from None


@dataclass(frozen=True)
class OrderLineItem:
    """Snapshot of a cart line at order-creation time.

    Immutable once written.  ``product_id`` may be None when the product
    was never a catalog row (or has since been deleted).
    """

    order_id: str | None
    product_id: str | None
    product_name: str
    product_price: Money  # locked at order-creation time
    quantity: Quantity
    size: str | None = None
    id: str | None = None

    @property
    def line_total(self) -> Money:
        return self.product_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use ``Order.place()`` for new orders.  The ``__init__`` is kept simple
    so repositories can reconstitute persisted orders without
    re-validating.
    """

    id: str | None
    customer_name: str
    customer_email: str | None
    customer_phone: str | None
    shipping_address: str
    city: str
    total_amount: Money
    postal_code: str | None = None
    notes: str | None = None
    user_id: str | None = None
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    items: list[OrderLineItem] = field(default_factory=list)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def place(
        *,
        customer_name: str,
        customer_email: str | None,
        customer_phone: str | None,
        shipping_address: str,
        city: str,
        total_amount: Money,
        postal_code: str | None = None,
        notes: str | None = None,
        user_id: str | None = None,
    ) -> Order:
        """Create a new pending order, enforcing the required fields."""
        if not customer_name or not customer_name.strip():
            raise ValidationError("Customer name is required")
        if not shipping_address or not shipping_address.strip():
            raise ValidationError("Shipping address is required")
        if not city or not city.strip():
            raise ValidationError("City is required")
        if total_amount.is_zero:
            raise ValidationError("Order total must be greater than zero")

        return Order(
            id=None,
            customer_name=customer_name.strip(),
            customer_email=_blank_to_none(customer_email),
            customer_phone=_blank_to_none(customer_phone),
            shipping_address=shipping_address.strip(),
            city=city.strip(),
            total_amount=total_amount,
            postal_code=_blank_to_none(postal_code),
            notes=_blank_to_none(notes),
            user_id=user_id,
        )

    # --- State transitions ----------------------------------------------------

    def change_status(self, new_status: OrderStatus) -> None:
        """Admin status change.  Any status may follow any other."""
        self.status = new_status

    # --- Computed properties --------------------------------------------------

    @property
    def reference(self) -> str:
        """Short human-facing order reference (first 8 chars, upper-cased)."""
        return (self.id or "")[:8].upper()

    @property
    def items_total(self) -> Money:
        result = Money.zero(self.total_amount.currency)
        for item in self.items:
            result = result + item.line_total
        return result

    @property
    def item_count(self) -> int:
        return sum(item.quantity.value for item in self.items)

    @property
    def is_pending(self) -> bool:
        return self.status == OrderStatus.PENDING

    def matches(self, text: str) -> bool:
        """Case-insensitive free-text match on name, email or id."""
        needle = text.strip().lower()
        haystack = (self.customer_name, self.customer_email or "", self.id or "")
        return any(needle in value.lower() for value in haystack)


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def line_items_from_cart(order_id: str, cart_items, currency: str = DEFAULT_CURRENCY) -> list[OrderLineItem]:
    """Copy each cart line's current name/price/quantity/size onto the order."""
    lines: list[OrderLineItem] = []
    for item in cart_items:
        if item.unit_price.currency != currency:
            raise ValidationError(
                f"Cart line '{item.name}' is priced in {item.unit_price.currency}, "
                f"expected {currency}"
            )
        lines.append(
            OrderLineItem(
                order_id=order_id,
                product_id=item.product_id,
                product_name=item.name,
                product_price=item.unit_price,  # <-- price snapshot
                quantity=Quantity(item.quantity),
                size=item.size,
            )
        )
    return lines
