"""Back-office notification about a new order."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from storefront.domain.model.order import Order
from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class OrderNotification:
    order_id: str
    customer_name: str
    total_amount: Money
    created_at: datetime
    read: bool = False

    @property
    def message(self) -> str:
        return f"New order from {self.customer_name} - {self.total_amount}"

    def mark_read(self) -> OrderNotification:
        return replace(self, read=True)

    @staticmethod
    def from_order(order: Order) -> OrderNotification:
        """Unread while the order is still pending."""
        return OrderNotification(
            order_id=order.id or "",
            customer_name=order.customer_name,
            total_amount=order.total_amount,
            created_at=order.created_at,
            read=not order.is_pending,
        )
