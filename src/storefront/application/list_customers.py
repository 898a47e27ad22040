"""Application service: List Customers use case (admin query).

There is no customer table: customers are derived from orders, grouped
by email address.  Orders without an email are grouped by phone.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.application.context import StoreContext
from storefront.application.dto import TIMESTAMP_FORMAT
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.order_repository import OrderRepository


@dataclass(frozen=True)
class CustomerDTO:
    email: str | None
    name: str
    phone: str | None
    city: str
    orders_count: int
    total_spent: str
    last_order: str


@dataclass
class _CustomerTotals:
    email: str | None
    name: str
    phone: str | None
    city: str
    last_order: str
    orders_count: int
    total_spent: Money


class ListCustomersHandler:

    def __init__(self, order_repo: OrderRepository, context: StoreContext) -> None:
        self._order_repo = order_repo
        self._context = context

    def handle(self, search: str | None = None) -> list[CustomerDTO]:
        self._context.require_admin()

        # Newest first, so the first order seen per customer is the latest one.
        customers: dict[str, _CustomerTotals] = {}
        for order in self._order_repo.list_all():
            key = (order.customer_email or order.customer_phone or order.customer_name).lower()
            existing = customers.get(key)
            if existing is None:
                customers[key] = _CustomerTotals(
                    email=order.customer_email,
                    name=order.customer_name,
                    phone=order.customer_phone,
                    city=order.city,
                    last_order=order.created_at.strftime(TIMESTAMP_FORMAT),
                    orders_count=1,
                    total_spent=order.total_amount,
                )
            else:
                existing.orders_count += 1
                existing.total_spent = existing.total_spent + order.total_amount

        result = list(customers.values())
        if search and search.strip():
            needle = search.strip().lower()
            result = [
                c for c in result
                if needle in c.name.lower()
                or needle in (c.email or "").lower()
                or needle in c.city.lower()
            ]

        return [
            CustomerDTO(
                email=c.email,
                name=c.name,
                phone=c.phone,
                city=c.city,
                orders_count=c.orders_count,
                total_spent=str(c.total_spent),
                last_order=c.last_order,
            )
            for c in result
        ]
