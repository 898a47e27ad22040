"""Hosted-backend implementation of OrderRepository.

``orders`` and ``order_items`` are separate tables; nested reads use the
embedded-resource select ``*,order_items(*)``.
"""

from __future__ import annotations

from datetime import datetime

from storefront.domain.model.order import Order, OrderLineItem, OrderStatus
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.backend.rest_client import (
    BackendClient,
    HostedBackendError,
    eq,
    gte,
    in_list,
)
from storefront.infrastructure.rows import (
    item_from_row,
    item_to_row,
    order_from_row,
    order_to_row,
)

ORDERS = "orders"
ITEMS = "order_items"
WITH_ITEMS = "*,order_items(*)"
NEWEST_FIRST = "created_at.desc"


class RestOrderRepository(OrderRepository):

    def __init__(self, client: BackendClient, currency: str) -> None:
        self._client = client
        self._currency = currency

    def insert(self, order: Order) -> Order:
        written = self._client.insert(ORDERS, [order_to_row(order)])
        if not written:
            raise HostedBackendError("Order insert returned no row")
        return order_from_row(written[0], self._currency)

    def insert_items(self, items: list[OrderLineItem]) -> list[OrderLineItem]:
        if not items:
            return []
        written = self._client.insert(ITEMS, [item_to_row(item) for item in items])
        return [item_from_row(row, self._currency) for row in written]

    def get_by_id(self, order_id: str) -> Order | None:
        rows = self._client.select(
            ORDERS, columns=WITH_ITEMS, filters={"id": eq(order_id)}, limit=1,
        )
        return order_from_row(rows[0], self._currency) if rows else None

    def list_all(self, status: OrderStatus | None = None) -> list[Order]:
        filters = {"status": eq(status.value)} if status is not None else None
        rows = self._client.select(ORDERS, filters=filters, order=NEWEST_FIRST)
        return [order_from_row(row, self._currency) for row in rows]

    def list_for_user(self, user_id: str) -> list[Order]:
        rows = self._client.select(
            ORDERS, columns=WITH_ITEMS, filters={"user_id": eq(user_id)}, order=NEWEST_FIRST,
        )
        return [order_from_row(row, self._currency) for row in rows]

    def list_recent(self, limit: int) -> list[Order]:
        rows = self._client.select(
            ORDERS,
            columns="id,customer_name,total_amount,created_at,status,shipping_address,city",
            order=NEWEST_FIRST,
            limit=limit,
        )
        return [order_from_row(row, self._currency) for row in rows]

    def list_created_since(self, since: datetime) -> list[Order]:
        rows = self._client.select(
            ORDERS, filters={"created_at": gte(since.isoformat())}, order="created_at.asc",
        )
        return [order_from_row(row, self._currency) for row in rows]

    def list_items(self, order_ids: list[str] | None = None) -> list[OrderLineItem]:
        if order_ids is not None and not order_ids:
            return []
        filters = {"order_id": in_list(order_ids)} if order_ids is not None else None
        rows = self._client.select(ITEMS, filters=filters)
        return [item_from_row(row, self._currency) for row in rows]

    def update_status(self, order_id: str, status: OrderStatus) -> Order | None:
        written = self._client.update(ORDERS, {"status": status.value}, {"id": eq(order_id)})
        return order_from_row(written[0], self._currency) if written else None
