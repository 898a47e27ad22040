"""JSON-file-backed implementation of OrderRepository.

Two files, one per table: ``orders.json`` and ``order_items.json``.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from storefront.domain.model.order import Order, OrderLineItem, OrderStatus
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.json_table import JsonTable
from storefront.infrastructure.rows import (
    item_from_row,
    item_to_row,
    order_from_row,
    order_to_row,
)


class JsonOrderRepository(OrderRepository):

    def __init__(self, orders_path: Path, items_path: Path, currency: str) -> None:
        self._orders = JsonTable(orders_path)
        self._items = JsonTable(items_path)
        self._currency = currency

    # --- OrderRepository interface --------------------------------------------

    def insert(self, order: Order) -> Order:
        rows = self._orders.load()
        row = JsonTable.stamp(order_to_row(order))
        rows.append(row)
        self._orders.persist(rows)
        return order_from_row(row, self._currency)

    def insert_items(self, items: list[OrderLineItem]) -> list[OrderLineItem]:
        rows = self._items.load()
        new_rows = [JsonTable.stamp(item_to_row(item), timestamped=False) for item in items]
        self._items.persist(rows + new_rows)
        return [item_from_row(row, self._currency) for row in new_rows]

    def get_by_id(self, order_id: str) -> Order | None:
        for row in self._orders.load():
            if str(row["id"]) == order_id:
                order = order_from_row(row, self._currency)
                order.items = self.list_items([order_id])
                return order
        return None

    def list_all(self, status: OrderStatus | None = None) -> list[Order]:
        orders = self._load_orders()
        if status is not None:
            orders = [o for o in orders if o.status == status]
        return orders

    def list_for_user(self, user_id: str) -> list[Order]:
        orders = [o for o in self._load_orders() if o.user_id == user_id]
        self._attach_items(orders)
        return orders

    def list_recent(self, limit: int) -> list[Order]:
        return self._load_orders()[:limit]

    def list_created_since(self, since: datetime) -> list[Order]:
        newer = [o for o in self._load_orders() if o.created_at >= since]
        return list(reversed(newer))

    def list_items(self, order_ids: list[str] | None = None) -> list[OrderLineItem]:
        wanted = set(order_ids) if order_ids is not None else None
        return [
            item_from_row(row, self._currency)
            for row in self._items.load()
            if wanted is None or str(row["order_id"]) in wanted
        ]

    def update_status(self, order_id: str, status: OrderStatus) -> Order | None:
        rows = self._orders.load()
        for row in rows:
            if str(row["id"]) == order_id:
                row["status"] = status.value
                self._orders.persist(rows)
                return order_from_row(row, self._currency)
        return None

    # --- Helpers --------------------------------------------------------------

    def _load_orders(self) -> list[Order]:
        orders = [order_from_row(row, self._currency) for row in self._orders.load()]
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    def _attach_items(self, orders: list[Order]) -> None:
        by_order: dict[str, list[OrderLineItem]] = {}
        for item in self.list_items([o.id for o in orders if o.id]):
            by_order.setdefault(item.order_id or "", []).append(item)
        for order in orders:
            order.items = by_order.get(order.id or "", [])
