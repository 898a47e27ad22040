"""Abstract repository for Order aggregate.

Mirrors the two backend tables: ``orders`` and ``order_items``.  There is
no way to write both in one call; callers insert the order first and the
line items second.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from storefront.domain.model.order import Order, OrderLineItem, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def insert(self, order: Order) -> Order:
        """Insert a new order; the returned copy carries the server-assigned id."""

    @abstractmethod
    def insert_items(self, items: list[OrderLineItem]) -> list[OrderLineItem]:
        """Insert all line items in one batch write."""

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order with its line items, or None if not found."""

    @abstractmethod
    def list_all(self, status: OrderStatus | None = None) -> list[Order]:
        """Return every order (optionally one status), newest first, without items."""

    @abstractmethod
    def list_for_user(self, user_id: str) -> list[Order]:
        """Return a user's orders with nested line items, newest first."""

    @abstractmethod
    def list_recent(self, limit: int) -> list[Order]:
        """Return the *limit* most recent orders, newest first."""

    @abstractmethod
    def list_created_since(self, since: datetime) -> list[Order]:
        """Return orders created at or after *since*, oldest first."""

    @abstractmethod
    def list_items(self, order_ids: list[str] | None = None) -> list[OrderLineItem]:
        """Return line items of the given orders (all when None)."""

    @abstractmethod
    def update_status(self, order_id: str, status: OrderStatus) -> Order | None:
        """Set an order's status; returns the updated order or None if missing."""
