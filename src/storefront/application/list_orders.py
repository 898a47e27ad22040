"""Application service: List Orders use case (admin query)."""

from __future__ import annotations

from storefront.application.context import StoreContext
from storefront.application.dto import OrderDTO
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.order_repository import OrderRepository


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository, context: StoreContext) -> None:
        self._order_repo = order_repo
        self._context = context

    def handle(
        self,
        search: str | None = None,
        status: OrderStatus | None = None,
    ) -> list[OrderDTO]:
        """All orders, newest first.

        The status filter is applied by the backend; the free-text
        search (name, email or id) is applied locally.
        """
        self._context.require_admin()
        orders = self._order_repo.list_all(status=status)
        if search and search.strip():
            orders = [order for order in orders if order.matches(search)]
        return [OrderDTO.from_order(order) for order in orders]
