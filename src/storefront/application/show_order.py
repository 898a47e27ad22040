"""Application service: Show Order use case (admin query)."""

from __future__ import annotations

from storefront.application.context import StoreContext
from storefront.application.dto import OrderDTO
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository, context: StoreContext) -> None:
        self._order_repo = order_repo
        self._context = context

    def handle(self, order_id: str) -> OrderDTO:
        self._context.require_admin()
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")
        return OrderDTO.from_order(order)
