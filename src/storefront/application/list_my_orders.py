"""Application service: My Orders use case (query).

Read-only order history of the signed-in customer.
"""

from __future__ import annotations

from storefront.application.context import StoreContext
from storefront.application.dto import OrderDTO
from storefront.domain.repository.order_repository import OrderRepository


class ListMyOrdersHandler:

    def __init__(self, order_repo: OrderRepository, context: StoreContext) -> None:
        self._order_repo = order_repo
        self._context = context

    def handle(self) -> list[OrderDTO]:
        session = self._context.require_session()
        orders = self._order_repo.list_for_user(session.user_id)
        return [OrderDTO.from_order(order) for order in orders]
