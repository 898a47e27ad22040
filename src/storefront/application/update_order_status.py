"""Application service: Update Order Status use case (admin).

One update call per change; the returned DTO reflects the new status
immediately.
"""

from __future__ import annotations

import logging

from storefront.application.context import StoreContext
from storefront.application.dto import OrderDTO
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class UpdateOrderStatusHandler:

    def __init__(self, order_repo: OrderRepository, context: StoreContext) -> None:
        self._order_repo = order_repo
        self._context = context

    def handle(self, order_id: str, status: OrderStatus) -> OrderDTO:
        admin = self._context.require_admin()
        order = self._order_repo.update_status(order_id, status)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")
        logger.info("Order %s set to %s by %s", order_id, status.value, admin.user_id)
        return OrderDTO.from_order(order)
