"""Application service: admin notification feed for new orders.

The feed starts from the most recent orders (unread while still pending)
and then follows an ``OrderFeed`` subscription, prepending a notification
for every inserted order.  Read/unread is local state only; nothing is
written back to the backend.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from storefront.application.context import StoreContext
from storefront.domain.gateway.order_feed import OrderFeed
from storefront.domain.model.notification import OrderNotification
from storefront.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)

MAX_NOTIFICATIONS = 10


class OrderNotificationFeed:

    def __init__(
        self,
        order_repo: OrderRepository,
        feed: OrderFeed,
        context: StoreContext,
        limit: int = MAX_NOTIFICATIONS,
    ) -> None:
        self._order_repo = order_repo
        self._feed = feed
        self._context = context
        self._limit = limit
        self._notifications: list[OrderNotification] = []

    # --- Loading --------------------------------------------------------------

    def load_recent(self) -> list[OrderNotification]:
        self._context.require_admin()
        orders = self._order_repo.list_recent(self._limit)
        self._notifications = [OrderNotification.from_order(o) for o in orders]
        return self.notifications

    async def listen(
        self,
        on_notification: Callable[[OrderNotification], None] | None = None,
        max_events: int | None = None,
    ) -> None:
        """Follow order inserts until cancelled (or *max_events* arrived).

        The subscription is closed on the way out, including when the
        surrounding task is cancelled.
        """
        self._context.require_admin()
        received = 0
        async with self._feed.subscribe() as subscription:
            async for order in subscription:
                notification = self.push(OrderNotification.from_order(order))
                if on_notification is not None:
                    on_notification(notification)
                received += 1
                if max_events is not None and received >= max_events:
                    break

    def push(self, notification: OrderNotification) -> OrderNotification:
        """Prepend *notification*, keeping at most ``limit`` entries."""
        self._notifications = [
            n for n in self._notifications if n.order_id != notification.order_id
        ]
        self._notifications.insert(0, notification)
        del self._notifications[self._limit:]
        logger.debug("Notification for order %s received", notification.order_id)
        return notification

    # --- Read state -----------------------------------------------------------

    @property
    def notifications(self) -> list[OrderNotification]:
        return list(self._notifications)

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self._notifications if not n.read)

    def is_unread(self, order_id: str) -> bool:
        return any(n.order_id == order_id and not n.read for n in self._notifications)

    def mark_read(self, order_id: str) -> None:
        self._notifications = [
            n.mark_read() if n.order_id == order_id else n for n in self._notifications
        ]

    def mark_all_read(self) -> None:
        self._notifications = [n.mark_read() for n in self._notifications]
