"""Tests for the admin new-order notification feed."""

import asyncio

import pytest

from storefront.application.order_notifications import OrderNotificationFeed
from storefront.domain.exceptions import PermissionDeniedError
from storefront.domain.model.notification import OrderNotification
from storefront.domain.model.order import OrderStatus
from tests.fakes import (
    ADMIN,
    CUSTOMER,
    FakeOrderFeed,
    FakeOrderRepository,
    make_context,
    make_order,
)


def _setup(existing: int = 2, incoming=None, limit: int = 10):
    orders = FakeOrderRepository([
        make_order(n, status=OrderStatus.PENDING if n % 2 else OrderStatus.DELIVERED)
        for n in range(1, existing + 1)
    ])
    feed = FakeOrderFeed(incoming or [])
    notifications = OrderNotificationFeed(orders, feed, make_context(ADMIN), limit=limit)
    return notifications, feed


class TestLoadRecent:

    def test_pending_orders_are_unread(self):
        notifications, _ = _setup(existing=2)
        recent = notifications.load_recent()

        # newest first: order 2 (delivered), order 1 (pending)
        assert [n.read for n in recent] == [True, False]
        assert notifications.unread_count == 1

    def test_limited(self):
        notifications, _ = _setup(existing=12)
        assert len(notifications.load_recent()) == 10

    def test_requires_admin(self):
        orders = FakeOrderRepository()
        feed = OrderNotificationFeed(orders, FakeOrderFeed(), make_context(CUSTOMER))
        with pytest.raises(PermissionDeniedError):
            feed.load_recent()


class TestReadState:

    def test_mark_read_and_mark_all_read(self):
        notifications, _ = _setup(existing=3)
        notifications.load_recent()
        assert notifications.unread_count == 2

        first_unread = next(n for n in notifications.notifications if not n.read)
        notifications.mark_read(first_unread.order_id)
        assert notifications.unread_count == 1

        notifications.mark_all_read()
        assert notifications.unread_count == 0

    def test_message(self):
        notification = OrderNotification.from_order(make_order(1, name="Dana", total="42.00"))
        assert notification.message == "New order from Dana - $42.00"


class TestListen:

    def test_new_orders_are_prepended_unread(self):
        incoming = [make_order(20, name="Eve"), make_order(21, name="Finn")]
        notifications, feed = _setup(existing=2, incoming=incoming)
        notifications.load_recent()
        received: list[OrderNotification] = []

        asyncio.run(notifications.listen(received.append, max_events=2))

        assert [n.customer_name for n in received] == ["Eve", "Finn"]
        assert notifications.notifications[0].customer_name == "Finn"
        assert notifications.notifications[1].customer_name == "Eve"
        assert notifications.unread_count == 3
        assert feed.subscriptions[0].closed

    def test_list_is_capped(self):
        incoming = [make_order(30 + n, name=f"N{n}") for n in range(3)]
        notifications, _ = _setup(existing=2, incoming=incoming, limit=3)
        notifications.load_recent()

        asyncio.run(notifications.listen(max_events=3))

        assert [n.customer_name for n in notifications.notifications] == ["N2", "N1", "N0"]

    def test_duplicate_insert_event_replaces_entry(self):
        order = make_order(40, name="Gus")
        notifications, _ = _setup(existing=0, incoming=[order, order])

        asyncio.run(notifications.listen(max_events=2))

        assert len(notifications.notifications) == 1

    def test_cancellation_closes_subscription(self):
        notifications, feed = _setup(existing=0)

        async def run():
            task = asyncio.create_task(notifications.listen())
            await asyncio.sleep(0.05)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        asyncio.run(run())
        assert feed.subscriptions[0].closed
