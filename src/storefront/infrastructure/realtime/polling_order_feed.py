"""Order insert feed built on periodic reads of the orders table.

Each subscription starts from the newest ``created_at`` stored in the
backend (never the local clock).  Every ``interval`` seconds it asks the
repository for orders created at or after the newest timestamp it has
seen minus a lookback window (one interval unless configured), so a row
that commits late with an earlier timestamp is still picked up.  Ids
already delivered inside that window are skipped.

Works against any OrderRepository, so the local JSON backend and the
hosted backend share it.  Repository calls are blocking and run in a
worker thread so the event loop stays responsive.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from datetime import datetime, timedelta, timezone

from storefront.domain.exceptions import BackendError
from storefront.domain.gateway.order_feed import OrderFeed, OrderSubscription
from storefront.domain.model.order import Order
from storefront.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class PollingSubscription(OrderSubscription):
    """Polls for inserts; pass *since* to skip the initial baseline lookup."""

    def __init__(
        self,
        order_repo: OrderRepository,
        interval: float,
        since: datetime | None = None,
        lookback: float | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._interval = interval
        self._lookback = timedelta(seconds=interval if lookback is None else lookback)
        self._newest = since
        self._seen: dict[str, datetime] = {}
        self._closed = asyncio.Event()

    async def __aiter__(self) -> AsyncIterator[Order]:
        while not self._closed.is_set():
            try:
                if self._newest is None:
                    await asyncio.to_thread(self._mark_existing)
                orders = await asyncio.to_thread(self._poll)
            except BackendError as exc:
                # A failed poll is reported once; the next tick tries again.
                logger.warning("Polling for new orders failed: %s", exc)
                orders = []

            for order in orders:
                if order.id in self._seen:
                    continue
                self._seen[order.id or ""] = order.created_at
                self._newest = max(self._newest, order.created_at)
                yield order
                if self._closed.is_set():
                    return

            try:
                await asyncio.wait_for(self._closed.wait(), timeout=self._interval)
            except asyncio.TimeoutError:
                pass

    async def close(self) -> None:
        self._closed.set()

    def _window_start(self) -> datetime:
        return self._newest - self._lookback if self._newest > _EPOCH else _EPOCH

    def _mark_existing(self) -> None:
        newest = self._order_repo.list_recent(1)
        if not newest:
            self._newest = _EPOCH
            return
        self._newest = newest[0].created_at
        for order in self._order_repo.list_created_since(self._window_start()):
            self._seen[order.id or ""] = order.created_at

    def _poll(self) -> list[Order]:
        start = self._window_start()
        # Ids older than the window cannot be returned again.
        self._seen = {oid: at for oid, at in self._seen.items() if at >= start}
        return self._order_repo.list_created_since(start)


class PollingOrderFeed(OrderFeed):

    def __init__(
        self,
        order_repo: OrderRepository,
        interval: float = 2.0,
        lookback: float | None = None,
    ) -> None:
        if interval <= 0:
            raise ValueError("Polling interval must be positive")
        self._order_repo = order_repo
        self._interval = interval
        self._lookback = lookback

    def subscribe(self) -> PollingSubscription:
        logger.debug("Subscribing to order inserts (every %.1fs)", self._interval)
        return PollingSubscription(self._order_repo, self._interval, lookback=self._lookback)
