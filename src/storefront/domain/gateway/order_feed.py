"""Abstract realtime feed of newly inserted orders.

A subscription is an async stream: ``async for order in subscription``
yields each order row as it is inserted.  ``close()`` ends the stream;
consumers close their subscription when the view that owns it goes away.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

from storefront.domain.model.order import Order


class OrderSubscription(ABC):

    @abstractmethod
    def __aiter__(self) -> AsyncIterator[Order]:
        """Iterate over inserted orders until closed."""

    @abstractmethod
    async def close(self) -> None:
        """Stop delivering events and release the channel."""

    async def __aenter__(self) -> OrderSubscription:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()


class OrderFeed(ABC):

    @abstractmethod
    def subscribe(self) -> OrderSubscription:
        """Open a channel delivering order inserts from now on."""
