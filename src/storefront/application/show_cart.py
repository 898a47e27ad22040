"""Application service: Show Cart use case (query)."""

from __future__ import annotations

from storefront.application.context import StoreContext
from storefront.application.dto import CartDTO


class ShowCartHandler:

    def __init__(self, context: StoreContext) -> None:
        self._context = context

    def handle(self) -> CartDTO:
        return CartDTO.from_cart(self._context.cart, self._context.shipping_policy)
