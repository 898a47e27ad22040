"""Application service: Add to Cart use case."""

from __future__ import annotations

from storefront.application.context import StoreContext
from storefront.application.dto import CartLineDTO
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.cart import CartLineItem
from storefront.domain.repository.product_repository import ProductRepository


class AddToCartHandler:

    def __init__(self, product_repo: ProductRepository, context: StoreContext) -> None:
        self._product_repo = product_repo
        self._context = context

    def handle(self, product_id: str, quantity: int = 1, size: str | None = None) -> CartLineDTO:
        """Look up the product and put *quantity* of it in the cart.

        The line captures the product's current price; the cart is never
        re-priced afterwards.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        if product.price.currency != self._context.cart.currency:
            raise ValidationError(
                f"Product '{product.name}' is priced in {product.price.currency}"
            )

        line = CartLineItem.from_product(product, quantity=1, size=size)
        merged = self._context.cart.add(line, quantity)
        return CartLineDTO.from_item(merged)
