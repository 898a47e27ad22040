"""Application service: Save Product use case (admin).

Creates a product when no id is given, otherwise updates the existing
row.  Price changes never touch existing orders: they captured a price
snapshot at checkout time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from storefront.application.context import StoreContext
from storefront.application.dto import ProductDTO
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProductForm:
    """Input: the admin product form, as typed."""

    name: str
    price: str
    original_price: str | None = None
    description: str | None = None
    image_url: str | None = None
    category: str | None = None
    is_new: bool = False
    is_on_sale: bool = False
    stock: int = 0


class SaveProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        context: StoreContext,
        currency: str,
    ) -> None:
        self._product_repo = product_repo
        self._context = context
        self._currency = currency

    def handle(self, form: ProductForm, product_id: str | None = None) -> ProductDTO:
        self._context.require_admin()

        product = Product.create(
            form.name,
            Money.of(form.price, self._currency),
            original_price=(
                Money.of(form.original_price, self._currency)
                if form.original_price
                else None
            ),
            image_url=form.image_url,
            category=form.category,
            description=form.description,
            is_new=form.is_new,
            is_on_sale=form.is_on_sale,
            stock=form.stock,
        )

        if product_id is not None:
            existing = self._product_repo.get_by_id(product_id)
            if existing is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
            product.id = existing.id
            product.created_at = existing.created_at

        saved = self._product_repo.save(product)
        logger.info("Product %s saved", saved.id)
        return ProductDTO.from_product(saved)
