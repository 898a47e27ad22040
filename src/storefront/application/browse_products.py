"""Application service: Browse Products use case (query).

Catalog page: text search, category filter and sorting over the full
product list.
"""

from __future__ import annotations

from enum import Enum

from storefront.application.dto import ProductDTO
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductRepository

ALL_CATEGORIES = "all"


class ProductSort(Enum):
    NEWEST = "newest"
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    NAME = "name"

    @staticmethod
    def parse(raw: str) -> ProductSort:
        try:
            return ProductSort(raw.strip().lower())
        except ValueError:
            raise ValidationError(f"Unknown sort order '{raw}'") from None


class BrowseProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        search: str = "",
        category: str = ALL_CATEGORIES,
        sort: ProductSort = ProductSort.NEWEST,
    ) -> list[ProductDTO]:
        products = self._product_repo.list_all()

        if search.strip():
            products = [p for p in products if p.matches(search.strip())]
        if category and category != ALL_CATEGORIES:
            products = [p for p in products if p.category == category]

        return [ProductDTO.from_product(p) for p in self._sorted(products, sort)]

    def categories(self) -> list[str]:
        """Distinct categories in first-seen order, preceded by ``all``."""
        seen: list[str] = []
        for product in self._product_repo.list_all():
            if product.category and product.category not in seen:
                seen.append(product.category)
        return [ALL_CATEGORIES, *seen]

    @staticmethod
    def _sorted(products: list[Product], sort: ProductSort) -> list[Product]:
        # list_all() is already newest first
        if sort == ProductSort.PRICE_LOW:
            return sorted(products, key=lambda p: p.price.amount)
        if sort == ProductSort.PRICE_HIGH:
            return sorted(products, key=lambda p: p.price.amount, reverse=True)
        if sort == ProductSort.NAME:
            return sorted(products, key=lambda p: p.name.lower())
        return products
