"""Application service: quick product search (header search box)."""

from __future__ import annotations

from storefront.application.dto import ProductDTO
from storefront.domain.repository.product_repository import ProductRepository

MIN_QUERY_LENGTH = 2
MAX_RESULTS = 6


class SearchProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, query: str) -> list[ProductDTO]:
        query = query.strip()
        if len(query) < MIN_QUERY_LENGTH:
            return []
        products = self._product_repo.search_by_name(query, MAX_RESULTS)
        return [ProductDTO.from_product(p) for p in products]
