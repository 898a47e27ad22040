"""Application service: Delete Product use case (admin)."""

from __future__ import annotations

import logging

from storefront.application.context import StoreContext
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository, context: StoreContext) -> None:
        self._product_repo = product_repo
        self._context = context

    def handle(self, product_id: str) -> None:
        self._context.require_admin()
        if self._product_repo.get_by_id(product_id) is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        self._product_repo.delete(product_id)
        logger.info("Product %s deleted", product_id)
