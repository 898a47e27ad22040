"""Hosted-backend implementation of ProductRepository (``products`` table)."""

from __future__ import annotations

from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.backend.rest_client import (
    BackendClient,
    HostedBackendError,
    eq,
    ilike_contains,
)
from storefront.infrastructure.rows import product_from_row, product_to_row

TABLE = "products"
NEWEST_FIRST = "created_at.desc"


class RestProductRepository(ProductRepository):

    def __init__(self, client: BackendClient, currency: str) -> None:
        self._client = client
        self._currency = currency

    def get_by_id(self, product_id: str) -> Product | None:
        rows = self._client.select(TABLE, filters={"id": eq(product_id)}, limit=1)
        return product_from_row(rows[0], self._currency) if rows else None

    def list_all(self) -> list[Product]:
        rows = self._client.select(TABLE, order=NEWEST_FIRST)
        return [product_from_row(row, self._currency) for row in rows]

    def search_by_name(self, query: str, limit: int) -> list[Product]:
        rows = self._client.select(
            TABLE,
            columns="id,name,price,image_url,category",
            filters={"name": ilike_contains(query)},
            limit=limit,
        )
        return [product_from_row(row, self._currency) for row in rows]

    def save(self, product: Product) -> Product:
        row = product_to_row(product)
        if product.id is None:
            row.pop("created_at", None)
            written = self._client.insert(TABLE, [row])
        else:
            row.pop("id")
            row.pop("created_at", None)
            written = self._client.update(TABLE, row, {"id": eq(product.id)})
        if not written:
            raise HostedBackendError(f"Product write returned no row ({product.name})")
        return product_from_row(written[0], self._currency)

    def delete(self, product_id: str) -> None:
        self._client.delete(TABLE, {"id": eq(product_id)})
