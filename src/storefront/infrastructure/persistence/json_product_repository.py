"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from pathlib import Path

from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.json_table import JsonTable
from storefront.infrastructure.rows import product_from_row, product_to_row


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path, currency: str) -> None:
        self._table = JsonTable(file_path)
        self._currency = currency

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        for row in self._table.load():
            if str(row["id"]) == product_id:
                return product_from_row(row, self._currency)
        return None

    def list_all(self) -> list[Product]:
        products = [product_from_row(row, self._currency) for row in self._table.load()]
        return sorted(products, key=lambda p: p.created_at, reverse=True)

    def search_by_name(self, query: str, limit: int) -> list[Product]:
        needle = query.lower()
        return [p for p in self.list_all() if needle in p.name.lower()][:limit]

    def save(self, product: Product) -> Product:
        rows = self._table.load()
        row = product_to_row(product)

        if product.id is None:
            row = JsonTable.stamp(row)
            rows.append(row)
        else:
            # Upsert: replace if exists, otherwise append
            for i, existing in enumerate(rows):
                if str(existing["id"]) == product.id:
                    rows[i] = row
                    break
            else:
                rows.append(row)

        self._table.persist(rows)
        return product_from_row(row, self._currency)

    def delete(self, product_id: str) -> None:
        rows = self._table.load()
        self._table.persist([row for row in rows if str(row["id"]) != product_id])
