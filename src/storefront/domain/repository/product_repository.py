"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (local JSON tables, hosted
REST backend, in-memory fakes) live elsewhere.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog, newest first."""

    @abstractmethod
    def search_by_name(self, query: str, limit: int) -> list[Product]:
        """Return up to *limit* products whose name contains *query* (case-insensitive)."""

    @abstractmethod
    def save(self, product: Product) -> Product:
        """Insert (id is None) or update a product and return the stored row."""

    @abstractmethod
    def delete(self, product_id: str) -> None:
        """Remove a product from the catalog."""
