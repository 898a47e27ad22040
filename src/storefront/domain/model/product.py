"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, products are added and removed from the catalog by the
back-office.  Orders never reference a live product price.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money

PLACEHOLDER_IMAGE = "/placeholder.svg"


@dataclass
class Product:
    """A product in the catalog (one row of the ``products`` table)."""

    id: str | None
    name: str
    price: Money
    original_price: Money | None = None
    image_url: str | None = None
    category: str | None = None
    description: str | None = None
    is_new: bool = False
    is_on_sale: bool = False
    stock: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(
        name: str,
        price: Money,
        *,
        original_price: Money | None = None,
        image_url: str | None = None,
        category: str | None = None,
        description: str | None = None,
        is_new: bool = False,
        is_on_sale: bool = False,
        stock: int = 0,
    ) -> Product:
        """Build a new catalog product, enforcing all invariants."""
        product = Product(
            id=None,
            name=(name or "").strip(),
            price=price,
            original_price=original_price,
            image_url=image_url or None,
            category=(category or "").strip() or None,
            description=description or None,
            is_new=is_new,
            is_on_sale=is_on_sale,
            stock=stock,
        )
        product.validate()
        return product

    def validate(self) -> None:
        if not self.name:
            raise ValidationError("Product name is required")
        if self.price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        if self.stock < 0:
            raise ValidationError("Stock cannot be negative")

    # --- Mutations ------------------------------------------------------------

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at creation time.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price

    # --- Computed properties --------------------------------------------------

    @property
    def display_image(self) -> str:
        return self.image_url or PLACEHOLDER_IMAGE

    @property
    def in_stock(self) -> bool:
        return self.stock > 0

    def matches(self, text: str) -> bool:
        """Case-insensitive match on name or description."""
        needle = text.lower()
        if needle in self.name.lower():
            return True
        return bool(self.description) and needle in self.description.lower()
