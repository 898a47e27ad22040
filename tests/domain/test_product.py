"""Unit tests for the Product aggregate."""

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import PLACEHOLDER_IMAGE, Product
from storefront.domain.model.value_objects import Money


class TestProductCreate:

    def test_strips_and_normalises(self):
        product = Product.create("  Tee ", Money.of("20"), category=" ", image_url="")
        assert product.id is None
        assert product.name == "Tee"
        assert product.category is None
        assert product.display_image == PLACEHOLDER_IMAGE

    def test_name_required(self):
        with pytest.raises(ValidationError, match="name is required"):
            Product.create("", Money.of("20"))

    def test_price_must_be_positive(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            Product.create("Tee", Money.zero())

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="Stock cannot be negative"):
            Product.create("Tee", Money.of("20"), stock=-1)


class TestProductBehaviour:

    def test_update_price(self):
        product = Product(id="p1", name="Tee", price=Money.of("20"))
        product.update_price(Money.of("25"))
        assert product.price == Money.of("25")

    def test_update_price_to_zero_rejected(self):
        product = Product(id="p1", name="Tee", price=Money.of("20"))
        with pytest.raises(ValidationError):
            product.update_price(Money.zero())

    def test_matches_name_or_description(self):
        product = Product(id="p1", name="Linen Shirt", price=Money.of("20"), description="Breathable")
        assert product.matches("linen")
        assert product.matches("BREATH")
        assert not product.matches("wool")

    def test_in_stock(self):
        assert Product(id="p1", name="Tee", price=Money.of("1"), stock=1).in_stock
        assert not Product(id="p1", name="Tee", price=Money.of("1")).in_stock
