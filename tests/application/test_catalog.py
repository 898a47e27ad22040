"""Integration tests for catalog browsing and admin product management."""

from datetime import datetime, timedelta, timezone

import pytest

from storefront.application.browse_products import ALL_CATEGORIES, BrowseProductsHandler, ProductSort
from storefront.application.delete_product import DeleteProductHandler
from storefront.application.save_product import ProductForm, SaveProductHandler
from storefront.application.search_products import SearchProductsHandler
from storefront.application.show_product import ShowProductHandler
from storefront.application.upload_product_image import UploadProductImageHandler
from storefront.domain.exceptions import (
    EntityNotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from tests.fakes import ADMIN, CUSTOMER, FakeFileStorage, FakeProductRepository, make_context

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _setup():
    products = [
        Product(id="1", name="Wool Coat", price=Money.of("180"), category="Outerwear",
                created_at=T0),
        Product(id="2", name="Linen Shirt", price=Money.of("45"), category="Shirts",
                description="Light and breathable", created_at=T0 + timedelta(days=1)),
        Product(id="3", name="Denim Jacket", price=Money.of("95"), category="Outerwear",
                created_at=T0 + timedelta(days=2)),
        Product(id="4", name="Beanie", price=Money.of("15"), created_at=T0 + timedelta(days=3)),
    ]
    return FakeProductRepository(products)


class TestBrowseProducts:

    def test_newest_first_by_default(self):
        result = BrowseProductsHandler(_setup()).handle()
        assert [p.id for p in result] == ["4", "3", "2", "1"]

    @pytest.mark.parametrize(
        "sort, expected",
        [
            (ProductSort.PRICE_LOW, ["4", "2", "3", "1"]),
            (ProductSort.PRICE_HIGH, ["1", "3", "2", "4"]),
            (ProductSort.NAME, ["4", "3", "2", "1"]),
        ],
    )
    def test_sorting(self, sort, expected):
        result = BrowseProductsHandler(_setup()).handle(sort=sort)
        assert [p.id for p in result] == expected

    def test_search_matches_description(self):
        result = BrowseProductsHandler(_setup()).handle(search="breathable")
        assert [p.name for p in result] == ["Linen Shirt"]

    def test_category_filter(self):
        result = BrowseProductsHandler(_setup()).handle(category="Outerwear")
        assert [p.id for p in result] == ["3", "1"]

    def test_categories(self):
        assert BrowseProductsHandler(_setup()).categories() == [
            ALL_CATEGORIES, "Outerwear", "Shirts",
        ]

    def test_sort_parse(self):
        assert ProductSort.parse("Price-Low") == ProductSort.PRICE_LOW
        with pytest.raises(ValidationError):
            ProductSort.parse("random")


class TestSearchAndShow:

    def test_short_query_returns_nothing(self):
        assert SearchProductsHandler(_setup()).handle(" c ") == []

    def test_search_by_name(self):
        result = SearchProductsHandler(_setup()).handle("ja")
        assert [p.name for p in result] == ["Denim Jacket"]

    def test_show_product(self):
        dto = ShowProductHandler(_setup()).handle("4")
        assert dto.name == "Beanie"
        assert dto.price == "$15.00"
        assert dto.image_url == "/placeholder.svg"

    def test_show_missing_product(self):
        with pytest.raises(EntityNotFoundError, match="not found"):
            ShowProductHandler(_setup()).handle("99")


class TestSaveProduct:

    def test_create(self):
        repo = _setup()
        dto = SaveProductHandler(repo, make_context(ADMIN), "USD").handle(
            ProductForm(name="Gloves", price="19.90", category="Accessories", stock=4),
        )

        assert dto.id
        assert repo.get_by_id(dto.id).price == Money.of("19.90")

    def test_update_keeps_id_and_created_at(self):
        repo = _setup()
        dto = SaveProductHandler(repo, make_context(ADMIN), "USD").handle(
            ProductForm(name="Wool Coat", price="150", original_price="180", is_on_sale=True),
            product_id="1",
        )

        stored = repo.get_by_id("1")
        assert dto.id == "1"
        assert stored.price == Money.of("150")
        assert stored.original_price == Money.of("180")
        assert stored.created_at == T0

    def test_invalid_price_rejected(self):
        with pytest.raises(ValidationError):
            SaveProductHandler(_setup(), make_context(ADMIN), "USD").handle(
                ProductForm(name="Gloves", price="free"),
            )

    def test_update_missing_product(self):
        with pytest.raises(EntityNotFoundError):
            SaveProductHandler(_setup(), make_context(ADMIN), "USD").handle(
                ProductForm(name="Gloves", price="10"), product_id="99",
            )

    def test_customer_cannot_save(self):
        with pytest.raises(PermissionDeniedError):
            SaveProductHandler(_setup(), make_context(CUSTOMER), "USD").handle(
                ProductForm(name="Gloves", price="10"),
            )


class TestDeleteProduct:

    def test_delete(self):
        repo = _setup()
        DeleteProductHandler(repo, make_context(ADMIN)).handle("2")
        assert repo.get_by_id("2") is None

    def test_delete_missing(self):
        with pytest.raises(EntityNotFoundError):
            DeleteProductHandler(_setup(), make_context(ADMIN)).handle("99")


class TestUploadProductImage:

    def test_upload_sets_product_image(self):
        repo = _setup()
        storage = FakeFileStorage()
        url = UploadProductImageHandler(storage, repo, make_context(ADMIN)).handle(
            "Photo.PNG", b"\x89PNG...", product_id="4",
        )

        (path, (data, content_type)), = storage.files.items()
        assert path.endswith(".png")
        assert content_type == "image/png"
        assert data == b"\x89PNG..."
        assert url == f"https://cdn.test/{path}"
        assert repo.get_by_id("4").image_url == url

    def test_upload_without_product(self):
        storage = FakeFileStorage()
        url = UploadProductImageHandler(storage, _setup(), make_context(ADMIN)).handle(
            "photo.jpg", b"data",
        )
        assert url.startswith("https://cdn.test/")

    @pytest.mark.parametrize(
        "filename, data, message",
        [
            ("notes.txt", b"data", "Unsupported image type"),
            ("photo.png", b"", "empty"),
        ],
    )
    def test_rejected_uploads(self, filename, data, message):
        storage = FakeFileStorage()
        with pytest.raises(ValidationError, match=message):
            UploadProductImageHandler(storage, _setup(), make_context(ADMIN)).handle(filename, data)
        assert storage.files == {}
