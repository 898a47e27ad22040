"""Unit tests for the Cart aggregate."""

import random

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.cart import Cart, CartLineItem
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money


def _line(product_id: str = "a", price: str = "100.00", qty: int = 1, size: str | None = None) -> CartLineItem:
    return CartLineItem(
        product_id=product_id,
        name=f"Product {product_id}",
        unit_price=Money.of(price),
        quantity=qty,
        image="/placeholder.svg",
        size=size,
    )


def _assert_consistent(cart: Cart) -> None:
    assert cart.count == sum(item.quantity for item in cart.items)
    expected = Money.zero()
    for item in cart.items:
        expected = expected + item.unit_price * item.quantity
    assert cart.total == expected


def _quiet_cart(items=()) -> tuple[Cart, list[str]]:
    messages: list[str] = []
    return Cart(items, notify=messages.append), messages


class TestCartAdd:

    def test_add_new_line(self):
        cart, messages = _quiet_cart()
        cart.add(_line("a", qty=2))

        assert len(cart) == 1
        assert cart.count == 2
        assert messages == ["Product a added to cart"]
        _assert_consistent(cart)

    def test_same_product_and_size_merges(self):
        cart, _ = _quiet_cart()
        cart.add(_line("a", size="M"), quantity=1)
        merged = cart.add(_line("a", size="M"), quantity=3)

        assert len(cart) == 1
        assert merged.quantity == 4
        _assert_consistent(cart)

    def test_different_size_is_a_separate_line(self):
        cart, _ = _quiet_cart()
        cart.add(_line("a", size="M"))
        cart.add(_line("a", size="L"))

        assert len(cart) == 2
        assert cart.count == 2

    def test_quantity_override(self):
        cart, _ = _quiet_cart()
        cart.add(_line("a", qty=1), quantity=5)
        assert cart.items[0].quantity == 5

    @pytest.mark.parametrize("qty", [0, -1])
    def test_non_positive_quantity_rejected(self, qty):
        cart, _ = _quiet_cart()
        with pytest.raises(ValidationError, match="positive integer"):
            cart.add(_line("a"), quantity=qty)
        assert cart.is_empty

    def test_from_unsaved_product_rejected(self):
        product = Product(id=None, name="Draft", price=Money.of("1"))
        with pytest.raises(ValidationError, match="unsaved"):
            CartLineItem.from_product(product)

    def test_from_product_uses_placeholder_image(self):
        product = Product(id="p1", name="Tee", price=Money.of("20"))
        line = CartLineItem.from_product(product, quantity=2, size="")
        assert line.image == "/placeholder.svg"
        assert line.size is None
        assert line.quantity == 2


class TestCartUpdateQuantity:

    def test_increment(self):
        cart, _ = _quiet_cart([_line("a", qty=1)])
        cart.update_quantity("a", 2)
        assert cart.count == 3
        _assert_consistent(cart)

    def test_reducing_to_zero_removes_line(self):
        cart, _ = _quiet_cart([_line("a", qty=2), _line("b", qty=1)])
        cart.update_quantity("a", -2)

        assert [item.product_id for item in cart.items] == ["b"]
        _assert_consistent(cart)

    def test_reducing_below_zero_removes_line(self):
        cart, _ = _quiet_cart([_line("a", qty=1)])
        cart.update_quantity("a", -5)
        assert cart.is_empty
        assert cart.total == Money.zero()

    def test_without_size_touches_every_variant(self):
        cart, _ = _quiet_cart([_line("a", size="M"), _line("a", size="L")])
        cart.update_quantity("a", 1)
        assert [item.quantity for item in cart.items] == [2, 2]

    def test_with_size_touches_one_variant(self):
        cart, _ = _quiet_cart([_line("a", size="M"), _line("a", size="L")])
        cart.update_quantity("a", 1, size="L")
        assert [item.quantity for item in cart.items] == [1, 2]

    def test_unknown_product_is_a_no_op(self):
        cart, _ = _quiet_cart([_line("a")])
        cart.update_quantity("zzz", 3)
        assert cart.count == 1


class TestCartRemoveAndClear:

    def test_remove_item(self):
        cart, messages = _quiet_cart([_line("a"), _line("b")])
        cart.remove_item("a")

        assert [item.product_id for item in cart.items] == ["b"]
        assert messages == ["Item removed from cart"]
        _assert_consistent(cart)

    def test_remove_one_variant(self):
        cart, _ = _quiet_cart([_line("a", size="M"), _line("a", size="L")])
        cart.remove_item("a", size="M")
        assert [item.size for item in cart.items] == ["L"]

    def test_clear(self):
        cart, _ = _quiet_cart([_line("a", qty=3), _line("b")])
        cart.clear()

        assert cart.is_empty
        assert cart.count == 0
        assert cart.total == Money.zero()


class TestCartTotals:

    def test_total_is_sum_of_price_times_quantity(self):
        cart, _ = _quiet_cart()
        cart.add(_line("a", price="100.00"), quantity=2)
        cart.add(_line("b", price="50.00"), quantity=1)

        assert cart.count == 3
        assert cart.total == Money.of("250.00")

    def test_zero_quantity_lines_dropped_on_load(self):
        cart, _ = _quiet_cart([_line("a", qty=0), _line("b", qty=1)])
        assert len(cart) == 1

    def test_default_notifier_logs(self, caplog):
        cart = Cart()
        with caplog.at_level("INFO", logger="storefront.domain.model.cart"):
            cart.add(_line("a"))
        assert "Product a added to cart" in caplog.text


class TestCartOperationSequences:

    PRICES = {"a": "19.99", "b": "5.00", "c": "120.50"}
    SIZES = [None, "S", "M"]

    def _step(self, rng: random.Random, cart: Cart, expected: dict) -> None:
        product_id = rng.choice(list(self.PRICES))
        size = rng.choice(self.SIZES)
        operation = rng.choice(["add", "add", "update", "remove"])

        if operation == "add":
            qty = rng.randint(1, 4)
            cart.add(_line(product_id, price=self.PRICES[product_id], size=size), quantity=qty)
            expected[(product_id, size)] = expected.get((product_id, size), 0) + qty
        elif operation == "update":
            delta = rng.randint(-3, 3)
            cart.update_quantity(product_id, delta, size=size)
            for key in [k for k in expected if k[0] == product_id and (size is None or k[1] == size)]:
                expected[key] = max(0, expected[key] + delta)
                if expected[key] == 0:
                    del expected[key]
        else:
            cart.remove_item(product_id, size=size)
            for key in [k for k in expected if k[0] == product_id and (size is None or k[1] == size)]:
                del expected[key]

    @pytest.mark.parametrize("seed", [1, 7, 42])
    def test_invariants_hold_after_every_step(self, seed):
        rng = random.Random(seed)
        cart, _ = _quiet_cart()
        expected: dict[tuple[str, str | None], int] = {}

        for _ in range(500):
            self._step(rng, cart, expected)

            _assert_consistent(cart)
            assert all(item.quantity > 0 for item in cart.items)
            keys = [item.key for item in cart.items]
            assert len(keys) == len(set(keys))
            assert {item.key: item.quantity for item in cart.items} == expected
