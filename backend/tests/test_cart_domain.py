"""Tests for the cart aggregate functions."""

import pytest

from storefront.domain import cart as cart_ops
from storefront.errors import InvalidQuantity, ItemNotFound, QuantityLimitExceeded
from storefront.models.cart import Cart
from storefront.models.product import Product, ProductStatus


def _totals_match(cart: Cart) -> bool:
    expected_items = sum(item.quantity for item in cart.items)
    expected_price = round(sum(item.price * item.quantity for item in cart.items), 2)
    return cart.totalItems == expected_items and cart.totalPrice == expected_price


@pytest.fixture
def cart():
    return Cart(userId="user_001")


class TestAddItem:
    def test_adds_new_line(self, cart):
        updated = cart_ops.add_item(cart, "p1", 2, 100.0)

        assert len(updated.items) == 1
        assert updated.items[0].quantity == 2
        assert updated.totalItems == 2
        assert updated.totalPrice == 200.0

    def test_does_not_mutate_input(self, cart):
        cart_ops.add_item(cart, "p1", 2, 100.0)
        assert cart.items == []
        assert cart.totalItems == 0

    def test_merges_existing_line(self, cart):
        cart = cart_ops.add_item(cart, "p1", 2, 100.0)
        cart = cart_ops.add_item(cart, "p1", 3, 100.0)

        assert len(cart.items) == 1
        assert cart.items[0].quantity == 5
        assert cart.totalPrice == 500.0

    def test_keeps_price_of_existing_line(self, cart):
        cart = cart_ops.add_item(cart, "p1", 1, 100.0)
        cart = cart_ops.add_item(cart, "p1", 1, 120.0)
        assert cart.items[0].price == 100.0

    def test_rejects_merge_above_limit(self, cart):
        cart = cart_ops.add_item(cart, "p1", 8, 10.0)
        with pytest.raises(QuantityLimitExceeded) as exc_info:
            cart_ops.add_item(cart, "p1", 3, 10.0)
        assert "Cannot add more than 10" in exc_info.value.message

    def test_merge_up_to_limit_is_allowed(self, cart):
        cart = cart_ops.add_item(cart, "p1", 8, 10.0)
        cart = cart_ops.add_item(cart, "p1", 2, 10.0)
        assert cart.items[0].quantity == 10

    def test_rejects_zero_quantity(self, cart):
        with pytest.raises(InvalidQuantity):
            cart_ops.add_item(cart, "p1", 0, 10.0)

    def test_totals_follow_lines(self, cart):
        cart = cart_ops.add_item(cart, "p1", 3, 19.99)
        cart = cart_ops.add_item(cart, "p2", 1, 0.01)
        cart = cart_ops.add_item(cart, "p3", 7, 5.5)

        assert _totals_match(cart)
        assert cart.totalItems == 11
        assert cart.totalPrice == 98.48


class TestUpdateItemQuantity:
    def test_sets_quantity(self, cart):
        cart = cart_ops.add_item(cart, "p1", 2, 50.0)
        cart = cart_ops.update_item_quantity(cart, "p1", 4)

        assert cart.items[0].quantity == 4
        assert cart.totalPrice == 200.0

    def test_zero_removes_line(self, cart):
        cart = cart_ops.add_item(cart, "p1", 2, 50.0)
        cart = cart_ops.update_item_quantity(cart, "p1", 0)

        assert cart.items == []
        assert cart.totalItems == 0
        assert cart.totalPrice == 0.0

    def test_rejects_above_limit(self, cart):
        cart = cart_ops.add_item(cart, "p1", 2, 50.0)
        with pytest.raises(QuantityLimitExceeded) as exc_info:
            cart_ops.update_item_quantity(cart, "p1", 11)
        assert exc_info.value.message == "Quantity cannot exceed 10 per item"

    def test_missing_line(self, cart):
        with pytest.raises(ItemNotFound):
            cart_ops.update_item_quantity(cart, "missing", 1)


class TestRemoveAndClear:
    def test_remove_is_idempotent(self, cart):
        cart = cart_ops.add_item(cart, "p1", 1, 10.0)
        cart = cart_ops.add_item(cart, "p2", 1, 20.0)

        once = cart_ops.remove_item(cart, "p1")
        twice = cart_ops.remove_item(once, "p1")

        assert [item.productId for item in twice.items] == ["p2"]
        assert twice.totalItems == once.totalItems == 1
        assert twice.totalPrice == once.totalPrice == 20.0

    def test_remove_missing_product_is_noop(self, cart):
        cart = cart_ops.add_item(cart, "p1", 1, 10.0)
        updated = cart_ops.remove_item(cart, "other")
        assert updated.items == cart.items

    def test_clear(self, cart):
        cart = cart_ops.add_item(cart, "p1", 3, 10.0)
        cleared = cart_ops.clear_cart(cart)

        assert cleared.items == []
        assert cleared.totalItems == 0
        assert cleared.totalPrice == 0.0


class TestFilterPurchasable:
    def _product(self, product_id, stock=5, status=ProductStatus.ACTIVE):
        return Product(
            productId=product_id,
            name=product_id,
            description="desc",
            price=10.0,
            category="Books",
            stock=stock,
            status=status,
        )

    def test_drops_missing_inactive_and_out_of_stock(self, cart):
        for product_id in ("ok", "gone", "inactive", "empty"):
            cart = cart_ops.add_item(cart, product_id, 1, 10.0)
        products = {
            "ok": self._product("ok"),
            "inactive": self._product("inactive", status=ProductStatus.INACTIVE),
            "empty": self._product("empty", stock=0),
        }

        visible = cart_ops.filter_purchasable(cart, products)

        assert [item.productId for item in visible.items] == ["ok"]
        assert visible.totalItems == 1
        assert visible.totalPrice == 10.0
        assert len(cart.items) == 4
