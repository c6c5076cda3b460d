"""Tests for the cart service against an in-memory database."""

import pytest

from storefront.database.cart_store import cart_store
from storefront.errors import (
    CartNotFound,
    InsufficientStock,
    InvalidQuantity,
    ProductNotFound,
    ProductUnavailable,
    QuantityLimitExceeded,
)
from storefront.models.product import ProductUpdate
from storefront.services.cart_service import cart_service
from storefront.services.catalog_service import catalog_service

USER = "user_001"


class TestGetCart:
    async def test_created_on_first_access(self, db):
        assert await cart_store.get_cart(USER) is None

        view = await cart_service.get_cart(USER)

        assert view.userId == USER
        assert view.items == []
        assert view.totalItems == 0
        assert await cart_store.get_cart(USER) is not None

    async def test_view_hides_unavailable_lines_without_rewriting_cart(self, db, make_product):
        keep = await make_product("Keep", price=10.0)
        gone = await make_product("Gone", price=20.0)
        await cart_service.add_to_cart(USER, keep.productId, 1)
        await cart_service.add_to_cart(USER, gone.productId, 2)

        await catalog_service.deactivate_product(gone.productId)
        view = await cart_service.get_cart(USER)

        assert [line.productId for line in view.items] == [keep.productId]
        assert view.totalItems == 1
        assert view.totalPrice == 10.0
        stored = await cart_store.get_cart(USER)
        assert len(stored.items) == 2

    async def test_view_carries_live_product_data(self, db, make_product):
        product = await make_product("Lamp", price=40.0)
        await cart_service.add_to_cart(USER, product.productId, 2)
        await catalog_service.update_product(product.productId, ProductUpdate(price=45.0))

        view = await cart_service.get_cart(USER)
        line = view.items[0]

        assert line.price == 40.0
        assert line.product.price == 45.0
        assert line.lineTotal == 80.0


class TestAddToCart:
    async def test_adds_at_current_price(self, db, make_product):
        product = await make_product(price=99.99, stock=5)

        view = await cart_service.add_to_cart(USER, product.productId, 2)

        assert view.totalItems == 2
        assert view.totalPrice == 199.98
        assert view.items[0].price == 99.99

    async def test_merges_lines(self, db, make_product):
        product = await make_product(stock=10)
        await cart_service.add_to_cart(USER, product.productId, 2)
        view = await cart_service.add_to_cart(USER, product.productId, 3)

        assert len(view.items) == 1
        assert view.items[0].quantity == 5

    async def test_missing_product(self, db):
        with pytest.raises(ProductNotFound):
            await cart_service.add_to_cart(USER, "missing", 1)

    async def test_inactive_product(self, db, make_product):
        product = await make_product()
        await catalog_service.deactivate_product(product.productId)

        with pytest.raises(ProductUnavailable):
            await cart_service.add_to_cart(USER, product.productId, 1)

    async def test_insufficient_stock(self, db, make_product):
        product = await make_product(stock=2)
        with pytest.raises(InsufficientStock) as exc_info:
            await cart_service.add_to_cart(USER, product.productId, 3)
        assert exc_info.value.message == "Only 2 items available in stock"

    async def test_stock_checked_against_combined_quantity(self, db, make_product):
        product = await make_product(stock=4)
        await cart_service.add_to_cart(USER, product.productId, 3)

        with pytest.raises(InsufficientStock):
            await cart_service.add_to_cart(USER, product.productId, 2)

    async def test_limit_per_line(self, db, make_product):
        product = await make_product(stock=50)
        await cart_service.add_to_cart(USER, product.productId, 8)

        with pytest.raises(QuantityLimitExceeded):
            await cart_service.add_to_cart(USER, product.productId, 3)
        stored = await cart_store.get_cart(USER)
        assert stored.items[0].quantity == 8


class TestUpdateAndRemove:
    async def test_update_quantity(self, db, make_product):
        product = await make_product(price=10.0, stock=10)
        await cart_service.add_to_cart(USER, product.productId, 1)

        view = await cart_service.update_cart_item(USER, product.productId, 4)

        assert view.totalItems == 4
        assert view.totalPrice == 40.0

    @pytest.mark.parametrize("quantity", [0, -1])
    async def test_update_rejects_below_one(self, db, make_product, quantity):
        product = await make_product()
        await cart_service.add_to_cart(USER, product.productId, 1)

        with pytest.raises(InvalidQuantity):
            await cart_service.update_cart_item(USER, product.productId, quantity)

    async def test_update_rejects_above_limit(self, db, make_product):
        product = await make_product(stock=50)
        await cart_service.add_to_cart(USER, product.productId, 1)

        with pytest.raises(QuantityLimitExceeded):
            await cart_service.update_cart_item(USER, product.productId, 11)

    async def test_update_without_cart(self, db, make_product):
        product = await make_product()
        with pytest.raises(CartNotFound):
            await cart_service.update_cart_item(USER, product.productId, 1)

    async def test_remove_twice(self, db, make_product):
        a = await make_product("A", price=10.0)
        b = await make_product("B", price=5.0)
        await cart_service.add_to_cart(USER, a.productId, 1)
        await cart_service.add_to_cart(USER, b.productId, 1)

        await cart_service.remove_from_cart(USER, a.productId)
        view = await cart_service.remove_from_cart(USER, a.productId)

        assert [line.productId for line in view.items] == [b.productId]
        assert view.totalPrice == 5.0

    async def test_clear(self, db, make_product):
        product = await make_product()
        await cart_service.add_to_cart(USER, product.productId, 2)

        view = await cart_service.clear_cart(USER)

        assert view.items == []
        stored = await cart_store.get_cart(USER)
        assert stored.items == []
        assert stored.totalItems == 0
        assert stored.totalPrice == 0.0

    async def test_clear_without_cart(self, db):
        with pytest.raises(CartNotFound):
            await cart_service.clear_cart(USER)
