"""Cart service: loads carts, applies cart operations and saves the result."""

import logging

from storefront.database.cart_store import cart_store
from storefront.database.catalog_store import catalog_store
from storefront.domain import cart as cart_ops
from storefront.errors import (
    CartNotFound,
    InsufficientStock,
    InvalidQuantity,
    ProductUnavailable,
    QuantityLimitExceeded,
)
from storefront.models.cart import MAX_QUANTITY_PER_ITEM, Cart, CartLineView, CartView
from storefront.models.product import ProductSummary
from storefront.services.catalog_service import catalog_service

logger = logging.getLogger(__name__)


class CartService:
    """Cart operations for the signed-in user."""

    @staticmethod
    async def build_view(cart: Cart) -> CartView:
        """Resolve lines against the live catalog, hiding unpurchasable ones.

        The stored cart is left as it is; only the returned view is filtered.
        """
        products = await catalog_store.get_products([item.productId for item in cart.items])
        visible = cart_ops.filter_purchasable(cart, products)
        lines = [
            CartLineView(
                **item.model_dump(),
                product=ProductSummary.from_product(products[item.productId]),
                lineTotal=cart_ops.line_total(item),
            )
            for item in visible.items
        ]
        return CartView(
            userId=cart.userId,
            items=lines,
            totalItems=visible.totalItems,
            totalPrice=visible.totalPrice,
            updatedAt=cart.updatedAt,
        )

    @staticmethod
    async def _require_cart(user_id: str) -> Cart:
        cart = await cart_store.get_cart(user_id)
        if cart is None:
            raise CartNotFound(user_id)
        return cart

    @staticmethod
    async def get_cart(user_id: str) -> CartView:
        cart = await cart_store.get_or_create_cart(user_id)
        return await CartService.build_view(cart)

    @staticmethod
    async def add_to_cart(user_id: str, product_id: str, quantity: int = 1) -> CartView:
        """Add a product at its current price."""
        product = await catalog_service.get_product(product_id)
        if not product.is_active:
            raise ProductUnavailable(product_id)

        cart = await cart_store.get_cart(user_id) or Cart(userId=user_id)
        existing = cart.find_item(product_id)
        wanted = quantity + (existing.quantity if existing else 0)
        if product.stock < wanted:
            raise InsufficientStock(product_id, available=product.stock)

        cart = cart_ops.add_item(cart, product_id, quantity, product.price)
        await cart_store.save_cart(cart)
        logger.info("User %s added %d x %s to cart", user_id, quantity, product_id)
        return await CartService.build_view(cart)

    @staticmethod
    async def update_cart_item(user_id: str, product_id: str, quantity: int) -> CartView:
        if quantity < 1:
            raise InvalidQuantity(quantity)
        if quantity > MAX_QUANTITY_PER_ITEM:
            raise QuantityLimitExceeded(MAX_QUANTITY_PER_ITEM)

        product = await catalog_service.get_product(product_id)
        if product.stock < quantity:
            raise InsufficientStock(product_id, available=product.stock)

        cart = await CartService._require_cart(user_id)
        cart = cart_ops.update_item_quantity(cart, product_id, quantity)
        await cart_store.save_cart(cart)
        return await CartService.build_view(cart)

    @staticmethod
    async def remove_from_cart(user_id: str, product_id: str) -> CartView:
        cart = await CartService._require_cart(user_id)
        cart = cart_ops.remove_item(cart, product_id)
        await cart_store.save_cart(cart)
        return await CartService.build_view(cart)

    @staticmethod
    async def clear_cart(user_id: str) -> CartView:
        cart = await CartService._require_cart(user_id)
        cart = cart_ops.clear_cart(cart)
        await cart_store.save_cart(cart)
        logger.info("Cleared cart for user %s", user_id)
        return await CartService.build_view(cart)


# Global cart service instance
cart_service = CartService()
