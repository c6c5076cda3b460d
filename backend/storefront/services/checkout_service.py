"""Checkout: turns a user's cart into an order and takes the stock.

The order, the stock counters and the cart live in separate documents and
are written without a multi-document transaction, in this order:

1. insert the pending order with ``stockReserved`` unset,
2. decrement stock line by line with a conditional atomic update,
3. set ``stockReserved`` on the order,
4. empty the cart.

A crash between steps leaves an order whose stock or cart still needs
reconciling, never taken stock without an order. If a decrement is refused
because another checkout took the last units, the decrements already made
are released and the order is removed before ``InsufficientStock`` is
raised.

The order is visible to its owner from step 1, so it can be cancelled while
stock is still being taken. Cancelling releases stock only when
``stockReserved`` is set, and step 3 is refused for a cancelled order, in
which case checkout hands the stock back itself.
"""

import logging
from typing import Optional

from storefront.config import get_settings
from storefront.database.cart_store import cart_store
from storefront.database.catalog_store import catalog_store
from storefront.database.order_store import order_store
from storefront.domain import cart as cart_ops
from storefront.domain import order as order_ops
from storefront.domain.pricing import PricingRules, compute_pricing, validate_coupon
from storefront.errors import EmptyCart, InsufficientStock, OrderStateConflict, ProductUnavailable
from storefront.models.cart import Cart
from storefront.models.order import Order
from storefront.models.product import Product
from storefront.models.request import CheckoutRequest
from storefront.utils.helpers import utcnow

logger = logging.getLogger(__name__)
settings = get_settings()


class CheckoutService:
    """Cart-to-order conversion."""

    def __init__(self, rules: Optional[PricingRules] = None) -> None:
        self.rules = rules or PricingRules.from_settings(settings)

    @staticmethod
    def validate_lines(cart: Cart, products: dict[str, Product]) -> None:
        """Check every line against live catalog state before anything is written."""
        for item in cart.items:
            product = products.get(item.productId)
            if product is None or not product.is_active:
                raise ProductUnavailable(item.productId, product.name if product else None)
            if product.stock < item.quantity:
                raise InsufficientStock(item.productId, available=product.stock, name=product.name)

    async def checkout(self, user_id: str, request: CheckoutRequest) -> Order:
        """Place an order for everything in the user's cart."""
        cart = await cart_store.get_cart(user_id)
        if cart is None or not cart.items:
            raise EmptyCart()

        products = await catalog_store.get_products([item.productId for item in cart.items])
        self.validate_lines(cart, products)

        coupon_code = validate_coupon(request.couponCode, self.rules)
        subtotal = cart_ops.recalculate_totals(cart).totalPrice
        pricing = compute_pricing(subtotal, coupon_code, self.rules)

        now = utcnow()
        sequence = await order_store.next_order_sequence()
        order = order_ops.create_order(
            user_id=user_id,
            order_number=order_ops.format_order_number(now, sequence),
            items=order_ops.snapshot_items(cart, products),
            shipping_address=request.shippingAddress,
            payment_method=request.paymentMethod,
            pricing=pricing,
            coupon_code=coupon_code,
            notes=request.notes,
            delivery_days=settings.estimated_delivery_days,
            now=now,
        )

        await order_store.insert_order(order)
        logger.info(
            "Order %s created for user %s: %d lines, total %.2f",
            order.orderNumber,
            user_id,
            len(order.items),
            order.pricing.total,
        )

        await self._take_stock(order)
        order = order.model_copy(update={"stockReserved": True})

        await cart_store.save_cart(cart_ops.clear_cart(cart, now))
        return order

    async def _take_stock(self, order: Order) -> None:
        """Decrement stock for every line, undoing the whole order on refusal."""
        lines = order_ops.stock_lines(order)
        refused = await catalog_store.reserve_all(lines)
        if refused is not None:
            logger.warning(
                "Order %s lost the race for %s, rolled back its reserved lines",
                order.orderNumber,
                refused,
            )
            await order_store.delete_order(order.orderId)
            item = next(item for item in order.items if item.productId == refused)
            raise InsufficientStock(refused, name=item.name)

        if not await order_store.mark_stock_reserved(order.orderId):
            logger.warning(
                "Order %s was cancelled during checkout, returning its stock", order.orderNumber
            )
            await catalog_store.release_all(lines)
            raise OrderStateConflict(order.orderId)


# Global checkout service instance
checkout_service = CheckoutService()
