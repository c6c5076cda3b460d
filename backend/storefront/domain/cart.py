"""Cart aggregate operations.

Each function takes the current cart and returns a new one; the input is
never mutated and nothing here touches the database. Every mutation ends by
calling ``recalculate_totals`` so ``totalItems`` and ``totalPrice`` always
match the lines.
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Optional

from storefront.errors import InvalidQuantity, ItemNotFound, QuantityLimitExceeded
from storefront.models.cart import MAX_QUANTITY_PER_ITEM, Cart, CartItem
from storefront.models.product import Product
from storefront.utils.helpers import round_money, utcnow


def line_total(item: CartItem) -> float:
    return round_money(item.price * item.quantity)


def recalculate_totals(cart: Cart, now: Optional[datetime] = None) -> Cart:
    """Return ``cart`` with totals derived from its current lines."""
    total_items = sum(item.quantity for item in cart.items)
    total_price = round_money(sum(item.price * item.quantity for item in cart.items))
    return cart.model_copy(
        update={
            "totalItems": total_items,
            "totalPrice": total_price,
            "updatedAt": now or utcnow(),
        }
    )


def add_item(
    cart: Cart,
    product_id: str,
    quantity: int,
    unit_price: float,
    now: Optional[datetime] = None,
) -> Cart:
    """Add ``quantity`` units of a product, merging into an existing line."""
    now = now or utcnow()
    if quantity < 1:
        raise InvalidQuantity(quantity)

    existing = cart.find_item(product_id)
    if existing is not None:
        new_quantity = existing.quantity + quantity
        if new_quantity > MAX_QUANTITY_PER_ITEM:
            raise QuantityLimitExceeded(MAX_QUANTITY_PER_ITEM, adding=True)
        items = [
            item.model_copy(update={"quantity": new_quantity, "addedAt": now})
            if item.productId == product_id
            else item
            for item in cart.items
        ]
    else:
        if quantity > MAX_QUANTITY_PER_ITEM:
            raise QuantityLimitExceeded(MAX_QUANTITY_PER_ITEM, adding=True)
        new_item = CartItem(productId=product_id, quantity=quantity, price=unit_price, addedAt=now)
        items = [*cart.items, new_item]

    return recalculate_totals(cart.model_copy(update={"items": items}), now)


def update_item_quantity(
    cart: Cart,
    product_id: str,
    quantity: int,
    now: Optional[datetime] = None,
) -> Cart:
    """Set the quantity of an existing line; zero or less removes it."""
    now = now or utcnow()
    if cart.find_item(product_id) is None:
        raise ItemNotFound(product_id)
    if quantity <= 0:
        return remove_item(cart, product_id, now)
    if quantity > MAX_QUANTITY_PER_ITEM:
        raise QuantityLimitExceeded(MAX_QUANTITY_PER_ITEM)

    items = [
        item.model_copy(update={"quantity": quantity, "addedAt": now})
        if item.productId == product_id
        else item
        for item in cart.items
    ]
    return recalculate_totals(cart.model_copy(update={"items": items}), now)


def remove_item(cart: Cart, product_id: str, now: Optional[datetime] = None) -> Cart:
    """Drop a line. Removing a product that is not in the cart is a no-op."""
    items = [item for item in cart.items if item.productId != product_id]
    return recalculate_totals(cart.model_copy(update={"items": items}), now)


def clear_cart(cart: Cart, now: Optional[datetime] = None) -> Cart:
    return recalculate_totals(cart.model_copy(update={"items": []}), now)


def filter_purchasable(cart: Cart, products: Mapping[str, Product]) -> Cart:
    """Keep only lines whose product exists, is active and is in stock."""
    items = [
        item
        for item in cart.items
        if item.productId in products and products[item.productId].is_purchasable
    ]
    return recalculate_totals(cart.model_copy(update={"items": items}), cart.updatedAt)
