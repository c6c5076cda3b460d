"""Order aggregate: creation from a cart snapshot and the status state machine.

Like the cart functions, these return new ``Order`` instances and leave
persistence to ``storefront.database.order_store``.
"""

from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Optional

from storefront.errors import OrderNotCancellable
from storefront.models.cart import Cart
from storefront.models.order import (
    AppliedCoupon,
    Order,
    OrderItem,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    Pricing,
    ShippingAddress,
    StatusHistoryEntry,
)
from storefront.models.product import Product
from storefront.utils.helpers import round_money, utcnow

NON_CANCELLABLE_STATUSES = frozenset(
    {OrderStatus.SHIPPED.value, OrderStatus.DELIVERED.value, OrderStatus.CANCELLED.value}
)

# Legal next states per status. None means any transition is allowed.
ALLOWED_TRANSITIONS: Optional[Mapping[str, frozenset[str]]] = None


def format_order_number(created_at: datetime, sequence: int) -> str:
    """Order reference: creation time in epoch millis plus the sequence number."""
    millis = int(created_at.timestamp() * 1000)
    return f"ORD{millis}{sequence:04d}"


def snapshot_items(cart: Cart, products: Mapping[str, Product]) -> list[OrderItem]:
    """Freeze each cart line with the product's name and image as of now."""
    items = []
    for line in cart.items:
        product = products[line.productId]
        items.append(
            OrderItem(
                productId=line.productId,
                name=product.name,
                image=product.primary_image,
                unitPrice=line.price,
                quantity=line.quantity,
                lineTotal=round_money(line.price * line.quantity),
            )
        )
    return items


def create_order(
    *,
    user_id: str,
    order_number: str,
    items: list[OrderItem],
    shipping_address: ShippingAddress,
    payment_method: PaymentMethod,
    pricing: Pricing,
    coupon_code: Optional[str] = None,
    notes: Optional[str] = None,
    delivery_days: int = 7,
    estimated_delivery: Optional[datetime] = None,
    now: Optional[datetime] = None,
) -> Order:
    """Build a new pending order with a one-entry status history."""
    now = now or utcnow()
    coupon = AppliedCoupon(code=coupon_code, discount=pricing.discount) if coupon_code else None
    return Order(
        orderNumber=order_number,
        userId=user_id,
        items=items,
        shippingAddress=shipping_address,
        paymentMethod=payment_method,
        orderStatus=OrderStatus.PENDING,
        statusHistory=[StatusHistoryEntry(status=OrderStatus.PENDING, date=now, note="Order created")],
        pricing=pricing,
        coupon=coupon,
        notes=notes,
        estimatedDelivery=estimated_delivery or now + timedelta(days=delivery_days),
        createdAt=now,
        updatedAt=now,
    )


def check_transition(current: str, new: str) -> None:
    """Hook for restricting status transitions.

    Every transition is currently allowed, including skips such as
    ``pending -> delivered``; admins use those to correct orders by hand.
    """
    if ALLOWED_TRANSITIONS is None:
        return
    allowed = ALLOWED_TRANSITIONS.get(current, frozenset())
    if new not in allowed:
        raise ValueError(f"Illegal order status transition: {current} -> {new}")


def apply_status_change(
    order: Order,
    new_status: OrderStatus | str,
    note: str = "",
    now: Optional[datetime] = None,
) -> Order:
    """Move an order to ``new_status`` and append the change to its history."""
    now = now or utcnow()
    new_status = OrderStatus(new_status).value
    check_transition(order.orderStatus, new_status)

    update: dict = {
        "orderStatus": new_status,
        "statusHistory": [
            *order.statusHistory,
            StatusHistoryEntry(status=new_status, date=now, note=note or ""),
        ],
        "updatedAt": now,
    }

    if new_status == OrderStatus.DELIVERED.value:
        if order.paymentMethod == PaymentMethod.CASH_ON_DELIVERY.value:
            update["paymentStatus"] = PaymentStatus.PAID.value
            update["paymentDetails"] = order.paymentDetails.model_copy(
                update={"paymentDate": now, "amount": order.pricing.total}
            )
        if order.actualDelivery is None:
            update["actualDelivery"] = now

    return order.model_copy(update=update)


def can_cancel(order: Order) -> bool:
    return order.orderStatus not in NON_CANCELLABLE_STATUSES


def cancel_order(order: Order, reason: str = "", now: Optional[datetime] = None) -> Order:
    """Cancel an order that has not shipped yet, recording the reason.

    The cancelled order no longer holds stock; callers return whatever
    ``order.stockReserved`` says it held.
    """
    if not can_cancel(order):
        raise OrderNotCancellable(order.orderId, order.orderStatus)
    cancelled = apply_status_change(order, OrderStatus.CANCELLED, reason, now)
    return cancelled.model_copy(update={"cancelReason": reason, "stockReserved": False})


def stock_lines(order: Order) -> list[tuple[str, int]]:
    """``(product_id, quantity)`` pairs the order takes from stock."""
    return [(item.productId, item.quantity) for item in order.items]
