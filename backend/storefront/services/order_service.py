"""Order service: order history, cancellation and admin status changes."""

import logging
from typing import Optional

from storefront.config import get_settings
from storefront.database.catalog_store import catalog_store
from storefront.database.order_store import order_store
from storefront.domain import order as order_ops
from storefront.errors import InsufficientStock, OrderNotFound, OrderStateConflict
from storefront.models.order import Order, OrderStats, OrderStatus
from storefront.models.request import OrderPage, Pagination
from storefront.utils.helpers import round_money, total_pages

logger = logging.getLogger(__name__)
settings = get_settings()


def _item_name(order: Order, product_id: str) -> str:
    return next(item.name for item in order.items if item.productId == product_id)


class OrderService:
    """Order lifecycle after checkout."""

    @staticmethod
    async def list_orders(
        user_id: str,
        page: int = 1,
        limit: Optional[int] = None,
        status: Optional[str] = None,
    ) -> OrderPage:
        limit = min(limit or settings.default_page_size, settings.max_page_size)
        orders, total = await order_store.list_orders(
            user_id, status=status, skip=(page - 1) * limit, limit=limit
        )
        return OrderPage(
            orders=orders,
            pagination=Pagination(
                page=page, limit=limit, total=total, totalPages=total_pages(total, limit)
            ),
        )

    @staticmethod
    async def get_order(user_id: str, order_id: str) -> Order:
        """Owner-only lookup; someone else's order looks like a missing one."""
        order = await order_store.get_order(order_id, user_id=user_id)
        if order is None:
            raise OrderNotFound(order_id)
        return order

    @staticmethod
    async def _cancel(order: Order, reason: str) -> Order:
        cancelled = order_ops.cancel_order(order, reason)
        if not await order_store.save_transition(order, cancelled):
            raise OrderStateConflict(order.orderId)

        # An order cancelled mid-checkout holds no stock yet
        if order.stockReserved:
            await catalog_store.release_all(order_ops.stock_lines(order))

        logger.info(
            "Order %s cancelled, stock restored: %s",
            order.orderNumber,
            order.stockReserved,
        )
        return cancelled

    @staticmethod
    async def cancel_order(user_id: str, order_id: str, reason: str = "") -> Order:
        order = await OrderService.get_order(user_id, order_id)
        return await OrderService._cancel(order, reason)

    @staticmethod
    async def update_status(
        order_id: str,
        status: OrderStatus | str,
        note: str = "",
        tracking_number: Optional[str] = None,
    ) -> Order:
        """Admin status change.

        Cancelling goes through the stock-restoring path; moving a cancelled
        order back to an active status takes its stock again, or fails with
        ``InsufficientStock`` and leaves the order cancelled.
        """
        order = await order_store.get_order(order_id)
        if order is None:
            raise OrderNotFound(order_id)

        status = OrderStatus(status)
        if status == OrderStatus.CANCELLED:
            return await OrderService._cancel(order, note)

        updated = order_ops.apply_status_change(order, status, note)
        if tracking_number:
            updated = updated.model_copy(update={"trackingNumber": tracking_number})

        retaken: list[tuple[str, int]] = []
        if order.orderStatus == OrderStatus.CANCELLED.value and not order.stockReserved:
            retaken = order_ops.stock_lines(order)
            refused = await catalog_store.reserve_all(retaken)
            if refused is not None:
                raise InsufficientStock(refused, name=_item_name(order, refused))
            updated = updated.model_copy(update={"stockReserved": True})

        if not await order_store.save_transition(order, updated):
            await catalog_store.release_all(retaken)
            raise OrderStateConflict(order_id)

        logger.info(
            "Order %s status %s -> %s",
            order.orderNumber,
            order.orderStatus,
            updated.orderStatus,
        )
        return updated

    @staticmethod
    async def order_stats(user_id: str) -> OrderStats:
        stats = OrderStats()
        for row in await order_store.status_totals(user_id):
            stats.totalOrders += row["count"]
            stats.totalSpent += row["spent"]
            if row["_id"] == OrderStatus.PENDING.value:
                stats.pendingOrders = row["count"]
            elif row["_id"] == OrderStatus.DELIVERED.value:
                stats.completedOrders = row["count"]
            elif row["_id"] == OrderStatus.CANCELLED.value:
                stats.cancelledOrders = row["count"]
        stats.totalSpent = round_money(stats.totalSpent)
        return stats


# Global order service instance
order_service = OrderService()
