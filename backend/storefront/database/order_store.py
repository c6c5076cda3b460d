"""Order persistence.

Status changes are written as a guarded ``$set`` plus a ``$push`` of the new
history entry, so stored history is only ever appended to. The guard covers
both ``orderStatus`` and ``stockReserved``: a change computed from a snapshot
is refused once either has moved on.
"""

import logging
from typing import Any, Optional

from storefront.config import get_settings
from storefront.database.mongodb import ORDER_NUMBER_SEQUENCE, mongodb
from storefront.models.order import Order, OrderStatus

logger = logging.getLogger(__name__)
settings = get_settings()

# Fields a status change may touch besides the history
_TRANSITION_FIELDS = (
    "orderStatus",
    "paymentStatus",
    "paymentDetails",
    "actualDelivery",
    "cancelReason",
    "trackingNumber",
    "stockReserved",
    "updatedAt",
)


class OrderStore:
    """Read and write access to the orders collection."""

    @staticmethod
    def _orders():
        return mongodb.collection(settings.mongodb_order_collection)

    async def next_order_sequence(self) -> int:
        return await mongodb.next_sequence(ORDER_NUMBER_SEQUENCE)

    async def insert_order(self, order: Order) -> Order:
        await self._orders().insert_one(order.model_dump())
        return order

    async def delete_order(self, order_id: str) -> bool:
        """Remove an order that never got its stock.

        Cancelled orders and orders holding stock are kept.
        """
        result = await self._orders().delete_one(
            {
                "orderId": order_id,
                "stockReserved": False,
                "orderStatus": {"$ne": OrderStatus.CANCELLED.value},
            }
        )
        return result.deleted_count > 0

    async def mark_stock_reserved(self, order_id: str) -> bool:
        """Record that checkout took the stock; refused once the order was cancelled."""
        result = await self._orders().update_one(
            {
                "orderId": order_id,
                "stockReserved": False,
                "orderStatus": {"$ne": OrderStatus.CANCELLED.value},
            },
            {"$set": {"stockReserved": True}},
        )
        return result.modified_count == 1

    async def get_order(self, order_id: str, user_id: Optional[str] = None) -> Optional[Order]:
        """Fetch an order; when ``user_id`` is given only the owner's order matches."""
        query: dict[str, Any] = {"orderId": order_id}
        if user_id is not None:
            query["userId"] = user_id
        data = await self._orders().find_one(query, {"_id": 0})
        if data:
            return Order(**data)
        return None

    async def save_transition(self, previous: Order, updated: Order) -> bool:
        """Persist a status change computed from ``previous``.

        Returns False when the stored order no longer has the status or the
        stock flag the change was computed from.
        """
        entry = updated.statusHistory[-1]
        data = updated.model_dump(include=set(_TRANSITION_FIELDS))
        result = await self._orders().update_one(
            {
                "orderId": previous.orderId,
                "orderStatus": previous.orderStatus,
                "stockReserved": previous.stockReserved,
            },
            {"$set": data, "$push": {"statusHistory": entry.model_dump()}},
        )
        return result.matched_count > 0

    async def list_orders(
        self,
        user_id: str,
        status: Optional[str] = None,
        skip: int = 0,
        limit: int = 10,
    ) -> tuple[list[Order], int]:
        """Newest-first page of a user's orders and the total match count."""
        query: dict[str, Any] = {"userId": user_id}
        if status and status != "all":
            query["orderStatus"] = status

        cursor = self._orders().find(
            query, {"_id": 0}, sort=[("createdAt", -1)], skip=skip, limit=limit
        )
        docs = await cursor.to_list(length=limit)
        total = await self._orders().count_documents(query)
        return [Order(**doc) for doc in docs], total

    async def status_totals(self, user_id: str) -> list[dict[str, Any]]:
        """Order count and amount spent per status for one user."""
        pipeline = [
            {"$match": {"userId": user_id}},
            {
                "$group": {
                    "_id": "$orderStatus",
                    "count": {"$sum": 1},
                    "spent": {"$sum": "$pricing.total"},
                }
            },
        ]
        cursor = self._orders().aggregate(pipeline)
        return await cursor.to_list(length=None)

    async def has_delivered_purchase(self, user_id: str, product_id: str) -> bool:
        data = await self._orders().find_one(
            {
                "userId": user_id,
                "items.productId": product_id,
                "orderStatus": OrderStatus.DELIVERED.value,
            },
            {"_id": 0, "orderId": 1},
        )
        return data is not None


# Global order store instance
order_store = OrderStore()
