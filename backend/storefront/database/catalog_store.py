"""Product persistence, including the atomic stock counters."""

import logging
import re
from typing import Any, Optional

from pymongo import ReturnDocument

from storefront.config import get_settings
from storefront.database.mongodb import mongodb
from storefront.models.product import Product, ProductStatus, Ratings
from storefront.utils.helpers import utcnow

logger = logging.getLogger(__name__)
settings = get_settings()

SORT_OPTIONS: dict[str, list[tuple[str, int]]] = {
    "price-asc": [("price", 1)],
    "price-desc": [("price", -1)],
    "rating": [("ratings.average", -1)],
    "newest": [("createdAt", -1)],
    "name": [("name", 1)],
}


class CatalogStore:
    """Read and write access to the products collection."""

    @staticmethod
    def _products():
        return mongodb.collection(settings.mongodb_product_collection)

    async def create_product(self, product: Product) -> Product:
        await self._products().insert_one(product.model_dump())
        return product

    async def get_product(self, product_id: str) -> Optional[Product]:
        data = await self._products().find_one({"productId": product_id}, {"_id": 0})
        if data:
            return Product(**data)
        return None

    async def get_products(self, product_ids: list[str]) -> dict[str, Product]:
        """Fetch several products at once, keyed by productId."""
        if not product_ids:
            return {}
        cursor = self._products().find({"productId": {"$in": list(product_ids)}}, {"_id": 0})
        docs = await cursor.to_list(length=None)
        return {doc["productId"]: Product(**doc) for doc in docs}

    async def update_product(self, product_id: str, fields: dict[str, Any]) -> Optional[Product]:
        fields = {**fields, "updatedAt": utcnow()}
        data = await self._products().find_one_and_update(
            {"productId": product_id},
            {"$set": fields},
            projection={"_id": 0},
            return_document=ReturnDocument.AFTER,
        )
        if data:
            return Product(**data)
        return None

    async def reserve_stock(self, product_id: str, quantity: int) -> bool:
        """Decrement stock only if at least ``quantity`` units remain.

        Success is read from the write result, not from the returned
        document: taking the last units leaves ``stock`` at 0, which is a
        valid reservation.
        """
        result = await self._products().update_one(
            {"productId": product_id, "stock": {"$gte": quantity}},
            {"$inc": {"stock": -quantity}, "$set": {"updatedAt": utcnow()}},
        )
        if result.modified_count != 1:
            logger.warning("Stock reservation refused for %s (quantity=%d)", product_id, quantity)
            return False
        return True

    async def release_stock(self, product_id: str, quantity: int) -> None:
        """Return ``quantity`` units to stock."""
        result = await self._products().update_one(
            {"productId": product_id},
            {"$inc": {"stock": quantity}, "$set": {"updatedAt": utcnow()}},
        )
        if not result.matched_count:
            logger.warning("Stock release skipped, product %s no longer exists", product_id)

    async def reserve_all(self, lines: list[tuple[str, int]]) -> Optional[str]:
        """Reserve every ``(product_id, quantity)`` line or none of them.

        Returns None on success, otherwise the refused product id after the
        lines already reserved have been released.
        """
        taken: list[tuple[str, int]] = []
        for product_id, quantity in lines:
            if not await self.reserve_stock(product_id, quantity):
                await self.release_all(taken)
                return product_id
            taken.append((product_id, quantity))
        return None

    async def release_all(self, lines: list[tuple[str, int]]) -> None:
        for product_id, quantity in lines:
            await self.release_stock(product_id, quantity)

    async def set_ratings(self, product_id: str, ratings: Ratings) -> None:
        await self._products().update_one(
            {"productId": product_id},
            {"$set": {"ratings": ratings.model_dump(), "updatedAt": utcnow()}},
        )

    async def list_products(
        self,
        *,
        category: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        min_rating: Optional[float] = None,
        brand: Optional[str] = None,
        in_stock: bool = False,
        search: Optional[str] = None,
        sort: str = "newest",
        skip: int = 0,
        limit: int = 12,
    ) -> tuple[list[Product], int]:
        """List active products matching the filters, with the total match count."""
        query: dict[str, Any] = {"status": ProductStatus.ACTIVE.value}
        if category and category != "all":
            query["category"] = category
        if min_price is not None or max_price is not None:
            query["price"] = {}
            if min_price is not None:
                query["price"]["$gte"] = min_price
            if max_price is not None:
                query["price"]["$lte"] = max_price
        if min_rating is not None:
            query["ratings.average"] = {"$gte": min_rating}
        if brand:
            query["brand"] = brand
        if in_stock:
            query["stock"] = {"$gt": 0}
        if search:
            pattern = {"$regex": re.escape(search), "$options": "i"}
            query["$or"] = [{"name": pattern}, {"description": pattern}, {"tags": pattern}]

        cursor = self._products().find(
            query,
            {"_id": 0},
            sort=SORT_OPTIONS.get(sort, SORT_OPTIONS["newest"]),
            skip=skip,
            limit=limit,
        )
        docs = await cursor.to_list(length=limit)
        total = await self._products().count_documents(query)
        return [Product(**doc) for doc in docs], total


# Global catalog store instance
catalog_store = CatalogStore()
