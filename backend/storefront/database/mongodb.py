"""MongoDB database connection and shared operations."""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import ConnectionFailure

from storefront.config import get_settings
from storefront.errors import DatabaseNotConnected

logger = logging.getLogger(__name__)
settings = get_settings()

ORDER_NUMBER_SEQUENCE = "orderNumber"


class MongoDB:
    """MongoDB connection manager."""

    def __init__(self) -> None:
        """Initialize MongoDB connection."""
        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None

    async def connect(self) -> None:
        """Connect to MongoDB."""
        try:
            self.client = AsyncIOMotorClient(
                settings.mongodb_url,
                maxPoolSize=settings.mongodb_max_pool_size,
                minPoolSize=settings.mongodb_min_pool_size,
                tz_aware=True,
            )
            self.db = self.client[settings.mongodb_database]

            # Test connection
            await self.client.admin.command("ping")
            logger.info("Connected to MongoDB: %s", settings.mongodb_database)

            await self.create_indexes()

        except ConnectionFailure as e:
            logger.error("Failed to connect to MongoDB: %s", e)
            raise

    async def disconnect(self) -> None:
        """Disconnect from MongoDB."""
        if self.client:
            self.client.close()
            self.client = None
            self.db = None
            logger.info("Disconnected from MongoDB")

    @property
    def is_connected(self) -> bool:
        return self.db is not None

    def collection(self, name: str) -> AsyncIOMotorCollection:
        """Get a collection, failing fast when the client is not connected."""
        if self.db is None:
            raise DatabaseNotConnected()
        return self.db[name]

    async def create_indexes(self) -> None:
        """Create database indexes.

        The unique indexes back the business invariants: one cart per user,
        one review per user and product, and no repeated order numbers.
        """
        products = self.collection(settings.mongodb_product_collection)
        await products.create_index("productId", unique=True, name="productId_unique")
        await products.create_index(
            [("category", ASCENDING), ("price", ASCENDING)], name="category_price"
        )
        await products.create_index([("ratings.average", DESCENDING)], name="rating_desc")

        carts = self.collection(settings.mongodb_cart_collection)
        await carts.create_index("userId", unique=True, name="userId_unique")

        orders = self.collection(settings.mongodb_order_collection)
        await orders.create_index("orderId", unique=True, name="orderId_unique")
        await orders.create_index("orderNumber", unique=True, name="orderNumber_unique")
        await orders.create_index(
            [("userId", ASCENDING), ("createdAt", DESCENDING)], name="user_created"
        )
        await orders.create_index("orderStatus", name="orderStatus_index")

        reviews = self.collection(settings.mongodb_review_collection)
        await reviews.create_index("reviewId", unique=True, name="reviewId_unique")
        await reviews.create_index(
            [("productId", ASCENDING), ("userId", ASCENDING)],
            unique=True,
            name="product_user_unique",
        )
        await reviews.create_index(
            [("userId", ASCENDING), ("createdAt", DESCENDING)], name="user_created"
        )
        logger.info("MongoDB indexes created")

    async def next_sequence(self, name: str) -> int:
        """Atomically increment and return a named counter."""
        counter = await self.collection(settings.mongodb_counter_collection).find_one_and_update(
            {"_id": name},
            {"$inc": {"seq": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return int(counter["seq"])


# Global MongoDB instance
mongodb = MongoDB()
