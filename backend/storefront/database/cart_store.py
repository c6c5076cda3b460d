"""Cart persistence. One document per user."""

import logging
from typing import Optional

from storefront.config import get_settings
from storefront.database.mongodb import mongodb
from storefront.models.cart import Cart

logger = logging.getLogger(__name__)
settings = get_settings()


class CartStore:
    """Read and write access to the carts collection."""

    @staticmethod
    def _carts():
        return mongodb.collection(settings.mongodb_cart_collection)

    async def get_cart(self, user_id: str) -> Optional[Cart]:
        data = await self._carts().find_one({"userId": user_id}, {"_id": 0})
        if data:
            return Cart(**data)
        return None

    async def get_or_create_cart(self, user_id: str) -> Cart:
        """Return the user's cart, creating an empty one on first use."""
        cart = await self.get_cart(user_id)
        if cart is not None:
            return cart
        cart = Cart(userId=user_id)
        await self._carts().update_one(
            {"userId": user_id},
            {"$setOnInsert": cart.model_dump()},
            upsert=True,
        )
        logger.info("Created cart for user %s", user_id)
        return await self.get_cart(user_id) or cart

    async def save_cart(self, cart: Cart) -> Cart:
        """Write the cart's lines and totals, creating the document if needed."""
        data = cart.model_dump(exclude={"createdAt"})
        await self._carts().update_one(
            {"userId": cart.userId},
            {"$set": data, "$setOnInsert": {"createdAt": cart.createdAt}},
            upsert=True,
        )
        return cart


# Global cart store instance
cart_store = CartStore()
