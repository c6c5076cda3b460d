"""Cart data models."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from storefront.models.product import ProductSummary
from storefront.utils.helpers import utcnow

MAX_QUANTITY_PER_ITEM = 10


class CartItem(BaseModel):
    """One product line in a cart."""

    productId: str = Field(..., description="Product in the cart")
    quantity: int = Field(..., ge=1, le=MAX_QUANTITY_PER_ITEM)
    price: float = Field(..., ge=0, description="Unit price when the line was added")
    addedAt: datetime = Field(default_factory=utcnow)


class Cart(BaseModel):
    """Cart model as stored in database.

    Totals are derived from ``items``; the functions in
    ``storefront.domain.cart`` recompute them on every change.
    """

    userId: str = Field(..., description="Owner of the cart")
    items: list[CartItem] = Field(default_factory=list)
    totalItems: int = Field(default=0, ge=0)
    totalPrice: float = Field(default=0.0, ge=0)
    createdAt: datetime = Field(default_factory=utcnow)
    updatedAt: datetime = Field(default_factory=utcnow)

    def find_item(self, product_id: str) -> Optional[CartItem]:
        for item in self.items:
            if item.productId == product_id:
                return item
        return None


class CartLineView(CartItem):
    """Cart line resolved against the live catalog."""

    product: ProductSummary
    lineTotal: float


class CartView(BaseModel):
    """Cart as served to the client."""

    userId: str
    items: list[CartLineView] = Field(default_factory=list)
    totalItems: int = 0
    totalPrice: float = 0.0
    updatedAt: datetime

    model_config = {
        "json_schema_extra": {
            "example": {
                "userId": "user_001",
                "items": [
                    {
                        "productId": "5f1c0b8e2a4d4e0f9c3b7a61",
                        "quantity": 2,
                        "price": 149.99,
                        "addedAt": "2024-09-06T03:28:26Z",
                        "lineTotal": 299.98,
                        "product": {
                            "productId": "5f1c0b8e2a4d4e0f9c3b7a61",
                            "name": "Wireless Earbuds",
                            "price": 149.99,
                            "image": "https://example.com/earbuds.jpg",
                            "stock": 12,
                            "status": "active",
                            "category": "Electronics",
                        },
                    }
                ],
                "totalItems": 2,
                "totalPrice": 299.98,
                "updatedAt": "2024-09-06T03:28:26Z",
            }
        }
    }
