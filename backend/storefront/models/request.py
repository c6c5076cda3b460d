"""API request and response models."""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

from storefront.models.cart import MAX_QUANTITY_PER_ITEM
from storefront.models.order import Order, OrderStatus, PaymentMethod, ShippingAddress
from storefront.models.product import Product
from storefront.models.review import Review

DataT = TypeVar("DataT")


class ApiResponse(BaseModel, Generic[DataT]):
    """Envelope shared by every endpoint."""

    success: bool = True
    message: Optional[str] = None
    data: Optional[DataT] = None


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int


class CatalogPagination(Pagination):
    hasNext: bool
    hasPrev: bool


class AddToCartRequest(BaseModel):
    """Add-to-cart request model."""

    productId: str = Field(..., min_length=1)
    quantity: int = Field(default=1, ge=1, le=MAX_QUANTITY_PER_ITEM)

    model_config = {
        "json_schema_extra": {
            "example": {"productId": "5f1c0b8e2a4d4e0f9c3b7a61", "quantity": 2}
        }
    }


class UpdateCartItemRequest(BaseModel):
    """Quantity bounds are checked by the cart service so errors keep their wording."""

    quantity: int


class CheckoutRequest(BaseModel):
    """Order placement request model."""

    shippingAddress: ShippingAddress
    paymentMethod: PaymentMethod = PaymentMethod.CASH_ON_DELIVERY
    couponCode: Optional[str] = Field(None, max_length=50)
    notes: Optional[str] = Field(None, max_length=500)

    model_config = {
        "json_schema_extra": {
            "example": {
                "shippingAddress": {
                    "name": "Asha Rao",
                    "email": "asha.rao@example.com",
                    "phone": "+919876543210",
                    "street": "12 MG Road",
                    "city": "Bengaluru",
                    "state": "Karnataka",
                    "zipCode": "560001",
                    "country": "India",
                },
                "paymentMethod": "cod",
                "couponCode": "WELCOME10",
            }
        }
    }


class CancelOrderRequest(BaseModel):
    reason: str = Field(default="", max_length=500)


class UpdateOrderStatusRequest(BaseModel):
    """Admin status change request model."""

    status: OrderStatus
    note: str = Field(default="", max_length=500)
    trackingNumber: Optional[str] = Field(None, max_length=100)


class ReportReviewRequest(BaseModel):
    reason: str = Field(default="", max_length=500)


class OrderPage(BaseModel):
    orders: list[Order]
    pagination: Pagination


class ProductPage(BaseModel):
    products: list[Product]
    pagination: CatalogPagination


class ReviewPage(BaseModel):
    reviews: list[Review]
    pagination: Pagination


class HelpfulVotes(BaseModel):
    helpfulVotes: int


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    services: dict[str, str]
