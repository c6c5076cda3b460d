"""Order data models."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from storefront.utils.helpers import generate_id, utcnow


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentMethod(str, Enum):
    CASH_ON_DELIVERY = "cod"
    CARD = "card"
    UPI = "upi"
    NETBANKING = "netbanking"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class OrderItem(BaseModel):
    """Snapshot of a purchased product taken at checkout."""

    productId: str = Field(..., description="Product that was purchased")
    name: str = Field(..., description="Product name at checkout")
    image: str = Field(default="", description="Product image URL at checkout")
    unitPrice: float = Field(..., ge=0, description="Unit price paid")
    quantity: int = Field(..., ge=1, description="Quantity ordered")
    lineTotal: float = Field(..., ge=0, description="Total price for this line item")


class ShippingAddress(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: str = Field(..., min_length=1)
    street: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    zipCode: str = Field(..., min_length=1)
    country: str = "India"


class Pricing(BaseModel):
    """Price breakdown; ``total = subtotal + shippingCost + tax - discount``."""

    subtotal: float = Field(..., ge=0)
    shippingCost: float = Field(default=0.0, ge=0)
    tax: float = Field(default=0.0, ge=0)
    discount: float = Field(default=0.0, ge=0)
    total: float = Field(..., ge=0)


class AppliedCoupon(BaseModel):
    code: str
    discount: float = 0.0


class PaymentDetails(BaseModel):
    transactionId: Optional[str] = None
    paymentDate: Optional[datetime] = None
    amount: Optional[float] = None


class StatusHistoryEntry(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    status: OrderStatus
    date: datetime = Field(default_factory=utcnow)
    note: str = ""


class Order(BaseModel):
    """Order model as stored in database."""

    model_config = ConfigDict(
        use_enum_values=True,
        validate_default=True,
        json_schema_extra={
            "example": {
                "orderId": "9b2f4c1de0a54f7c8d6e3b21a0f9c8d7",
                "orderNumber": "ORD17256000000000042",
                "userId": "user_001",
                "items": [
                    {
                        "productId": "5f1c0b8e2a4d4e0f9c3b7a61",
                        "name": "Wireless Earbuds",
                        "image": "https://example.com/earbuds.jpg",
                        "unitPrice": 225.0,
                        "quantity": 2,
                        "lineTotal": 450.0,
                    }
                ],
                "paymentMethod": "cod",
                "paymentStatus": "pending",
                "orderStatus": "pending",
                "pricing": {
                    "subtotal": 450.0,
                    "shippingCost": 50.0,
                    "tax": 81.0,
                    "discount": 0.0,
                    "total": 581.0,
                },
            }
        },
    )

    orderId: str = Field(default_factory=generate_id)
    orderNumber: str = Field(..., description="Human-readable order reference")
    userId: str = Field(..., description="User who placed the order")
    items: list[OrderItem] = Field(..., min_length=1)
    shippingAddress: ShippingAddress
    paymentMethod: PaymentMethod = PaymentMethod.CASH_ON_DELIVERY
    paymentStatus: PaymentStatus = PaymentStatus.PENDING
    paymentDetails: PaymentDetails = Field(default_factory=PaymentDetails)
    orderStatus: OrderStatus = OrderStatus.PENDING
    statusHistory: list[StatusHistoryEntry] = Field(default_factory=list)
    pricing: Pricing
    coupon: Optional[AppliedCoupon] = None
    estimatedDelivery: datetime
    actualDelivery: Optional[datetime] = None
    trackingNumber: Optional[str] = None
    notes: Optional[str] = None
    cancelReason: Optional[str] = None
    stockReserved: bool = Field(
        default=False, description="Whether the order currently holds its items' stock"
    )
    createdAt: datetime = Field(default_factory=utcnow)
    updatedAt: datetime = Field(default_factory=utcnow)


class OrderStats(BaseModel):
    """Per-user order statistics."""

    totalOrders: int = 0
    totalSpent: float = 0.0
    pendingOrders: int = 0
    completedOrders: int = 0
    cancelledOrders: int = 0
