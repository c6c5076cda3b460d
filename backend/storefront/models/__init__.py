"""Data models package."""

from storefront.models.cart import MAX_QUANTITY_PER_ITEM, Cart, CartItem, CartLineView, CartView
from storefront.models.order import (
    Order,
    OrderItem,
    OrderStats,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    Pricing,
    ShippingAddress,
    StatusHistoryEntry,
)
from storefront.models.product import (
    Product,
    ProductCategory,
    ProductCreate,
    ProductStatus,
    ProductSummary,
    ProductUpdate,
    Ratings,
)
from storefront.models.request import (
    AddToCartRequest,
    ApiResponse,
    CancelOrderRequest,
    CheckoutRequest,
    HealthResponse,
    OrderPage,
    Pagination,
    ProductPage,
    ReviewPage,
    UpdateCartItemRequest,
    UpdateOrderStatusRequest,
)
from storefront.models.review import Review, ReviewCreate, ReviewUpdate

__all__ = [
    # Product models
    "Product",
    "ProductCategory",
    "ProductCreate",
    "ProductStatus",
    "ProductSummary",
    "ProductUpdate",
    "Ratings",
    # Cart models
    "MAX_QUANTITY_PER_ITEM",
    "Cart",
    "CartItem",
    "CartLineView",
    "CartView",
    # Order models
    "Order",
    "OrderItem",
    "OrderStats",
    "OrderStatus",
    "PaymentMethod",
    "PaymentStatus",
    "Pricing",
    "ShippingAddress",
    "StatusHistoryEntry",
    # Review models
    "Review",
    "ReviewCreate",
    "ReviewUpdate",
    # Request/Response models
    "ApiResponse",
    "Pagination",
    "AddToCartRequest",
    "UpdateCartItemRequest",
    "CheckoutRequest",
    "CancelOrderRequest",
    "UpdateOrderStatusRequest",
    "OrderPage",
    "ProductPage",
    "ReviewPage",
    "HealthResponse",
]
