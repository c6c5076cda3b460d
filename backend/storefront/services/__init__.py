"""Services package."""

from storefront.services.cart_service import CartService, cart_service
from storefront.services.catalog_service import CatalogService, catalog_service
from storefront.services.checkout_service import CheckoutService, checkout_service
from storefront.services.order_service import OrderService, order_service
from storefront.services.review_service import ReviewService, review_service

__all__ = [
    "CatalogService",
    "catalog_service",
    "CartService",
    "cart_service",
    "CheckoutService",
    "checkout_service",
    "OrderService",
    "order_service",
    "ReviewService",
    "review_service",
]
