"""Custom exceptions for the storefront.

Every exception carries the HTTP status the API layer reports for it.
"""


class StorefrontError(Exception):
    """Base exception for all storefront errors."""

    status_code: int = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


# Validation errors (client-fixable)


class ValidationFailed(StorefrontError):
    """Raised when a request carries an invalid value."""

    status_code = 400


class InvalidQuantity(ValidationFailed):
    """Raised when a quantity is below 1."""

    def __init__(self, quantity: int):
        self.quantity = quantity
        super().__init__("Quantity must be at least 1")


class QuantityLimitExceeded(ValidationFailed):
    """Raised when a cart line would hold more than the per-item limit."""

    def __init__(self, limit: int, adding: bool = False):
        self.limit = limit
        if adding:
            msg = f"Cannot add more than {limit} items of the same product"
        else:
            msg = f"Quantity cannot exceed {limit} per item"
        super().__init__(msg)


class InvalidCouponCode(ValidationFailed):
    """Raised when an unrecognized coupon code is supplied at checkout."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Coupon code is not valid: {code}")


class ReportReasonRequired(ValidationFailed):
    def __init__(self):
        super().__init__("Report reason is required")


# Conflict errors (state changed underneath the caller)


class ConflictError(StorefrontError):
    """Raised when the request conflicts with current state."""

    status_code = 400


class EmptyCart(ConflictError):
    def __init__(self):
        super().__init__("Cart is empty")


class ProductUnavailable(ConflictError):
    """Raised when a product is not active."""

    def __init__(self, product_id: str, name: str | None = None):
        self.product_id = product_id
        if name:
            msg = f"Product {name} is no longer available"
        else:
            msg = "Product is not available"
        super().__init__(msg)


class InsufficientStock(ConflictError):
    """Raised when live stock cannot cover the requested quantity."""

    def __init__(self, product_id: str, available: int | None = None, name: str | None = None):
        self.product_id = product_id
        self.available = available
        if name:
            msg = f"Insufficient stock for {name}"
        elif available is not None:
            msg = f"Only {available} items available in stock"
        else:
            msg = "Insufficient stock"
        super().__init__(msg)


class OrderNotCancellable(ConflictError):
    def __init__(self, order_id: str, status: str):
        self.order_id = order_id
        self.status = status
        if status == "cancelled":
            msg = "Order is already cancelled"
        else:
            msg = "Cannot cancel order that has been shipped or delivered"
        super().__init__(msg)


class OrderStateConflict(ConflictError):
    """Raised when an order changed status while a transition was applied."""

    status_code = 409

    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__("Order was modified concurrently, please retry")


class DuplicateReview(ConflictError):
    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__("You have already reviewed this product")


class AlreadyReported(ConflictError):
    def __init__(self, review_id: str):
        self.review_id = review_id
        super().__init__("You have already reported this review")


# Not-found errors


class NotFoundError(StorefrontError):
    status_code = 404


class ProductNotFound(NotFoundError):
    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__("Product not found")


class CartNotFound(NotFoundError):
    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__("Cart not found")


class ItemNotFound(NotFoundError):
    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__("Item not found in cart")


class OrderNotFound(NotFoundError):
    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__("Order not found")


class ReviewNotFound(NotFoundError):
    def __init__(self, review_id: str):
        self.review_id = review_id
        super().__init__("Review not found")


# Identity errors


class AuthenticationRequired(StorefrontError):
    status_code = 401

    def __init__(self):
        super().__init__("Authentication required")


class AdminRequired(StorefrontError):
    status_code = 403

    def __init__(self):
        super().__init__("Admin access required")


# Infrastructure errors


class DatabaseNotConnected(StorefrontError):
    def __init__(self):
        super().__init__("Database not connected")
