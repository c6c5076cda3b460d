"""Order endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from storefront.api.dependencies import get_current_user_id, require_admin
from storefront.models.order import Order, OrderStats
from storefront.models.request import (
    ApiResponse,
    CancelOrderRequest,
    CheckoutRequest,
    OrderPage,
    UpdateOrderStatusRequest,
)
from storefront.services.checkout_service import checkout_service
from storefront.services.order_service import order_service

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=ApiResponse[Order], status_code=status.HTTP_201_CREATED)
async def create_order(
    request: CheckoutRequest,
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[Order]:
    """Check out the user's cart.

    Body:
        shippingAddress: Delivery address and contact
        paymentMethod: 'cod', 'card', 'upi' or 'netbanking'
        couponCode: Optional coupon
    """
    order = await checkout_service.checkout(user_id, request)
    return ApiResponse(message="Order created successfully", data=order)


@router.get("", response_model=ApiResponse[OrderPage])
async def list_orders(
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    order_status: Optional[str] = Query(None, alias="status"),
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[OrderPage]:
    orders = await order_service.list_orders(user_id, page=page, limit=limit, status=order_status)
    return ApiResponse(data=orders)


@router.get("/stats", response_model=ApiResponse[OrderStats])
async def order_stats(user_id: str = Depends(get_current_user_id)) -> ApiResponse[OrderStats]:
    stats = await order_service.order_stats(user_id)
    return ApiResponse(data=stats)


@router.get("/{order_id}", response_model=ApiResponse[Order])
async def get_order(
    order_id: str,
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[Order]:
    order = await order_service.get_order(user_id, order_id)
    return ApiResponse(data=order)


@router.put("/{order_id}/cancel", response_model=ApiResponse[Order])
async def cancel_order(
    order_id: str,
    request: CancelOrderRequest,
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[Order]:
    order = await order_service.cancel_order(user_id, order_id, request.reason)
    return ApiResponse(message="Order cancelled successfully", data=order)


@router.put("/{order_id}/status", response_model=ApiResponse[Order])
async def update_order_status(
    order_id: str,
    request: UpdateOrderStatusRequest,
    _admin_id: str = Depends(require_admin),
) -> ApiResponse[Order]:
    order = await order_service.update_status(
        order_id, request.status, request.note, request.trackingNumber
    )
    return ApiResponse(message="Order status updated successfully", data=order)
