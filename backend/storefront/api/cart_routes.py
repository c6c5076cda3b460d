"""Cart endpoints."""

from fastapi import APIRouter, Depends

from storefront.api.dependencies import get_current_user_id
from storefront.models.cart import CartView
from storefront.models.request import AddToCartRequest, ApiResponse, UpdateCartItemRequest
from storefront.services.cart_service import cart_service

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("", response_model=ApiResponse[CartView])
async def get_cart(user_id: str = Depends(get_current_user_id)) -> ApiResponse[CartView]:
    """Get the user's cart with live product data; created on first access."""
    cart = await cart_service.get_cart(user_id)
    return ApiResponse(data=cart)


@router.post("", response_model=ApiResponse[CartView])
async def add_to_cart(
    request: AddToCartRequest,
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[CartView]:
    cart = await cart_service.add_to_cart(user_id, request.productId, request.quantity)
    return ApiResponse(message="Item added to cart successfully", data=cart)


@router.put("/{product_id}", response_model=ApiResponse[CartView])
async def update_cart_item(
    product_id: str,
    request: UpdateCartItemRequest,
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[CartView]:
    cart = await cart_service.update_cart_item(user_id, product_id, request.quantity)
    return ApiResponse(message="Cart updated successfully", data=cart)


@router.delete("/{product_id}", response_model=ApiResponse[CartView])
async def remove_from_cart(
    product_id: str,
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[CartView]:
    cart = await cart_service.remove_from_cart(user_id, product_id)
    return ApiResponse(message="Item removed from cart successfully", data=cart)


@router.delete("", response_model=ApiResponse[CartView])
async def clear_cart(user_id: str = Depends(get_current_user_id)) -> ApiResponse[CartView]:
    cart = await cart_service.clear_cart(user_id)
    return ApiResponse(message="Cart cleared successfully", data=cart)
