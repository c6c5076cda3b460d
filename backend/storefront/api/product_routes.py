"""Catalog endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from storefront.api.dependencies import require_admin
from storefront.models.product import Product, ProductCreate, ProductUpdate
from storefront.models.request import ApiResponse, ProductPage
from storefront.services.catalog_service import catalog_service

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=ApiResponse[ProductPage])
async def list_products(
    page: int = Query(1, ge=1),
    limit: int = Query(12, ge=1),
    category: Optional[str] = None,
    min_price: Optional[float] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[float] = Query(None, alias="maxPrice", ge=0),
    min_rating: Optional[float] = Query(None, alias="minRating", ge=0, le=5),
    brand: Optional[str] = None,
    in_stock: bool = Query(False, alias="inStock"),
    search: Optional[str] = Query(None, max_length=100),
    sort: str = "newest",
) -> ApiResponse[ProductPage]:
    """Browse active products."""
    products = await catalog_service.list_products(
        page,
        limit,
        category=category,
        min_price=min_price,
        max_price=max_price,
        min_rating=min_rating,
        brand=brand,
        in_stock=in_stock,
        search=search,
        sort=sort,
    )
    return ApiResponse(data=products)


@router.get("/{product_id}", response_model=ApiResponse[Product])
async def get_product(product_id: str) -> ApiResponse[Product]:
    product = await catalog_service.get_product(product_id)
    return ApiResponse(data=product)


@router.post("", response_model=ApiResponse[Product], status_code=status.HTTP_201_CREATED)
async def create_product(
    request: ProductCreate,
    _admin_id: str = Depends(require_admin),
) -> ApiResponse[Product]:
    product = await catalog_service.create_product(request)
    return ApiResponse(message="Product created successfully", data=product)


@router.put("/{product_id}", response_model=ApiResponse[Product])
async def update_product(
    product_id: str,
    request: ProductUpdate,
    _admin_id: str = Depends(require_admin),
) -> ApiResponse[Product]:
    product = await catalog_service.update_product(product_id, request)
    return ApiResponse(message="Product updated successfully", data=product)


@router.delete("/{product_id}", response_model=ApiResponse[Product])
async def deactivate_product(
    product_id: str,
    _admin_id: str = Depends(require_admin),
) -> ApiResponse[Product]:
    """Soft delete: the product is marked inactive."""
    product = await catalog_service.deactivate_product(product_id)
    return ApiResponse(message="Product deactivated successfully", data=product)
