"""Top-level API router."""

import logging

from fastapi import APIRouter, HTTPException, status

from storefront.api.cart_routes import router as cart_router
from storefront.api.order_routes import router as order_router
from storefront.api.product_routes import router as product_router
from storefront.api.review_routes import router as review_router
from storefront.config import get_settings
from storefront.database.mongodb import mongodb
from storefront.models.request import HealthResponse

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(prefix=settings.api_prefix)


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    try:
        mongodb_status = "connected" if mongodb.is_connected else "disconnected"
        return HealthResponse(
            status="healthy" if mongodb_status == "connected" else "degraded",
            version=settings.app_version,
            services={"mongodb": mongodb_status},
        )
    except Exception as e:
        logger.error("Health check failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service unhealthy",
        )


router.include_router(product_router)
router.include_router(cart_router)
router.include_router(order_router)
router.include_router(review_router)
