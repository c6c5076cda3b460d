"""Catalog service for product browsing and maintenance."""

import logging
from typing import Optional

from storefront.config import get_settings
from storefront.database.catalog_store import catalog_store
from storefront.errors import ProductNotFound
from storefront.models.product import Product, ProductCreate, ProductStatus, ProductUpdate
from storefront.models.request import CatalogPagination, ProductPage
from storefront.utils.helpers import slugify, total_pages

logger = logging.getLogger(__name__)
settings = get_settings()


class CatalogService:
    """Product lookups used by the API and by the cart and checkout flows."""

    @staticmethod
    async def get_product(product_id: str) -> Product:
        product = await catalog_store.get_product(product_id)
        if product is None:
            raise ProductNotFound(product_id)
        return product

    @staticmethod
    async def list_products(
        page: int = 1,
        limit: int = 12,
        *,
        category: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        min_rating: Optional[float] = None,
        brand: Optional[str] = None,
        in_stock: bool = False,
        search: Optional[str] = None,
        sort: str = "newest",
    ) -> ProductPage:
        limit = min(limit, settings.max_page_size)
        products, total = await catalog_store.list_products(
            category=category,
            min_price=min_price,
            max_price=max_price,
            min_rating=min_rating,
            brand=brand,
            in_stock=in_stock,
            search=search,
            sort=sort,
            skip=(page - 1) * limit,
            limit=limit,
        )
        pages = total_pages(total, limit)
        return ProductPage(
            products=products,
            pagination=CatalogPagination(
                page=page,
                limit=limit,
                total=total,
                totalPages=pages,
                hasNext=page < pages,
                hasPrev=page > 1,
            ),
        )

    @staticmethod
    async def create_product(data: ProductCreate) -> Product:
        product = Product(**data.model_dump(), slug=slugify(data.name))
        await catalog_store.create_product(product)
        logger.info("Created product %s (%s)", product.productId, product.name)
        return product

    @staticmethod
    async def update_product(product_id: str, data: ProductUpdate) -> Product:
        fields = data.model_dump(exclude_unset=True)
        if not fields:
            return await CatalogService.get_product(product_id)

        product = await catalog_store.update_product(product_id, fields)
        if product is None:
            raise ProductNotFound(product_id)
        logger.info("Updated product %s: %s", product_id, sorted(fields))
        return product

    @staticmethod
    async def deactivate_product(product_id: str) -> Product:
        """Take a product off sale without deleting it."""
        product = await catalog_store.update_product(
            product_id, {"status": ProductStatus.INACTIVE.value}
        )
        if product is None:
            raise ProductNotFound(product_id)
        logger.info("Deactivated product %s", product_id)
        return product


# Global catalog service instance
catalog_service = CatalogService()
