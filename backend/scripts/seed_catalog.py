"""Catalog seeding script.

Loads a small set of sample products into MongoDB so the cart and checkout
flows can be exercised against a fresh database.

Usage:
    python -m scripts.seed_catalog
    python -m scripts.seed_catalog --clear
"""

import argparse
import asyncio
import logging
import sys

from storefront.config import get_settings
from storefront.database.mongodb import mongodb
from storefront.models.product import ProductCategory, ProductCreate, ProductImage
from storefront.services.catalog_service import catalog_service
from storefront.utils.logger import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
settings = get_settings()

SAMPLE_PRODUCTS = [
    ProductCreate(
        name="Wireless Noise Cancelling Headphones",
        description="Over-ear headphones with active noise cancellation and 30 hour battery life.",
        price=249.99,
        originalPrice=299.99,
        category=ProductCategory.ELECTRONICS,
        brand="Sonic",
        stock=25,
        images=[ProductImage(url="https://example.com/images/headphones.jpg", alt="Headphones")],
        tags=["audio", "wireless"],
        isFeatured=True,
    ),
    ProductCreate(
        name="Cotton Crew Neck T-Shirt",
        description="Soft organic cotton t-shirt with a modern fit.",
        price=19.99,
        category=ProductCategory.FASHION,
        brand="Basics",
        stock=120,
        images=[ProductImage(url="https://example.com/images/tshirt.jpg", alt="T-shirt")],
        tags=["cotton", "casual"],
    ),
    ProductCreate(
        name="Insulated Water Bottle 1L",
        description="Double-wall stainless steel bottle that keeps drinks cold for 24 hours.",
        price=24.5,
        category=ProductCategory.SPORTS_OUTDOORS,
        brand="TrailMate",
        stock=300,
        images=[ProductImage(url="https://example.com/images/bottle.jpg", alt="Water bottle")],
        tags=["hydration", "outdoors"],
    ),
    ProductCreate(
        name="Python Programming Handbook",
        description="A practical guide to writing idiomatic Python.",
        price=39.0,
        category=ProductCategory.BOOKS,
        stock=40,
        images=[ProductImage(url="https://example.com/images/book.jpg", alt="Book cover")],
        tags=["programming"],
    ),
    ProductCreate(
        name="Ceramic Plant Pot Set",
        description="Set of three glazed ceramic pots with drainage holes.",
        price=32.75,
        category=ProductCategory.HOME_GARDEN,
        stock=0,
        images=[ProductImage(url="https://example.com/images/pots.jpg", alt="Plant pots")],
        tags=["garden", "decor"],
    ),
]


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed sample products into MongoDB")
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Remove existing products before seeding",
    )
    return parser.parse_args()


async def seed_catalog(*, clear: bool = False) -> None:
    """Insert the sample products."""
    try:
        logger.info("Starting catalog seeding...")

        await mongodb.connect()

        should_clear = clear
        if not should_clear and sys.stdin.isatty():
            should_clear = input("Clear existing products in MongoDB? (y/n): ").lower() == "y"

        if should_clear:
            result = await mongodb.collection(settings.mongodb_product_collection).delete_many({})
            logger.info("Deleted %d existing products", result.deleted_count)

        for data in SAMPLE_PRODUCTS:
            product = await catalog_service.create_product(data)
            logger.info("Seeded %s (%s), stock %d", product.name, product.productId, product.stock)

        logger.info("Catalog seeding completed: %d products", len(SAMPLE_PRODUCTS))

    except Exception as e:
        logger.error("Catalog seeding failed: %s", e)
        raise
    finally:
        await mongodb.disconnect()


def main() -> None:
    """Entry point for the script."""
    args = _parse_args()
    asyncio.run(seed_catalog(clear=args.clear))


if __name__ == "__main__":
    main()
