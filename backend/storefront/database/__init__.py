"""Database package."""

from storefront.database.cart_store import CartStore, cart_store
from storefront.database.catalog_store import CatalogStore, catalog_store
from storefront.database.mongodb import MongoDB, mongodb
from storefront.database.order_store import OrderStore, order_store
from storefront.database.review_store import ReviewStore, review_store

__all__ = [
    "MongoDB",
    "mongodb",
    "CatalogStore",
    "catalog_store",
    "CartStore",
    "cart_store",
    "OrderStore",
    "order_store",
    "ReviewStore",
    "review_store",
]
