"""Utilities package."""

from storefront.utils.helpers import (
    generate_id,
    round_money,
    slugify,
    total_pages,
    utcnow,
)
from storefront.utils.logger import setup_logging

__all__ = [
    "setup_logging",
    "generate_id",
    "utcnow",
    "round_money",
    "slugify",
    "total_pages",
]
