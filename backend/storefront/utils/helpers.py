"""Utility helper functions."""

import math
import re
import uuid
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal

_CENTS = Decimal("0.01")


def generate_id() -> str:
    """Generate a unique document identifier."""
    return uuid.uuid4().hex


def utcnow() -> datetime:
    """Get the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def round_money(value: float) -> float:
    """Round a monetary amount to 2 decimals, half away from zero."""
    return float(Decimal(str(value)).quantize(_CENTS, rounding=ROUND_HALF_UP))


def slugify(text: str) -> str:
    """Build a URL slug from a product name."""
    slug = re.sub(r"[^\w ]+", "", text.lower())
    return re.sub(r" +", "-", slug.strip())


def total_pages(total: int, limit: int) -> int:
    """Number of pages needed to show ``total`` items ``limit`` at a time."""
    if limit <= 0:
        return 0
    return math.ceil(total / limit)
