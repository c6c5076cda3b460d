"""Product rating aggregation."""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from storefront.models.product import Ratings


def summarize_ratings(ratings: Iterable[int]) -> Ratings:
    """Mean (1 decimal, half up) and count of the given review ratings."""
    values = list(ratings)
    if not values:
        return Ratings(average=0.0, count=0)
    mean = Decimal(sum(values)) / Decimal(len(values))
    average = float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
    return Ratings(average=average, count=len(values))
