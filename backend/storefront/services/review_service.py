"""Review service. Every review change refreshes the product's ratings."""

import logging
from typing import Optional

from storefront.config import get_settings
from storefront.database.catalog_store import catalog_store
from storefront.database.order_store import order_store
from storefront.database.review_store import review_store
from storefront.domain.ratings import summarize_ratings
from storefront.errors import (
    AlreadyReported,
    DuplicateReview,
    ReportReasonRequired,
    ReviewNotFound,
)
from storefront.models.product import Ratings
from storefront.models.request import Pagination, ReviewPage
from storefront.models.review import Review, ReviewCreate, ReviewReport, ReviewUpdate
from storefront.services.catalog_service import catalog_service
from storefront.utils.helpers import total_pages

logger = logging.getLogger(__name__)
settings = get_settings()


class ReviewService:
    """Product reviews and the ratings derived from them."""

    @staticmethod
    async def refresh_product_ratings(product_id: str) -> Ratings:
        """Recompute a product's average and count from its current reviews."""
        ratings = summarize_ratings(await review_store.product_ratings(product_id))
        await catalog_store.set_ratings(product_id, ratings)
        logger.info(
            "Ratings for product %s: average=%.1f count=%d",
            product_id,
            ratings.average,
            ratings.count,
        )
        return ratings

    @staticmethod
    async def create_review(user_id: str, data: ReviewCreate) -> Review:
        await catalog_service.get_product(data.productId)

        if await review_store.find_user_review(data.productId, user_id):
            raise DuplicateReview(data.productId)

        review = Review(
            **data.model_dump(),
            userId=user_id,
            isVerifiedPurchase=await order_store.has_delivered_purchase(user_id, data.productId),
        )
        await review_store.create_review(review)
        await ReviewService.refresh_product_ratings(review.productId)
        return review

    @staticmethod
    async def list_reviews(
        page: int = 1,
        limit: Optional[int] = None,
        *,
        product_id: Optional[str] = None,
        rating: Optional[int] = None,
        verified_only: bool = False,
        sort: str = "newest",
    ) -> ReviewPage:
        limit = min(limit or settings.default_page_size, settings.max_page_size)
        reviews, total = await review_store.list_reviews(
            product_id=product_id,
            rating=rating,
            verified_only=verified_only,
            sort=sort,
            skip=(page - 1) * limit,
            limit=limit,
        )
        return ReviewPage(
            reviews=reviews,
            pagination=Pagination(
                page=page, limit=limit, total=total, totalPages=total_pages(total, limit)
            ),
        )

    @staticmethod
    async def get_review(review_id: str) -> Review:
        review = await review_store.get_review(review_id)
        if review is None:
            raise ReviewNotFound(review_id)
        return review

    @staticmethod
    async def update_review(user_id: str, review_id: str, data: ReviewUpdate) -> Review:
        """Owner-only edit; unset fields are left alone."""
        review = await review_store.get_review(review_id, user_id=user_id)
        if review is None:
            raise ReviewNotFound(review_id)

        fields = data.model_dump(exclude_unset=True, exclude_none=True)
        if not fields:
            return review

        updated = await review_store.update_review(review_id, fields)
        if updated is None:
            raise ReviewNotFound(review_id)
        await ReviewService.refresh_product_ratings(updated.productId)
        return updated

    @staticmethod
    async def delete_review(user_id: str, review_id: str) -> None:
        review = await review_store.get_review(review_id, user_id=user_id)
        if review is None:
            raise ReviewNotFound(review_id)

        await review_store.delete_review(review_id)
        await ReviewService.refresh_product_ratings(review.productId)

    @staticmethod
    async def add_helpful_vote(review_id: str) -> int:
        votes = await review_store.add_helpful_vote(review_id)
        if votes is None:
            raise ReviewNotFound(review_id)
        return votes

    @staticmethod
    async def report_review(user_id: str, review_id: str, reason: str) -> None:
        if not reason or not reason.strip():
            raise ReportReasonRequired()

        review = await ReviewService.get_review(review_id)
        if review.reported_by(user_id):
            raise AlreadyReported(review_id)

        if not await review_store.add_report(review_id, ReviewReport(userId=user_id, reason=reason.strip())):
            raise AlreadyReported(review_id)
        logger.warning("Review %s reported by %s", review_id, user_id)


# Global review service instance
review_service = ReviewService()
