"""Review persistence."""

import logging
from typing import Any, Optional

from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from storefront.config import get_settings
from storefront.database.mongodb import mongodb
from storefront.errors import DuplicateReview
from storefront.models.review import Review, ReviewReport
from storefront.utils.helpers import utcnow

logger = logging.getLogger(__name__)
settings = get_settings()

SORT_OPTIONS: dict[str, list[tuple[str, int]]] = {
    "newest": [("createdAt", -1)],
    "rating": [("rating", -1), ("createdAt", -1)],
    "helpful": [("helpfulVotes", -1), ("createdAt", -1)],
}


class ReviewStore:
    """Read and write access to the reviews collection."""

    @staticmethod
    def _reviews():
        return mongodb.collection(settings.mongodb_review_collection)

    async def create_review(self, review: Review) -> Review:
        try:
            await self._reviews().insert_one(review.model_dump())
        except DuplicateKeyError:
            raise DuplicateReview(review.productId)
        return review

    async def get_review(self, review_id: str, user_id: Optional[str] = None) -> Optional[Review]:
        query: dict[str, Any] = {"reviewId": review_id}
        if user_id is not None:
            query["userId"] = user_id
        data = await self._reviews().find_one(query, {"_id": 0})
        if data:
            return Review(**data)
        return None

    async def find_user_review(self, product_id: str, user_id: str) -> Optional[Review]:
        data = await self._reviews().find_one({"productId": product_id, "userId": user_id}, {"_id": 0})
        if data:
            return Review(**data)
        return None

    async def update_review(self, review_id: str, fields: dict[str, Any]) -> Optional[Review]:
        data = await self._reviews().find_one_and_update(
            {"reviewId": review_id},
            {"$set": {**fields, "updatedAt": utcnow()}},
            projection={"_id": 0},
            return_document=ReturnDocument.AFTER,
        )
        if data:
            return Review(**data)
        return None

    async def delete_review(self, review_id: str) -> bool:
        result = await self._reviews().delete_one({"reviewId": review_id})
        return result.deleted_count > 0

    async def add_helpful_vote(self, review_id: str) -> Optional[int]:
        data = await self._reviews().find_one_and_update(
            {"reviewId": review_id},
            {"$inc": {"helpfulVotes": 1}},
            projection={"_id": 0, "helpfulVotes": 1},
            return_document=ReturnDocument.AFTER,
        )
        if data:
            return int(data["helpfulVotes"])
        return None

    async def add_report(self, review_id: str, report: ReviewReport) -> bool:
        """Record a report unless this user already reported the review."""
        result = await self._reviews().update_one(
            {"reviewId": review_id, "reportedBy.userId": {"$ne": report.userId}},
            {"$push": {"reportedBy": report.model_dump()}},
        )
        return result.matched_count > 0

    async def product_ratings(self, product_id: str) -> list[int]:
        """Ratings of every review currently attached to a product."""
        cursor = self._reviews().find({"productId": product_id}, {"_id": 0, "rating": 1})
        docs = await cursor.to_list(length=None)
        return [int(doc["rating"]) for doc in docs]

    async def list_reviews(
        self,
        *,
        product_id: Optional[str] = None,
        rating: Optional[int] = None,
        verified_only: bool = False,
        sort: str = "newest",
        skip: int = 0,
        limit: int = 10,
    ) -> tuple[list[Review], int]:
        query: dict[str, Any] = {"isApproved": True}
        if product_id:
            query["productId"] = product_id
        if rating is not None:
            query["rating"] = rating
        if verified_only:
            query["isVerifiedPurchase"] = True

        cursor = self._reviews().find(
            query,
            {"_id": 0},
            sort=SORT_OPTIONS.get(sort, SORT_OPTIONS["newest"]),
            skip=skip,
            limit=limit,
        )
        docs = await cursor.to_list(length=limit)
        total = await self._reviews().count_documents(query)
        return [Review(**doc) for doc in docs], total


# Global review store instance
review_store = ReviewStore()
