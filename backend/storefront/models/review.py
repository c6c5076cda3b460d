"""Review data models."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from storefront.utils.helpers import generate_id, utcnow


class ReviewSort(str, Enum):
    NEWEST = "newest"
    RATING = "rating"
    HELPFUL = "helpful"


class ReviewReport(BaseModel):
    userId: str
    reason: str
    date: datetime = Field(default_factory=utcnow)


class ReviewCreate(BaseModel):
    """Review creation model."""

    productId: str = Field(..., description="Product being reviewed")
    rating: int = Field(..., ge=1, le=5)
    title: Optional[str] = Field(None, max_length=100)
    comment: str = Field(..., min_length=1, max_length=1000)
    pros: list[str] = Field(default_factory=list)
    cons: list[str] = Field(default_factory=list)
    isRecommended: bool = True


class ReviewUpdate(BaseModel):
    """Review update model."""

    rating: Optional[int] = Field(None, ge=1, le=5)
    title: Optional[str] = Field(None, max_length=100)
    comment: Optional[str] = Field(None, min_length=1, max_length=1000)
    pros: Optional[list[str]] = None
    cons: Optional[list[str]] = None
    isRecommended: Optional[bool] = None


class Review(ReviewCreate):
    """Review model as stored in database."""

    reviewId: str = Field(default_factory=generate_id)
    userId: str = Field(..., description="Author of the review")
    isVerifiedPurchase: bool = False
    helpfulVotes: int = Field(default=0, ge=0)
    reportedBy: list[ReviewReport] = Field(default_factory=list)
    isApproved: bool = True
    createdAt: datetime = Field(default_factory=utcnow)
    updatedAt: datetime = Field(default_factory=utcnow)

    def reported_by(self, user_id: str) -> bool:
        return any(report.userId == user_id for report in self.reportedBy)
