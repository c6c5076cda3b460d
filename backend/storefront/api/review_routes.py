"""Review endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from storefront.api.dependencies import get_current_user_id
from storefront.models.request import ApiResponse, HelpfulVotes, ReportReviewRequest, ReviewPage
from storefront.models.review import Review, ReviewCreate, ReviewSort, ReviewUpdate
from storefront.services.review_service import review_service

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.get("", response_model=ApiResponse[ReviewPage])
async def list_reviews(
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    product_id: Optional[str] = Query(None, alias="productId"),
    rating: Optional[int] = Query(None, ge=1, le=5),
    verified: bool = False,
    sort: ReviewSort = ReviewSort.NEWEST,
) -> ApiResponse[ReviewPage]:
    reviews = await review_service.list_reviews(
        page,
        limit,
        product_id=product_id,
        rating=rating,
        verified_only=verified,
        sort=sort.value,
    )
    return ApiResponse(data=reviews)


@router.get("/{review_id}", response_model=ApiResponse[Review])
async def get_review(review_id: str) -> ApiResponse[Review]:
    review = await review_service.get_review(review_id)
    return ApiResponse(data=review)


@router.post("", response_model=ApiResponse[Review], status_code=status.HTTP_201_CREATED)
async def create_review(
    request: ReviewCreate,
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[Review]:
    review = await review_service.create_review(user_id, request)
    return ApiResponse(message="Review created successfully", data=review)


@router.put("/{review_id}", response_model=ApiResponse[Review])
async def update_review(
    review_id: str,
    request: ReviewUpdate,
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[Review]:
    review = await review_service.update_review(user_id, review_id, request)
    return ApiResponse(message="Review updated successfully", data=review)


@router.delete("/{review_id}", response_model=ApiResponse[None])
async def delete_review(
    review_id: str,
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[None]:
    await review_service.delete_review(user_id, review_id)
    return ApiResponse(message="Review deleted successfully")


@router.put("/{review_id}/helpful", response_model=ApiResponse[HelpfulVotes])
async def add_helpful_vote(
    review_id: str,
    _user_id: str = Depends(get_current_user_id),
) -> ApiResponse[HelpfulVotes]:
    votes = await review_service.add_helpful_vote(review_id)
    return ApiResponse(message="Helpful vote added", data=HelpfulVotes(helpfulVotes=votes))


@router.put("/{review_id}/report", response_model=ApiResponse[None])
async def report_review(
    review_id: str,
    request: ReportReviewRequest,
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[None]:
    await review_service.report_review(user_id, review_id, request.reason)
    return ApiResponse(message="Review reported successfully")
