"""Tests for reviews and the product ratings derived from them."""

import pytest

from storefront.database.catalog_store import catalog_store
from storefront.errors import (
    AlreadyReported,
    DuplicateReview,
    ProductNotFound,
    ReportReasonRequired,
    ReviewNotFound,
)
from storefront.models.order import OrderStatus
from storefront.models.request import CheckoutRequest
from storefront.models.review import ReviewCreate, ReviewUpdate
from storefront.services.cart_service import cart_service
from storefront.services.checkout_service import checkout_service
from storefront.services.order_service import order_service
from storefront.services.review_service import review_service


def _review(product_id: str, rating: int, comment: str = "Does the job") -> ReviewCreate:
    return ReviewCreate(productId=product_id, rating=rating, comment=comment)


async def _ratings(product_id: str):
    return (await catalog_store.get_product(product_id)).ratings


class TestRatingAggregation:
    async def test_recomputed_on_create_and_delete(self, db, make_product):
        product = await make_product()
        await review_service.create_review("u1", _review(product.productId, 4))
        await review_service.create_review("u2", _review(product.productId, 5))
        lowest = await review_service.create_review("u3", _review(product.productId, 3))

        ratings = await _ratings(product.productId)
        assert ratings.average == 4.0
        assert ratings.count == 3

        await review_service.delete_review("u3", lowest.reviewId)

        ratings = await _ratings(product.productId)
        assert ratings.average == 4.5
        assert ratings.count == 2

    async def test_recomputed_on_update(self, db, make_product):
        product = await make_product()
        review = await review_service.create_review("u1", _review(product.productId, 2))

        await review_service.update_review("u1", review.reviewId, ReviewUpdate(rating=5))

        ratings = await _ratings(product.productId)
        assert ratings.average == 5.0
        assert ratings.count == 1

    async def test_last_review_deleted_resets_ratings(self, db, make_product):
        product = await make_product()
        review = await review_service.create_review("u1", _review(product.productId, 4))

        await review_service.delete_review("u1", review.reviewId)

        ratings = await _ratings(product.productId)
        assert ratings.average == 0.0
        assert ratings.count == 0


class TestCreateReview:
    async def test_one_review_per_user_and_product(self, db, make_product):
        product = await make_product()
        await review_service.create_review("u1", _review(product.productId, 4))

        with pytest.raises(DuplicateReview):
            await review_service.create_review("u1", _review(product.productId, 1))
        assert (await _ratings(product.productId)).count == 1

    async def test_unknown_product(self, db):
        with pytest.raises(ProductNotFound):
            await review_service.create_review("u1", _review("missing", 4))

    async def test_verified_purchase(self, db, make_product, address):
        product = await make_product(stock=5)
        await cart_service.add_to_cart("buyer", product.productId, 1)
        order = await checkout_service.checkout("buyer", CheckoutRequest(shippingAddress=address))

        before_delivery = await review_service.create_review("browser", _review(product.productId, 3))
        assert before_delivery.isVerifiedPurchase is False

        await order_service.update_status(order.orderId, OrderStatus.DELIVERED)
        review = await review_service.create_review("buyer", _review(product.productId, 5))
        assert review.isVerifiedPurchase is True


class TestOwnership:
    async def test_only_author_can_edit_or_delete(self, db, make_product):
        product = await make_product()
        review = await review_service.create_review("u1", _review(product.productId, 4))

        with pytest.raises(ReviewNotFound):
            await review_service.update_review("u2", review.reviewId, ReviewUpdate(rating=1))
        with pytest.raises(ReviewNotFound):
            await review_service.delete_review("u2", review.reviewId)

        assert (await review_service.get_review(review.reviewId)).rating == 4


class TestVotesAndReports:
    async def test_helpful_votes(self, db, make_product):
        product = await make_product()
        review = await review_service.create_review("u1", _review(product.productId, 4))

        assert await review_service.add_helpful_vote(review.reviewId) == 1
        assert await review_service.add_helpful_vote(review.reviewId) == 2

    async def test_helpful_vote_unknown_review(self, db):
        with pytest.raises(ReviewNotFound):
            await review_service.add_helpful_vote("missing")

    async def test_report_once_per_user(self, db, make_product):
        product = await make_product()
        review = await review_service.create_review("u1", _review(product.productId, 4))

        await review_service.report_review("u2", review.reviewId, "Spam")
        with pytest.raises(AlreadyReported):
            await review_service.report_review("u2", review.reviewId, "Spam again")
        await review_service.report_review("u3", review.reviewId, "Off topic")

        stored = await review_service.get_review(review.reviewId)
        assert [r.userId for r in stored.reportedBy] == ["u2", "u3"]

    async def test_report_needs_reason(self, db, make_product):
        product = await make_product()
        review = await review_service.create_review("u1", _review(product.productId, 4))

        with pytest.raises(ReportReasonRequired):
            await review_service.report_review("u2", review.reviewId, "   ")


class TestListReviews:
    async def test_filters_and_sorting(self, db, make_product):
        product = await make_product()
        other = await make_product("Other")
        low = await review_service.create_review("u1", _review(product.productId, 2))
        high = await review_service.create_review("u2", _review(product.productId, 5))
        await review_service.create_review("u3", _review(other.productId, 5))
        await review_service.add_helpful_vote(low.reviewId)

        by_rating = await review_service.list_reviews(product_id=product.productId, sort="rating")
        assert [r.reviewId for r in by_rating.reviews] == [high.reviewId, low.reviewId]
        assert by_rating.pagination.total == 2

        by_helpful = await review_service.list_reviews(product_id=product.productId, sort="helpful")
        assert by_helpful.reviews[0].reviewId == low.reviewId

        fives = await review_service.list_reviews(rating=5)
        assert fives.pagination.total == 2
