"""Tests for checkout pricing."""

import pytest

from storefront.domain.pricing import PricingRules, compute_pricing, normalize_coupon, validate_coupon
from storefront.errors import InvalidCouponCode


@pytest.fixture
def rules():
    return PricingRules()


class TestComputePricing:
    def test_below_free_shipping_threshold(self, rules):
        pricing = compute_pricing(450.0, None, rules)

        assert pricing.subtotal == 450.0
        assert pricing.shippingCost == 50.0
        assert pricing.tax == 81.0
        assert pricing.discount == 0.0
        assert pricing.total == 581.0

    def test_with_coupon(self, rules):
        pricing = compute_pricing(450.0, "WELCOME10", rules)

        assert pricing.discount == 45.0
        assert pricing.total == 536.0

    def test_free_shipping_at_threshold(self, rules):
        pricing = compute_pricing(500.0, None, rules)

        assert pricing.shippingCost == 0.0
        assert pricing.tax == 90.0
        assert pricing.total == 590.0

    def test_components_sum_to_total(self, rules):
        pricing = compute_pricing(123.45, "welcome10", rules)

        assert pricing.tax == 22.22
        assert pricing.discount == 12.35
        assert pricing.total == round(
            pricing.subtotal + pricing.shippingCost + pricing.tax - pricing.discount, 2
        )

    def test_unknown_coupon_rejected(self, rules):
        with pytest.raises(InvalidCouponCode):
            compute_pricing(100.0, "FREESTUFF", rules)

    def test_custom_rules(self):
        rules = PricingRules(tax_rate=0.1, free_shipping_threshold=100.0, flat_shipping_fee=5.0)
        pricing = compute_pricing(80.0, None, rules)

        assert pricing.shippingCost == 5.0
        assert pricing.tax == 8.0
        assert pricing.total == 93.0


class TestCoupons:
    @pytest.mark.parametrize("raw", ["WELCOME10", "welcome10", "  Welcome10 "])
    def test_normalized(self, raw, rules):
        assert validate_coupon(raw, rules) == "WELCOME10"

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_blank_means_no_coupon(self, raw, rules):
        assert normalize_coupon(raw) is None
        assert validate_coupon(raw, rules) is None
