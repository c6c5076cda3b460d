"""Checkout pricing rules."""

from typing import Optional

from pydantic import BaseModel

from storefront.config import Settings
from storefront.errors import InvalidCouponCode
from storefront.models.order import Pricing
from storefront.utils.helpers import round_money


class PricingRules(BaseModel):
    """Flat-rate pricing: one tax rate, one shipping fee, one coupon."""

    tax_rate: float = 0.18
    free_shipping_threshold: float = 500.0
    flat_shipping_fee: float = 50.0
    coupon_code: str = "WELCOME10"
    coupon_discount_rate: float = 0.10

    @classmethod
    def from_settings(cls, settings: Settings) -> "PricingRules":
        return cls(
            tax_rate=settings.tax_rate,
            free_shipping_threshold=settings.free_shipping_threshold,
            flat_shipping_fee=settings.flat_shipping_fee,
            coupon_code=settings.coupon_code,
            coupon_discount_rate=settings.coupon_discount_rate,
        )


def normalize_coupon(code: Optional[str]) -> Optional[str]:
    if code is None:
        return None
    code = code.strip().upper()
    return code or None


def validate_coupon(code: Optional[str], rules: PricingRules) -> Optional[str]:
    """Return the canonical coupon code, or raise if it is not recognized."""
    code = normalize_coupon(code)
    if code is None:
        return None
    if code != rules.coupon_code.upper():
        raise InvalidCouponCode(code)
    return code


def compute_pricing(subtotal: float, coupon_code: Optional[str], rules: PricingRules) -> Pricing:
    """Price a cart subtotal.

    Shipping is free from ``free_shipping_threshold`` up, tax is a flat
    percentage of the subtotal, and the recognized coupon takes a fixed
    percentage off the subtotal. Each component is rounded to cents before
    the total is summed, so ``total == subtotal + shippingCost + tax - discount``
    holds exactly on the stored values.
    """
    subtotal = round_money(subtotal)
    shipping_cost = 0.0 if subtotal >= rules.free_shipping_threshold else round_money(rules.flat_shipping_fee)
    tax = round_money(subtotal * rules.tax_rate)

    discount = 0.0
    if validate_coupon(coupon_code, rules) is not None:
        discount = round_money(subtotal * rules.coupon_discount_rate)

    total = round_money(subtotal + shipping_cost + tax - discount)
    return Pricing(
        subtotal=subtotal,
        shippingCost=shipping_cost,
        tax=tax,
        discount=discount,
        total=total,
    )
