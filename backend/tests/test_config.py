"""Tests for settings parsing."""

from storefront.config import Settings
from storefront.domain.pricing import PricingRules


def test_comma_separated_lists(monkeypatch):
    monkeypatch.setenv("ADMIN_USER_IDS", "admin_a, admin_b,,")
    monkeypatch.setenv("CORS_ORIGINS", "https://shop.example.com")

    settings = Settings()

    assert settings.admin_user_ids == ["admin_a", "admin_b"]
    assert settings.cors_origins == ["https://shop.example.com"]


def test_pricing_rules_from_settings(monkeypatch):
    monkeypatch.setenv("TAX_RATE", "0.05")
    monkeypatch.setenv("COUPON_CODE", "SPRING20")

    rules = PricingRules.from_settings(Settings())

    assert rules.tax_rate == 0.05
    assert rules.coupon_code == "SPRING20"
    assert rules.free_shipping_threshold == 500.0
