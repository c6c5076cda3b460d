"""Application configuration management using Pydantic Settings."""
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# Get the directory where config.py is located
BASE_DIR = Path(__file__).resolve().parent

class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application
    app_name: str = "Storefront API"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = Field(default="development", pattern="^(development|staging|production)$")

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_prefix: str = "/api/v1"
    cors_origins: Annotated[list[str], NoDecode] = ["http://localhost:3000", "http://localhost:5173"]
    admin_user_ids: Annotated[list[str], NoDecode] = Field(default_factory=list, description="Users allowed on admin routes")

    # MongoDB
    mongodb_url: str = Field(default="mongodb://localhost:27017")
    mongodb_database: str = "storefront"
    mongodb_product_collection: str = "products"
    mongodb_cart_collection: str = "carts"
    mongodb_order_collection: str = "orders"
    mongodb_review_collection: str = "reviews"
    mongodb_counter_collection: str = "counters"
    mongodb_max_pool_size: int = 10
    mongodb_min_pool_size: int = 1

    # Pricing
    tax_rate: float = Field(default=0.18, ge=0, le=1)
    free_shipping_threshold: float = Field(default=500.0, ge=0)
    flat_shipping_fee: float = Field(default=50.0, ge=0)
    coupon_code: str = "WELCOME10"
    coupon_discount_rate: float = Field(default=0.10, ge=0, le=1)
    estimated_delivery_days: int = Field(default=7, ge=0)

    # Pagination
    default_page_size: int = 10
    max_page_size: int = 100

    # Rate Limiting
    rate_limit_enabled: bool = True
    rate_limit_requests: int = 120
    rate_limit_period: int = 60  # seconds

    # Logging
    log_level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    log_format: str = "json"

    model_config = SettingsConfigDict(
        env_file=BASE_DIR.parent / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("cors_origins", "admin_user_ids", mode="before")
    @classmethod
    def parse_comma_separated(cls, v: str | list[str]) -> list[str]:
        """Parse a comma-separated string or list into a list of strings."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
