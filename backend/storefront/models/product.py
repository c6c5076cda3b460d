"""Product data models."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from storefront.utils.helpers import generate_id, round_money, utcnow


class ProductCategory(str, Enum):
    """Catalog categories."""

    ELECTRONICS = "Electronics"
    FASHION = "Fashion"
    HOME_GARDEN = "Home & Garden"
    SPORTS_OUTDOORS = "Sports & Outdoors"
    BOOKS = "Books"
    HEALTH_BEAUTY = "Health & Beauty"
    TOYS_GAMES = "Toys & Games"
    AUTOMOTIVE = "Automotive"
    GROCERIES = "Groceries"
    OTHERS = "Others"


class ProductStatus(str, Enum):
    """Lifecycle state of a catalog product."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class ProductImage(BaseModel):
    url: str
    alt: str = ""


class Ratings(BaseModel):
    """Aggregated review ratings for a product."""

    average: float = Field(default=0.0, ge=0, le=5)
    count: int = Field(default=0, ge=0)


class ProductBase(BaseModel):
    """Fields a catalog manager supplies for a product."""

    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=2000)
    price: float = Field(..., ge=0, description="Current selling price")
    originalPrice: Optional[float] = Field(None, ge=0, description="List price before discount")
    category: ProductCategory
    brand: Optional[str] = None
    stock: int = Field(default=0, ge=0)
    images: list[ProductImage] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    isFeatured: bool = False

    @field_validator("price", "originalPrice")
    @classmethod
    def round_price(cls, v: Optional[float]) -> Optional[float]:
        """Store prices with 2 decimals."""
        if v is None:
            return v
        return round_money(v)


class ProductCreate(ProductBase):
    """Product creation model."""

    pass


class ProductUpdate(BaseModel):
    """Partial product update model."""

    model_config = ConfigDict(use_enum_values=True)

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1, max_length=2000)
    price: Optional[float] = Field(None, ge=0)
    originalPrice: Optional[float] = Field(None, ge=0)
    category: Optional[ProductCategory] = None
    brand: Optional[str] = None
    stock: Optional[int] = Field(None, ge=0)
    images: Optional[list[ProductImage]] = None
    tags: Optional[list[str]] = None
    isFeatured: Optional[bool] = None
    status: Optional[ProductStatus] = None

    @field_validator("price", "originalPrice")
    @classmethod
    def round_price(cls, v: Optional[float]) -> Optional[float]:
        if v is None:
            return v
        return round_money(v)


class Product(ProductBase):
    """Product model as stored in database."""

    productId: str = Field(default_factory=generate_id)
    status: ProductStatus = ProductStatus.ACTIVE
    ratings: Ratings = Field(default_factory=Ratings)
    slug: Optional[str] = None
    createdAt: datetime = Field(default_factory=utcnow)
    updatedAt: datetime = Field(default_factory=utcnow)

    @property
    def is_active(self) -> bool:
        return self.status == ProductStatus.ACTIVE.value

    @property
    def is_purchasable(self) -> bool:
        """Active and with at least one unit in stock."""
        return self.is_active and self.stock > 0

    @property
    def primary_image(self) -> str:
        return self.images[0].url if self.images else ""


class ProductSummary(BaseModel):
    """Live product fields shown next to a cart line."""

    productId: str
    name: str
    price: float
    image: str
    stock: int
    status: str
    category: str

    @classmethod
    def from_product(cls, product: Product) -> "ProductSummary":
        return cls(
            productId=product.productId,
            name=product.name,
            price=product.price,
            image=product.primary_image,
            stock=product.stock,
            status=product.status,
            category=product.category,
        )
