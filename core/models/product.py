# =============================================================================
# core/models/product.py - Product Schemas
# =============================================================================
# These models define the API contract for catalog operations:
# - ProductCreate / ProductReplace: Input for POST and PUT
# - ProductUpdate: Partial input for PATCH
# - ProductResponse: Output when returning a product to clients
# - ProductQuery: Filters and pagination for listing
#
# This is the `Product` model used throughout the article. In Express the
# same checks are hand-written (or delegated to joi/zod); here Pydantic
# validates the request before the route handler runs.
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from app.config import settings

MAX_TAGS = 10
MAX_PRICE = 1_000_000


class ProductCategory(str, Enum):
    """Catalog categories."""
    ELECTRONICS = "electronics"
    BOOKS = "books"
    CLOTHING = "clothing"
    HOME = "home"
    TOYS = "toys"
    OTHER = "other"


def _clean_name(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("name must not be blank")
    return value


def _round_price(value: float) -> float:
    value = round(value, 2)
    if value <= 0:
        raise ValueError("price must be at least 0.01")
    return value


def _clean_tags(tags: list[str]) -> list[str]:
    """
    Lower-case, strip and de-duplicate tags, keeping first-seen order.

    The MAX_TAGS limit applies to the de-duplicated list.
    """
    cleaned: list[str] = []
    for tag in tags:
        tag = tag.strip().lower()
        if not tag:
            raise ValueError("tags must not be blank")
        if len(tag) > 30:
            raise ValueError("tags must be at most 30 characters")
        if tag not in cleaned:
            cleaned.append(tag)
    if len(cleaned) > MAX_TAGS:
        raise ValueError(f"at most {MAX_TAGS} unique tags are allowed")
    return cleaned


class ProductBase(BaseModel):
    """
    Fields shared by every product schema.

    Example:
        {
            "name": "Mechanical Keyboard",
            "description": "Tenkeyless, hot-swappable switches",
            "price": 89.99,
            "category": "electronics",
            "in_stock": true,
            "tags": ["keyboard", "usb-c"]
        }
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Product name, unique across the catalog (case-insensitive)"
    )

    description: str | None = Field(
        default=None,
        max_length=1000,
        description="Optional long description"
    )

    # Must be at least one cent after rounding to two decimals
    price: float = Field(
        ...,
        gt=0,
        le=MAX_PRICE,
        description="Unit price"
    )

    category: ProductCategory = Field(
        default=ProductCategory.OTHER,
        description="Catalog category"
    )

    in_stock: bool = Field(
        default=True,
        description="Whether the product can be ordered"
    )

    tags: list[str] = Field(
        default_factory=list,
        description="Free-form lower-case labels"
    )

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        return _clean_name(value)

    @field_validator("price")
    @classmethod
    def round_price(cls, value: float) -> float:
        return _round_price(value)

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, value: list[str]) -> list[str]:
        return _clean_tags(value)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Mechanical Keyboard",
                    "description": "Tenkeyless, hot-swappable switches",
                    "price": 89.99,
                    "category": "electronics",
                    "in_stock": True,
                    "tags": ["keyboard", "usb-c"],
                }
            ]
        }
    }


class ProductCreate(ProductBase):
    """Schema for POST /products."""


class ProductReplace(ProductBase):
    """Schema for PUT /products/{id}. Omitted optional fields reset to defaults."""


class ProductUpdate(BaseModel):
    """
    Schema for PATCH /products/{id}.

    Only the fields present in the request body are applied. Sending an
    explicit null is allowed for description only.
    """

    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=1000)
    price: float | None = Field(default=None, gt=0, le=MAX_PRICE)
    category: ProductCategory | None = None
    in_stock: bool | None = None
    tags: list[str] | None = None

    @model_validator(mode="before")
    @classmethod
    def reject_null_for_required(cls, data: Any) -> Any:
        if isinstance(data, dict):
            for field in ("name", "price", "category", "in_stock", "tags"):
                if field in data and data[field] is None:
                    raise ValueError(f"{field} cannot be null")
        return data

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str | None) -> str | None:
        return None if value is None else _clean_name(value)

    @field_validator("price")
    @classmethod
    def round_price(cls, value: float | None) -> float | None:
        return None if value is None else _round_price(value)

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, value: list[str] | None) -> list[str] | None:
        return None if value is None else _clean_tags(value)

    def changes(self) -> dict[str, Any]:
        """Fields explicitly sent by the client."""
        return self.model_dump(exclude_unset=True, mode="json")


class ProductResponse(ProductBase):
    """
    Schema for returning a product to clients.

    Example:
        {
            "id": 1,
            "name": "Mechanical Keyboard",
            "price": 89.99,
            "category": "electronics",
            "in_stock": true,
            "tags": ["keyboard"],
            "description": null,
            "created_at": "2024-01-15T10:30:00Z",
            "updated_at": "2024-01-15T10:30:00Z"
        }
    """

    id: int = Field(..., ge=1, description="Product identifier")
    created_at: datetime = Field(..., description="When the product was created")
    updated_at: datetime = Field(..., description="When the product was last modified")

    model_config = {"from_attributes": True}


class ProductList(BaseModel):
    """
    Paginated product listing returned by GET /products.

    total is the number of products matching the filters, not the page size.
    """

    products: list[ProductResponse] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)
    skip: int = Field(default=0, ge=0)
    limit: int = Field(default=10, ge=1)


class ProductQuery(BaseModel):
    """Filters and pagination for listing products."""

    q: str | None = Field(
        default=None,
        max_length=100,
        description="Case-insensitive search in name and description"
    )
    category: ProductCategory | None = None
    in_stock: bool | None = None
    min_price: float | None = Field(default=None, ge=0)
    max_price: float | None = Field(default=None, ge=0)
    tag: str | None = Field(default=None, max_length=30)
    skip: int = Field(default=0, ge=0)
    limit: int = Field(default=10, ge=1, le=settings.MAX_PAGE_SIZE)

    @model_validator(mode="after")
    def check_price_range(self) -> "ProductQuery":
        if (
            self.min_price is not None
            and self.max_price is not None
            and self.min_price > self.max_price
        ):
            raise ValueError("min_price must be less than or equal to max_price")
        return self

    def matches(self, product: dict[str, Any]) -> bool:
        """Check a stored product record against every filter."""
        if self.q:
            needle = self.q.strip().lower()
            haystack = f"{product['name']} {product.get('description') or ''}".lower()
            if needle not in haystack:
                return False
        if self.category is not None and product["category"] != self.category.value:
            return False
        if self.in_stock is not None and product["in_stock"] != self.in_stock:
            return False
        if self.min_price is not None and product["price"] < self.min_price:
            return False
        if self.max_price is not None and product["price"] > self.max_price:
            return False
        if self.tag is not None and self.tag.strip().lower() not in product["tags"]:
            return False
        return True
