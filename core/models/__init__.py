# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - product.py: Product CRUD schemas and list filters
#
# These models define the "contract" between API and clients.
# =============================================================================

from .product import (
    MAX_PRICE,
    MAX_TAGS,
    ProductBase,
    ProductCategory,
    ProductCreate,
    ProductList,
    ProductQuery,
    ProductReplace,
    ProductResponse,
    ProductUpdate,
)

__all__ = [
    "MAX_PRICE",
    "MAX_TAGS",
    "ProductBase",
    "ProductCategory",
    "ProductCreate",
    "ProductList",
    "ProductQuery",
    "ProductReplace",
    "ProductResponse",
    "ProductUpdate",
]
