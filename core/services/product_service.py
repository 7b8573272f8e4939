# =============================================================================
# core/services/product_service.py - Catalog Business Logic
# =============================================================================
# Handles product CRUD operations and business rules.
# Separates HTTP concerns from storage and business logic: routers validate
# input and shape responses, this service enforces the catalog rules.
#
# Rules:
# - Product names are unique, compared case-insensitively (enforced by the
#   store under its lock, translated here to DuplicateProductError)
# - Listing filters first, then paginates (total = filtered count)
# =============================================================================

import logging
from typing import Any

from app.exceptions import DuplicateProductError, EmptyUpdateError, ProductNotFoundError
from core.models.product import (
    ProductCreate,
    ProductQuery,
    ProductReplace,
    ProductUpdate,
)
from lib.product_store import ProductStore, UniqueConstraintError

logger = logging.getLogger(__name__)


# Products used in the article's examples
SAMPLE_PRODUCTS: list[dict[str, Any]] = [
    {
        "name": "Mechanical Keyboard",
        "description": "Tenkeyless board with hot-swappable switches",
        "price": 89.99,
        "category": "electronics",
        "in_stock": True,
        "tags": ["keyboard", "usb-c"],
    },
    {
        "name": "Wireless Mouse",
        "description": "Ergonomic mouse with silent clicks",
        "price": 29.5,
        "category": "electronics",
        "in_stock": True,
        "tags": ["mouse", "bluetooth"],
    },
    {
        "name": "Python Crash Course",
        "description": "A hands-on introduction to programming",
        "price": 35.0,
        "category": "books",
        "in_stock": True,
        "tags": ["python", "beginner"],
    },
    {
        "name": "Node.js Design Patterns",
        "description": "Patterns for building server-side JavaScript",
        "price": 42.0,
        "category": "books",
        "in_stock": False,
        "tags": ["javascript", "node"],
    },
    {
        "name": "Desk Lamp",
        "description": None,
        "price": 24.5,
        "category": "home",
        "in_stock": True,
        "tags": ["lighting"],
    },
]


class ProductService:
    """
    Service for catalog operations.

    Provides a clean interface between API routes and the product store.
    All methods return plain record dicts; routers convert them to
    ProductResponse.
    """

    def __init__(self, store: ProductStore):
        self.store = store

    async def create_product(self, product: ProductCreate) -> dict[str, Any]:
        """
        Create a new product.

        Raises:
            DuplicateProductError: If the name is already used
        """
        try:
            record = await self.store.insert(product.model_dump(mode="json"))
        except UniqueConstraintError as e:
            raise DuplicateProductError(str(e.value), e.existing_id) from e

        logger.info(f"Created product {record['id']}: {record['name']}")
        return record

    async def get_product(self, product_id: int) -> dict[str, Any]:
        """
        Get a product by ID.

        Raises:
            ProductNotFoundError: If the product doesn't exist
        """
        record = await self.store.get(product_id)
        if record is None:
            raise ProductNotFoundError(product_id)
        return record

    async def list_products(self, query: ProductQuery) -> tuple[list[dict[str, Any]], int]:
        """
        List products matching the query.

        Returns:
            Tuple of (page of products, total matching count)
        """
        matching = [p for p in await self.store.list_all() if query.matches(p)]
        page = matching[query.skip:query.skip + query.limit]
        return page, len(matching)

    async def list_all_products(self) -> list[dict[str, Any]]:
        """Every product ordered by id (used by exports)."""
        return await self.store.list_all()

    async def update_product(self, product_id: int, update: ProductUpdate) -> dict[str, Any]:
        """
        Apply a partial update.

        Raises:
            EmptyUpdateError: If no fields were sent
            ProductNotFoundError: If the product doesn't exist
            DuplicateProductError: If renaming to a name already used
        """
        changes = update.changes()
        if not changes:
            raise EmptyUpdateError(product_id)

        try:
            record = await self.store.update(product_id, changes)
        except UniqueConstraintError as e:
            raise DuplicateProductError(str(e.value), e.existing_id) from e

        if record is None:
            raise ProductNotFoundError(product_id)

        logger.info(f"Updated product {product_id}: {sorted(changes)}")
        return record

    async def replace_product(self, product_id: int, product: ProductReplace) -> dict[str, Any]:
        """
        Replace a product entirely (PUT semantics).

        Raises:
            ProductNotFoundError: If the product doesn't exist
            DuplicateProductError: If the new name is already used
        """
        try:
            record = await self.store.replace(product_id, product.model_dump(mode="json"))
        except UniqueConstraintError as e:
            raise DuplicateProductError(str(e.value), e.existing_id) from e

        if record is None:
            raise ProductNotFoundError(product_id)

        logger.info(f"Replaced product {product_id}")
        return record

    async def delete_product(self, product_id: int) -> None:
        """
        Delete a product.

        Raises:
            ProductNotFoundError: If the product doesn't exist
        """
        if not await self.store.delete(product_id):
            raise ProductNotFoundError(product_id)
        logger.info(f"Deleted product {product_id}")

    async def seed_sample_products(self) -> int:
        """
        Load SAMPLE_PRODUCTS into an empty store.

        Returns:
            Number of products inserted (0 if the store already had data)
        """
        if await self.store.count():
            logger.debug("Store already has products, skipping seed")
            return 0

        for data in SAMPLE_PRODUCTS:
            await self.create_product(ProductCreate(**data))

        logger.info(f"Seeded {len(SAMPLE_PRODUCTS)} sample products")
        return len(SAMPLE_PRODUCTS)
