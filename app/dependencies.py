# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends(); tests swap them
# through app.dependency_overrides. This is the FastAPI counterpart of
# attaching objects to `req` in an Express middleware.
# =============================================================================

from typing import Annotated

from fastapi import Depends

from core.services.product_service import ProductService
from lib.product_store import ProductStore

# Process-wide store shared by every request
product_store = ProductStore(unique_fields=("name",))


def get_product_store() -> ProductStore:
    """Return the shared product store."""
    return product_store


def get_product_service(
    store: Annotated[ProductStore, Depends(get_product_store)],
) -> ProductService:
    """Build the catalog service around the current store."""
    return ProductService(store)


# Type aliases for dependency injection
ProductStoreDep = Annotated[ProductStore, Depends(get_product_store)]
ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]
