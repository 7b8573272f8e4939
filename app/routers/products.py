# =============================================================================
# app/routers/products.py - Product CRUD Endpoints
# =============================================================================
# The routes the article walks through side by side with Express:
#
#   Express                               FastAPI
#   app.get('/products', ...)             @router.get("")
#   app.get('/products/:id', ...)         @router.get("/{product_id}")
#   app.post('/products', ...)            @router.post("")
#   app.put('/products/:id', ...)         @router.put("/{product_id}")
#   app.patch('/products/:id', ...)       @router.patch("/{product_id}")
#   app.delete('/products/:id', ...)      @router.delete("/{product_id}")
#
# Reads are public. Writes require a Bearer token.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Request, Response, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from app.auth import AuthUser, get_current_user
from app.config import settings
from app.dependencies import ProductServiceDep
from core.models.product import (
    ProductCategory,
    ProductCreate,
    ProductList,
    ProductQuery,
    ProductReplace,
    ProductResponse,
    ProductUpdate,
)
from core.services.export_service import ExportService

logger = logging.getLogger(__name__)

router = APIRouter()

ProductId = Annotated[int, Path(ge=1, description="Product id")]


def get_product_query(
    q: Annotated[str | None, Query(max_length=100, description="Search name and description")] = None,
    category: Annotated[ProductCategory | None, Query(description="Filter by category")] = None,
    in_stock: Annotated[bool | None, Query(description="Filter by availability")] = None,
    min_price: Annotated[float | None, Query(ge=0, description="Lowest price")] = None,
    max_price: Annotated[float | None, Query(ge=0, description="Highest price")] = None,
    tag: Annotated[str | None, Query(max_length=30, description="Filter by tag")] = None,
    skip: Annotated[int, Query(ge=0, description="Products to skip")] = 0,
    limit: Annotated[int, Query(ge=1, le=settings.MAX_PAGE_SIZE, description="Page size")] = 10,
) -> ProductQuery:
    """
    Collect list filters from the query string into a ProductQuery.

    Cross-field errors (min_price above max_price) are re-raised as request
    validation errors so they produce a 422 like any other bad parameter.
    """
    try:
        return ProductQuery(
            q=q,
            category=category,
            in_stock=in_stock,
            min_price=min_price,
            max_price=max_price,
            tag=tag,
            skip=skip,
            limit=limit,
        )
    except ValidationError as e:
        raise RequestValidationError(
            [{**error, "loc": ("query", *error["loc"])} for error in e.errors()]
        )


# =============================================================================
# Read Endpoints
# =============================================================================

@router.get("", response_model=ProductList)
async def list_products(
    service: ProductServiceDep,
    query: Annotated[ProductQuery, Depends(get_product_query)],
):
    """
    List products with optional filters and pagination.

    total counts every product matching the filters.
    """
    products, total = await service.list_products(query)

    return ProductList(
        products=[ProductResponse(**p) for p in products],
        total=total,
        skip=query.skip,
        limit=query.limit,
    )


@router.get("/export")
async def export_products(
    service: ProductServiceDep,
    export_format: Annotated[str, Query(alias="format", description="Export format: csv or json")] = "csv",
):
    """
    Download the whole catalog as CSV or JSON.
    """
    products = await service.list_all_products()
    content, media_type = ExportService.render(products, export_format)

    return Response(
        content=content,
        media_type=media_type,
        headers={
            "Content-Disposition": f'attachment; filename="products.{export_format.lower()}"'
        },
    )


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: ProductId, service: ProductServiceDep):
    """
    Get one product.

    Raises:
        404: If the product doesn't exist
    """
    return ProductResponse(**await service.get_product(product_id))


# =============================================================================
# Write Endpoints
# =============================================================================

@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    product: ProductCreate,
    request: Request,
    response: Response,
    service: ProductServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Create a product.

    Returns 201 with a Location header pointing at the new product.
    """
    record = await service.create_product(product)
    response.headers["Location"] = str(
        request.url_for("get_product", product_id=record["id"]).path
    )

    logger.info(f"User {user.username} created product {record['id']}")
    return ProductResponse(**record)


@router.put("/{product_id}", response_model=ProductResponse)
async def replace_product(
    product_id: ProductId,
    product: ProductReplace,
    service: ProductServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Replace a product. Optional fields that are omitted reset to defaults.
    """
    record = await service.replace_product(product_id, product)
    return ProductResponse(**record)


@router.patch("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: ProductId,
    update: ProductUpdate,
    service: ProductServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Update some fields of a product.

    Raises:
        400: If the body is empty
        404: If the product doesn't exist
        409: If the new name is already used
    """
    record = await service.update_product(product_id, update)
    return ProductResponse(**record)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: ProductId,
    service: ProductServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Delete a product.
    """
    await service.delete_product(product_id)
    logger.info(f"User {user.username} deleted product {product_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
