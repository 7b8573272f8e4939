# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Product Catalog API, the companion
# application of the "FastAPI for Express developers" article.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.dependencies import get_product_store
from app.exceptions import (
    CatalogException,
    catalog_exception_handler,
    validation_exception_handler,
)
from app.middleware import RequestLoggingMiddleware
from app.routers import health, products
from app.auth import routes as auth_routes
from core.services.product_service import ProductService

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: seed the sample catalog (when enabled)
    - Shutdown: log and exit; the in-memory store needs no cleanup
    """
    logger.info(f"Starting Product Catalog API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    if settings.SEED_SAMPLE_PRODUCTS:
        store = app.dependency_overrides.get(get_product_store, get_product_store)()
        await ProductService(store).seed_sample_products()

    yield

    logger.info("Shutting down Product Catalog API")


# Create FastAPI application
app = FastAPI(
    title="Product Catalog API",
    description="""
## FastAPI for Express Developers

Companion API for the article comparing FastAPI with Express.js.
Every route here has an Express counterpart shown in the article.

### Quick Start

```bash
# 1. List products
curl http://localhost:8000/api/v1/products?category=books

# 2. Get a token
curl -X POST http://localhost:8000/api/v1/auth/token \\
  -H "Content-Type: application/json" \\
  -d '{"username": "admin", "password": "change-me"}'

# 3. Create a product
curl -X POST http://localhost:8000/api/v1/products \\
  -H "Authorization: Bearer <token>" \\
  -H "Content-Type: application/json" \\
  -d '{"name": "USB Hub", "price": 19.99, "category": "electronics"}'
```
""",
    version=settings.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Obtain and verify access tokens",
        },
        {
            "name": "Products",
            "description": "Browse, create, update and delete catalog products",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=settings.is_production,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)


# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(CatalogException, catalog_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Authentication endpoints
app.include_router(
    auth_routes.router,
    prefix="/api/v1/auth",
    tags=["Auth"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# Catalog endpoints
app.include_router(
    products.router,
    prefix="/api/v1/products",
    tags=["Products"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Product Catalog API",
        "version": settings.API_VERSION,
        "docs": "/docs",
        "health": "/api/v1/health",
    }
