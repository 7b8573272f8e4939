# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the catalog API.
# Every error response carries a machine-readable code and, where possible,
# a suggestion that tells the client how to fix the request.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class CatalogException(Exception):
    """
    Base exception for the catalog API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "CATALOG_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Product Exceptions
# =============================================================================

class ProductNotFoundError(CatalogException):
    """Raised when a product ID doesn't exist."""

    def __init__(self, product_id: int):
        super().__init__(
            message=f"Product not found: {product_id}",
            code="PRODUCT_NOT_FOUND",
            status_code=404,
            suggestion="Check the product id with GET /api/v1/products",
            details={"product_id": product_id}
        )


class DuplicateProductError(CatalogException):
    """Raised when a product name is already taken."""

    def __init__(self, name: str, existing_id: int):
        super().__init__(
            message=f"A product named '{name}' already exists",
            code="DUPLICATE_PRODUCT",
            status_code=409,
            suggestion="Choose a different name or update the existing product",
            details={"name": name, "existing_id": existing_id}
        )


class EmptyUpdateError(CatalogException):
    """Raised when a PATCH request carries no fields."""

    def __init__(self, product_id: int):
        super().__init__(
            message="Update request contains no fields",
            code="EMPTY_UPDATE",
            status_code=400,
            suggestion="Send at least one of: name, description, price, category, in_stock, tags",
            details={"product_id": product_id}
        )


class UnsupportedExportFormatError(CatalogException):
    """Raised when an export format is not supported."""

    def __init__(self, export_format: str, allowed: list[str]):
        super().__init__(
            message=f"Unsupported export format: {export_format}",
            code="UNSUPPORTED_EXPORT_FORMAT",
            status_code=400,
            suggestion=f"Use one of: {', '.join(allowed)}",
            details={"format": export_format, "allowed_formats": allowed}
        )


# =============================================================================
# Auth Exceptions
# =============================================================================

class InvalidCredentialsError(CatalogException):
    """Raised when a token request has the wrong username or password."""

    def __init__(self):
        super().__init__(
            message="Incorrect username or password",
            code="INVALID_CREDENTIALS",
            status_code=401,
            suggestion="Use the ADMIN_USERNAME and ADMIN_PASSWORD configured for this server",
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def catalog_exception_handler(
    request: Request,
    exc: CatalogException
) -> JSONResponse:
    """
    Convert CatalogException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers,
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Flattens FastAPI's error list into {field, message} pairs, where field is
    the dotted location without the leading "body"/"query"/"path" segment.
    """
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ())]
        if location and location[0] in ("body", "query", "path", "header"):
            source, location = location[0], location[1:]
        else:
            source = "body"
        errors.append({
            "field": ".".join(location) or source,
            "source": source,
            "message": error.get("msg", "Invalid value"),
        })

    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }
    )
